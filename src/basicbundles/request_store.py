"""Per-request storage for the tracker.

The host decides what a request is; all this package needs is somewhere to
keep one value per key for the lifetime of that request.
"""

from typing import Any, MutableMapping, Optional, Protocol

__all__ = ["RequestStore", "MappingRequestStore"]


class RequestStore(Protocol):
    def set(self, key: str, value: Any) -> None: ...

    def get(self, key: str) -> Optional[Any]: ...


class MappingRequestStore:
    """Store values in a per-request mapping such as a WSGI environ.

    Example:
        >>> store = MappingRequestStore(environ, key_prefix="basicbundles.")
    """

    def __init__(self, mapping: MutableMapping[str, Any], key_prefix: str = ""):
        self._mapping = mapping
        self._key_prefix = key_prefix

    def set(self, key: str, value: Any) -> None:
        self._mapping[self._key_prefix + key] = value

    def get(self, key: str) -> Optional[Any]:
        return self._mapping.get(self._key_prefix + key)
