"""Declaration of resources, bundles and groups.

A :class:`ResourceRegistry` is the open phase of the two-phase lifecycle:
applications declare everything they serve during configuration, then the
registry is committed once (see :func:`basicbundles.builders.make_repository`)
and frozen for the rest of the process.
"""

from structlog import get_logger

from basicbundles.domain import (
    Bundle,
    DependencyRef,
    Group,
    Requestable,
    Requirable,
    Resource,
    ResourceType,
)
from basicbundles.errors import ConfigurationFrozenError, DeclarationError

__all__ = ["ResourceRegistry"]

logger = get_logger(__name__)


class ResourceRegistry:
    """Registry of requestables, supporting declaration until it is frozen."""

    def __init__(self):
        self._requestables: list[Requestable] = []
        self._paths: set[str] = set()
        self._frozen = False

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def freeze(self):
        """Refuse any further declaration."""
        self._frozen = True

    def register(self, requestable: Requestable) -> Requestable:
        """Register a resource or bundle explicitly.

        Args:
            requestable: The resource or bundle to be registered.

        Returns:
            The registered requestable.

        Raises:
            ConfigurationFrozenError: If the registry has already been committed.
            DeclarationError: If another requestable was declared with the same path.
        """
        if self._frozen:
            logger.warning("late_declaration_refused", path=requestable.path)
            raise ConfigurationFrozenError(
                f"Cannot declare {requestable.path}: the configuration has already "
                "been used to build the repository"
            )
        if requestable.path in self._paths:
            raise DeclarationError(f"Configuration already contains the path {requestable.path}")

        self._paths.add(requestable.path)
        self._requestables.append(requestable)
        return requestable

    def registered_requestables(self) -> list[Requestable]:
        """Return all declared resources and bundles in declaration order."""
        return list(self._requestables)

    def add_js(self, path: str, *dependencies: DependencyRef) -> Resource:
        """Declare a script.

        Args:
            path: Declared path; may contain the minified marker, e.g.
                ``~/Scripts/bootstrap(.min).js``.
            dependencies: Scripts that must be included before this one, given
                as resources or by their declared path.
        """
        return self._add(ResourceType.SCRIPT, path, dependencies)

    def add_css(self, path: str, *dependencies: DependencyRef) -> Resource:
        """Declare a stylesheet. See :meth:`add_js`."""
        return self._add(ResourceType.STYLESHEET, path, dependencies)

    def add_bundle(self, path: str, *contents: Requestable) -> Bundle:
        """Declare a bundle served under ``path``.

        Raises:
            DeclarationError: If ``contents`` is empty or mixes scripts and stylesheets.
        """
        if not contents:
            raise DeclarationError(f"The bundle with path {path} has no contents")
        types = {_type_of(item, path) for item in contents}
        if len(types) > 1:
            raise DeclarationError(
                f"The bundle with path {path} mixes scripts and stylesheets"
            )

        return self.register(Bundle(types.pop(), path, tuple(contents)))

    def add_group(self, *contents: Requirable) -> Group:
        """Declare a group requiring all of ``contents`` together.

        Groups have no path of their own and are not registered.
        """
        return Group(tuple(contents))

    def _add(
        self, resource_type: ResourceType, path: str, dependencies: tuple[DependencyRef, ...]
    ) -> Resource:
        return self.register(Resource(resource_type, path, tuple(dependencies)))


def _type_of(item: object, bundle_path: str) -> ResourceType:
    if not isinstance(item, (Resource, Bundle)):
        raise DeclarationError(
            f"The bundle with path {bundle_path} contains {item!r}, "
            "which is neither a resource nor a bundle"
        )
    return item.type
