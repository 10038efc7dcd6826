"""Installation of host collaborators and the lazily committed repository.

A :class:`Configuration` is the explicit context shared by declarations,
request handling and serving. It replaces any process-wide "current
configuration": every consumer is handed the configuration it works with.

Example:
    >>> configuration = Configuration(FileContentLoader("static"))
    >>> jquery = configuration.add_js("~/Scripts/jquery(.min).js")
    >>> site = configuration.add_js("~/Scripts/site.js", jquery)
    >>> configuration.commit()
"""

import threading
from typing import Callable, Generic, Optional, TypeVar

from basicbundles.builders import make_repository
from basicbundles.domain import (
    Bundle,
    DependencyRef,
    Group,
    RenderMode,
    Requestable,
    Requirable,
    Resource,
    ResourceFlavor,
)
from basicbundles.registry import ResourceRegistry
from basicbundles.repository import ContentLoader, Repository
from basicbundles.request_store import RequestStore
from basicbundles.settings import BundleSettings
from basicbundles.tracker import PathTranslator

__all__ = ["Lazy", "Configuration", "ModeProvider", "FlavorProvider"]

T = TypeVar("T")

ModeProvider = Callable[[RequestStore], RenderMode]
FlavorProvider = Callable[[RequestStore], ResourceFlavor]


class Lazy(Generic[T]):
    """A value computed exactly once, on first access, whichever thread gets there first.

    Concurrent first accesses wait for the single computation. A failed
    computation is not retried: its exception is raised to every accessor.
    """

    def __init__(self, factory: Callable[[], T]):
        self._factory = factory
        self._lock = threading.Lock()
        self._done = False
        self._value: Optional[T] = None
        self._error: Optional[Exception] = None

    @property
    def is_value_created(self) -> bool:
        """True once the factory has returned; a failed computation never creates a value."""
        return self._done and self._error is None

    def get(self) -> T:
        if not self._done:
            with self._lock:
                if not self._done:
                    try:
                        self._value = self._factory()
                    except Exception as e:
                        self._error = e
                    self._done = True
        if self._error is not None:
            raise self._error
        return self._value


def _identity(path: str) -> str:
    return path


class Configuration:
    """Declared resources plus the host collaborators needed to build and render them.

    Args:
        load: Returns the text content of a concrete path; only called while
            building the repository.
        settings: Optional settings; read from the environment when omitted.
        to_absolute: Translates declared paths to URL paths for rendered tags.
        to_app_relative: Translates an inbound request path back to a declared path.
        get_mode: Returns the render mode for the current request.
        get_flavor: Returns the preferred flavor for the current request.
    """

    def __init__(
        self,
        load: ContentLoader,
        settings: Optional[BundleSettings] = None,
        to_absolute: Optional[PathTranslator] = None,
        to_app_relative: Optional[PathTranslator] = None,
        get_mode: Optional[ModeProvider] = None,
        get_flavor: Optional[FlavorProvider] = None,
    ):
        self.settings = settings or BundleSettings()
        self.load = load
        self.to_absolute = to_absolute or _identity
        self.to_app_relative = to_app_relative or _identity
        self._get_mode = get_mode
        self._get_flavor = get_flavor
        self.registry = ResourceRegistry()
        self._repository: Lazy[Repository] = Lazy(
            lambda: make_repository(self.registry, self.load, self.settings)
        )

    @property
    def repository(self) -> Repository:
        """The repository, built on first access."""
        return self._repository.get()

    @property
    def is_committed(self) -> bool:
        return self._repository.is_value_created

    def commit(self) -> Repository:
        """Build the repository now instead of on first use."""
        return self.repository

    def get_mode(self, store: RequestStore) -> RenderMode:
        if self._get_mode is None:
            return self.settings.render_mode
        return self._get_mode(store)

    def get_flavor(self, store: RequestStore) -> ResourceFlavor:
        if self._get_flavor is None:
            return self.settings.flavor
        return self._get_flavor(store)

    def add_js(self, path: str, *dependencies: DependencyRef) -> Resource:
        return self.registry.add_js(path, *dependencies)

    def add_css(self, path: str, *dependencies: DependencyRef) -> Resource:
        return self.registry.add_css(path, *dependencies)

    def add_bundle(self, path: str, *contents: Requestable) -> Bundle:
        return self.registry.add_bundle(path, *contents)

    def add_group(self, *contents: Requirable) -> Group:
        return self.registry.add_group(*contents)

    def __repr__(self) -> str:
        return f"Configuration(committed={self.is_committed})"
