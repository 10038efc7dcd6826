"""The immutable result of building declared resources.

:class:`RepositoryBuilder` performs the one-time build pass:

1. orders every resource after its dependencies (:mod:`basicbundles.dependency_graph`),
2. resolves and loads the standard and minified flavors of each resource,
3. hashes resource content and combines member hashes into bundle hashes,
4. concatenates bundle content, re-anchoring ``url(...)`` references in stylesheets.

The resulting :class:`Repository` only answers reads, so it can be shared by
any number of concurrent requests without synchronization.
"""

import base64
import hashlib
from collections import deque
from dataclasses import dataclass
from functools import reduce
from typing import Callable, Iterable, Optional, assert_never

from structlog import get_logger

from basicbundles.dependency_graph import DependencyGraph
from basicbundles.domain import (
    Bundle,
    Requestable,
    Resource,
    ResourceFlavor,
    ResourceType,
    content_type_of,
    expand_to_resources,
)
from basicbundles.errors import BasicBundlesError, ContentLoadError, DeclarationError
from basicbundles.paths import concat_urls, relative_path_fragment, rewrite_css_urls

__all__ = [
    "ContentLoader",
    "FlavorInfo",
    "ResourceInfo",
    "FetchedContent",
    "Repository",
    "RepositoryBuilder",
]

logger = get_logger(__name__)

ContentLoader = Callable[[str], str]
"""Loads the text content of a concrete (flavor) path."""


@dataclass(frozen=True)
class FlavorInfo:
    path: str
    content: str


@dataclass(frozen=True)
class ResourceInfo:
    """Everything the build pass learned about a single resource."""

    index: int
    """Position in the global dependency-respecting order."""

    standard: FlavorInfo
    minified: Optional[FlavorInfo]
    dependencies: tuple[Resource, ...]
    """Direct dependencies with path references resolved."""

    def flavor(self, flavor: ResourceFlavor) -> FlavorInfo:
        """Return the requested flavor, falling back to the one that exists."""
        if flavor is ResourceFlavor.MINIFIED:
            return self.minified or self.standard
        elif flavor is ResourceFlavor.STANDARD:
            return self.standard
        else:
            assert_never(flavor)


@dataclass(frozen=True)
class FetchedContent:
    content: str
    content_type: str


class Repository:
    """Read-only lookup of built resources and bundles."""

    def __init__(
        self,
        resource_infos: dict[Resource, ResourceInfo],
        bundle_contents: dict[Bundle, str],
        hashes: dict[Requestable, str],
        requestables_by_path: dict[str, Requestable],
    ):
        self._resource_infos = resource_infos
        self._bundle_contents = bundle_contents
        self._hashes = hashes
        self._requestables_by_path = requestables_by_path

    @property
    def resources_in_order(self) -> list[Resource]:
        return sorted(self._resource_infos, key=self.get_index)

    def find(self, path: str) -> Optional[Requestable]:
        """Look up a requestable by declared path or by one of its flavor paths.

        Returns:
            The requestable if found, ``None`` otherwise.
        """
        return self._requestables_by_path.get(path)

    def fetch(self, requestable: Requestable) -> FetchedContent:
        """Return the content to serve for ``requestable``.

        Resources are served in their minified flavor when they have one;
        bundles serve their precomputed concatenation.
        """
        if isinstance(requestable, Resource):
            content = self._resource_infos[requestable].flavor(ResourceFlavor.MINIFIED).content
        elif isinstance(requestable, Bundle):
            content = self._bundle_contents[requestable]
        else:
            assert_never(requestable)
        return FetchedContent(content, content_type_of(requestable.type))

    def flavored_path(self, requestable: Requestable, flavor: ResourceFlavor) -> str:
        if isinstance(requestable, Resource):
            return self._resource_infos[requestable].flavor(flavor).path
        elif isinstance(requestable, Bundle):
            return requestable.path
        else:
            assert_never(requestable)

    def get_hash(self, requestable: Requestable) -> str:
        return self._hashes[requestable]

    def get_index(self, resource: Resource) -> int:
        return self._resource_infos[resource].index

    def dependencies_of(self, resource: Resource) -> tuple[Resource, ...]:
        return self._resource_infos[resource].dependencies


class RepositoryBuilder:
    """Build a :class:`Repository` from declared requestables.

    Args:
        load: Collaborator returning the text of a concrete path. Any exception
            it raises aborts the build as a :class:`ContentLoadError`.
        minified_marker: Token in a declared path marking that a minified
            flavor exists, e.g. ``~/Scripts/jquery(.min).js``.
        minified_suffix: What the marker is replaced with in the minified path.
    """

    def __init__(
        self,
        load: ContentLoader,
        minified_marker: str = "(.min)",
        minified_suffix: str = ".min",
    ):
        self._load = load
        self._minified_marker = minified_marker
        self._minified_suffix = minified_suffix

    def build(self, requestables: Iterable[Requestable]) -> Repository:
        """Run the build pass.

        Raises:
            DeclarationError: If a dependency given by path cannot be resolved, or if
                a resource or bundle reached only through another one reuses a taken path.
            CircularDependencyError: If resource dependencies form a cycle.
            ContentLoadError: If loading any flavor fails.
        """
        requestables = list(requestables)
        logger.info("repository_build_started", declared=len(requestables))

        claimed: dict[str, Requestable] = {}
        for requestable in requestables:
            _claim_path(claimed, requestable)

        resolved = self._resolve_dependencies(requestables, claimed)
        graph: DependencyGraph[Resource] = DependencyGraph(name_of=lambda r: r.path)
        for resource, dependencies in resolved.items():
            graph.add_dependencies(resource, dependencies)

        resource_infos: dict[Resource, ResourceInfo] = {}
        digests: dict[Resource, bytes] = {}
        hashes: dict[Requestable, str] = {}
        requestables_by_path: dict[str, Requestable] = {}

        for index, resource in enumerate(graph.traverse()):
            info = self._resource_info(index, resource, resolved[resource])
            resource_infos[resource] = info
            digests[resource] = hashlib.md5(
                info.standard.content.encode("utf-8"), usedforsecurity=False
            ).digest()
            hashes[resource] = _encode_hash(digests[resource])
            requestables_by_path[resource.path] = resource

        for resource, info in resource_infos.items():
            for flavor in (info.standard, info.minified):
                if flavor is not None:
                    requestables_by_path.setdefault(flavor.path, resource)

        bundle_contents: dict[Bundle, str] = {}
        for bundle in _bundles_of(requestables, claimed):
            members = list(expand_to_resources(bundle.contents))
            bundle_contents[bundle] = "".join(
                _fixup(resource_infos[member].flavor(ResourceFlavor.MINIFIED).content, member, bundle)
                for member in members
            )
            hashes[bundle] = _encode_hash(
                reduce(_xor_bytes, (digests[member] for member in members))
            )
            requestables_by_path[bundle.path] = bundle
            logger.debug("bundle_materialised", path=bundle.path, members=len(members))

        logger.info(
            "repository_build_finished",
            resources=len(resource_infos),
            bundles=len(bundle_contents),
        )
        return Repository(resource_infos, bundle_contents, hashes, requestables_by_path)

    def flavor_paths(self, pattern: str) -> tuple[str, Optional[str]]:
        """Split a declared path pattern into its standard and minified paths."""
        if self._minified_marker not in pattern:
            return pattern, None
        return (
            pattern.replace(self._minified_marker, ""),
            pattern.replace(self._minified_marker, self._minified_suffix),
        )

    def _resource_info(
        self, index: int, resource: Resource, dependencies: tuple[Resource, ...]
    ) -> ResourceInfo:
        standard_path, minified_path = self.flavor_paths(resource.path)
        return ResourceInfo(
            index,
            self._flavor_info(standard_path),
            self._flavor_info(minified_path) if minified_path else None,
            dependencies,
        )

    def _flavor_info(self, path: str) -> FlavorInfo:
        try:
            content = self._load(path)
        except BasicBundlesError:
            raise
        except Exception as e:
            raise ContentLoadError(path, str(e)) from e
        logger.debug("flavor_loaded", path=path, length=len(content))
        return FlavorInfo(path, content)

    def _resolve_dependencies(
        self, requestables: list[Requestable], claimed: dict[str, Requestable]
    ) -> dict[Resource, tuple[Resource, ...]]:
        """Collect every reachable resource with its dependencies resolved.

        Declared resources come first, in declaration order, so that the
        traversal visits roots in a stable order. Resources reached only as
        dependencies claim their path in ``claimed``.
        """
        declared = dict(claimed)
        resolved: dict[Resource, tuple[Resource, ...]] = {}
        pending = deque(expand_to_resources(requestables))

        while pending:
            resource = pending.popleft()
            if resource in resolved:
                continue
            _claim_path(claimed, resource)
            dependencies = tuple(
                _resolve_reference(resource, reference, declared)
                for reference in resource.dependencies
            )
            resolved[resource] = dependencies
            pending.extend(dependencies)

        return resolved


def _resolve_reference(
    resource: Resource, reference, declared: dict[str, Requestable]
) -> Resource:
    if isinstance(reference, Resource):
        return reference

    target = declared.get(reference)
    if target is None:
        raise DeclarationError(
            f"The resource with path {resource.path} depends on {reference}, "
            "which is not declared"
        )
    if not isinstance(target, Resource):
        raise DeclarationError(
            f"The resource with path {resource.path} depends on {reference}, "
            "which is not a resource"
        )
    if target.type is not resource.type:
        raise DeclarationError(
            f"The resource with path {resource.path} is a {resource.type.value}, "
            f"yet its dependency {reference} is not"
        )
    return target


def _bundles_of(requestables: list[Requestable], claimed: dict[str, Requestable]) -> list[Bundle]:
    """Return declared bundles followed by any nested bundles, each once."""
    bundles: dict[Bundle, None] = {}
    pending = deque(r for r in requestables if isinstance(r, Bundle))
    while pending:
        bundle = pending.popleft()
        if bundle in bundles:
            continue
        _claim_path(claimed, bundle)
        bundles[bundle] = None
        pending.extend(item for item in bundle.contents if isinstance(item, Bundle))
    return list(bundles)


def _claim_path(claimed: dict[str, Requestable], requestable: Requestable):
    owner = claimed.setdefault(requestable.path, requestable)
    if owner is not requestable:
        raise DeclarationError(f"Configuration already contains the path {requestable.path}")


def _fixup(content: str, resource: Resource, bundle: Bundle) -> str:
    if resource.type is ResourceType.STYLESHEET:
        fragment = relative_path_fragment(bundle.path, resource.path)
        return rewrite_css_urls(content, lambda url: concat_urls(url, fragment))
    return content


def _xor_bytes(left: bytes, right: bytes) -> bytes:
    return bytes(a ^ b for a, b in zip(left, right))


def _encode_hash(digest: bytes) -> str:
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")
