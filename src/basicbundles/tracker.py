"""Per-request tracking of required resources and rendering of their tags."""

import html
from collections import deque
from typing import Callable, assert_never

from basicbundles.domain import (
    RenderMode,
    Requestable,
    Requirable,
    Resource,
    ResourceFlavor,
    ResourceType,
    expand_to_resources,
    requestables_of,
)
from basicbundles.repository import Repository

__all__ = ["PathTranslator", "Tracker"]

PathTranslator = Callable[[str], str]

_TAG_TEMPLATES = {
    ResourceType.SCRIPT: '<script src="{0}"></script>',
    ResourceType.STYLESHEET: '<link href="{0}" rel="stylesheet" type="text/css">',
}


class Tracker:
    """Collects what a single request requires and renders it as tags.

    A tracker belongs to exactly one request and is never shared, so it holds
    no locks. Requiring the same thing repeatedly is harmless: duplicates
    collapse when rendering.

    Args:
        repository: The built repository supplying order, hashes and paths.
        to_absolute: Translates a declared path into the URL path used in tags.
    """

    def __init__(self, repository: Repository, to_absolute: PathTranslator = lambda path: path):
        self._repository = repository
        self._to_absolute = to_absolute
        self._requestables: list[Requestable] = []

    @property
    def required(self) -> list[Requestable]:
        return list(self._requestables)

    def require(self, requirable: Requirable):
        self._requestables.extend(requestables_of(requirable))

    def expand(self, resource_type: ResourceType) -> list[Resource]:
        """All required resources of a type plus their dependencies, in dependency order.

        Bundles are flattened into their resources, every resource appears
        once, and the order is the repository's global build order.
        """
        pending = deque(expand_to_resources(self._of_type(resource_type)))
        collected: set[Resource] = set()
        while pending:
            resource = pending.popleft()
            if resource in collected:
                continue
            collected.add(resource)
            pending.extend(self._repository.dependencies_of(resource))

        return sorted(collected, key=self._repository.get_index)

    def simplify(self, resource_type: ResourceType) -> list[Requestable]:
        """Required requestables of a type, deduplicated, in first-required order.

        Bundles are kept whole. A resource required on its own and also as part
        of a required bundle is listed twice, once loose and once in the bundle.
        """
        return list(dict.fromkeys(self._of_type(resource_type)))

    def select(self, resource_type: ResourceType, mode: RenderMode) -> list[Requestable]:
        if mode is RenderMode.INDIVIDUAL:
            return self.expand(resource_type)
        elif mode is RenderMode.BUNDLED:
            return self.simplify(resource_type)
        else:
            assert_never(mode)

    def render(self, resource_type: ResourceType, mode: RenderMode, flavor: ResourceFlavor) -> str:
        """Render one tag per selected requestable, joined by newlines."""
        template = _TAG_TEMPLATES[resource_type]
        return "\n".join(
            template.format(html.escape(self.url_for(requestable, flavor)))
            for requestable in self.select(resource_type, mode)
        )

    def url_for(self, requestable: Requestable, flavor: ResourceFlavor) -> str:
        path = self._to_absolute(self._repository.flavored_path(requestable, flavor))
        return f"{path}?version={self._repository.get_hash(requestable)}"

    def _of_type(self, resource_type: ResourceType) -> list[Requestable]:
        return [r for r in self._requestables if r.type is resource_type]
