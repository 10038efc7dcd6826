"""Domain models describing declared resources, bundles and groups.

The graph is made of three closed variants:

- :class:`Resource`: a single script or stylesheet with same-typed dependencies.
- :class:`Bundle`: a named aggregate of resources and nested bundles, served
  under its own path.
- :class:`Group`: a pure composition of anything requirable, possibly mixing
  scripts and stylesheets. Groups have no path and are never served.

Entities are immutable and compared by identity; paths are unique within a
registry, so identity and path identify the same thing.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Union, assert_never

from basicbundles.errors import DeclarationError

__all__ = [
    "ResourceType",
    "ResourceFlavor",
    "RenderMode",
    "Resource",
    "Bundle",
    "Group",
    "Requestable",
    "Requirable",
    "DependencyRef",
    "requestables_of",
    "expand_to_resources",
    "content_type_of",
]


class ResourceType(str, Enum):
    SCRIPT = "script"
    STYLESHEET = "stylesheet"


class ResourceFlavor(str, Enum):
    """Whether the standard or the minified variant of a resource is preferred."""

    STANDARD = "standard"
    MINIFIED = "minified"


class RenderMode(str, Enum):
    """Whether bundling actually happens when tags are rendered.

    ``INDIVIDUAL`` requests every resource on its own, ``BUNDLED`` serves
    bundles as declared.
    """

    INDIVIDUAL = "individual"
    BUNDLED = "bundled"


DependencyRef = Union["Resource", str]
"""A dependency given either as a declared resource or by its declared path."""


@dataclass(frozen=True, eq=False)
class Resource:
    """An individual script or stylesheet.

    Attributes:
        type: Whether this is a script or a stylesheet.
        path: The declared path or pattern, e.g. ``~/Scripts/jquery(.min).js``.
        dependencies: Resources that must be included before this one. Entries
            given as strings are resolved against the registry when it is committed.
    """

    type: ResourceType
    path: str
    dependencies: tuple[DependencyRef, ...] = ()

    def __post_init__(self):
        for dependency in self.dependencies:
            if isinstance(dependency, str):
                continue
            if not isinstance(dependency, Resource):
                raise DeclarationError(
                    f"The resource with path {self.path} depends on {dependency!r}, "
                    "which is not a resource"
                )
            if dependency.type is not self.type:
                raise DeclarationError(
                    f"The resource with path {self.path} is a {self.type.value}, "
                    f"yet its dependency {dependency.path} is not"
                )

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True, eq=False)
class Bundle:
    """A named aggregate of same-typed resources and bundles.

    Attributes:
        type: The type shared by the bundle and all of its contents.
        path: The path the concatenated content is served under.
        contents: Resources and nested bundles, in declaration order.
    """

    type: ResourceType
    path: str
    contents: tuple["Requestable", ...]

    def __post_init__(self):
        if not self.contents:
            raise DeclarationError(f"The bundle with path {self.path} has no contents")
        for item in self.contents:
            if not isinstance(item, (Resource, Bundle)):
                raise DeclarationError(
                    f"The bundle with path {self.path} contains {item!r}, "
                    "which is neither a resource nor a bundle"
                )
            if item.type is not self.type:
                raise DeclarationError(
                    f"The bundle with path {self.path} is a {self.type.value}, "
                    f"yet its content {item.path} is not"
                )

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True, eq=False)
class Group:
    """Requires all of its contents together; may mix scripts and stylesheets."""

    contents: tuple["Requirable", ...]

    def __post_init__(self):
        for item in self.contents:
            if not isinstance(item, (Resource, Bundle, Group)):
                raise DeclarationError(f"{item!r} cannot be part of a group")


Requestable = Union[Resource, Bundle]
Requirable = Union[Resource, Bundle, Group]


def requestables_of(requirable: Requirable) -> Iterator[Requestable]:
    """Yield the requestables a requirable stands for, flattening groups in order."""
    if isinstance(requirable, Group):
        for item in requirable.contents:
            yield from requestables_of(item)
    elif isinstance(requirable, (Resource, Bundle)):
        yield requirable
    else:
        assert_never(requirable)


def expand_to_resources(requestables: Iterable[Requestable]) -> Iterator[Resource]:
    """Flatten bundles depth-first into their resources, keeping declaration order.

    Duplicates are preserved; callers that need a set deduplicate themselves.
    """
    for requestable in requestables:
        if isinstance(requestable, Resource):
            yield requestable
        elif isinstance(requestable, Bundle):
            yield from expand_to_resources(requestable.contents)
        else:
            assert_never(requestable)


def content_type_of(resource_type: ResourceType) -> str:
    if resource_type is ResourceType.SCRIPT:
        return "text/javascript"
    elif resource_type is ResourceType.STYLESHEET:
        return "text/css"
    else:
        assert_never(resource_type)
