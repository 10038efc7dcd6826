"""Committing a registry into an immutable repository."""

from typing import Optional

from basicbundles.registry import ResourceRegistry
from basicbundles.repository import ContentLoader, Repository, RepositoryBuilder
from basicbundles.settings import BundleSettings

__all__ = ["make_repository"]


def make_repository(
    registry: ResourceRegistry,
    load: ContentLoader,
    settings: Optional[BundleSettings] = None,
) -> Repository:
    """
    Commit a registry: freeze it and build the repository of its declarations.

    After this call no further resource or bundle can be declared in the registry.

    Args:
        registry: The registry holding the declared resources and bundles.
        load: Collaborator returning the text content of a concrete path.
        settings: Optional settings; the minified marker and suffix are taken from here.

    Returns:
        The immutable repository.

    Raises:
        DeclarationError: If a dependency given by path cannot be resolved.
        BuildError: If content cannot be loaded or dependencies are cyclic.
    """
    settings = settings or BundleSettings()
    registry.freeze()
    builder = RepositoryBuilder(load, settings.minified_marker, settings.minified_suffix)
    return builder.build(registry.registered_requestables())
