"""Exceptions raised while declaring, building and serving resources."""

__all__ = [
    "BasicBundlesError",
    "DeclarationError",
    "ConfigurationFrozenError",
    "BuildError",
    "CircularDependencyError",
    "ContentLoadError",
]


class BasicBundlesError(Exception):
    """Base exception for all basicbundles errors."""


class DeclarationError(BasicBundlesError):
    """Raised when a resource, bundle or group is declared inconsistently."""


class ConfigurationFrozenError(DeclarationError):
    """Raised when a declaration happens after the repository was built."""


class BuildError(BasicBundlesError):
    """Raised when the one-time repository build fails."""


class CircularDependencyError(BuildError):
    """Raised when resource dependencies form a cycle.

    Attributes:
        cycle: The paths along the cycle, starting and ending with the same path.
    """

    def __init__(self, cycle: list[str]):
        super().__init__("Circular dependency detected: " + "->".join(cycle))
        self.cycle = cycle


class ContentLoadError(BuildError):
    """Raised when the content loader fails for a concrete path."""

    def __init__(self, path: str, reason: str = ""):
        message = f"Failed to load content for {path}"
        super().__init__(f"{message}: {reason}" if reason else message)
        self.path = path
