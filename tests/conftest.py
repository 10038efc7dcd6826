from typing import Callable

import pytest

from basicbundles.registry import ResourceRegistry
from basicbundles.settings import BundleSettings


@pytest.fixture
def registry() -> ResourceRegistry:
    return ResourceRegistry()


@pytest.fixture
def settings() -> BundleSettings:
    return BundleSettings()


@pytest.fixture
def loaded_paths() -> list[str]:
    return []


@pytest.fixture
def load(loaded_paths) -> Callable[[str], str]:
    """A loader whose content names the path it was loaded from."""

    def load(path: str) -> str:
        loaded_paths.append(path)
        return f"/* {path} */\n"

    return load
