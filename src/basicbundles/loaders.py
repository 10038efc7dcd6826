"""Content loaders for the repository build pass."""

from pathlib import Path
from typing import Union

from basicbundles.settings import BundleSettings

__all__ = ["FileContentLoader"]


class FileContentLoader:
    """Load content from files below a root directory.

    App-relative paths (``~/Content/site.css``) and rooted paths
    (``/Content/site.css``) both resolve below ``root``. Paths that would
    escape the root are refused.
    """

    def __init__(self, root: Union[str, Path], encoding: str = "utf-8"):
        self._root = Path(root).resolve()
        self._encoding = encoding

    @classmethod
    def from_settings(cls, settings: BundleSettings) -> "FileContentLoader":
        return cls(settings.content_root, settings.encoding)

    def __call__(self, path: str) -> str:
        return self.resolve(path).read_text(encoding=self._encoding)

    def resolve(self, path: str) -> Path:
        relative = path[2:] if path.startswith("~/") else path.lstrip("/")
        full_path = (self._root / relative).resolve()
        if not full_path.is_relative_to(self._root):
            raise ValueError(f"{path} resolves outside of {self._root}")
        return full_path
