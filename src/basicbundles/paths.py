"""Relative path arithmetic and rewriting of ``url(...)`` references in CSS.

When stylesheets are concatenated into a bundle they are served from the
bundle's path rather than their own, so every relative URL they contain has
to be re-anchored. These helpers do that without touching anything else.
"""

import posixpath
import re
from typing import Callable
from urllib.parse import urljoin, urlsplit

__all__ = [
    "relative_path_fragment",
    "concat_urls",
    "simplify_url",
    "rewrite_css_urls",
]

_DUMMY_BASE = "http://example.com/"

_CSS_URL = re.compile(r"""url\(\s*(['"]?)(.*?)\1\s*\)""")


def _directory_of(path: str) -> str:
    return posixpath.dirname(urlsplit(urljoin(_DUMMY_BASE, path)).path)


def relative_path_fragment(source: str, target: str) -> str:
    """Return the directory fragment leading from ``source``'s directory to ``target``'s.

    Prepending the fragment to a URL written relative to ``target`` makes it
    resolve to the same location when read relative to ``source``.

    Example:
        >>> relative_path_fragment("~/foo", "~/bar")
        '.'
        >>> relative_path_fragment("~/foo", "~/baz/bar")
        'baz'
        >>> relative_path_fragment("~/baz/foo", "~/bar")
        '..'
    """
    return posixpath.relpath(_directory_of(target), _directory_of(source))


def concat_urls(url: str, fragment: str) -> str:
    """Prefix ``url`` with a directory fragment and simplify the result.

    Absolute paths, fully qualified URLs (anything with a scheme separator),
    fragment-only references and empty URLs are returned unchanged.
    """
    if not url or url.startswith(("/", "#")) or ":" in url:
        return url

    return simplify_url(f"{fragment}/{url}")


def simplify_url(url: str) -> str:
    """Collapse ``.`` and ``..`` segments of a relative URL.

    Leading ``..`` segments that cannot be cancelled are kept. Any query
    string or fragment is carried over verbatim.

    Example:
        >>> simplify_url("baz/../../foo/bar")
        '../foo/bar'
    """
    split_at = min((i for i in (url.find("?"), url.find("#")) if i >= 0), default=len(url))
    path, suffix = url[:split_at], url[split_at:]
    if not path:
        return url

    simplified = posixpath.normpath(path)
    if path.endswith("/") and not simplified.endswith("/"):
        simplified += "/"
    return simplified + suffix


def rewrite_css_urls(css: str, rewrite: Callable[[str], str]) -> str:
    """Apply ``rewrite`` to every ``url(...)`` in ``css``.

    Each reference is re-emitted single-quoted; all other text is untouched.
    """
    return _CSS_URL.sub(lambda match: f"url('{rewrite(match.group(2))}')", css)
