"""WSGI middleware serving bundle and resource content."""

from typing import Any, Callable, Iterable
from urllib.parse import parse_qs

from structlog import get_logger

from basicbundles.configuration import Configuration

__all__ = ["BundleMiddleware"]

logger = get_logger(__name__)

WSGIApplication = Callable[[dict[str, Any], Callable], Iterable[bytes]]


class BundleMiddleware:
    """Serve requests for known bundles and resources, delegate everything else.

    The inbound path is translated with the configuration's ``to_app_relative``
    and looked up in the repository; unknown paths fall through to ``app``.
    Only ``GET`` and ``HEAD`` are answered.
    """

    def __init__(self, app: WSGIApplication, configuration: Configuration):
        self._app = app
        self._configuration = configuration

    def __call__(self, environ: dict[str, Any], start_response: Callable) -> Iterable[bytes]:
        method = environ.get("REQUEST_METHOD", "GET")
        if method not in ("GET", "HEAD"):
            return self._app(environ, start_response)

        path = self._configuration.to_app_relative(environ.get("PATH_INFO", ""))
        repository = self._configuration.repository
        requestable = repository.find(path)
        if requestable is None:
            return self._app(environ, start_response)

        settings = self._configuration.settings
        fetched = repository.fetch(requestable)
        body = fetched.content.encode(settings.encoding)

        headers = [
            ("Content-Type", f"{fetched.content_type}; charset={settings.encoding}"),
            ("Content-Length", str(len(body))),
        ]
        query = parse_qs(environ.get("QUERY_STRING", ""), keep_blank_values=True)
        if "version" in query:
            headers.append(("Cache-Control", f"public, max-age={settings.cache_max_age}"))

        logger.debug("serving_requestable", path=path, requestable=requestable.path, length=len(body))
        start_response("200 OK", headers)
        return [] if method == "HEAD" else [body]
