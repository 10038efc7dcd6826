"""Request-time API: require resources while building a page, then render their tags.

Every call is given the per-request store explicitly; the tracker for the
request lives in that store and is created on first use.

Example:
    >>> web_resources = WebResources(configuration)
    >>> store = MappingRequestStore(environ, key_prefix="basicbundles.")
    >>> web_resources.require(store, BundleConfig.default_requirements)
    >>> web_resources.render_stylesheets(store)
    '<link href="/bundles/styles?version=..." rel="stylesheet" type="text/css">'
"""

from basicbundles.configuration import Configuration
from basicbundles.domain import Requirable, ResourceType
from basicbundles.request_store import RequestStore
from basicbundles.tracker import Tracker

__all__ = ["WebResources", "TRACKER_KEY"]

TRACKER_KEY = "tracker"


class WebResources:
    def __init__(self, configuration: Configuration):
        self._configuration = configuration

    def tracker(self, store: RequestStore) -> Tracker:
        """Return the tracker of the request behind ``store``, creating it if needed."""
        tracker = store.get(TRACKER_KEY)
        if tracker is None:
            tracker = Tracker(self._configuration.repository, self._configuration.to_absolute)
            store.set(TRACKER_KEY, tracker)
        return tracker

    def require(self, store: RequestStore, *requirables: Requirable):
        """Require resources, bundles or groups for the current request."""
        tracker = self.tracker(store)
        for requirable in requirables:
            tracker.require(requirable)

    def render(self, store: RequestStore, resource_type: ResourceType) -> str:
        """Render tags for everything of ``resource_type`` required so far.

        Render mode and flavor are asked of the configuration on every call.
        """
        return self.tracker(store).render(
            resource_type,
            self._configuration.get_mode(store),
            self._configuration.get_flavor(store),
        )

    def render_scripts(self, store: RequestStore) -> str:
        return self.render(store, ResourceType.SCRIPT)

    def render_stylesheets(self, store: RequestStore) -> str:
        return self.render(store, ResourceType.STYLESHEET)
