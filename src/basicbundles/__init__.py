"""Basicbundles: declared script and stylesheet bundles with cache-busting URLs.

Applications declare their scripts and stylesheets once, with explicit
dependencies, group them into bundles and groups, and at request time render
either individual tags (development) or bundle tags (production). Every URL
carries a version token derived from the content it points to.

Key Features:
    - Declarative resources with same-typed dependencies
    - Standard and minified flavors from a single path pattern
    - Deterministic dependency ordering with cycle detection
    - Bundles with ``url(...)`` references re-anchored for their new location
    - An immutable repository, built exactly once and shared by all requests
    - A WSGI middleware serving bundle content

Basic Usage:
    >>> from basicbundles.configuration import Configuration
    >>> from basicbundles.consumption import WebResources
    >>> from basicbundles.loaders import FileContentLoader
    >>> from basicbundles.request_store import MappingRequestStore
    >>>
    >>> configuration = Configuration(FileContentLoader("static"))
    >>> jquery = configuration.add_js("~/Scripts/jquery(.min).js")
    >>> bootstrap = configuration.add_js("~/Scripts/bootstrap(.min).js", jquery)
    >>> scripts = configuration.add_bundle("~/bundles/scripts", jquery, bootstrap)
    >>>
    >>> web_resources = WebResources(configuration)
    >>> store = MappingRequestStore({})
    >>> web_resources.require(store, bootstrap)
    >>> web_resources.render_scripts(store)

The package consists of several modules:
    - domain: Resources, bundles, groups and the enums describing them
    - registry: Declaration of resources, bundles and groups
    - builders: Committing a registry into a repository
    - repository: The build pass and the immutable lookup it produces
    - tracker: Per-request requirement tracking and tag rendering
    - consumption: The request-time facade
    - middleware: WSGI serving of bundle and resource content
    - paths: Relative path arithmetic and CSS url rewriting
    - errors: Framework-specific exceptions
"""
