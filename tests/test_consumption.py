import pytest

from example import CONTENT, BundleConfig

from basicbundles.configuration import Configuration
from basicbundles.consumption import TRACKER_KEY, WebResources
from basicbundles.domain import RenderMode, ResourceFlavor
from basicbundles.request_store import MappingRequestStore
from basicbundles.settings import BundleSettings


def to_absolute(path):
    return "/app" + path[1:]


@pytest.fixture
def modes() -> dict:
    return {"mode": RenderMode.INDIVIDUAL, "flavor": ResourceFlavor.STANDARD}


@pytest.fixture
def configuration(modes) -> Configuration:
    return Configuration(
        CONTENT.__getitem__,
        settings=BundleSettings(),
        to_absolute=to_absolute,
        get_mode=lambda store: modes["mode"],
        get_flavor=lambda store: modes["flavor"],
    )


@pytest.fixture
def bundles(configuration) -> BundleConfig:
    return BundleConfig(configuration)


@pytest.fixture
def web_resources(configuration) -> WebResources:
    return WebResources(configuration)


def test_one_tracker_per_request_store(web_resources):
    first = MappingRequestStore({})
    second = MappingRequestStore({})

    assert web_resources.tracker(first) is web_resources.tracker(first)
    assert web_resources.tracker(first) is not web_resources.tracker(second)


def test_tracker_is_kept_under_prefixed_key(web_resources):
    environ = {}
    tracker = web_resources.tracker(MappingRequestStore(environ, key_prefix="basicbundles."))

    assert environ == {"basicbundles." + TRACKER_KEY: tracker}


def test_repository_is_built_on_first_tracker(configuration, bundles, web_resources):
    assert not configuration.is_committed

    web_resources.tracker(MappingRequestStore({}))

    assert configuration.is_committed


def test_render_individual_default_requirements(configuration, bundles, web_resources):
    store = MappingRequestStore({})
    web_resources.require(store, bundles.default_requirements)
    repository = configuration.repository

    assert web_resources.render_stylesheets(store) == "\n".join(
        f'<link href="{path}?version={repository.get_hash(resource)}" rel="stylesheet" type="text/css">'
        for path, resource in [
            ("/app/Content/bootstrap.css", bundles.css_bootstrap),
            ("/app/Content/jquery-ui.css", bundles.css_jquery_ui),
        ]
    )
    assert web_resources.render_scripts(store) == "\n".join(
        f'<script src="{path}?version={repository.get_hash(resource)}"></script>'
        for path, resource in [
            ("/app/Scripts/jquery.js", bundles.js_jquery),
            ("/app/Scripts/bootstrap.js", bundles.js_bootstrap),
        ]
    )


def test_render_mode_is_read_on_every_render(configuration, bundles, web_resources, modes):
    store = MappingRequestStore({})
    web_resources.require(store, bundles.js_default)
    bundle_hash = configuration.repository.get_hash(bundles.js_default)

    individual = web_resources.render_scripts(store)
    modes["mode"] = RenderMode.BUNDLED
    bundled = web_resources.render_scripts(store)

    assert individual.count("<script") == 2
    assert bundled == f'<script src="/app/bundles/scripts?version={bundle_hash}"></script>'


def test_flavor_is_read_on_every_render(bundles, web_resources, modes):
    store = MappingRequestStore({})
    web_resources.require(store, bundles.js_jquery_ui)

    modes["flavor"] = ResourceFlavor.MINIFIED
    rendered = web_resources.render_scripts(store)

    assert "/app/Scripts/jquery.js?" in rendered
    assert "/app/Scripts/jquery-ui.min.js?" in rendered


def test_providers_default_to_settings():
    configuration = Configuration(
        CONTENT.__getitem__,
        settings=BundleSettings(render_mode=RenderMode.BUNDLED, flavor=ResourceFlavor.MINIFIED),
    )
    bundles = BundleConfig(configuration)
    web_resources = WebResources(configuration)
    store = MappingRequestStore({})

    web_resources.require(store, bundles.css_default, bundles.css_bootstrap_modal)

    rendered = web_resources.render_stylesheets(store).split("\n")
    assert rendered[0].startswith('<link href="~/bundles/styles?version=')
    assert rendered[1].startswith('<link href="~/Content/bootstrap-modal.css?version=')


def test_bundle_content_of_example(configuration, bundles):
    fetched = configuration.repository.fetch(bundles.css_default)

    assert fetched.content == ".btn{background:url('../img/btn.png')}\n.ui{}\n"
