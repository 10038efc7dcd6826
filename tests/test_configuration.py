import threading

import pytest

from basicbundles.configuration import Configuration, Lazy
from basicbundles.domain import RenderMode, ResourceFlavor
from basicbundles.errors import CircularDependencyError, ConfigurationFrozenError
from basicbundles.request_store import MappingRequestStore
from basicbundles.settings import BundleSettings


def test_lazy_computes_once_across_threads():
    calls = []
    started = threading.Barrier(8)

    def factory():
        calls.append(1)
        return object()

    lazy = Lazy(factory)
    results = []

    def access():
        started.wait()
        results.append(lazy.get())

    threads = [threading.Thread(target=access) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(calls) == 1
    assert len(results) == 8
    assert all(result is results[0] for result in results)


def test_lazy_reraises_the_first_failure():
    calls = []

    def factory():
        calls.append(1)
        raise ValueError("boom")

    lazy = Lazy(factory)

    for _ in range(2):
        with pytest.raises(ValueError, match="boom"):
            lazy.get()
    assert calls == [1]
    assert not lazy.is_value_created


def test_commit_builds_once(load, loaded_paths):
    configuration = Configuration(load, settings=BundleSettings())
    configuration.add_js("~/a.js")

    assert configuration.commit() is configuration.repository
    assert loaded_paths == ["~/a.js"]


def test_declaring_after_commit_raises(load):
    configuration = Configuration(load, settings=BundleSettings())
    configuration.add_css("~/a.css")
    configuration.commit()

    with pytest.raises(ConfigurationFrozenError):
        configuration.add_css("~/b.css")


def test_failed_build_is_reported_to_every_accessor(load):
    configuration = Configuration(load, settings=BundleSettings())
    a = configuration.add_js("~/a", "~/b")
    configuration.add_js("~/b", a)

    for _ in range(2):
        with pytest.raises(CircularDependencyError):
            configuration.repository
    assert not configuration.is_committed
    assert repr(configuration) == "Configuration(committed=False)"


def test_translators_default_to_identity(load):
    configuration = Configuration(load, settings=BundleSettings())

    assert configuration.to_absolute("~/a.js") == "~/a.js"
    assert configuration.to_app_relative("/a.js") == "/a.js"


def test_settings_are_read_from_environment(monkeypatch, load):
    monkeypatch.setenv("BASICBUNDLES_RENDER_MODE", "bundled")
    monkeypatch.setenv("BASICBUNDLES_FLAVOR", "minified")
    monkeypatch.setenv("BASICBUNDLES_CACHE_MAX_AGE", "60")

    configuration = Configuration(load)
    store = MappingRequestStore({})

    assert configuration.get_mode(store) is RenderMode.BUNDLED
    assert configuration.get_flavor(store) is ResourceFlavor.MINIFIED
    assert configuration.settings.cache_max_age == 60


def test_providers_receive_the_request_store(load):
    configuration = Configuration(
        load,
        settings=BundleSettings(),
        get_mode=lambda store: RenderMode(store.get("mode")),
    )
    store = MappingRequestStore({"mode": "bundled"})

    assert configuration.get_mode(store) is RenderMode.BUNDLED
    assert configuration.get_flavor(store) is ResourceFlavor.STANDARD
