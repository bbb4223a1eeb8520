"""Tests for settings, store selection and logging setup."""

import pytest
from loguru import logger
from pydantic import ValidationError

from funcache import (
    CopyOnWriteMap,
    FuncacheSettings,
    LRUStore,
    NullStore,
    SyncMap,
    build_store,
    configure_logging,
    get_logger,
    new_default_cache,
    new_in_mem_cache,
)


def test_defaults(monkeypatch):
    for name in ("FUNCACHE_LOG_LEVEL", "FUNCACHE_DEFAULT_STORE", "FUNCACHE_LRU_MAX_SIZE"):
        monkeypatch.delenv(name, raising=False)

    settings = FuncacheSettings()
    assert settings.log_level == "INFO"
    assert settings.default_store == "mutex"
    assert settings.lru_max_size == 1024


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("FUNCACHE_LOG_LEVEL", "debug")
    monkeypatch.setenv("FUNCACHE_DEFAULT_STORE", "lru")
    monkeypatch.setenv("FUNCACHE_LRU_MAX_SIZE", "16")

    settings = FuncacheSettings()
    assert settings.log_level == "DEBUG"
    assert settings.default_store == "lru"
    assert settings.lru_max_size == 16


def test_invalid_values_rejected():
    with pytest.raises(ValidationError):
        FuncacheSettings(log_level="chatty")
    with pytest.raises(ValidationError):
        FuncacheSettings(default_store="redis")
    with pytest.raises(ValidationError):
        FuncacheSettings(lru_max_size=0)


@pytest.mark.parametrize(
    "kind, expected",
    [
        ("mutex", SyncMap),
        ("copy_on_write", CopyOnWriteMap),
        ("lru", LRUStore),
        ("null", NullStore),
    ],
)
def test_build_store(kind, expected):
    store = build_store(FuncacheSettings(default_store=kind, lru_max_size=8))
    assert isinstance(store, expected)


def test_new_default_cache_uses_configured_store():
    cache = new_default_cache(FuncacheSettings(default_store="lru", lru_max_size=3))
    assert isinstance(cache.store, LRUStore)
    assert cache.store.max_size == 3
    assert cache.cache("k", lambda: 1) == 1
    assert cache.cache("k", lambda: 2) == 1


def test_library_is_silent_until_configured():
    records = []
    handler_id = logger.add(records.append, level="TRACE")
    try:
        cache = new_in_mem_cache()
        cache.cache("k", lambda: 1)
        cache.cache("k", lambda: 1)
        cache.bust(lambda: cache.cache("k", lambda: 1))
    finally:
        logger.remove(handler_id)

    assert records == []


def test_configure_logging_routes_debug_records(capsys):
    handler_id = configure_logging("DEBUG")
    try:
        get_logger(name="tests").debug("hello {}", "sink")
        new_in_mem_cache().cache("configured", lambda: 1)
    finally:
        logger.remove(handler_id)
        logger.disable("funcache")

    err = capsys.readouterr().err
    assert "hello sink" in err
    assert "Cache MISS: configured" in err
