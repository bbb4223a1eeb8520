"""Shared fixtures: caches over recording and in-memory stores."""

import pytest

from funcache import Cache, new_in_mem_cache, nil_cache


class RecordingStore:
    """Dict store that logs every call, for asserting on store traffic."""

    def __init__(self):
        self.m = {}
        self.calls = []

    def add(self, key, value):
        self.m[key] = value
        self.calls.append(("add", key, value))

    def get(self, key):
        if key in self.m:
            value, ok = self.m[key], True
        else:
            value, ok = None, False
        self.calls.append(("get", key, ok))
        return value, ok

    def added_keys(self):
        return [key for op, key, _ in self.calls if op == "add"]


@pytest.fixture
def recording_store():
    return RecordingStore()


@pytest.fixture
def recording_cache(recording_store):
    return Cache(recording_store)


@pytest.fixture
def mem_cache():
    return new_in_mem_cache()


@pytest.fixture
def null_cache():
    return nil_cache()
