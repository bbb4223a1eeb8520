"""Tests for the memoize decorator."""

from funcache import memoize, new_in_mem_cache


def test_memoize_caches_per_arguments():
    cache = new_in_mem_cache()
    calls = []

    @memoize(cache)
    def square(n):
        calls.append(n)
        return n * n

    assert square(3) == 9
    assert square(3) == 9
    assert square(4) == 16
    assert calls == [3, 4]


def test_memoize_recomputes_inside_bust():
    cache = new_in_mem_cache()
    calls = []

    @memoize(cache)
    def load(name, upper=False):
        calls.append(name)
        return name.upper() if upper else name

    assert load("a", upper=True) == "A"
    cache.bust(lambda: load("a", upper=True))
    assert calls == ["a", "a"]

    assert load("a", upper=True) == "A"
    assert calls == ["a", "a"]


def test_memoize_custom_key_builder():
    cache = new_in_mem_cache()
    calls = []

    @memoize(cache, key_builder=lambda func, args, kwargs: ("by-first", args[0]))
    def describe(item_id, verbose=False):
        calls.append((item_id, verbose))
        return f"item {item_id}"

    assert describe(1) == "item 1"
    assert describe(1, verbose=True) == "item 1"
    assert calls == [(1, False)]
    assert cache.store.get(("by-first", 1)) == ("item 1", True)


def test_memoize_method_form_and_attributes():
    cache = new_in_mem_cache()

    @cache.memoize()
    def double(n):
        """Double n."""
        return n * 2

    assert double(5) == 10
    assert double._funcache is cache
    assert double._is_cached is True
    assert double.__name__ == "double"
    assert double.__doc__ == "Double n."
