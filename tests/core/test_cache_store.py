"""Tests for the TTL-bound registry cache."""

import json
from pathlib import Path

import pytest

from motion_core.core.cache_store import ASSETS_KEY, INDEX_KEY, CacheStore, namespace_for_url
from tests.fakes.time import FakeTime

NAMESPACE = namespace_for_url("https://motion-core.dev/registry")


def _store(root: Path, time: FakeTime) -> CacheStore:
    return CacheStore(
        root=root,
        time=time,
        registry_ttl_ms=60_000,
        asset_ttl_ms=3_600_000,
        stale_max_age_ms=86_400_000,
    )


def test_fresh_entry_is_served(tmp_path: Path) -> None:
    time = FakeTime()
    store = _store(tmp_path, time)

    store.put(NAMESPACE, INDEX_KEY, b"payload")
    time.sleep(30)

    assert store.get(NAMESPACE, INDEX_KEY) == b"payload"


def test_entry_past_ttl_is_not_served_fresh_but_is_available_stale(tmp_path: Path) -> None:
    time = FakeTime()
    store = _store(tmp_path, time)

    store.put(NAMESPACE, INDEX_KEY, b"payload")
    time.sleep(61)

    assert store.get(NAMESPACE, INDEX_KEY) is None
    stale = store.get_stale(NAMESPACE, INDEX_KEY)
    assert stale is not None
    assert stale.payload == b"payload"
    assert stale.age_ms == 61_000


def test_assets_use_their_own_ttl(tmp_path: Path) -> None:
    time = FakeTime()
    store = _store(tmp_path, time)

    store.put(NAMESPACE, INDEX_KEY, b"index")
    store.put(NAMESPACE, ASSETS_KEY, b"assets")
    time.sleep(120)

    assert store.get(NAMESPACE, INDEX_KEY) is None
    assert store.get(NAMESPACE, ASSETS_KEY) == b"assets"


def test_stale_entry_beyond_max_age_is_dropped(tmp_path: Path) -> None:
    time = FakeTime()
    store = _store(tmp_path, time)

    store.put(NAMESPACE, INDEX_KEY, b"payload")
    time.sleep(86_401)

    assert store.get_stale(NAMESPACE, INDEX_KEY) is None


def test_unreadable_envelope_is_a_miss(tmp_path: Path) -> None:
    store = _store(tmp_path, FakeTime())
    entry = tmp_path / NAMESPACE / INDEX_KEY
    entry.parent.mkdir(parents=True)
    entry.write_text("{not json", encoding="utf-8")

    assert store.get(NAMESPACE, INDEX_KEY) is None
    assert store.get_stale(NAMESPACE, INDEX_KEY) is None


def test_envelope_records_timestamp_with_payload(tmp_path: Path) -> None:
    time = FakeTime(now=1000.0)
    store = _store(tmp_path, time)

    store.put(NAMESPACE, INDEX_KEY, b"abc")

    envelope = json.loads((tmp_path / NAMESPACE / INDEX_KEY).read_text(encoding="utf-8"))
    assert envelope == {"fetchedAt": 1000.0, "payload": "YWJj"}
    assert [p.name for p in (tmp_path / NAMESPACE).iterdir()] == [INDEX_KEY]


def test_distinct_urls_get_distinct_namespaces() -> None:
    a = namespace_for_url("https://a.example/registry")
    b = namespace_for_url("https://a.example/registry2")

    assert a != b
    assert a.startswith("registry-")
    assert "/" not in a and "=" not in a


def test_clear_requires_confirmation(tmp_path: Path) -> None:
    store = _store(tmp_path, FakeTime())
    store.put(NAMESPACE, INDEX_KEY, b"payload")

    with pytest.raises(ValueError):
        store.clear(confirm=False)

    assert store.namespaces() == [NAMESPACE]


def test_clear_removes_every_namespace(tmp_path: Path) -> None:
    store = _store(tmp_path, FakeTime())
    other = namespace_for_url("https://other.example")
    store.put(NAMESPACE, INDEX_KEY, b"one")
    store.put(other, INDEX_KEY, b"two")

    removed = store.clear(confirm=True)

    assert sorted(p.name for p in removed) == sorted([NAMESPACE, other])
    assert store.namespaces() == []


def test_clear_single_namespace_keeps_others(tmp_path: Path) -> None:
    store = _store(tmp_path, FakeTime())
    other = namespace_for_url("https://other.example")
    store.put(NAMESPACE, INDEX_KEY, b"one")
    store.put(other, INDEX_KEY, b"two")

    store.clear(other, confirm=True)

    assert store.namespaces() == [NAMESPACE]


def test_clear_on_missing_cache_dir_is_noop(tmp_path: Path) -> None:
    store = _store(tmp_path / "absent", FakeTime())

    assert store.clear(confirm=True) == []
