"""Tests for startup seeding."""
from __future__ import annotations

from fleetboard.models import encode_record
from fleetboard.repositories import fetch_devices, fetch_workers
from fleetboard.seed import seed_devices, seed_store, seed_workers
from fleetboard.store import Store


def _raw_bucket(store: Store, name: str) -> dict[str, bytes]:
    with store.view() as tx:
        return dict(tx.bucket(name).items())


def test_placeholder_rows():
    assert [(w.id, w.name, w.type) for w in seed_workers()] == [
        (1, "Worker 1", "Type A"),
        (2, "Worker 2", "Type B"),
        (3, "Worker 3", "Type C"),
    ]
    assert [(d.id, d.host, d.name) for d in seed_devices()] == [
        (1, "Host 1", "Device 1"),
        (2, "Host 2", "Device 2"),
        (3, "Host 3", "Device 3"),
    ]


def test_fresh_store_gets_three_rows_per_bucket(store: Store):
    written = seed_store(store)

    assert written == {"workers": 3, "devices": 3}

    workers = fetch_workers(store)
    assert [w.id for w in workers] == [1, 2, 3]
    assert [w.name for w in workers] == ["Worker 1", "Worker 2", "Worker 3"]

    devices = fetch_devices(store)
    assert [d.id for d in devices] == [1, 2, 3]
    assert [d.host for d in devices] == ["Host 1", "Host 2", "Host 3"]


def test_keys_use_bucket_prefix(seeded_store: Store):
    assert sorted(_raw_bucket(seeded_store, "workers")) == ["w1", "w2", "w3"]
    assert sorted(_raw_bucket(seeded_store, "devices")) == ["d1", "d2", "d3"]


def test_reseeding_is_idempotent(seeded_store: Store):
    before = {n: _raw_bucket(seeded_store, n) for n in ("workers", "devices")}

    seed_store(seeded_store)

    after = {n: _raw_bucket(seeded_store, n) for n in ("workers", "devices")}
    assert after == before
    assert all(len(rows) == 3 for rows in after.values())


def test_reseeding_leaves_extra_rows_alone(seeded_store: Store):
    extra = encode_record(seed_workers(4)[3])
    with seeded_store.update() as tx:
        tx.bucket("workers").put("w4", extra)

    seed_store(seeded_store)

    rows = _raw_bucket(seeded_store, "workers")
    assert rows["w4"] == extra
    assert len(rows) == 4
