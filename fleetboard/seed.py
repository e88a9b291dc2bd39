"""Startup seeding of the workers and devices buckets."""
from __future__ import annotations

import logging

from .models import DEVICES, WORKERS, DeviceRecord, Record, RecordKind, WorkerRecord, encode_record
from .store import Store

logger = logging.getLogger(__name__)

SEED_COUNT = 3


def seed_workers(count: int = SEED_COUNT) -> list[WorkerRecord]:
    return [
        WorkerRecord(id=i, name=f"Worker {i}", type=f"Type {chr(ord('A') + i - 1)}")
        for i in range(1, count + 1)
    ]


def seed_devices(count: int = SEED_COUNT) -> list[DeviceRecord]:
    return [
        DeviceRecord(id=i, host=f"Host {i}", name=f"Device {i}")
        for i in range(1, count + 1)
    ]


def seed_store(store: Store) -> dict[str, int]:
    """Write the placeholder rows into both buckets in one transaction.

    Existing keys ``w1..w3`` / ``d1..d3`` are overwritten with identical
    content; any other keys in the buckets are left alone.

    Returns:
        Rows written per bucket name.
    """
    plan: list[tuple[RecordKind, list[Record]]] = [
        (WORKERS, seed_workers()),
        (DEVICES, seed_devices()),
    ]
    written: dict[str, int] = {}

    with store.update() as tx:
        for kind, records in plan:
            bucket = tx.create_bucket_if_not_exists(kind.bucket)
            for record in records:
                bucket.put(kind.key_for(record.id), encode_record(record))
            written[kind.bucket] = len(records)

    logger.info("seeded store %s: %s", store.path, written)
    return written
