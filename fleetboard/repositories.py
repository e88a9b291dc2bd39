from __future__ import annotations

import logging

from .models import DEVICES, WORKERS, DeviceRecord, R, RecordKind, WorkerRecord
from .store import BucketNotFoundError, Store

logger = logging.getLogger(__name__)


def scan(store: Store, kind: RecordKind[R]) -> list[R]:
    """Decode every record in ``kind``'s bucket, in key order.

    Raises:
        BucketNotFoundError: the bucket was never created.
        RecordDecodeError: a stored value is malformed; nothing is returned.
    """
    with store.view() as tx:
        bucket = tx.bucket(kind.bucket)
        if bucket is None:
            raise BucketNotFoundError(kind.bucket)
        records = [kind.decode(key, value) for key, value in bucket.items()]

    logger.debug("scanned %s: %d records", kind.bucket, len(records))
    return records


def fetch_workers(store: Store) -> list[WorkerRecord]:
    return scan(store, WORKERS)


def fetch_devices(store: Store) -> list[DeviceRecord]:
    return scan(store, DEVICES)
