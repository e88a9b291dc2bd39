"""Record types and the value codec for the two dashboard namespaces."""
from __future__ import annotations

import json
from dataclasses import astuple, dataclass
from typing import Generic, TypeVar, Union


class RecordDecodeError(ValueError):
    """A stored value could not be decoded into a record."""

    def __init__(self, bucket: str, key: str, reason: str):
        super().__init__(f"malformed record {bucket}/{key}: {reason}")
        self.bucket = bucket
        self.key = key
        self.reason = reason


@dataclass(frozen=True)
class WorkerRecord:
    id: int
    name: str
    type: str


@dataclass(frozen=True)
class DeviceRecord:
    id: int
    host: str
    name: str


Record = Union[WorkerRecord, DeviceRecord]
R = TypeVar("R", WorkerRecord, DeviceRecord)


@dataclass(frozen=True)
class RecordKind(Generic[R]):
    """Where one record type lives in the store and how its keys are built."""

    bucket: str
    key_prefix: str
    record_type: type[R]

    def key_for(self, record_id: int) -> str:
        return f"{self.key_prefix}{record_id}"

    def decode(self, key: str, raw: bytes) -> R:
        record_id, first, second = decode_fields(raw, bucket=self.bucket, key=key)
        return self.record_type(record_id, first, second)


WORKERS: RecordKind[WorkerRecord] = RecordKind("workers", "w", WorkerRecord)
DEVICES: RecordKind[DeviceRecord] = RecordKind("devices", "d", DeviceRecord)


def encode_record(record: Record) -> bytes:
    """Serialize a record as a UTF-8 JSON array ``[id, field2, field3]``.

    JSON keeps embedded commas and spaces intact, so every string field
    round-trips exactly.
    """
    return json.dumps(list(astuple(record)), ensure_ascii=False).encode("utf-8")


def decode_fields(raw: bytes, *, bucket: str, key: str) -> tuple[int, str, str]:
    """Decode a stored value into its ``(id, field2, field3)`` triple.

    Raises:
        RecordDecodeError: value is not a 3-element JSON array of
            ``[int, str, str]``.
    """
    try:
        payload = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise RecordDecodeError(bucket, key, f"not a JSON value ({exc})") from exc

    if not isinstance(payload, list) or len(payload) != 3:
        raise RecordDecodeError(bucket, key, "expected a 3-element array")

    record_id, first, second = payload
    # bool is an int subclass; reject it explicitly
    if not isinstance(record_id, int) or isinstance(record_id, bool):
        raise RecordDecodeError(bucket, key, f"non-integer id {record_id!r}")
    if not isinstance(first, str) or not isinstance(second, str):
        raise RecordDecodeError(bucket, key, "text fields must be strings")

    return record_id, first, second
