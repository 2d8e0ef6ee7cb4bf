# app/crud.py
import uuid
from typing import Any, Callable, Dict, List, Optional

from .storage import JsonFileStore, Record

# Fields the server owns; callers can never change them through an update
READ_ONLY_FIELDS = ("id",)


def merge_record(record: Record, changes: Dict[str, Any]) -> Record:
    """
    Returns a new record: ``record`` with every field present in ``changes``
    overwritten. Fields absent from ``changes`` keep their prior value and the
    original record is left untouched.
    """
    merged = dict(record)
    for field, value in changes.items():
        if field in READ_ONLY_FIELDS:
            continue
        merged[field] = value
    return merged


def filter_records(records: List[Record], predicate: Callable[[Record], bool]) -> List[Record]:
    # Keeps stored order
    return [r for r in records if predicate(r)]


def list_records(store: JsonFileStore, resource: str) -> List[Record]:
    return store.load(resource)


def get_record(store: JsonFileStore, resource: str, record_id: str) -> Optional[Record]:
    for record in store.load(resource):
        if record.get("id") == record_id:
            return record
    return None


def find_records(store: JsonFileStore, resource: str, **criteria: Any) -> List[Record]:
    """All records whose fields equal every keyword given, e.g. ``day_of_week=1``."""
    records = store.load(resource)
    return filter_records(
        records,
        lambda r: all(r.get(field) == value for field, value in criteria.items()),
    )


def create_record(store: JsonFileStore, resource: str, data: Dict[str, Any]) -> Record:
    records = store.load(resource)
    taken_ids = {r.get("id") for r in records}
    new_id = str(uuid.uuid4())
    while new_id in taken_ids: # Practically never loops, but ids must stay unique
        new_id = str(uuid.uuid4())

    new_record = {**data, "id": new_id}
    records.append(new_record)
    store.save(resource, records)
    return new_record


def update_record(store: JsonFileStore, resource: str, record_id: str, changes: Dict[str, Any]) -> Optional[Record]:
    records = store.load(resource)
    for index, record in enumerate(records):
        if record.get("id") == record_id:
            records[index] = merge_record(record, changes)
            store.save(resource, records)
            return records[index]
    return None


def delete_record(store: JsonFileStore, resource: str, record_id: str) -> bool:
    records = store.load(resource)
    remaining = filter_records(records, lambda r: r.get("id") != record_id)
    # Nothing removed -> leave the file alone
    if len(remaining) == len(records):
        return False
    store.save(resource, remaining)
    return True
