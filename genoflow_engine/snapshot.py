"""
snapshot.py - flat JSON snapshot import / export
The ingestion boundary: records are coerced or rejected here so the core
only ever sees well-formed Individuals.
"""

import json
from pathlib import Path
from typing import List, Dict, Any, Union

from .models import Individual, Gender, Status


class SnapshotError(ValueError):
    """Malformed snapshot data"""


SNAPSHOT_FIELDS = ('id', 'name', 'gender', 'status', 'isDeceased', 'isProband',
                   'x', 'y', 'parents', 'partners')


def _enum_value(enum_cls, raw, default, field_name: str, person_id: str):
    if raw is None:
        return default
    try:
        return enum_cls(str(raw).lower())
    except ValueError:
        raise SnapshotError(f"{person_id}: invalid {field_name} {raw!r}") from None


def _number(raw, field_name: str, person_id: str) -> float:
    if raw is None:
        return 0.0
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise SnapshotError(f"{person_id}: {field_name} must be a number, got {raw!r}")
    return float(raw)


def _flag(raw, field_name: str, person_id: str) -> bool:
    if raw is None:
        return False
    if not isinstance(raw, bool):
        raise SnapshotError(f"{person_id}: {field_name} must be true or false, got {raw!r}")
    return raw


def _id_list(raw, field_name: str, person_id: str) -> List[str]:
    # absent relationship arrays are empty, anything else must be a list of ids
    if raw is None:
        return []
    if not isinstance(raw, list) or not all(isinstance(i, str) for i in raw):
        raise SnapshotError(f"{person_id}: {field_name} must be a list of ids")
    return list(raw)


def individual_from_record(record: Dict[str, Any]) -> Individual:
    """Snapshot record (camelCase keys) -> Individual"""
    if not isinstance(record, dict):
        raise SnapshotError(f"Individual record must be an object, got {type(record).__name__}")

    person_id = record.get('id')
    if not isinstance(person_id, str) or not person_id:
        raise SnapshotError(f"Individual record without a valid id: {record!r}")

    return Individual(
        id=person_id,
        name=str(record.get('name') or ""),
        gender=_enum_value(Gender, record.get('gender'), Gender.UNKNOWN, 'gender', person_id),
        status=_enum_value(Status, record.get('status'), Status.UNAFFECTED, 'status', person_id),
        is_deceased=_flag(record.get('isDeceased'), 'isDeceased', person_id),
        is_proband=_flag(record.get('isProband'), 'isProband', person_id),
        x=_number(record.get('x'), 'x', person_id),
        y=_number(record.get('y'), 'y', person_id),
        parents=_id_list(record.get('parents'), 'parents', person_id),
        partners=_id_list(record.get('partners'), 'partners', person_id)
    )


def individual_to_record(person: Individual) -> Dict[str, Any]:
    """Individual -> snapshot record with the exported field names"""
    return {
        'id': person.id,
        'name': person.name,
        'gender': person.gender.value,
        'status': person.status.value,
        'isDeceased': person.is_deceased,
        'isProband': person.is_proband,
        'x': person.x,
        'y': person.y,
        'parents': list(person.parents),
        'partners': list(person.partners)
    }


def parse_snapshot(data: Any) -> List[Individual]:
    """Decoded JSON (a list of records) -> individuals, ids must be unique"""
    if not isinstance(data, list):
        raise SnapshotError("Snapshot must be a list of individual records")

    individuals = [individual_from_record(r) for r in data]
    seen = set()
    for person in individuals:
        if person.id in seen:
            raise SnapshotError(f"Duplicate individual id: {person.id}")
        seen.add(person.id)
    return individuals


def loads(text: str) -> List[Individual]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SnapshotError(f"Error parsing JSON snapshot: {e}") from e
    return parse_snapshot(data)


def dumps(individuals: List[Individual], indent: int = 2) -> str:
    return json.dumps([individual_to_record(p) for p in individuals],
                      ensure_ascii=False, indent=indent)


def load_snapshot(path: Union[str, Path]) -> List[Individual]:
    """Read a pedigree.json file"""
    with open(path, 'r', encoding='utf-8') as f:
        return loads(f.read())


def save_snapshot(individuals: List[Individual], path: Union[str, Path]):
    """Write a pedigree.json file"""
    with open(path, 'w', encoding='utf-8') as f:
        f.write(dumps(individuals))


# ============================================================
# Sample pedigree: one couple, three children
# ============================================================
SAMPLE_RECORDS: List[Dict[str, Any]] = [
    {'id': 'p1', 'name': 'Mother', 'gender': 'female', 'status': 'unaffected',
     'isDeceased': False, 'isProband': False, 'x': 300, 'y': 100,
     'parents': [], 'partners': ['p2']},
    {'id': 'p2', 'name': 'Father', 'gender': 'male', 'status': 'unaffected',
     'isDeceased': False, 'isProband': False, 'x': 410, 'y': 100,
     'parents': [], 'partners': ['p1']},
    {'id': 'p3', 'name': 'Son 1', 'gender': 'male', 'status': 'unaffected',
     'isDeceased': False, 'isProband': False, 'x': 230, 'y': 280,
     'parents': ['p1', 'p2'], 'partners': []},
    {'id': 'p4', 'name': 'Son 2', 'gender': 'male', 'status': 'unaffected',
     'isDeceased': False, 'isProband': False, 'x': 355, 'y': 280,
     'parents': ['p1', 'p2'], 'partners': []},
    {'id': 'p5', 'name': 'Daughter', 'gender': 'female', 'status': 'unaffected',
     'isDeceased': False, 'isProband': False, 'x': 480, 'y': 280,
     'parents': ['p1', 'p2'], 'partners': []},
]


def sample_pedigree() -> List[Individual]:
    """Fresh copy of the bundled sample"""
    return parse_snapshot(SAMPLE_RECORDS)
