"""
Serialization of weeks and hour type classifications.

The week list keeps the JSON shape of the original browser storage so old
export files keep importing:

    [{"id": "...", "name": "Week 1", "days": {"monday": {"individual": 2}, ...}}]
"""

import json
from typing import Any, Dict, List, Union

from pydantic import TypeAdapter, ValidationError

from .exceptions import SnapshotImportError
from .models import Category, WeekData

WEEK_LIST_ADAPTER = TypeAdapter(List[WeekData])
HOUR_TYPES_ADAPTER = TypeAdapter(Dict[str, Category])

Payload = Union[str, bytes, bytearray, List[Any]]


def _decode(payload: Payload, what: str) -> Any:
    """Turn JSON text into Python data, leaving parsed data untouched"""
    if isinstance(payload, (bytes, bytearray)):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SnapshotImportError(f"Invalid {what}", "not UTF-8 text") from e

    if isinstance(payload, str):
        try:
            return json.loads(payload)
        except json.JSONDecodeError as e:
            raise SnapshotImportError(f"Invalid {what}", f"malformed JSON ({e.msg} at line {e.lineno})") from e

    return payload


def _describe(error: ValidationError) -> str:
    """Compact one-line summary of a pydantic validation error"""
    parts = []
    for item in error.errors()[:5]:
        location = ".".join(str(part) for part in item["loc"])
        parts.append(f"{location}: {item['msg']}" if location else item["msg"])
    if error.error_count() > 5:
        parts.append(f"... {error.error_count() - 5} more")
    return "; ".join(parts)


def parse_weeks(payload: Payload) -> List[WeekData]:
    """
    Validate a week list.

    Args:
        payload: JSON text/bytes or already parsed data

    Returns:
        The validated weeks in their original order

    Raises:
        SnapshotImportError: malformed JSON, wrong shape or duplicate week ids
    """
    data = _decode(payload, "week data")
    if not isinstance(data, list):
        raise SnapshotImportError("Invalid week data", f"expected a list of weeks, got {type(data).__name__}")

    try:
        weeks = WEEK_LIST_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise SnapshotImportError("Invalid week data", _describe(e)) from e

    seen = set()
    for week in weeks:
        if week.id in seen:
            raise SnapshotImportError("Invalid week data", f"duplicate week id '{week.id}'")
        seen.add(week.id)

    return weeks


def dump_weeks(weeks: List[WeekData]) -> List[Dict[str, Any]]:
    """Weeks as plain JSON-able dicts"""
    return [week.model_dump(mode="json") for week in weeks]


def weeks_to_json(weeks: List[WeekData], indent: Union[int, None] = None) -> str:
    """Serialize weeks to JSON text (indent=2 for export files)"""
    return json.dumps(dump_weeks(weeks), indent=indent, ensure_ascii=False)


def parse_hour_types(payload: Payload) -> Dict[str, Category]:
    """
    Validate a stored classification mapping (hour type -> category).

    Raises:
        SnapshotImportError: malformed JSON, unknown category or an empty category
    """
    data = _decode(payload, "hour types")
    try:
        hour_types = HOUR_TYPES_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise SnapshotImportError("Invalid hour types", _describe(e)) from e

    for category in Category:
        if category not in hour_types.values():
            raise SnapshotImportError("Invalid hour types", f"no {category.value} hour type")
    if any(not name.strip() for name in hour_types):
        raise SnapshotImportError("Invalid hour types", "empty hour type name")

    return hour_types


def hour_types_to_json(hour_types: Dict[str, Category]) -> str:
    """Serialize a classification mapping, keeping its order"""
    return json.dumps({name: category.value for name, category in hour_types.items()}, ensure_ascii=False)
