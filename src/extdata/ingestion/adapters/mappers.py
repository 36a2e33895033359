# extdata/ingestion/adapters/mappers.py
"""Field converters shared by the source adapters.

Every converter raises ConversionError on bad input; a bad field fails the
whole adapter call instead of being zeroed or skipped.
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from extdata.ingestion.exceptions import ConversionError, DecodeError

SPACE_DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"
NAIVE_ISO_FORMAT = "%Y-%m-%dT%H:%M:%S"


def require_list(payload: Any, key: str | None = None) -> list:
    """Return payload (or payload[key]) as a list, else DecodeError."""
    value = payload
    if key is not None:
        if not isinstance(payload, Mapping) or key not in payload:
            raise DecodeError(f"Response has no '{key}' member")
        value = payload[key]
    if not isinstance(value, list):
        raise DecodeError(
            f"Expected a JSON array{f' at {key!r}' if key else ''}, "
            f"got {type(value).__name__}"
        )
    return value


def require_mapping(payload: Any, key: str | None = None) -> Mapping:
    """Return payload (or payload[key]) as a JSON object, else DecodeError."""
    value = payload
    if key is not None:
        if not isinstance(payload, Mapping) or key not in payload:
            raise DecodeError(f"Response has no '{key}' member")
        value = payload[key]
    if not isinstance(value, Mapping):
        raise DecodeError(
            f"Expected a JSON object{f' at {key!r}' if key else ''}, "
            f"got {type(value).__name__}"
        )
    return value


def field(row: Any, key: Any) -> Any:
    """Look up a member of an object row or an index of an array row."""
    try:
        return row[key]
    except (KeyError, IndexError, TypeError) as e:
        raise DecodeError(f"Row is missing field {key!r}: {row!r}") from e


def to_float(value: Any, name: str) -> float:
    """Convert a JSON number or numeric string to float."""
    if isinstance(value, bool) or value is None:
        raise ConversionError(f"{name}: not a number: {value!r}", field=name, value=value)
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise ConversionError(
            f"{name}: cannot convert {value!r} to float", field=name, value=value
        ) from e


def to_int(value: Any, name: str) -> int:
    """Convert a JSON integer, integral float or integer string to int."""
    if isinstance(value, bool) or value is None:
        raise ConversionError(f"{name}: not an integer: {value!r}", field=name, value=value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ConversionError(
            f"{name}: {value!r} is not integral", field=name, value=value
        )
    try:
        return int(str(value).strip())
    except ValueError as e:
        raise ConversionError(
            f"{name}: cannot convert {value!r} to int", field=name, value=value
        ) from e


def to_text(value: Any, name: str) -> str:
    """Keep decimal-as-text fields as text; JSON null becomes empty."""
    if value is None:
        return ""
    if isinstance(value, bool) or isinstance(value, (list, dict)):
        raise ConversionError(
            f"{name}: cannot represent {value!r} as text", field=name, value=value
        )
    return str(value)


def unix_ms_to_seconds(value: Any, name: str = "time") -> int:
    """Millisecond epoch -> whole seconds."""
    return to_int(value, name) // 1000


def parse_utc(value: Any, fmt: str, name: str = "time") -> int:
    """Parse a zone-less timestamp in the given format as UTC."""
    if not isinstance(value, str):
        raise ConversionError(f"{name}: expected text, got {value!r}", field=name, value=value)
    try:
        parsed = datetime.strptime(value.strip()[:19], fmt)
    except ValueError as e:
        raise ConversionError(
            f"{name}: {value!r} does not match {fmt}", field=name, value=value
        ) from e
    return int(parsed.replace(tzinfo=UTC).timestamp())


def parse_rfc3339(value: Any, name: str = "time") -> int:
    """Parse an RFC3339 timestamp; a missing offset is taken as UTC."""
    if not isinstance(value, str):
        raise ConversionError(f"{name}: expected text, got {value!r}", field=name, value=value)
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError as e:
        raise ConversionError(
            f"{name}: {value!r} is not RFC3339", field=name, value=value
        ) from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return int(parsed.timestamp())
