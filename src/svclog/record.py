"""Log record assembly and JSON encoding.

This module turns a logging call into one newline-terminated JSON object:
- pairs variadic attribute arguments into fields
- lays the fixed fields over the attributes so they cannot be overridden
- encodes with a stringifying fallback so encoding never fails

Example output:
    {"port":8080,"time":"2024-01-15T10:30:45.123456+00:00","level":"INFO",
     "msg":"ready","file":"main.py:42","service":"api"}
"""

import json
import math
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Sequence

from svclog.levels import Level

BAD_KEY = "!BADKEY"

RESERVED_FIELDS = ("time", "level", "msg", "file", "service", "trace_id")

_PRIMITIVES = (str, bool, type(None))


def pair_attributes(args: Sequence[Any]) -> Dict[str, Any]:
    """Pair a flat argument sequence into attribute fields.

    Elements are consumed two at a time as (key, value). Keys must be
    strings. A non-string element in key position is stored under BAD_KEY
    and pairing resumes at the next element; so is a trailing element with
    no value. Repeated BAD_KEY values are collected into a list.

    Args:
        args: Alternating keys and values.

    Returns:
        Attribute fields in call order.
    """
    attrs: Dict[str, Any] = {}
    i = 0
    while i < len(args):
        key = args[i]
        if isinstance(key, str) and i + 1 < len(args):
            attrs[key] = args[i + 1]
            i += 2
            continue
        _add_bad_key(attrs, key)
        i += 1
    return attrs


def _add_bad_key(attrs: Dict[str, Any], value: Any) -> None:
    if BAD_KEY not in attrs:
        attrs[BAD_KEY] = value
        return
    existing = attrs[BAD_KEY]
    if isinstance(existing, _BadKeyValues):
        existing.append(value)
    else:
        attrs[BAD_KEY] = _BadKeyValues([existing, value])


class _BadKeyValues(list):
    """Several unpaired values collected under BAD_KEY."""


def merge_attributes(base: Dict[str, Any], extra: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two attribute sets, extra taking precedence.

    BAD_KEY values from both sides are kept together instead of the extra
    side replacing the base one.
    """
    merged = dict(base)
    if isinstance(merged.get(BAD_KEY), _BadKeyValues):
        merged[BAD_KEY] = _BadKeyValues(merged[BAD_KEY])
    for key, value in extra.items():
        if key != BAD_KEY:
            merged[key] = value
            continue
        values = value if isinstance(value, _BadKeyValues) else [value]
        for item in values:
            _add_bad_key(merged, item)
    return merged


def build_record(
    level: Level,
    msg: str,
    source: str,
    service: str,
    trace_id: Optional[str] = None,
    attrs: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Build the field set for one log record.

    Args:
        level: Record severity.
        msg: Caller message, unmodified.
        source: Call site as "<file>:<line>".
        service: Service name of the logger.
        trace_id: Trace identifier, omitted when empty or None.
        attrs: Caller attributes. Reserved names are overwritten.

    Returns:
        Dictionary with the record fields.
    """
    entry: Dict[str, Any] = dict(attrs) if attrs else {}
    for name in RESERVED_FIELDS:
        entry.pop(name, None)

    entry["time"] = _format_timestamp()
    entry["level"] = level.label
    entry["msg"] = msg
    entry["file"] = source
    entry["service"] = service
    if trace_id:
        entry["trace_id"] = trace_id

    return entry


def encode_record(entry: Dict[str, Any]) -> bytes:
    """Encode a record as one line of UTF-8 JSON.

    Values the encoder cannot represent are stringified. If the record as
    a whole still fails (non-finite floats, integers too long to print,
    circular references, non-string nested keys), each field is encoded on its own and the failing ones are
    replaced by their string form.

    Args:
        entry: Record fields.

    Returns:
        JSON object followed by a single newline.
    """
    try:
        text = _dumps(entry)
    except (TypeError, ValueError, RecursionError):
        try:
            text = _dumps({str(key): _safe_value(value) for key, value in entry.items()})
        except (TypeError, ValueError, RecursionError):
            text = _dumps({str(key): _json_serializer(value) for key, value in entry.items()})
    return (text + "\n").encode("utf-8", errors="replace")


def _dumps(obj: Any) -> str:
    return json.dumps(
        obj,
        default=_json_serializer,
        allow_nan=False,
        ensure_ascii=False,
        separators=(",", ":"),
    )


def _safe_value(value: Any) -> Any:
    if isinstance(value, _PRIMITIVES):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else str(value)
    try:
        _dumps(value)
        return value
    except (TypeError, ValueError, RecursionError):
        return _json_serializer(value)


def _json_serializer(obj: Any) -> str:
    """Serialize objects that aren't JSON-serializable.

    Args:
        obj: Object to serialize.

    Returns:
        String representation of the object.
    """
    try:
        return str(obj)
    except Exception:
        return f"<unserializable: {type(obj).__name__}>"


def _format_timestamp() -> str:
    """Current UTC time in ISO 8601 format with microseconds."""
    return datetime.now(tz=timezone.utc).isoformat(timespec="microseconds")
