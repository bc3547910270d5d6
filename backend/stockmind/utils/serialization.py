"""Serialization utilities for converting models to API responses."""
from datetime import datetime
from typing import Any, Dict, Iterable, Optional


def serialize_datetime(value: Optional[datetime]) -> Optional[str]:
    """
    Serialize datetime to ISO format string.

    Args:
        value: Datetime value or None

    Returns:
        ISO format string or None
    """
    return value.isoformat() if value else None


def serialize_row(row: Any, columns: Iterable[str]) -> Dict[str, Any]:
    """
    Serialize a result row (mapping or model) into a plain dictionary.

    Datetimes become ISO strings; missing columns become None.
    """
    mapping = row._mapping if hasattr(row, "_mapping") else None
    result = {}
    for column in columns:
        value = mapping.get(column) if mapping is not None else getattr(row, column, None)
        result[column] = serialize_datetime(value) if isinstance(value, datetime) else value
    return result
