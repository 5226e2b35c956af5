"""Normalization and display helpers for raw collection row values.

Collection rows are user-editable and may come from older versions of the
app, so every helper here degrades to a neutral value instead of raising.
"""

import math
from collections.abc import Mapping
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any

PLACEHOLDER = "—"


def parse_price(value: Any) -> float | None:
    """Parse a price from a number, Decimal or numeric string.

    Returns:
        The parsed finite value, or None if the value is absent or unparseable.
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, int | float | Decimal):
        try:
            parsed = float(value)
        except (InvalidOperation, OverflowError, ValueError):
            return None
    elif isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(parsed):
        return None
    return parsed


def coerce_price(value: Any) -> float:
    """Coerce a price to a finite non-negative number, 0.0 when unusable."""
    parsed = parse_price(value)
    if parsed is None or parsed < 0:
        return 0.0
    return parsed


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a timestamp from a datetime, date or ISO-8601 string.

    Returns:
        The parsed datetime, or None if the value is absent or unparseable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    return None


def genre_label(entry: Any) -> str | None:
    """Resolve a single genre entry (string, mapping or object) to its label."""
    if isinstance(entry, str):
        name = entry
    elif isinstance(entry, Mapping):
        name = entry.get("name")
    else:
        name = getattr(entry, "name", None)

    if not isinstance(name, str) or not name.strip():
        return None
    return name


def resolve_genre_labels(genres: Any) -> list[str]:
    """Map raw genre entries to labels, keeping source order.

    Entries without a resolvable name are dropped.
    """
    if not genres or isinstance(genres, str | Mapping):
        return []
    labels = []
    for entry in genres:
        label = genre_label(entry)
        if label is not None:
            labels.append(label)
    return labels


def format_currency(value: Any) -> str:
    """Format a positive amount as whole US dollars, e.g. "$1,235"."""
    amount = parse_price(value)
    if amount is None or amount <= 0:
        return PLACEHOLDER
    return f"${amount:,.0f}"


def format_date(value: Any) -> str | None:
    """Format a timestamp as e.g. "Mar 5, 2025", or None if unusable."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return None
    return f"{parsed:%b} {parsed.day}, {parsed.year}"
