"""
Candle Normalization

Repairs raw caller candles into internally consistent OHLCV bars.
Never raises on a bad value: glitches are clamped, not rejected.
"""

import logging
import math
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, Optional

from suse.schemas.market import Candle

logger = logging.getLogger(__name__)

_PRICE_FIELDS = ("open", "high", "low", "close", "volume")


def _field(raw: Any, name: str) -> Any:
    """Read a field from a mapping or an attribute object."""
    if isinstance(raw, Mapping):
        return raw.get(name)
    return getattr(raw, name, None)


def _to_number(value: Any) -> float:
    """Coerce to a finite float; anything else becomes 0."""
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


# Epoch ms range a datetime can represent (years 1 to 9999)
MIN_EPOCH_MS = (
    (datetime.min.replace(tzinfo=timezone.utc) - datetime(1970, 1, 1, tzinfo=timezone.utc))
    // timedelta(milliseconds=1)
)
MAX_EPOCH_MS = (
    (datetime.max.replace(tzinfo=timezone.utc) - datetime(1970, 1, 1, tzinfo=timezone.utc))
    // timedelta(milliseconds=1)
)


def _datetime_to_ms(value: datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return int(value.timestamp() * 1000)


def _number_to_ms(number: float) -> Optional[int]:
    """Truncated epoch ms, or None when non-finite or out of datetime range."""
    if not math.isfinite(number):
        return None
    if not MIN_EPOCH_MS <= number <= MAX_EPOCH_MS:
        return None
    return int(number)


def _parse_epoch_ms(value: Any) -> Optional[int]:
    if isinstance(value, datetime):
        return _datetime_to_ms(value)

    if isinstance(value, bool):
        return None

    if isinstance(value, int):
        return value if MIN_EPOCH_MS <= value <= MAX_EPOCH_MS else None

    if isinstance(value, float):
        return _number_to_ms(value)

    if isinstance(value, str):
        text = value.strip()
        try:
            return _number_to_ms(float(text))
        except ValueError:
            pass
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return _datetime_to_ms(datetime.fromisoformat(text))
        except (ValueError, OverflowError):
            return None

    return None


def to_epoch_ms(value: Any) -> int:
    """
    Canonical epoch milliseconds for a numeric epoch or ISO-like date.

    Returns 0 for values that cannot be interpreted, including non-finite
    numbers and epochs outside the range a datetime can represent.
    """
    timestamp = _parse_epoch_ms(value)
    if timestamp is None:
        logger.warning(f"Unparseable candle timestamp {value!r}, using 0")
        return 0
    return timestamp


def normalize_candle(raw: Any) -> Candle:
    """Normalize a single candle. See normalize_candles."""
    open_ = max(_to_number(_field(raw, "open")), 0.0)
    high = max(_to_number(_field(raw, "high")), open_)
    low = min(max(_to_number(_field(raw, "low")), 0.0), open_)
    close = max(_to_number(_field(raw, "close")), 0.0)
    volume = max(_to_number(_field(raw, "volume")), 0.0)

    return Candle(
        open=open_,
        high=high,
        low=low,
        close=close,
        volume=volume,
        timestamp=to_epoch_ms(_field(raw, "timestamp")),
    )


def normalize_candles(candles: Iterable[Any]) -> list[Candle]:
    """
    Sanitize a candle sequence.

    - open, close, volume clamped to >= 0
    - high raised to at least open
    - low clamped to [0, open]
    - timestamp converted to epoch milliseconds

    Ordering and length are preserved; the input is not modified.
    Idempotent: normalizing the output again returns equal candles.
    """
    normalized: list[Candle] = []
    repaired = 0

    for index, raw in enumerate(candles):
        candle = normalize_candle(raw)
        changed = [
            name
            for name in _PRICE_FIELDS
            if _to_number(_field(raw, name)) != getattr(candle, name)
        ]
        if changed:
            repaired += 1
            logger.debug(f"Candle {index}: repaired {', '.join(changed)}")
        normalized.append(candle)

    if repaired:
        logger.info(f"Normalized {len(normalized)} candles, repaired {repaired}")

    return normalized
