"""
Candle Normalizer

CONTRACT:
    Input:  arbitrary candle array (mappings or RawCandle models)
    Output: list[Candle]

Pure transform. Repairs malformed values instead of rejecting them.
"""

from suse.services.candles.normalizer import (
    normalize_candle,
    normalize_candles,
    to_epoch_ms,
)

__all__ = [
    "normalize_candle",
    "normalize_candles",
    "to_epoch_ms",
]
