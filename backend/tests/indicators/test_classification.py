"""
Unit tests for indicator state classification
"""

import pytest

from suse.schemas.indicators import (
    BandPosition,
    Interpretation,
    MarketTrend,
    RSIZone,
    Slope,
    VolatilityZone,
)
from suse.services.indicators.calculations import BollingerValues
from suse.services.indicators.classification import (
    classify_band_position,
    classify_rsi_zone,
    classify_slope,
    classify_trend,
    classify_volatility,
    interpret_rsi,
    interpret_volume,
    interpret_vwap,
    price_above,
)


class TestRSIZone:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (0, RSIZone.OVERSOLD),
            (29.99, RSIZone.OVERSOLD),
            (30, RSIZone.NEUTRAL),
            (50, RSIZone.NEUTRAL),
            (70, RSIZone.NEUTRAL),
            (70.01, RSIZone.OVERBOUGHT),
            (100, RSIZone.OVERBOUGHT),
        ],
    )
    def test_default_thresholds(self, value, expected):
        assert classify_rsi_zone(value) == expected

    def test_custom_thresholds(self):
        assert classify_rsi_zone(35, oversold=40, overbought=60) == RSIZone.OVERSOLD
        assert classify_rsi_zone(65, oversold=40, overbought=60) == RSIZone.OVERBOUGHT


class TestSlope:
    def test_rising_and_falling(self):
        assert classify_slope(55, 50) == Slope.RISING
        assert classify_slope(45, 50) == Slope.FALLING

    def test_within_tolerance_is_flat(self):
        assert classify_slope(50.005, 50, tolerance=0.01) == Slope.FLAT
        assert classify_slope(49.995, 50, tolerance=0.01) == Slope.FLAT

    def test_missing_previous_is_flat(self):
        assert classify_slope(80, None) == Slope.FLAT


class TestRSIInterpretation:
    def test_extreme_zones_read_as_reversals(self):
        assert interpret_rsi(RSIZone.OVERSOLD, Slope.FALLING) == Interpretation.BULLISH
        assert interpret_rsi(RSIZone.OVERBOUGHT, Slope.RISING) == Interpretation.BEARISH

    def test_neutral_zone_follows_slope(self):
        assert interpret_rsi(RSIZone.NEUTRAL, Slope.RISING) == Interpretation.BULLISH
        assert interpret_rsi(RSIZone.NEUTRAL, Slope.FALLING) == Interpretation.BEARISH
        assert interpret_rsi(RSIZone.NEUTRAL, Slope.FLAT) == Interpretation.NEUTRAL


class TestPriceRelation:
    def test_each_period_independent(self):
        relation = price_above(100, {20: 99, 50: 101, 200: 100})
        assert relation == {20: True, 50: False, 200: False}


class TestTrend:
    def test_above_all_is_bullish(self):
        assert classify_trend(110, [100, 95, 90], bandwidth=0.05) == MarketTrend.BULLISH

    def test_below_all_is_bearish(self):
        assert classify_trend(80, [100, 95, 90], bandwidth=0.05) == MarketTrend.BEARISH

    def test_mixed_is_lateral(self):
        assert classify_trend(96, [100, 95, 90], bandwidth=0.05) == MarketTrend.LATERAL

    def test_touching_an_ema_is_mixed(self):
        assert classify_trend(90, [80, 85, 90], bandwidth=0.05) == MarketTrend.LATERAL

    def test_high_volatility_overrides_alignment(self):
        assert (
            classify_trend(110, [100, 95, 90], bandwidth=0.2, volatility_threshold=0.1)
            == MarketTrend.HIGH_VOLATILITY
        )

    def test_threshold_is_exclusive(self):
        assert (
            classify_trend(110, [100, 95, 90], bandwidth=0.1, volatility_threshold=0.1)
            == MarketTrend.BULLISH
        )


class TestBandPosition:
    BANDS = BollingerValues(upper=110, middle=100, lower=90, bandwidth=0.2)

    @pytest.mark.parametrize(
        "close, expected",
        [
            (111, BandPosition.ABOVE_UPPER),
            (110, BandPosition.ABOVE_MIDDLE),
            (100, BandPosition.ABOVE_MIDDLE),
            (99, BandPosition.BELOW_MIDDLE),
            (90, BandPosition.BELOW_MIDDLE),
            (89, BandPosition.BELOW_LOWER),
        ],
    )
    def test_positions(self, close, expected):
        assert classify_band_position(close, self.BANDS) == expected


class TestVolume:
    @pytest.mark.parametrize(
        "ratio, expected",
        [
            (1.21, Interpretation.BULLISH),
            (1.2, Interpretation.NEUTRAL),
            (1.0, Interpretation.NEUTRAL),
            (0.8, Interpretation.NEUTRAL),
            (0.79, Interpretation.BEARISH),
        ],
    )
    def test_default_thresholds(self, ratio, expected):
        assert interpret_volume(ratio) == expected

    def test_custom_thresholds(self):
        assert interpret_volume(1.1, high_threshold=1.05) == Interpretation.BULLISH


class TestVWAPAndVolatility:
    def test_vwap_side(self):
        assert interpret_vwap(101, 100) == Interpretation.BULLISH
        assert interpret_vwap(99, 100) == Interpretation.BEARISH
        assert interpret_vwap(100, 100) == Interpretation.NEUTRAL

    @pytest.mark.parametrize(
        "atr_value, expected",
        [
            (0.5, VolatilityZone.LOW),
            (1.0, VolatilityZone.NORMAL),
            (3.0, VolatilityZone.HIGH),
            (4.0, VolatilityZone.EXTREME),
        ],
    )
    def test_volatility_zone_from_atr_percent(self, atr_value, expected):
        assert classify_volatility(atr_value, close=100) == expected

    def test_zero_close_is_low_volatility(self):
        assert classify_volatility(5, close=0) == VolatilityZone.LOW
