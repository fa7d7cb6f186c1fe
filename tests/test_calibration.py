"""Tests for proxy-instrument calibration."""

import pytest

from quotescore.calibration import (
    DXY,
    GOLD,
    INDEX_CALIBRATIONS,
    TNX,
    VIX,
    all_calibrations,
    by_proxy,
    calibrate,
    to_commodity,
    to_index,
    to_indicator,
)


class TestCalibrate:
    def test_ratio(self):
        assert calibrate(6000.0, 600.0) == pytest.approx(10.0)

    def test_zero_proxy(self):
        with pytest.raises(ValueError):
            calibrate(6000.0, 0.0)

    def test_index_reference_close_round_trips(self):
        spx = INDEX_CALIBRATIONS[0]
        assert spx.target == "SPX"
        assert spx.convert(681.76) == pytest.approx(6827.41, abs=0.01)


class TestConversions:
    def test_tnx_inverse_fit(self):
        # 4.0 + (100 - 100) * 0.05
        assert TNX.convert(100.0) == pytest.approx(4.0)
        assert TNX.convert(90.0) == pytest.approx(4.5)

    def test_dxy(self):
        assert DXY.convert(27.0) == pytest.approx(108.0)

    def test_vix_from_uvxy(self):
        assert VIX.convert(30.0) == pytest.approx(20.0)

    def test_change_scaled_without_offset(self):
        assert TNX.convert_change(2.0) == pytest.approx(-0.1)
        assert GOLD.convert_change(None) == 0.0

    def test_by_proxy(self):
        assert by_proxy("GLD") is GOLD
        assert by_proxy("NOPE") is None

    def test_proxies_unique(self):
        proxies = [c.proxy for c in all_calibrations()]
        assert len(proxies) == len(set(proxies))


class TestBuilders:
    def test_index_flagged_approximate(self):
        spx = INDEX_CALIBRATIONS[0]
        idx = to_index(spx, 600.0, change=6.0, change_percent=1.0, previous_close=594.0)
        assert idx.symbol == "SPX"
        assert idx.approximate is True
        assert idx.proxy == "SPY"
        assert idx.change_percent == pytest.approx(1.0)
        assert idx.previous_close == pytest.approx(spx.convert(594.0))

    def test_indicator_vix_gets_status(self):
        ind = to_indicator(VIX, 45.0)
        assert ind.value == pytest.approx(30.0)
        assert ind.status == "normal"
        assert ind.approximate is True

    def test_indicator_offset_drops_percent(self):
        ind = to_indicator(TNX, 90.0, change=-1.0, change_percent=-1.1)
        assert ind.change_percent is None
        assert ind.unit == "%"
        assert ind.status is None

    def test_commodity(self):
        gc = to_commodity(GOLD, 240.0, change=2.4, change_percent=1.0)
        assert gc.symbol == "GC"
        assert gc.price == pytest.approx(2400.0)
        assert gc.change == pytest.approx(24.0)
        assert gc.proxy == "GLD"
