"""Tests for axis label parsing and calibration."""

import pytest

from scalp_analyzer.config import ScalpConfig
from scalp_analyzer.errors import InsufficientTicksError
from scalp_analyzer.parsers.axis import calibrate, extract_price_ticks


class TestExtractPriceTicks:
    def test_out_of_band_rejected(self):
        """99999 sits above the band; the rest come back ascending."""
        assert extract_price_ticks("Price 24300 99999 24350.5") == [24300, 24350.5]

    def test_dedupe_and_sort(self):
        text = "24400\n24300\n24400\n24200"
        assert extract_price_ticks(text) == [24200, 24300, 24400]

    def test_short_numbers_ignored(self):
        assert extract_price_ticks("15m 1D 123 09:15") == []

    def test_band_is_exclusive(self):
        assert extract_price_ticks("5000 50000 5001") == [5001]

    def test_custom_band(self):
        text = "1850.5 1900 24300"
        assert extract_price_ticks(text, 1000, 2000) == [1850.5, 1900]

    def test_empty_text(self):
        assert extract_price_ticks("") == []


class TestCalibrate:
    def test_builds_mapping_for_height(self):
        m = calibrate("24000 24250 24500", 800)
        assert m.height == 800
        assert (m.min_price, m.max_price) == (24000, 24500)
        assert m.ticks == (24000, 24250, 24500)

    def test_one_tick_reports_count(self):
        with pytest.raises(InsufficientTicksError) as exc:
            calibrate("NIFTY 24300", 800)
        assert exc.value.count == 1
        assert "found 1" in str(exc.value)

    def test_no_ticks_reports_zero(self):
        with pytest.raises(InsufficientTicksError) as exc:
            calibrate("no numbers here", 800)
        assert exc.value.count == 0

    def test_uses_configured_band(self):
        cfg = ScalpConfig(min_tick_price=100, max_tick_price=3000)
        m = calibrate("1850.5 1900 24300", 400, cfg)
        assert m.ticks == (1850.5, 1900)
