"""
Tests for the timeframe lookup table.
"""

import pytest

from tripslots.domain.timeframes import TIMEFRAME_WINDOWS, Timeframe


class TestTimeframeResolve:
    """Tests for Timeframe.resolve."""

    @pytest.mark.parametrize("value, expected", [
        ("morning", Timeframe.MORNING),
        ("Afternoon", Timeframe.AFTERNOON),
        (" EVENING ", Timeframe.EVENING),
        ("night", Timeframe.NIGHT),
        ("anytime", Timeframe.ANYTIME),
        (Timeframe.NIGHT, Timeframe.NIGHT),
    ])
    def test_known_names(self, value, expected):
        """Test known names resolve regardless of case and whitespace."""
        assert Timeframe.resolve(value) is expected

    @pytest.mark.parametrize("value", [None, "", "midnight-snack", "brunch"])
    def test_fallback_to_anytime(self, value):
        """Test missing and unknown names fall back to anytime."""
        assert Timeframe.resolve(value) is Timeframe.ANYTIME


class TestTimeframeWindows:
    """Tests for the window table."""

    def test_every_timeframe_has_windows(self):
        """Test the table covers the closed set of timeframes."""
        assert set(TIMEFRAME_WINDOWS) == set(Timeframe)

    def test_table_is_read_only(self):
        """Test the mapping cannot be modified."""
        with pytest.raises(TypeError):
            TIMEFRAME_WINDOWS[Timeframe.MORNING] = ()

    def test_declared_order(self):
        """Test windows keep their declared order."""
        assert [str(w) for w in TIMEFRAME_WINDOWS[Timeframe.AFTERNOON]] == [
            "12:00-18:00", "13:00-17:00", "14:00-18:00", "15:00-18:00",
        ]
        assert [str(w) for w in TIMEFRAME_WINDOWS[Timeframe.NIGHT]] == [
            "20:00-23:59", "21:00-23:59", "22:00-23:59",
        ]

    def test_unknown_uses_anytime_windows(self):
        """Test unknown timeframes use the anytime windows."""
        assert TIMEFRAME_WINDOWS[Timeframe.resolve("midnight-snack")] == TIMEFRAME_WINDOWS[Timeframe.ANYTIME]
        assert len(TIMEFRAME_WINDOWS[Timeframe.resolve(None)]) == 6
