"""
Unit tests for date and status display formatting.
"""
import pytest

from billed.bills.formatting import format_date, format_status


class TestFormatDate:
    """Tests for format_date() function."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2004-04-04", "4 Avr. 04"),
            ("2023-08-20", "20 Aoû. 23"),
            ("2001-01-01", "1 Jan. 01"),
            ("2002-02-02", "2 Fév. 02"),
            ("2019-06-30", "30 Jui. 19"),
            ("2019-07-14", "14 Jui. 19"),
            ("2020-12-31", "31 Déc. 20"),
            ("2000-05-09", "9 Mai. 00"),
        ],
    )
    @pytest.mark.unit
    def test_format_date(self, value, expected):
        assert format_date(value) == expected

    @pytest.mark.parametrize(
        "value",
        [
            "corruptedDate",
            "",
            "2023-13-01",
            "2023-02-30",
            "20/08/2023",
            "2023-08-20T10:00:00",
            None,
        ],
    )
    @pytest.mark.unit
    def test_format_date_rejects_malformed(self, value):
        with pytest.raises(ValueError):
            format_date(value)


class TestFormatStatus:
    """Tests for format_status() function."""

    @pytest.mark.parametrize(
        "status,expected",
        [
            ("pending", "En attente"),
            ("accepted", "Accepté"),
            ("refused", "Refusé"),
        ],
    )
    @pytest.mark.unit
    def test_known_statuses(self, status, expected):
        assert format_status(status) == expected

    @pytest.mark.unit
    def test_unknown_status_is_passed_through(self):
        assert format_status("archived") == "archived"
        assert format_status(None) is None
