"""
Unit tests for the unit conversion shortcut: get_conversions.
"""

import pytest

from app.services.units import get_conversions


class TestGetConversions:
    """Tests for get_conversions()."""

    def test_not_a_conversion_returns_empty(self) -> None:
        assert get_conversions("") == []
        assert get_conversions("integrate x^2") == []
        assert get_conversions("5 parsecs") == []
        assert get_conversions("miles") == []

    def test_all_units_of_family_in_table_order(self) -> None:
        out = get_conversions("1 mi")
        assert out[0] == "1609.344 m"
        assert out[1] == "1.609 km"
        assert "5280 ft" in out
        assert "63360 in" in out
        assert not any(v.endswith(" mi") for v in out)

    def test_aliases_and_case_insensitive(self) -> None:
        assert get_conversions("2 Kilograms") == get_conversions("2 kg")
        assert "2000 g" in get_conversions("2 KG")

    def test_explicit_target(self) -> None:
        assert get_conversions("100 f to c") == ["37.778 °C"]
        assert get_conversions("0 celsius in fahrenheit") == ["32 °F"]
        assert get_conversions("12 in in cm") == ["30.48 cm"]

    def test_target_from_other_family_is_not_a_conversion(self) -> None:
        assert get_conversions("5 kg to km") == []
        assert get_conversions("5 kg to parsecs") == []

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("1 m/s to km/h", ["3.6 km/h"]),
            ("1 gal to l", ["3.785 l"]),
            ("-40 c to f", ["-40 °F"]),
            ("273.15 k to c", ["0 °C"]),
        ],
    )
    def test_known_values(self, text: str, expected: list[str]) -> None:
        assert get_conversions(text) == expected
