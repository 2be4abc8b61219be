"""
Unit conversion shortcut: turn "<number> <unit> [to|in <unit>]" into equivalent values.

Responsibility: Pure lookup against a small built-in unit table. No I/O, no state.
Returns an empty list when the text is not a conversion so callers can fall back
to the computation service.
"""

import logging
import re
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Unit:
    """A unit within a family. base_value = (value + offset) * scale."""

    symbol: str
    family: str
    scale: float
    offset: float = 0.0

    def to_base(self, value: float) -> float:
        return (value + self.offset) * self.scale

    def from_base(self, value: float) -> float:
        return value / self.scale - self.offset


# Family order is the output order for conversions.
_UNITS: list[Unit] = [
    # length (base: metre)
    Unit("m", "length", 1.0),
    Unit("km", "length", 1000.0),
    Unit("cm", "length", 0.01),
    Unit("mm", "length", 0.001),
    Unit("mi", "length", 1609.344),
    Unit("yd", "length", 0.9144),
    Unit("ft", "length", 0.3048),
    Unit("in", "length", 0.0254),
    # mass (base: kilogram)
    Unit("kg", "mass", 1.0),
    Unit("g", "mass", 0.001),
    Unit("lb", "mass", 0.45359237),
    Unit("oz", "mass", 0.028349523125),
    # volume (base: litre)
    Unit("l", "volume", 1.0),
    Unit("ml", "volume", 0.001),
    Unit("gal", "volume", 3.785411784),
    Unit("qt", "volume", 0.946352946),
    Unit("cup", "volume", 0.2365882365),
    # speed (base: metre per second)
    Unit("m/s", "speed", 1.0),
    Unit("km/h", "speed", 1 / 3.6),
    Unit("mph", "speed", 0.44704),
    Unit("kn", "speed", 0.514444),
    # temperature (base: kelvin)
    Unit("°C", "temperature", 1.0, 273.15),
    Unit("°F", "temperature", 5 / 9, 459.67),
    Unit("K", "temperature", 1.0),
]

_BY_SYMBOL: dict[str, Unit] = {u.symbol: u for u in _UNITS}

_ALIASES: dict[str, str] = {
    "m": "m", "meter": "m", "meters": "m", "metre": "m", "metres": "m",
    "km": "km", "kilometer": "km", "kilometers": "km", "kilometre": "km", "kilometres": "km",
    "cm": "cm", "centimeter": "cm", "centimeters": "cm",
    "mm": "mm", "millimeter": "mm", "millimeters": "mm",
    "mi": "mi", "mile": "mi", "miles": "mi",
    "yd": "yd", "yard": "yd", "yards": "yd",
    "ft": "ft", "foot": "ft", "feet": "ft",
    "in": "in", "inch": "in", "inches": "in",
    "kg": "kg", "kilogram": "kg", "kilograms": "kg",
    "g": "g", "gram": "g", "grams": "g",
    "lb": "lb", "lbs": "lb", "pound": "lb", "pounds": "lb",
    "oz": "oz", "ounce": "oz", "ounces": "oz",
    "l": "l", "liter": "l", "liters": "l", "litre": "l", "litres": "l",
    "ml": "ml", "milliliter": "ml", "milliliters": "ml",
    "gal": "gal", "gallon": "gal", "gallons": "gal",
    "qt": "qt", "quart": "qt", "quarts": "qt",
    "cup": "cup", "cups": "cup",
    "m/s": "m/s", "mps": "m/s",
    "km/h": "km/h", "kmh": "km/h", "kph": "km/h",
    "mph": "mph",
    "kn": "kn", "knot": "kn", "knots": "kn",
    "c": "°C", "°c": "°C", "celsius": "°C",
    "f": "°F", "°f": "°F", "fahrenheit": "°F",
    "k": "K", "kelvin": "K",
}

_QUERY_RE = re.compile(
    r"^\s*(?P<value>[-+]?\d+(?:\.\d+)?)\s*(?P<unit>\S+?)(?:\s+(?:to|in)\s+(?P<target>\S+))?\s*$",
    re.IGNORECASE,
)


def _lookup(name: str | None) -> Unit | None:
    if not name:
        return None
    symbol = _ALIASES.get(name.strip().lower())
    return _BY_SYMBOL.get(symbol) if symbol else None


def _format(value: float, unit: Unit) -> str:
    """Round to 3 decimals and drop trailing zeros (1.609344 -> '1.609 km')."""
    number = f"{value:.3f}".rstrip("0").rstrip(".")
    if number in ("-0", ""):
        number = "0"
    return f"{number} {unit.symbol}"


def get_conversions(text: str) -> list[str]:
    """
    Convert text like "5 miles" or "100 f to c" into equivalent values.

    Without a target, returns the value in every other unit of the same family,
    in table order. With a target of the same family, returns just that one.
    Returns [] when the text is not a recognizable conversion.
    """
    match = _QUERY_RE.match(text or "")
    if not match:
        return []
    source = _lookup(match.group("unit"))
    if source is None:
        return []
    target_name = match.group("target")
    target = _lookup(target_name)
    if target_name and (target is None or target.family != source.family or target is source):
        return []

    base = source.to_base(float(match.group("value")))
    targets = [target] if target else [u for u in _UNITS if u.family == source.family and u is not source]
    out = [_format(u.from_base(base), u) for u in targets]
    logger.info("[units:get_conversions] IN  text=%r OUT conversions=%d", text, len(out))
    return out
