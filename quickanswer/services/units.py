"""
Units Service - Category-aware unit conversion.

Every linear category converts through its base unit:
  length → meters, mass → grams, volume → liters,
  time → seconds, data → bytes (binary multiples)

Temperature is affine rather than linear, so it is converted separately
through Celsius. A conversion is only valid between two units of the same
category; anything else raises UnknownConversionError.
"""

from types import MappingProxyType
from typing import Optional

from rapidfuzz import fuzz, process

from quickanswer.search.errors import UnknownConversionError

LENGTH = MappingProxyType({
    "meters": 1,
    "kilometers": 1000,
    "centimeters": 0.01,
    "millimeters": 0.001,
    "miles": 1609.344,
    "feet": 0.3048,
    "inches": 0.0254,
    "yards": 0.9144,
})

MASS = MappingProxyType({
    "grams": 1,
    "kilograms": 1000,
    "milligrams": 0.001,
    "pounds": 453.592,
    "ounces": 28.3495,
    "tons": 907185,  # US short ton
    "tonnes": 1000000,
})

VOLUME = MappingProxyType({
    "liters": 1,
    "milliliters": 0.001,
    "gallons": 3.78541,
    "quarts": 0.946353,
    "pints": 0.473176,
    "cups": 0.236588,
})

TIME = MappingProxyType({
    "seconds": 1,
    "minutes": 60,
    "hours": 3600,
    "days": 86400,
    "weeks": 604800,
    "months": 2629746,  # mean Gregorian month
    "years": 31556952,  # mean Gregorian year
})

DATA = MappingProxyType({
    "bytes": 1,
    "kilobytes": 1024,
    "megabytes": 1048576,
    "gigabytes": 1073741824,
    "terabytes": 1099511627776,
})

# Searched in this order; the first table holding both units wins
CATEGORIES = (
    ("length", LENGTH),
    ("mass", MASS),
    ("volume", VOLUME),
    ("time", TIME),
    ("data", DATA),
)

TEMPERATURE_UNITS = frozenset({"celsius", "fahrenheit", "kelvin"})

UNIT_ALIASES = MappingProxyType({
    # Length
    "m": "meters",
    "meter": "meters",
    "metre": "meters",
    "metres": "meters",
    "km": "kilometers",
    "kilometer": "kilometers",
    "kilometre": "kilometers",
    "kilometres": "kilometers",
    "cm": "centimeters",
    "centimeter": "centimeters",
    "centimetre": "centimeters",
    "centimetres": "centimeters",
    "mm": "millimeters",
    "millimeter": "millimeters",
    "millimetre": "millimeters",
    "millimetres": "millimeters",
    "mi": "miles",
    "mile": "miles",
    "ft": "feet",
    "foot": "feet",
    "in": "inches",
    "inch": "inches",
    "yd": "yards",
    "yard": "yards",

    # Mass
    "g": "grams",
    "gram": "grams",
    "kg": "kilograms",
    "kilogram": "kilograms",
    "mg": "milligrams",
    "milligram": "milligrams",
    "lb": "pounds",
    "lbs": "pounds",
    "pound": "pounds",
    "oz": "ounces",
    "ounce": "ounces",
    "t": "tons",
    "ton": "tons",
    "tonne": "tonnes",

    # Temperature
    "c": "celsius",
    "°c": "celsius",
    "f": "fahrenheit",
    "°f": "fahrenheit",
    "k": "kelvin",
    "°k": "kelvin",

    # Volume
    "l": "liters",
    "liter": "liters",
    "litre": "liters",
    "litres": "liters",
    "ml": "milliliters",
    "milliliter": "milliliters",
    "millilitre": "milliliters",
    "millilitres": "milliliters",
    "gal": "gallons",
    "gallon": "gallons",
    "qt": "quarts",
    "quart": "quarts",
    "pt": "pints",
    "pint": "pints",
    "cup": "cups",

    # Time
    "s": "seconds",
    "sec": "seconds",
    "secs": "seconds",
    "second": "seconds",
    "min": "minutes",
    "mins": "minutes",
    "minute": "minutes",
    "h": "hours",
    "hr": "hours",
    "hrs": "hours",
    "hour": "hours",
    "d": "days",
    "day": "days",
    "wk": "weeks",
    "week": "weeks",
    "mo": "months",
    "month": "months",
    "yr": "years",
    "year": "years",

    # Data
    "b": "bytes",
    "byte": "bytes",
    "kb": "kilobytes",
    "kilobyte": "kilobytes",
    "mb": "megabytes",
    "megabyte": "megabytes",
    "gb": "gigabytes",
    "gigabyte": "gigabytes",
    "tb": "terabytes",
    "terabyte": "terabytes",
})


def normalize_unit(alias: str) -> str:
    """
    Map an abbreviation or synonym to its canonical unit name.

    Unknown names are returned lower-cased and stripped, unchanged otherwise.

    Example:
        normalize_unit("KM")         → "kilometers"
        normalize_unit("kilometres") → "kilometers"
        normalize_unit("furlongs")   → "furlongs"
    """
    unit = alias.strip().lower()
    return UNIT_ALIASES.get(unit, unit)


def category_of(unit: str) -> Optional[str]:
    """Return the category a unit belongs to, or None if it is unknown."""
    unit = normalize_unit(unit)
    if unit in TEMPERATURE_UNITS:
        return "temperature"
    for category, table in CATEGORIES:
        if unit in table:
            return category
    return None


def known_units() -> list[str]:
    """All canonical unit names, temperature included."""
    units = []
    for _category, table in CATEGORIES:
        units.extend(table)
    units.extend(sorted(TEMPERATURE_UNITS))
    return units


def suggest_unit(unit: str, score_cutoff: int = 80) -> Optional[str]:
    """
    Fuzzy-match an unrecognized unit against known names and aliases.

    Returns:
        The canonical name of the closest unit, or None if nothing is close.
    """
    unit = unit.strip().lower()
    if not unit:
        return None

    # alias or canonical name → canonical name
    choices = dict(UNIT_ALIASES)
    choices.update({name: name for name in known_units()})

    # match: (matched_string, score, index)
    match = process.extractOne(
        unit,
        list(choices),
        scorer=fuzz.ratio,
        score_cutoff=score_cutoff,
    )
    if match is None:
        return None
    return choices[match[0]]


def convert(value: float, from_unit: str, to_unit: str) -> float:
    """
    Convert a value between two units of the same category.

    Args:
        value: Amount in from_unit
        from_unit: Source unit, any alias accepted
        to_unit: Target unit, any alias accepted

    Returns:
        The converted amount

    Raises:
        UnknownConversionError: The units do not share a category
    """
    src = normalize_unit(from_unit)
    dst = normalize_unit(to_unit)

    if src == dst:
        return value

    if src in TEMPERATURE_UNITS and dst in TEMPERATURE_UNITS:
        return convert_temperature(value, src, dst)

    for _category, table in CATEGORIES:
        if src in table and dst in table:
            return value * table[src] / table[dst]

    raise UnknownConversionError(src, dst)


def convert_temperature(value: float, from_unit: str, to_unit: str) -> float:
    """Convert between celsius, fahrenheit and kelvin via Celsius."""
    if from_unit == "celsius":
        celsius = value
    elif from_unit == "fahrenheit":
        celsius = (value - 32) * 5 / 9
    elif from_unit == "kelvin":
        celsius = value - 273.15
    else:
        raise UnknownConversionError(from_unit, to_unit)

    if to_unit == "celsius":
        return celsius
    if to_unit == "fahrenheit":
        return celsius * 9 / 5 + 32
    if to_unit == "kelvin":
        return celsius + 273.15
    raise UnknownConversionError(from_unit, to_unit)
