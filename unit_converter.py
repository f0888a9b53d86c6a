"""
Unit conversion tables and helpers.

Every category lists its units with the factor that converts one of that unit
into the category's base unit (rate 1). A conversion goes through the base
unit: value * rate_from / rate_to. Temperature is affine, so it pivots on
Celsius instead.
"""
import logging
import math
import re
from collections import namedtuple

from errors import InvalidInput, UnknownUnit

logger = logging.getLogger(__name__)

Unit = namedtuple("Unit", ["id", "name", "rate"])
UnitCategory = namedtuple("UnitCategory", ["id", "name", "base_unit", "units"])

TEMPERATURE = "temperature"
TEMPERATURE_DIGITS = 5
LINEAR_DIGITS = 8
COMMON_DIGITS = 6

UNIT_CATEGORIES = (
    UnitCategory("length", "Length", "m", (
        Unit("mm", "Millimeter (mm)", 0.001),
        Unit("cm", "Centimeter (cm)", 0.01),
        Unit("m", "Meter (m)", 1),
        Unit("km", "Kilometer (km)", 1000),
        Unit("in", "Inch (in)", 0.0254),
        Unit("ft", "Foot (ft)", 0.3048),
        Unit("yd", "Yard (yd)", 0.9144),
        Unit("mi", "Mile (mi)", 1609.344),
    )),
    UnitCategory("weight", "Weight", "kg", (
        Unit("mg", "Milligram (mg)", 0.000001),
        Unit("g", "Gram (g)", 0.001),
        Unit("kg", "Kilogram (kg)", 1),
        Unit("t", "Metric Ton (t)", 1000),
        Unit("oz", "Ounce (oz)", 0.028349523125),
        Unit("lb", "Pound (lb)", 0.45359237),
        Unit("st", "Stone (st)", 6.35029318),
    )),
    UnitCategory("volume", "Volume", "l", (
        Unit("ml", "Milliliter (ml)", 0.001),
        Unit("cl", "Centiliter (cl)", 0.01),
        Unit("l", "Liter (l)", 1),
        Unit("m3", "Cubic Meter (m³)", 1000),
        Unit("pt", "Pint (pt)", 0.473176473),
        Unit("qt", "Quart (qt)", 0.946352946),
        Unit("gal", "Gallon (gal)", 3.78541178),
    )),
    # Rates are unused here, see convert_temperature().
    UnitCategory(TEMPERATURE, "Temperature", "c", (
        Unit("c", "Celsius (°C)", 1),
        Unit("f", "Fahrenheit (°F)", 1),
        Unit("k", "Kelvin (K)", 1),
    )),
    UnitCategory("time", "Time", "s", (
        Unit("ms", "Millisecond (ms)", 0.001),
        Unit("s", "Second (s)", 1),
        Unit("min", "Minute (min)", 60),
        Unit("h", "Hour (h)", 3600),
        Unit("d", "Day (d)", 86400),
        Unit("wk", "Week (wk)", 604800),
        Unit("mo", "Month (30 days)", 2592000),
        Unit("yr", "Year (365 days)", 31536000),
    )),
    UnitCategory("area", "Area", "m2", (
        Unit("mm2", "Square Millimeter (mm²)", 0.000001),
        Unit("cm2", "Square Centimeter (cm²)", 0.0001),
        Unit("m2", "Square Meter (m²)", 1),
        Unit("ha", "Hectare (ha)", 10000),
        Unit("km2", "Square Kilometer (km²)", 1000000),
        Unit("in2", "Square Inch (in²)", 0.00064516),
        Unit("ft2", "Square Foot (ft²)", 0.09290304),
        Unit("ac", "Acre (ac)", 4046.8564224),
        Unit("mi2", "Square Mile (mi²)", 2589988.110336),
    )),
    UnitCategory("speed", "Speed", "mps", (
        Unit("mps", "Meters/Second (m/s)", 1),
        Unit("kmh", "Kilometers/Hour (km/h)", 0.277777778),
        Unit("mph", "Miles/Hour (mph)", 0.44704),
        Unit("fps", "Feet/Second (ft/s)", 0.3048),
        Unit("kn", "Knot (kn)", 0.514444444),
    )),
    UnitCategory("data", "Data", "b", (
        Unit("b", "Bit (b)", 1),
        Unit("B", "Byte (B)", 8),
        Unit("KB", "Kilobyte (KB)", 8 * 1024),
        Unit("MB", "Megabyte (MB)", 8 * 1024 ** 2),
        Unit("GB", "Gigabyte (GB)", 8 * 1024 ** 3),
        Unit("TB", "Terabyte (TB)", 8 * 1024 ** 4),
    )),
)

_CATEGORIES_BY_ID = {category.id: category for category in UNIT_CATEGORIES}
_SYMBOL_PATTERN = re.compile(r"\(([^)]*)\)")


def get_category(category_id):
    try:
        return _CATEGORIES_BY_ID[category_id]
    except KeyError:
        raise UnknownUnit(f"Unknown unit category: {category_id!r}", unit_id=category_id) from None

def get_unit(category, unit_id):
    if isinstance(category, str):
        category = get_category(category)
    for unit in category.units:
        if unit.id == unit_id:
            return unit
    raise UnknownUnit(f"Unknown {category.id} unit: {unit_id!r}", unit_id=unit_id)

def default_units(category_id):
    """
    The (from, to) pair a category starts with: its first two units.
    """
    units = get_category(category_id).units
    return units[0].id, units[1].id

def unit_symbol(unit):
    """
    'Kilometer (km)' -> 'km'. Falls back to the unit id.
    """
    match = _SYMBOL_PATTERN.search(unit.name)
    return match.group(1) if match else unit.id

def parse_value(value):
    """
    Accept a number or numeric string and return it as a finite float.
    """
    if isinstance(value, str):
        value = value.strip()
    if value is None or value == "" or isinstance(value, bool):
        raise InvalidInput(f"Not a number: {value!r}", value=value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidInput(f"Not a number: {value!r}", value=value) from None
    if not math.isfinite(number):
        raise InvalidInput(f"Not a finite number: {value!r}", value=value)
    return number

def convert_temperature(value, from_unit, to_unit):
    category = get_category(TEMPERATURE)
    get_unit(category, from_unit)
    get_unit(category, to_unit)

    if from_unit == "f":
        celsius = (value - 32) * 5 / 9
    elif from_unit == "k":
        celsius = value - 273.15
    else:
        celsius = value

    if to_unit == "f":
        return celsius * 9 / 5 + 32
    if to_unit == "k":
        return celsius + 273.15
    return celsius

def convert(value, from_unit, to_unit, category="length"):
    """
    Convert value between two units of the same category.

    Raises InvalidInput when value is not a finite number and UnknownUnit
    when the category or either unit does not exist.
    """
    number = parse_value(value)
    if category == TEMPERATURE:
        return convert_temperature(number, from_unit, to_unit)

    units = get_category(category)
    source = get_unit(units, from_unit)
    target = get_unit(units, to_unit)
    return number * source.rate / target.rate

def format_result(value, digits=LINEAR_DIGITS):
    """
    Fixed-point text with trailing zeros (and a bare trailing dot) removed.
    """
    text = f"{value:.{digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text

def convert_display(value, from_unit, to_unit, category="length"):
    """
    Conversion result as text for an output field.

    Non-numeric input clears the field: the result is an empty string rather
    than an error.
    """
    try:
        result = convert(value, from_unit, to_unit, category)
    except InvalidInput as e:
        logger.debug("Clearing %s conversion result: %s", category, e)
        return ""
    digits = TEMPERATURE_DIGITS if category == TEMPERATURE else LINEAR_DIGITS
    return format_result(result, digits)

def common_conversions(category_id, count=4):
    """
    Reference lines for a category: how much of its first unit one of each
    of the first `count` units is worth.

    Returns a list of (from_symbol, amount_text, to_symbol).
    """
    category = get_category(category_id)
    first = category.units[0]
    rows = []
    for unit in category.units[:count]:
        amount = convert(1, unit.id, first.id, category.id)
        rows.append((unit_symbol(unit), format_result(amount, COMMON_DIGITS), unit_symbol(first)))
    return rows
