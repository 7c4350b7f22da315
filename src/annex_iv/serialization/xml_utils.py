"""XML escaping and single-element rendering."""

import math
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional

# Ampersand must come first so later entities are not escaped twice
XML_ENTITIES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)


def escape_xml(text: str) -> str:
    """Escape the five reserved XML characters."""
    for char, entity in XML_ENTITIES:
        text = text.replace(char, entity)
    return text


def format_number(value: float) -> str:
    """Render a float the way ECMAScript ``Number.prototype.toString`` does.

    Uses the shortest round-tripping digits. Plain notation is used for
    decimal exponents from -6 to 20, e.g. ``0.000001`` and ``1e-7``,
    ``212500000`` and ``1e+21``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    digits = "".join(map(str, digit_tuple)).rstrip("0")
    exponent += len(digit_tuple) - len(digits)
    # Decimal point sits after the first `point` digits
    point = len(digits) + exponent

    if len(digits) <= point <= 21:
        return sign + digits + "0" * (point - len(digits))
    if 0 < point <= 21:
        return sign + digits[:point] + "." + digits[point:]
    if -6 < point <= 0:
        return sign + "0." + "0" * -point + digits

    mantissa = digits[0] + ("." + digits[1:] if len(digits) > 1 else "")
    power = point - 1
    return f"{sign}{mantissa}e{'+' if power >= 0 else '-'}{abs(power)}"


def format_value(value: Any) -> str:
    """Stringify a scalar the way it appears in the report XML.

    Booleans render as ``true``/``false``, integral floats without a
    fractional part, enum members by value and dates in ISO form.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def format_attrs(attrs: Optional[Mapping[str, Any]]) -> str:
    if not attrs:
        return ""
    return " " + " ".join(
        f'{key}="{escape_xml(format_value(val))}"' for key, val in attrs.items()
    )


def tag(name: str, value: Any, attrs: Optional[Mapping[str, Any]] = None) -> str:
    """Render a single element.

    A ``None`` value yields a self-closing ``<name/>``; otherwise attribute
    values are escaped individually and the text content as a whole.
    """
    if value is None:
        return f"<{name}/>"
    return f"<{name}{format_attrs(attrs)}>{escape_xml(format_value(value))}</{name}>"
