"""Runtime values of lox and the conversions the interpreter applies to them.

Values are plain Python objects: None is nil, bool is a boolean, float is a number and str is a string. Nothing else
ever flows through the interpreter. Note that bool is a subclass of int, not float, so isinstance(value, float) never
mistakes a boolean for a number.
"""

import math
from decimal import Decimal


def is_number(value):
    return isinstance(value, float)


def is_truthy(value):
    """Only nil and false are falsy; 0 and "" are truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(left, right):
    """Value equality without coercion: values of different types are never equal, and nil only equals nil."""
    if left is None:
        return right is None
    return type(left) is type(right) and left == right


def divide(left, right):
    """IEEE-754 division: dividing by zero gives an infinity, or NaN for 0 / 0."""
    try:
        return left / right
    except ZeroDivisionError:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)


def stringify(value):
    """Returns the text print writes for value. Numbers are written in positional notation (never with an exponent),
    using the shortest digits that round-trip, and integral numbers lose their '.0'.
    """
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"

        text = format(Decimal(repr(value)), "f")
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return text
    return value
