"""Quantity parsing.

``parse_quantity`` accepts plain integers, numbers followed by one unit word
("50 food"), ``0x`` hex and scientific notation.  The value must be whole.
Anything else returns ``None``; a failed parse is never reported as ``0``.
"""

from __future__ import annotations

from decision_core.text import leading_number


def parse_quantity(text: str) -> int | None:
    """Parse *text* as a whole-number quantity.

    Example::

        parse_quantity("50")       == 50
        parse_quantity("50 food")  == 50
        parse_quantity("0x32")     == 50
        parse_quantity("5e1")      == 50
        parse_quantity("abc")      is None
        parse_quantity("2.5")      is None
    """
    value = leading_number(text)
    if value is None or not value.is_integer():
        return None
    return int(value)
