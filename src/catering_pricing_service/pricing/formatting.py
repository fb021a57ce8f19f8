"""Minor-unit to display conversion.

These are the only functions that turn an amount in cents into something
else. Their outputs are for display and serialization and are never fed back
into pricing arithmetic.
"""

from decimal import Decimal

CURRENCY_SYMBOL = "€"
MINOR_UNITS_PER_MAJOR = 100


def _check_minor_units(minor_units: int) -> None:
    # bool is an int subclass; Decimal, float and str are refused outright
    if isinstance(minor_units, bool) or not isinstance(minor_units, int):
        raise TypeError(
            f"Amount must be an integer number of cents, got {type(minor_units).__name__}"
        )
    if minor_units < 0:
        raise ValueError(f"Amount must be non-negative, got {minor_units}")


def format_minor_units(minor_units: int) -> str:
    """Format an amount in cents as a euro string, e.g. 15640 -> "€156.40".

    Raises:
        TypeError: If the amount is not an int
        ValueError: If the amount is negative
    """
    _check_minor_units(minor_units)
    major, minor = divmod(minor_units, MINOR_UNITS_PER_MAJOR)
    return f"{CURRENCY_SYMBOL}{major}.{minor:02d}"


def to_major_units(minor_units: int) -> Decimal:
    """Convert an amount in cents to an exact Decimal in euros for serialization."""
    _check_minor_units(minor_units)
    return (Decimal(minor_units) / MINOR_UNITS_PER_MAJOR).quantize(Decimal("0.01"))
