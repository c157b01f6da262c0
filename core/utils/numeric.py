"""Numeric utilities for price representation."""

from decimal import Decimal, getcontext
from typing import Any, Union

# Set precision for price aggregation
getcontext().prec = 28

PRICE_TYPES = ("decimal", "float")


def D(x) -> Decimal:
    """
    Robust Decimal conversion for ints/floats/strings/Decimals.

    Avoids binary floating-point artifacts by converting floats to strings first.

    Args:
        x: Value to convert (int, float, str, or Decimal)

    Returns:
        Decimal: Converted value

    Raises:
        TypeError: If type is not supported
    """
    if isinstance(x, Decimal):
        return x
    if isinstance(x, bool):
        raise TypeError(f"Unsupported numeric type: {type(x)}")
    if isinstance(x, int):
        return Decimal(x)
    if isinstance(x, str):
        return Decimal(x.strip())
    if isinstance(x, float):
        # Convert float to string first to avoid binary FP artifacts
        return Decimal(str(x))
    raise TypeError(f"Unsupported numeric type: {type(x)}")


def to_price(x: Any, price_type: str = "decimal") -> Union[Decimal, float]:
    """
    Convert a raw value to the configured price type.

    Args:
        x: Raw price (int, float, str, or Decimal)
        price_type: "decimal" or "float"

    Raises:
        ValueError: If price_type is unknown
    """
    if price_type == "decimal":
        return D(x)
    if price_type == "float":
        return float(x)
    raise ValueError(f"Unknown price type: {price_type}")


def set_precision(precision: int) -> None:
    """Set the Decimal context precision used for price arithmetic."""
    getcontext().prec = precision
