#!/usr/bin/env python3
"""
Tez Conversion and Formatting Utilities

All Tezos amounts handled by tezsync are integral counts of mutez held in
``decimal.Decimal`` so that arithmetic stays exact regardless of magnitude.

Unit Systems:
- The TzKT indexer reports amounts, fees and balances in mutez
- Display uses tez strings: 1 tez = 1,000,000 mutez

Key Principles:
- Never use floating-point arithmetic for amounts
- Parse indexer values (int, str or Decimal) into Decimal mutez once, at the edge
- Formatting is the only place where mutez become tez
"""

from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Context, Decimal, InvalidOperation
from typing import Union

MUTEZ_PER_TEZ = 1_000_000
TEZ_DECIMALS = 6

# Integer arithmetic in this context never rounds
EXACT_CONTEXT = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)

MutezLike = Union[int, str, Decimal, None]


def to_mutez(value: MutezLike) -> Decimal:
    """
    Convert an indexer-provided amount to Decimal mutez.

    Args:
        value: Integer, numeric string or Decimal amount in mutez. ``None``
               (a field missing from the indexer payload) is treated as zero.

    Returns:
        Amount as an integral Decimal

    Raises:
        ValueError: If the value is not a number or is not integral

    Example:
        to_mutez("1500000") -> Decimal("1500000")
    """
    if value is None:
        return Decimal(0)
    if isinstance(value, bool) or isinstance(value, float):
        raise ValueError(f"Refusing non-exact mutez value: {value!r}")

    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"Invalid mutez value: {value!r}") from e

    if not amount.is_finite() or amount != amount.to_integral_value():
        raise ValueError(f"Mutez value must be integral: {value!r}")
    return amount


def parse_tez_to_mutez(tez_str: str) -> Decimal:
    """
    Parse a tez string into mutez.

    Args:
        tez_str: String such as "1.5", "1,234.000001" or "2 XTZ"

    Returns:
        Amount in mutez

    Raises:
        ValueError: If the string is empty, malformed or has more than six decimals

    Examples:
        parse_tez_to_mutez("1.5") -> Decimal("1500000")
        parse_tez_to_mutez("0.000001") -> Decimal("1")
    """
    clean = tez_str.replace(",", "").replace("XTZ", "").replace("ꜩ", "").strip()
    if not clean:
        raise ValueError("Empty tez amount")

    try:
        tez = Decimal(clean)
    except InvalidOperation as e:
        raise ValueError(f"Invalid tez amount: {tez_str!r}") from e
    if not tez.is_finite():
        raise ValueError(f"Invalid tez amount: {tez_str!r}")

    mutez = EXACT_CONTEXT.multiply(tez, Decimal(MUTEZ_PER_TEZ))
    if mutez != mutez.to_integral_value():
        raise ValueError(f"Tez amount has more than {TEZ_DECIMALS} decimals: {tez_str!r}")
    return mutez.to_integral_value()


def mutez_to_tez_str(mutez: Decimal | int) -> str:
    """
    Format mutez as a tez string with exactly six decimals.

    Example:
        mutez_to_tez_str(1500000) -> "1.500000"
        mutez_to_tez_str(-1) -> "-0.000001"
    """
    mutez = Decimal(mutez)
    is_negative = mutez < 0
    tez, remainder = divmod(abs(int(mutez)), MUTEZ_PER_TEZ)
    formatted = f"{tez}.{remainder:0{TEZ_DECIMALS}d}"
    return f"-{formatted}" if is_negative else formatted


def format_mutez(mutez: Decimal | int) -> str:
    """Format mutez for display with the XTZ suffix."""
    return f"{mutez_to_tez_str(mutez)} XTZ"
