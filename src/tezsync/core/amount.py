#!/usr/bin/env python3
"""
Amount Primitive Type

Immutable Tezos value wrapper holding an exact Decimal count of mutez.
Used for operation values, fees and balances. Arithmetic runs in
``EXACT_CONTEXT`` so sums of arbitrarily large values are never rounded.
"""

from dataclasses import dataclass
from decimal import Decimal

from .currency import (
    EXACT_CONTEXT,
    MutezLike,
    format_mutez,
    mutez_to_tez_str,
    parse_tez_to_mutez,
    to_mutez,
)


@dataclass(frozen=True)
class Amount:
    """
    Immutable amount in mutez.

    Supports signed values (a migration balance change can be negative) but
    operation values and fees produced by the classifier are never negative.

    Examples:
        >>> value = Amount.from_mutez(100)
        >>> fee = Amount.from_mutez("1")
        >>> (value + fee).to_mutez()
        Decimal('101')

        >>> str(Amount.from_tez("1.5"))
        '1.500000 XTZ'

        >>> Amount.from_mutez(-42).abs()
        Amount(mutez=Decimal('42'))
    """

    mutez: Decimal

    @classmethod
    def from_mutez(cls, mutez: MutezLike) -> "Amount":
        """
        Create Amount from an indexer mutez value.

        Args:
            mutez: int, numeric string or Decimal; None means zero

        Returns:
            Amount object
        """
        return cls(mutez=to_mutez(mutez))

    @classmethod
    def from_tez(cls, tez: str) -> "Amount":
        """Parse from a tez string like '1.5' or '2 XTZ'."""
        return cls(mutez=parse_tez_to_mutez(tez))

    @classmethod
    def zero(cls) -> "Amount":
        """The zero amount."""
        return cls(mutez=Decimal(0))

    def to_mutez(self) -> Decimal:
        """Get value in mutez."""
        return self.mutez

    def to_tez_str(self) -> str:
        """Get value as a tez string without suffix."""
        return mutez_to_tez_str(self.mutez)

    def is_zero(self) -> bool:
        return self.mutez == 0

    def is_negative(self) -> bool:
        return self.mutez < 0

    def abs(self) -> "Amount":
        """Return absolute value of Amount."""
        return Amount(mutez=EXACT_CONTEXT.abs(self.mutez))

    def __add__(self, other: "Amount") -> "Amount":
        """Add two Amount objects."""
        return Amount(mutez=EXACT_CONTEXT.add(self.mutez, other.mutez))

    def __sub__(self, other: "Amount") -> "Amount":
        """Subtract two Amount objects."""
        return Amount(mutez=EXACT_CONTEXT.subtract(self.mutez, other.mutez))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Amount):
            return NotImplemented
        return self.mutez == other.mutez

    def __hash__(self) -> int:
        return hash(self.mutez)

    def __lt__(self, other: "Amount") -> bool:
        return self.mutez < other.mutez

    def __le__(self, other: "Amount") -> bool:
        return self.mutez <= other.mutez

    def __gt__(self, other: "Amount") -> bool:
        return self.mutez > other.mutez

    def __ge__(self, other: "Amount") -> bool:
        return self.mutez >= other.mutez

    def __str__(self) -> str:
        """Format as tez string."""
        return format_mutez(self.mutez)

    def __repr__(self) -> str:
        return f"Amount(mutez={self.mutez!r})"
