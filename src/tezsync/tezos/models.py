#!/usr/bin/env python3
"""
TzKT Domain Models

Type-safe models of the raw records returned by the TzKT indexer API.
Field names follow the API (camelCase in JSON, snake_case here); party
objects such as ``{"address": "tz1..."}`` are flattened to the address.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class TzktOperationKind(Enum):
    """Operation kinds the classifier understands."""

    TRANSACTION = "transaction"
    DELEGATION = "delegation"
    REVEAL = "reveal"
    MIGRATION = "migration"
    ORIGINATION = "origination"
    ACTIVATION = "activation"

    @classmethod
    def parse(cls, value: str | None) -> "TzktOperationKind | None":
        """Return the kind for a TzKT ``type`` string, None if unsupported."""
        try:
            return cls(value)
        except ValueError:
            return None


def _address(party: Any) -> str | None:
    """Extract the address from a TzKT party object."""
    if isinstance(party, dict):
        return party.get("address")
    return party


@dataclass(frozen=True)
class TzktAccount:
    """
    TzKT account from ``/v1/accounts/{address}``.

    ``type`` is "empty" for never-used addresses and "user" for implicit
    accounts; contracts and bakers report other values.
    """

    type: str
    address: str | None = None
    balance: int = 0
    revealed: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TzktAccount":
        """
        Create TzktAccount from API dict.

        Args:
            data: Dictionary from TzKT accounts endpoint

        Returns:
            TzktAccount instance
        """
        return cls(
            type=data["type"],
            address=data.get("address"),
            balance=data.get("balance", 0),
            revealed=data.get("revealed", False),
        )


@dataclass(frozen=True)
class TzktOperation:
    """
    Raw operation from ``/v1/accounts/{address}/operations``.

    Only ``type`` and ``hash`` are always present; every other field depends
    on the operation kind. Amounts are integer mutez.
    """

    type: str
    hash: str
    id: int | None = None
    status: str | None = None
    level: int | None = None
    block: str | None = None
    timestamp: str | None = None

    # Parties
    initiator: str | None = None
    sender: str | None = None
    target: str | None = None

    # Transaction amount and fees
    amount: int | None = None
    baker_fee: int | None = None
    allocation_fee: int | None = None
    storage_fee: int | None = None

    # Kind-specific fields
    new_delegate: str | None = None
    balance_change: int | None = None
    contract_balance: int | None = None
    originated_contract: str | None = None
    balance: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TzktOperation":
        """
        Create TzktOperation from API dict.

        Args:
            data: One item of the TzKT operations list

        Returns:
            TzktOperation instance; a missing ``type`` parses as the
            unsupported kind ""
        """
        return cls(
            type=data.get("type") or "",
            hash=data.get("hash") or "",
            id=data.get("id"),
            status=data.get("status"),
            level=data.get("level"),
            block=data.get("block"),
            timestamp=data.get("timestamp"),
            initiator=_address(data.get("initiator")),
            sender=_address(data.get("sender")),
            target=_address(data.get("target")),
            amount=data.get("amount"),
            baker_fee=data.get("bakerFee"),
            allocation_fee=data.get("allocationFee"),
            storage_fee=data.get("storageFee"),
            new_delegate=_address(data.get("newDelegate")),
            balance_change=data.get("balanceChange"),
            contract_balance=data.get("contractBalance"),
            originated_contract=_address(data.get("originatedContract")),
            balance=data.get("balance"),
        )

    @property
    def kind(self) -> TzktOperationKind | None:
        return TzktOperationKind.parse(self.type)

    @property
    def has_failed(self) -> bool:
        """True unless the operation was applied (no status counts as applied)."""
        return bool(self.status) and self.status != "applied"
