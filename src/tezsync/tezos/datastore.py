#!/usr/bin/env python3
"""
Account Snapshot Store

Persists the AccountShape adopted by the CLI, one JSON file per address.
Synchronisation itself never touches this store; the caller loads the
previous shape, runs a sync and saves the result it decides to adopt.
"""

import logging
from datetime import datetime
from pathlib import Path

from ..core.json_utils import read_json, write_json
from ..core.models import AccountShape

logger = logging.getLogger(__name__)


class SnapshotError(Exception):
    """Raised when a stored snapshot cannot be read back."""


class AccountSnapshotStore:
    """DataStore for adopted account shapes."""

    def __init__(self, snapshot_dir: Path):
        """
        Initialize snapshot store.

        Args:
            snapshot_dir: Directory holding ``<address>.json`` snapshots
        """
        self.snapshot_dir = snapshot_dir

    def path_for(self, address: str) -> Path:
        return self.snapshot_dir / f"{address}.json"

    def exists(self, address: str) -> bool:
        """Check if a snapshot exists for the address."""
        return self.path_for(address).exists()

    def load(self, address: str) -> AccountShape | None:
        """
        Load the adopted shape of an address.

        Returns:
            The stored AccountShape, or None if no snapshot exists

        Raises:
            SnapshotError: If the snapshot file is unreadable or corrupt
        """
        path = self.path_for(address)
        if not path.exists():
            return None
        try:
            return AccountShape.from_dict(read_json(path))
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            raise SnapshotError(f"Corrupt snapshot {path}: {e}") from e

    def save(self, address: str, shape: AccountShape) -> Path:
        """Write the shape as the adopted snapshot of the address."""
        path = self.path_for(address)
        write_json(path, shape.to_dict())
        logger.debug(f"Saved snapshot for {address} to {path}")
        return path

    def last_modified(self, address: str) -> datetime | None:
        """Get timestamp of the address snapshot."""
        if not self.exists(address):
            return None
        return datetime.fromtimestamp(self.path_for(address).stat().st_mtime)

    def item_count(self, address: str) -> int | None:
        """Get count of operations in the address snapshot."""
        shape = self.load(address)
        if shape is None:
            return None
        return shape.operation_count

    def summary_text(self, address: str) -> str:
        """Get human-readable summary."""
        count = self.item_count(address)
        if count is None:
            return f"No snapshot for {address}"
        return f"Snapshot for {address}: {count} operations"
