#!/usr/bin/env python3
"""
Operation Merger

Combines the stable operations of an account with newly classified ones.
Shared by every account family; it only relies on the canonical Operation
id and date.
"""

import logging

from .models import Operation

logger = logging.getLogger(__name__)


def merge_operations(stable: list[Operation], new: list[Operation]) -> list[Operation]:
    """
    Merge newly fetched operations into the stable sequence.

    Operations already present in ``stable`` with identical content are
    dropped, operations whose content changed replace their stable
    counterpart, and the result is ordered most recent first. When nothing
    needs to change the ``stable`` list object itself is returned, so the
    merge is idempotent and callers can detect "no change" by identity.

    Args:
        stable: Previously accepted operations, most recent first
        new: Freshly classified operations in any order

    Returns:
        Merged operations, most recent first. Neither input is mutated.
    """
    if not new:
        return stable

    existing = {op.id: op for op in stable}

    # Later duplicates within the fetched batch win
    fetched: dict[str, Operation] = {}
    for op in new:
        fetched[op.id] = op

    to_add = [op for op_id, op in fetched.items() if existing.get(op_id) != op]
    if not to_add:
        return stable

    added_ids = {op.id for op in to_add}
    replaced = sum(1 for op_id in added_ids if op_id in existing)
    logger.debug(f"Merging {len(to_add) - replaced} new and {replaced} updated operations")

    merged = to_add + [op for op in stable if op.id not in added_ids]
    return sorted(merged, key=lambda op: op.date, reverse=True)
