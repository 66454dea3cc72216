#!/usr/bin/env python3
"""
Sub-account Reconciliation

Keeps object identity stable for derived sub-accounts (token accounts) that
did not change between two syncs, so downstream consumers can detect
changes with a cheap identity check, and reports what did change.
"""

import logging
from dataclasses import dataclass, field, fields
from typing import Any

from .models import TokenAccount

logger = logging.getLogger(__name__)


@dataclass
class SubAccountReconciliation:
    """Outcome of reconciling derived sub-accounts against the previous ones."""

    sub_accounts: list[TokenAccount]
    changes: list[str] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.changes)


def _shallow_equal(a: Any, b: Any) -> bool:
    return a is b or a == b


def diff_fields(previous: TokenAccount, derived: TokenAccount) -> list[str]:
    """
    Return the names of declared fields whose values differ.

    Fields are compared shallowly: the same object or equal values count as
    unchanged, nested structures are not walked.
    """
    if previous is derived:
        return []
    return [
        f.name
        for f in fields(previous)
        if not _shallow_equal(getattr(previous, f.name), getattr(derived, f.name))
    ]


def reconcile_sub_accounts(
    derived: list[TokenAccount],
    previous: list[TokenAccount] | None = None,
) -> SubAccountReconciliation:
    """
    Reconcile freshly derived sub-accounts with the previous sync's ones.

    Args:
        derived: Sub-accounts computed by this sync
        previous: Sub-accounts of the previous sync, or None on first sync

    Returns:
        SubAccountReconciliation whose ``sub_accounts`` reuse the previous
        objects for unchanged entries, and is the previous list object
        itself when nothing changed at all.
    """
    if previous is None:
        return SubAccountReconciliation(sub_accounts=list(derived))

    changes: list[str] = []
    if len(derived) != len(previous):
        changes.append("length differ")

    previous_by_id = {account.id: account for account in previous}
    sub_accounts: list[TokenAccount] = []

    for account in derived:
        existing = previous_by_id.get(account.id)
        if existing is None:
            changes.append(f"new token account {account.id}")
            sub_accounts.append(account)
            continue

        changed_fields = diff_fields(existing, account)
        if changed_fields:
            changes.extend(f"field {name} changed for {account.id}" for name in changed_fields)
            sub_accounts.append(account)
        else:
            sub_accounts.append(existing)

    if not changes:
        logger.info(f"incremental sync: {len(previous)} sub accounts have not changed")
        return SubAccountReconciliation(sub_accounts=previous)

    logger.info(f"incremental sync: sub accounts changed: {', '.join(changes)}")
    return SubAccountReconciliation(sub_accounts=sub_accounts, changes=changes)
