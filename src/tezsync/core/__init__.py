"""
Core Package

Chain-independent building blocks shared by every account family.

This package provides:
- Exact mutez arithmetic (Amount) and tez formatting
- Canonical operation, token account and account shape models
- The operation merger and the sub-account reconciler
- Bounded cursor pagination
- Configuration management and JSON helpers
"""

from .amount import Amount
from .config import (
    Config,
    Environment,
    IndexerConfig,
    get_config,
    get_data_dir,
    is_development,
    is_production,
    is_test,
    reload_config,
)
from .currency import format_mutez, mutez_to_tez_str, parse_tez_to_mutez, to_mutez
from .merge import merge_operations
from .models import (
    AccountShape,
    Operation,
    OperationType,
    TezosResources,
    TokenAccount,
    decode_operation_id,
    encode_operation_id,
)
from .pagination import MAX_PAGES, PageCollection, fetch_all_pages
from .reconcile import SubAccountReconciliation, diff_fields, reconcile_sub_accounts

__all__ = [
    "MAX_PAGES",
    "AccountShape",
    "Amount",
    # Configuration
    "Config",
    "Environment",
    "IndexerConfig",
    # Models
    "Operation",
    "OperationType",
    "PageCollection",
    "SubAccountReconciliation",
    "TezosResources",
    "TokenAccount",
    "decode_operation_id",
    "diff_fields",
    "encode_operation_id",
    "fetch_all_pages",
    # Currency utilities
    "format_mutez",
    "get_config",
    "get_data_dir",
    "is_development",
    "is_production",
    "is_test",
    "merge_operations",
    "mutez_to_tez_str",
    "parse_tez_to_mutez",
    "reconcile_sub_accounts",
    "reload_config",
    "to_mutez",
]
