# SPDX-License-Identifier: MIT
"""
Allocator package

Provides:
- plan_deposits / plan_exits over an ordered set of sub-vaults
- Allocation plan types and uint256 checks
- The AllocationError taxonomy
"""

from vaultalloc.allocator.errors import (
    AllocationError,
    EjectingVaultNotFoundError,
    EmptySubVaultsError,
    InsufficientCapacityError,
    InvalidAmountError,
    InvalidBalancesError,
    RepeatedEjectingVaultError,
    ZeroAddressError,
)
from vaultalloc.allocator.sub_vault_allocator import plan_deposits, plan_exits
from vaultalloc.allocator.types import (
    MAX_UINT256,
    ZERO_ADDRESS,
    Allocation,
    VaultId,
    check_uint256,
    is_zero_address,
    plan_pairs,
    plan_total,
)

__all__ = [
    "AllocationError",
    "EjectingVaultNotFoundError",
    "EmptySubVaultsError",
    "InsufficientCapacityError",
    "InvalidAmountError",
    "InvalidBalancesError",
    "RepeatedEjectingVaultError",
    "ZeroAddressError",
    "plan_deposits",
    "plan_exits",
    "MAX_UINT256",
    "ZERO_ADDRESS",
    "Allocation",
    "VaultId",
    "check_uint256",
    "is_zero_address",
    "plan_pairs",
    "plan_total",
]
