# SPDX-License-Identifier: MIT
"""
Allocation errors
-----------------
Every failure aborts the whole call; no partial plan is ever returned.
The ``code`` attribute carries the protocol-level error name.
"""

from __future__ import annotations


class AllocationError(ValueError):
    """Base class for allocator validation and capacity failures."""

    code = "AllocationError"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.code)


class ZeroAddressError(AllocationError):
    code = "ZeroAddress"


class EmptySubVaultsError(AllocationError):
    code = "EmptySubVaults"


class RepeatedEjectingVaultError(AllocationError):
    code = "RepeatedEjectingVault"


class EjectingVaultNotFoundError(AllocationError):
    code = "EjectingVaultNotFound"


class InsufficientCapacityError(AllocationError):
    code = "InsufficientCapacity"


class InvalidBalancesError(AllocationError):
    code = "InvalidBalances"


class InvalidAmountError(AllocationError):
    code = "InvalidAmount"
