# SPDX-License-Identifier: MIT
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, List, Optional, Sequence, Tuple

from vaultalloc.allocator.errors import InvalidAmountError

VaultId = Hashable

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
MAX_UINT256 = 2**256 - 1


@dataclass(frozen=True)
class Allocation:
    vault: VaultId
    amount: int

    def as_tuple(self) -> Tuple[VaultId, int]:
        return self.vault, self.amount


def is_zero_address(vault: Optional[VaultId]) -> bool:
    """``None`` and the zero address both mean "no vault"."""
    return vault is None or vault == ZERO_ADDRESS


def check_uint256(value: Any, name: str = "amount") -> int:
    """Return ``value`` if it fits an unsigned 256-bit integer, else raise."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidAmountError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 0 or value > MAX_UINT256:
        raise InvalidAmountError(f"{name} {value} is outside the uint256 range")
    return value


def zero_plan(sub_vaults: Sequence[VaultId]) -> List[Allocation]:
    return [Allocation(vault, 0) for vault in sub_vaults]


def plan_total(plan: Sequence[Allocation]) -> int:
    return sum(a.amount for a in plan)


def plan_pairs(plan: Sequence[Allocation]) -> List[Tuple[VaultId, int]]:
    return [a.as_tuple() for a in plan]
