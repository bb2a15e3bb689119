# SPDX-License-Identifier: MIT
"""
Sub-Vault Allocator
-------------------
Splits capital entering or leaving a vault across its sub-vaults.

- plan_deposits: even split, integer dust goes to the first eligible vault
- plan_exits:    capacity-bounded water-filling over the withdrawable balances

The ejecting vault (a sub-vault being phased out) never receives deposits
and is never asked to service exits. Both functions are pure; the caller
owns the balances snapshot and executes the returned plan.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from vaultalloc.allocator.errors import (
    EjectingVaultNotFoundError,
    EmptySubVaultsError,
    InsufficientCapacityError,
    InvalidBalancesError,
    RepeatedEjectingVaultError,
    ZeroAddressError,
)
from vaultalloc.allocator.types import (
    Allocation,
    VaultId,
    check_uint256,
    is_zero_address,
    zero_plan,
)

log = logging.getLogger("SubVaultAllocator")


def _find_ejecting_index(
    sub_vaults: Sequence[VaultId],
    ejecting_vault: Optional[VaultId],
) -> Optional[int]:
    """
    Scan sub-vaults in order and return the position of the ejecting vault.

    Fails on the first zero address or on a second match of the ejecting
    vault, whichever comes first in list order.
    """
    ejecting_index: Optional[int] = None
    for i, vault in enumerate(sub_vaults):
        if is_zero_address(vault):
            raise ZeroAddressError(f"sub-vault #{i} is the zero address")
        if ejecting_vault is not None and vault == ejecting_vault:
            if ejecting_index is not None:
                raise RepeatedEjectingVaultError(
                    f"ejecting vault {ejecting_vault} listed at #{ejecting_index} and #{i}"
                )
            ejecting_index = i

    if ejecting_vault is not None and ejecting_index is None:
        raise EjectingVaultNotFoundError(f"ejecting vault {ejecting_vault} is not a sub-vault")
    return ejecting_index


def plan_deposits(
    assets_to_deposit: int,
    sub_vaults: Sequence[VaultId],
    ejecting_vault: Optional[VaultId] = None,
) -> List[Allocation]:
    """
    Split ``assets_to_deposit`` evenly over the non-ejecting sub-vaults.

    The floor-division remainder is added to the first eligible vault in
    list order, so the plan always sums to exactly ``assets_to_deposit``.
    """
    check_uint256(assets_to_deposit, "assets_to_deposit")
    if assets_to_deposit == 0:
        return zero_plan(sub_vaults)

    if is_zero_address(ejecting_vault):
        ejecting_vault = None

    deposit_count = len(sub_vaults) - (1 if ejecting_vault is not None else 0)
    if deposit_count <= 0:
        raise EmptySubVaultsError("no sub-vault can receive a deposit")

    share, remainder = divmod(assets_to_deposit, deposit_count)
    ejecting_index = _find_ejecting_index(sub_vaults, ejecting_vault)

    plan: List[Allocation] = []
    for i, vault in enumerate(sub_vaults):
        if i == ejecting_index:
            plan.append(Allocation(vault, 0))
        elif remainder > 0:
            plan.append(Allocation(vault, share + remainder))
            remainder = 0
        else:
            plan.append(Allocation(vault, share))

    log.debug(
        "Deposit plan: assets=%d vaults=%d share=%d ejecting=%s",
        assets_to_deposit,
        len(sub_vaults),
        share,
        ejecting_vault,
    )
    return plan


def plan_exits(
    assets_to_exit: int,
    sub_vaults: Sequence[VaultId],
    balances: Sequence[int],
    ejecting_vault: Optional[VaultId] = None,
) -> List[Allocation]:
    """
    Withdraw ``assets_to_exit`` from the non-ejecting sub-vaults.

    Runs in rounds: each round offers every vault with headroom an equal
    cap (``remaining // eligible``, or the whole remainder once it drops
    below the number of eligible vaults). Vaults drained in a round drop
    out of the next one, so vaults with slack absorb what the others could
    not. Raises InsufficientCapacityError when the eligible balances cannot
    cover the request.
    """
    if len(balances) != len(sub_vaults):
        raise InvalidBalancesError(
            f"got {len(balances)} balances for {len(sub_vaults)} sub-vaults"
        )
    check_uint256(assets_to_exit, "assets_to_exit")
    for i, balance in enumerate(balances):
        check_uint256(balance, f"balance #{i}")

    if assets_to_exit == 0:
        return zero_plan(sub_vaults)

    if is_zero_address(ejecting_vault):
        ejecting_vault = None
    ejecting_index = _find_ejecting_index(sub_vaults, ejecting_vault)

    eligible = len(sub_vaults) - (1 if ejecting_index is not None else 0)
    if eligible == 0:
        raise EmptySubVaultsError("no sub-vault can service an exit")

    working = list(balances)
    amounts = [0] * len(sub_vaults)
    remaining = assets_to_exit
    rounds = 0

    while True:
        if eligible == 0:
            raise InsufficientCapacityError(
                f"sub-vaults are {remaining} short of {assets_to_exit} requested"
            )

        # floor division would stall at 0 once demand < eligible vaults
        cap = remaining // eligible if remaining > eligible else remaining
        rounds += 1
        remaining_before, eligible_before = remaining, eligible
        eligible = 0

        for i in range(len(sub_vaults)):
            if i == ejecting_index:
                continue
            take = min(working[i], cap, remaining)
            amounts[i] += take
            remaining -= take
            if remaining == 0:
                log.debug(
                    "Exit plan: assets=%d vaults=%d rounds=%d ejecting=%s",
                    assets_to_exit,
                    len(sub_vaults),
                    rounds,
                    ejecting_vault,
                )
                return [Allocation(v, a) for v, a in zip(sub_vaults, amounts)]
            working[i] -= take
            if working[i] > 0:
                eligible += 1

        # each round must drain demand or saturate at least one vault
        if remaining >= remaining_before and eligible >= eligible_before:
            raise RuntimeError(
                f"exit planning stalled in round {rounds} "
                f"(remaining={remaining}, eligible={eligible})"
            )
