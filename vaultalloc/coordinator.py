# SPDX-License-Identifier: MIT
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from vaultalloc.allocator.errors import AllocationError
from vaultalloc.allocator.sub_vault_allocator import plan_deposits, plan_exits
from vaultalloc.allocator.types import Allocation, plan_total
from vaultalloc.snapshot import VaultSnapshot
from vaultalloc.utils.config import AllocatorSettings
from vaultalloc.utils.log_utils import get_logger

ACTIONS = ("deposit", "exit")


class AllocationCoordinator:
    """
    Runs the allocator against a caller snapshot and shapes the result.

    The coordinator never executes a plan; it hands back the
    (vault, amount) list for the caller to apply atomically. Allocation
    errors propagate unchanged.
    """

    def __init__(self, settings: Optional[AllocatorSettings] = None):
        self.settings = settings or AllocatorSettings()
        self.log = get_logger("AllocationCoordinator", self.settings.log_level)
        get_logger("SubVaultAllocator", self.settings.log_level)

    # ---- Planning ----
    def plan_deposits(self, snapshot: VaultSnapshot, amount: int) -> List[Allocation]:
        try:
            plan = plan_deposits(amount, snapshot.sub_vaults, snapshot.ejecting_vault)
        except AllocationError as e:
            self.log.warning("Deposit of %d rejected: %s (%s)", amount, e.code, e)
            raise
        self._log_plan("deposit", amount, plan)
        return plan

    def plan_exits(self, snapshot: VaultSnapshot, amount: int) -> List[Allocation]:
        try:
            plan = plan_exits(
                amount,
                snapshot.sub_vaults,
                snapshot.balances,
                snapshot.ejecting_vault,
            )
        except AllocationError as e:
            self.log.warning("Exit of %d rejected: %s (%s)", amount, e.code, e)
            raise
        self._log_plan("exit", amount, plan)
        return plan

    def _log_plan(self, action: str, amount: int, plan: List[Allocation]) -> None:
        funded = sum(1 for a in plan if a.amount > 0)
        self.log.info(
            "Planned %s of %d across %d/%d sub-vaults", action, amount, funded, len(plan)
        )
        for a in plan:
            self.log.debug("  %s -> %d", a.vault, a.amount)

    # ---- Main step ----
    def run_once(self, action: str, snapshot: VaultSnapshot, amount: int) -> Dict[str, Any]:
        action = (action or "").lower()
        if action == "deposit":
            plan = self.plan_deposits(snapshot, amount)
        elif action == "exit":
            plan = self.plan_exits(snapshot, amount)
        else:
            raise ValueError(f"Unknown action: {action!r} (expected one of {ACTIONS})")

        return {
            "action": action,
            "amount": amount,
            "ejecting_vault": snapshot.ejecting_vault,
            "plan": [{"vault": a.vault, "amount": a.amount} for a in plan],
            "total": plan_total(plan),
        }

    def dumps(self, result: Dict[str, Any]) -> str:
        return json.dumps(result, indent=self.settings.indent or None)

    def write_plan(self, result: Dict[str, Any], path: Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            f.write(self.dumps(result))
            f.write("\n")
        self.log.info("Plan written to %s", path)
        return path
