# SPDX-License-Identifier: MIT
"""
Vault Snapshot
--------------
Reads the caller-side view of the sub-vaults (ids, withdrawable balances,
ejecting vault) from a JSON or YAML file.

Two layouts are accepted:

    sub_vaults: ["0xaa..", "0xbb.."]
    balances: [100, 250]
    ejecting_vault: "0xbb.."

or

    sub_vaults:
      - {vault: "0xaa..", balance: 100}
      - {vault: "0xbb..", balance: "250"}
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from vaultalloc.allocator.errors import InvalidAmountError
from vaultalloc.allocator.types import ZERO_ADDRESS, check_uint256
from vaultalloc.utils.config import AllocatorSettings

log = logging.getLogger("VaultSnapshot")


class SnapshotError(ValueError):
    code = "InvalidSnapshot"


@dataclass
class VaultSnapshot:
    sub_vaults: List[str]
    balances: List[int] = field(default_factory=list)
    ejecting_vault: Optional[str] = None

    def __post_init__(self):
        if self.balances and len(self.balances) != len(self.sub_vaults):
            raise SnapshotError(
                f"snapshot has {len(self.balances)} balances for {len(self.sub_vaults)} sub-vaults"
            )


def parse_vault_id(value: Any, settings: Optional[AllocatorSettings] = None) -> str:
    settings = settings or AllocatorSettings()
    if not isinstance(value, str):
        raise SnapshotError(f"vault id must be a string, got {type(value).__name__}")
    vault = value.strip()
    if settings.require_hex_addresses and not re.match(settings.address_pattern, vault):
        raise SnapshotError(f"invalid vault address: {value!r}")
    if settings.normalize_addresses:
        vault = vault.lower()
    return vault


def parse_amount(value: Any, name: str = "amount") -> int:
    """Accept an int, a decimal string or a 0x-prefixed hex string."""
    if isinstance(value, str):
        text = value.strip().replace("_", "")
        try:
            value = int(text, 16) if text.lower().startswith("0x") else int(text, 10)
        except ValueError:
            raise SnapshotError(f"{name} is not an integer: {value!r}") from None
    try:
        return check_uint256(value, name)
    except InvalidAmountError as e:
        raise SnapshotError(str(e)) from e


def snapshot_from_dict(raw: Dict[str, Any], settings: Optional[AllocatorSettings] = None) -> VaultSnapshot:
    if not isinstance(raw, dict):
        raise SnapshotError("snapshot must be a mapping")

    entries = raw.get("sub_vaults")
    if not isinstance(entries, list):
        raise SnapshotError("snapshot needs a 'sub_vaults' list")

    sub_vaults: List[str] = []
    balances: List[int] = []
    if entries and all(isinstance(e, dict) for e in entries):
        if "balances" in raw:
            raise SnapshotError("give balances either per entry or as a 'balances' list, not both")
        for i, entry in enumerate(entries):
            if "vault" not in entry:
                raise SnapshotError(f"sub_vaults[{i}] has no 'vault'")
            sub_vaults.append(parse_vault_id(entry["vault"], settings))
            balances.append(parse_amount(entry.get("balance", 0), f"sub_vaults[{i}].balance"))
    else:
        sub_vaults = [parse_vault_id(v, settings) for v in entries]
        raw_balances = raw.get("balances") or []
        if not isinstance(raw_balances, list):
            raise SnapshotError("'balances' must be a list")
        balances = [parse_amount(b, f"balances[{i}]") for i, b in enumerate(raw_balances)]

    ejecting = raw.get("ejecting_vault")
    ejecting_vault = parse_vault_id(ejecting, settings) if ejecting else None
    if ejecting_vault == ZERO_ADDRESS:
        ejecting_vault = None

    return VaultSnapshot(sub_vaults=sub_vaults, balances=balances, ejecting_vault=ejecting_vault)


def load_snapshot(path: Union[str, Path], settings: Optional[AllocatorSettings] = None) -> VaultSnapshot:
    p = Path(path)
    if not p.exists():
        raise SnapshotError(f"snapshot file not found: {p}")

    text = p.read_text(encoding="utf-8")
    try:
        if p.suffix.lower() in (".yaml", ".yml"):
            raw = yaml.safe_load(text)
        else:
            raw = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise SnapshotError(f"cannot parse snapshot {p}: {e}") from e

    snapshot = snapshot_from_dict(raw, settings)
    log.debug(
        "Loaded snapshot %s: %d sub-vaults, ejecting=%s",
        p,
        len(snapshot.sub_vaults),
        snapshot.ejecting_vault,
    )
    return snapshot
