# SPDX-License-Identifier: MIT
"""
vaultalloc command line

    vaultalloc deposit snapshot.json 1000000000000000000
    vaultalloc exit snapshot.yaml 0x0de0b6b3a7640000 --out plans/exit.json
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from vaultalloc.allocator.errors import AllocationError
from vaultalloc.coordinator import ACTIONS, AllocationCoordinator
from vaultalloc.snapshot import SnapshotError, load_snapshot, parse_amount
from vaultalloc.utils.config import load_settings
from vaultalloc.utils.log_utils import get_logger

EXIT_OK = 0
EXIT_REJECTED = 2

log = get_logger("vaultalloc.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vaultalloc",
        description="Plan deposits into or exits from a set of sub-vaults.",
    )
    parser.add_argument(
        "--config",
        "-c",
        default=None,
        help="Path to allocator YAML config (default: $VAULTALLOC_CONFIG or configs/allocator.yaml).",
    )
    parser.add_argument("action", choices=ACTIONS, help="Which plan to compute.")
    parser.add_argument("snapshot", help="JSON or YAML file with sub_vaults, balances, ejecting_vault.")
    parser.add_argument("amount", help="Assets to deposit or exit (decimal or 0x hex).")
    parser.add_argument("--out", "-o", default=None, help="Also write the plan JSON to this path.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    settings = load_settings(args.config)
    log.setLevel(settings.log_level)
    coordinator = AllocationCoordinator(settings)

    try:
        snapshot = load_snapshot(args.snapshot, settings)
        amount = parse_amount(args.amount)
        result = coordinator.run_once(args.action, snapshot, amount)
    except (AllocationError, SnapshotError) as e:
        log.error("%s rejected: %s", args.action, e)
        print(json.dumps({"error": e.code, "message": str(e)}), file=sys.stderr)
        return EXIT_REJECTED

    print(coordinator.dumps(result))
    if args.out:
        coordinator.write_plan(result, args.out)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
