# SPDX-License-Identifier: MIT
# vaultalloc/__init__.py
"""
vaultalloc package initializer
- Loads the project .env once on import of the vaultalloc.* namespace
  (existing environment variables win).
- Re-exports the allocator entry points.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

__version__ = "1.0.0"

logger = logging.getLogger("VaultAllocEnv")

PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _auto_env_load() -> None:
    env_path = Path(os.getenv("VAULTALLOC_ENV_FILE") or PROJECT_ROOT / ".env")
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)
        logger.debug("Loaded environment from %s", env_path)


_auto_env_load()

from vaultalloc.allocator import (  # noqa: E402
    AllocationError,
    Allocation,
    ZERO_ADDRESS,
    MAX_UINT256,
    plan_deposits,
    plan_exits,
)

__all__ = [
    "AllocationError",
    "Allocation",
    "ZERO_ADDRESS",
    "MAX_UINT256",
    "plan_deposits",
    "plan_exits",
]
