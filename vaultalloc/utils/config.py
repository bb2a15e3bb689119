# SPDX-License-Identifier: MIT
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from vaultalloc.utils.config_validator import validate_allocator_config

log = logging.getLogger("AllocatorSettings")

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "configs" / "allocator.yaml"


@dataclass(frozen=True)
class AllocatorSettings:
    log_level: str = "INFO"

    # Address handling for snapshot files
    normalize_addresses: bool = True
    require_hex_addresses: bool = True
    address_pattern: str = r"^0x[0-9a-fA-F]{40}$"

    # JSON output
    indent: int = 2

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "AllocatorSettings":
        raw = dict(raw or {})
        validate_allocator_config(raw)
        return cls(
            log_level=str(raw.get("log_level", "INFO")).upper(),
            normalize_addresses=raw.get("normalize_addresses", True),
            require_hex_addresses=raw.get("require_hex_addresses", True),
            address_pattern=raw.get("address_pattern", cls.address_pattern),
            indent=raw.get("indent", 2),
        )


def resolve_config_path(path: Optional[Union[str, Path]] = None) -> Path:
    if path:
        return Path(path)
    env_path = os.getenv("VAULTALLOC_CONFIG")
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_PATH


def load_settings(path: Optional[Union[str, Path]] = None) -> AllocatorSettings:
    """
    Load settings from YAML. A missing file falls back to defaults;
    VAULTALLOC_LOG_LEVEL overrides the file's log_level.
    """
    p = resolve_config_path(path)
    if p.exists():
        with p.open("r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            raise RuntimeError(f"Allocator config {p} must be a mapping, got {type(raw).__name__}")
    else:
        log.warning("Allocator config %s not found. Using defaults.", p)
        raw = {}

    env_level = os.getenv("VAULTALLOC_LOG_LEVEL")
    if env_level:
        raw["log_level"] = env_level

    return AllocatorSettings.from_dict(raw)
