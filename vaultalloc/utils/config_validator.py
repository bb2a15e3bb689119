# SPDX-License-Identifier: MIT
"""
Configuration Validator
-----------------------
Validates allocator settings before the allocator is wired up.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass
class ConfigRule:
    """Rule for validating a configuration value."""
    key: str
    required: bool = True
    default: Any = None
    validator: Optional[Callable[[Any], bool]] = None
    error_message: Optional[str] = None


def _compiles(pattern: Any) -> bool:
    re.compile(pattern)
    return True


class ConfigValidator:
    """
    Validates a configuration mapping against a list of rules.

    Usage:
        validator = ConfigValidator()
        validator.add_rule("log_level", required=False, validator=lambda x: x.upper() in LOG_LEVELS)
        is_valid, errors = validator.validate(raw_config)
    """

    def __init__(self):
        self.rules: List[ConfigRule] = []
        self.logger = logging.getLogger("ConfigValidator")

    def add_rule(
        self,
        key: str,
        required: bool = True,
        default: Any = None,
        validator: Optional[Callable[[Any], bool]] = None,
        error_message: Optional[str] = None,
    ) -> None:
        """Add a validation rule."""
        self.rules.append(
            ConfigRule(
                key=key,
                required=required,
                default=default,
                validator=validator,
                error_message=error_message,
            )
        )

    def validate(self, config: Dict[str, Any]) -> Tuple[bool, List[str]]:
        """
        Validate all rules. Missing optional keys are filled with their default.

        Returns:
            Tuple of (is_valid: bool, errors: list[str])
        """
        errors = []

        for rule in self.rules:
            value = config.get(rule.key)

            if rule.required and value is None:
                error_msg = rule.error_message or f"Required configuration '{rule.key}' is missing"
                errors.append(error_msg)
                self.logger.error("%s", error_msg)
                continue

            if value is None and rule.default is not None:
                value = rule.default
                config[rule.key] = value
                self.logger.debug("Using default for %s: %s", rule.key, rule.default)

            if value is not None and rule.validator is not None:
                try:
                    ok = rule.validator(value)
                except (TypeError, ValueError, AttributeError, re.error) as e:
                    ok = False
                    self.logger.debug("Validator for %s raised: %s", rule.key, e)
                if not ok:
                    error_msg = rule.error_message or f"Invalid value for '{rule.key}': {value!r}"
                    errors.append(error_msg)
                    self.logger.error("%s", error_msg)

        is_valid = len(errors) == 0
        if not is_valid:
            self.logger.error("Configuration validation failed with %d errors", len(errors))
        return is_valid, errors

    def add_allocator_rules(self) -> None:
        """Rules for the keys of configs/allocator.yaml."""
        self.add_rule(
            "log_level",
            required=False,
            default="INFO",
            validator=lambda x: str(x).upper() in LOG_LEVELS,
            error_message=f"log_level must be one of {', '.join(LOG_LEVELS)}",
        )
        self.add_rule(
            "normalize_addresses",
            required=False,
            validator=lambda x: isinstance(x, bool),
            error_message="normalize_addresses must be true or false",
        )
        self.add_rule(
            "require_hex_addresses",
            required=False,
            validator=lambda x: isinstance(x, bool),
            error_message="require_hex_addresses must be true or false",
        )
        self.add_rule(
            "address_pattern",
            required=False,
            validator=_compiles,
            error_message="address_pattern must be a valid regular expression",
        )
        self.add_rule(
            "indent",
            required=False,
            validator=lambda x: isinstance(x, int) and not isinstance(x, bool) and x >= 0,
            error_message="indent must be a non-negative integer",
        )


def validate_allocator_config(config: Dict[str, Any]) -> bool:
    """
    Validate a raw allocator config mapping.

    Returns:
        True if valid, raises RuntimeError if invalid
    """
    validator = ConfigValidator()
    validator.add_allocator_rules()
    is_valid, errors = validator.validate(config)

    if not is_valid:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        logger.error(error_msg)
        raise RuntimeError(error_msg)

    return True
