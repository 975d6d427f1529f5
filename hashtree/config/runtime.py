"""
Runtime Configuration

Default Digest Policy selection for trees constructed without an
explicit policy.
"""

from __future__ import annotations

import copy
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from hashtree.crypto.policy import (
    DEFAULT_HASH_ALGORITHM,
    HashlibPolicy,
    resolve_comparator,
)

load_dotenv()


@dataclass
class TreeConfig:
    """
    Configuration for tree construction.

    Can be loaded from:
    - Environment variables
    - YAML file
    - Programmatic construction
    """
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM
    comparator: str = "bytes"  # "bytes" or "hex"
    log_level: Optional[str] = None

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - HASHTREE_HASH_ALGORITHM: hashlib algorithm name
        - HASHTREE_COMPARATOR: digest comparator name
        - HASHTREE_LOG_LEVEL: level applied to the "hashtree" logger
        """
        overrides: dict[str, Any] = {}

        if os.getenv("HASHTREE_HASH_ALGORITHM"):
            overrides["hash_algorithm"] = os.getenv("HASHTREE_HASH_ALGORITHM")
        if os.getenv("HASHTREE_COMPARATOR"):
            overrides["comparator"] = os.getenv("HASHTREE_COMPARATOR")
        if os.getenv("HASHTREE_LOG_LEVEL"):
            overrides["log_level"] = os.getenv("HASHTREE_LOG_LEVEL")

        return overrides

    @classmethod
    def from_env(cls) -> "TreeConfig":
        """Load configuration purely from environment variables."""
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "TreeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TreeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        # Accept a nested "tree" section as well as a flat mapping
        tree_data = data.get("tree", data)
        return cls(
            hash_algorithm=tree_data.get("hash_algorithm", DEFAULT_HASH_ALGORITHM),
            comparator=tree_data.get("comparator", "bytes"),
            log_level=tree_data.get("log_level"),
        )

    def with_env_overrides(self) -> "TreeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)
        for key, value in overrides.items():
            setattr(new_config, key, value)
        return new_config

    def build_policy(self) -> HashlibPolicy:
        """
        Create the Digest Policy described by this config.

        Raises:
            PolicyConfigurationException: On an unknown algorithm or comparator
        """
        return HashlibPolicy(
            algorithm=self.hash_algorithm,
            comparator=resolve_comparator(self.comparator),
        )

    def apply_logging(self) -> None:
        """Set the level of the package logger if one is configured."""
        if self.log_level:
            logging.getLogger("hashtree").setLevel(self.log_level.upper())

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "hash_algorithm": self.hash_algorithm,
            "comparator": self.comparator,
            "log_level": self.log_level,
        }


# Global default configuration
_default_config: Optional[TreeConfig] = None


def get_default_config() -> TreeConfig:
    """Get the default tree configuration."""
    global _default_config
    if _default_config is None:
        _default_config = TreeConfig.from_env()
        _default_config.apply_logging()
    return _default_config


def set_default_config(config: Optional[TreeConfig]) -> None:
    """Set (or with None, reset) the default tree configuration."""
    global _default_config
    _default_config = config
