from __future__ import annotations
import os
from dataclasses import dataclass, fields
from enum import Enum
from typing import Optional

import yaml


class HashMode(str, Enum):
    MODULAR = "modular"
    UNBOUNDED = "unbounded"


MODES = tuple(m.value for m in HashMode)

MODULAR_BASE = 257
MODULUS = 1_000_000_007
UNBOUNDED_BASE = 101


def _parse_bool(x: str) -> bool:
    return x.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class RollingHashConfig:
    mode: str = "modular"                # "modular" | "unbounded"
    base: Optional[int] = None           # None: 257 when modular, 101 when unbounded
    modulus: int = MODULUS               # ignored in unbounded mode
    skip_pattern: Optional[str] = None   # regex of characters dropped before hashing
    casefold: bool = False               # lower-case characters before hashing

    @property
    def effective_base(self) -> int:
        if self.base is not None:
            return self.base
        return UNBOUNDED_BASE if self.mode == HashMode.UNBOUNDED else MODULAR_BASE

    @property
    def bounded(self) -> bool:
        return self.mode == HashMode.MODULAR

    def validate(self):
        if self.mode not in MODES:
            raise ValueError(f"mode must be one of {MODES}, got {self.mode!r}")
        if self.effective_base < 2:
            raise ValueError(f"base must be >= 2, got {self.effective_base}")
        if self.bounded and self.modulus < 2:
            raise ValueError(f"modulus must be >= 2, got {self.modulus}")

    @classmethod
    def _field_names(cls):
        return {f.name for f in fields(cls)}

    @staticmethod
    def _env_mappings(prefix: str):
        return {
            f"{prefix}MODE": ("mode", lambda x: x.strip().lower()),
            f"{prefix}BASE": ("base", int),
            f"{prefix}MODULUS": ("modulus", int),
            f"{prefix}SKIP_PATTERN": ("skip_pattern", str),
            f"{prefix}CASEFOLD": ("casefold", _parse_bool),
        }

    @classmethod
    def load(cls, yaml_path: Optional[str] = None, env_prefix: str = "RABINKARP_", **overrides) -> 'RollingHashConfig':
        """YAML file first, then environment variables, then keyword overrides."""
        config_dict = {}

        if yaml_path and os.path.exists(yaml_path):
            with open(yaml_path, 'r') as f:
                yaml_config = yaml.safe_load(f) or {}
                config_dict.update({k: v for k, v in yaml_config.items() if k in cls._field_names()})

        for env_var, (field_name, converter) in cls._env_mappings(env_prefix).items():
            value = os.getenv(env_var)
            if value is not None:
                config_dict[field_name] = converter(value)

        config_dict.update(overrides)

        cfg = cls(**config_dict)
        cfg.validate()
        return cfg

    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'RollingHashConfig':
        if not os.path.exists(yaml_path):
            return cls()

        with open(yaml_path, 'r') as f:
            config_dict = yaml.safe_load(f) or {}

        cfg = cls(**{k: v for k, v in config_dict.items() if k in cls._field_names()})
        cfg.validate()
        return cfg

    @classmethod
    def from_env(cls, prefix: str = "RABINKARP_") -> 'RollingHashConfig':
        config_dict = {}
        for env_var, (field_name, converter) in cls._env_mappings(prefix).items():
            value = os.getenv(env_var)
            if value is not None:
                config_dict[field_name] = converter(value)
        cfg = cls(**config_dict)
        cfg.validate()
        return cfg
