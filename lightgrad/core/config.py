# lightgrad/core/config.py
"""
Package configuration.

The active configuration is a module-level `TensorConfig`. Read it through
`get_config()` (or `config_mod.config`) rather than caching a reference, so
`set_config()` takes effect everywhere.
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Mapping, Optional

_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass
class TensorConfig:
    """Configuration for gradient recording and the backward pass."""
    # Initial value of the (thread-local) recording flag
    default_grad_enabled: bool = True

    # Sum into existing .gradient across backward() calls instead of overwriting
    accumulate_grad: bool = False

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "TensorConfig":
        """
        Build a config from environment variables.

        LIGHTGRAD_GRAD_ENABLED     -> default_grad_enabled
        LIGHTGRAD_ACCUMULATE_GRAD  -> accumulate_grad

        Unset or empty variables keep the dataclass defaults.
        """
        env = os.environ if env is None else env
        defaults = cls()
        return cls(
            default_grad_enabled=_env_flag(env, "LIGHTGRAD_GRAD_ENABLED",
                                           defaults.default_grad_enabled),
            accumulate_grad=_env_flag(env, "LIGHTGRAD_ACCUMULATE_GRAD",
                                      defaults.accumulate_grad),
        )


config = TensorConfig.from_env()


def get_config() -> TensorConfig:
    return config


def set_config(new_config: TensorConfig) -> TensorConfig:
    """Install `new_config` as the active configuration; returns the previous one."""
    global config
    prev = config
    config = new_config
    return prev
