"""Runtime settings read from environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass


def _float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def _int(env: Mapping[str, str], name: str, default: int | None) -> int | None:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3001
DEFAULT_TICK_INTERVAL = 2.0
DEFAULT_SWEEP_INTERVAL = 30.0
DEFAULT_SEND_TIMEOUT = 5.0
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True, slots=True)
class Settings:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    tick_interval: float = DEFAULT_TICK_INTERVAL  # seconds between price ticks
    sweep_interval: float = DEFAULT_SWEEP_INTERVAL  # seconds between dead-connection sweeps
    send_timeout: float = DEFAULT_SEND_TIMEOUT  # per-recipient send bound
    simulator_seed: int | None = None
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Settings:
        """Build settings from the environment; unset or empty variables keep defaults.

        - TICKERFEED_HOST / TICKERFEED_PORT  where uvicorn listens
        - TICK_INTERVAL / SWEEP_INTERVAL     timer periods in seconds
        - SEND_TIMEOUT                       seconds before a slow client is dropped
        - SIMULATOR_SEED                     makes simulated prices reproducible
        - LOG_LEVEL                          root logging level
        """
        env = os.environ if env is None else env
        return cls(
            host=env.get("TICKERFEED_HOST", "").strip() or DEFAULT_HOST,
            port=_int(env, "TICKERFEED_PORT", DEFAULT_PORT),
            tick_interval=_float(env, "TICK_INTERVAL", DEFAULT_TICK_INTERVAL),
            sweep_interval=_float(env, "SWEEP_INTERVAL", DEFAULT_SWEEP_INTERVAL),
            send_timeout=_float(env, "SEND_TIMEOUT", DEFAULT_SEND_TIMEOUT),
            simulator_seed=_int(env, "SIMULATOR_SEED", None),
            log_level=env.get("LOG_LEVEL", "").strip().upper() or DEFAULT_LOG_LEVEL,
        )
