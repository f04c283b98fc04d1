"""
Configuration - Settings read from the environment.

    MANAZONE_ENV          development | production   (default development)
    MANAZONE_LOG_LEVEL    logging level name         (default INFO)
    ALLOWED_ORIGINS       comma separated CORS origins (default *)
    MANAZONE_MATCH_TTL    seconds before an idle match is collected (default 3600)
    MANAZONE_SHIELDS      shields dealt per player   (default 5)
    MANAZONE_HAND_SIZE    opening hand size          (default 5)
    MANAZONE_SEED         fixed rng seed for every match (default unset)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Mapping
import os


def _split_origins(value: str) -> list[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@dataclass
class EngineConfig:
    env: str = "development"
    log_level: str = "INFO"
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])
    match_ttl: int = 3600
    shields: int = 5
    hand_size: int = 5
    random_seed: int | None = None

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> EngineConfig:
        """
        Build the config from environment variables.

        Raises ValueError if a numeric variable is not an integer.
        """
        env = os.environ if environ is None else environ
        seed = env.get("MANAZONE_SEED")
        return cls(
            env=env.get("MANAZONE_ENV", "development"),
            log_level=env.get("MANAZONE_LOG_LEVEL", "INFO").upper(),
            allowed_origins=_split_origins(env.get("ALLOWED_ORIGINS", "*")),
            match_ttl=int(env.get("MANAZONE_MATCH_TTL", "3600")),
            shields=int(env.get("MANAZONE_SHIELDS", "5")),
            hand_size=int(env.get("MANAZONE_HAND_SIZE", "5")),
            random_seed=int(seed) if seed else None,
        )
