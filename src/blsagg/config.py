"""Environment-aware settings for blsagg."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .errors import ConfigurationError

DEFAULT_DST = b"BLS_SIG_BLS12381G2_XMD:SHA-256_SSWU_RO_NUL_"
DEFAULT_MESSAGE = "Block #12345"


@dataclass
class SuiteSettings:
    dst: bytes = DEFAULT_DST

    def validate(self) -> None:
        if not self.dst:
            raise ConfigurationError("Hash-to-curve domain separation tag must be provided.")
        if len(self.dst) > 255:
            raise ConfigurationError(f"Domain separation tag too long ({len(self.dst)} > 255 bytes).")


@dataclass
class CommitteeSettings:
    size: int = 3
    message: str = DEFAULT_MESSAGE
    min_signatures: int = 2

    def validate(self) -> None:
        if self.size <= 0:
            raise ConfigurationError(f"Committee size must be positive (got {self.size}).")
        if self.min_signatures < 1:
            raise ConfigurationError(
                f"Minimum signatures for aggregation must be at least 1 (got {self.min_signatures})."
            )
        if self.min_signatures > self.size:
            raise ConfigurationError(
                f"Minimum signatures ({self.min_signatures}) exceeds committee size ({self.size})."
            )


@dataclass
class LoggingSettings:
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    def validate(self) -> None:
        if not self.level:
            raise ConfigurationError("Logging level must be provided.")
        if not self.format:
            raise ConfigurationError("Logging format must be provided.")


@dataclass
class Settings:
    suite: SuiteSettings = field(default_factory=SuiteSettings)
    committee: CommitteeSettings = field(default_factory=CommitteeSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    def validate(self) -> None:
        self.suite.validate()
        self.committee.validate()
        self.logging.validate()


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer (got {raw!r}).") from exc


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build settings from ``env`` (defaults to ``os.environ``) and validate them."""
    if env is None:
        env = os.environ

    dst = env.get("BLSAGG_DST")
    settings = Settings(
        suite=SuiteSettings(dst=dst.encode("utf-8") if dst else DEFAULT_DST),
        committee=CommitteeSettings(
            size=_env_int(env, "BLSAGG_VALIDATORS", 3),
            message=env.get("BLSAGG_MESSAGE", DEFAULT_MESSAGE),
            min_signatures=_env_int(env, "BLSAGG_MIN_SIGNATURES", 2),
        ),
        logging=LoggingSettings(level=env.get("BLSAGG_LOG_LEVEL", "INFO")),
    )
    settings.validate()
    return settings
