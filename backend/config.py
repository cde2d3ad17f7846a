"""
Application Settings
Reads configuration from environment variables (and a local .env file)
"""

import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


@dataclass
class Settings:
    """
    Runtime settings for the demo service

    rider_name: name of the rider subscribed at startup
    default_distance_km: distance used by fare quotes that omit one
    strict_fare_policy: reject unknown fare policies instead of using normal fare
    enforce_status_transitions: refuse out-of-order ride commands
    """

    rider_name: str = "Alice"
    default_distance_km: float = 5
    strict_fare_policy: bool = False
    enforce_status_transitions: bool = False
    currency_symbol: str = "₹"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        distance = os.getenv("DEFAULT_DISTANCE_KM", "5")
        return cls(
            rider_name=os.getenv("RIDER_NAME", "Alice"),
            default_distance_km=float(distance) if "." in distance else int(distance),
            strict_fare_policy=_env_flag("STRICT_FARE_POLICY"),
            enforce_status_transitions=_env_flag("ENFORCE_STATUS_TRANSITIONS"),
            currency_symbol=os.getenv("CURRENCY_SYMBOL", "₹"),
            cors_origins=_env_list("CORS_ORIGINS", "*"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


def get_settings() -> Settings:
    """Build settings from the current environment"""
    return Settings.from_env()
