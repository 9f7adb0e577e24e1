"""
Service Configuration

Loads configuration from environment variables and provides defaults.
Supports loading from .env file using python-dotenv.
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from hybrid_recs.models.config import RecommendationConfig

BASE_DIR = Path(__file__).resolve().parent.parent

# Single .env at the repo root
_root_env = BASE_DIR / ".env"
if _root_env.exists():
    load_dotenv(_root_env)

DATA_SOURCES = ("memory", "json")


@dataclass
class ServiceConfig:
    """Service configuration."""

    # Data source: "memory" (empty store, for wiring checks) | "json"
    data_source: str = "memory"
    # When data_source=json: items, follows, likes, users
    content_json_path: Optional[Path] = None
    # Recommendation history file; None keeps history in memory only
    recommendations_json_path: Optional[Path] = None
    # Optional JSON document for RecommendationConfig.from_dict
    algorithm_config_path: Optional[Path] = None

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        """Load configuration from environment variables."""
        data_source = os.getenv("DATA_SOURCE", "").strip().lower() or "memory"
        if data_source not in DATA_SOURCES:
            data_source = "memory"

        def _path_env(key: str, default: Optional[Path] = None) -> Optional[Path]:
            v = os.getenv(key)
            if not v:
                return default
            p = Path(v)
            return p if p.is_absolute() else (BASE_DIR / p).resolve()

        return cls(
            data_source=data_source,
            content_json_path=_path_env("CONTENT_JSON_PATH"),
            recommendations_json_path=_path_env("RECOMMENDATIONS_JSON_PATH"),
            algorithm_config_path=_path_env("ALGORITHM_CONFIG_PATH"),
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        )

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the configuration.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        if self.data_source == "json":
            if not self.content_json_path:
                errors.append("DATA_SOURCE=json requires CONTENT_JSON_PATH")
            elif not self.content_json_path.exists():
                errors.append(f"Content JSON not found: {self.content_json_path}")

        if self.algorithm_config_path and not self.algorithm_config_path.exists():
            errors.append(f"Algorithm config not found: {self.algorithm_config_path}")

        # Recommendations file is created on first append

        return len(errors) == 0, errors

    def load_algorithm_config(self) -> RecommendationConfig:
        """RecommendationConfig from algorithm_config_path, or defaults when unset."""
        if not self.algorithm_config_path:
            return RecommendationConfig()
        with open(self.algorithm_config_path) as f:
            return RecommendationConfig.from_dict(json.load(f))


# Global config instance
_config: Optional[ServiceConfig] = None


def get_config() -> ServiceConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServiceConfig.from_env()
    return _config


def reload_config() -> ServiceConfig:
    """Reload configuration from environment."""
    global _config
    _config = None
    return get_config()
