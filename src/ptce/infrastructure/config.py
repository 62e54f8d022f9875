"""Runtime settings for the consensus engine."""

import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

FALLBACK_CONFIDENCE_MODES = ("fixed", "random")

# YAML keys accepted in addition to the field names
_YAML_ALIASES = {
    "api_key": "openai_api_key",
    "model": "openai_model",
    "base_url": "openai_base_url",
    "timeout": "evaluation_timeout",
}


@dataclass
class PTCESettings:
    """Settings read once at startup."""

    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_base_url: str = "https://api.openai.com/v1"
    openai_temperature: float = 0.7
    openai_max_tokens: int = 500
    evaluation_timeout: float = 30.0
    variance_threshold: float = 2.0
    fallback_confidence: str = "fixed"
    database_url: str = "sqlite+aiosqlite:///./ptce.db"
    database_echo: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_json: bool = False

    def __post_init__(self):
        if self.fallback_confidence not in FALLBACK_CONFIDENCE_MODES:
            raise ValueError(
                f"fallback_confidence must be one of {FALLBACK_CONFIDENCE_MODES}, "
                f"got '{self.fallback_confidence}'"
            )
        if self.evaluation_timeout <= 0:
            raise ValueError("evaluation_timeout must be positive")
        if self.variance_threshold < 0:
            raise ValueError("variance_threshold cannot be negative")

    @property
    def has_openai_credentials(self) -> bool:
        return bool(self.openai_api_key)

    @classmethod
    def from_env(cls) -> "PTCESettings":
        """Create settings from environment variables."""
        return cls(
            openai_api_key=os.getenv("OPEN_AI_API_KEY") or os.getenv("OPENAI_API_KEY", ""),
            openai_model=os.getenv("PTCE_OPENAI_MODEL", "gpt-4o-mini"),
            openai_base_url=os.getenv("PTCE_OPENAI_BASE_URL", "https://api.openai.com/v1"),
            openai_temperature=float(os.getenv("PTCE_OPENAI_TEMPERATURE", "0.7")),
            openai_max_tokens=int(os.getenv("PTCE_OPENAI_MAX_TOKENS", "500")),
            evaluation_timeout=float(os.getenv("PTCE_EVALUATION_TIMEOUT", "30")),
            variance_threshold=float(os.getenv("PTCE_VARIANCE_THRESHOLD", "2.0")),
            fallback_confidence=os.getenv("PTCE_FALLBACK_CONFIDENCE", "fixed").lower(),
            database_url=os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./ptce.db"),
            database_echo=os.getenv("DATABASE_ECHO", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_file=os.getenv("LOG_FILE") or None,
            log_json=os.getenv("LOG_JSON", "false").lower() == "true",
        )

    def merged_with(self, overrides: Dict[str, Any]) -> "PTCESettings":
        """Copy with the given keys replaced; unknown keys are rejected."""
        known = {f.name for f in fields(self)}
        values = asdict(self)
        for key, value in overrides.items():
            name = _YAML_ALIASES.get(key, key)
            if name not in known:
                raise ValueError(f"Unknown setting '{key}'")
            values[name] = value
        return PTCESettings(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Settings with the API key masked, for display."""
        values = asdict(self)
        if values["openai_api_key"]:
            values["openai_api_key"] = "***"
        return values


def load_config_file(config_path: str) -> Dict[str, Any]:
    """Load a YAML settings file and flatten its optional ``ptce`` section.

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid YAML
    """
    config_file = Path(config_path)
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_file, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError(f"Configuration file {config_path} must contain a mapping")

    config = _expand_env_vars(config)
    section = config.get("ptce", config)

    flattened: Dict[str, Any] = {}
    for key, value in section.items():
        if isinstance(value, dict):
            # openai: {model: ...} -> openai_model
            for sub_key, sub_value in value.items():
                flattened[f"{key}_{sub_key}"] = sub_value
        else:
            flattened[key] = value
    return flattened


def load_settings(config_path: Optional[str] = None) -> PTCESettings:
    """Environment settings, overlaid by the YAML file when one is given."""
    settings = PTCESettings.from_env()
    if config_path:
        settings = settings.merged_with(load_config_file(config_path))
    return settings


def _expand_env_vars(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {key: _expand_env_vars(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    elif isinstance(obj, str):
        return os.path.expandvars(obj)
    else:
        return obj
