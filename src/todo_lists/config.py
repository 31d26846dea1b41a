"""Configuration management for the Todo Lists web application."""

import logging
import os
import secrets
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional, Union

import yaml

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "TODO_LISTS_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.todo_lists/config.yaml")
DEFAULT_LOG_LEVEL = "INFO"


def normalize_log_level(level) -> str:
    """Upper-case a logging level name, falling back to INFO when unknown."""
    name = str(level).upper()
    if not isinstance(logging.getLevelName(name), int):
        logger.warning(f"Unknown log level {level!r}; using {DEFAULT_LOG_LEVEL}")
        return DEFAULT_LOG_LEVEL
    return name


@dataclass
class ConfigModel:
    """Settings for the web application and its session cookie."""

    # Session
    session_secret: Optional[str] = None
    session_cookie: str = "todo_lists_session"
    session_max_age: int = 14 * 24 * 60 * 60  # seconds

    # Server
    host: str = "127.0.0.1"
    port: int = 4567
    debug: bool = False
    log_level: str = "INFO"

    def __post_init__(self):
        self.port = int(self.port)
        self.session_max_age = int(self.session_max_age)
        self.log_level = normalize_log_level(self.log_level)

    def to_yaml(self, mask_secret: bool = False) -> str:
        """Serialize config to YAML."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        if mask_secret and data["session_secret"]:
            data["session_secret"] = "********"
        return yaml.dump(data, default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConfigModel":
        """Deserialize config from YAML, ignoring unknown keys."""
        data = yaml.safe_load(yaml_str) or {}
        known = {f.name for f in fields(cls)}
        ignored = sorted(set(data) - known)
        if ignored:
            logger.warning(f"Ignoring unknown config keys: {', '.join(ignored)}")
        return cls(**{key: value for key, value in data.items() if key in known})


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _apply_env(config: ConfigModel) -> ConfigModel:
    """Overlay settings taken from environment variables."""
    if os.getenv("SESSION_SECRET"):
        config.session_secret = os.environ["SESSION_SECRET"]
    if os.getenv("TODO_LISTS_HOST"):
        config.host = os.environ["TODO_LISTS_HOST"]
    if os.getenv("TODO_LISTS_PORT"):
        config.port = int(os.environ["TODO_LISTS_PORT"])
    if os.getenv("TODO_LISTS_DEBUG"):
        config.debug = _env_flag(os.environ["TODO_LISTS_DEBUG"])
    if os.getenv("TODO_LISTS_LOG_LEVEL"):
        config.log_level = normalize_log_level(os.environ["TODO_LISTS_LOG_LEVEL"])
    return config


def load_config(config_path: Optional[Union[str, Path]] = None) -> ConfigModel:
    """Load configuration.

    Defaults are overlaid by the YAML file (when it exists) and then by
    environment variables.

    Args:
        config_path: YAML file; defaults to $TODO_LISTS_CONFIG or
            ~/.todo_lists/config.yaml

    Returns:
        The effective configuration
    """
    if config_path is None:
        config_path = os.getenv(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH
    config_path = Path(config_path).expanduser()

    config = ConfigModel()
    if config_path.exists():
        config = ConfigModel.from_yaml(config_path.read_text())
        logger.info(f"Loaded configuration from {config_path}")

    config = _apply_env(config)

    if not config.session_secret:
        # Sessions will not survive a restart with a generated secret.
        config.session_secret = secrets.token_hex(32)
        logger.warning("No session secret configured; generated a temporary one")

    return config


class Config:
    """Caches the configuration used by the web application."""

    _instance: Optional[ConfigModel] = None

    @classmethod
    def get(cls) -> ConfigModel:
        if cls._instance is None:
            cls._instance = load_config()
        return cls._instance

    @classmethod
    def set(cls, config: ConfigModel) -> None:
        cls._instance = config

    @classmethod
    def reset(cls) -> None:
        cls._instance = None


def get_config() -> ConfigModel:
    """Get the current configuration."""
    return Config.get()


def reset_config() -> None:
    """Forget the cached configuration."""
    Config.reset()
