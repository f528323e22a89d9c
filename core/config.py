"""Configuration models and loading."""

import json
import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from core.exceptions import ConfigurationError

CONFIG_DIR = Path.home() / ".config" / "ynab-proxy"
CONFIG_FILE = CONFIG_DIR / "config.json"

TOKEN_ENV = "YNAB_TOKEN"
BUDGET_ID_ENV = "YNAB_BUDGET_ID"


class ProxySettings(BaseModel):
    host: str = "127.0.0.1"
    port: int = 8787
    debug: bool = False


class YnabSettings(BaseModel):
    base_url: str = "https://api.ynab.com/v1/budgets/"
    token: str = ""
    budget_id: str = ""

    @property
    def is_configured(self) -> bool:
        return bool(self.token) and bool(self.budget_id)


class LimitsSettings(BaseModel):
    timeout: float = 300.0
    max_connections: int = 100
    max_keepalive_connections: int = 20
    keep_alive_timeout: int = 5


class Config(BaseModel):
    proxy: ProxySettings = Field(default_factory=ProxySettings)
    ynab: YnabSettings = Field(default_factory=YnabSettings)
    limits: LimitsSettings = Field(default_factory=LimitsSettings)


def load_config(
    config_file: Path = CONFIG_FILE,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """Load configuration from JSON file, then apply environment overrides."""
    config = _load_file(config_file)
    return apply_env_overrides(config, os.environ if environ is None else environ)


def apply_env_overrides(config: Config, environ: Mapping[str, str]) -> Config:
    """Override YNAB credentials with YNAB_TOKEN / YNAB_BUDGET_ID when set."""
    updates = {}
    if environ.get(TOKEN_ENV):
        updates["token"] = environ[TOKEN_ENV]
    if environ.get(BUDGET_ID_ENV):
        updates["budget_id"] = environ[BUDGET_ID_ENV]
    if not updates:
        return config
    ynab = config.ynab.model_copy(update=updates)
    return config.model_copy(update={"ynab": ynab})


def _load_file(config_file: Path) -> Config:
    """Read the config file, creating default if needed."""
    if not config_file.exists():
        config_file.parent.mkdir(parents=True, exist_ok=True)
        default = Config()
        config_file.write_text(default.model_dump_json(indent=2))
        return default

    try:
        data = json.loads(config_file.read_text())
        return Config.model_validate(data)
    except (json.JSONDecodeError, ValidationError):
        # Backup corrupted config and recreate default
        backup = config_file.with_suffix(".json.bak")
        config_file.rename(backup)
        default = Config()
        config_file.write_text(default.model_dump_json(indent=2))
        return default


def require_credentials(ynab: YnabSettings) -> None:
    """Raise ConfigurationError unless both YNAB credentials are present."""
    if not ynab.is_configured:
        raise ConfigurationError(
            f"Server configuration error: Missing {TOKEN_ENV} or {BUDGET_ID_ENV}."
        )
