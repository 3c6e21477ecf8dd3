import os
from dataclasses import asdict
from pathlib import Path

import yaml
from dotenv import find_dotenv, load_dotenv

from droponoff.models.config import (
    AppConfig,
    DroponoffConfig,
    LoggingConfig,
    TimingConfig,
)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "droponoff" / "config.yaml"


class ConfigManager:
    """Loads droponoff settings from YAML.

    The file is optional: a missing file, or a missing section within
    it, falls back to the built-in Dropbox defaults.
    """

    def __init__(self, config_path: Path | None = None):
        dotenv_path = find_dotenv(usecwd=True)
        if dotenv_path:
            load_dotenv(dotenv_path)

        if config_path is None:
            env_path = os.getenv("DROPONOFF_CONFIG_PATH")
            config_path = Path(env_path).expanduser() if env_path else DEFAULT_CONFIG_PATH

        self.config_path = config_path
        self.config = self.load_config()

    def load_config(self) -> DroponoffConfig:
        config_data = {}

        if self.config_path.exists():
            with open(self.config_path, "r") as f:
                config_data = yaml.safe_load(f) or {}

        if not isinstance(config_data, dict):
            raise ValueError(f"Config file {self.config_path} must contain a mapping")

        sections = {}
        if isinstance(config_data.get("app"), dict):
            sections["app"] = AppConfig(**config_data["app"])

        if isinstance(config_data.get("timing"), dict):
            sections["timing"] = TimingConfig(**config_data["timing"])

        if isinstance(config_data.get("logging"), dict):
            sections["logging"] = LoggingConfig(**config_data["logging"])

        return DroponoffConfig(**sections)

    def save_config(self, config: DroponoffConfig):
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            yaml.safe_dump(asdict(config), f, default_flow_style=False)
