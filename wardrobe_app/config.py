"""Configuration helpers for the wardrobe planner."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

DEFAULT_STORAGE_SLOT = "wardrobe-storage"
_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class AppConfig:
    """Configuration values for the wardrobe planner.

    The snapshot backend decides where repository state is persisted between
    runs; the storage slot names the single record the snapshot lives under.
    """

    snapshot_backend: str = "json"
    snapshot_path: Optional[str] = None
    storage_slot: str = DEFAULT_STORAGE_SLOT
    seed_on_first_run: bool = True
    log_level: str = "INFO"
    environment: str | None = None

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default and is merged with environment variables, which take precedence.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("APP_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = key.upper()
            return os.getenv(env_key, yaml_config.get(key, default))

        snapshot_backend = get_value("snapshot_backend", "json")
        seed_flag = get_value("seed_on_first_run", "true")

        return cls(
            snapshot_backend=str(snapshot_backend or "json").lower(),
            snapshot_path=get_value("snapshot_path"),
            storage_slot=str(get_value("storage_slot", DEFAULT_STORAGE_SLOT) or DEFAULT_STORAGE_SLOT),
            seed_on_first_run=str(seed_flag).strip().lower() in _TRUTHY,
            log_level=str(get_value("log_level", "INFO") or "INFO"),
            environment=env_name,
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a minimal YAML/INI-style config without external dependencies."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config
