"""Application settings loader from YAML configuration."""
import copy
import shlex
import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional
from dataclasses import dataclass

from pledger_graph.utils.exceptions import ConfigError

DEFAULT_SETTINGS_PATH = Path(__file__).parent.parent / "resources" / "config.yaml"


@dataclass
class AppSettings:
    """Application-wide settings loaded from config.yaml."""

    # App info
    app_name: str
    app_version: str

    # Logging
    log_level: str
    log_file: Optional[str]
    log_max_file_size_mb: int
    log_backup_count: int

    # Ledger tool
    ledger_command: List[str]
    ledger_file_pattern: str
    ledger_timeout_seconds: float
    ledger_max_workers: int
    combine_subunits: bool

    # Charts
    tag_order: str
    template_path: Optional[str]
    chart_title: str

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "AppSettings":
        """Load bundled defaults, overlaid with the given YAML file."""
        config = _read_yaml(DEFAULT_SETTINGS_PATH)
        if config_path is not None:
            config = _merge(config, _read_yaml(Path(config_path)))

        try:
            return cls(
                app_name=config["app"]["name"],
                app_version=str(config["app"]["version"]),
                log_level=config["logging"]["level"],
                log_file=config["logging"]["file"],
                log_max_file_size_mb=int(config["logging"]["max_file_size_mb"]),
                log_backup_count=int(config["logging"]["backup_count"]),
                ledger_command=_command(config["ledger"]["command"]),
                ledger_file_pattern=config["ledger"]["file_pattern"],
                ledger_timeout_seconds=float(config["ledger"]["timeout_seconds"]),
                ledger_max_workers=int(config["ledger"]["max_workers"]),
                combine_subunits=bool(config["ledger"]["combine_subunits"]),
                tag_order=config["charts"]["tag_order"],
                template_path=config["charts"]["template"],
                chart_title=config["charts"]["title"]
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid settings: {e}")


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Settings file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse settings file {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping")
    return data


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively overlay override onto a copy of base."""
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _command(value) -> List[str]:
    if isinstance(value, str):
        return shlex.split(value)
    if isinstance(value, list) and value:
        return [str(part) for part in value]
    raise ConfigError(f"ledger.command must be a string or a non-empty list, got {value!r}")
