"""Shop configuration: data file locations and appointment table size."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from jsonschema import ValidationError, validate

from .errors import ConfigError

CONFIG_ENV_VAR = "GARAGE_CONFIG"
DEFAULT_CONFIG_FILE = "garage.yaml"

_FILE_KEYS = {
    "vehicles": "customer_vehicle.dat",
    "vehiclesTemp": "temp_customer_vehicle.dat",
    "parts": "vehicle_parts.dat",
    "appointments": "appointments.dat",
    "appointmentsTemp": "temp_appointments.dat",
    "history": "history.dat",
    "warranty": "warranty.dat",
    "maintenance": "maintenance.dat",
    "feedback": "feedback.txt",
    "commonIssues": "commonissues.txt",
}

CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "dataDir": {"type": "string", "minLength": 1},
        "files": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                key: {"type": "string", "minLength": 1} for key in _FILE_KEYS
            },
        },
        "appointmentTable": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "years": {"type": "integer", "minimum": 1},
                "months": {"type": "integer", "minimum": 1},
                "days": {"type": "integer", "minimum": 1},
            },
        },
    },
}


@dataclass
class ShopConfig:
    """Where the shop keeps its files and how large the appointment table is."""

    data_dir: Path = field(default_factory=Path)
    files: Dict[str, str] = field(default_factory=lambda: dict(_FILE_KEYS))
    matrix_years: int = 2050
    matrix_months: int = 12
    matrix_days: int = 31

    def path(self, key: str) -> Path:
        """Resolve a file key (e.g. "vehicles") against the data directory."""
        name = self.files.get(key) or _FILE_KEYS[key]
        return self.data_dir / name

    def ensure_data_dir(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)


def default_config_path() -> Path:
    return Path(os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE))


def validate_config_data(data: Any) -> None:
    """Raise ConfigError if data does not match CONFIG_SCHEMA."""
    try:
        validate(instance=data, schema=CONFIG_SCHEMA)
    except ValidationError as e:
        where = ".".join(str(p) for p in e.path)
        suffix = f" (at {where})" if where else ""
        raise ConfigError(f"Schema validation error: {e.message}{suffix}") from e


def config_from_dict(data: Optional[Dict[str, Any]], base_dir: Path) -> ShopConfig:
    """Build a ShopConfig from parsed YAML. Relative dataDir resolves against base_dir."""
    data = data or {}
    validate_config_data(data)

    config = ShopConfig()
    data_dir = Path(data.get("dataDir", "."))
    config.data_dir = data_dir if data_dir.is_absolute() else base_dir / data_dir
    config.files.update(data.get("files") or {})

    table = data.get("appointmentTable") or {}
    config.matrix_years = table.get("years", config.matrix_years)
    config.matrix_months = table.get("months", config.matrix_months)
    config.matrix_days = table.get("days", config.matrix_days)
    return config


def load_config(filename: Optional[Union[str, Path]] = None) -> ShopConfig:
    """
    Load the shop config from a YAML file.

    With no filename, uses $GARAGE_CONFIG or ./garage.yaml. A missing file
    gives the defaults with the data directory next to where the file
    would have been.
    """
    path = Path(filename) if filename is not None else default_config_path()
    if not path.exists():
        return config_from_dict({}, path.parent)

    try:
        with open(path, "r") as fp:
            data = yaml.safe_load(fp)
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML parse error in {path}: {e}") from e

    if data is not None and not isinstance(data, dict):
        raise ConfigError(f"{path}: top level must be a mapping")
    return config_from_dict(data, path.parent)

