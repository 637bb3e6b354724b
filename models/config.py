"""Configuration loading and validation for the rental tracker."""

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import List, Optional, Union

import yaml
from jsonschema import validate, ValidationError

from .errors import ConfigError

SCHEMA_PATH = Path(__file__).parent / "config_schema.yaml"
DEFAULT_CONFIG_FILE = "rental.yaml"


@dataclass
class Config:
    """Runtime settings. Every field has a default so an empty file is valid."""

    assets_file: Path = Path("data/vehicles.csv")
    rentals_file: Path = Path("data/rentals.csv")
    id_prefix: str = "R"
    id_width: int = 3
    as_of_date: Optional[str] = None
    log_level: str = "INFO"

    def today(self) -> date:
        """Fixed asOfDate if configured, otherwise the system date."""
        if self.as_of_date:
            return date.fromisoformat(self.as_of_date)
        return date.today()


def load_schema() -> dict:
    """Load the JSON schema from config_schema.yaml."""
    with open(SCHEMA_PATH) as f:
        return yaml.safe_load(f)


def validate_config_file(filepath: Path, schema: dict) -> List[str]:
    """Validate a single config file. Returns list of errors."""
    errors = []
    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
        validate(instance=data or {}, schema=schema)
        as_of = (data or {}).get("asOfDate")
        if as_of:
            date.fromisoformat(as_of)
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except ValueError as e:
        errors.append(f"Invalid asOfDate: {e}")
    except OSError as e:
        errors.append(f"Error: {e}")
    return errors


def load_config(filename: Union[str, Path]) -> Config:
    """
    Load and validate a config file.

    Relative data paths are resolved against the config file's directory.
    Raises ConfigError if the file is unreadable or invalid.
    """
    filename = Path(filename)
    errors = validate_config_file(filename, load_schema())
    if errors:
        raise ConfigError(f"{filename}: " + "; ".join(e.strip() for e in errors))

    with open(filename) as fp:
        data = yaml.safe_load(fp) or {}

    base = filename.parent
    paths = data.get("data") or {}
    rentals = data.get("rentals") or {}
    logging_section = data.get("logging") or {}
    defaults = Config()

    return Config(
        assets_file=base / paths.get("assets", defaults.assets_file),
        rentals_file=base / paths.get("rentals", defaults.rentals_file),
        id_prefix=rentals.get("idPrefix", defaults.id_prefix),
        id_width=rentals.get("idWidth", defaults.id_width),
        as_of_date=data.get("asOfDate"),
        log_level=logging_section.get("level", defaults.log_level),
    )
