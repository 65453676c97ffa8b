#!/usr/bin/env python3
"""Validate shop config YAML files against the config schema."""
import sys
from pathlib import Path

import yaml
from jsonschema import validate, ValidationError

from shop.config import CONFIG_SCHEMA


def load_schema() -> dict:
    """Return the JSON schema shop configs are checked against."""
    return CONFIG_SCHEMA


def validate_config_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single config YAML file. Returns list of errors."""
    errors = []
    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
        validate(instance=data if data is not None else {}, schema=schema)
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        where = ".".join(str(p) for p in e.path)
        suffix = f" (at {where})" if where else ""
        errors.append(f"Schema validation error: {e.message}{suffix}")
    except OSError as e:
        errors.append(f"Error: {e}")
    return errors


def main(argv=None):
    """Validate the config files named on the command line (default: ./garage.yaml)."""
    schema = load_schema()
    paths = [Path(p) for p in (argv if argv is not None else sys.argv[1:])]
    if not paths:
        paths = [Path("garage.yaml")]

    all_valid = True
    for filepath in paths:
        if not filepath.exists():
            print(f"FAIL: {filepath} (file not found)")
            all_valid = False
            continue
        errors = validate_config_file(filepath, schema)
        if errors:
            print(f"FAIL: {filepath.name}")
            for error in errors:
                print(f"  {error}")
            all_valid = False
        else:
            print(f"OK: {filepath.name}")

    return 0 if all_valid else 1


if __name__ == "__main__":
    sys.exit(main())
