#!/usr/bin/env python3
"""Validate rental tracker config files against the schema."""
import sys
from pathlib import Path

from models import load_schema, validate_config_file
from models.config import DEFAULT_CONFIG_FILE


def main(argv=None):
    """Validate each config file given on the command line (default: rental.yaml)."""
    paths = [Path(p) for p in (sys.argv[1:] if argv is None else argv)]
    if not paths:
        paths = [Path(DEFAULT_CONFIG_FILE)]

    schema = load_schema()
    all_valid = True
    for filepath in paths:
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
