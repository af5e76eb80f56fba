#!/usr/bin/env python3
"""Validate logbook YAML files against the schema."""
import json
import sys
from pathlib import Path

import yaml
from jsonschema import validate, ValidationError

from maint_analytics import AnalyticsConfig


def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    schema_path = Path(__file__).parent / "schema.yaml"
    with open(schema_path) as f:
        return yaml.safe_load(f)


def validate_logbook_file(filepath: Path, schema: dict) -> list[str]:
    """Validate a single logbook YAML file. Returns list of errors."""
    errors = []
    try:
        with open(filepath) as f:
            # Unquoted dates load as date objects; validate their ISO strings
            data = json.loads(json.dumps(yaml.safe_load(f), default=str))
        validate(instance=data, schema=schema)
        AnalyticsConfig.from_dict(data.get("analytics"))
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e.message}")
        if e.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in e.path)}")
    except ValueError as e:
        errors.append(f"Analytics config error: {e}")
    except OSError as e:
        errors.append(f"Error: {e}")
    return errors


def main(argv=None):
    """Validate the given logbook files, or all files in vehicles/."""
    schema = load_schema()
    paths = [Path(p) for p in (argv if argv is not None else sys.argv[1:])]

    if not paths:
        vehicles_dir = Path(__file__).parent / "vehicles"
        if not vehicles_dir.exists():
            print(f"Error: vehicles directory not found: {vehicles_dir}")
            return 1
        paths = list(vehicles_dir.glob("*.yaml")) + list(vehicles_dir.glob("*.yml"))
        if not paths:
            print(f"Warning: No YAML files found in {vehicles_dir}")
            return 0

    all_valid = True
    for filepath in sorted(paths):
        errors = validate_logbook_file(filepath, schema)
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
