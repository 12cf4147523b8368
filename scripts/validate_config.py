#!/usr/bin/env python3
"""Validate the merged configuration of every series listed in config/series.yaml."""

import sys
from pathlib import Path

import yaml

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from series_engine.config.loader import ConfigLoader
from series_engine.config.validation import ConfigValidator, ValidationError


def validate_series_config(loader: ConfigLoader, series_id: str) -> list[ValidationError]:
    """Validate the merged configuration for one series."""
    return ConfigValidator.validate_config(loader.merge_config(series_id))


def configured_series(loader: ConfigLoader) -> list[str]:
    series_file = loader.config_dir / "series.yaml"
    if not series_file.exists():
        return []
    with open(series_file) as f:
        data = yaml.safe_load(f) or {}
    return sorted((data.get("series") or {}).keys())


def main():
    """Main validation function."""
    loader = ConfigLoader.create()
    series_ids = configured_series(loader) + ["UNKNOWN-SERIES"]  # Falls back to defaults

    all_valid = True
    for series_id in series_ids:
        try:
            errors = validate_series_config(loader, series_id)
        except Exception as e:
            print(f"[error] {series_id}: {e}")
            all_valid = False
            continue

        if errors:
            print(f"[invalid] {series_id}: {len(errors)} error(s)")
            for error in errors:
                print(f"  - {error.field}: {error.message} (value: {error.value!r})")
            all_valid = False
        else:
            print(f"[ok] {series_id}")

    sys.exit(0 if all_valid else 1)


if __name__ == "__main__":
    main()
