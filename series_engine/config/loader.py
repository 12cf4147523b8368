"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from .defaults import (
    CadenceParams,
    ChartParams,
    DefaultConfig,
    IndicatorParams,
    NormalizationParams,
    RiskParams,
    get_default_config,
)

_SECTIONS = {
    "normalization": NormalizationParams,
    "cadence": CadenceParams,
    "chart": ChartParams,
    "indicators": IndicatorParams,
    "risk": RiskParams,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_series_config(self, series_id: str) -> dict[str, Any]:
        """Load series-specific configuration overrides."""
        series_file = self.config_dir / "series.yaml"

        if not series_file.exists():
            return {}

        with open(series_file) as f:
            series_config = yaml.safe_load(f) or {}

        return (series_config.get("series") or {}).get(series_id, {}) or {}  # type: ignore[no-any-return]

    def merge_config(
        self,
        series_id: Optional[str] = None,
        call_overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Per-call overrides (highest priority)
        2. Series-specific overrides from series.yaml
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        if series_id:
            config = self._deep_merge(config, self.load_series_config(series_id))

        if call_overrides:
            config = self._deep_merge(config, call_overrides)

        return config

    def build_config(
        self,
        series_id: Optional[str] = None,
        call_overrides: Optional[dict[str, Any]] = None
    ) -> DefaultConfig:
        """Merge configuration and rebuild the typed DefaultConfig from it."""
        return config_from_dict(self.merge_config(series_id, call_overrides))

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def config_from_dict(config: dict[str, Any]) -> DefaultConfig:
    """
    Build a DefaultConfig from a merged configuration dictionary.

    Unknown keys are ignored; YAML lists become tuples so the result stays
    hashable and immutable.
    """
    sections = {}
    for section_name, params_cls in _SECTIONS.items():
        section = config.get(section_name) or {}
        known = {f.name for f in fields(params_cls)}
        kwargs = {}
        for key, value in section.items():
            if key not in known:
                continue
            kwargs[key] = tuple(value) if isinstance(value, list) else value
        sections[section_name] = params_cls(**kwargs)
    return DefaultConfig(**sections)
