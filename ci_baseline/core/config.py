"""
Hierarchical configuration management for ci-baseline.

Configuration priority (highest to lowest):
1. CLI arguments
2. Environment variables (CI_BASELINE_*)
3. Project config (.ci-baseline.yml)
4. User config (~/.ci-baseline/config.yml)
5. Default values
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Annotated, Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    NoDecode,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from ci_baseline.models.base import Triplet, parse_triplet_name
from ci_baseline.models.baseline import ExclusionsMap

PROJECT_CONFIG_NAME = ".ci-baseline.yml"

# Merged YAML file values for the CiBaselineConfig.load call in progress
_file_layers: ContextVar[dict[str, Any]] = ContextVar("_file_layers", default={})


class ReportingConfig(BaseModel):
    """Configuration for report output."""

    format: str = "console"
    show_exclusions: bool = True

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate report format."""
        valid_formats = {"console", "json"}
        if v not in valid_formats:
            raise ValueError(f"Invalid format: {v}. Must be one of {valid_formats}")
        return v


class YamlFilesSource(PydanticBaseSettingsSource):
    """Settings source serving the merged user and project YAML files."""

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return _file_layers.get().get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return dict(_file_layers.get())


class CiBaselineConfig(BaseSettings):
    """
    Main configuration model with hierarchical loading.

    Loads configuration from:
    1. Default values (lowest priority)
    2. User config file (~/.ci-baseline/config.yml)
    3. Project config file (.ci-baseline.yml)
    4. Environment variables (CI_BASELINE_*)
    5. CLI arguments (highest priority)
    """

    model_config = SettingsConfigDict(
        env_prefix="CI_BASELINE_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    triplet: Optional[str] = None
    host_triplet: Optional[str] = None
    exclude: Annotated[list[str], NoDecode] = Field(default_factory=list)
    host_exclude: Annotated[list[str], NoDecode] = Field(default_factory=list)
    skip_failures: bool = False
    allow_unexpected_passing: bool = False

    reporting: ReportingConfig = Field(default_factory=ReportingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlFilesSource(settings_cls),
            file_secret_settings,
        )

    @field_validator("triplet", "host_triplet")
    @classmethod
    def validate_triplet(cls, v: Optional[str]) -> Optional[str]:
        """Validate and normalize triplet names."""
        if v is None:
            return None
        triplet = parse_triplet_name(v.strip().lower())
        if triplet is None:
            raise ValueError(f"Invalid triplet name: {v!r}")
        return triplet.canonical_name

    @field_validator("exclude", "host_exclude", mode="before")
    @classmethod
    def split_exclusions(cls, v: Any) -> Any:
        """Accept a comma-separated string as well as a list."""
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return v

    @classmethod
    def load(
        cls,
        cli_args: Optional[dict[str, Any]] = None,
        project_path: Optional[Path] = None,
        config_file: Optional[Path] = None,
    ) -> CiBaselineConfig:
        """
        Load configuration from multiple sources with priority.

        YAML files feed a settings source ranked below the environment;
        only the CLI arguments are passed to the constructor.

        Args:
            cli_args: Command-line arguments (highest priority)
            project_path: Directory holding .ci-baseline.yml
            config_file: Explicit config file, used instead of .ci-baseline.yml

        Returns:
            Merged configuration
        """
        file_dict: dict[str, Any] = {}
        project_path = project_path or Path.cwd()

        user_config_path = Path.home() / ".ci-baseline" / "config.yml"
        if user_config_path.exists():
            file_dict = _deep_merge(file_dict, _read_yaml(user_config_path))

        project_config_path = config_file or project_path / PROJECT_CONFIG_NAME
        if project_config_path.exists():
            file_dict = _deep_merge(file_dict, _read_yaml(project_config_path))

        token = _file_layers.set(file_dict)
        try:
            return cls(**_flatten_cli_args(cli_args or {}))
        finally:
            _file_layers.reset(token)

    def to_yaml(self, path: Path) -> None:
        """Write configuration to YAML file."""
        with open(path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False)

    def tracked_exclusions(self) -> ExclusionsMap:
        """
        Build the map of tracked triplets.

        The target triplet comes first, seeded with ``exclude``; the host
        triplet follows, seeded with ``host_exclude``, unless it is the same
        triplet as the target.
        """
        exclusions_map = ExclusionsMap()
        if self.triplet:
            exclusions_map.insert(Triplet.from_canonical_name(self.triplet), self.exclude)
        if self.host_triplet:
            exclusions_map.insert(Triplet.from_canonical_name(self.host_triplet), self.host_exclude)
        return exclusions_map


def _read_yaml(path: Path) -> dict[str, Any]:
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Args:
        base: Base dictionary
        override: Dictionary with values to override

    Returns:
        Merged dictionary
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _flatten_cli_args(args: dict[str, Any]) -> dict[str, Any]:
    """
    Convert flat CLI arguments to nested config structure.

    Examples:
        {"output_format": "json"} -> {"reporting": {"format": "json"}}
    """
    result: dict[str, Any] = {}

    mappings = {
        "output_format": ("reporting", "format", lambda v: v or None),
        "config": None,  # Handled separately
    }

    for key, value in args.items():
        if value is None:
            continue

        if key in mappings and mappings[key] is not None:
            section, subkey, transform = mappings[key]
            transformed = transform(value)
            if transformed is not None:
                result.setdefault(section, {})[subkey] = transformed
        elif key not in mappings:
            result[key] = value

    return result


def validate_config(config: CiBaselineConfig) -> list[str]:
    """
    Validate configuration and return list of warnings.

    Returns:
        List of warning messages (empty if all valid)
    """
    warnings: list[str] = []

    if not config.triplet:
        warnings.append("No target triplet configured; every baseline entry will be ignored")
    if config.host_exclude and not config.host_triplet:
        warnings.append("host_exclude is set but no host_triplet is configured")
    if config.host_triplet and config.host_triplet == config.triplet and config.host_exclude:
        warnings.append("host_triplet equals triplet; host_exclude is ignored")

    return warnings
