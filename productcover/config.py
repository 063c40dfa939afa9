"""
Configuration management for substring set-cover runs.

This module handles loading, saving, and validating the run parameters:
the substring length window, the non-overlap constraint, verbosity and the
optional resource bounds.
"""

import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

from .errors import ConfigError


@dataclass
class CoverConfig:
    """Configuration for a set-cover run."""

    # Substring length window
    min_len: int = 3
    max_len: int = 12

    # Drop substring/superstring relatives of every selected substring
    non_overlap: bool = True

    # Progress reporting only, no effect on results
    verbose: bool = False

    # Worker processes for the per-catalog stages (1 = in-process)
    workers: int = 1

    # Upper bound on distinct candidates per catalog (None = unbounded)
    max_candidates: Optional[int] = None

    # Glob used to find catalog files in a folder
    pattern: str = "*.txt"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CoverConfig':
        """Create from dictionary."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(
                f"Unknown configuration keys: {', '.join(unknown)}",
                details={'unknown_keys': unknown}
            )
        return cls(**data)

    def problems(self) -> List[str]:
        """Return every validation problem, empty when the config is valid."""
        errors = []

        for name in ("min_len", "max_len", "workers"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                errors.append(f"{name} must be an integer, got {value!r}")

        if errors:
            return errors

        if self.min_len < 1:
            errors.append(f"min_len must be >= 1, got {self.min_len}")

        if self.max_len < self.min_len:
            errors.append(
                f"max_len must be >= min_len ({self.min_len}), got {self.max_len}"
            )

        if self.workers < 1:
            errors.append(f"workers must be >= 1, got {self.workers}")

        if self.max_candidates is not None:
            if isinstance(self.max_candidates, bool) or not isinstance(self.max_candidates, int):
                errors.append(f"max_candidates must be an integer, got {self.max_candidates!r}")
            elif self.max_candidates < 1:
                errors.append(f"max_candidates must be >= 1, got {self.max_candidates}")

        if not isinstance(self.non_overlap, bool):
            errors.append(f"non_overlap must be a boolean, got {self.non_overlap!r}")

        return errors

    def validate(self) -> 'CoverConfig':
        """
        Validate configuration parameters.

        Returns:
            The config itself, so calls can be chained

        Raises:
            ConfigError: listing every problem found
        """
        errors = self.problems()
        if errors:
            raise ConfigError("; ".join(errors), problems=errors,
                              details={'config': self.to_dict()})
        return self


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("true", "yes", "1", "on"):
        return True
    if lowered in ("false", "no", "0", "off"):
        return False
    raise ValueError(f"not a boolean: {value!r}")


def _parse_optional_int(value: str) -> Optional[int]:
    if value.strip().lower() in ("", "none"):
        return None
    return int(value)


class ConfigManager:
    """Manages set-cover configuration files."""

    DEFAULT_CONFIG_FILE = ".productcover.yml"
    ENV_PREFIX = "PRODUCTCOVER_"

    ENV_OVERRIDES = {
        "MIN_LEN": ("min_len", int),
        "MAX_LEN": ("max_len", int),
        "NON_OVERLAP": ("non_overlap", _parse_bool),
        "WORKERS": ("workers", int),
        "MAX_CANDIDATES": ("max_candidates", _parse_optional_int),
    }

    def __init__(self, config_path: Optional[Path] = None, console: Optional[Console] = None):
        """
        Initialize config manager.

        Args:
            config_path: Path to configuration file
            console: Console used by display()
        """
        self.console = console or Console(stderr=True)
        self.config_path = Path(config_path) if config_path else Path(self.DEFAULT_CONFIG_FILE)
        self._config: Optional[CoverConfig] = None

    def load(self) -> CoverConfig:
        """
        Load configuration from file or create default.

        Environment overrides are applied on top of the file values.

        Returns:
            Loaded or default configuration

        Raises:
            ConfigError: if the file is malformed or an override is invalid
        """
        if self._config is not None:
            return self._config

        if self.config_path.exists():
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(
                    f"Cannot parse config file {self.config_path}: {e}",
                    details={'config_path': str(self.config_path)}
                ) from e
            if data is not None and not isinstance(data, dict):
                raise ConfigError(
                    f"Config file {self.config_path} must contain a mapping",
                    details={'config_path': str(self.config_path)}
                )
            self._config = CoverConfig.from_dict(data or {})
        else:
            self._config = CoverConfig()

        self._apply_env_overrides()

        return self._config

    def save(self, config: Optional[CoverConfig] = None) -> Path:
        """
        Save configuration to file.

        Args:
            config: Configuration to save (uses current if None)

        Returns:
            Path written
        """
        config = config or self._config or CoverConfig()

        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, 'w', encoding='utf-8') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
        self._config = config
        return self.config_path

    def update(self, **kwargs) -> CoverConfig:
        """
        Update configuration parameters.

        Args:
            **kwargs: Parameters to update

        Returns:
            Updated configuration
        """
        config = self.load()
        known = {f.name for f in fields(CoverConfig)}

        for key, value in kwargs.items():
            if key not in known:
                raise ConfigError(f"Unknown parameter '{key}'", details={'parameter': key})
            setattr(config, key, value)

        return config

    def display(self, config: Optional[CoverConfig] = None):
        """
        Display configuration in a formatted panel.

        Args:
            config: Configuration to display (uses current if None)
        """
        config = config or self.load()

        yaml_str = yaml.dump(config.to_dict(), default_flow_style=False, sort_keys=False)

        syntax = Syntax(yaml_str, "yaml", theme="monokai", line_numbers=True)
        panel = Panel(
            syntax,
            title="[bold cyan]Set-Cover Configuration[/bold cyan]",
            border_style="cyan"
        )

        self.console.print(panel)

    def _apply_env_overrides(self):
        """Apply environment variable overrides."""
        if self._config is None:
            return

        for suffix, (attr, parse) in self.ENV_OVERRIDES.items():
            env_name = f"{self.ENV_PREFIX}{suffix}"
            raw = os.getenv(env_name)
            if raw is None:
                continue
            try:
                setattr(self._config, attr, parse(raw))
            except ValueError as e:
                raise ConfigError(
                    f"Invalid value for {env_name}: {raw!r}",
                    details={'variable': env_name, 'value': raw}
                ) from e


def get_config(config_path: Optional[Path] = None) -> CoverConfig:
    """
    Load the configuration for a run.

    Args:
        config_path: Optional path to config file

    Returns:
        Current configuration
    """
    return ConfigManager(config_path).load()


def create_default_config_file(path: Optional[Path] = None) -> Path:
    """
    Create a default configuration file.

    Args:
        path: Path for config file

    Returns:
        Path written
    """
    manager = ConfigManager(path)
    return manager.save(CoverConfig())
