"""
Configuration file support for gerber-drc.

Provides hierarchical configuration loading from:
1. Project config: .gerber-drc.toml or gerber-drc.toml in project root
2. User config: ~/.config/gerber-drc/config.toml

CLI arguments override config file values, and project config overrides user config.
"""

import tomllib
import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

# Config file names to search for in project directories
CONFIG_FILENAMES = [".gerber-drc.toml", "gerber-drc.toml"]

# User-level config path
USER_CONFIG_PATH = Path.home() / ".config" / "gerber-drc" / "config.toml"

# All known config keys for validation
KNOWN_KEYS = {
    "defaults": {"format", "units", "verbose"},
    "drc": {"rules"},
    "advisor": {"profile", "clearance_analysis"},
}


@dataclass
class DefaultsConfig:
    """Default options for CLI commands."""

    format: str = "table"
    units: str = "mm"
    verbose: bool = False


@dataclass
class DrcConfig:
    """DRC-specific configuration."""

    rules: str = "pcbway"


@dataclass
class AdvisorConfig:
    """Cost advisor configuration."""

    profile: str = "nextpcb-2layer"
    clearance_analysis: bool = False


@dataclass
class Config:
    """Merged configuration from all sources."""

    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    drc: DrcConfig = field(default_factory=DrcConfig)
    advisor: AdvisorConfig = field(default_factory=AdvisorConfig)

    # Track which file each setting came from
    _sources: dict = field(default_factory=dict, repr=False)

    @classmethod
    def load(cls, start_dir: Path | None = None) -> "Config":
        """
        Load configuration with precedence: project > user > defaults.

        Args:
            start_dir: Directory to start searching from (default: current directory)

        Returns:
            Merged configuration object
        """
        if start_dir is None:
            start_dir = Path.cwd()

        config = cls()
        sources: dict[str, str] = {}

        # Load user config first (lower precedence)
        if USER_CONFIG_PATH.exists():
            user_data = _load_toml_file(USER_CONFIG_PATH)
            if user_data:
                _merge_config(config, user_data, str(USER_CONFIG_PATH), sources)

        # Load project config (higher precedence)
        project_config = _find_project_config(start_dir)
        if project_config:
            project_data = _load_toml_file(project_config)
            if project_data:
                _merge_config(config, project_data, str(project_config), sources)

        config._sources = sources
        return config

    def get_source(self, key: str) -> str:
        """Get the source file for a config key."""
        return self._sources.get(key, "default")


class ConfigError(Exception):
    """Configuration-related errors."""

    pass


def _find_project_config(start_dir: Path) -> Path | None:
    """
    Find project config by walking up the directory tree.

    Stops at .git directory or filesystem root.
    """
    current = start_dir.resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        # Stop at .git directory (project root)
        if (current / ".git").exists():
            break

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def _load_toml_file(path: Path) -> dict[str, Any]:
    """
    Load a TOML file.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML
    """
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e


def _merge_section(
    target: Any,
    data: dict[str, Any],
    section: str,
    source: str,
    sources: dict[str, str],
) -> None:
    """Copy known keys of one TOML table onto a config dataclass."""
    _warn_unknown_keys(data, KNOWN_KEYS[section], section, source)
    for key in sorted(KNOWN_KEYS[section]):
        if key in data:
            setattr(target, key, data[key])
            sources[f"{section}.{key}"] = source


def _merge_config(
    config: Config, data: dict[str, Any], source: str, sources: dict[str, str]
) -> None:
    """
    Merge loaded config data into Config object.

    Args:
        config: Config object to update
        data: Raw config data from TOML
        source: Source file path (for tracking)
        sources: Dict to update with source info
    """
    for key in data:
        if key not in KNOWN_KEYS:
            warnings.warn(f"Unknown config key '{key}' in {source}", stacklevel=3)

    if "defaults" in data:
        _merge_section(config.defaults, data["defaults"], "defaults", source, sources)
    if "drc" in data:
        _merge_section(config.drc, data["drc"], "drc", source, sources)
    if "advisor" in data:
        _merge_section(config.advisor, data["advisor"], "advisor", source, sources)


def _warn_unknown_keys(data: dict[str, Any], known: set[str], section: str, source: str) -> None:
    """Warn about unknown keys in a config section."""
    for key in data:
        if key not in known:
            warnings.warn(f"Unknown config key '{section}.{key}' in {source}", stacklevel=5)


def generate_template() -> str:
    """
    Generate a template config file with all options documented.

    Returns:
        Template TOML string
    """
    return """# gerber-drc configuration file
# Place as .gerber-drc.toml in project root or ~/.config/gerber-drc/config.toml for user defaults

[defaults]
# Output format for listings: table, json
# format = "table"

# Display units: mm, mils
# units = "mm"

# Show stack traces on error
# verbose = false

[drc]
# Rule set: built-in name (pcbway, nextpcb) or path to .kicad_dru / .kicad_pro
# rules = "pcbway"

[advisor]
# Manufacturer tier ladder: nextpcb-2layer, nextpcb-4layer or path to a YAML profile
# profile = "nextpcb-2layer"

# Measure copper-to-copper clearance (slow on large boards)
# clearance_analysis = false
"""


def get_config_paths() -> dict[str, Path | None]:
    """
    Get paths to config files that would be loaded.

    Returns:
        Dict with 'user' and 'project' keys
    """
    project_config = _find_project_config(Path.cwd())

    return {
        "user": USER_CONFIG_PATH if USER_CONFIG_PATH.exists() else None,
        "project": project_config,
    }
