"""
Config command: template and search paths.

Usage:
    gerber-drc config --template    Print a documented template config
    gerber-drc config --paths       Show config file paths
"""

from __future__ import annotations

from pathlib import Path

from gerber_drc.config import (
    CONFIG_FILENAMES,
    USER_CONFIG_PATH,
    Config,
    generate_template,
    get_config_paths,
)


def run_config(template: bool, paths: bool) -> int:
    if template:
        print(generate_template(), end="")
        return 0
    if paths:
        return _show_paths()
    return _show_config()


def _show_paths() -> int:
    """Show config file paths."""
    found = get_config_paths()

    print("Config file paths:")
    print()

    print(f"User config: {USER_CONFIG_PATH}")
    print(f"  Status: {'exists' if found['user'] else 'not found'}")
    print()

    print(f"Project config search: {', '.join(CONFIG_FILENAMES)}")
    if found["project"]:
        print(f"  Found: {found['project']}")
    else:
        print("  Status: not found")

    return 0


def _show_config() -> int:
    """Show effective configuration with sources."""
    config = Config.load()

    print("# Effective gerber-drc configuration")
    for section_name in ("defaults", "drc", "advisor"):
        section = getattr(config, section_name)
        print()
        print(f"[{section_name}]")
        for key, value in vars(section).items():
            _print_value(key, value, config.get_source(f"{section_name}.{key}"))

    return 0


def _print_value(key: str, value, source: str) -> None:
    """Print a config value with its source."""
    if isinstance(value, bool):
        formatted = "true" if value else "false"
    elif isinstance(value, str):
        formatted = f'"{value}"'
    else:
        formatted = str(value)

    source_display = Path(source).name if source != "default" else source
    print(f"{key} = {formatted}  # from: {source_display}")
