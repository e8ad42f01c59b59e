"""
Command-line interface for gerber-drc.

    gerber-drc rules [SOURCE]      - List the rules of a rule set and what a DRC run does with them
    gerber-drc profiles [ID]       - Show manufacturer cost-tier ladders
    gerber-drc config              - Show configuration, template and paths

Examples:
    gerber-drc rules pcbway
    gerber-drc rules board.kicad_dru --format json
    gerber-drc profiles nextpcb-4layer --units mils
    gerber-drc config --template > .gerber-drc.toml
"""

import argparse
import sys
from typing import List, Optional

from gerber_drc import __version__
from gerber_drc.config import Config, ConfigError
from gerber_drc.exceptions import GerberDrcError
from gerber_drc.units import get_unit_formatter

from .utils import print_error

__all__ = ["main"]

OUTPUT_FORMATS = ["table", "json"]


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the gerber-drc CLI."""
    parser = argparse.ArgumentParser(
        prog="gerber-drc",
        description="Design rule checks and cost-tier advice for Gerber/Excellon data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--version", action="version", version=f"gerber-drc {__version__}")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show stack traces on error (also: defaults.verbose)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Rules subcommand
    rules_parser = subparsers.add_parser("rules", help="List the rules of a rule set")
    rules_parser.add_argument(
        "source",
        nargs="?",
        help="Built-in rule set name or .kicad_dru/.kicad_pro path (default: from config)",
    )
    rules_parser.add_argument(
        "--format", choices=OUTPUT_FORMATS, help="Output format (default: from config, else table)"
    )
    rules_parser.add_argument("--units", choices=["mm", "mils"], help="Display units")

    # Profiles subcommand
    profiles_parser = subparsers.add_parser("profiles", help="Show manufacturer tier ladders")
    profiles_parser.add_argument("profile_id", nargs="?", help="Profile ID or YAML path")
    profiles_parser.add_argument("--units", choices=["mm", "mils"], help="Display units")

    # Config subcommand
    config_parser = subparsers.add_parser("config", help="Show configuration")
    config_group = config_parser.add_mutually_exclusive_group()
    config_group.add_argument("--template", action="store_true", help="Print a template config")
    config_group.add_argument("--paths", action="store_true", help="Show config file paths")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    config = None
    try:
        if args.command == "config":
            from .config_cmd import run_config

            return run_config(args.template, args.paths)

        config = Config.load()
        fmt = get_unit_formatter(args.units, config)

        if args.command == "rules":
            from .rules_cmd import run_rules

            output_format = args.format or config.defaults.format
            if output_format not in OUTPUT_FORMATS:
                raise ConfigError(
                    f"Invalid defaults.format {output_format!r}; expected one of: "
                    + ", ".join(OUTPUT_FORMATS)
                )
            return run_rules(args.source or config.drc.rules, output_format, fmt)

        if args.command == "profiles":
            from .profiles_cmd import run_profiles

            return run_profiles(args.profile_id, fmt, default_profile=config.advisor.profile)

    except (GerberDrcError, ConfigError, ValueError, FileNotFoundError) as e:
        verbose = args.verbose or (config is not None and config.defaults.verbose)
        print_error(e, verbose=verbose)
        return 1

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
