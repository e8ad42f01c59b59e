"""
gerber-drc: design rule checks and cost-tier advice on Gerber and Excellon data.

The checks run on fabrication output rather than on a layout database, so
a board can be verified against a fab's rules exactly as it will be built.

Modules:
    model: Gerber and Excellon document model
    board: Board input (layer mapping, drill files)
    rules: Design rule model, .kicad_dru / .kicad_pro parsers, bundled fab rules
    geometry: Shapely geometry realization and rtree spatial index
    drc: Checks, runner and report
    advisor: Board profiler and manufacturing cost advisor
    manufacturers: Manufacturer cost-tier ladders

Quick Start::

    from gerber_drc import BoardInput, DrcRunner, get_rule_set

    board = BoardInput()
    board.add_gerber_layer("F.Cu", top_copper)
    board.add_drill(drill)

    report = DrcRunner.default().run(get_rule_set("pcbway"), board)
    print(report)
"""

__version__ = "0.1.0"

# Board input
from gerber_drc.board import BoardInput

# Rules
from gerber_drc.rules import RuleSet, get_rule_set, parse_dru, parse_pro

# DRC
from gerber_drc.drc import DrcReport, DrcRunner, Violation

# Cost advisor
from gerber_drc.advisor import CostAdvisor, CostAdvisorReport
from gerber_drc.manufacturers import ManufacturerProfile, get_profile

# Exceptions
from gerber_drc.exceptions import (
    ConfigurationError,
    GerberDrcError,
    ParseError,
    RuleSetNotFoundError,
)

__all__ = [
    "__version__",
    "BoardInput",
    "RuleSet",
    "get_rule_set",
    "parse_dru",
    "parse_pro",
    "DrcRunner",
    "DrcReport",
    "Violation",
    "CostAdvisor",
    "CostAdvisorReport",
    "ManufacturerProfile",
    "get_profile",
    "GerberDrcError",
    "ParseError",
    "ConfigurationError",
    "RuleSetNotFoundError",
]
