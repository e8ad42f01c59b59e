"""
Board input for the DRC runner and the cost advisor.

A BoardInput is an insertion-ordered mapping from canonical KiCad layer
name (``F.Cu``, ``In1.Cu``, ``Edge.Cuts``, ...) to Gerber document, plus
an ordered list of drill documents. Layers can be added explicitly or
mapped from a Gerber X2 file function, a filename, or an Altium-style
extension.

Example::

    board = (
        BoardInput()
        .add_gerber_layer("F.Cu", front_copper)
        .add_gerber_layer_auto(outline)  # FileFunction "Profile,NP"
        .add_drill(drill)
    )
"""

from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Mapping, Optional

from .model import DrillDocument, GerberDocument

logger = logging.getLogger(__name__)

__all__ = [
    "BoardInput",
    "EDGE_CUTS",
    "DRILL",
    "is_outer_layer",
    "is_inner_layer",
    "is_copper_layer",
    "map_file_function",
    "map_filename_to_layer",
    "map_altium_extension",
]

EDGE_CUTS = "Edge.Cuts"
DRILL = "Drill"

OUTER_LAYERS = frozenset({"F.Cu", "B.Cu"})


def is_outer_layer(layer_name: str) -> bool:
    """True for F.Cu and B.Cu."""
    return layer_name in OUTER_LAYERS


def is_inner_layer(layer_name: str) -> bool:
    """True for In1.Cu .. InN.Cu."""
    return layer_name.startswith("In") and layer_name.endswith(".Cu")


def is_copper_layer(layer_name: str) -> bool:
    """True for any copper layer."""
    return layer_name.endswith(".Cu")


# Substring table for filename fallback, checked in order.
_FILENAME_PATTERNS: tuple[tuple[tuple[str, ...], tuple[str, ...], str], ...] = (
    # (substrings, suffixes, layer)
    (("gtl", "f_cu"), (".top",), "F.Cu"),
    (("gbl", "b_cu"), (".bot", ".bottom"), "B.Cu"),
    (("g2", "in1"), (), "In1.Cu"),
    (("g3", "in2"), (), "In2.Cu"),
    (("gto", "f_silks"), (), "F.Silkscreen"),
    (("gbo", "b_silks"), (), "B.Silkscreen"),
    (("gts", "f_mask"), (), "F.Mask"),
    (("gbs", "b_mask"), (), "B.Mask"),
    (("gtp", "f_paste"), (), "F.Paste"),
    (("gbp", "b_paste"), (), "B.Paste"),
    (("gko", "gm1", "edge"), (), EDGE_CUTS),
)

_ALTIUM_EXTENSIONS: dict[str, str] = {
    "GTL": "F.Cu",
    "GBL": "B.Cu",
    "GTO": "F.Silkscreen",
    "GBO": "B.Silkscreen",
    "GTS": "F.Mask",
    "GBS": "B.Mask",
    "GTP": "F.Paste",
    "GBP": "B.Paste",
    "GKO": EDGE_CUTS,
    "G1": "In1.Cu",
    "G2": "In2.Cu",
    "G3": "In3.Cu",
    "G4": "In4.Cu",
    "GP1": "In5.Cu",
    "GP2": "In6.Cu",
    "GP3": "In7.Cu",
    "GP4": "In8.Cu",
}

_COPPER_INDEX = re.compile(r"L(\d+)", re.IGNORECASE)


def map_file_function(file_function: Optional[str]) -> Optional[str]:
    """Map a Gerber X2 ``.FileFunction`` value to a canonical layer name.

    Args:
        file_function: Attribute value such as "Copper,L1,Top" or "Profile,NP"

    Returns:
        Canonical layer name, or None when the function is not a board layer
    """
    if file_function is None:
        return None
    lower = file_function.lower().strip()

    if lower.startswith("copper"):
        if "top" in lower or "l1" in lower:
            return "F.Cu"
        if "bot" in lower or "l2" in lower:
            return "B.Cu"
        # "Copper,L3,Inr" -> In2.Cu
        for part in file_function.split(","):
            match = _COPPER_INDEX.fullmatch(part.strip())
            if match:
                number = int(match.group(1))
                if number > 1:
                    return f"In{number - 1}.Cu"

    if lower.startswith("legend") or lower.startswith("silkscreen"):
        if "top" in lower:
            return "F.Silkscreen"
        if "bot" in lower:
            return "B.Silkscreen"

    if lower.startswith("soldermask"):
        if "top" in lower:
            return "F.Mask"
        if "bot" in lower:
            return "B.Mask"

    if lower.startswith("paste"):
        if "top" in lower:
            return "F.Paste"
        if "bot" in lower:
            return "B.Paste"

    if lower.startswith("profile") or lower.startswith("outline"):
        return EDGE_CUTS

    return None


def map_filename_to_layer(filename: Optional[str]) -> Optional[str]:
    """Map a fabrication filename to a canonical layer name.

    Uses case-insensitive substring matching on common naming conventions
    (Protel extensions, KiCad plot suffixes).

    Returns:
        Canonical layer name, or None when nothing matches
    """
    if filename is None:
        return None
    lower = filename.lower()

    for substrings, suffixes, layer in _FILENAME_PATTERNS:
        if any(s in lower for s in substrings) or lower.endswith(suffixes):
            return layer
    return None


def map_altium_extension(filename: Optional[str]) -> Optional[str]:
    """Map an Altium-style file extension (``.GTL``, ``.G1``, ``.GP1``...) to a layer.

    Mechanical (GM*), pad master (GPT/GPB), drill drawing (GD*/GG*) and
    aperture files are not board layers and return None.
    """
    if filename is None:
        return None
    dot = filename.rfind(".")
    if dot < 0 or dot == len(filename) - 1:
        return None
    return _ALTIUM_EXTENSIONS.get(filename[dot + 1 :].upper())


class BoardInput:
    """Layers and drill files of one board, as consumed by the checks.

    The board is built once and treated as read-only during a run.
    """

    def __init__(self) -> None:
        self._layers: dict[str, GerberDocument] = {}
        self._drill_files: list[DrillDocument] = []

    def add_gerber_layer(self, layer_name: str, doc: GerberDocument) -> BoardInput:
        """Add (or replace) a Gerber document under a canonical layer name."""
        if layer_name in self._layers:
            logger.debug(f"Replacing existing document for layer {layer_name}")
        self._layers[layer_name] = doc
        return self

    def add_gerber_layer_auto(self, doc: GerberDocument) -> BoardInput:
        """Add a Gerber document using its X2 file function.

        Documents without a file function, or with a function that maps to
        no board layer, are ignored.
        """
        layer_name = map_file_function(doc.file_function)
        if layer_name is None:
            logger.debug(f"No layer mapping for file function {doc.file_function!r}")
            return self
        return self.add_gerber_layer(layer_name, doc)

    def add_gerber_file(self, filename: str, doc: GerberDocument) -> Optional[str]:
        """Add a Gerber document, resolving its layer from every source available.

        Tries the X2 file function, then the filename table, then the
        Altium extension table.

        Returns:
            The layer the document was stored under, or None if unmapped
        """
        layer_name = (
            map_file_function(doc.file_function)
            or map_filename_to_layer(filename)
            or map_altium_extension(filename)
        )
        if layer_name is None:
            logger.info(f"Skipping {filename}: no layer mapping")
            return None
        self.add_gerber_layer(layer_name, doc)
        return layer_name

    def add_drill(self, doc: DrillDocument) -> BoardInput:
        """Append a drill document."""
        self._drill_files.append(doc)
        return self

    @property
    def layers(self) -> Mapping[str, GerberDocument]:
        """Read-only view of the layers in insertion order."""
        return MappingProxyType(self._layers)

    @property
    def drill_files(self) -> list[DrillDocument]:
        return list(self._drill_files)

    def get_layer(self, layer_name: str) -> Optional[GerberDocument]:
        """Exact lookup by canonical layer name."""
        return self._layers.get(layer_name)

    def copper_layers(self) -> list[tuple[str, GerberDocument]]:
        """Copper layers in insertion order."""
        return [(name, doc) for name, doc in self._layers.items() if is_copper_layer(name)]

    def __repr__(self) -> str:
        return f"BoardInput(layers={list(self._layers)}, drill_files={len(self._drill_files)})"
