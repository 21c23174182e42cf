"""
Configuration & Path Management
===============================
This module serves as the central registry for file paths and chart constants.

Why is this file needed?
------------------------
1. Abstraction: Sample datasets are located relative to the project root
   instead of hardcoded paths scattered throughout the code.
2. Tuning: The chart dimensions and the cosmetic arc corrections live in one
   ChartConfig object that every layout pass receives explicitly.

Exports:
    ASSETS_PATH (str): Absolute path to the assets directory.
    SAMPLE_CSV_PATH (str): Absolute path to the bundled tabular sample.
    SAMPLE_JSON_PATH (str): Absolute path to the bundled name/imports sample.
    CATEGORY20 (tuple): Default arc palette.
    ChartConfig: Chart constants.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)


def get_resource_path(relative_path: str) -> str:
    """
    Get absolute path to resource, works for dev and for PyInstaller.
    """
    if hasattr(sys, '_MEIPASS'):
        base_path: str = getattr(sys, '_MEIPASS')
        return os.path.join(base_path, relative_path)

    # config.py is in src/edgebundling/
    current_file_path: Path = Path(__file__)
    project_root: Path = current_file_path.parent.parent.parent
    return os.path.join(str(project_root), relative_path)


ASSETS_PATH: str = get_resource_path("assets")
SAMPLE_CSV_PATH: str = os.path.join(ASSETS_PATH, "pages.csv")
SAMPLE_JSON_PATH: str = os.path.join(ASSETS_PATH, "imports.json")

# d3 category20
CATEGORY20: tuple[str, ...] = (
    "#1f77b4", "#aec7e8", "#ff7f0e", "#ffbb78", "#2ca02c",
    "#98df8a", "#d62728", "#ff9896", "#9467bd", "#c5b0d5",
    "#8c564b", "#c49c94", "#e377c2", "#f7b6d2", "#7f7f7f",
    "#c7c7c7", "#bcbd22", "#dbdb8d", "#17becf", "#9edae5",
)

DEFAULT_TENSION: float = 0.85
UNSPECIFIED_CATEGORY: str = "unspecified"


@dataclass
class ChartConfig:
    """
    Every tunable constant of the diagram.

    Radii and widths are in drawing units (pixels for the interactive view),
    angles in degrees.
    """
    # Band between the leaf ring and the outer radius reserved for arcs/labels
    inner_radius_diff: float = 120.0
    arc_width: float = 30.0
    arc_offset: float = 5.0
    arc_labels_padding: float = 5.0
    label_offset: float = 8.0

    tension: float = DEFAULT_TENSION

    # Cosmetic arc corrections, tuned for the seam at 12 o'clock
    first_last_inset_deg: float = 0.5
    seam_correction_deg: float = 2.0

    # Cluster separation between neighbouring leaves of different groups
    group_separation: float = 1.0

    color_set: tuple[str, ...] = field(default_factory=lambda: CATEGORY20)

    # Tabular input schema
    id_field: str = "Page ID"
    name_field: str = "Page Name"
    category_field: str = "Page Type"
    reference_prefix: str = "Link"
    multi_value_separator: str = ";"

    def __post_init__(self) -> None:
        if self.inner_radius_diff < 0:
            raise ValueError("inner_radius_diff must be non-negative.")
        if self.group_separation <= 0:
            raise ValueError("group_separation must be positive.")
        if not self.color_set:
            raise ValueError("color_set must contain at least one color.")
        self.color_set = tuple(self.color_set)

    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["color_set"] = list(self.color_set)
        return d

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> ChartConfig:
        known = {f.name for f in fields(ChartConfig)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown chart config keys: {', '.join(unknown)}")
        return ChartConfig(**{k: v for k, v in data.items() if k in known})


def load_config(filepath: str) -> ChartConfig:
    """Load a ChartConfig from a JSON file; missing keys keep their defaults."""
    logger.info(f"Loading chart config from: {filepath}")
    with open(filepath, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Chart config '{filepath}' must contain a JSON object.")
    return ChartConfig.from_dict(data)


if not os.path.exists(ASSETS_PATH):
    logger.debug(f"Assets path not found at {ASSETS_PATH}")
