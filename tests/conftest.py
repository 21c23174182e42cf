"""
Pytest configuration and fixtures for the edge bundling tests.

This module provides:
- A headless matplotlib backend and a Qt core application for the store
- Small hand-built record sets with known layouts
- Paths to the bundled sample datasets
"""
import logging
import os

import matplotlib
matplotlib.use("Agg")

import pytest
from PySide6.QtCore import QCoreApplication

from edgebundling.config import ChartConfig, ASSETS_PATH
from edgebundling.model.hierarchy import build_hierarchy
from edgebundling.model.layout import RadialLayoutEngine, Viewport
from edgebundling.model.records import Record, Reference


def make_records(entries):
    """Records from (id, name, category, [referenced ids]) tuples."""
    return [
        Record(id=rid, name=name, category=category,
               references=tuple(Reference("Link", ref) for ref in refs))
        for rid, name, category, refs in entries
    ]


# ============================================================
# APPLICATION FIXTURES
# ============================================================

@pytest.fixture(scope="session", autouse=True)
def qt_core_app():
    """One Qt core application for every test creating QObjects."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


# ============================================================
# DATA FIXTURES
# ============================================================

@pytest.fixture
def config():
    return ChartConfig()


@pytest.fixture
def scenario_records():
    """
    Three categories with {2, 3, 1} leaves; A's first leaf references B's first.

    Node indices after building: 0 root, 1 A, 2 a1, 3 a2, 4 B, 5 b1, 6 b2,
    7 b3, 8 C, 9 c1.
    """
    return make_records([
        ("1", "a1", "A", ["3"]),
        ("2", "a2", "A", []),
        ("3", "b1", "B", []),
        ("4", "b2", "B", []),
        ("5", "b3", "B", []),
        ("6", "c1", "C", []),
    ])


@pytest.fixture
def linked_records():
    """Records with links inside and across groups, plus one dangling reference."""
    return make_records([
        ("1", "a1", "A", ["2", "3"]),
        ("2", "a2", "A", ["4"]),
        ("3", "b1", "B", ["1", "99"]),
        ("4", "b2", "B", []),
        ("5", "c1", "C", ["3"]),
    ])


@pytest.fixture
def viewport():
    """Outer radius 300, inner radius 180 with the default config."""
    return Viewport(width=600.0, height=600.0)


@pytest.fixture
def laid_out(scenario_records, viewport, config):
    """Scenario hierarchy with layout applied."""
    hierarchy = build_hierarchy(scenario_records)
    RadialLayoutEngine(config).apply(hierarchy, viewport.inner_radius(config))
    return hierarchy


@pytest.fixture
def sample_csv_path():
    return os.path.join(ASSETS_PATH, "pages.csv")


@pytest.fixture
def sample_json_path():
    return os.path.join(ASSETS_PATH, "imports.json")


@pytest.fixture
def restore_logging():
    """Undo `setup_logging` calls made by a test."""
    logger = logging.getLogger("edgebundling")
    level, handlers = logger.level, list(logger.handlers)
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
