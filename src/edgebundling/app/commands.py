"""Messages accepted by DiagramStore.dispatch."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Union

from edgebundling.model.records import Record


@dataclass(frozen=True)
class DataLoaded:
    records: Sequence[Record]


@dataclass(frozen=True)
class Resize:
    width: float
    height: float = 0.0


@dataclass(frozen=True)
class TensionChanged:
    value: float


@dataclass(frozen=True)
class TensionDragged:
    """Horizontal movement of the tension slider handle, in drawing units."""
    dx: float


@dataclass(frozen=True)
class LeafFocused:
    leaf_id: str


@dataclass(frozen=True)
class LeafUnfocused:
    pass


Command = Union[DataLoaded, Resize, TensionChanged, TensionDragged, LeafFocused, LeafUnfocused]
