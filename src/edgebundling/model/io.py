"""
Input/Output Manager
Loads datasets (tabular CSV or name/imports JSON) into Records and exports the
derived diagram geometry as JSON for renderers outside Python.
"""
from __future__ import annotations

import csv
import json
import logging
from typing import Any, Iterator, Optional, TYPE_CHECKING

from edgebundling.config import ChartConfig
from edgebundling.model.records import Record, RecordSchema, records_from_rows

if TYPE_CHECKING:
    from edgebundling.model.state import DiagramGeometry

logger = logging.getLogger(__name__)

# Rows synthesised from the name/imports hierarchy format
HIERARCHY_SCHEMA = RecordSchema(
    id_field="id",
    name_field="name",
    category_field="category",
    reference_fields=("imports",),
    multi_value_separator=None,
)


class DatasetError(Exception):
    """The input file does not have a supported structure."""


def _hierarchy_row(full_name: Any, imports: Any) -> dict[str, Any]:
    full = str(full_name or "").strip()
    category, _, short = full.rpartition(".")
    return {"id": full, "name": short, "category": category, "imports": imports or []}


def _flatten_tree(node: dict[str, Any], prefix: str = "") -> Iterator[dict[str, Any]]:
    name = str(node.get("name") or "").strip()
    path = f"{prefix}.{name}" if prefix and name else (name or prefix)
    children = node.get("children")
    if children:
        for child in children:
            if not isinstance(child, dict):
                raise DatasetError(f"Hierarchy node under '{path}' is not an object.")
            yield from _flatten_tree(child, path)
    else:
        yield _hierarchy_row(path, node.get("imports"))


def records_from_hierarchy(data: Any) -> list[Record]:
    """
    Records from the name/imports hierarchy format.

    Accepts either a list of {"name": "a.b.Leaf", "imports": [...]} objects or
    a nested {"name": ..., "children": [...]} tree whose leaves carry imports.
    The dotted prefix of a name becomes the category, the last segment the
    display name and the full name the identifier.
    """
    if isinstance(data, list):
        rows = []
        for i, item in enumerate(data):
            if not isinstance(item, dict):
                raise DatasetError(f"Hierarchy entry {i} is not an object.")
            rows.append(_hierarchy_row(item.get("name"), item.get("imports")))
    elif isinstance(data, dict) and "children" in data:
        rows = list(_flatten_tree(data))
    else:
        raise DatasetError("Expected a list of name/imports objects or a nested tree with 'children'.")
    return records_from_rows(rows, HIERARCHY_SCHEMA)


class DatasetLoader:
    @staticmethod
    def load_csv(
        filepath: str,
        schema: Optional[RecordSchema] = None,
        config: Optional[ChartConfig] = None
    ) -> list[Record]:
        """
        Load a tabular dataset.

        Args:
            filepath: CSV file with a header row.
            schema: Explicit field mapping. When omitted it is inferred from the
                header: the columns named in the config are the core fields and
                every column starting with `config.reference_prefix` is a reference.
            config: Chart configuration supplying the default field names.
        """
        logger.info(f"Loading CSV dataset from: {filepath}")
        config = config or ChartConfig()
        try:
            with open(filepath, "r", newline="", encoding="utf-8-sig") as f:
                reader = csv.DictReader(f)
                if schema is None:
                    schema = RecordSchema.from_fieldnames(
                        reader.fieldnames or [],
                        config.reference_prefix,
                        id_field=config.id_field,
                        name_field=config.name_field,
                        category_field=config.category_field,
                        multi_value_separator=config.multi_value_separator or None,
                    )
                records = records_from_rows(reader, schema)
        except Exception as e:
            logger.exception(f"Failed to load CSV dataset: {e}")
            raise

        logger.info(f"Loaded {len(records)} records.")
        return records

    @staticmethod
    def load_hierarchy_json(filepath: str) -> list[Record]:
        logger.info(f"Loading hierarchy dataset from: {filepath}")
        try:
            with open(filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
            records = records_from_hierarchy(data)
        except json.JSONDecodeError as e:
            logger.exception(f"File '{filepath}' is not valid JSON: {e}")
            raise DatasetError(f"File '{filepath}' is not valid JSON.") from e
        except Exception as e:
            logger.exception(f"Failed to load hierarchy dataset: {e}")
            raise

        logger.info(f"Loaded {len(records)} records.")
        return records

    @staticmethod
    def load(filepath: str, config: Optional[ChartConfig] = None) -> list[Record]:
        """Pick the loader from the file extension (.json -> hierarchy, anything else -> CSV)."""
        if filepath.lower().endswith(".json"):
            return DatasetLoader.load_hierarchy_json(filepath)
        return DatasetLoader.load_csv(filepath, config=config)

    @staticmethod
    def export_geometry(geometry: DiagramGeometry, filepath: str) -> None:
        logger.info(f"Exporting diagram geometry to: {filepath}")
        try:
            with open(filepath, "w", encoding="utf-8") as f:
                json.dump(geometry.to_dict(), f, indent=2)
        except Exception as e:
            logger.exception(f"Failed to export geometry: {e}")
            raise
