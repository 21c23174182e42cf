"""
Input Records
=============
Defines the immutable entity records the diagram is built from and the
explicit schema describing which fields of a tabular row carry the
identifier, display name, category and references.

Classes:
    Reference: One (field, value) reference of a record.
    Record: A flat, immutable entity.
    RecordSchema: Field mapping for turning raw rows into Records.
"""
from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, NamedTuple, Optional

from edgebundling.config import UNSPECIFIED_CATEGORY

logger = logging.getLogger(__name__)

# Integer literal with an optional all-zero fraction ("42", "-7", "3.0")
_INTEGRAL_LITERAL = re.compile(r"([+-]?)(\d+)(?:\.0*)?")


def normalize_identifier(value: Any) -> str:
    """
    Canonical text form of an identifier or reference value.

    Whitespace is stripped and integral numbers are canonicalised, so that
    "3", "3.0" and " 3 " all name the same record. Digits are parsed exactly,
    so long numeric identifiers never collapse into each other. Returns "" for
    empty values.
    """
    if value is None:
        return ""
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    text = str(value).strip()
    match = _INTEGRAL_LITERAL.fullmatch(text)
    if match is None:
        return text
    sign, digits = match.groups()
    number = int(digits)
    return str(-number if sign == "-" else number)


class Reference(NamedTuple):
    field: str
    value: str


@dataclass(frozen=True)
class Record:
    """A single entity of the input dataset."""
    id: str
    name: str
    category: str
    references: tuple[Reference, ...] = ()


@dataclass(frozen=True)
class RecordSchema:
    """
    Explicit description of a tabular dataset.

    The reference columns are listed by name; detecting them by naming
    convention is the job of the loader (see `from_fieldnames`).
    """
    id_field: str = "Page ID"
    name_field: str = "Page Name"
    category_field: str = "Page Type"
    reference_fields: tuple[str, ...] = ()
    multi_value_separator: Optional[str] = ";"

    def __post_init__(self) -> None:
        object.__setattr__(self, "reference_fields", tuple(self.reference_fields))

        core = (self.id_field, self.name_field, self.category_field)
        if len(set(core)) != len(core):
            raise ValueError(f"Identifier, name and category fields must differ, got {core}.")
        if len(set(self.reference_fields)) != len(self.reference_fields):
            raise ValueError("Reference fields must be unique.")
        clash = set(core) & set(self.reference_fields)
        if clash:
            raise ValueError(f"Fields {sorted(clash)} cannot be both a core field and a reference field.")
        if self.multi_value_separator == "":
            raise ValueError("multi_value_separator must be a non-empty string or None.")

    @staticmethod
    def from_fieldnames(
        fieldnames: Iterable[str],
        reference_prefix: str = "Link",
        *,
        id_field: str = "Page ID",
        name_field: str = "Page Name",
        category_field: str = "Page Type",
        multi_value_separator: Optional[str] = ";",
    ) -> RecordSchema:
        """Build a schema whose reference fields are the columns starting with `reference_prefix`."""
        core = {id_field, name_field, category_field}
        reference_fields = tuple(
            name for name in fieldnames
            if name and name.startswith(reference_prefix) and name not in core
        )
        logger.debug(f"Detected reference fields: {reference_fields}")
        return RecordSchema(
            id_field=id_field,
            name_field=name_field,
            category_field=category_field,
            reference_fields=reference_fields,
            multi_value_separator=multi_value_separator,
        )

    def _split_values(self, raw: Any) -> list[str]:
        if raw is None:
            return []
        if isinstance(raw, (list, tuple)):
            parts = list(raw)
        elif self.multi_value_separator and isinstance(raw, str):
            parts = raw.split(self.multi_value_separator)
        else:
            parts = [raw]
        values = (normalize_identifier(p) for p in parts)
        return [v for v in values if v]

    def parse(self, row: Mapping[str, Any], row_number: int = 0) -> Record:
        """
        Convert one raw row into a Record.

        Missing fields never raise: a missing identifier becomes "#<row_number>",
        a missing name falls back to the identifier and a missing category to
        the "unspecified" category.
        """
        record_id = normalize_identifier(row.get(self.id_field))
        if not record_id:
            record_id = f"#{row_number}"
            logger.debug(f"Row {row_number} has no identifier, using '{record_id}'.")

        name = str(row.get(self.name_field) or "").strip()
        if not name:
            name = record_id
            logger.debug(f"Record '{record_id}' has no name, using its identifier.")

        category = str(row.get(self.category_field) or "").strip()
        if not category:
            category = UNSPECIFIED_CATEGORY
            logger.debug(f"Record '{record_id}' has no category, assigned to '{UNSPECIFIED_CATEGORY}'.")

        references = tuple(
            Reference(field=ref_field, value=value)
            for ref_field in self.reference_fields
            for value in self._split_values(row.get(ref_field))
        )
        return Record(id=record_id, name=name, category=category, references=references)


def records_from_rows(rows: Iterable[Mapping[str, Any]], schema: RecordSchema) -> list[Record]:
    """Parse every row of a dataset; row numbers start at 1."""
    return [schema.parse(row, row_number=i) for i, row in enumerate(rows, start=1)]
