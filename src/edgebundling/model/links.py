"""
Link Resolver
=============
Turns the reference fields of the leaf records into directed links between
leaves. The record holding the reference is the source, the referenced record
the target. References that name no known leaf are dropped; a link is never
emitted with a missing endpoint.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import NamedTuple, Optional

from edgebundling.model.hierarchy import Hierarchy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Link:
    """Directed relation between two leaves, stored as leaf node indices."""
    source: int
    target: int


class UnresolvedReference(NamedTuple):
    source_id: str
    field: str
    value: str


def resolve_links(
    hierarchy: Hierarchy,
    unresolved: Optional[list[UnresolvedReference]] = None,
) -> list[Link]:
    """
    Resolve every reference of every leaf against the identifier index.

    Leaves are visited in tree order and references in schema field order, so
    the result is deterministic for a given hierarchy.

    Args:
        hierarchy: Tree built by `build_hierarchy`.
        unresolved: Optional list that receives the dropped references.

    Returns:
        The resolved links.
    """
    links: list[Link] = []
    dropped = 0

    for leaf in hierarchy.leaves():
        if leaf.record is None:
            continue
        for reference in leaf.record.references:
            target = hierarchy.id_index.get(reference.value)
            if target is None:
                dropped += 1
                logger.debug(
                    f"Reference {reference.field}={reference.value!r} of '{leaf.record.id}' "
                    f"does not resolve to any leaf, skipped."
                )
                if unresolved is not None:
                    unresolved.append(UnresolvedReference(leaf.record.id, reference.field, reference.value))
                continue
            links.append(Link(source=leaf.index, target=target))

    if dropped:
        logger.info(f"Resolved {len(links)} links, dropped {dropped} unresolved references.")
    else:
        logger.debug(f"Resolved {len(links)} links.")
    return links
