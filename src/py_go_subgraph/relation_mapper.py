# Copyright (c) 2025-2026 Gowtham Adamane Rao. All Rights Reserved.
#
# Licensed under the Prosperity Public License 3.0.0 (the "License").
# You may not use this file except in compliance with the License.
# You may obtain a copy of the License in the LICENSE file at the root
# of this repository, or at: https://prosperitylicense.com/versions/3.0.0
#
# Commercial use beyond a 30-day trial requires a separate license.
"""
This module provides the closed set of Gene Ontology relation types and their
display colors.

Relation names arrive in several spellings depending on the source: OBO files use
``is_a`` and ``part_of``, GO.db style lookup tables use ``isa``, and rendered
legends use ``is-a``. Everything is normalized to the OBO spelling before lookup.
"""
from enum import Enum
from typing import Dict, Optional


class RelationType(str, Enum):
    """A directed, typed GO edge from a child term to its parent."""
    IS_A = "is_a"
    POSITIVELY_REGULATES = "positively_regulates"
    NEGATIVELY_REGULATES = "negatively_regulates"
    REGULATES = "regulates"
    PART_OF = "part_of"
    HAS_PART = "has_part"


# Every member of RelationType has a color.
RELATION_TYPE_COLORS: Dict[RelationType, str] = {
    RelationType.IS_A: "#000000",
    RelationType.POSITIVELY_REGULATES: "#2E8B57",
    RelationType.NEGATIVELY_REGULATES: "#DC143C",
    RelationType.REGULATES: "#DAA520",
    RelationType.PART_OF: "#1E90FF",
    RelationType.HAS_PART: "#8A2BE2",
}

# Spellings seen in the wild that do not normalize mechanically.
RELATION_ALIASES = {
    "isa": RelationType.IS_A,
    "is_a": RelationType.IS_A,
    "subclass_of": RelationType.IS_A,
    "partof": RelationType.PART_OF,
    "haspart": RelationType.HAS_PART,
}


def normalize_relation(relation: str) -> str:
    """Lower-cases a relation name and joins its words with underscores."""
    return "_".join(relation.strip().lower().replace("-", " ").split())


def parse_relation_type(relation: str) -> Optional[RelationType]:
    """Maps a raw relation name to a RelationType, or None if it is not a known GO relation."""
    normalized = normalize_relation(relation)
    if normalized in RELATION_ALIASES:
        return RELATION_ALIASES[normalized]
    try:
        return RelationType(normalized)
    except ValueError:
        return None


def get_relation_color(relation: str, overrides: Optional[Dict[str, str]] = None) -> Optional[str]:
    """
    Returns the display color for a relation name.

    Relations outside the RelationType enumeration have no color and yield None;
    the edge is still kept so the caller decides how to render it.
    """
    relation_type = parse_relation_type(relation)
    if relation_type is None:
        return None
    if overrides:
        for name, color in overrides.items():
            if parse_relation_type(name) is relation_type:
                return color
    return RELATION_TYPE_COLORS[relation_type]
