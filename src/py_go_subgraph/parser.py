# Copyright (c) 2025-2026 Gowtham Adamane Rao. All Rights Reserved.
#
# Licensed under the Prosperity Public License 3.0.0 (the "License").
# You may not use this file except in compliance with the License.
# You may obtain a copy of the License in the LICENSE file at the root
# of this repository, or at: https://prosperitylicense.com/versions/3.0.0
#
# Commercial use beyond a 30-day trial requires a separate license.
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple
from rich.console import Console

from .models import Term, TermRelation
from .ontology import InMemoryOntology, ROOT_SENTINEL

console = Console()

# GO namespace short codes as used by the GOBP/GOMF/GOCC lookup tables
NAMESPACE_ALIASES = {
    "BP": "biological_process",
    "MF": "molecular_function",
    "CC": "cellular_component",
}


def resolve_namespace(namespace: Optional[str]) -> Optional[str]:
    """Accepts either a short code (BP) or a full namespace name."""
    if namespace is None:
        return None
    return NAMESPACE_ALIASES.get(namespace.upper(), namespace.lower())


def _strip_comment(value: str) -> str:
    """Drops a trailing '! comment' from an OBO tag value."""
    return value.split(" !", 1)[0].strip()


def _iter_stanzas(lines: Iterator[str]) -> Iterator[Tuple[str, List[Tuple[str, str]]]]:
    """Yields (stanza_type, [(tag, value), ...]) for every stanza after the header."""
    stanza_type = None
    tags: List[Tuple[str, str]] = []
    for raw_line in lines:
        line = raw_line.strip()
        if not line or line.startswith("!"):
            continue
        if line.startswith("[") and line.endswith("]"):
            if stanza_type is not None:
                yield stanza_type, tags
            stanza_type = line[1:-1]
            tags = []
            continue
        if stanza_type is None or ":" not in line:
            continue  # header tags or malformed lines
        tag, value = line.split(":", 1)
        tags.append((tag.strip(), value.strip()))
    if stanza_type is not None:
        yield stanza_type, tags


class OBOParser:
    """Parses a Gene Ontology OBO file into an InMemoryOntology."""

    def __init__(self, obo_path: Path, namespace: Optional[str] = None):
        self.obo_path = Path(obo_path)
        self.namespace = resolve_namespace(namespace)

    def _parse_term(self, tags: List[Tuple[str, str]]) -> Tuple[Optional[Term], List[TermRelation]]:
        fields: Dict[str, str] = {}
        relations: List[TermRelation] = []
        for tag, value in tags:
            if tag in ("id", "name", "namespace", "is_obsolete") and tag not in fields:
                fields[tag] = value
            elif tag == "is_a":
                # Trailing {modifier} blocks follow the parent ID
                parts = _strip_comment(value).split()
                if parts:
                    relations.append(("is_a", parts[0]))
            elif tag == "relationship":
                parts = _strip_comment(value).split()
                if len(parts) >= 2:
                    relations.append((parts[0], parts[1]))

        if "id" not in fields:
            return None, []
        term = Term(
            term_id=fields["id"],
            name=fields.get("name", ""),
            namespace=fields.get("namespace", ""),
            is_obsolete=fields.get("is_obsolete", "false").lower() == "true",
        )
        return term, [
            TermRelation(child_id=term.term_id, parent_id=parent_id, relation=relation)
            for relation, parent_id in relations
        ]

    def parse(self, version: str = "") -> InMemoryOntology:
        """
        Reads every [Term] stanza, skipping obsolete terms and terms outside the
        requested namespace. Relations to terms that were skipped are dropped,
        and every term left without a parent is attached to the root sentinel.
        """
        if not self.obo_path.exists():
            raise FileNotFoundError(f"OBO file not found at {self.obo_path}")
        console.log(f"Parsing {self.obo_path.name}...")

        terms: Dict[str, Term] = {}
        relations: List[TermRelation] = []
        with open(self.obo_path, 'r', encoding='utf-8') as f:
            for stanza_type, tags in _iter_stanzas(f):
                if stanza_type != "Term":
                    continue
                term, term_relations = self._parse_term(tags)
                if term is None or term.is_obsolete:
                    continue
                if self.namespace and term.namespace != self.namespace:
                    continue
                terms[term.term_id] = term
                relations.extend(term_relations)

        kept_relations = [
            rel for rel in relations
            if rel.child_id in terms and rel.parent_id in terms
        ]
        has_parent = {rel.child_id for rel in kept_relations}
        root_relations = [
            TermRelation(child_id=term_id, parent_id=ROOT_SENTINEL, relation="is_a")
            for term_id in terms if term_id not in has_parent
        ]

        ontology = InMemoryOntology(terms.values(), kept_relations + root_relations, version=version)
        console.log(
            f"Parsed {len(terms)} terms and {len(kept_relations)} relations "
            f"({len(root_relations)} roots)."
        )
        return ontology
