# Copyright (c) 2025-2026 Gowtham Adamane Rao. All Rights Reserved.
#
# Licensed under the Prosperity Public License 3.0.0 (the "License").
# You may not use this file except in compliance with the License.
# You may obtain a copy of the License in the LICENSE file at the root
# of this repository, or at: https://prosperitylicense.com/versions/3.0.0
#
# Commercial use beyond a 30-day trial requires a separate license.
"""
Lookup capability over a single ontology release.

The builder never reaches for global lookup tables; it is handed an object that
satisfies OntologySource. InMemoryOntology is the implementation produced by the
OBO parser and is also convenient for fabricating small ontologies in tests.
"""
from collections import defaultdict, deque
from typing import Dict, Iterable, Optional, Protocol, Set

from .models import Term, TermRelation

# Universal parent of the namespace roots, as in GO.db's ancestor tables.
ROOT_SENTINEL = "all"


class OntologySource(Protocol):
    def parents_of(self, term_id: str) -> Dict[str, str]:
        """Direct parents of a term mapped to the relation that links them."""
        ...

    def children_of(self, term_id: str) -> Dict[str, str]:
        """Direct children of a term mapped to the relation that links them."""
        ...

    def label_of(self, term_id: str) -> Optional[str]:
        ...

    def depth_of(self, term_id: str) -> Optional[int]:
        ...


class InMemoryOntology:
    """
    An OntologySource backed by dictionaries held in memory.
    """

    def __init__(self, terms: Iterable[Term] = (), relations: Iterable[TermRelation] = (), version: str = ""):
        self.version = version
        self._terms: Dict[str, Term] = {}
        self._parents: Dict[str, Dict[str, str]] = defaultdict(dict)
        self._children: Dict[str, Dict[str, str]] = defaultdict(dict)
        self._depths: Optional[Dict[str, int]] = None
        for term in terms:
            self.add_term(term)
        for relation in relations:
            self.add_relation(relation)

    def __len__(self) -> int:
        return len(self._terms)

    def __contains__(self, term_id: str) -> bool:
        return term_id in self._terms

    def add_term(self, term: Term):
        self._terms[term.term_id] = term
        self._depths = None

    def add_relation(self, relation: TermRelation):
        # A pair of terms keeps the first relation asserted between them.
        self._parents[relation.child_id].setdefault(relation.parent_id, relation.relation)
        self._children[relation.parent_id].setdefault(relation.child_id, relation.relation)
        self._depths = None

    def get_term(self, term_id: str) -> Optional[Term]:
        return self._terms.get(term_id)

    def parents_of(self, term_id: str) -> Dict[str, str]:
        return dict(self._parents.get(term_id, {}))

    def children_of(self, term_id: str) -> Dict[str, str]:
        return dict(self._children.get(term_id, {}))

    def label_of(self, term_id: str) -> Optional[str]:
        term = self._terms.get(term_id)
        return term.name if term else None

    def depth_of(self, term_id: str) -> Optional[int]:
        if self._depths is None:
            self._depths = self._compute_depths()
        return self._depths.get(term_id)

    def ancestors_of(self, term_id: str) -> Set[str]:
        """All transitive parents of a term, excluding the root sentinel."""
        return self._closure(term_id, self._parents)

    def descendants_of(self, term_id: str) -> Set[str]:
        """All transitive children of a term."""
        return self._closure(term_id, self._children)

    def _closure(self, term_id: str, edges: Dict[str, Dict[str, str]]) -> Set[str]:
        seen: Set[str] = set()
        queue = deque([term_id])
        while queue:
            current = queue.popleft()
            for neighbour in edges.get(current, {}):
                if neighbour == ROOT_SENTINEL or neighbour in seen:
                    continue
                seen.add(neighbour)
                queue.append(neighbour)
        return seen

    def _compute_depths(self) -> Dict[str, int]:
        """
        Level of every term: 1 for a namespace root, otherwise one more than the
        shortest path to a root. Terms whose only parent is the sentinel count as roots.
        """
        roots = [
            term_id for term_id in self._terms
            if not (set(self._parents.get(term_id, {})) - {ROOT_SENTINEL})
        ]
        depths: Dict[str, int] = {root: 1 for root in roots}
        queue = deque(roots)
        while queue:
            current = queue.popleft()
            for child in self._children.get(current, {}):
                if child not in depths:
                    depths[child] = depths[current] + 1
                    queue.append(child)
        return depths
