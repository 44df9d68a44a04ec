# Copyright (c) 2025-2026 Gowtham Adamane Rao. All Rights Reserved.
#
# Licensed under the Prosperity Public License 3.0.0 (the "License").
# You may not use this file except in compliance with the License.
# You may obtain a copy of the License in the LICENSE file at the root
# of this repository, or at: https://prosperitylicense.com/versions/3.0.0
#
# Commercial use beyond a 30-day trial requires a separate license.
"""
Builds the subgraph of an ontology induced by a set of seed terms and their
transitive ancestors (or descendants), ready to be handed to a renderer.
"""
import textwrap
from collections import deque
from typing import Dict, Iterable, Literal, Optional, Set, Tuple

from rich.console import Console

from .config import settings
from .models import Subgraph, SubgraphEdge, SubgraphNode
from .ontology import OntologySource, ROOT_SENTINEL
from .relation_mapper import get_relation_color

console = Console()

Direction = Literal["ancestors", "descendants"]

# (child, parent, relation)
Triple = Tuple[str, str, str]


def wrap_label(label: str, width: int) -> str:
    """Wraps a term name onto several lines of at most `width` columns."""
    return "\n".join(textwrap.wrap(label, width=width))


def collect_relation_triples(
    seed_terms: Iterable[str],
    ontology: OntologySource,
    direction: Direction = "ancestors",
) -> Set[Triple]:
    """
    Breadth-first traversal from the seeds over the parent (or child) relation.
    Every term is expanded once, so the loop ends on any finite DAG.
    Triples touching the root sentinel are not collected.
    """
    if direction not in ("ancestors", "descendants"):
        raise ValueError(f"Unknown direction '{direction}'. Expected 'ancestors' or 'descendants'.")

    triples: Set[Triple] = set()
    visited: Set[str] = set()
    queue = deque(seed_terms)
    while queue:
        term_id = queue.popleft()
        if term_id in visited or term_id == ROOT_SENTINEL:
            continue
        visited.add(term_id)

        if direction == "ancestors":
            neighbours = ontology.parents_of(term_id)
        else:
            neighbours = ontology.children_of(term_id)

        for neighbour, relation in neighbours.items():
            if neighbour == ROOT_SENTINEL:
                continue
            if direction == "ancestors":
                triples.add((term_id, neighbour, relation))
            else:
                triples.add((neighbour, term_id, relation))
            if neighbour not in visited:
                queue.append(neighbour)
    return triples


def build_subgraph(
    seed_terms: Iterable[str],
    ontology: OntologySource,
    direction: Direction = "ancestors",
    wrap_width: Optional[int] = None,
    seed_color: Optional[str] = None,
    neutral_color: Optional[str] = None,
    relation_color_overrides: Optional[Dict[str, str]] = None,
) -> Subgraph:
    """
    Builds the subgraph spanning the seed terms and all of their ancestors
    (direction="ancestors") or descendants (direction="descendants").

    Edges always point from child to parent. Nodes and edges are sorted so that
    identical inputs give identical subgraphs. Terms the ontology does not know
    are kept as nodes with an empty label and no level.
    """
    wrap_width = wrap_width or settings.label_wrap_width
    seed_color = seed_color or settings.seed_node_color
    neutral_color = neutral_color or settings.neutral_node_color
    if relation_color_overrides is None:
        relation_color_overrides = settings.relation_color_overrides

    seeds = {term_id for term_id in seed_terms if term_id != ROOT_SENTINEL}
    if not seeds:
        return Subgraph()

    triples = collect_relation_triples(sorted(seeds), ontology, direction)

    node_ids = set(seeds)
    for child, parent, _ in triples:
        node_ids.add(child)
        node_ids.add(parent)

    nodes = []
    for term_id in sorted(node_ids):
        label = ontology.label_of(term_id) or ""
        nodes.append(SubgraphNode(
            term_id=term_id,
            label=wrap_label(label, wrap_width),
            level=ontology.depth_of(term_id),
            is_seed=term_id in seeds,
            color=seed_color if term_id in seeds else neutral_color,
        ))

    edges = [
        SubgraphEdge(
            source=child,
            target=parent,
            relation=relation,
            color=get_relation_color(relation, relation_color_overrides),
        )
        for child, parent, relation in sorted(triples)
    ]

    uncolored = {edge.relation for edge in edges if edge.color is None}
    if uncolored:
        console.log(f"[yellow]No color defined for relation types: {', '.join(sorted(uncolored))}[/yellow]")

    console.log(f"Built subgraph with {len(nodes)} nodes and {len(edges)} edges from {len(seeds)} seed terms.")
    return Subgraph(seeds=sorted(seeds), nodes=nodes, edges=edges)
