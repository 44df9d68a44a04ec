import pytest
from pathlib import Path
from typing import Dict, List, Tuple

from py_go_subgraph.models import Term, TermRelation
from py_go_subgraph.ontology import InMemoryOntology, ROOT_SENTINEL

# A slice of the GO biological_process hierarchy around nuclear division,
# reduced so that every term has a hand-checkable ancestry.
SAMPLE_OBO = """format-version: 1.2
data-version: releases/2023-01-01
ontology: go

[Term]
id: GO:0008150
name: biological_process
namespace: biological_process

[Term]
id: GO:0006996
name: organelle organization
namespace: biological_process
is_a: GO:0008150 ! biological_process

[Term]
id: GO:0048285
name: organelle fission
namespace: biological_process
is_a: GO:0006996 ! organelle organization

[Term]
id: GO:0000280
name: nuclear division
namespace: biological_process
is_a: GO:0048285 ! organelle fission

[Term]
id: GO:0051783
name: regulation of nuclear division
namespace: biological_process
is_a: GO:0008150 ! biological_process
relationship: regulates GO:0000280 ! nuclear division

[Term]
id: GO:0051785
name: positive regulation of nuclear division
namespace: biological_process
is_a: GO:0051783 ! regulation of nuclear division
relationship: positively_regulates GO:0000280 ! nuclear division

[Term]
id: GO:0003674
name: molecular_function
namespace: molecular_function

[Term]
id: GO:0000005
name: obsolete ribosomal chaperone activity
namespace: molecular_function
is_obsolete: true

[Typedef]
id: regulates
name: regulates
is_transitive: true
"""


def make_ontology(relations: List[Tuple[str, str, str]], names: Dict[str, str] = None) -> InMemoryOntology:
    """Builds an InMemoryOntology from (child, parent, relation) triples."""
    names = names or {}
    term_ids = set(names)
    for child, parent, _ in relations:
        term_ids.add(child)
        if parent != ROOT_SENTINEL:
            term_ids.add(parent)
    terms = [Term(term_id=term_id, name=names.get(term_id, term_id.lower())) for term_id in sorted(term_ids)]
    return InMemoryOntology(
        terms,
        [TermRelation(child_id=c, parent_id=p, relation=r) for c, p, r in relations],
    )


@pytest.fixture
def chain_ontology() -> InMemoryOntology:
    """GO:0000280 -> A -> B -> C, where C's only parent is the root sentinel."""
    return make_ontology(
        [
            ("GO:0000280", "A", "is_a"),
            ("A", "B", "is_a"),
            ("B", "C", "is_a"),
            ("C", ROOT_SENTINEL, "is_a"),
        ],
        names={"GO:0000280": "nuclear division", "A": "organelle fission", "B": "organelle organization", "C": "biological_process"},
    )


@pytest.fixture
def diamond_ontology() -> InMemoryOntology:
    """
    Two seeds sharing ancestry through a diamond, plus a regulation edge and a
    relation type GO does not define for this hierarchy.

        ROOT <- R <- X <- S1
                R <- Y <- S1 (part_of)
                     Y <- S2 (negatively_regulates)
                     Y <- Z (occurs_in)
    """
    return make_ontology([
        ("R", ROOT_SENTINEL, "is_a"),
        ("X", "R", "is_a"),
        ("Y", "R", "is_a"),
        ("S1", "X", "is_a"),
        ("S1", "Y", "part_of"),
        ("S2", "Y", "negatively_regulates"),
        ("Z", "Y", "occurs_in"),
    ])


@pytest.fixture
def sample_obo(tmp_path) -> Path:
    obo_path = tmp_path / "go-basic.obo"
    obo_path.write_text(SAMPLE_OBO)
    return obo_path


@pytest.fixture
def ontology_factory():
    return make_ontology
