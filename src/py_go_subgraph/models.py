from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

class Term(BaseModel):
    """
    Represents a single GO term as read from an ontology release.
    """
    term_id: str  # Format: GO:0000000
    name: str
    namespace: str = ""
    is_obsolete: bool = False

class TermRelation(BaseModel):
    """
    A single "child -> parent" assertion from the ontology, e.g. an is_a line.
    The relation name is kept as written; it is resolved against RelationType
    only when the edge is colored.
    """
    child_id: str
    parent_id: str
    relation: str

class EnrichmentRecord(BaseModel):
    """
    One row of an enrichment result table (ORA or GSEA).
    """
    term_id: str
    description: str = ""
    ratio: Optional[float] = None  # GeneRatio, e.g. 3/50
    background_ratio: Optional[float] = None  # BgRatio, e.g. 10/1000
    qvalue: float = 1.0

class SubgraphNode(BaseModel):
    """
    A node handed to the renderer. The enrichment fields stay None until the
    annotation pass has run.
    """
    model_config = ConfigDict(frozen=True)

    term_id: str
    label: str = ""
    level: Optional[int] = None
    is_seed: bool = False
    color: str
    ratio: Optional[float] = None
    background_ratio: Optional[float] = None
    qvalue: Optional[float] = None
    neg_log10_qvalue: Optional[float] = None

class SubgraphEdge(BaseModel):
    """
    A directed edge from a child term to its parent.
    """
    model_config = ConfigDict(frozen=True)

    source: str
    target: str
    relation: str
    color: Optional[str] = None  # None when the relation is not a known GO relation type

class Subgraph(BaseModel):
    """
    The induced ontology subgraph around a set of seed terms.
    """
    model_config = ConfigDict(frozen=True)

    seeds: List[str] = Field(default_factory=list)
    nodes: List[SubgraphNode] = Field(default_factory=list)
    edges: List[SubgraphEdge] = Field(default_factory=list)

    @property
    def node_ids(self) -> set:
        return {node.term_id for node in self.nodes}

    def get_node(self, term_id: str) -> Optional[SubgraphNode]:
        for node in self.nodes:
            if node.term_id == term_id:
                return node
        return None

class DiseaseAssociation(BaseModel):
    """
    A Hetionet disease linked to one or more genes of interest.
    """
    disease_id: str
    disease_name: str
    gene_count: int
    genes: List[str]
