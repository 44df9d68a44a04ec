"""
Tests for reading enrichment tables and coloring subgraph nodes by significance.
"""
import math
import pytest
from pathlib import Path

from py_go_subgraph.builder import build_subgraph
from py_go_subgraph.config import settings
from py_go_subgraph.enrichment import (
    annotate_subgraph,
    bucket_index,
    color_gradient,
    parse_ratio,
    read_enrichment_table,
    select_seed_terms,
)
from py_go_subgraph.models import EnrichmentRecord

ORA_CSV = """ID,Description,GeneRatio,BgRatio,pvalue,p.adjust,qvalue,geneID,Count
GO:0000280,nuclear division,12/80,300/18000,1e-08,2e-06,1e-06,CDK1/CCNB1,12
GO:0048285,organelle fission,13/80,350/18000,5e-07,5e-05,4e-05,CDK1/CCNB1/DRP1,13
GO:0051783,regulation of nuclear division,4/80,120/18000,0.02,0.2,0.18,AURKA/PLK1,4
"""

GSEA_TSV = (
    "ID\tDescription\tsetSize\tenrichmentScore\tNES\tpvalue\tp.adjust\tqvalues\n"
    "GO:0000280\tnuclear division\t250\t0.61\t2.1\t0.0001\t0.004\t0.003\n"
    "GO:0006996\torganelle organization\t1200\t0.35\t1.4\t0.01\tNA\tNA\n"
)


@pytest.fixture
def ora_table(tmp_path) -> Path:
    path = tmp_path / "ora.csv"
    path.write_text(ORA_CSV)
    return path


def test_parse_ratio():
    assert parse_ratio("3/50") == pytest.approx(0.06)
    assert parse_ratio("0.25") == 0.25
    assert parse_ratio("NA") is None
    assert parse_ratio("") is None
    assert parse_ratio("4/0") is None


def test_read_ora_table(ora_table):
    records = read_enrichment_table(ora_table)
    assert [r.term_id for r in records] == ["GO:0000280", "GO:0048285", "GO:0051783"]

    first = records[0]
    assert first.description == "nuclear division"
    assert first.ratio == pytest.approx(12 / 80)
    assert first.background_ratio == pytest.approx(300 / 18000)
    assert first.qvalue == pytest.approx(1e-06)


def test_read_gsea_table_falls_back_to_qvalues_column(tmp_path):
    path = tmp_path / "gsea.tsv"
    path.write_text(GSEA_TSV)

    records = read_enrichment_table(path)
    assert records[0].qvalue == pytest.approx(0.003)
    assert records[0].ratio is None
    # NA significance means the term was not tested as enriched
    assert records[1].qvalue == 1.0


def test_read_table_without_id_column(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("Term,qvalue\nnuclear division,0.01\n")
    with pytest.raises(ValueError):
        read_enrichment_table(path)


def test_read_missing_table(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_enrichment_table(tmp_path / "missing.csv")


def test_select_seed_terms():
    records = [
        EnrichmentRecord(term_id="A", qvalue=0.001),
        EnrichmentRecord(term_id="B", qvalue=0.2),
        EnrichmentRecord(term_id="C", qvalue=0.01),
        EnrichmentRecord(term_id="D", qvalue=0.03),
    ]
    assert select_seed_terms(records, max_terms=2, qvalue_cutoff=0.05) == ["A", "C"]
    assert select_seed_terms(records, max_terms=10, qvalue_cutoff=0.05) == ["A", "C", "D"]
    assert select_seed_terms(records, max_terms=10, qvalue_cutoff=0.0001) == []


def test_select_seed_terms_uses_settings(monkeypatch):
    monkeypatch.setattr(settings, "max_seed_terms", 1)
    monkeypatch.setattr(settings, "seed_qvalue_cutoff", 0.5)
    records = [EnrichmentRecord(term_id="B", qvalue=0.2), EnrichmentRecord(term_id="A", qvalue=0.3)]
    assert select_seed_terms(records) == ["B"]


def test_color_gradient_endpoints():
    colors = color_gradient("#000000", "#ffffff", 3)
    assert colors == ["#000000", "#808080", "#FFFFFF"]
    assert len(color_gradient("#ADD8E6", "#FFA500", 100)) == 100


def test_bucket_index():
    assert bucket_index(0.0, 0.0, 10.0, 100) == 0
    assert bucket_index(5.0, 0.0, 10.0, 100) == 50
    assert bucket_index(10.0, 0.0, 10.0, 100) == 99
    # A zero-width range puts everything in the first bucket
    assert bucket_index(3.0, 3.0, 3.0, 100) == 0


def test_annotation_defaults_missing_terms_to_lightest_shade(chain_ontology):
    subgraph = build_subgraph({"GO:0000280"}, chain_ontology)
    records = [
        EnrichmentRecord(term_id="GO:0000280", ratio=0.15, background_ratio=0.02, qvalue=0.001),
        EnrichmentRecord(term_id="A", qvalue=0.01),
        EnrichmentRecord(term_id="C", qvalue=1.0),
    ]

    annotated = annotate_subgraph(subgraph, records, low_color="#ADD8E6", high_color="#FFA500", bins=100)
    palette = color_gradient("#ADD8E6", "#FFA500", 100)

    b = annotated.get_node("B")
    assert b.qvalue == 1.0
    assert b.neg_log10_qvalue == 0
    assert b.ratio is None
    assert b.color == palette[0] == "#ADD8E6"

    seed = annotated.get_node("GO:0000280")
    assert seed.neg_log10_qvalue == pytest.approx(3.0)
    assert seed.ratio == 0.15
    assert seed.color == palette[-1] == "#FFA500"

    # -log10(0.01) = 2 sits two thirds of the way up the 0..3 range
    assert annotated.get_node("A").color == palette[66]


def test_annotation_returns_a_new_subgraph(chain_ontology):
    subgraph = build_subgraph({"GO:0000280"}, chain_ontology)
    annotated = annotate_subgraph(subgraph, [EnrichmentRecord(term_id="A", qvalue=0.01)])

    assert subgraph.get_node("A").qvalue is None
    assert subgraph.get_node("A").color == settings.neutral_node_color
    assert annotated.get_node("A").qvalue == 0.01
    assert annotated.edges == subgraph.edges


def test_annotation_keeps_most_significant_duplicate(chain_ontology):
    subgraph = build_subgraph({"GO:0000280"}, chain_ontology)
    records = [
        EnrichmentRecord(term_id="A", qvalue=0.04),
        EnrichmentRecord(term_id="A", qvalue=0.0001),
    ]
    annotated = annotate_subgraph(subgraph, records)
    assert annotated.get_node("A").qvalue == 0.0001


def test_zero_qvalue_is_finite(chain_ontology):
    subgraph = build_subgraph({"GO:0000280"}, chain_ontology)
    annotated = annotate_subgraph(subgraph, [EnrichmentRecord(term_id="GO:0000280", qvalue=0.0)])
    assert math.isfinite(annotated.get_node("GO:0000280").neg_log10_qvalue)


def test_annotating_empty_subgraph(chain_ontology):
    subgraph = build_subgraph(set(), chain_ontology)
    assert annotate_subgraph(subgraph, [EnrichmentRecord(term_id="A", qvalue=0.01)]).nodes == []


def test_nan_qvalue_is_treated_as_not_enriched(tmp_path, chain_ontology):
    path = tmp_path / "nan.csv"
    path.write_text(
        "ID,Description,GeneRatio,BgRatio,pvalue,p.adjust,qvalue\n"
        "GO:0000280,nuclear division,NaN,300/18000,NaN,NaN,NaN\n"
        "A,organelle fission,5/80,350/18000,0.001,0.01,Inf\n"
    )

    records = read_enrichment_table(path)
    assert records[0].qvalue == 1.0
    assert records[0].ratio is None
    assert records[1].qvalue == 1.0
    assert parse_ratio("NaN") is None

    annotated = annotate_subgraph(build_subgraph({"GO:0000280"}, chain_ontology), records)
    assert annotated.get_node("GO:0000280").color == color_gradient(
        settings.gradient_low_color, settings.gradient_high_color, settings.gradient_bins
    )[0]


def test_annotation_tolerates_non_finite_records(chain_ontology):
    subgraph = build_subgraph({"GO:0000280"}, chain_ontology)
    annotated = annotate_subgraph(subgraph, [
        EnrichmentRecord(term_id="GO:0000280", qvalue=float("nan")),
        EnrichmentRecord(term_id="A", qvalue=0.01),
    ])
    seed = annotated.get_node("GO:0000280")
    assert seed.qvalue == 1.0
    assert seed.neg_log10_qvalue == 0


def test_select_seed_terms_with_zero_limit():
    records = [EnrichmentRecord(term_id="A", qvalue=0.001), EnrichmentRecord(term_id="B", qvalue=0.01)]
    assert select_seed_terms(records, max_terms=0, qvalue_cutoff=0.05) == []
