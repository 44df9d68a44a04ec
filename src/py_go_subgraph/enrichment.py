# Copyright (c) 2025-2026 Gowtham Adamane Rao. All Rights Reserved.
#
# Licensed under the Prosperity Public License 3.0.0 (the "License").
# You may not use this file except in compliance with the License.
# You may obtain a copy of the License in the LICENSE file at the root
# of this repository, or at: https://prosperitylicense.com/versions/3.0.0
#
# Commercial use beyond a 30-day trial requires a separate license.
"""
Joins enrichment results (ORA or GSEA tables written by clusterProfiler) onto a
subgraph and colors the nodes by significance.
"""
import csv
import math
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from rich.console import Console

from .config import settings
from .models import EnrichmentRecord, Subgraph

console = Console()

# Column names in the order they are tried
ID_COLUMNS = ["ID", "id", "term_id"]
DESCRIPTION_COLUMNS = ["Description", "description"]
RATIO_COLUMNS = ["GeneRatio", "ratio"]
BACKGROUND_RATIO_COLUMNS = ["BgRatio", "background_ratio"]
QVALUE_COLUMNS = ["qvalue", "qvalues", "p.adjust", "padj"]


def parse_ratio(value: Optional[str]) -> Optional[float]:
    """Parses '3/50' style fractions as well as plain numbers. Empty, NA, NaN or Inf gives None."""
    if value is None:
        return None
    value = value.strip()
    if not value or value.upper() == "NA":
        return None
    if "/" in value:
        numerator, denominator = value.split("/", 1)
        denominator_value = float(denominator)
        if denominator_value == 0:
            return None
        number = float(numerator) / denominator_value
    else:
        number = float(value)
    # R writes NaN and Inf for untestable terms
    return number if math.isfinite(number) else None


def _first_present(row: Dict[str, str], columns: List[str]) -> Optional[str]:
    for column in columns:
        if column in row and row[column] not in (None, ""):
            return row[column]
    return None


def read_enrichment_table(path: Path) -> List[EnrichmentRecord]:
    """
    Reads an enrichment result table. Files ending in .tsv or .txt are read as
    tab-separated, everything else as CSV. Rows without a q-value (or adjusted
    p-value) are treated as not significant.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Enrichment table not found at {path}")
    delimiter = "\t" if path.suffix.lower() in (".tsv", ".txt") else ","

    records = []
    with open(path, 'r', newline='', encoding='utf-8') as f:
        reader = csv.DictReader(f, delimiter=delimiter)
        if not reader.fieldnames or not any(col in reader.fieldnames for col in ID_COLUMNS):
            raise ValueError(f"Enrichment table {path.name} has no ID column (expected one of {ID_COLUMNS}).")
        for row in reader:
            term_id = _first_present(row, ID_COLUMNS)
            if not term_id:
                continue
            qvalue = parse_ratio(_first_present(row, QVALUE_COLUMNS))
            records.append(EnrichmentRecord(
                term_id=term_id,
                description=_first_present(row, DESCRIPTION_COLUMNS) or "",
                ratio=parse_ratio(_first_present(row, RATIO_COLUMNS)),
                background_ratio=parse_ratio(_first_present(row, BACKGROUND_RATIO_COLUMNS)),
                qvalue=1.0 if qvalue is None else qvalue,
            ))
    console.log(f"Read {len(records)} enrichment records from {path.name}.")
    return records


def select_seed_terms(
    records: Iterable[EnrichmentRecord],
    max_terms: Optional[int] = None,
    qvalue_cutoff: Optional[float] = None,
) -> List[str]:
    """The most significant term IDs below the cutoff, best first."""
    max_terms = settings.max_seed_terms if max_terms is None else max_terms
    qvalue_cutoff = settings.seed_qvalue_cutoff if qvalue_cutoff is None else qvalue_cutoff
    significant = [r for r in records if r.qvalue < qvalue_cutoff]
    significant.sort(key=lambda r: (r.qvalue, r.term_id))
    selected = []
    for record in significant:
        if len(selected) >= max_terms:
            break
        if record.term_id not in selected:
            selected.append(record.term_id)
    return selected


def neg_log10(qvalue: float) -> float:
    # A q-value of exactly 0 is reported by some engines for very strong hits.
    if qvalue <= 0:
        return -math.log10(math.ulp(0.0))
    return -math.log10(qvalue)


def _hex_to_rgb(color: str) -> Tuple[int, int, int]:
    color = color.lstrip("#")
    return int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)


def color_gradient(low: str, high: str, n: int) -> List[str]:
    """n colors evenly interpolated in RGB space from `low` to `high`, both included."""
    if n == 1:
        return [low.upper()]
    low_rgb, high_rgb = _hex_to_rgb(low), _hex_to_rgb(high)
    colors = []
    for i in range(n):
        fraction = i / (n - 1)
        channels = [round(lo + (hi - lo) * fraction) for lo, hi in zip(low_rgb, high_rgb)]
        colors.append("#{:02X}{:02X}{:02X}".format(*channels))
    return colors


def bucket_index(value: float, minimum: float, maximum: float, bins: int) -> int:
    """Equal-width bucket of `value` within [minimum, maximum]; the maximum falls in the last bucket."""
    if maximum <= minimum:
        return 0
    index = int((value - minimum) / (maximum - minimum) * bins)
    return min(max(index, 0), bins - 1)


def annotate_subgraph(
    subgraph: Subgraph,
    records: Iterable[EnrichmentRecord],
    low_color: Optional[str] = None,
    high_color: Optional[str] = None,
    bins: Optional[int] = None,
) -> Subgraph:
    """
    Returns a copy of the subgraph whose nodes carry the enrichment values and a
    color on the low -> high gradient. Nodes without a record are treated as not
    enriched (q = 1). Buckets span the -log10(q) range observed over the nodes.
    """
    low_color = low_color or settings.gradient_low_color
    high_color = high_color or settings.gradient_high_color
    bins = bins or settings.gradient_bins

    by_term: Dict[str, EnrichmentRecord] = {}
    for record in records:
        # Keep the most significant row when a term is listed more than once
        if record.term_id not in by_term or record.qvalue < by_term[record.term_id].qvalue:
            by_term[record.term_id] = record

    if not subgraph.nodes:
        return subgraph

    scores = {}
    for node in subgraph.nodes:
        record = by_term.get(node.term_id)
        qvalue = record.qvalue if record and math.isfinite(record.qvalue) else 1.0
        scores[node.term_id] = neg_log10(qvalue)
    minimum, maximum = min(scores.values()), max(scores.values())
    palette = color_gradient(low_color, high_color, bins)

    nodes = []
    for node in subgraph.nodes:
        record = by_term.get(node.term_id)
        score = scores[node.term_id]
        nodes.append(node.model_copy(update={
            "ratio": record.ratio if record else None,
            "background_ratio": record.background_ratio if record else None,
            "qvalue": record.qvalue if record and math.isfinite(record.qvalue) else 1.0,
            "neg_log10_qvalue": score,
            "color": palette[bucket_index(score, minimum, maximum, bins)],
        }))

    matched = sum(1 for node in subgraph.nodes if node.term_id in by_term)
    console.log(f"Annotated {matched} of {len(nodes)} nodes with enrichment results.")
    return subgraph.model_copy(update={"nodes": nodes})
