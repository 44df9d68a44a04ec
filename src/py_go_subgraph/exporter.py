import csv
import json
from pathlib import Path
from typing import Any, Dict, List
from .models import Subgraph
from rich.console import Console

console = Console()

def _format_optional(value) -> str:
    return "" if value is None else str(value)

class SubgraphExporter:
    """
    Writes a Subgraph to files an external graph renderer can load:
    node and edge CSV tables plus a vis-network style JSON document.
    """
    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        console.log(f"Subgraph output directory set to: {self.output_dir.resolve()}")

    def _write_csv(self, filename: str, header: List[str], rows: List[List[str]]) -> Path:
        """Utility to write data to a CSV file."""
        filepath = self.output_dir / filename
        with open(filepath, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(header)
            writer.writerows(rows)
        console.log(f"Wrote {len(rows)} rows to {filepath.name}")
        return filepath

    def write_nodes_csv(self, subgraph: Subgraph) -> Path:
        header = ["term_id", "label", "level", "is_seed", "color", "ratio", "background_ratio", "qvalue", "neg_log10_qvalue"]
        rows = [
            [
                node.term_id,
                node.label,
                _format_optional(node.level),
                str(node.is_seed).lower(),
                node.color,
                _format_optional(node.ratio),
                _format_optional(node.background_ratio),
                _format_optional(node.qvalue),
                _format_optional(node.neg_log10_qvalue),
            ]
            for node in subgraph.nodes
        ]
        return self._write_csv("nodes.csv", header, rows)

    def write_edges_csv(self, subgraph: Subgraph) -> Path:
        header = ["source", "target", "relation", "color"]
        rows = [
            [edge.source, edge.target, edge.relation, _format_optional(edge.color)]
            for edge in subgraph.edges
        ]
        return self._write_csv("edges.csv", header, rows)

    @staticmethod
    def to_network_document(subgraph: Subgraph) -> Dict[str, Any]:
        """
        Converts the subgraph to the node/edge layout expected by vis-network.
        Seed and enrichment details go into the hover title.
        """
        nodes = []
        for node in subgraph.nodes:
            title = node.term_id
            if node.qvalue is not None:
                title += f"\nq-value: {node.qvalue:.3g}"
            nodes.append({
                "id": node.term_id,
                "label": node.label,
                "level": node.level,
                "color": node.color,
                "title": title,
                "borderWidth": 3 if node.is_seed else 1,
            })
        edges = [
            {
                "from": edge.source,
                "to": edge.target,
                "label": edge.relation,
                "color": edge.color,
                "arrows": "to",
            }
            for edge in subgraph.edges
        ]
        return {"seeds": list(subgraph.seeds), "nodes": nodes, "edges": edges}

    def write_network_json(self, subgraph: Subgraph) -> Path:
        filepath = self.output_dir / "subgraph.json"
        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(self.to_network_document(subgraph), f, indent=2)
        console.log(f"Wrote network document to {filepath.name}")
        return filepath

    def export(self, subgraph: Subgraph) -> List[Path]:
        """
        Orchestrates writing every output file for a subgraph.
        """
        console.log("Exporting subgraph...")
        paths = [
            self.write_nodes_csv(subgraph),
            self.write_edges_csv(subgraph),
            self.write_network_json(subgraph),
        ]
        console.log("[green]Subgraph export complete.[/green]")
        return paths
