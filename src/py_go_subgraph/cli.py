# Copyright (c) 2025-2026 Gowtham Adamane Rao. All Rights Reserved.
#
# Licensed under the Prosperity Public License 3.0.0 (the "License").
# You may not use this file except in compliance with the License.
# You may obtain a copy of the License in the LICENSE file at the root
# of this repository, or at: https://prosperitylicense.com/versions/3.0.0
#
# Commercial use beyond a 30-day trial requires a separate license.
from pathlib import Path
from typing import List, Optional
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# We wrap the settings import in a try-except block to provide a nicer
# error message if an environment variable holds an invalid value.
try:
    from .config import settings
except Exception as e:
    console = Console()
    console.print(Panel(
        f"[bold red]Configuration Error:[/bold red]\n{e}\n\nPlease check your .env file and the [bold cyan]PYGOSUBGRAPH_*[/bold cyan] environment variables.",
        title="[bold red]Initialization Failed[/bold red]",
        border_style="red"
    ))
    raise SystemExit(1)

from .builder import build_subgraph
from .downloader import download_go_if_needed
from .enrichment import annotate_subgraph, read_enrichment_table, select_seed_terms
from .exporter import SubgraphExporter
from .hetionet import HetionetClient
from .parser import OBOParser


app = typer.Typer(
    name="py-go-subgraph",
    help="Build Gene Ontology subgraphs around enriched terms and place them in the context of Hetionet."
)
console = Console()

@app.command(name="download", help="Download a Gene Ontology release snapshot.")
def download(
    version: Optional[str] = typer.Option(
        None,
        "--version",
        "-v",
        help="The GO release to fetch (e.g., '2023-01-01'). Defaults to the latest configured release."
    )
):
    """
    Downloads the OBO file of a configured GO release into the download directory.
    """
    try:
        obo_path = download_go_if_needed(version)
        console.print(Panel(f"[bold green]GO release available at {obo_path}[/bold green]", border_style="green"))
    except Exception as e:
        console.print_exception()
        console.print(Panel(f"[bold red]Failed to download the GO release: {e}", title="[bold red]Error[/bold red]"))
        raise typer.Exit(code=1)


@app.command(name="build", help="Build and export the GO subgraph around seed terms.")
def build(
    seeds: Optional[List[str]] = typer.Option(
        None, "--seed", "-s", help="Seed GO term ID. Repeat for several seeds."
    ),
    enrichment: Optional[Path] = typer.Option(
        None, "--enrichment", "-e", help="Enrichment result table (CSV or TSV) used for seeds and node colors."
    ),
    top: Optional[int] = typer.Option(
        None, "--top", help="Number of top enriched terms to use as seeds when no --seed is given."
    ),
    qvalue_cutoff: Optional[float] = typer.Option(
        None, "--qvalue-cutoff", help="Only enriched terms below this q-value become seeds."
    ),
    version: Optional[str] = typer.Option(
        None, "--version", "-v", help="GO release to build from. Downloaded if needed."
    ),
    obo: Optional[Path] = typer.Option(
        None, "--obo", help="Local OBO file to build from instead of a downloaded release."
    ),
    direction: str = typer.Option(
        "ancestors", "--direction", "-d", help="Expand seeds towards their 'ancestors' or 'descendants'."
    ),
    namespace: Optional[str] = typer.Option(
        None, "--namespace", "-n", help="Restrict the ontology to one namespace (BP, MF or CC)."
    ),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", "-o", help="Directory the subgraph files are written to."
    ),
):
    """
    Builds the subgraph spanning the seed terms and their ancestors (or descendants),
    colors it by enrichment significance when a table is given, and exports it.
    """
    console.print(Panel(f"[bold cyan]Building GO subgraph ({direction})[/bold cyan]", border_style="cyan"))
    try:
        if obo is None:
            obo = download_go_if_needed(version)
        ontology = OBOParser(obo, namespace=namespace).parse(version=version or "")

        records = read_enrichment_table(enrichment) if enrichment else []
        seed_terms = list(seeds or [])
        if not seed_terms and records:
            seed_terms = select_seed_terms(records, max_terms=top, qvalue_cutoff=qvalue_cutoff)
        if not seed_terms:
            console.print("[bold yellow]No seed terms given or selected; the subgraph will be empty.[/bold yellow]")

        subgraph = build_subgraph(seed_terms, ontology, direction=direction)
        if records:
            subgraph = annotate_subgraph(subgraph, records)

        exporter = SubgraphExporter(output_dir or Path(settings.output_dir))
        paths = exporter.export(subgraph)

        table = Table(title="GO Subgraph")
        table.add_column("Seeds", justify="right")
        table.add_column("Nodes", justify="right")
        table.add_column("Edges", justify="right")
        table.add_row(str(len(subgraph.seeds)), str(len(subgraph.nodes)), str(len(subgraph.edges)))
        console.print(table)
        for path in paths:
            console.print(f"  [green]{path}[/green]")
    except Exception as e:
        console.print_exception()
        console.print(Panel(f"[bold red]An error occurred while building the subgraph: {e}", title="[bold red]Error[/bold red]"))
        raise typer.Exit(code=1)


@app.command(name="hetionet", help="Show Hetionet genes, diseases and compounds linked to a GO term.")
def hetionet(
    term: str = typer.Option(..., "--term", "-t", help="GO term ID (e.g., 'GO:0000280')."),
    limit: int = typer.Option(10, "--limit", help="Number of diseases to list."),
):
    """
    Queries Hetionet for the genes annotated to a GO term, the diseases those
    genes are associated with, and the compounds that treat the top disease.
    """
    console.print(Panel(f"[bold cyan]Hetionet context for {term}[/bold cyan]", border_style="cyan"))
    client = None
    try:
        client = HetionetClient.from_settings()
        genes = client.genes_for_term(term)
        if not genes:
            console.print(f"[bold yellow]No Hetionet genes participate in {term}.[/bold yellow]")
            return
        console.print(f"[bold]Genes ({len(genes)}):[/bold] {', '.join(genes)}")

        diseases = client.diseases_for_genes(genes, limit=limit)
        table = Table(title="Associated Diseases")
        table.add_column("Disease")
        table.add_column("ID")
        table.add_column("Genes", justify="right")
        for association in diseases:
            table.add_row(association.disease_name, association.disease_id, str(association.gene_count))
        console.print(table)

        if diseases:
            compounds = client.compounds_for_disease(diseases[0].disease_id)
            console.print(f"[bold]Compounds treating {diseases[0].disease_name}:[/bold] {', '.join(compounds) or 'none'}")
    except Exception as e:
        console.print_exception()
        console.print(Panel(f"[bold red]Hetionet query failed: {e}", title="[bold red]Error[/bold red]"))
        raise typer.Exit(code=1)
    finally:
        if client:
            client.close()

if __name__ == "__main__":
    app()
