# Copyright (c) 2025-2026 Gowtham Adamane Rao. All Rights Reserved.
#
# Licensed under the Prosperity Public License 3.0.0 (the "License").
# You may not use this file except in compliance with the License.
# You may obtain a copy of the License in the LICENSE file at the root
# of this repository, or at: https://prosperitylicense.com/versions/3.0.0
#
# Commercial use beyond a 30-day trial requires a separate license.
from typing import List, Optional
from neo4j import Driver, GraphDatabase, RoutingControl
from rich.console import Console
from .config import settings
from .models import DiseaseAssociation

console = Console()

class HetionetClient:
    """
    Read-only queries that place GO terms in the context of the Hetionet
    knowledge graph (genes, diseases and compounds).
    """

    def __init__(self, driver: Driver, database: Optional[str] = None):
        self.driver = driver
        self.database = database or settings.hetionet_database

    @classmethod
    def from_settings(cls) -> "HetionetClient":
        driver = GraphDatabase.driver(settings.hetionet_uri, auth=(settings.hetionet_user, settings.hetionet_password))
        return cls(driver)

    def close(self):
        self.driver.close()

    def _run_query(self, query: str, params: dict = None) -> list:
        """Helper to run a read query and return its records."""
        records, _, _ = self.driver.execute_query(
            query, parameters_=params, database_=self.database, routing_=RoutingControl.READ
        )
        return records

    def genes_for_term(self, term_id: str) -> List[str]:
        """Symbols of the genes annotated to a GO term (any of the three namespaces)."""
        query = """
        MATCH (g:Gene)-[:PARTICIPATES_GpBP|PARTICIPATES_GpMF|PARTICIPATES_GpCC]->(t {identifier: $term_id})
        RETURN DISTINCT g.name AS symbol
        ORDER BY symbol
        """
        records = self._run_query(query, params={"term_id": term_id})
        console.log(f"Found {len(records)} Hetionet genes participating in {term_id}.")
        return [record["symbol"] for record in records]

    def diseases_for_genes(self, symbols: List[str], limit: int = 10) -> List[DiseaseAssociation]:
        """Diseases associated with the given genes, ranked by how many of them they share."""
        if not symbols:
            return []
        query = """
        MATCH (d:Disease)-[:ASSOCIATES_DaG]-(g:Gene)
        WHERE g.name IN $symbols
        WITH d, collect(DISTINCT g.name) AS genes
        RETURN d.identifier AS disease_id, d.name AS disease_name, size(genes) AS gene_count, genes
        ORDER BY gene_count DESC, disease_name
        LIMIT $limit
        """
        records = self._run_query(query, params={"symbols": list(symbols), "limit": limit})
        return [
            DiseaseAssociation(
                disease_id=record["disease_id"],
                disease_name=record["disease_name"],
                gene_count=record["gene_count"],
                genes=sorted(record["genes"]),
            )
            for record in records
        ]

    def compounds_for_disease(self, disease_id: str) -> List[str]:
        """Names of the compounds Hetionet lists as treating a disease."""
        query = """
        MATCH (c:Compound)-[:TREATS_CtD]->(d:Disease {identifier: $disease_id})
        RETURN c.name AS compound
        ORDER BY compound
        """
        records = self._run_query(query, params={"disease_id": disease_id})
        return [record["compound"] for record in records]
