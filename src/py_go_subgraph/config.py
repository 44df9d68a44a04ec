# Copyright (c) 2025-2026 Gowtham Adamane Rao. All Rights Reserved.
#
# Licensed under the Prosperity Public License 3.0.0 (the "License").
# You may not use this file except in compliance with the License.
# You may obtain a copy of the License in the LICENSE file at the root
# of this repository, or at: https://prosperitylicense.com/versions/3.0.0
#
# Commercial use beyond a 30-day trial requires a separate license.
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Dict, List

class Settings(BaseSettings):
    """
    Manages the application's configuration settings.
    Utilizes Pydantic's BaseSettings to allow for environment variable overrides.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="PYGOSUBGRAPH_"
    )

    # --- Gene Ontology Releases ---
    go_release_base_url: str = Field(
        "http://release.geneontology.org",
        description="Base URL of the Gene Ontology release archive."
    )
    go_releases: List[str] = Field(
        default=["2021-01-01", "2022-01-01", "2023-01-01"],
        description="GO release snapshots (archive directory names) that may be selected with --version."
    )
    go_obo_filename: str = Field("go-basic.obo", description="OBO file fetched from each release.")

    # --- Display ---
    label_wrap_width: int = Field(20, description="Column width used to wrap node labels.")
    seed_node_color: str = Field("#FFFFFF", description="Background color of seed terms.")
    neutral_node_color: str = Field("#D3D3D3", description="Background color of non-seed terms.")
    gradient_low_color: str = Field("#ADD8E6", description="Gradient color for the least significant terms.")
    gradient_high_color: str = Field("#FFA500", description="Gradient color for the most significant terms.")
    gradient_bins: int = Field(100, description="Number of equal-width significance buckets.")
    relation_color_overrides: Dict[str, str] = Field(
        default_factory=dict,
        description="Per relation type edge colors that replace the built-in palette (e.g. {\"is_a\": \"#333333\"})."
    )

    # --- Seed Selection ---
    max_seed_terms: int = Field(10, description="Number of top enriched terms used as seeds.")
    seed_qvalue_cutoff: float = Field(0.05, description="Only terms with a q-value below this are used as seeds.")

    # --- Hetionet (Neo4j) ---
    hetionet_uri: str = Field("bolt://neo4j.het.io:7687", description="Hetionet Neo4j instance URI.")
    hetionet_user: str = Field("neo4j", description="Hetionet username.")
    hetionet_password: str = Field("neo4j", description="Hetionet password.")
    hetionet_database: str = Field("neo4j", description="Hetionet database name.")

    # --- File Paths ---
    download_dir: str = Field("./go_download", description="Directory to store downloaded GO releases.")
    output_dir: str = Field("./subgraph_output", description="Directory the exported subgraph files are written to.")

    @field_validator("gradient_bins", "label_wrap_width")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value < 1:
            raise ValueError("must be a positive integer")
        return value


# Instantiate a global settings object to be used throughout the application
settings = Settings()
