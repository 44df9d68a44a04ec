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
import requests
from rich.progress import Progress, BarColumn, DownloadColumn, TransferSpeedColumn, TimeRemainingColumn
from .config import settings
from rich.console import Console

console = Console()

class GODownloader:
    """
    Handles the download and caching of Gene Ontology release snapshots.
    """

    def __init__(self, base_url: str, download_dir: str, releases: List[str], obo_filename: str = "go-basic.obo"):
        self.base_url = base_url.rstrip("/")
        self.download_dir = Path(download_dir)
        self.download_dir.mkdir(parents=True, exist_ok=True)
        self.releases = list(releases)
        self.obo_filename = obo_filename

    def get_release_url(self, version: str) -> str:
        """Builds the archive URL of the OBO file for a release."""
        if version not in self.releases:
            raise ValueError(f"GO release '{version}' is not configured. "
                             f"Available versions: {self.releases}")
        return f"{self.base_url}/{version}/ontology/{self.obo_filename}"

    def _verify_obo(self, filepath: Path):
        """Checks that a downloaded file is an OBO document rather than an error page."""
        with open(filepath, 'r', encoding='utf-8', errors='ignore') as f:
            first_line = f.readline()
        if not first_line.startswith("format-version:"):
            raise RuntimeError(f"Downloaded file {filepath} is not an OBO file (first line: {first_line.strip()!r}).")

    def download_release(self, version: str) -> Path:
        """
        Downloads the OBO file of a GO release and returns its local path.
        Is idempotent: skips the download if the file is already present.
        """
        download_url = self.get_release_url(version)
        release_dir = self.download_dir / version
        obo_path = release_dir / self.obo_filename

        if obo_path.exists():
            console.log(f"[green]GO release {version} already downloaded at {obo_path}. Skipping.[/green]")
            return obo_path

        release_dir.mkdir(parents=True, exist_ok=True)
        partial_path = obo_path.with_suffix(obo_path.suffix + ".part")
        console.log(f"Downloading {download_url}...")

        with requests.get(download_url, stream=True) as r:
            r.raise_for_status()
            total_size = int(r.headers.get('content-length', 0))
            with Progress(
                "[progress.description]{task.description}",
                BarColumn(),
                DownloadColumn(),
                TransferSpeedColumn(),
                "ETA:", TimeRemainingColumn(),
            ) as progress:
                task = progress.add_task(f"Downloading {self.obo_filename} ({version})", total=total_size or None)
                with open(partial_path, 'wb') as f:
                    for chunk in r.iter_content(chunk_size=8192):
                        f.write(chunk)
                        progress.update(task, advance=len(chunk))

        try:
            self._verify_obo(partial_path)
        except RuntimeError:
            partial_path.unlink()
            raise
        partial_path.rename(obo_path)
        console.log(f"Download complete: {obo_path}")
        return obo_path

def download_go_if_needed(version: Optional[str] = None) -> Path:
    """
    Entry point function to trigger the GO download process using app settings.
    Defaults to the most recent configured release.
    """
    downloader = GODownloader(
        base_url=settings.go_release_base_url,
        download_dir=settings.download_dir,
        releases=settings.go_releases,
        obo_filename=settings.go_obo_filename,
    )
    return downloader.download_release(version or settings.go_releases[-1])
