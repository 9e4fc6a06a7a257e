"""
Threshold evaluation against saved page snapshots.

Card detection is heuristic, so locator thresholds are tuned against a
corpus of saved promotion pages instead of the live site. Each snapshot
is run through the full pipeline and summarized.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Iterable

from rich.table import Table

from .config import AppConfig
from .runner import extract_promos_from_html


@dataclass
class CorpusReport:
    """Pipeline outcome for one saved page.

    Attributes:
        path: The snapshot file
        promos: Number of records after deduplication
        codes: Codes of those records, in output order
        candidates: Card blocks produced by the locator
        rejected: Candidates that yielded no record
    """
    path: Path
    promos: int
    codes: list[str] = field(default_factory=list)
    candidates: int = 0
    rejected: int = 0


def evaluate_corpus(
    paths: Iterable[Path],
    cfg: AppConfig,
    logger: logging.Logger | None = None,
) -> list[CorpusReport]:
    """Run the pipeline over saved HTML snapshots.

    Args:
        paths: HTML files, or directories whose ``*.html`` files are used
        cfg: Configuration under evaluation
        logger: Optional logger passed to each run

    Returns:
        One report per snapshot, in path order
    """
    reports: list[CorpusReport] = []
    for path in _expand(paths):
        html = path.read_text(encoding="utf-8", errors="replace")
        result = extract_promos_from_html(html, cfg, logger=logger)
        reports.append(
            CorpusReport(
                path=path,
                promos=result.stats.promos,
                codes=[promo.code for promo in result.promos],
                candidates=result.stats.candidates,
                rejected=result.stats.rejected,
            )
        )
    return reports


def render_corpus_table(reports: list[CorpusReport]) -> Table:
    """Render corpus reports as a rich table, empty pages highlighted."""
    table = Table(title="Promo extraction corpus")
    table.add_column("Snapshot")
    table.add_column("Candidates", justify="right")
    table.add_column("Rejected", justify="right")
    table.add_column("Promos", justify="right")
    table.add_column("Codes")
    for report in reports:
        style = "bold red" if report.promos == 0 else None
        table.add_row(
            report.path.name,
            str(report.candidates),
            str(report.rejected),
            str(report.promos),
            ", ".join(report.codes),
            style=style,
        )
    return table


def _expand(paths: Iterable[Path]) -> list[Path]:
    expanded: list[Path] = []
    for path in paths:
        if path.is_dir():
            expanded.extend(sorted(path.glob("*.html")))
        else:
            expanded.append(path)
    return expanded
