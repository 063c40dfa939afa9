"""Result assembly and report generation for set-cover runs."""

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml
from rich.console import Console
from rich.table import Table

from .catalog import Catalog
from .selection import SelectionResult, STOP_EXHAUSTED, STOP_NO_GAIN


class NoteSeverity(Enum):
    """Note severity levels."""
    INFO = 1
    WARNING = 2


NOTE_SUMMARY = "summary"
NOTE_PARTIAL_COVERAGE = "partial_coverage"
NOTE_EMPTY_UNIVERSE = "empty_universe"
NOTE_SHORT_PARTS = "short_parts"


@dataclass
class Note:
    """A non-fatal observation attached to one catalog's result."""

    kind: str
    message: str
    severity: NoteSeverity = NoteSeverity.INFO
    evidence: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "message": self.message,
            "severity": self.severity.name.lower(),
            "evidence": self.evidence,
        }

    def __str__(self) -> str:
        return self.message


@dataclass
class CatalogResult:
    """Selection and coverage for one product catalog."""

    product_name: str
    parts: List[str]
    selected: List[str]
    covered_index: List[bool]
    notes: List[Note] = field(default_factory=list)
    candidate_count: int = 0
    exclusive_count: int = 0

    @property
    def uncovered_count(self) -> int:
        return sum(1 for covered in self.covered_index if not covered)

    @property
    def uncovered_parts(self) -> List[str]:
        return [part for part, covered in zip(self.parts, self.covered_index) if not covered]

    @property
    def coverage_ratio(self) -> float:
        if not self.parts:
            return 1.0
        return (len(self.parts) - self.uncovered_count) / len(self.parts)

    @property
    def summary(self) -> str:
        return (
            f"Selected {len(self.selected)} substrings. "
            f"Uncovered parts: {self.uncovered_count} of {len(self.parts)}."
        )

    @property
    def warnings(self) -> List[Note]:
        return [note for note in self.notes if note.severity is NoteSeverity.WARNING]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON/YAML serialization."""
        return {
            "product_name": self.product_name,
            "parts": list(self.parts),
            "selected": list(self.selected),
            "covered_index": [bool(c) for c in self.covered_index],
            "uncovered_count": self.uncovered_count,
            "candidate_count": self.candidate_count,
            "exclusive_count": self.exclusive_count,
            "notes": [note.to_dict() for note in self.notes],
        }


def assemble_result(
    catalog: Catalog,
    selection: SelectionResult,
    candidate_count: int,
    exclusive_count: int,
    min_len: int,
) -> CatalogResult:
    """
    Package a selection into a CatalogResult with explanatory notes.

    Args:
        catalog: The catalog the selection was made for
        selection: Greedy loop outcome
        candidate_count: Candidates generated before filtering
        exclusive_count: Candidates left after cross-catalog filtering
        min_len: Shortest substring length of the run

    Returns:
        CatalogResult
    """
    result = CatalogResult(
        product_name=catalog.name,
        parts=list(catalog.parts),
        selected=list(selection.selected),
        covered_index=[bool(c) for c in selection.covered],
        candidate_count=candidate_count,
        exclusive_count=exclusive_count,
    )
    notes = result.notes

    if exclusive_count == 0:
        notes.append(Note(
            kind=NOTE_EMPTY_UNIVERSE,
            message=(
                f"No unique candidates after cross-catalog filtering "
                f"({candidate_count} generated, 0 exclusive)."
            ),
            severity=NoteSeverity.WARNING,
            evidence={"candidate_count": candidate_count, "exclusive_count": 0},
        ))
    else:
        notes.append(Note(kind=NOTE_SUMMARY, message=result.summary, evidence={
            "selected": len(result.selected),
            "uncovered": result.uncovered_count,
            "total": len(result.parts),
        }))
        if result.uncovered_count:
            reason = {
                STOP_NO_GAIN: "no exclusive candidate covers the remaining parts",
                STOP_EXHAUSTED: "the candidate universe was exhausted",
            }.get(selection.stop_reason, selection.stop_reason)
            notes.append(Note(
                kind=NOTE_PARTIAL_COVERAGE,
                message=f"{result.uncovered_count} of {len(result.parts)} parts left uncovered: {reason}.",
                severity=NoteSeverity.WARNING,
                evidence={
                    "uncovered_indices": selection.uncovered_indices,
                    "stop_reason": selection.stop_reason,
                },
            ))

    short = [i for i, part in enumerate(catalog.parts) if len(part) < min_len]
    if short:
        notes.append(Note(
            kind=NOTE_SHORT_PARTS,
            message=f"{len(short)} parts are shorter than {min_len} characters and cannot be covered.",
            evidence={"indices": short},
        ))

    return result


class Reporter:
    """Renders run results as text, JSON, YAML or a rich table."""

    FORMATS = ("text", "json", "yaml")

    def __init__(self, show_parts: bool = False):
        self.show_parts = show_parts

    def render_text(self, results: Sequence[CatalogResult]) -> str:
        lines = ["Product Substring Cover", "=" * 40]
        for result in results:
            lines.append("")
            lines.append(f"{result.product_name}")
            lines.append(f"  Parts: {len(result.parts)}  "
                         f"Coverage: {result.coverage_ratio:.1%}")
            lines.append(f"  Selected: {', '.join(result.selected) if result.selected else '(none)'}")
            for note in result.notes:
                marker = "!" if note.severity is NoteSeverity.WARNING else "-"
                lines.append(f"  {marker} {note.message}")
            if self.show_parts and result.uncovered_parts:
                lines.append("  Uncovered:")
                for part in result.uncovered_parts:
                    lines.append(f"    {part}")
        return "\n".join(lines)

    def render_json(self, results: Sequence[CatalogResult]) -> str:
        return json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False)

    def render_yaml(self, results: Sequence[CatalogResult]) -> str:
        return yaml.safe_dump([r.to_dict() for r in results], sort_keys=False, allow_unicode=True)

    def render(self, results: Sequence[CatalogResult], fmt: str) -> str:
        if fmt not in self.FORMATS:
            raise ValueError(f"Unknown report format: {fmt}")
        return getattr(self, f"render_{fmt}")(results)

    def build_table(self, results: Sequence[CatalogResult]) -> Table:
        table = Table(title="Product Substring Cover")
        table.add_column("Product", style="cyan")
        table.add_column("Parts", justify="right")
        table.add_column("Candidates", justify="right")
        table.add_column("Exclusive", justify="right")
        table.add_column("Selected", style="green")
        table.add_column("Uncovered", justify="right")

        for result in results:
            uncovered = str(result.uncovered_count)
            if result.uncovered_count:
                uncovered = f"[yellow]{uncovered}[/yellow]"
            table.add_row(
                result.product_name,
                str(len(result.parts)),
                str(result.candidate_count),
                str(result.exclusive_count),
                ", ".join(result.selected) or "-",
                uncovered,
            )
        return table

    def print_table(self, results: Sequence[CatalogResult], console: Optional[Console] = None):
        console = console or Console()
        console.print(self.build_table(results))
        for result in results:
            for note in result.warnings:
                console.print(f"[yellow]{result.product_name}: {note.message}[/yellow]")

    def write_reports(
        self,
        results: Sequence[CatalogResult],
        output_dir: Path,
        formats: Sequence[str] = ("json",),
    ) -> Dict[str, Path]:
        """Write one report file per format. Returns format -> path."""
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        suffixes = {"text": "txt", "json": "json", "yaml": "yml"}
        written = {}
        for fmt in formats:
            path = output_dir / f"productcover_report.{suffixes.get(fmt, fmt)}"
            path.write_text(self.render(results, fmt), encoding="utf-8")
            written[fmt] = path
        return written
