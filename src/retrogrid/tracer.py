"""
Debug tracing for the generation pipeline.

When debug mode is enabled the generator records every pipeline stage
(with a snapshot of the grid) and every accepted cell write. This is the
first thing to look at when a junction or an occlusion looks wrong.

Usage:
    >>> generator = AsciiGenerator()
    >>> output = generator.generate(boxes, debug=True)
    >>> trace = generator.get_trace()
    >>> print(trace.summary())
"""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

MAX_PREVIEW_ROWS = 15


@dataclass
class CellWrite:
    """
    Record of one accepted write into the grid.

    Attributes:
        row: Grid row.
        col: Grid column.
        char: Character written.
        previous_char: Character that was there before.
        z_index: Paint priority of the write.
        owner_id: Box or line that owns the cell afterwards.
        reason: Kind of write ("border", "line", "arrow", "label", "text",
                "junction").
    """

    row: int
    col: int
    char: str
    previous_char: str
    z_index: int
    owner_id: Optional[str]
    reason: str

    def __str__(self) -> str:
        if self.previous_char == " ":
            return (
                f"({self.row},{self.col}): '{self.char}' z={self.z_index} "
                f"[{self.reason}] by {self.owner_id}"
            )
        return (
            f"({self.row},{self.col}): '{self.previous_char}' -> '{self.char}' "
            f"z={self.z_index} [{self.reason}] by {self.owner_id}"
        )


@dataclass
class PipelineStage:
    """One named step of a generation call and the grid as it stood after it."""

    name: str
    data: Dict[str, Any]
    grid_snapshot: Optional[List[str]] = None

    def __str__(self) -> str:
        lines = [f"[{self.name}]"]
        for key, value in self.data.items():
            text = repr(value) if isinstance(value, str) else str(value)
            if len(text) > 100:
                text = text[:97] + "..."
            lines.append(f"  {key} = {text}")
        if self.grid_snapshot:
            shown = self.grid_snapshot[:MAX_PREVIEW_ROWS]
            lines.append(f"  grid ({len(self.grid_snapshot)} rows, {len(shown)} shown):")
            lines.extend(f"    |{row}|" for row in shown)
        return "\n".join(lines)


@dataclass
class RenderTrace:
    """Stages and cell writes recorded by ``AsciiGenerator.generate(debug=True)``."""

    stages: List[PipelineStage] = field(default_factory=list)
    writes: List[CellWrite] = field(default_factory=list)

    def add_stage(
        self, name: str, data: Dict[str, Any], grid: Optional[Any] = None
    ) -> None:
        """
        Record that the generator finished ``name``.

        ``data`` is copied. When ``grid`` is given its serialized rows are
        stored with the stage, so later writes do not change the snapshot.
        """
        snapshot = None
        if grid is not None:
            rendered = grid.to_string()
            snapshot = rendered.split("\n") if rendered else []
        self.stages.append(PipelineStage(name, dict(data), snapshot))

    def add_write(self, write: CellWrite) -> None:
        self.writes.append(write)

    def get_stage(self, name: str) -> Optional[PipelineStage]:
        return next((stage for stage in self.stages if stage.name == name), None)

    def get_grid_at_stage(self, name: str) -> Optional[List[str]]:
        stage = self.get_stage(name)
        if stage and stage.grid_snapshot:
            return stage.grid_snapshot
        return None

    def get_writes_at(self, row: int, col: int) -> List[CellWrite]:
        return [w for w in self.writes if w.row == row and w.col == col]

    def get_writes_by_reason(self, reason: str) -> List[CellWrite]:
        return [w for w in self.writes if w.reason == reason]

    def get_overwrites(self) -> List[CellWrite]:
        """Writes that replaced a non-blank character."""
        return [w for w in self.writes if w.previous_char != " "]

    def summary(self) -> str:
        """Stage list plus cell write counts per reason and per owner."""
        lines = [
            f"Generation trace: {len(self.stages)} stage(s), "
            f"{len(self.writes)} cell write(s), "
            f"{len(self.get_overwrites())} replacing existing ink",
        ]
        for stage in self.stages:
            rows = "no grid" if stage.grid_snapshot is None else f"{len(stage.grid_snapshot)} rows"
            lines.append(f"  {stage.name} ({rows})")

        by_reason = Counter(w.reason for w in self.writes)
        if by_reason:
            lines.append("Writes by reason:")
            lines.extend(f"  {reason}: {count}" for reason, count in by_reason.most_common())

        by_owner = Counter(w.owner_id or "-" for w in self.writes)
        if by_owner:
            lines.append("Writes by owner:")
            lines.extend(f"  {owner}: {count}" for owner, count in by_owner.most_common())
        return "\n".join(lines)

    def dump(self) -> str:
        """Summary, every stage with its grid, then every write in order."""
        parts = [self.summary(), ""]
        parts.extend(str(stage) for stage in self.stages)
        parts.append("Cell writes:")
        parts.extend(f"  {w}" for w in self.writes)
        return "\n".join(parts)
