"""Configuration for the ruled-table reconstruction pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping, Optional

from .structures import DEFAULT_TOLERANCE

DEFAULT_TABLE_ATTRIBUTES = (
    'border="2" bordercolor="black" width="90%" cellspacing="0" cellpadding="5"'
)

CONTAINMENT_MODES = ("forward", "bidirectional")


@dataclass
class ExtractionConfig:
    """Runtime configuration shared by every pipeline stage.

    Attributes:
        tolerance: Distance under which two coordinates are the same.
        gap_threshold: Vertical gap that splits two blocks. None means
            ``tolerance``.
        use_media_box: Clip rectangles to the page media box when present.
        body_top: Upper limit of the prose window (top-down units), or None.
        body_bottom: Lower limit of the prose window, or None.
        min_columns: Minimum distinct x boundaries for a block to be a table.
        containment: "forward" or "bidirectional" minimal-rectangle filtering.
        strict: Raise OverlapDetected when rectangles stamp the same cell.
        drop_folio: Drop a trailing bare number row (page number heuristic).
        table_attributes: Presentational attributes of the ``<table>`` tag.
        debug_dir: When set, block rectangles are drawn to PNG files here.
    """

    tolerance: float = DEFAULT_TOLERANCE
    gap_threshold: Optional[float] = None
    use_media_box: bool = True
    body_top: Optional[float] = 60.0
    body_bottom: Optional[float] = 790.0
    min_columns: int = 3
    containment: str = "forward"
    strict: bool = False
    drop_folio: bool = True
    table_attributes: str = DEFAULT_TABLE_ATTRIBUTES
    debug_dir: Optional[Path] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.tolerance < 0:
            raise ValueError("tolerance must be >= 0")
        if self.containment not in CONTAINMENT_MODES:
            raise ValueError(
                f"containment must be one of {CONTAINMENT_MODES}, got {self.containment!r}"
            )
        if self.debug_dir is not None:
            self.debug_dir = Path(self.debug_dir)

    def effective_gap_threshold(self) -> float:
        """Return the block gap, defaulting to the tolerance."""
        if self.gap_threshold is None:
            return self.tolerance
        return self.gap_threshold

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "ExtractionConfig":
        """Build a config from a plain mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**dict(values))


__all__ = ["ExtractionConfig", "DEFAULT_TABLE_ATTRIBUTES"]
