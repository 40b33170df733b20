"""Lookup tables shared by everything that paints sites."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from thorpe.site.settlement.colors import SettlementColors


@dataclass(frozen=True)
class Index:
    """Read-only render-time data, passed by reference into painting calls."""

    settlement_colors: SettlementColors = field(default_factory=SettlementColors)

    @classmethod
    def load(cls, path: Path) -> Index:
        """Build an index from a JSON colour table. Missing keys keep defaults."""
        with path.open() as f:
            data: dict[str, Any] = json.load(f)
        return cls(settlement_colors=SettlementColors.from_dict(data))
