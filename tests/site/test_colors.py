"""Tests for colour table loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from thorpe.index import Index
from thorpe.site.settlement.colors import BuildingColors, SettlementColors


class TestSettlementColors:
    """Tests for SettlementColors.from_dict."""

    def test_empty_dict_gives_defaults(self) -> None:
        assert SettlementColors.from_dict({}) == SettlementColors()

    def test_partial_override(self) -> None:
        """Given keys replace defaults; everything else is kept."""
        colors = SettlementColors.from_dict(
            {"plot_grass": [1, 2, 3], "building": {"roof": (9, 9, 9)}}
        )
        assert colors.plot_grass == (1, 2, 3)
        assert colors.plot_dirt == SettlementColors().plot_dirt
        assert colors.building.roof == (9, 9, 9)
        assert colors.building.wall == BuildingColors().wall

    def test_unknown_keys_rejected(self) -> None:
        with pytest.raises(ValueError):
            SettlementColors.from_dict({"plot_lava": (255, 0, 0)})
        with pytest.raises(ValueError):
            BuildingColors.from_dict({"chimney": (0, 0, 0)})

    def test_values_must_be_rgb_triples(self) -> None:
        with pytest.raises(ValueError):
            SettlementColors.from_dict({"plot_grass": (1, 2)})


class TestIndexLoad:
    """Tests for loading a colour table from disk."""

    def test_overrides_come_from_json(self, tmp_path: Path) -> None:
        path = tmp_path / "palette.json"
        path.write_text(json.dumps({"plot_water": [1, 2, 3]}))
        index = Index.load(path)
        assert index.settlement_colors.plot_water == (1, 2, 3)
        assert index.settlement_colors.building == BuildingColors()

    def test_unknown_key_in_file_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "palette.json"
        path.write_text(json.dumps({"plot_lava": [255, 0, 0]}))
        with pytest.raises(ValueError):
            Index.load(path)
