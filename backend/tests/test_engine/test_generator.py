"""Tests for BackgroundGenerator: binding state, classification, output."""

from __future__ import annotations

import pytest

from gridgen.engine.color import ColorKey
from gridgen.engine.containers import ChainedHashMap, DictHashMap
from gridgen.engine.errors import ImplementationError, StateError
from gridgen.engine.generator import BackgroundGenerator
from gridgen.engine.palettes import ROAD_MAP_COLORS, ROAD_MAP_LABELS
from gridgen.engine.reducer import ReducedImage
from gridgen.models.grid import Location, MapObject
from tests.conftest import (
    BLACK,
    BW_COLORS,
    BW_LABELS,
    GRASS,
    MOUNTAIN,
    ROAD,
    WATER,
    WHITE,
    bound_generator,
)


def _collect(gen: BackgroundGenerator) -> list[tuple[tuple[int, int], str]]:
    out: list[tuple[tuple[int, int], str]] = []
    gen.generate(lambda pos, label: out.append((pos, label)), lambda x, y: (x, y), str)
    return out


def _label_rows(gen: BackgroundGenerator) -> list[list[str]]:
    rows = [[""] * gen.width for _ in range(gen.height)]
    for (x, y), label in _collect(gen):
        rows[y][x] = label
    return rows


class _LossyMap(DictHashMap):
    """Broken map: its key set advertises keys that get() cannot find."""

    def get(self, key):
        return None


class TestBinding:
    @pytest.mark.parametrize("w,h", [(0, 0), (1, 1), (3, 2)])
    def test_generate_before_bind(self, w, h):
        gen = BackgroundGenerator.from_reduced(ReducedImage.from_rows([[BLACK] * w for _ in range(h)]))
        assert not gen.is_bound
        with pytest.raises(StateError, match="must bind a color table"):
            gen.generate(lambda p, v: None, lambda x, y: (x, y), str)

    def test_closest_label_before_bind(self):
        gen = BackgroundGenerator.from_reduced(ReducedImage.from_rows([[BLACK]]))
        with pytest.raises(StateError):
            gen.closest_label(BLACK)

    def test_bind_uses_configured_capacity(self):
        from gridgen.engine.config import GeneratorConfig

        gen = BackgroundGenerator.from_reduced(ReducedImage.from_rows([[BLACK]]), GeneratorConfig(palette_capacity=7))
        gen.bind_color_table(DictHashMap, BW_COLORS, BW_LABELS)
        assert gen.is_bound
        assert gen.palette.capacity == 7


class TestClassification:
    def test_dark_pixel_is_black(self):
        gen = bound_generator([[BLACK]])
        assert gen.closest_label((10, 10, 10)) == "black"

    def test_two_by_two_scenario(self):
        gen = bound_generator([[BLACK, WHITE], [(1, 1, 1), (254, 254, 254)]])
        assert _label_rows(gen) == [["black", "white"], ["black", "white"]]

    @pytest.mark.parametrize("w", [1, 5, 50])
    @pytest.mark.parametrize("h", [1, 5, 50])
    def test_exact_matches(self, w, h):
        palette = [WATER, ROAD, GRASS, MOUNTAIN]
        rows = [[palette[(x + y) % 4] for x in range(w)] for y in range(h)]
        gen = bound_generator(rows, ROAD_MAP_COLORS, ROAD_MAP_LABELS)
        expected = [[ROAD_MAP_LABELS[(x + y) % 4] for x in range(w)] for y in range(h)]
        assert _label_rows(gen) == expected

    @pytest.mark.parametrize("factory", [DictHashMap, ChainedHashMap])
    def test_tie_resolves_to_first_bound_color(self, factory):
        colors = [(100, 100, 100), (120, 120, 120)]
        gen = bound_generator([[(110, 110, 110)]], colors, ["first", "second"], factory)
        assert gen.closest_label((110, 110, 110)) == "first"

        gen = bound_generator([[(110, 110, 110)]], list(reversed(colors)), ["first", "second"], factory)
        assert gen.closest_label((110, 110, 110)) == "first"

    def test_broken_map_is_implementation_error(self):
        gen = bound_generator([[BLACK]], map_factory=_LossyMap)
        with pytest.raises(ImplementationError):
            gen.closest_label(BLACK)


class TestGenerate:
    def test_covers_every_cell_once(self):
        gen = bound_generator([[BLACK] * 7 for _ in range(4)])
        positions = [pos for pos, _ in _collect(gen)]
        assert len(positions) == 28
        assert set(positions) == {(x, y) for x in range(7) for y in range(4)}

    def test_idempotent(self):
        gen = bound_generator([[BLACK, WHITE, (128, 0, 0)], [(200, 200, 200), BLACK, (3, 3, 3)]])
        assert _collect(gen) == _collect(gen)

    def test_containers_are_interchangeable(self):
        rows = [[(x * 40, y * 40, (x + y) * 20) for x in range(6)] for y in range(6)]
        colors = [BLACK, WHITE, (200, 0, 0), (0, 200, 0)]
        labels = ["black", "white", "red", "green"]
        via_dict = _collect(bound_generator(rows, colors, labels, DictHashMap))
        via_chain = _collect(bound_generator(rows, colors, labels, ChainedHashMap))
        assert via_dict == via_chain

    def test_with_location_and_map_object(self, quadrant_png):
        gen: BackgroundGenerator[Location, MapObject] = BackgroundGenerator(quadrant_png, 4, 4)
        gen.bind_color_table(ChainedHashMap, ROAD_MAP_COLORS, ROAD_MAP_LABELS)
        grid: dict[Location, MapObject] = {}
        gen.generate(grid.__setitem__, Location.factory(gen.height), MapObject)

        loc = Location.factory(4)
        assert len(grid) == 16
        assert grid[loc(0, 0)].name == "water"
        assert grid[loc(3, 0)].name == "road"
        assert grid[loc(0, 3)].name == "grass"
        assert grid[loc(3, 3)].name == "mountain"

    def test_palette_not_mutated(self):
        gen = bound_generator([[BLACK, WHITE]])
        before = list(gen.palette.key_set())
        _collect(gen)
        assert list(gen.palette.key_set()) == before
        assert before == [ColorKey(BLACK), ColorKey(WHITE)]
