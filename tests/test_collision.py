"""
Tests for bounding-box collisions, collection and scoring.
"""

import pytest

from bubble_dodge.dodge_core.collision import collect_edibles, find_lethal_hazard, resolve_collisions
from bubble_dodge.dodge_core.config_loader import load_config
from bubble_dodge.dodge_core.entities import Bounds, Edible, Hazard
from bubble_dodge.dodge_core.world import create_context


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def ctx(config):
    return create_context(config, seed=0)


def _hazard(uid, x, y, lethal=True):
    return Hazard(uid=uid, x=x, y=y, vy=0.2, radius=20.0, lethal=lethal)


def _edible(uid, x, y):
    return Edible(uid=uid, x=x, y=y, vy=0.2, radius=10.0)


class TestBounds:
    """Test the axis-aligned box helpers."""

    def test_overlap(self):
        assert Bounds(0, 0, 10, 10).intersects(Bounds(5, 5, 10, 10))

    def test_touching_edges_do_not_intersect(self):
        assert not Bounds(0, 0, 10, 10).intersects(Bounds(10, 0, 10, 10))
        assert not Bounds(0, 0, 10, 10).intersects(Bounds(0, 10, 10, 10))

    def test_separate_on_one_axis(self):
        assert not Bounds(0, 0, 10, 10).intersects(Bounds(5, 50, 10, 10))

    def test_around(self):
        b = Bounds.around(100, 50, 20)
        assert (b.left, b.top, b.right, b.bottom) == (80, 30, 120, 70)

    def test_contains_half_open(self):
        b = Bounds(10, 10, 20, 20)

        assert b.contains(10, 10)
        assert b.contains(29.9, 29.9)
        assert not b.contains(30, 15)
        assert not b.contains(15, 30)
        assert not b.contains(-5, 15)


class TestHazardCollision:
    """Test lethal hazard detection."""

    def test_overlapping_hazard(self, ctx):
        x, y = ctx.avatar.position
        hazard = _hazard(1, x, y)
        ctx.hazards.append(hazard)

        assert find_lethal_hazard(ctx) is hazard

    def test_box_touch_is_not_a_hit(self, ctx):
        x, y = ctx.avatar.position
        gap = ctx.avatar.radius + 20.0
        ctx.hazards.append(_hazard(1, x + gap, y))

        assert find_lethal_hazard(ctx) is None

    def test_box_corner_counts(self, ctx):
        """Boxes, not circles: diagonal corners overlapping is a hit."""
        x, y = ctx.avatar.position
        d = ctx.avatar.radius + 20.0 - 1.0
        ctx.hazards.append(_hazard(1, x + d, y + d))

        assert find_lethal_hazard(ctx) is not None

    def test_inert_hazard_ignored(self, ctx):
        x, y = ctx.avatar.position
        ctx.hazards.append(_hazard(1, x, y, lethal=False))

        assert find_lethal_hazard(ctx) is None

    def test_first_lethal_hazard_reported(self, ctx):
        x, y = ctx.avatar.position
        first = _hazard(1, x, y)
        ctx.hazards.extend([_hazard(0, 10, 10), first, _hazard(2, x + 1, y)])

        assert find_lethal_hazard(ctx) is first


class TestEdibleCollection:
    """Test collection, removal and scoring."""

    def test_collect_overlapping(self, ctx, config):
        x, y = ctx.avatar.position
        edible = _edible(1, x + 3, y)
        ctx.edibles.append(edible)

        result = collect_edibles(ctx)

        assert result.collected == [edible]
        assert edible.collected
        assert ctx.edibles == []
        assert ctx.score.current() == config.scoring.increment
        assert result.points == config.scoring.increment

    def test_collected_exactly_once(self, ctx, config):
        x, y = ctx.avatar.position
        ctx.edibles.append(_edible(1, x, y))

        collect_edibles(ctx)
        second = collect_edibles(ctx)

        assert second.collected == []
        assert ctx.score.current() == config.scoring.increment

    def test_all_overlapping_collected_in_one_pass(self, ctx, config):
        """Removing one entry must not skip the next."""
        x, y = ctx.avatar.position
        near = [_edible(i, x + i, y) for i in range(1, 4)]
        far_a = _edible(10, 100, 100)
        far_b = _edible(11, 1800, 900)
        ctx.edibles.extend([near[0], far_a, near[1], near[2], far_b])

        result = collect_edibles(ctx)

        assert result.collected == near
        assert ctx.edibles == [far_a, far_b]
        assert ctx.score.current() == 3 * config.scoring.increment
        assert [e.edible_uid for e in result.score_events] == [1, 2, 3]

    def test_distant_edible_untouched(self, ctx):
        ctx.edibles.append(_edible(1, 10, 10))

        result = collect_edibles(ctx)

        assert result.collected == []
        assert len(ctx.edibles) == 1


class TestResolve:
    """Test the combined pass."""

    def test_lethal_short_circuits_collection(self, ctx):
        x, y = ctx.avatar.position
        hazard = _hazard(1, x, y)
        edible = _edible(2, x, y)
        ctx.hazards.append(hazard)
        ctx.edibles.append(edible)

        result = resolve_collisions(ctx)

        assert result.is_lethal
        assert result.lethal_hazard is hazard
        assert result.collected == []
        assert ctx.edibles == [edible]
        assert ctx.score.current() == 0

    def test_collects_when_safe(self, ctx, config):
        x, y = ctx.avatar.position
        ctx.hazards.append(_hazard(1, 50, 50))
        ctx.edibles.append(_edible(2, x, y))

        result = resolve_collisions(ctx)

        assert not result.is_lethal
        assert len(result.collected) == 1
        assert ctx.score.current() == config.scoring.increment
