"""
Level generator checks: safe start, solvable gaps, ordering, determinism.

Usage (from repo root):
  python -m pytest fist_runner/tests/test_level.py
  python -m fist_runner.tests.test_level --spawns 20000
"""
from __future__ import annotations
import argparse

import pytest

from fist_runner.game.config import (
    INITIAL_PLATFORM_W, GAP_MIN_W, GAP_MAX_W, PLATFORM_MIN_W, PLATFORM_MAX_W,
    PLATFORM_BUFFER, GRAVITY, JUMP_VELOCITY, SCROLL_SPEED, JUMP_SAFETY_MARGIN
)
from fist_runner.game.level import LevelGen, Platform
from fist_runner.game.physics import max_jump_distance, max_safe_gap, ticks_to_apex, air_time

EPS = 1e-9  # float slack when re-deriving a gap from platform edges


def test_jump_distance_formula():
    d = max_jump_distance(GRAVITY, JUMP_VELOCITY, SCROLL_SPEED)
    assert d == pytest.approx(2.5 * 2 * 13 / 0.45), "scroll * 2|v0|/g"
    assert 144.0 < d < 145.0
    assert air_time() == pytest.approx(57.777, abs=1e-2)
    assert ticks_to_apex() == 29
    assert max_safe_gap() == pytest.approx(d - JUMP_SAFETY_MARGIN)
    assert GAP_MAX_W < max_safe_gap(), "configured gaps must be jumpable with margin"


def test_first_platform_is_long_and_at_origin():
    level = LevelGen(seed=1)
    first = level.platforms[0]
    assert first.x == 0.0
    assert first.width == INITIAL_PLATFORM_W
    assert first.width >= 300
    assert len(level.platforms) == PLATFORM_BUFFER


def check_long_run(seed: int, spawns: int) -> int:
    """Scroll through `spawns` platforms checking every gap; returns how many gaps were checked."""
    level = LevelGen(seed=seed)
    bound = max_safe_gap(GRAVITY, JUMP_VELOCITY, SCROLL_SPEED, JUMP_SAFETY_MARGIN)
    prev = level.platforms[0]
    for plat in level.platforms[1:]:
        gap = plat.x - prev.right
        assert GAP_MIN_W - EPS <= gap <= GAP_MAX_W + EPS and gap < bound, f"seed={seed}: bad initial gap {gap}"
        prev = plat

    checked = 0
    while checked < spawns:
        level.platforms.pop(0)
        before = level.frontier
        assert level.ensure_ahead() == 1
        plat = level.platforms[-1]
        gap = plat.x - before
        assert gap < bound, f"seed={seed}: unjumpable gap {gap:.2f} >= {bound:.2f}"
        assert GAP_MIN_W - EPS <= gap <= GAP_MAX_W + EPS, f"seed={seed}: gap {gap} out of range"
        assert PLATFORM_MIN_W <= plat.width <= PLATFORM_MAX_W, f"seed={seed}: width {plat.width}"
        assert level.frontier == plat.right
        assert plat.x > prev.right, "platforms must not touch or overlap"
        prev = plat
        checked += 1
    return checked


def test_every_gap_is_jumpable_over_long_runs():
    for seed in (0, 7, 12345):
        check_long_run(seed, spawns=3000)


def test_platforms_stay_ordered_and_disjoint():
    level = LevelGen(seed=99)
    for _ in range(200):
        level.spawn_next()
    xs = [p.x for p in level.platforms]
    assert xs == sorted(xs)
    assert all(g > 0 for g in level.gaps()), "platforms must never touch or overlap"


def test_same_seed_same_level():
    a = LevelGen(seed=2024)
    b = LevelGen(seed=2024)
    for _ in range(50):
        a.spawn_next()
        b.spawn_next()
    assert a.platforms == b.platforms
    assert LevelGen(seed=2025).platforms != a.platforms[:PLATFORM_BUFFER]


def test_random_seed_is_recorded():
    level = LevelGen(seed=None)
    assert isinstance(level.seed, int)
    assert LevelGen(seed=level.seed).platforms == level.platforms


def test_ensure_ahead_tops_up_buffer():
    level = LevelGen(seed=3)
    del level.platforms[1:]
    assert level.ensure_ahead() == PLATFORM_BUFFER - 1
    assert len(level.platforms) == PLATFORM_BUFFER
    assert level.ensure_ahead() == 0
    assert level.ensure_ahead(min_count=8) == 3


def test_pop_passed_only_after_right_edge_is_behind():
    level = LevelGen(seed=5)
    first = level.platforms[0]
    assert level.pop_passed(first.right) is None, "edge exactly at the scroll front is not passed yet"
    assert level.pop_passed(first.right + 0.5) is first
    assert level.platforms[0] is not first
    assert level.pop_passed(first.right + 0.5) is None, "at most one platform per call"


def test_platform_overlap_is_open_interval():
    plat = Platform(x=100.0, width=50.0)
    assert plat.overlaps(120.0, 130.0)
    assert plat.overlaps(60.0, 101.0)
    assert not plat.overlaps(60.0, 100.0), "touching the left edge is not overlap"
    assert not plat.overlaps(150.0, 190.0), "touching the right edge is not overlap"


def test_unjumpable_configuration_is_rejected():
    with pytest.raises(AssertionError):
        LevelGen(seed=1, gap_max=max_jump_distance())
    with pytest.raises(AssertionError):
        LevelGen(seed=1, gap_min=50, gap_max=40)


def test_safe_gap_bound_follows_physics():
    # slower scroll shortens the jump: the default gap range no longer fits
    slow = max_safe_gap(GRAVITY, JUMP_VELOCITY, SCROLL_SPEED / 2, JUMP_SAFETY_MARGIN)
    assert slow < GAP_MAX_W
    with pytest.raises(AssertionError):
        LevelGen(seed=1, safe_gap=slow)
    level = LevelGen(seed=1, gap_max=slow - 1.0, safe_gap=slow)
    level.ensure_ahead(min_count=50)
    assert all(g < slow for g in level.gaps())


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--spawns", type=int, default=10_000)
    ap.add_argument("--seeds", type=str, default="0,1,2,3,4")
    args = ap.parse_args()
    for s in [int(x) for x in args.seeds.split(",") if x.strip()]:
        n = check_long_run(s, args.spawns)
        print(f"✓ seed={s}: {n} gaps jumpable")


if __name__ == "__main__":
    main()
