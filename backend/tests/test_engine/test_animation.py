"""Tests for the animation scheduler, driven by a fake clock."""

from __future__ import annotations

import asyncio

import pytest

from bloomchart.engine.animation import AnimationScheduler, AnimationState
from bloomchart.engine.config import AnimationConfig, ProgressShape, RenderConfig
from bloomchart.engine.registry import RenderLayer


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance_ms(self, ms: float) -> None:
        self.now += ms / 1000


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler(compositor, clock) -> AnimationScheduler:
    config = AnimationConfig(progress_shape=ProgressShape.PER_SLICE, stagger_delay_ms=150)
    return AnimationScheduler(compositor, config, RenderConfig(show_values=True), clock=clock)


def test_start_and_tick(scheduler, chart, clock):
    assert scheduler.state is AnimationState.IDLE
    assert scheduler.start(chart)
    assert scheduler.is_running
    clock.advance_ms(150)
    frame = scheduler.tick()
    assert frame.progress.values[0] == pytest.approx(150 / 840)
    assert frame.progress.values[1] == 0.0
    assert not frame.is_final
    assert frame.layer(RenderLayer.VALUES).is_empty


def test_start_while_running_is_ignored(scheduler, chart, empty_chart, clock):
    scheduler.start(chart)
    clock.advance_ms(100)
    assert scheduler.start(empty_chart) is False
    # First start time and chart are kept
    assert scheduler.elapsed_ms() == pytest.approx(100)
    frame = scheduler.tick()
    assert not frame.layer(RenderLayer.SCORE).is_empty


def test_final_tick_matches_static_render(scheduler, chart, clock, compositor):
    scheduler.start(chart)
    clock.advance_ms(scheduler.duration_ms + 1)
    frame = scheduler.tick()
    assert scheduler.state is AnimationState.IDLE
    assert frame.is_final
    static = compositor.compose(chart, RenderConfig(show_values=True))
    assert frame == static
    assert not frame.layer(RenderLayer.VALUES).is_empty


def test_tick_when_idle_raises(scheduler):
    with pytest.raises(RuntimeError):
        scheduler.tick()


def test_frames_run_to_completion(scheduler, chart, clock):
    scheduler.start(chart)
    frames = []
    for frame in scheduler.frames():
        frames.append(frame)
        clock.advance_ms(100)
    assert frames[-1].is_final
    assert not scheduler.is_running
    assert scheduler.ticks == len(frames)
    # Slice 0 never goes backwards
    firsts = [f.progress.slice_t(0) for f in frames]
    assert all(a <= b for a, b in zip(firsts, firsts[1:]))


def test_replay_restarts(scheduler, chart, clock):
    scheduler.start(chart)
    clock.advance_ms(500)
    scheduler.tick()
    assert scheduler.replay(chart)
    assert scheduler.elapsed_ms() == pytest.approx(0)
    assert scheduler.ticks == 0


def test_render_static_cancels_animation(scheduler, chart, empty_chart, clock):
    scheduler.start(chart)
    clock.advance_ms(200)
    scheduler.tick()
    frame = scheduler.render_static(empty_chart)
    assert scheduler.state is AnimationState.IDLE
    assert frame.is_final
    assert frame.layer(RenderLayer.SCORE).is_empty
    assert scheduler.last_frame is frame


def test_global_bloom_finishes_at_duration(compositor, chart, clock):
    scheduler = AnimationScheduler(compositor, AnimationConfig.bloom(600), clock=clock)
    scheduler.start(chart)
    clock.advance_ms(300)
    assert scheduler.tick().progress.values == (pytest.approx(0.5),)
    clock.advance_ms(300)
    assert scheduler.tick().is_final


def test_run_async(compositor, chart):
    config = AnimationConfig(duration_ms=30, stagger_delay_ms=1, frame_interval_ms=5)
    scheduler = AnimationScheduler(compositor, config)

    async def collect():
        return [frame async for frame in scheduler.run_async(chart)]

    frames = asyncio.run(collect())
    assert frames
    assert frames[-1].is_final
    assert scheduler.state is AnimationState.IDLE
