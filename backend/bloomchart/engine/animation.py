"""Animation scheduler — drives repeated composition until every progress value reaches 1.

States: IDLE → RUNNING → IDLE. At most one animation runs per scheduler.
``start`` while running is a no-op; ``replay`` and ``render_static``
stop the running animation before doing anything else, so two tickers
never race on the same frame.

The scheduler never sleeps on its own. ``tick`` is meant to be called
from a frame callback; ``frames`` and ``run_async`` are the synchronous
and asyncio loops built on top of it.
"""

from __future__ import annotations

import asyncio
import enum
import logging
import time
from collections.abc import AsyncGenerator, Callable, Generator

from bloomchart.engine.compositor import Compositor
from bloomchart.engine.config import AnimationConfig, RenderConfig
from bloomchart.engine.context import ChartInput, Frame
from bloomchart.engine.progress import ProgressVector, compute_progress, total_duration_ms

logger = logging.getLogger(__name__)


class AnimationState(enum.Enum):
    IDLE = "idle"
    RUNNING = "running"


class AnimationScheduler:
    """Ticks a compositor with an advancing progress vector."""

    def __init__(
        self,
        compositor: Compositor,
        config: AnimationConfig | None = None,
        render_config: RenderConfig | None = None,
        canvas_size: float | None = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.compositor = compositor
        self.config = config or AnimationConfig()
        self.render_config = render_config or RenderConfig()
        self.canvas_size = canvas_size
        self._clock = clock
        self._state = AnimationState.IDLE
        self._chart: ChartInput | None = None
        self._started_at = 0.0
        self.last_frame: Frame | None = None
        self.ticks = 0

    @property
    def state(self) -> AnimationState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state is AnimationState.RUNNING

    @property
    def duration_ms(self) -> float:
        return total_duration_ms(self.config, self.compositor.geometry.category_count)

    def start(self, chart: ChartInput) -> bool:
        """Begin animating chart. Returns False (and changes nothing) if already running."""
        if self.is_running:
            logger.debug("Animation already running; start ignored")
            return False
        self._chart = chart
        self._started_at = self._clock()
        self._state = AnimationState.RUNNING
        self.ticks = 0
        logger.info(
            "Animation started (%s, %.0fms)",
            self.config.progress_shape.value,
            self.duration_ms,
        )
        return True

    def stop(self) -> None:
        if self.is_running:
            logger.info("Animation stopped after %d ticks", self.ticks)
        self._state = AnimationState.IDLE

    def replay(self, chart: ChartInput) -> bool:
        """Stop any running animation, then start over."""
        self.stop()
        return self.start(chart)

    def elapsed_ms(self, now: float | None = None) -> float:
        now = self._clock() if now is None else now
        return (now - self._started_at) * 1000

    def progress_at(self, elapsed_ms: float) -> ProgressVector:
        g = self.compositor.geometry
        return compute_progress(elapsed_ms, self.config, g.category_count, g.tier_count)

    def tick(self, now: float | None = None) -> Frame:
        """Compose one frame for the current time.

        When the progress vector converges, the returned frame is the exact
        static render (progress 1.0, no easing residue) and the scheduler
        returns to IDLE.
        """
        if not self.is_running or self._chart is None:
            raise RuntimeError("tick() called while no animation is running")

        self.ticks += 1
        progress = self.progress_at(self.elapsed_ms(now))
        if progress.is_complete:
            frame = self._compose(self._chart, ProgressVector.complete())
            self._state = AnimationState.IDLE
            logger.info("Animation complete after %d ticks", self.ticks)
        else:
            frame = self._compose(self._chart, progress)
        self.last_frame = frame
        return frame

    def render_static(self, chart: ChartInput) -> Frame:
        """Stop any animation and draw the final chart immediately."""
        self.stop()
        self._chart = chart
        frame = self._compose(chart, ProgressVector.complete())
        self.last_frame = frame
        return frame

    def frames(self) -> Generator[Frame, None, None]:
        """Yield frames until the animation completes or is stopped."""
        while self.is_running:
            yield self.tick()

    async def run_async(self, chart: ChartInput) -> AsyncGenerator[Frame, None]:
        """Start (or restart) the animation and yield one frame per frame interval."""
        self.replay(chart)
        interval = self.config.frame_interval_ms / 1000
        while self.is_running:
            yield self.tick()
            if self.is_running:
                await asyncio.sleep(interval)

    def _compose(self, chart: ChartInput, progress: ProgressVector) -> Frame:
        return self.compositor.compose(
            chart,
            self.render_config,
            canvas_size=self.canvas_size,
            progress=progress,
            easing=self.config.easing,
        )
