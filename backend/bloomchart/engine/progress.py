"""Progress vectors — per-tick animation state.

A progress vector holds *linear* progress in [0, 1]. Easing is applied
per series by the layer passes, so swapping curves never changes the
vector itself.
"""

from __future__ import annotations

from dataclasses import dataclass

from bloomchart.engine.config import AnimationConfig, ProgressShape
from bloomchart.utils.geometry import clamp


@dataclass(frozen=True)
class ProgressVector:
    """Either one global scalar or one scalar per slice, optionally with per-tier scalars."""

    shape: ProgressShape
    values: tuple[float, ...]
    tiers: tuple[tuple[float, ...], ...] | None = None
    # True only for the exact final vector; passes skip easing entirely
    final: bool = False

    @classmethod
    def complete(cls) -> ProgressVector:
        return cls(shape=ProgressShape.GLOBAL, values=(1.0,), final=True)

    def slice_t(self, category: int) -> float:
        if len(self.values) == 1:
            return self.values[0]
        return self.values[category]

    def tier_t(self, category: int, tier: int) -> float:
        if self.tiers is None:
            return self.slice_t(category)
        return self.tiers[category][tier]

    @property
    def is_complete(self) -> bool:
        if self.final:
            return True
        if any(v < 1.0 for v in self.values):
            return False
        if self.tiers is not None:
            return all(t >= 1.0 for row in self.tiers for t in row)
        return True

    @property
    def sweeps(self) -> bool:
        """Staggered shapes reveal each slice clockwise; the global bloom does not."""
        return self.shape != ProgressShape.GLOBAL and not self.final

    def as_dict(self) -> dict:
        return {
            "shape": self.shape.value,
            "values": [round(v, 4) for v in self.values],
            "tiers": [[round(t, 4) for t in row] for row in self.tiers] if self.tiers else None,
            "complete": self.is_complete,
        }


def slice_window_ms(config: AnimationConfig) -> float:
    """Own duration of one slice: later slices chase earlier ones with partial overlap."""
    return config.duration_ms * (1 - config.overlap * 0.5)


def total_duration_ms(config: AnimationConfig, category_count: int) -> float:
    """Elapsed time at which every element of the vector reaches 1."""
    if config.progress_shape == ProgressShape.GLOBAL:
        return config.duration_ms
    return (category_count - 1) * config.stagger_delay_ms + slice_window_ms(config)


def _ratio(elapsed: float, window: float) -> float:
    if window <= 0:
        return 1.0 if elapsed >= 0 else 0.0
    return clamp(elapsed / window, 0.0, 1.0)


def tier_progress(slice_t: float, tier_count: int, tier_delay_fraction: float) -> tuple[float, ...]:
    """Per-tier progress inside one slice: tier k starts k*delay into the slice window."""
    span = 1 - (tier_count - 1) * tier_delay_fraction
    return tuple(
        _ratio(slice_t - tier * tier_delay_fraction, span) for tier in range(tier_count)
    )


def compute_progress(
    elapsed_ms: float,
    config: AnimationConfig,
    category_count: int,
    tier_count: int,
) -> ProgressVector:
    """Derive the progress vector for a given elapsed time."""
    if config.progress_shape == ProgressShape.GLOBAL:
        return ProgressVector(
            shape=ProgressShape.GLOBAL,
            values=(_ratio(elapsed_ms, config.duration_ms),),
        )

    window = slice_window_ms(config)
    values = tuple(
        _ratio(elapsed_ms - i * config.stagger_delay_ms, window) for i in range(category_count)
    )
    tiers = None
    if config.progress_shape == ProgressShape.PER_SLICE_PER_TIER:
        tiers = tuple(tier_progress(v, tier_count, config.tier_delay_fraction) for v in values)
    return ProgressVector(shape=config.progress_shape, values=values, tiers=tiers)
