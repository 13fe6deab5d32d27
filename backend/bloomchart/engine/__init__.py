"""BloomChart radial chart engine."""

from bloomchart.engine.registry import layer_pass, RenderLayer, get_registry
from bloomchart.engine.context import ChartInput, Frame, RenderContext
from bloomchart.engine.compositor import Compositor
from bloomchart.engine.animation import AnimationScheduler

__all__ = [
    "layer_pass",
    "RenderLayer",
    "get_registry",
    "ChartInput",
    "Frame",
    "RenderContext",
    "Compositor",
    "AnimationScheduler",
]
