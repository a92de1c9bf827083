"""Visualizer configuration for playback speed, canvas layout and random graphs"""

from dataclasses import dataclass

# Slider positions map to delays as (SPEED_SLIDER_OFFSET - value) ms
SPEED_SLIDER_OFFSET = 2100


@dataclass
class VisualizerConfig:
    """Configuration for the playback controller and renderer.

    Attributes:
        step_interval: Seconds between autoplay ticks
        min_interval: Fastest allowed autoplay interval in seconds
        max_interval: Slowest allowed autoplay interval in seconds
        canvas_width: Canvas width used for node layout
        canvas_height: Canvas height used for node layout
        node_radius: Node circle radius; the layout keeps 3 radii of margin
        random_nodes: Default node count for random graphs
        random_edges: Default edge count for random graphs
    """

    step_interval: float = 0.8
    min_interval: float = 0.1
    max_interval: float = 2.0
    canvas_width: float = 800.0
    canvas_height: float = 600.0
    node_radius: float = 25.0
    random_nodes: int = 8
    random_edges: int = 10

    def clamp_interval(self, interval: float) -> float:
        """Keep an autoplay interval within the configured bounds."""
        return max(self.min_interval, min(self.max_interval, interval))

    def interval_from_slider(self, value: int) -> float:
        """Convert a speed slider position to an autoplay interval in seconds.

        The slider runs slow-to-fast, so the value is inverted.
        """
        return self.clamp_interval((SPEED_SLIDER_OFFSET - value) / 1000)


def configure(
    step_interval: float = 0.8,
    min_interval: float = 0.1,
    max_interval: float = 2.0,
    canvas_width: float = 800.0,
    canvas_height: float = 600.0,
    node_radius: float = 25.0,
    random_nodes: int = 8,
    random_edges: int = 10,
    **kwargs,
) -> VisualizerConfig:
    """Build a visualizer configuration.

    Args:
        step_interval: Seconds between autoplay ticks (default: 0.8)
        min_interval: Fastest autoplay interval (default: 0.1)
        max_interval: Slowest autoplay interval (default: 2.0)
        canvas_width: Layout canvas width (default: 800)
        canvas_height: Layout canvas height (default: 600)
        node_radius: Node radius for layout margins (default: 25)
        random_nodes: Default random graph size (default: 8)
        random_edges: Default random graph edge count (default: 10)
        **kwargs: Additional parameters (ignored for forward compatibility)

    Raises:
        ValueError: If the interval bounds are inverted or non-positive

    Examples:
        # Faster playback on a smaller canvas
        config = configure(step_interval=0.3, canvas_width=400, canvas_height=400)
    """
    if min_interval <= 0 or max_interval < min_interval:
        raise ValueError(f"Invalid interval bounds: min={min_interval}, max={max_interval}")
    config = VisualizerConfig(
        step_interval=step_interval,
        min_interval=min_interval,
        max_interval=max_interval,
        canvas_width=canvas_width,
        canvas_height=canvas_height,
        node_radius=node_radius,
        random_nodes=random_nodes,
        random_edges=random_edges,
    )
    config.step_interval = config.clamp_interval(step_interval)
    return config


# Global visualizer configuration used by the server
CONFIG: VisualizerConfig = configure()
