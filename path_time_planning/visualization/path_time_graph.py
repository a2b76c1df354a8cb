
import matplotlib.pyplot as plt
from matplotlib.patches import Polygon
from pathlib import Path
from typing import Optional
from loguru import logger

from ..planning.path_time_neighborhood import PathTimeNeighborhood


def plot_path_time_graph(neighborhood: PathTimeNeighborhood, ax: Optional[plt.Axes] = None) -> plt.Axes:
    """Draw every obstacle envelope in the (t, s) plane.

    Args:
        neighborhood: Built path-time neighborhood
        ax: Axes to draw into; a new figure is created when omitted

    Returns:
        The axes drawn into
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(10, 6))

    config = neighborhood.config
    cmap = plt.get_cmap('tab10')

    for i, obstacle in enumerate(neighborhood.get_path_time_obstacles()):
        # Quadrilateral: bottom_left -> bottom_right -> upper_right -> upper_left
        vertices = [(p.t, p.s) for p in obstacle.corners]
        color = cmap(i % 10)
        ax.add_patch(Polygon(vertices, closed=True, facecolor=color, edgecolor=color, alpha=0.4))
        ax.text(
            obstacle.time_lower,
            obstacle.path_upper,
            obstacle.obstacle_id,
            fontsize=8,
            color=color,
            verticalalignment='bottom',
        )

    ego_s = neighborhood.init_s[0]
    ax.axhline(ego_s, color='black', linestyle='--', alpha=0.5, label='Ego s')
    ax.axhline(ego_s + config.planned_trajectory_horizon, color='red', linestyle=':',
               alpha=0.5, label='Lookahead')

    ax.set_xlim(0.0, config.planned_trajectory_time)
    ax.set_ylim(min(0.0, ego_s) - 5.0, ego_s + config.planned_trajectory_horizon + 5.0)
    ax.set_xlabel("Time [s]")
    ax.set_ylabel("s [m]")
    ax.set_title("Path-Time Neighborhood")
    ax.grid(True, alpha=0.3)
    ax.legend(loc='upper right')
    return ax


def save_path_time_graph(neighborhood: PathTimeNeighborhood, output_path: str) -> Path:
    """Render the path-time graph to an image file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(10, 6))
    try:
        plot_path_time_graph(neighborhood, ax)
        fig.savefig(output_path, dpi=100, bbox_inches='tight')
    finally:
        plt.close(fig)

    logger.info(f"Path-time graph saved to {output_path}")
    return output_path
