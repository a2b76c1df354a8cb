"""Visualization module for path-time neighborhoods."""

from .path_time_graph import plot_path_time_graph, save_path_time_graph

__all__ = ['plot_path_time_graph', 'save_path_time_graph']
