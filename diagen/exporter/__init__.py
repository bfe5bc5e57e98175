"""Exporter layer."""

from diagen.exporter.dot_writer import global_graph_dot, subgraph_dot, to_dot
from diagen.exporter.folder_exporter import GLOBAL_GRAPH_STEM, prepare_output_dir, write_outputs
from diagen.exporter.graphviz_renderer import GraphvizRenderer

__all__ = [
    "GLOBAL_GRAPH_STEM",
    "GraphvizRenderer",
    "global_graph_dot",
    "prepare_output_dir",
    "subgraph_dot",
    "to_dot",
    "write_outputs",
]
