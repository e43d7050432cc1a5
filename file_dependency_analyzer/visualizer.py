"""
Dependency Visualizer
Interactive views of the module graph with circular dependencies highlighted
"""

import plotly.graph_objects as go
import networkx as nx
from typing import Dict, List, Optional, Set, Tuple
import streamlit as st
import pandas as pd
import logging

from .cycle_detector import cycle_edges, loop_segment
from .graph_builder import to_networkx
from .models import CircularPath, DependencyGraph

logger = logging.getLogger(__name__)


class DependencyVisualizer:
    """Creates interactive visualizations for a DependencyGraph"""

    def __init__(self, graph: DependencyGraph):
        self.graph = graph
        self.nx_graph = nx.DiGraph(to_networkx(graph))
        self.layout_cache = {}

    def create_dependency_graph_plot(self, cycles: Optional[List[CircularPath]] = None) -> go.Figure:
        """Create an interactive dependency graph visualization"""
        if self.nx_graph.number_of_nodes() == 0:
            return self._create_empty_plot("No dependencies to visualize")

        pos = self._get_graph_layout()
        node_trace = self._create_node_trace(pos, cycles)
        edge_traces = self._create_edge_traces(pos, cycles)

        return go.Figure(data=edge_traces + [node_trace],
                         layout=self._get_plot_layout())

    def _get_graph_layout(self) -> Dict:
        """Calculate graph layout using spring algorithm"""
        if 'spring' not in self.layout_cache:
            try:
                if self.nx_graph.number_of_nodes() > 100:
                    pos = nx.spring_layout(self.nx_graph, k=1, iterations=20, seed=7)
                else:
                    pos = nx.spring_layout(self.nx_graph, k=2, iterations=50, seed=7)
            except Exception as e:
                logger.error(f"Error calculating layout: {e}")
                pos = nx.circular_layout(self.nx_graph)
            self.layout_cache['spring'] = pos

        return self.layout_cache['spring']

    def _create_node_trace(self, pos: Dict, cycles: Optional[List[CircularPath]] = None) -> go.Scatter:
        node_x = []
        node_y = []
        node_text = []
        node_colors = []
        node_sizes = []
        labels = []

        cycle_nodes: Set[str] = set()
        for cycle in cycles or []:
            cycle_nodes.update(loop_segment(cycle))

        root_path = self.graph.root.path if self.graph.root is not None else None

        for node in self.nx_graph.nodes():
            if node not in pos:
                continue
            x, y = pos[node]
            node_x.append(x)
            node_y.append(y)
            labels.append(node)

            color, size = self._get_node_style(node, node == root_path, cycle_nodes)
            node_colors.append(color)
            node_sizes.append(size)

            hover_text = f"<b>{node}</b><br>"
            hover_text += f"Dependencies: {self.nx_graph.out_degree(node)}<br>"
            hover_text += f"Dependents: {self.nx_graph.in_degree(node)}"
            if node == root_path:
                hover_text += "<br><b>Entry module</b>"
            if node in cycle_nodes:
                hover_text += "<br><b>⚠️ Part of cycle</b>"
            node_text.append(hover_text)

        return go.Scatter(
            x=node_x, y=node_y,
            mode='markers+text',
            text=labels,
            textposition="top center",
            textfont=dict(size=8),
            hovertemplate='%{hovertext}<extra></extra>',
            hovertext=node_text,
            marker=dict(
                size=node_sizes,
                color=node_colors,
                line=dict(width=2, color='white'),
                opacity=0.8
            ),
            name="Modules"
        )

    def _get_node_style(self, node: str, is_root: bool, cycle_nodes: Set[str]) -> Tuple[str, int]:
        """Determine node color and size based on its characteristics"""
        size = 15
        degree = self.nx_graph.degree(node)
        if degree > 10:
            size = 25
        elif degree > 5:
            size = 20

        if node in cycle_nodes:
            color = '#FF8800'
        elif is_root:
            color = '#4444FF'
        else:
            color = '#44AA44'

        return color, size

    def _create_edge_traces(self, pos: Dict, cycles: Optional[List[CircularPath]] = None) -> List[go.Scatter]:
        edge_traces = []

        highlighted = set()
        for cycle in cycles or []:
            highlighted.update(cycle_edges(loop_segment(cycle)))

        regular_edge_x = []
        regular_edge_y = []
        cycle_edge_x = []
        cycle_edge_y = []

        for source, target in self.nx_graph.edges():
            x0, y0 = pos.get(source, (0, 0))
            x1, y1 = pos.get(target, (0, 0))

            if (source, target) in highlighted:
                cycle_edge_x.extend([x0, x1, None])
                cycle_edge_y.extend([y0, y1, None])
            else:
                regular_edge_x.extend([x0, x1, None])
                regular_edge_y.extend([y0, y1, None])

        if regular_edge_x:
            edge_traces.append(go.Scatter(
                x=regular_edge_x, y=regular_edge_y,
                line=dict(width=1, color='#888'),
                hoverinfo='none',
                mode='lines',
                name="Dependencies"
            ))

        if cycle_edge_x:
            edge_traces.append(go.Scatter(
                x=cycle_edge_x, y=cycle_edge_y,
                line=dict(width=3, color='#FF4444'),
                hoverinfo='none',
                mode='lines',
                name="Circular Dependencies"
            ))

        return edge_traces

    def _get_plot_layout(self) -> dict:
        return dict(
            title=dict(text="Module Dependency Graph", font=dict(size=16)),
            showlegend=True,
            hovermode='closest',
            margin=dict(b=20, l=5, r=5, t=40),
            annotations=[dict(
                text="Hover over modules for details. Red edges form a circular dependency.",
                showarrow=False,
                xref="paper", yref="paper",
                x=0.005, y=-0.002,
                xanchor='left', yanchor='bottom',
                font=dict(color="#888", size=12)
            )],
            xaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            yaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            plot_bgcolor='white'
        )

    def _create_empty_plot(self, message: str) -> go.Figure:
        fig = go.Figure()
        fig.add_annotation(
            text=message,
            xref="paper", yref="paper",
            x=0.5, y=0.5,
            showarrow=False,
            font=dict(size=16, color="gray")
        )
        fig.update_layout(
            xaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            yaxis=dict(showgrid=False, zeroline=False, showticklabels=False),
            plot_bgcolor='white'
        )
        return fig

    def create_cycle_table(self, cycles: List[CircularPath]) -> pd.DataFrame:
        """One row per circular path"""
        rows = []
        for i, cycle in enumerate(cycles):
            rows.append({
                'Cycle ID': i,
                'Cycle Path': " → ".join(cycle),
                'Length': max(len(cycle) - 1, 1),
                'Involves Entry': self.graph.root is not None and self.graph.root.path in cycle
            })
        return pd.DataFrame(rows, columns=['Cycle ID', 'Cycle Path', 'Length', 'Involves Entry'])

    def display_cycle_details_table(self, cycles: List[CircularPath]):
        """Display detailed cycle information in a streamlit table"""
        if not cycles:
            st.info("No circular dependencies detected.")
            return
        st.dataframe(self.create_cycle_table(cycles), use_container_width=True)
