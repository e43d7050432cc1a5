"""
Graph Assembler
Links an ordered stream of resolved edges into a shared node graph
"""

import networkx as nx
from typing import Dict, Iterable, Optional
import logging

from .models import DependencyGraph, Edge, ModuleNode
from .registry import NodeRegistry

logger = logging.getLogger(__name__)


class GraphAssembler:
    """Builds a DependencyGraph from resolved (dependency, issuer) edges"""

    def __init__(self, registry: Optional[NodeRegistry] = None):
        self.registry = registry if registry is not None else NodeRegistry()
        self.root: Optional[ModuleNode] = None
        self.edge_count = 0

    def add_edge(self, edge: Edge) -> None:
        """Link one edge; a self-edge marks the entry module"""
        dependency = self.registry.get_or_create(edge.path)
        issuer = self.registry.get_or_create(edge.issuer)
        self.edge_count += 1

        if edge.is_entry:
            if self.root is not None and self.root is not dependency:
                logger.debug(f"Entry module {self.root.path} replaced by {dependency.path}")
            self.root = dependency
        else:
            # duplicates are kept: deps length follows the edge count
            issuer.deps.append(dependency)

    def assemble(self, edges: Iterable[Edge]) -> DependencyGraph:
        """Link every edge in arrival order and return the graph"""
        for edge in edges:
            self.add_edge(edge)

        if self.root is None:
            logger.info(f"No entry module among {self.edge_count} edges, graph has no root")
        else:
            logger.info(f"Assembled {len(self.registry)} modules from {self.edge_count} edges, "
                        f"entry {self.root.path}")
        return self.graph

    @property
    def graph(self) -> DependencyGraph:
        return DependencyGraph(root=self.root, registry=self.registry)


def to_networkx(graph: DependencyGraph) -> nx.MultiDiGraph:
    """Project the node graph onto networkx, one edge per deps entry"""
    nx_graph = nx.MultiDiGraph()
    for node in graph.nodes():
        nx_graph.add_node(node.path, type='root' if node is graph.root else 'module')
    for node in graph.nodes():
        for dep in node.deps:
            nx_graph.add_edge(node.path, dep.path)
    return nx_graph


def get_graph_stats(graph: DependencyGraph) -> Dict:
    """Get statistics about the dependency graph"""
    nx_graph = to_networkx(graph)
    total_modules = nx_graph.number_of_nodes()
    simple = nx.DiGraph(nx_graph)
    return {
        'total_modules': total_modules,
        'total_dependencies': nx_graph.number_of_edges(),
        'distinct_dependencies': simple.number_of_edges(),
        'is_connected': nx.is_weakly_connected(simple) if total_modules > 0 else False,
        'density': nx.density(simple),
        'average_degree': sum(dict(simple.degree()).values()) / total_modules if total_modules > 0 else 0,
        'has_root': graph.has_root,
        'root': graph.root.path if graph.root is not None else None
    }


def export_graph_data(graph: DependencyGraph) -> Dict:
    """Export graph data for visualization"""
    nodes = []
    edges = []

    for node in graph.nodes():
        nodes.append({
            'id': node.path,
            'label': node.path,
            'type': 'root' if node is graph.root else 'module',
            'dependencies': len(node.deps)
        })

    for node in graph.nodes():
        for dep in node.deps:
            edges.append({
                'source': node.path,
                'target': dep.path
            })

    return {
        'nodes': nodes,
        'edges': edges,
        'stats': get_graph_stats(graph)
    }
