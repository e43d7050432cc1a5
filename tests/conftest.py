from typing import List, Tuple

import pytest

from file_dependency_analyzer.graph_builder import GraphAssembler
from file_dependency_analyzer.models import DependencyGraph, Edge


def make_edges(pairs: List[Tuple[str, str]]) -> List[Edge]:
    """(dependency, issuer) tuples to edges"""
    return [Edge(path=path, issuer=issuer) for path, issuer in pairs]


def assemble(pairs: List[Tuple[str, str]]) -> DependencyGraph:
    return GraphAssembler().assemble(make_edges(pairs))


@pytest.fixture
def build_graph():
    return assemble


@pytest.fixture
def cyclic_graph() -> DependencyGraph:
    # A -> B -> C -> A, entry A
    return assemble([('A', 'A'), ('B', 'A'), ('C', 'B'), ('A', 'C')])


@pytest.fixture
def chain_graph() -> DependencyGraph:
    # A -> B -> C, entry A
    return assemble([('A', 'A'), ('B', 'A'), ('C', 'B')])


@pytest.fixture
def two_cycle_graph() -> DependencyGraph:
    # R -> A -> B -> A and R -> C -> D -> C
    return assemble([
        ('R', 'R'), ('A', 'R'), ('C', 'R'),
        ('B', 'A'), ('A', 'B'),
        ('D', 'C'), ('C', 'D')
    ])
