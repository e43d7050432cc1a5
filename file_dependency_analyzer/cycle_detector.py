"""
Cycle Detector
Walks the assembled graph depth-first from the entry module and extracts
circular dependency paths
"""

import networkx as nx
from typing import Dict, Iterator, List, Optional, Tuple
import logging

from .exceptions import GraphNotAssembledError
from .graph_builder import to_networkx
from .models import CircularMode, CircularPath, DependencyGraph, ModuleNode

logger = logging.getLogger(__name__)

_EXHAUSTED = object()


def trim_circular_path(stack: List[str], repeated: str, mode=CircularMode.CIRCULAR) -> CircularPath:
    """Close the loop on a copy of `stack` and trim it according to `mode`"""
    raw = list(stack)
    raw.append(repeated)
    idx = raw.index(repeated)
    mode = CircularMode.coerce(mode)

    if mode is CircularMode.FULL:
        return raw
    if mode is CircularMode.PRE:
        # idx 0 wraps around to the last element only
        return raw[idx - 1:]
    return raw[idx:]


class CycleDetector:
    """Detects circular dependencies reachable from the entry module"""

    def __init__(self, mode=CircularMode.CIRCULAR):
        self.mode = CircularMode.coerce(mode)

    def detect(self, graph: DependencyGraph) -> Optional[CircularPath]:
        """Return the last cycle discovered by the traversal, or None"""
        last = None
        for cycle in self._walk(graph):
            last = cycle
        return last

    def detect_all(self, graph: DependencyGraph) -> List[CircularPath]:
        """Return every cycle in discovery order"""
        cycles = list(self._walk(graph))
        logger.info(f"Found {len(cycles)} circular dependencies")
        return cycles

    def _walk(self, graph: DependencyGraph) -> Iterator[CircularPath]:
        """
        Depth-first backtracking over the current descent path.

        A node reached again through a different branch is not a cycle unless
        it is still on the current path. Finding a cycle stops descent on that
        branch only. Frames are kept on an explicit stack so deep graphs do not
        hit the interpreter recursion limit.
        """
        if not isinstance(graph, DependencyGraph):
            raise GraphNotAssembledError(
                f"Expected an assembled DependencyGraph, got {type(graph).__name__}")
        if graph.root is None:
            return

        path: List[str] = []
        on_path = set()
        frames: List[Iterator[ModuleNode]] = [iter((graph.root,))]

        while frames:
            node = next(frames[-1], _EXHAUSTED)
            if node is _EXHAUSTED:
                frames.pop()
                if path:
                    on_path.discard(path.pop())
                continue

            if node.path in on_path:
                cycle = trim_circular_path(path, node.path, self.mode)
                logger.debug(f"Circular dependency: {' -> '.join(cycle)}")
                yield cycle
                continue

            path.append(node.path)
            on_path.add(node.path)
            frames.append(iter(node.deps))

    def get_strongly_connected_components(self, graph: DependencyGraph) -> List[List[str]]:
        """Find strongly connected components that contain a cycle"""
        nx_graph = to_networkx(graph)
        significant_sccs = []
        for scc in nx.strongly_connected_components(nx_graph):
            if len(scc) > 1:
                significant_sccs.append(sorted(scc))
            else:
                node = next(iter(scc))
                if nx_graph.has_edge(node, node):
                    significant_sccs.append([node])
        return significant_sccs

    def get_analysis_summary(self, graph: DependencyGraph) -> Dict:
        """Get a summary of the cycle analysis"""
        cycles = self.detect_all(graph)
        sccs = self.get_strongly_connected_components(graph)
        nx_graph = to_networkx(graph)

        return {
            'mode': self.mode.value,
            'root': graph.root.path if graph.root is not None else None,
            'circular_path': cycles[-1] if cycles else None,
            'cycles': cycles,
            'graph_stats': {
                'total_nodes': nx_graph.number_of_nodes(),
                'total_edges': nx_graph.number_of_edges(),
                'is_dag': nx.is_directed_acyclic_graph(nx_graph)
            },
            'strongly_connected_components': {
                'count': len(sccs),
                'components': sccs,
                'largest_component_size': max([len(scc) for scc in sccs]) if sccs else 0
            }
        }


def detect(graph: DependencyGraph, mode=CircularMode.CIRCULAR) -> Optional[CircularPath]:
    """Shortcut for CycleDetector(mode).detect(graph)"""
    return CycleDetector(mode).detect(graph)


def cycle_edges(cycle: CircularPath) -> List[Tuple[str, str]]:
    """Consecutive (issuer, dependency) pairs along a circular path"""
    return list(zip(cycle, cycle[1:]))


def loop_segment(cycle: CircularPath) -> CircularPath:
    """The closed loop of a trimmed path, without any lead-in prefix"""
    if not cycle:
        return []
    return cycle[cycle.index(cycle[-1]):]
