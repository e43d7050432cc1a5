"""
Dependency resolve plugin
Observes one build: collects resolved edges, then assembles, detects and
reports exactly once when the build signals completion
"""

import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
import logging

from .config import AnalyzerConfig
from .cycle_detector import CycleDetector
from .exceptions import AnalysisStateError
from .filters import EdgeFilter
from .graph_builder import GraphAssembler
from .models import CircularPath, DependencyGraph, Edge, ReportPayload
from .paths import PathNormalizer
from .report import ReportSelector
from .sink import ReportSink

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """Everything produced by one completed build observation"""
    graph: DependencyGraph
    circular_path: Optional[CircularPath]
    payload: ReportPayload
    content: Optional[str] = None
    output_file: Optional[Path] = None
    cycles: List[CircularPath] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def has_cycle(self) -> bool:
        return bool(self.circular_path)


class DependencyResolvePlugin:
    """The edge source calls `on_resolve` per resolved module and `on_done` once"""

    title = 'DependencyResolvePlugin'

    def __init__(self, config: Optional[AnalyzerConfig] = None):
        self.config = config or AnalyzerConfig()
        self.edge_filter = EdgeFilter(self.config.includes, self.config.file_types)
        self.normalizer = PathNormalizer(self.config.path_type, self.config.cwd)
        self.sink = ReportSink(self.config.output_path, self.config.output_filename)
        self.edges: List[Edge] = []
        self.result: Optional[AnalysisResult] = None
        self._lock = threading.Lock()
        self._done = False

    @property
    def is_done(self) -> bool:
        return self._done

    def on_resolve(self, file_path: str, issuer_path: Optional[str] = None) -> bool:
        """Record one resolved module; no issuer means `file_path` is the entry"""
        issuer_path = issuer_path or file_path
        if not self.edge_filter.admits(file_path, issuer_path):
            return False

        self.add_edge(Edge(path=self.normalizer(file_path), issuer=self.normalizer(issuer_path)))
        return True

    def add_edge(self, edge: Edge) -> None:
        """Append an already admitted and normalized edge"""
        with self._lock:
            if self._done:
                raise AnalysisStateError(f"{self.title}: edge {edge.path} arrived after the build completed")
            self.edges.append(edge)

    def on_done(self) -> AnalysisResult:
        """Assemble, detect and report; runs once per build"""
        with self._lock:
            if self._done:
                raise AnalysisStateError(f"{self.title}: build already completed")
            self._done = True
            edges = list(self.edges)

        logger.info(f"{self.title}: analyzing {len(edges)} edges")
        graph = GraphAssembler().assemble(edges)

        detector = CycleDetector(self.config.circular_mode)
        if self.config.collect_all_cycles:
            cycles = detector.detect_all(graph)
            circular_path = cycles[-1] if cycles else None
        else:
            cycles = []
            circular_path = detector.detect(graph)

        if circular_path:
            logger.warning(f"{self.title}: circular dependency {' -> '.join(circular_path)}")

        selector = ReportSelector(self.config.assets_formatter)
        self.result = AnalysisResult(
            graph=graph,
            circular_path=circular_path,
            payload=selector.select(graph, circular_path),
            cycles=cycles
        )

        try:
            self.result.content = selector.render(self.result.payload)
        except Exception as e:
            # reported like a sink failure, the analysis itself is kept
            logger.error(f"{self.title}: report formatter failed: {e}")
            self.result.error = str(e)
            return self.result

        self.result.output_file = self.sink.write(self.result.content)
        if self.result.output_file is None:
            self.result.error = f"could not write {self.sink.target}"
        return self.result
