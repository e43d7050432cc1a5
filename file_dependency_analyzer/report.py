"""
Report Selector
Chooses between the circular path and the full graph and hands the choice
to the configured formatter
"""

from typing import Callable, Optional
import logging

from .exceptions import GraphNotAssembledError
from .formatters import json_formatter
from .models import CircularPath, DependencyGraph, ReportPayload

logger = logging.getLogger(__name__)

Formatter = Callable[[ReportPayload], str]


class ReportSelector:
    """Selects the report payload and renders it"""

    def __init__(self, formatter: Optional[Formatter] = None):
        self.formatter = formatter or json_formatter

    def select(self, graph: DependencyGraph, cycle: Optional[CircularPath]) -> ReportPayload:
        """The cycle when one was found, otherwise the root node (None without a root)"""
        if not isinstance(graph, DependencyGraph):
            raise GraphNotAssembledError(
                f"Expected an assembled DependencyGraph, got {type(graph).__name__}")
        if cycle:
            return cycle
        return graph.root

    def render(self, payload: ReportPayload) -> str:
        """Pass the payload unmodified to the formatter"""
        return self.formatter(payload)

    def build(self, graph: DependencyGraph, cycle: Optional[CircularPath]) -> str:
        payload = self.select(graph, cycle)
        kind = 'circular path' if isinstance(payload, list) else 'dependency graph'
        logger.info(f"Reporting {kind}")
        return self.render(payload)
