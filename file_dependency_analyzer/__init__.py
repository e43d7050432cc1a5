"""
File Dependency Analyzer
Assembles the module graph observed during a build and reports circular dependencies
"""

from .models import CircularMode, DependencyGraph, Edge, ModuleNode
from .registry import NodeRegistry
from .graph_builder import GraphAssembler
from .cycle_detector import CycleDetector
from .report import ReportSelector
from .config import AnalyzerConfig
from .plugin import AnalysisResult, DependencyResolvePlugin

__all__ = [
    'CircularMode', 'DependencyGraph', 'Edge', 'ModuleNode',
    'NodeRegistry', 'GraphAssembler', 'CycleDetector', 'ReportSelector',
    'AnalyzerConfig', 'AnalysisResult', 'DependencyResolvePlugin'
]
