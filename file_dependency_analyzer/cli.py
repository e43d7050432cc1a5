"""
Command line replay of a recorded edge stream

Usage:
    python -m file_dependency_analyzer edges.json
    python -m file_dependency_analyzer edges.csv --circular-mode full --output-dir out
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config import AnalyzerConfig, get_formatter
from .edge_loader import load_edges_file
from .exceptions import DependencyAnalyzerError
from .formatters import FORMATTERS
from .models import CircularMode
from .plugin import DependencyResolvePlugin

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='file_dependency_analyzer',
        description="Assemble a module dependency graph from recorded edges and report circular dependencies"
    )
    parser.add_argument('edges', help='Recorded edge stream (.json or .csv)')
    parser.add_argument('--circular-mode', choices=[m.value for m in CircularMode], default=None,
                        help='How much context to keep around a cycle (default: circular)')
    parser.add_argument('--all-cycles', action='store_true',
                        help='Collect every cycle instead of only the last one found')
    parser.add_argument('--output-dir', default=None, help='Directory for the report (default: cwd)')
    parser.add_argument('--output-file', default=None, help='Report file name (default: dependency.json)')
    parser.add_argument('--format', choices=sorted(FORMATTERS), default=None,
                        help='Report format (default: json)')
    parser.add_argument('--fail-on-cycle', action='store_true',
                        help='Exit with status 1 when a circular dependency is found')
    parser.add_argument('--log-level', default='INFO', help='Logging level (default: INFO)')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    overrides = {}
    if args.circular_mode:
        overrides['circular_mode'] = args.circular_mode
    if args.all_cycles:
        overrides['collect_all_cycles'] = True
    if args.output_dir:
        overrides['output_path'] = args.output_dir
    if args.output_file:
        overrides['output_filename'] = args.output_file

    try:
        if args.format:
            overrides['assets_formatter'] = get_formatter(args.format)
        config = AnalyzerConfig.from_env(**overrides)
        edges = load_edges_file(args.edges)
    except DependencyAnalyzerError as e:
        logger.error(str(e))
        return 2

    plugin = DependencyResolvePlugin(config)
    for edge in edges:
        plugin.add_edge(edge)
    result = plugin.on_done()

    cycles = result.cycles or ([result.circular_path] if result.circular_path else [])
    for i, cycle in enumerate(cycles, 1):
        print(f"Cycle {i}: {' -> '.join(cycle)}")

    if result.output_file is None:
        logger.error(f"No report written: {result.error}")
        return 2
    if args.fail_on_cycle and result.has_cycle:
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
