import json

import pytest

from file_dependency_analyzer.exceptions import GraphNotAssembledError
from file_dependency_analyzer.formatters import (
    encode_node, json_formatter, node_to_dict, pretty_json_formatter, tree_formatter
)
from file_dependency_analyzer.graph_builder import GraphAssembler
from file_dependency_analyzer.models import Edge
from file_dependency_analyzer.report import ReportSelector


class TestReportSelector:
    def test_selects_cycle_when_found(self, cyclic_graph):
        payload = ReportSelector().select(cyclic_graph, ['A', 'B', 'C', 'A'])
        assert payload == ['A', 'B', 'C', 'A']

    def test_falls_back_to_graph(self, chain_graph):
        payload = ReportSelector().select(chain_graph, None)
        assert payload is chain_graph.root
        assert payload.deps[0].path == 'B'
        assert payload.deps[0].deps[0].path == 'C'

    def test_empty_cycle_falls_back_to_graph(self, chain_graph):
        assert ReportSelector().select(chain_graph, []) is chain_graph.root

    def test_rootless_graph_gives_empty_payload(self, build_graph):
        graph = build_graph([('B', 'A')])
        selector = ReportSelector()
        assert selector.select(graph, None) is None
        assert selector.build(graph, None) == 'null'

    def test_payload_passed_unmodified_to_formatter(self, chain_graph):
        seen = []

        def formatter(payload):
            seen.append(payload)
            return 'custom'

        selector = ReportSelector(formatter)
        assert selector.build(chain_graph, None) == 'custom'
        assert seen == [chain_graph.root]

    def test_rejects_unassembled_graph(self):
        with pytest.raises(GraphNotAssembledError):
            ReportSelector().select(None, None)


class TestFormatters:
    def test_json_graph(self, chain_graph):
        data = json.loads(json_formatter(chain_graph.root))
        assert data == {
            'path': 'A',
            'deps': [{'path': 'B', 'deps': [{'path': 'C', 'deps': []}]}]
        }

    def test_json_cycle(self):
        assert json_formatter(['a.js', 'b.js', 'a.js']) == '["a.js","b.js","a.js"]'

    def test_json_repeats_shared_nodes(self, build_graph):
        graph = build_graph([('R', 'R'), ('A', 'R'), ('B', 'R'), ('C', 'A'), ('C', 'B')])
        data = node_to_dict(graph.root)
        assert data['deps'][0]['deps'] == data['deps'][1]['deps'] == [{'path': 'C', 'deps': []}]

    def test_node_to_dict_refuses_cycles(self, cyclic_graph):
        with pytest.raises(ValueError):
            node_to_dict(cyclic_graph.root)

    def test_pretty_json(self):
        assert pretty_json_formatter(None) == 'null'
        assert '\n' in pretty_json_formatter(['a', 'a'])

    def test_tree_graph(self, chain_graph):
        assert tree_formatter(chain_graph.root) == 'A\n  B\n    C'

    def test_tree_marks_back_references(self, cyclic_graph):
        assert tree_formatter(cyclic_graph.root).splitlines()[-1] == '      A (circular)'

    def test_tree_cycle_and_empty(self):
        assert tree_formatter(['a', 'b', 'a']) == 'a -> b -> a'
        assert tree_formatter(None) == ''


def chain_root(depth):
    edges = [Edge('m0', 'm0')] + [Edge(f'm{i + 1}', f'm{i}') for i in range(depth)]
    return GraphAssembler().assemble(edges).root


class TestDeepGraphs:
    depth = 2000

    def test_json_deep_chain(self):
        text = json_formatter(chain_root(self.depth))
        assert text.startswith('{"path":"m0","deps":[{"path":"m1"')
        assert text.endswith('"deps":[]}' + ']}' * self.depth)

    def test_pretty_json_deep_chain(self):
        lines = pretty_json_formatter(chain_root(self.depth)).splitlines()
        assert lines[0] == '{'
        assert lines[-1] == '}'
        assert sum('"path"' in line for line in lines) == self.depth + 1

    def test_node_to_dict_deep_chain(self):
        data = node_to_dict(chain_root(self.depth))
        for i in range(self.depth):
            assert data['path'] == f'm{i}'
            data = data['deps'][0]
        assert data == {'path': f'm{self.depth}', 'deps': []}

    def test_tree_deep_chain(self):
        lines = tree_formatter(chain_root(self.depth)).splitlines()
        assert len(lines) == self.depth + 1
        assert lines[-1] == '  ' * self.depth + f'm{self.depth}'


class TestEncodeNode:
    def test_matches_json_dumps_layout(self, build_graph):
        graph = build_graph([('R', 'R'), ('A', 'R'), ('B', 'R'), ('C', 'A'), ('C', 'B'), ('é', 'C')])
        expected = node_to_dict(graph.root)
        assert encode_node(graph.root) == json.dumps(expected, ensure_ascii=False, separators=(',', ':'))
        assert encode_node(graph.root, indent=2) == json.dumps(expected, ensure_ascii=False, indent=2)

    def test_refuses_cycles(self, cyclic_graph):
        with pytest.raises(ValueError):
            encode_node(cyclic_graph.root)
