from file_dependency_analyzer.graph_builder import GraphAssembler
from file_dependency_analyzer.visualizer import DependencyVisualizer


class TestDependencyVisualizer:
    def test_cycle_edges_are_highlighted(self, cyclic_graph):
        fig = DependencyVisualizer(cyclic_graph).create_dependency_graph_plot([['A', 'B', 'C', 'A']])
        names = [trace.name for trace in fig.data]
        assert 'Circular Dependencies' in names
        assert 'Dependencies' not in names
        assert names[-1] == 'Modules'

    def test_graph_without_cycles(self, chain_graph):
        fig = DependencyVisualizer(chain_graph).create_dependency_graph_plot()
        names = [trace.name for trace in fig.data]
        assert names == ['Dependencies', 'Modules']
        assert list(fig.data[-1].text) == ['A', 'B', 'C']

    def test_empty_graph(self):
        fig = DependencyVisualizer(GraphAssembler().assemble([])).create_dependency_graph_plot()
        assert len(fig.data) == 0
        assert fig.layout.annotations[0].text == "No dependencies to visualize"

    def test_cycle_table(self, two_cycle_graph):
        table = DependencyVisualizer(two_cycle_graph).create_cycle_table([['A', 'B', 'A'], ['C', 'D', 'C']])
        assert list(table['Cycle Path']) == ['A → B → A', 'C → D → C']
        assert list(table['Length']) == [2, 2]
        assert not table['Involves Entry'].any()

    def test_empty_cycle_table(self, chain_graph):
        table = DependencyVisualizer(chain_graph).create_cycle_table([])
        assert table.empty

    def test_lead_in_edge_is_not_highlighted(self, build_graph):
        # R -> X -> A -> B -> A
        graph = build_graph([('R', 'R'), ('X', 'R'), ('A', 'X'), ('B', 'A'), ('A', 'B')])
        fig = DependencyVisualizer(graph).create_dependency_graph_plot([['R', 'X', 'A', 'B', 'A']])
        traces = {trace.name: trace for trace in fig.data}

        # two highlighted edges, three coordinates each
        assert len(traces['Circular Dependencies'].x) == 6
        assert len(traces['Dependencies'].x) == 6

        modules = traces['Modules']
        colors = dict(zip(modules.text, modules.marker.color))
        assert colors['A'] == colors['B'] == '#FF8800'
        assert colors['X'] != '#FF8800'
        assert colors['R'] == '#4444FF'
