import pytest

from file_dependency_analyzer.edge_loader import load_edges_csv, load_edges_file, load_edges_json
from file_dependency_analyzer.exceptions import EdgeLoadError
from file_dependency_analyzer.models import Edge


class TestLoadEdgesJson:
    def test_objects_and_pairs(self):
        edges = load_edges_json('[{"path": "a.js", "issuer": "a.js"}, ["b.js", "a.js"], {"path": "c.js"}]')
        assert edges == [Edge('a.js', 'a.js'), Edge('b.js', 'a.js'), Edge('c.js', 'c.js')]

    def test_wrapped_in_object(self):
        assert load_edges_json('{"edges": [["b", "a"]]}') == [Edge('b', 'a')]

    def test_invalid_json(self):
        with pytest.raises(EdgeLoadError):
            load_edges_json('[{')

    def test_invalid_record(self):
        with pytest.raises(EdgeLoadError):
            load_edges_json('[["only-one"]]')
        with pytest.raises(EdgeLoadError):
            load_edges_json('[{"issuer": "a"}]')
        with pytest.raises(EdgeLoadError):
            load_edges_json('"edges"')


class TestLoadEdgesCsv:
    def test_rows_in_order(self):
        content = 'path,issuer\nindex.js,\nutil.js,index.js\nutil.js,index.js\n'
        assert load_edges_csv(content) == [
            Edge('index.js', 'index.js'),
            Edge('util.js', 'index.js'),
            Edge('util.js', 'index.js')
        ]

    def test_missing_column(self):
        with pytest.raises(EdgeLoadError):
            load_edges_csv('path,parent\na,b\n')

    def test_empty(self):
        with pytest.raises(EdgeLoadError):
            load_edges_csv('')


class TestLoadEdgesFile:
    def test_by_suffix(self, tmp_path):
        json_file = tmp_path / 'edges.json'
        json_file.write_text('[["b", "a"]]', encoding='utf-8')
        csv_file = tmp_path / 'edges.csv'
        csv_file.write_text('path,issuer\nb,a\n', encoding='utf-8')
        assert load_edges_file(json_file) == load_edges_file(csv_file) == [Edge('b', 'a')]

    def test_unsupported_suffix(self, tmp_path):
        other = tmp_path / 'edges.txt'
        other.write_text('b a', encoding='utf-8')
        with pytest.raises(EdgeLoadError):
            load_edges_file(other)

    def test_missing_file(self, tmp_path):
        with pytest.raises(EdgeLoadError):
            load_edges_file(tmp_path / 'missing.json')
