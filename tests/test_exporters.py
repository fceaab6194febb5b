"""
Tests for exporters
===================

Tests the DataFrame conversions and file export of layout results.
"""

import json

import pytest

from graphspring.core.graph import UndirectedGraph
from graphspring.layout.coordinates import VertexCoordinate
from graphspring.layout.spring import simple_spring_embedding
from graphspring.io.exporters import (
    coordinates_to_dataframe, history_to_dataframe, export_coordinates, load_coordinates,
)


@pytest.fixture
def coords():
    return [VertexCoordinate("a", [1.0, 2.0]), VertexCoordinate("b", [3.0, 4.0])]


class TestDataFrames:

    def test_coordinates_to_dataframe(self, coords):
        df = coordinates_to_dataframe(coords)
        assert list(df.columns) == ['vertex', 'x0', 'x1']
        assert df['vertex'].tolist() == ["a", "b"]
        assert df['x1'].tolist() == [2.0, 4.0]

    def test_history_to_dataframe(self):
        g = UndirectedGraph([1, 2, 3], [(1, 2), (2, 3)])
        _, history = simple_spring_embedding(g, iterations=4, seed=0)

        df = history_to_dataframe(history)
        assert len(df) == 4 * 3
        assert sorted(df['iteration'].unique().tolist()) == [1, 2, 3, 4]
        last = df[df['iteration'] == 4]
        assert last['x0'].tolist() == [c[0] for c in history[-1]]

    def test_empty_history(self):
        df = history_to_dataframe([])
        assert len(df) == 0
        assert 'iteration' in df.columns


class TestExport:

    def test_export_csv(self, coords, tmp_path):
        filepath = tmp_path / "out" / "layout.csv"
        export_coordinates(coords, str(filepath))

        lines = filepath.read_text().splitlines()
        assert lines[0] == "vertex,x0,x1"
        assert lines[1] == "a,1.0,2.0"

    def test_export_json_and_load(self, coords, tmp_path):
        filepath = tmp_path / "layout.json"
        export_coordinates(coords, str(filepath))

        data = json.loads(filepath.read_text())
        assert data[0] == {'vertex': "a", 'positions': [1.0, 2.0]}
        assert load_coordinates(str(filepath)) == coords

    def test_unsupported_format(self, coords, tmp_path):
        with pytest.raises(ValueError):
            export_coordinates(coords, str(tmp_path / "layout.svg"))
