import json

import numpy as np
import pytest

from ekflow.algorithms.max_flow import solve
from ekflow.io import (
    NetworkFormatError,
    format_matrix_file,
    load_network_file,
    matrix_from_mapping,
    parse_matrix,
    read_matrix,
    result_to_dict,
    write_matrix,
)

DIAMOND_TEXT = """4
0 0 0 0
6 0 0 0
5 0 0 0
0 4 3 0
"""


class TestParseMatrix:
    def test_column_major(self, diamond):
        matrix = parse_matrix(DIAMOND_TEXT.splitlines())
        np.testing.assert_array_equal(matrix, diamond)

    def test_blank_lines_and_extra_whitespace(self):
        lines = ["", "  2  ", "", "0   0", "\t7.5 0 ", ""]
        matrix = parse_matrix(lines)
        assert matrix[0, 1] == 7.5
        assert matrix.sum() == 7.5

    def test_short_rows_and_missing_columns_are_zero(self):
        matrix = parse_matrix(["3", "0", "4"])
        expected = np.zeros((3, 3))
        expected[0, 1] = 4
        np.testing.assert_array_equal(matrix, expected)

    @pytest.mark.parametrize(
        "lines,message",
        [
            ([], "missing node count"),
            (["", "  "], "missing node count"),
            (["four"], "invalid node count 'four'"),
            (["2.5"], "invalid node count"),
            (["1"], "at least 2"),
            (["2 2"], "expected the node count"),
            (["2", "0 x"], ":2: invalid capacity 'x'"),
            (["2", "0 1 2"], ":2: 3 values for a 2-node network"),
            (["2", "0 0", "1 0", "0 0"], ":4: more than 2 column lines"),
        ],
    )
    def test_malformed(self, lines, message):
        with pytest.raises(NetworkFormatError, match=message):
            parse_matrix(lines)

    def test_error_names_source(self):
        with pytest.raises(NetworkFormatError, match=r"^net\.txt:1:"):
            parse_matrix(["x"], source="net.txt")


class TestFiles:
    def test_read_matrix(self, tmp_path, diamond):
        path = tmp_path / "diamond.network"
        path.write_text(DIAMOND_TEXT)
        np.testing.assert_array_equal(read_matrix(path), diamond)

    def test_read_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_matrix(tmp_path / "missing.network")

    def test_format_matrix_file(self, diamond):
        assert format_matrix_file(diamond) == DIAMOND_TEXT

    def test_format_keeps_fractions(self, fractional):
        text = format_matrix_file(fractional)
        assert text.splitlines()[2] == "3.141 0 0"

    def test_write_then_read(self, tmp_path, layered6):
        path = tmp_path / "layered.network"
        write_matrix(path, layered6)
        np.testing.assert_array_equal(read_matrix(path), layered6)

    def test_load_dispatches_on_suffix(self, tmp_path, diamond):
        text_path = tmp_path / "net.txt"
        text_path.write_text(DIAMOND_TEXT)
        yaml_path = tmp_path / "net.yaml"
        yaml_path.write_text(
            "capacity:\n"
            "  - [0, 6, 5, 0]\n"
            "  - [0, 0, 0, 4]\n"
            "  - [0, 0, 0, 3]\n"
            "  - [0, 0, 0, 0]\n"
        )
        np.testing.assert_array_equal(load_network_file(text_path), diamond)
        np.testing.assert_array_equal(load_network_file(yaml_path), diamond)

    def test_load_yaml_arcs(self, tmp_path, diamond):
        path = tmp_path / "net.yml"
        path.write_text(
            "nodes: 4\n"
            "arcs:\n"
            "  - {source: 0, target: 1, capacity: 6}\n"
            "  - {source: 0, target: 2, capacity: 5}\n"
            "  - {source: 1, target: 3, capacity: 4}\n"
            "  - {source: 2, target: 3, capacity: 3}\n"
        )
        np.testing.assert_array_equal(load_network_file(path), diamond)

    def test_load_invalid_yaml(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("capacity: [[0, 1]\n")
        with pytest.raises(NetworkFormatError, match="invalid YAML"):
            load_network_file(path)


class TestMatrixFromMapping:
    @pytest.mark.parametrize(
        "data,message",
        [
            ([[0, 1], [0, 0]], "expected a mapping"),
            ({}, "expected 'capacity' or 'nodes'"),
            ({"capacity": "0 1"}, "list of rows"),
            ({"capacity": [[0, "x"], [0, 0]]}, "invalid capacity matrix"),
            ({"nodes": 1}, "at least 2"),
            ({"nodes": True}, "at least 2"),
            ({"nodes": 2, "arcs": [{"source": 0, "target": 1}]}, "invalid arc #0"),
            ({"nodes": 2, "arcs": [{"source": 0, "target": 2, "capacity": 1}]}, "outside nodes 0..1"),
        ],
    )
    def test_malformed(self, data, message):
        with pytest.raises(NetworkFormatError, match=message):
            matrix_from_mapping(data)

    def test_nodes_without_arcs(self):
        np.testing.assert_array_equal(matrix_from_mapping({"nodes": 3}), np.zeros((3, 3)))


def test_result_to_dict_is_json_serialisable(diamond):
    data = result_to_dict(solve(diamond))
    restored = json.loads(json.dumps(data))

    assert restored["total_flow"] == 7
    assert restored["complete"] is True
    assert restored["iterations"] == 2
    assert restored["nodes"] == 4
    assert restored["paths"] == [
        {"nodes": [0, 1, 3], "bottleneck": 4.0},
        {"nodes": [0, 2, 3], "bottleneck": 3.0},
    ]
    assert restored["flow"][0][1] == 4
    assert restored["residual"][0][1] == 2
    assert restored["capacity"][0][1] == 6
