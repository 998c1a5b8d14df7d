"""Tests for result tables, experiment IDs and JSON summaries."""

import json
import re
from dataclasses import replace

import numpy as np
import pytest

from rwtester.config import ExperimentConfig, GraphSourceConfig, WalkConfig
from rwtester.graph.generators import complete_graph
from rwtester.graph.loader import parse_graph
from rwtester.results import (
    build_summary,
    format_rows,
    generate_experiment_id,
    graph_label,
    load_summary,
    read_table,
    result_file_names,
    validate_summary,
    write_report_config,
    write_result_tables,
    write_summary,
)
from rwtester.walk import WalkManager


def _make_config(**walk_changes) -> ExperimentConfig:
    return ExperimentConfig(
        graph=GraphSourceConfig(generate="K6"),
        walk=replace(WalkConfig(runs=3, seed=11), **walk_changes),
    )


def _make_session(directed: bool = False):
    if directed:
        graph = parse_graph(["[0] -> [1]", "[1] -> [2]", "[2] -> [0]", "[0] -> [2]"])
    else:
        graph = complete_graph(6)
    return WalkManager(graph, seed=11).run_cover(3, "0", 100)


class TestTables:
    """Text table export."""

    def test_format_rows(self):
        assert format_rows({1: 5, 3: 2}) == "1    5\n3    2\n"
        assert format_rows([(0, 1)]) == "0    1\n"

    def test_undirected_files(self, tmp_path):
        session = _make_session()
        template = tmp_path / "out" / "k6"
        written = write_result_tables(session.result, template)
        names = sorted(p.name.removeprefix("k6") for p in written)
        assert names == sorted(result_file_names(False))
        assert (tmp_path / "out").is_dir()

    def test_directed_files(self, tmp_path):
        session = _make_session(directed=True)
        written = write_result_tables(session.result, tmp_path / "d")
        assert len(written) == len(result_file_names(True))
        assert (tmp_path / "d_in_degree_visited.txt").exists()
        assert (tmp_path / "d_out_degree_time_length.txt").exists()

    def test_read_back(self, tmp_path):
        session = _make_session()
        write_result_tables(session.result, tmp_path / "k6")
        assert read_table(tmp_path / "k6_degree_visited.txt") == session.result.degree_visited
        cover = read_table(tmp_path / "k6_coverage.txt")
        assert len(cover) == 101
        assert cover[100] == int(session.result.percentage_cover[100])

    def test_full_length_range(self, tmp_path):
        session = _make_session()
        write_result_tables(session.result, tmp_path / "k6", full_length_range=True)
        table = read_table(tmp_path / "k6_length_visited.txt")
        assert sorted(table) == [0, 1]

    def test_report_config(self, tmp_path):
        path = write_report_config(tmp_path / "k6", "cover", "classic", 3, False, coverage=80)
        lines = path.read_text().splitlines()
        assert lines[1:] == ["mode=cover", "rwmode=classic", "loop=3", "directed=false", "coverage=80"]

    def test_report_config_path_has_no_coverage(self, tmp_path):
        path = write_report_config(tmp_path / "k6", "path", "indegree", 2, True)
        text = path.read_text()
        assert "coverage=" not in text
        assert "directed=true" in text


class TestExperimentId:
    def test_format(self):
        eid = generate_experiment_id(_make_config())
        assert re.fullmatch(r"K6_cover_classic_x3_\d{8}_\d{6}", eid)

    def test_discover_flag(self):
        eid = generate_experiment_id(_make_config(discover=True, mode="outdegree"))
        assert eid.startswith("K6_cover_outdegree_disc_x3_")

    def test_graph_label_from_path(self):
        cfg = ExperimentConfig(graph=GraphSourceConfig(input_path="data/web graph.graph"))
        assert graph_label(cfg) == "web graph"
        assert generate_experiment_id(cfg).startswith("web-graph_cover_")


class TestSummary:
    """Summary building and schema validation."""

    def test_build_and_validate(self):
        summary = build_summary(_make_session(), _make_config())
        assert validate_summary(summary) == []
        assert summary["reachability"]["coverage"] == 100
        assert len(summary["runs"]) == 3
        assert summary["master_seed"] == 11
        assert len(summary["metadata"]["config_hash"]) == 16

    def test_json_serializable(self):
        summary = build_summary(_make_session(directed=True), _make_config())
        json.dumps(summary)
        assert "in_degree_visited" in summary["result"]["tables"]

    def test_write_and_load(self, tmp_path):
        summary = build_summary(_make_session(), _make_config())
        path = write_summary(summary, tmp_path / "nested" / "summary.json")
        loaded = load_summary(path)
        assert loaded["result"]["percentage_cover"] == summary["result"]["percentage_cover"]

    def test_missing_fields(self):
        errors = validate_summary({"schema_version": "1.0"})
        assert any("Missing required" in e for e in errors)

    def test_decreasing_cover_rejected(self):
        summary = build_summary(_make_session(), _make_config())
        cover = list(range(101))
        cover[50] = 0
        summary["result"]["percentage_cover"] = cover
        assert any("non-decreasing" in e for e in validate_summary(summary))

    def test_bad_timestamp(self):
        summary = build_summary(_make_session(), _make_config())
        summary["timestamp"] = "yesterday"
        assert "timestamp must be in ISO 8601 format" in validate_summary(summary)

    def test_write_invalid_raises(self, tmp_path):
        with pytest.raises(ValueError, match="Summary validation failed"):
            write_summary({"schema_version": "1.0"}, tmp_path / "bad.json")
        assert not (tmp_path / "bad.json").exists()

    def test_load_invalid_raises(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"runs": []}))
        with pytest.raises(ValueError):
            load_summary(path)
