"""End-to-end tests for the run_walks command-line entry point."""

import json

import pytest

from run_walks import build_parser, config_from_args, main, output_template


def _write_graph(tmp_path, lines):
    path = tmp_path / "input.graph"
    path.write_text("\n".join(lines) + "\n")
    return path


class TestConfigFromArgs:
    """Command-line flags overlay the JSON config."""

    def test_flags_only(self):
        args = build_parser().parse_args(
            ["--generate", "K5", "--mode", "path", "--target", "3", "--loop", "4"]
        )
        cfg = config_from_args(args)
        assert cfg.graph.generate == "K5"
        assert cfg.walk.task == "path"
        assert cfg.walk.target_vertex == "3"
        assert cfg.walk.runs == 4
        assert cfg.walk.discover is False

    def test_flags_override_file(self, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({
            "graph": {"generate": "K4"},
            "walk": {"runs": 9, "mode": "outdegree", "discover": True},
            "output": {"plots": True},
        }))
        args = build_parser().parse_args(["--config", str(config_path), "--loop", "2"])
        cfg = config_from_args(args)
        assert cfg.walk.runs == 2
        assert cfg.walk.mode == "outdegree"
        assert cfg.walk.discover is True
        assert cfg.output.plots is True

    def test_source_flag_replaces_file_source(self, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"graph": {"generate": "K4"}}))
        args = build_parser().parse_args(["--config", str(config_path), "--input", "g.graph"])
        cfg = config_from_args(args)
        assert cfg.graph.input_path == "g.graph"
        assert cfg.graph.generate is None

    def test_no_summary(self):
        args = build_parser().parse_args(["--generate", "K3", "--no-summary"])
        assert config_from_args(args).output.summary is False

    def test_full_length_range_flag(self):
        args = build_parser().parse_args(["--generate", "K3"])
        assert config_from_args(args).output.full_length_range is False
        args = build_parser().parse_args(["--generate", "K3", "--full-length-range"])
        assert config_from_args(args).output.full_length_range is True

    def test_missing_config_file(self, tmp_path):
        args = build_parser().parse_args(["--config", str(tmp_path / "nope.json")])
        with pytest.raises(FileNotFoundError):
            config_from_args(args)

    def test_explicit_template(self):
        args = build_parser().parse_args(["--generate", "K3", "--template", "out/k3"])
        cfg = config_from_args(args)
        assert str(output_template(cfg, "ignored")) == "out/k3"


class TestMain:
    """Full runs through main()."""

    def test_dry_run(self, capsys):
        main(["--generate", "K5", "--dry-run"])
        out = capsys.readouterr().out
        assert "Experiment ID: K5_cover_classic_x10_" in out
        assert "[dry-run]" in out

    def test_cover_run_on_generated_graph(self, tmp_path):
        template = tmp_path / "k5"
        main([
            "--generate", "K5", "--mode", "cover", "--loop", "2", "--seed", "1",
            "--template", str(template), "--gml",
        ])
        assert (tmp_path / "k5.graph").exists()
        assert (tmp_path / "k5_degree_visited.txt").exists()
        assert (tmp_path / "k5_coverage.txt").exists()
        assert (tmp_path / "k5_config.txt").read_text().splitlines()[1] == "mode=cover"
        assert (tmp_path / "k5_coverage.gml").exists()
        assert (tmp_path / "k5_time.gml").exists()
        summary = json.loads((tmp_path / "k5_summary.json").read_text())
        assert summary["master_seed"] == 1
        assert len(summary["runs"]) == 2

    def test_path_run_on_input_file(self, tmp_path):
        graph = _write_graph(tmp_path, ["[a] -> [b]", "[b] -> [c]", "[c] -> [a]"])
        main([
            "--input", str(graph), "--mode", "path", "--start", "a", "--target", "c",
            "--rwmode", "indegree", "--loop", "3", "--seed", "5",
            "--template", str(tmp_path / "p"), "--no-summary",
        ])
        assert (tmp_path / "p_in_degree_visited.txt").exists()
        assert "coverage=" not in (tmp_path / "p_config.txt").read_text()
        assert not (tmp_path / "p_summary.json").exists()

    def test_default_template_under_results_dir(self, tmp_path):
        main(["--generate", "T2-2", "--loop", "1", "--seed", "0",
              "--results-dir", str(tmp_path)])
        [run_dir] = list(tmp_path.iterdir())
        assert run_dir.name.startswith("T2-2_cover_classic_x1_")
        assert (run_dir / "T2-2_degree_time.txt").exists()

    def test_full_length_range_tables(self, tmp_path):
        main(["--generate", "T2-2", "--loop", "1", "--seed", "0", "--no-summary",
              "--template", str(tmp_path / "t"), "--full-length-range"])
        rows = (tmp_path / "t_length_visited.txt").read_text().splitlines()
        assert [int(row.split()[0]) for row in rows] == [0, 1, 2]

    def test_analyze(self, tmp_path):
        graph = _write_graph(tmp_path, ["[a] -- [b]", "[b] -- [c]"])
        main(["--input", str(graph), "--mode", "analyze", "--template", str(tmp_path / "g")])
        assert (tmp_path / "g_deg.txt").read_text() == "1 2\n2 1\n"
        assert (tmp_path / "g_info.txt").exists()

    @pytest.mark.parametrize("fmt, suffix", [("gml", ".gml"), ("npz", ".npz"), ("text", ".graph")])
    def test_convert(self, tmp_path, fmt, suffix):
        graph = _write_graph(tmp_path, ["[a] -- [b] 2"])
        main(["--input", str(graph), "--convert", fmt, "--template", str(tmp_path / "c")])
        assert (tmp_path / f"c{suffix}").exists()
        assert not (tmp_path / "c_degree_visited.txt").exists()

    def test_unreachable_coverage_exits(self, tmp_path):
        graph = _write_graph(tmp_path, ["[a] -> [b]", "[b] -> [a]", "[c]"])
        with pytest.raises(SystemExit) as exc:
            main(["--input", str(graph), "--start", "a", "--coverage", "90",
                  "--template", str(tmp_path / "u")])
        assert exc.value.code == 1

    def test_malformed_input_exits(self, tmp_path):
        graph = _write_graph(tmp_path, ["[a] -- [b] 5", "[a] -> [c]"])
        with pytest.raises(SystemExit) as exc:
            main(["--input", str(graph), "--template", str(tmp_path / "m")])
        assert exc.value.code == 1

    def test_missing_source_exits(self):
        with pytest.raises(SystemExit) as exc:
            main(["--loop", "2"])
        assert exc.value.code == 1
