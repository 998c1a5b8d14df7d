#!/usr/bin/env python3
"""Entry point for random-walk experiments.

Loads or generates a graph, then either analyzes its degree structure,
converts it to another format, or runs repeated coverage / path walks and
writes the averaged tables, summary and figures.

Usage:
    python run_walks.py --generate K10 --mode cover --loop 20
    python run_walks.py --input web.graph --mode path --start a --target z
    python run_walks.py --input web.graph --convert gml
    python run_walks.py --config config.json --dry-run
"""

import argparse
import logging
import sys
import time
from contextlib import contextmanager
from dataclasses import replace
from pathlib import Path
from typing import Generator

from dacite import DaciteError

from rwtester.config import (
    CONVERT_FORMATS,
    TASKS,
    WALK_MODES,
    ExperimentConfig,
    GraphSourceConfig,
    OutputConfig,
    WalkConfig,
    config_hash,
    config_to_json,
    load_config,
)
from rwtester.errors import RWTesterError
from rwtester.results import generate_experiment_id, graph_label

log = logging.getLogger(__name__)


@contextmanager
def stage_timer(name: str) -> Generator[None, None, None]:
    """Context manager that prints stage banners with elapsed time."""
    print(f"\n=== {name} ===")
    log.info("Starting: %s", name)
    t0 = time.monotonic()
    yield
    elapsed = time.monotonic() - t0
    print(f"... done in {elapsed:.1f}s")
    log.info("Completed: %s in %.1fs", name, elapsed)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run random-walk coverage and path experiments on a graph"
    )
    parser.add_argument("--config", type=str, help="Path to experiment config JSON file")

    source = parser.add_argument_group("graph source")
    source.add_argument("--input", type=str, help="Graph file (text format or .npz)")
    source.add_argument(
        "--generate", type=str,
        help="Generator spec: K<n>, T<arity>-<depth>, R<vertices>-<edges>, SF<connect>-<vertices>",
    )
    source.add_argument("--generator-seed", type=int, help="Seed for R and SF generators")
    source.add_argument(
        "--convert", choices=CONVERT_FORMATS,
        help="Write the graph in this format and exit",
    )

    walk = parser.add_argument_group("walk")
    walk.add_argument("--mode", choices=TASKS, help="Task to run")
    walk.add_argument("--rwmode", choices=WALK_MODES, help="Neighbour-selection strategy")
    walk.add_argument("--discover", action="store_true", default=None,
                      help="Mark neighbours of each visited vertex as discovered")
    walk.add_argument("--loop", type=int, help="Number of runs to average")
    walk.add_argument("--coverage", type=int, help="Target coverage percent (cover task)")
    walk.add_argument("--start", type=str, help="Start vertex name")
    walk.add_argument("--target", type=str, help="Target vertex name (path task)")
    walk.add_argument("--seed", type=int, help="Master seed for per-run seeds")

    output = parser.add_argument_group("output")
    output.add_argument("--template", type=str, help="Output file name prefix")
    output.add_argument("--results-dir", type=str, help="Base directory for results")
    output.add_argument("--gml", action="store_true", default=None,
                        help="Write the average graph as shaded GML")
    output.add_argument("--plots", action="store_true", default=None,
                        help="Render figures (PNG + SVG)")
    output.add_argument("--no-summary", action="store_true",
                        help="Skip the JSON run summary")
    output.add_argument("--full-length-range", action="store_true", default=None,
                        help="Write distance tables as 0..max rows, missing distances as 0")

    parser.add_argument("--dry-run", action="store_true",
                        help="Show the plan without running anything")
    parser.add_argument("--verbose", action="store_true",
                        help="Enable DEBUG-level logging and walk progress")
    return parser


def _overlay(obj, **changes):
    """dataclasses.replace, ignoring changes left unset on the command line."""
    changes = {k: v for k, v in changes.items() if v is not None}
    return replace(obj, **changes) if changes else obj


def config_from_args(args: argparse.Namespace) -> ExperimentConfig:
    """Build the experiment config: JSON file first, then command-line flags.

    A source given on the command line replaces the file's source entirely.
    """
    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            raise FileNotFoundError(f"config file not found: {config_path}")
        base = load_config(config_path)
        graph, walk, output = base.graph, base.walk, base.output
        description, tags = base.description, base.tags
    else:
        graph, walk, output = GraphSourceConfig(), WalkConfig(), OutputConfig()
        description, tags = "", ()

    if args.input or args.generate:
        graph = GraphSourceConfig(
            input_path=args.input,
            generate=args.generate,
            generator_seed=args.generator_seed if args.generator_seed is not None
            else graph.generator_seed,
        )
    else:
        graph = _overlay(graph, generator_seed=args.generator_seed)

    walk = _overlay(
        walk,
        task=args.mode,
        mode=args.rwmode,
        discover=args.discover,
        runs=args.loop,
        coverage=args.coverage,
        start_vertex=args.start,
        target_vertex=args.target,
        seed=args.seed,
    )
    output = _overlay(
        output,
        template=args.template,
        results_dir=args.results_dir,
        gml=args.gml,
        convert=args.convert,
        plots=args.plots,
        summary=False if args.no_summary else None,
        full_length_range=args.full_length_range,
    )
    return ExperimentConfig(
        graph=graph, walk=walk, output=output, description=description, tags=tags,
    )


def output_template(config: ExperimentConfig, experiment_id: str) -> Path:
    """Path prefix for every file of this experiment."""
    if config.output.template:
        return Path(config.output.template)
    return Path(config.output.results_dir) / experiment_id / graph_label(config)


def load_or_generate_graph(config: ExperimentConfig):
    """Read graph.input_path, or run the generator named by graph.generate."""
    import numpy as np

    from rwtester.graph import generate_from_spec, load_graph, read_npz

    if config.graph.input_path:
        path = Path(config.graph.input_path)
        if path.suffix == ".npz":
            return read_npz(path)
        return load_graph(path)
    rng = np.random.default_rng(config.graph.generator_seed)
    return generate_from_spec(config.graph.generate, rng)


def run_pipeline(config: ExperimentConfig, verbose: bool = False) -> Path:
    """Execute one experiment.

    Args:
        config: Validated experiment config.
        verbose: Log walk progress every walk.verbose_interval steps.

    Returns:
        The output template path.
    """
    from rwtester.graph import save_graph_analysis, write_gml, write_npz, write_text
    from rwtester.reproducibility import get_git_hash
    from rwtester.results import (
        build_summary,
        write_report_config,
        write_result_tables,
        write_summary,
    )
    from rwtester.walk import WalkManager
    from rwtester.walk.types import WalkTask

    pipeline_start = time.monotonic()
    experiment_id = generate_experiment_id(config)
    template = output_template(config, experiment_id)
    template.parent.mkdir(parents=True, exist_ok=True)
    log.info("Output template: %s", template)
    log.info("Git hash: %s", get_git_hash())

    # ── Stage 1: Graph ─────────────────────────────────────────────
    with stage_timer("Graph"):
        graph = load_or_generate_graph(config)
        log.info("Graph: %r", graph)
        if config.graph.generate:
            write_text(graph, f"{template}.graph")

    # ── Conversion ─────────────────────────────────────────────────
    if config.output.convert:
        with stage_timer("Convert"):
            writers = {
                "gml": lambda: write_gml(graph, f"{template}.gml"),
                "npz": lambda: write_npz(graph, f"{template}.npz"),
                "text": lambda: write_text(graph, f"{template}.graph"),
            }
            path = writers[config.output.convert]()
            print(f"Converted graph written to {path}")
        return template

    # ── Analysis only ──────────────────────────────────────────────
    if config.walk.task == "analyze":
        with stage_timer("Graph Analysis"):
            written = save_graph_analysis(graph, template)
            print(f"Wrote {len(written)} analysis files")
        return template

    # ── Stage 2: Walks ─────────────────────────────────────────────
    walk_cfg = config.walk
    with stage_timer("Walks"):
        manager = WalkManager(
            graph,
            walk_cfg.mode,
            discover=walk_cfg.discover,
            seed=walk_cfg.seed,
            verbose=verbose,
            verbose_interval=walk_cfg.verbose_interval,
            max_steps=walk_cfg.max_steps,
        )
        if walk_cfg.task == WalkTask.COVER.value:
            session = manager.run_cover(walk_cfg.runs, walk_cfg.start_vertex, walk_cfg.coverage)
        else:
            session = manager.run_find_path(
                walk_cfg.runs, walk_cfg.start_vertex, walk_cfg.target_vertex,
            )

    # ── Stage 3: Result tables ─────────────────────────────────────
    with stage_timer("Result Tables"):
        tables = write_result_tables(
            session.result, template, full_length_range=config.output.full_length_range,
        )
        write_report_config(
            template,
            walk_cfg.task,
            walk_cfg.mode,
            walk_cfg.runs,
            graph.is_directed(),
            coverage=walk_cfg.coverage if session.task is WalkTask.COVER else None,
        )
        if config.output.gml:
            write_gml(session.average_graph, f"{template}_coverage.gml", shade="visits")
            write_gml(session.average_graph, f"{template}_time.gml", shade="time")

    # ── Stage 4: Summary ───────────────────────────────────────────
    summary_path = None
    if config.output.summary:
        with stage_timer("Summary"):
            summary_path = write_summary(
                build_summary(session, config), f"{template}_summary.json",
            )
            Path(f"{template}_config.json").write_text(config_to_json(config))

    # ── Stage 5: Visualization ─────────────────────────────────────
    figures: list[Path] = []
    if config.output.plots:
        with stage_timer("Visualization"):
            from rwtester.visualization import render_session

            figures = render_session(
                session, template.parent / "figures", prefix=f"{template.name}_",
            )
            log.info("Generated %d figure files", len(figures))

    # ── Final Summary ──────────────────────────────────────────────
    total_elapsed = time.monotonic() - pipeline_start
    print(f"\n{'=' * 60}")
    print(f"Experiment complete in {total_elapsed:.1f}s")
    print(f"  Experiment: {experiment_id}")
    print(f"  Reachable:  {session.reachability.reached}/{session.reachability.total} "
          f"({session.reachability.coverage}%)")
    print(f"  Runs:       {len(session.runs)}, master seed {session.master_seed}")
    print(f"  Tables:     {len(tables)} files under {template}_*")
    if summary_path is not None:
        print(f"  Summary:    {summary_path}")
    print(f"  Figures:    {len(figures)} files")
    print(f"{'=' * 60}")

    return template


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = config_from_args(args)
    except (FileNotFoundError, ValueError, DaciteError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    experiment_id = generate_experiment_id(config)
    print(f"Experiment ID: {experiment_id}")
    print(f"Config hash:   {config_hash(config)}")
    print()
    source = config.graph.input_path or f"generate {config.graph.generate}"
    print(f"Graph:    {source}")
    print(f"Walk:     task={config.walk.task}, mode={config.walk.mode}, "
          f"discover={config.walk.discover}, runs={config.walk.runs}")
    print(f"Vertices: start={config.walk.start_vertex}, target={config.walk.target_vertex}, "
          f"coverage={config.walk.coverage}%")
    print(f"Seed:     {config.walk.seed}")

    if args.dry_run:
        template = output_template(config, experiment_id)
        print(f"\nPlan for experiment {experiment_id}:")
        print(f"  1. Graph: {source}")
        if config.output.convert:
            print(f"  2. Convert to {config.output.convert} and exit")
        elif config.walk.task == "analyze":
            print("  2. Degree distributions and graph info")
        else:
            print(f"  2. BFS reachability from {config.walk.start_vertex}")
            print(f"  3. {config.walk.runs} x {config.walk.task} walks ({config.walk.mode})")
            print("  4. Averaged result tables")
        print(f"\nOutput: {template}_*")
        print("\n[dry-run] Config loaded successfully. Exiting.")
        return

    try:
        run_pipeline(config, verbose=args.verbose)
    except (RWTesterError, ValueError, OSError) as e:
        log.error("Experiment failed: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
