"""Plain-text export of walk result tables.

Every table becomes one two-column file of "key    value" rows next to a
common path template, e.g. results/k10_degree_visited.txt. Directed
results add _in_ and _out_ variants of the degree tables.
"""

import logging
from pathlib import Path

from rwtester.analysis.aggregation import METRICS, RandomWalkResult, Table, full_range
from rwtester.graph.degrees import DegreeKind, degree_kinds

log = logging.getLogger(__name__)

COLUMN_SEPARATOR = "    "


def format_rows(rows: list[tuple[int, int]] | Table) -> str:
    items = rows.items() if isinstance(rows, dict) else rows
    return "".join(f"{k}{COLUMN_SEPARATOR}{v}\n" for k, v in items)


def result_file_names(directed: bool) -> list[str]:
    """Suffixes of every table file written for a result."""
    names = [f"_degree_{m}.txt" for m in METRICS]
    names += ["_length_visited.txt", "_length_time.txt", "_coverage.txt"]
    if directed:
        for kind in (DegreeKind.IN, DegreeKind.OUT):
            names += [f"_{kind.value}_{m}.txt" for m in METRICS]
    return names


def write_result_tables(
    result: RandomWalkResult,
    template: str | Path,
    full_length_range: bool = False,
) -> list[Path]:
    """Write all tables of result under template.

    Args:
        result: Averaged session result.
        template: Path prefix; parent directories are created.
        full_length_range: Write distance tables as 0..max rows with missing
            distances as 0 instead of only the observed distances.

    Returns:
        Paths of the files written.
    """
    template = str(template)
    Path(template).parent.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []

    def emit(suffix: str, rows: list[tuple[int, int]] | Table) -> None:
        path = Path(template + suffix)
        path.write_text(format_rows(rows))
        written.append(path)

    for kind in degree_kinds(result.directed):
        for metric in METRICS:
            emit(f"_{kind.value}_{metric}.txt", result.table(metric, kind) or {})

    for name in ("length_visited", "length_time"):
        table = getattr(result, name)
        emit(f"_{name}.txt", full_range(table) if full_length_range else table)

    emit("_coverage.txt", list(enumerate(int(t) for t in result.percentage_cover)))
    log.info("Wrote %d result tables to %s_*.txt", len(written), template)
    return written


def read_table(path: str | Path) -> Table:
    """Parse a file written by write_result_tables back into a table."""
    table: Table = {}
    for line in Path(path).read_text().splitlines():
        if not line.strip():
            continue
        key, value = line.split()
        table[int(key)] = int(value)
    return table


def write_report_config(
    template: str | Path,
    task: str,
    mode: str,
    runs: int,
    directed: bool,
    coverage: int | None = None,
) -> Path:
    """Write <template>_config.txt describing how the tables were produced.

    coverage is only written for cover sessions.
    """
    lines = [
        f"template={template}",
        f"mode={task}",
        f"rwmode={mode}",
        f"loop={runs}",
        f"directed={'true' if directed else 'false'}",
    ]
    if coverage is not None:
        lines.append(f"coverage={coverage}")
    path = Path(f"{template}_config.txt")
    path.write_text("\n".join(lines) + "\n")
    log.info("Wrote report config %s", path)
    return path
