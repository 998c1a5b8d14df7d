"""Result export: text tables, report config, JSON run summaries."""

from rwtester.results.experiment_id import generate_experiment_id, graph_label
from rwtester.results.summary import (
    build_summary,
    load_summary,
    result_to_dict,
    validate_summary,
    write_summary,
)
from rwtester.results.tables import (
    format_rows,
    read_table,
    result_file_names,
    write_report_config,
    write_result_tables,
)

__all__ = [
    "build_summary",
    "format_rows",
    "generate_experiment_id",
    "graph_label",
    "load_summary",
    "read_table",
    "result_file_names",
    "result_to_dict",
    "validate_summary",
    "write_report_config",
    "write_result_tables",
    "write_summary",
]
