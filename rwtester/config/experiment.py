"""Experiment configuration dataclasses, all frozen and slotted."""

from dataclasses import dataclass, field

from rwtester.walk.types import WalkMode

TASKS = ("analyze", "cover", "path")
WALK_MODES = tuple(m.value for m in WalkMode)
CONVERT_FORMATS = ("gml", "npz", "text")


@dataclass(frozen=True, slots=True)
class GraphSourceConfig:
    """Where the graph comes from: a text file or a generator spec.

    generate takes the forms K<n>, T<arity>-<depth>, R<vertices>-<edges>
    and SF<connect>-<vertices>.
    """

    input_path: str | None = None
    generate: str | None = None
    generator_seed: int | None = None  # for R and SF specs


@dataclass(frozen=True, slots=True)
class WalkConfig:
    """What to run on the graph."""

    task: str = "cover"  # analyze, cover or path
    mode: str = "classic"  # see WalkMode
    discover: bool = False
    runs: int = 10
    start_vertex: str = "0"
    target_vertex: str = "0"  # path task only
    coverage: int = 100  # cover task only, percent
    seed: int | None = None  # master seed; None draws from OS entropy
    verbose_interval: int = 1_000_000
    max_steps: int = 50_000_000


@dataclass(frozen=True, slots=True)
class OutputConfig:
    """Where and what to write."""

    template: str = ""  # file name prefix; derived from the graph source if empty
    results_dir: str = "results"
    gml: bool = False  # average graph as shaded GML
    convert: str | None = None  # write the graph in this format and stop
    plots: bool = False
    summary: bool = True  # JSON run summary
    full_length_range: bool = False  # distance tables as 0..max rows, gaps as 0


@dataclass(frozen=True, slots=True)
class ExperimentConfig:
    """Top-level configuration composing all sub-configs.

    Cross-field validation runs in __post_init__ so an invalid combination
    is rejected before any graph is loaded.
    """

    graph: GraphSourceConfig = field(default_factory=GraphSourceConfig)
    walk: WalkConfig = field(default_factory=WalkConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    description: str = ""
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        has_input = bool(self.graph.input_path)
        has_generate = bool(self.graph.generate)
        if has_input == has_generate:
            raise ValueError("Exactly one of graph.input_path and graph.generate must be set")
        if self.walk.task not in TASKS:
            raise ValueError(f"walk.task must be one of {TASKS}, got {self.walk.task!r}")
        if self.walk.mode not in WALK_MODES:
            raise ValueError(f"walk.mode must be one of {WALK_MODES}, got {self.walk.mode!r}")
        if self.walk.runs < 1:
            raise ValueError(f"walk.runs must be >= 1, got {self.walk.runs}")
        if not 0 <= self.walk.coverage <= 100:
            raise ValueError(f"walk.coverage must be in 0..100, got {self.walk.coverage}")
        if self.walk.verbose_interval < 1:
            raise ValueError(
                f"walk.verbose_interval must be >= 1, got {self.walk.verbose_interval}"
            )
        if self.walk.max_steps < 1:
            raise ValueError(f"walk.max_steps must be >= 1, got {self.walk.max_steps}")
        if self.output.convert is not None and self.output.convert not in CONVERT_FORMATS:
            raise ValueError(
                f"output.convert must be one of {CONVERT_FORMATS}, got {self.output.convert!r}"
            )
