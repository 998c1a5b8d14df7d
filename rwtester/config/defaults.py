"""Reference configuration used by the CLI when only flags are given."""

from rwtester.config.experiment import ExperimentConfig, GraphSourceConfig

# Ten coverage runs of a classic walk over K10, starting at "0".
DEFAULT_CONFIG = ExperimentConfig(graph=GraphSourceConfig(generate="K10"))
