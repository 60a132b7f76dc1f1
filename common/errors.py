"""Exception hierarchy for the benchmark harness."""


class BenchError(Exception):
    """Base class for all harness errors."""


class ConfigurationError(BenchError):
    """Invalid or unsupported benchmark configuration."""


class AdapterError(BenchError):
    """A storage adapter reported a failure."""


class AdapterNotFoundError(AdapterError):
    """No adapter is registered under the requested name."""

    def __init__(self, name: str):
        super().__init__(f"Adapter not found: {name}")
        self.name = name
