"""Pipeline error types shared across stages."""


class SolverError(RuntimeError):
    """An external solver (embedding trainer or k-means) failed.

    Carries the stage name and input size so the run can be retried with
    adjusted configuration (smaller K, lower min_count, more data).
    """

    def __init__(self, stage: str, input_size: int, message: str):
        self.stage = stage
        self.input_size = input_size
        super().__init__(f"{stage} failed on {input_size} inputs: {message}")


class PipelineCancelled(RuntimeError):
    """Cancellation was requested before a solver stage started."""

    def __init__(self, stage: str):
        self.stage = stage
        super().__init__(f"Pipeline cancelled before {stage}")
