"""Exception hierarchy for cluster-count selection."""


class KSelectError(Exception):
    """Base class for all kselect errors."""


class InvalidInputError(KSelectError, ValueError):
    """Dataset or parameters are structurally unusable."""


class DegenerateTrialError(KSelectError):
    """A single partitioning run could not produce k non-empty clusters."""

    def __init__(self, k: int, n_empty: int, message: str = None):
        self.k = k
        self.n_empty = n_empty
        if message is None:
            message = f"k-means run with k={k} left {n_empty} empty cluster(s)"
        super().__init__(message)


class AllTrialsFailedError(KSelectError):
    """Every restart for a given k was degenerate."""

    def __init__(self, k: int, n_trials: int):
        self.k = k
        self.n_trials = n_trials
        super().__init__(
            f"All {n_trials} k-means runs failed for k={k}; "
            f"the data may have fewer than {k} distinct points"
        )
