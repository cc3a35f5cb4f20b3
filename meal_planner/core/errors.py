"""Errors raised by the planner core."""


class ValidationError(ValueError):
    """User input rejected; the operation was aborted with state unchanged."""


class MalformedStoreData(ValueError):
    """A persisted record could not be decoded.

    Always recovered by the state loaders (empty state is substituted);
    never reaches callers of the planner.
    """

    def __init__(self, key: str, reason: str):
        super().__init__(f"{key}: {reason}")
        self.key = key
        self.reason = reason
