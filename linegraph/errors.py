from __future__ import annotations


class ChartError(Exception):
    """Base class for line graph contract errors."""


class OutOfRange(ChartError, ValueError):
    """An axis bound would break the strict `min < max` ordering."""

    def __init__(self, bound: str, value: float, limit: float) -> None:
        self.bound = bound
        self.value = value
        self.limit = limit
        if bound.endswith("min"):
            detail = f"must be < max ({limit})"
        else:
            detail = f"must be > min ({limit})"
        super().__init__(f"{bound} {detail}; got {value}")


class InvalidArgument(ChartError, ValueError):
    pass


class NotFound(ChartError, LookupError):
    pass
