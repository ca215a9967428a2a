"""Domain primitives shared by the resolver and the trigger layer."""

from .result import Result, Success, Failure

__all__ = [
    "Result",
    "Success",
    "Failure",
]
