"""Tagged result type returned by every public toolkit operation.

A :class:`Result` holds either a value or a :class:`GraphError`. Callers
branch on ``result.ok`` (or ``result.error.kind``) instead of catching a
family of exception subclasses. Code that prefers exceptions can call
:meth:`Result.unwrap`, which raises the single :class:`GraphkitError` type.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, Optional, TypeVar

from graphkit.types.base import ErrorKind

T = TypeVar("T")


@dataclass(frozen=True)
class GraphError:
    """Description of a failed operation.

    Attributes:
        kind: Failure category.
        message: Human-readable description.
        cause: Original exception for ``INTERNAL`` failures, if any.
        context: Extra details such as the operation name or offending index.
    """

    kind: ErrorKind
    message: str
    cause: Optional[BaseException] = field(default=None, compare=False)
    context: Dict[str, Any] = field(default_factory=dict, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable representation."""
        data: Dict[str, Any] = {"kind": self.kind.name, "message": self.message}
        if self.context:
            data["context"] = dict(self.context)
        if self.cause is not None:
            data["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return data


class GraphkitError(Exception):
    """Exception carrying a :class:`GraphError`.

    Raised by lower-level functions that operate on an already built graph,
    and by :meth:`Result.unwrap`. It is the only exception type the toolkit
    raises on purpose; the failure category lives in ``error.kind``.
    """

    def __init__(self, error: GraphError) -> None:
        super().__init__(error.message)
        self.error = error

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind


def fail(kind: ErrorKind, message: str, **context: Any) -> GraphkitError:
    """Build a GraphkitError for ``raise fail(...)`` call sites."""
    return GraphkitError(GraphError(kind=kind, message=message, context=context))


@dataclass(frozen=True)
class Result(Generic[T]):
    """Success value or error, never both."""

    value: Optional[T] = None
    error: Optional[GraphError] = None

    def __post_init__(self) -> None:
        if self.error is not None and self.value is not None:
            raise ValueError("Result cannot hold both a value and an error")

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(
        cls,
        kind: ErrorKind,
        message: str,
        cause: Optional[BaseException] = None,
        **context: Any,
    ) -> "Result[T]":
        return cls(
            error=GraphError(kind=kind, message=message, cause=cause, context=context)
        )

    def unwrap(self) -> T:
        """Return the value, or raise GraphkitError for a failed result.

        Raises:
            GraphkitError: If the result holds an error. The original cause,
                when present, is chained as ``__cause__``.
        """
        if self.error is not None:
            raise GraphkitError(self.error) from self.error.cause
        return self.value  # type: ignore[return-value]


def returns_result(
    operation: str, default_logger: Optional[logging.Logger] = None
) -> Callable[[Callable[..., T]], Callable[..., Result[T]]]:
    """Decorate a raising function so that it returns a :class:`Result`.

    ``GraphkitError`` becomes a failed result with its own error. Any other
    exception is wrapped as ``ErrorKind.INTERNAL`` with the operation name as
    context and the exception kept as the cause. Failures are reported at
    ERROR level on the ``logger`` keyword argument when the caller passes
    one, otherwise on ``default_logger``.

    Args:
        operation: Name used in log lines and error context.
        default_logger: Logger used when the call supplies none.
    """

    def decorator(func: Callable[..., T]) -> Callable[..., Result[T]]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Result[T]:
            logger = kwargs.get("logger") or default_logger
            try:
                return Result.success(func(*args, **kwargs))
            except GraphkitError as exc:
                error = exc.error
                if "operation" not in error.context:
                    error = GraphError(
                        kind=error.kind,
                        message=error.message,
                        cause=error.cause,
                        context={"operation": operation, **error.context},
                    )
            except Exception as exc:
                error = GraphError(
                    kind=ErrorKind.INTERNAL,
                    message=f"{operation} failed: {type(exc).__name__}: {exc}",
                    cause=exc,
                    context={"operation": operation},
                )
            if logger is not None:
                logger.error(f"{operation}: {error.kind.name}: {error.message}")
            return Result(error=error)

        return wrapper

    return decorator
