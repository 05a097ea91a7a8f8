"""Custom exception hierarchy for reformql.

All recoverable errors inherit from :class:`ReformError` so callers can catch
the base class for any reformql-specific failure, or branch on
:attr:`ReformError.kind`.

:class:`InvariantViolationError` deliberately sits outside that hierarchy:
it signals descriptor or schema corruption and must not be handled together
with ordinary outcomes such as :class:`NoRowsError`.
"""
from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Machine-readable error kinds, compared by value rather than identity."""

    NO_ROWS = "NO_ROWS"
    NO_PK = "NO_PK"
    UNEXPECTED_COLUMNS = "UNEXPECTED_COLUMNS"
    NOTHING_TO_UPDATE = "NOTHING_TO_UPDATE"
    MIXED_BATCH = "MIXED_BATCH"
    DIALECT_CONFIG = "DIALECT_CONFIG"
    DESCRIPTOR = "DESCRIPTOR"
    DRIVER = "DRIVER"
    TRANSACTION_CLOSED = "TRANSACTION_CLOSED"
    INVARIANT = "INVARIANT"


class ReformError(Exception):
    """Base exception for all recoverable reformql errors."""

    kind: ErrorKind


class NoRowsError(ReformError):
    """Raised when a primary-key scoped statement matched no rows."""

    kind = ErrorKind.NO_ROWS

    def __init__(self, message: str = "reform: no rows in result set") -> None:
        super().__init__(message)


class NoPKError(ReformError):
    """Raised when an operation needs a primary key the record does not have."""

    kind = ErrorKind.NO_PK

    def __init__(self, message: str = "reform: no primary key") -> None:
        super().__init__(message)


class UnexpectedColumnsError(ReformError):
    """Raised by ``update_columns`` for names absent from the descriptor.

    Args:
        columns: The offending column names, sorted.
    """

    kind = ErrorKind.UNEXPECTED_COLUMNS

    def __init__(self, columns: list[str]) -> None:
        super().__init__(f"reform: unexpected columns: {columns}")
        self.columns = columns


class NothingToUpdateError(ReformError):
    """Raised by ``update_columns`` when no updatable column was selected."""

    kind = ErrorKind.NOTHING_TO_UPDATE

    def __init__(self) -> None:
        super().__init__("reform: nothing to update")


class MixedBatchError(ReformError):
    """Raised by ``insert_multi`` when the structs cannot share one statement.

    Args:
        message: Human-readable description.
    """

    kind = ErrorKind.MIXED_BATCH


class DialectConfigError(ReformError):
    """Raised at setup time for an unknown dialect or driver name.

    Args:
        name: The name that could not be resolved.
        registered: Names that are known.
    """

    kind = ErrorKind.DIALECT_CONFIG

    def __init__(self, name: str, registered: list[str] | None = None) -> None:
        self.name = name
        self.registered = registered or []
        super().__init__(
            f"reform: unsupported dialect or driver '{name}'. "
            f"Registered: {self.registered}."
        )


class DescriptorError(ReformError):
    """Raised when a table or view descriptor cannot be generated.

    Args:
        message: Human-readable description.
        type_name: Name of the mapped type being described, if any.
    """

    kind = ErrorKind.DESCRIPTOR

    def __init__(self, message: str, type_name: str | None = None) -> None:
        super().__init__(message)
        self.type_name = type_name


class DriverError(ReformError):
    """Raised when the execution capability cannot report a required value.

    Errors raised by the driver itself are never wrapped; this covers the
    case where a statement succeeded but, for example, no generated id or
    row count is available.
    """

    kind = ErrorKind.DRIVER


class TransactionClosedError(ReformError):
    """Raised when a committed or rolled back transaction is used again."""

    kind = ErrorKind.TRANSACTION_CLOSED

    def __init__(self, state: str) -> None:
        super().__init__(f"reform: transaction has already been {state}")
        self.state = state


class InvariantViolationError(RuntimeError):
    """Raised when an engine invariant does not hold.

    Examples are an UPDATE or DELETE by primary key affecting more than one
    row, or misaligned column and value sequences.  This indicates
    descriptor or schema corruption rather than a runtime fault.
    """

    kind = ErrorKind.INVARIANT
