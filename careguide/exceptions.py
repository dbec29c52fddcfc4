"""Central application exception hierarchy.

This module defines the base application exception ``AppError`` and the
specialized subclasses raised by the guide generator and its runner:
invalid record data, a missing required input for the selected guide type,
and an unknown guide type. Using a centralized hierarchy makes error
handling and testing consistent.
"""

from __future__ import annotations

from typing import Any, Mapping


class AppError(Exception):
    """Base exception for all application-level errors.

    Parameters
    ----------
    code : str
        Machine-readable error code (e.g., ``'DATA_VALIDATION_ERROR'``).
    message : str
        Human-readable message describing the error.
    context : Mapping[str, Any] | None, optional
        Optional structured context for logging.
    transient : bool, optional
        Whether the error is temporary and may be retried.

    Attributes
    ----------
    code : str
        Stable machine-readable error code.
    message : str
        Human-readable message.
    context : dict
        Structured, non-sensitive context for logging.
    transient : bool
        True if the error is transient.

    Examples
    --------
    >>> e = AppError('CODE', 'message', context={'k': 'v'})
    >>> e.code
    'CODE'
    """

    __slots__ = ("code", "message", "context", "transient")

    def __init__(
        self,
        code: str,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.context = dict(context or {})
        self.transient = bool(transient)

    def __str__(self) -> str:
        """Return a compact string representation of the error."""
        return f"{self.code}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Return a log-safe dictionary representation of the error."""
        return {
            "error_code": self.code,
            "message": self.message,
            "context": self.context,
            "is_transient": self.transient,
        }


class ConfigurationError(AppError):
    """Raised for invalid or missing configuration."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            "CONFIGURATION_ERROR", message, context=context, transient=False
        )


class DataValidationError(AppError):
    """Raised for record data that fails schema or content validation."""

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        super().__init__(
            "DATA_VALIDATION_ERROR", message, context=context, transient=False
        )


class MissingInputError(AppError):
    """Raised when a guide is requested without one of its required inputs.

    Returning an empty or partial guide in this situation would look the
    same as "nothing to share", so the dispatcher fails instead.

    Parameters
    ----------
    argument : str
        Name of the missing input (e.g. ``"child_record"``).
    guide_type : str | None, optional
        The guide type that required it.
    """

    __slots__ = ("argument",)

    def __init__(self, argument: str, *, guide_type: str | None = None) -> None:
        if guide_type:
            message = f"'{argument}' is required for a '{guide_type}' guide"
        else:
            message = f"'{argument}' is required"
        super().__init__(
            "MISSING_INPUT_ERROR",
            message,
            context={"argument": argument, "guide_type": guide_type},
            transient=False,
        )
        self.argument = argument


class UnknownGuideTypeError(AppError):
    """Raised when the dispatcher has no route for the requested guide type."""

    def __init__(self, guide_type: str) -> None:
        super().__init__(
            "UNKNOWN_GUIDE_TYPE_ERROR",
            f"Unknown guide type: {guide_type!r}",
            context={"guide_type": guide_type},
            transient=False,
        )
