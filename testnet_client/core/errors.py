# testnet_client/core/errors.py

from typing import Optional


# -----------------------------
# Base Errors
# -----------------------------

class TestnetClientError(Exception):
    """Base class for all testnet client errors."""
    pass


# -----------------------------
# Encoding Errors
# -----------------------------

class SerializationError(TestnetClientError):
    """A domain value could not be encoded for the wire."""
    pass


# -----------------------------
# Validation Errors
# -----------------------------

class ValidationError(TestnetClientError):
    """User-actionable rejection. Blocks the call that triggered it."""
    pass


class LoadTestValidationError(ValidationError):
    """Load test spec rejected before save or submission."""
    pass


class WeightSumError(LoadTestValidationError):

    def __init__(self, total: float):
        self.total = total
        super().__init__(
            f"Total message weight must be exactly 1.0. Current: {total:.2f}"
        )


class DuplicateMessageTypeError(LoadTestValidationError):

    def __init__(self, msg_type: str, contained_type: str = ""):
        self.msg_type = msg_type
        self.contained_type = contained_type
        if contained_type:
            message = f"Duplicate message type: {msg_type} with contained type {contained_type}"
        else:
            message = f"Duplicate message type: {msg_type}"
        super().__init__(message)


class InvalidWeightError(LoadTestValidationError):

    def __init__(self, weight: float):
        self.weight = weight
        super().__init__(f"Weight must be between 0 and 1, got {weight}")


class MissingFieldError(LoadTestValidationError):
    """Required field absent or non-positive."""

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"{field} is required")


class WorkflowRequestValidationError(ValidationError):
    """Workflow request violates a submission invariant."""
    pass


class InvalidChainConfigError(WorkflowRequestValidationError):
    pass


class InvalidDurationError(WorkflowRequestValidationError):

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"{field} is not a valid duration: {value!r}")


# -----------------------------
# Transport Errors
# -----------------------------

class TransportError(TestnetClientError):
    """RPC call failed. The message is the endpoint's, unmodified."""

    def __init__(self, message: str, code: Optional[str] = None, method: Optional[str] = None):
        self.code = code
        self.method = method
        super().__init__(message)
