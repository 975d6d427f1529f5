"""
Schemas
File: errors.py

Purpose: Error taxonomy for the hash tree library.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Not-found and stale-tree conditions are NOT errors: they are reported
through sentinel return values (None / EMPTY_ROOT). The exceptions below
cover programmer mistakes only (bad configuration, malformed digest text,
unsupported leaf value types).
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the library."""

    # Policy & Configuration Errors
    POLICY_CONFIGURATION_ERROR = "POLICY_CONFIGURATION_ERROR"

    # Encoding Errors
    DIGEST_ENCODING_ERROR = "DIGEST_ENCODING_ERROR"

    # Leaf Errors
    INVALID_LEAF_VALUE = "INVALID_LEAF_VALUE"

    # Merkle & Proof Errors
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"
    ROOT_MISMATCH = "ROOT_MISMATCH"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class HashTreeError(BaseModel):
    """
    Base error model for structured error communication.

    Lets callers pass errors around (or serialize them) without
    raising, and convert back into an exception when needed.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.POLICY_CONFIGURATION_ERROR],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )

    def to_exception(self) -> "HashTreeException":
        """Convert this error model to a raised exception."""
        return HashTreeException(
            code=self.code,
            message=self.message,
            details=self.details,
        )


class ProofError(HashTreeError):
    """Error model for a proof that failed to reproduce the expected root."""

    code: str = Field(default=ErrorCodes.MERKLE_PROOF_INVALID)
    leaf: str | None = Field(
        default=None,
        description="Text-encoded leaf digest the proof was checked for",
    )
    expected_root: str | None = Field(default=None)
    computed_root: str | None = Field(default=None)


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class HashTreeException(Exception):
    """
    Base exception for all hash tree errors.

    Carries structured error information and can be converted
    to a HashTreeError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "HASHTREE_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> HashTreeError:
        """Convert this exception to a HashTreeError model."""
        return HashTreeError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class PolicyConfigurationException(HashTreeException):
    """Raised when a configured hash algorithm or comparator is unknown."""

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if setting:
            full_details["setting"] = setting
        super().__init__(
            message=message,
            code=ErrorCodes.POLICY_CONFIGURATION_ERROR,
            details=full_details,
        )


class DigestEncodingException(HashTreeException):
    """Raised when a text-encoded digest cannot be decoded."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.DIGEST_ENCODING_ERROR,
            details=details,
        )


class InvalidValueException(HashTreeException):
    """Raised when a leaf value cannot be converted to bytes."""

    def __init__(
        self,
        message: str,
        value_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if value_type:
            full_details["value_type"] = value_type
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_LEAF_VALUE,
            details=full_details,
        )
