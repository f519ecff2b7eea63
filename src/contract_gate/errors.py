"""Violation taxonomy shared by every contract check.

Every failure is fatal: the first violation found stops the pass and is
reported as a single ``[CODE] message`` line.
"""

from enum import Enum


class ViolationCode(str, Enum):
    OPENAPI_INVALID = "OPENAPI_INVALID"
    FE_SCHEMA_INVALID = "FE_SCHEMA_INVALID"
    DB_TRACEABILITY_FAIL = "DB_TRACEABILITY_FAIL"
    ENDPOINT_PARITY_FAIL = "ENDPOINT_PARITY_FAIL"
    SCHEMA_REF_PARITY_FAIL = "SCHEMA_REF_PARITY_FAIL"
    BREAKING_CHANGE_UNAPPROVED = "BREAKING_CHANGE_UNAPPROVED"
    DOCUMENT_PARSE_ERROR = "DOCUMENT_PARSE_ERROR"


class ContractViolation(Exception):
    """A coded, fatal contract failure."""

    def __init__(self, code: ViolationCode, message: str):
        super().__init__(message)
        self.code = ViolationCode(code)
        self.message = message

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"


class MissingDocument(ContractViolation):
    """A required contract document is absent from a module."""


class MalformedDocument(ContractViolation):
    """A contract document could not be parsed as a JSON object."""

    def __init__(self, message: str):
        super().__init__(ViolationCode.DOCUMENT_PARSE_ERROR, message)
