"""
Pydantic models for validating the structure of responses from the Sweagle API.

Only the validation report is parsed; every other endpoint's body is opaque to
the build step and handed back verbatim.
"""

from pydantic import BaseModel, Field


class ValidationSummary(BaseModel):
    """
    The 'summary' object of a validation report.

    Counts are strict: a string, float or negative value is a malformed
    report rather than something to coerce.
    """

    errors: int = Field(ge=0, strict=True)
    warnings: int = Field(ge=0, strict=True)


class ValidationReport(BaseModel):
    """Represents the top-level structure of a validation report."""

    summary: ValidationSummary
