"""
modules/validation package: input guards before planning or storage writes.
"""
from modules.validation.request_validator import (
    ValidationResult,
    validate_booking,
    validate_plan_request,
)

__all__ = [
    "ValidationResult",
    "validate_booking",
    "validate_plan_request",
]
