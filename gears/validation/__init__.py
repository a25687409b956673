"""
Validation package: constraint violations and the error carrying them.
"""

from .violations import (
    ConstraintViolation,
    ConstraintViolationList,
    ValidationFailedError,
    convert_domain_violation_to_form_violation,
    render_message,
)

__all__ = [
    'ConstraintViolation',
    'ConstraintViolationList',
    'ValidationFailedError',
    'convert_domain_violation_to_form_violation',
    'render_message',
]
