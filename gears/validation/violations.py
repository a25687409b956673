"""
Constraint violations.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from ..errors import ErrorCode, GearsError


def render_message(template: str, parameters: Optional[Mapping[str, Any]] = None) -> str:
    """
    Replace the placeholders of a message template.

        >>> render_message('Foo with invalid {{ bar }}', {'bar': 'baz'})
        'Foo with invalid baz'

    Parameter keys may be given with or without the braces.
    """
    message = template
    for key, value in (parameters or {}).items():
        placeholder = key if key.startswith('{{') else f"{{{{ {key} }}}}"
        message = message.replace(placeholder, str(value))
    return message


@dataclass(frozen=True)
class ConstraintViolation:
    """A single violated constraint."""
    message: str
    message_template: str
    parameters: Dict[str, Any] = field(default_factory=dict)
    root: Any = None
    property_path: Optional[str] = None
    invalid_value: Any = None
    plural: Optional[int] = None
    code: Optional[str] = None
    cause: Any = None

    def __str__(self) -> str:
        if self.property_path:
            return f"{self.property_path}: {self.message}"
        return self.message


class ConstraintViolationList:
    """An ordered list of violations."""

    def __init__(self, violations: Iterable[ConstraintViolation] = ()):
        self._violations: List[ConstraintViolation] = list(violations)

    def add(self, violation: ConstraintViolation) -> None:
        self._violations.append(violation)

    def add_all(self, violations: "ConstraintViolationList") -> None:
        self._violations.extend(violations)

    def find_by_path(self, property_path: str) -> List[ConstraintViolation]:
        return [violation for violation in self._violations if violation.property_path == property_path]

    def __iter__(self) -> Iterator[ConstraintViolation]:
        return iter(self._violations)

    def __len__(self) -> int:
        return len(self._violations)

    def __getitem__(self, index: int) -> ConstraintViolation:
        return self._violations[index]

    def __str__(self) -> str:
        return "\n".join(str(violation) for violation in self._violations)


class ValidationFailedError(GearsError, ValueError):
    """
    A value failed validation.

        raise ValidationFailedError.violate(order, 'Order with invalid {{ status }}', {'status': status})
        raise ValidationFailedError.violate(order, 'Order without lines', property_path='lines')
    """

    code = ErrorCode.VALIDATION_FAILED

    def __init__(self, value: Any, violations: ConstraintViolationList):
        super().__init__(
            str(violations) or "Validation failed",
            metadata={"violations": [str(violation) for violation in violations]},
        )
        self.value = value
        self.violations = violations

    def get_value(self) -> Any:
        return self.value

    def get_violations(self) -> ConstraintViolationList:
        return self.violations

    @classmethod
    def violate(
        cls,
        value: Any,
        message: str,
        parameters: Optional[Mapping[str, Any]] = None,
        property_path: Optional[str] = None,
    ) -> "ValidationFailedError":
        """Create the error with a single violation."""
        violation = ConstraintViolation(
            render_message(message, parameters),
            message,
            dict(parameters or {}),
            value,
            property_path,
            value,
        )
        return cls(value, ConstraintViolationList([violation]))


def convert_domain_violation_to_form_violation(violation: ConstraintViolation) -> ConstraintViolation:
    """
    Re-target a violation of a domain object at the form holding it.

    Form fields live under "data", so the property path gets the "data."
    prefix; a violation without a path stays without one.
    """
    return replace(
        violation,
        property_path=f"data.{violation.property_path}" if violation.property_path else None,
    )
