"""
Tests for identifier value objects and validation errors.
"""

import uuid

import pytest

from gears.errors import ErrorCode, InvalidArgumentError
from gears.validation import (
    ConstraintViolation, ConstraintViolationList, ValidationFailedError,
    convert_domain_violation_to_form_violation, render_message,
)
from gears.value_object import Identifier, IdentifierUuid, IdentifierUuidHybrid

VALID_UUID = '70b3738c-dec5-40a1-a992-bdadb3e33f9d'


class ProductIdentifier(Identifier):
    pass


class CategoryIdentifier(Identifier):
    pass


class OrderIdentifier(IdentifierUuid):
    pass


class UserPhotoIdentifier(IdentifierUuidHybrid):
    @classmethod
    def suffix(cls):
        return 'aaa-bbbb-cccdddeeefff'


class BrokenSuffixIdentifier(IdentifierUuidHybrid):
    @classmethod
    def suffix(cls):
        return 'not-a-suffix'


class TestIdentifier:
    """Test the identifier value object."""

    def test_abstract_classes(self):
        for klass in (Identifier, IdentifierUuid):
            with pytest.raises(TypeError):
                klass('x')

    def test_equals(self):
        product = ProductIdentifier(123)

        assert product.get_value() == 123
        assert product.value == 123
        assert product.equals(ProductIdentifier(123))
        assert product.equals(123)
        assert not product.equals(ProductIdentifier('abc'))
        assert not product.equals(None)
        assert product.equals(CategoryIdentifier(123))

    def test_python_equality_requires_same_class(self):
        assert ProductIdentifier(1) == ProductIdentifier(1)
        assert ProductIdentifier(1) != CategoryIdentifier(1)
        assert len({ProductIdentifier(1), ProductIdentifier(1)}) == 1

    def test_hash(self):
        assert ProductIdentifier(1).hash() == ProductIdentifier(1).hash()
        assert ProductIdentifier(1).hash() != CategoryIdentifier(1).hash()
        assert len(ProductIdentifier(1).hash()) == 32

    def test_str_and_repr(self):
        assert str(ProductIdentifier(7)) == '7'
        assert repr(ProductIdentifier('a')) == "ProductIdentifier('a')"


class TestIdentifierUuid:
    """Test UUID identifiers."""

    def test_values(self):
        assert OrderIdentifier(VALID_UUID).get_value() == VALID_UUID
        assert OrderIdentifier(uuid.UUID(VALID_UUID)).get_value() == VALID_UUID
        assert uuid.UUID(OrderIdentifier().get_value()).version == 4

    def test_validation(self):
        assert OrderIdentifier('123').get_value() == '123'
        with pytest.raises(InvalidArgumentError):
            OrderIdentifier('123', validate=True)
        assert OrderIdentifier(VALID_UUID, validate=True).equals(VALID_UUID)


class TestIdentifierUuidHybrid:
    """Test hybrid identifiers."""

    def test_from_integers(self):
        photo = UserPhotoIdentifier(12345, 25)

        assert photo.get_value() == '00012345-0025-8aaa-bbbb-cccdddeeefff'
        assert photo.get_primary_value() == 12345
        assert photo.get_secondary_value() == 25
        assert UserPhotoIdentifier(1).get_secondary_value() == 0

    def test_from_string(self):
        photo = UserPhotoIdentifier('00000042-0000-8aaa-bbbb-cccdddeeefff', validate=True)
        assert photo.get_primary_value() == 42

    @pytest.mark.parametrize("value,secondary", [
        (0, 0),
        (99999999, 0),
        (1, 9999),
        (1, -1),
    ])
    def test_out_of_range(self, value, secondary):
        with pytest.raises(InvalidArgumentError):
            UserPhotoIdentifier(value, secondary)

    def test_wrong_suffix(self):
        with pytest.raises(InvalidArgumentError, match='should end with'):
            UserPhotoIdentifier(VALID_UUID)

    def test_invalid_suffix(self):
        with pytest.raises(InvalidArgumentError, match='Invalid suffix'):
            BrokenSuffixIdentifier(1)


class TestValidation:
    """Test constraint violations."""

    def test_render_message(self):
        assert render_message('Foo with invalid {{ bar }}', {'bar': 'baz'}) == 'Foo with invalid baz'
        assert render_message('Foo with invalid {{ bar }}', {'{{ bar }}': 'baz'}) == 'Foo with invalid baz'

    def test_violate(self):
        order = object()
        error = ValidationFailedError.violate(order, 'Order with invalid {{ status }}', {'status': 'x'}, 'status')

        assert isinstance(error, ValueError)
        assert error.code == ErrorCode.VALIDATION_FAILED
        assert error.get_value() is order
        violation = error.get_violations()[0]
        assert violation.message == 'Order with invalid x'
        assert violation.message_template == 'Order with invalid {{ status }}'
        assert violation.property_path == 'status'
        assert str(error) == 'status: Order with invalid x'
        assert error.to_dict()['metadata'] == {'violations': ['status: Order with invalid x']}

    def test_violation_list(self):
        violations = ConstraintViolationList([ConstraintViolation('a', 'a', property_path='x')])
        violations.add(ConstraintViolation('b', 'b'))
        violations.add_all(ConstraintViolationList([ConstraintViolation('c', 'c', property_path='x')]))

        assert len(violations) == 3
        assert [v.message for v in violations.find_by_path('x')] == ['a', 'c']
        assert str(violations) == 'x: a\nb\nx: c'

    def test_convert_to_form_violation(self):
        violation = ConstraintViolation('Too short', 'Too short', property_path='name')

        assert convert_domain_violation_to_form_violation(violation).property_path == 'data.name'
        assert violation.property_path == 'name'

        without_path = ConstraintViolation('Invalid', 'Invalid')
        assert convert_domain_violation_to_form_violation(without_path).property_path is None
