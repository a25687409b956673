"""
Identifier value objects.
"""

import hashlib
import re
import uuid
from abc import ABC, abstractmethod
from typing import Any, Optional, Union

from ..errors import InvalidArgumentError
from ..util.classes import full_name, short_name

IdentifierValue = Union[str, int]

UUID_PATTERN = re.compile(
    r'^[0-9A-Fa-f]{8}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{4}-[0-9A-Fa-f]{12}$'
)
SUFFIX_PATTERN = re.compile(r'[0-9A-F]{3}-[0-9A-F]{4}-[0-9A-F]{12}', re.IGNORECASE)

MAX_PRIMARY_VALUE = 99999999
MAX_SECONDARY_VALUE = 9999


class Identifier(ABC):
    """
    Identifier value object.

        class ProductIdentifier(Identifier):
            pass

        p1 = ProductIdentifier(123)
        p1.get_value()                        # 123
        p1.equals(ProductIdentifier('abc'))   # False
        p1.equals(ProductIdentifier(123))     # True
        p1.equals(123)                        # True

    Only subclasses can be instantiated.
    """

    # Classes declaring __abstract__ in their own body can not be instantiated
    __abstract__ = True

    def __new__(cls, *args, **kwargs):
        if cls.__dict__.get('__abstract__', False):
            raise TypeError(f"Can't instantiate abstract class {cls.__name__}")
        return super().__new__(cls)

    def __init__(self, value: IdentifierValue):
        self._value = value

    def get_value(self) -> IdentifierValue:
        return self._value

    @property
    def value(self) -> IdentifierValue:
        return self._value

    def equals(self, other: Optional[Union["Identifier", IdentifierValue]]) -> bool:
        """Compare the value with another identifier or a raw value."""
        if other is None:
            return False
        if isinstance(other, Identifier):
            return self.get_value() == other.get_value()
        return self.get_value() == other

    def hash(self) -> str:
        """Return an md5 hash unique to the identifier class and value."""
        return hashlib.md5(f"{full_name(type(self))}@{self.get_value()}".encode('utf-8')).hexdigest()

    def __eq__(self, other: Any) -> bool:
        return type(other) is type(self) and other.get_value() == self.get_value()

    def __hash__(self) -> int:
        return hash((type(self), self.get_value()))

    def __str__(self) -> str:
        return str(self.get_value())

    def __repr__(self) -> str:
        return f"{short_name(self)}({self.get_value()!r})"


class IdentifierUuid(Identifier):
    """
    UUID identifier value object.

        class ProductIdentifier(IdentifierUuid):
            pass

        ProductIdentifier('70b3738c-dec5-40a1-a992-bdadb3e33f9d')
        ProductIdentifier('123', validate=True)  # InvalidArgumentError
        ProductIdentifier()                      # random UUID v4
    """

    __abstract__ = True

    def __init__(self, value: Optional[Union[uuid.UUID, str]] = None, validate: bool = False):
        if isinstance(value, str) and validate and not UUID_PATTERN.match(value):
            raise InvalidArgumentError(f'Invalid UUID "{value}"')

        if value is None:
            value = str(uuid.uuid4())
        elif isinstance(value, uuid.UUID):
            value = str(value)

        super().__init__(value)


class IdentifierUuidHybrid(IdentifierUuid):
    """
    UUID identifier holding up to two readable integers.

    A system working with UUIDs may still have entities with classic
    incremental ids. The hybrid identifier encodes them in a UUID v8
    (custom UUID):

        01234567-0890-8aaa-bbbb-cccdddeeefff

        01234567               primary value, 1 to 99,999,998
        0890                   secondary value, 0 to 9,998
        8                      UUID version
        aaa-bbbb-cccdddeeefff  suffix unique to every identifier class

        class UserPhotoIdentifier(IdentifierUuidHybrid):
            @classmethod
            def suffix(cls):
                return 'aaa-bbbb-cccdddeeefff'

        photo = UserPhotoIdentifier(12345, 25)  # 00012345-0025-8aaa-bbbb-cccdddeeefff
        photo.get_primary_value()               # 12345
        photo.get_secondary_value()             # 25

    The uniqueness of the suffixes is not checked.
    """

    def __init__(
        self,
        value: Union[uuid.UUID, str, int],
        secondary_value: int = 0,
        validate: bool = False,
    ):
        suffix = self.suffix()
        if not SUFFIX_PATTERN.fullmatch(suffix):
            raise InvalidArgumentError(f'Invalid suffix "{suffix}"')

        if isinstance(value, int) and not isinstance(value, bool):
            if not 0 < value < MAX_PRIMARY_VALUE:
                raise InvalidArgumentError(
                    f'Provided "{value}" for the primary value is not between 1 and {MAX_PRIMARY_VALUE - 1}.'
                )
            if not 0 <= secondary_value < MAX_SECONDARY_VALUE:
                raise InvalidArgumentError(
                    f'Provided "{secondary_value}" for the secondary value is not between 0 and '
                    f'{MAX_SECONDARY_VALUE - 1}.'
                )
            value = f"{value:08d}-{secondary_value:04d}-8{suffix}"
        else:
            if isinstance(value, uuid.UUID):
                value = str(value)
            if not str(value).endswith(suffix):
                raise InvalidArgumentError(f'{short_name(type(self))} should end with "{suffix}".')

        super().__init__(value, validate)

    @classmethod
    @abstractmethod
    def suffix(cls) -> str:
        """Return the suffix "aaa-bbbb-cccdddeeefff" of the identifier class (hex digits)."""

    def get_primary_value(self) -> int:
        """Return the primary integer encoded in the identifier."""
        return int(self._value[0:8])

    def get_secondary_value(self) -> int:
        """Return the secondary integer encoded in the identifier."""
        return int(self._value[9:13])
