"""
Tests for property access, object, class and composite utilities.
"""

import enum
import inspect

import pytest

from gears.errors import InvalidArgumentError, InvalidPropertyPathError
from gears.property import (
    NoSuchPropertyError, NullTolerancePropertyAccessor, PropertyAccessor, PropertyPath,
    RecursivePropertyAccessor, UnexpectedTypeError,
)
from gears.util import classes, composite, objects


class Person:
    def __init__(self, name, parent=None, children=None):
        self.name = name
        self.parent = parent
        self.children = children or []
        self._nickname = None
        self.__secret = 'hidden'

    def __str__(self):
        return self.name

    def get_display_name(self):
        return self.name.title()

    def is_adult(self):
        return True

    def set_nickname(self, nickname):
        self._nickname = nickname.lower()

    def _greet(self, other):
        return f"Hello {other}"

    @staticmethod
    def create(name):
        return Person(name)

    @classmethod
    def anonymous(cls):
        return cls('anonymous')


class Plain:
    pass


class Slotted:
    __slots__ = ('value',)


class Color(enum.Enum):
    RED = 'red'
    GREEN = 2


class Flag(enum.Enum):
    ON = (1, 'on')


def module_function():
    return 1


@pytest.fixture
def family():
    grandfather = Person('grandfather')
    dad = Person('dad', parent=grandfather)
    me = Person('me', parent=dad)
    grandfather.children = [dad]
    dad.children = [me]
    return grandfather, dad, me


class TestPropertyPath:
    """Test property path parsing."""

    def test_elements(self):
        path = PropertyPath('children[2][title].name')

        assert [str(element) for element in path] == ['children', '[2]', '[title]', 'name']
        assert path.last.name == 'name'
        assert str(path.parent) == 'children[2][title]'
        assert PropertyPath('name').parent is None

    @pytest.mark.parametrize("path", ['', 'a..b', 'a[', 'a[]', 'a]'])
    def test_invalid(self, path):
        with pytest.raises(InvalidPropertyPathError):
            PropertyPath(path)


class TestPropertyAccessor:
    """Test reading and writing object graphs."""

    def test_read_attributes_and_getters(self, family):
        _, dad, me = family
        accessor = PropertyAccessor()

        assert accessor.get_value(me, 'parent.name') == 'dad'
        assert accessor.get_value(me, 'displayName') == 'Me'
        assert accessor.get_value(me, 'adult') is True
        assert accessor.get_value(dad, 'children[0].name') == 'me'

    def test_read_mappings(self):
        accessor = PropertyAccessor()
        data = {'order': {'lines': [{'sku': 'A1'}]}}

        assert accessor.get_value(data, '[order][lines][0][sku]') == 'A1'
        assert accessor.get_value(data, 'order.lines[0].sku') == 'A1'
        assert accessor.get_value(data, '[missing]') is None
        assert accessor.get_value([1, 2], '[-1]') == 2

    def test_read_errors(self, family):
        _, _, me = family
        accessor = PropertyAccessor()

        with pytest.raises(NoSuchPropertyError):
            accessor.get_value(me, 'age')
        with pytest.raises(UnexpectedTypeError):
            accessor.get_value(me, 'name.first')
        with pytest.raises(NoSuchPropertyError):
            accessor.get_value([1], 'length')

    def test_write(self, family):
        _, _, me = family
        accessor = PropertyAccessor()

        accessor.set_value(me, 'nickname', 'ME')
        accessor.set_value(me, 'parent.name', 'father')
        data = {'items': [1]}
        accessor.set_value(data, '[items][1]', 2)

        assert me._nickname == 'me'
        assert me.parent.name == 'father'
        assert data == {'items': [1, 2]}

    def test_write_errors(self):
        accessor = PropertyAccessor()

        with pytest.raises(NoSuchPropertyError):
            accessor.set_value([1], '[5]', 0)
        with pytest.raises(NoSuchPropertyError):
            accessor.set_value(Slotted(), 'other', 0)

    def test_readable_writable(self, family):
        _, _, me = family
        accessor = PropertyAccessor()

        assert accessor.is_readable(me, 'parent.parent.name')
        assert not accessor.is_readable(me, 'parent.parent.parent.name')
        assert accessor.is_writable(me, 'nickname')
        assert accessor.is_writable(Slotted(), 'value')
        assert not accessor.is_writable(Slotted(), 'other')
        assert not accessor.is_writable((1, 2), '[0]')


class TestRecursiveAccessors:
    """Test the null tolerant and recursive accessors."""

    def test_null_tolerance(self, family):
        _, _, me = family
        accessor = NullTolerancePropertyAccessor()

        assert accessor.get_value(me, 'parent.parent.parent.name') is None
        assert accessor.get_value(me, 'unknown') is None
        assert accessor.get_value(me, 'parent.name') == 'dad'

    def test_null_tolerance_reads_each_property_once(self):
        class Counter:
            reads = 0

            @property
            def value(self):
                Counter.reads += 1
                return self

        accessor = NullTolerancePropertyAccessor()

        assert accessor.get_value(Counter(), 'value.value') is not None
        assert Counter.reads == 2
        assert accessor.get_value(Counter(), 'value.missing') is None
        assert not accessor.is_readable(Counter(), 'value.missing')

    def test_recursive_parent(self, family):
        grandfather, dad, me = family
        assert RecursivePropertyAccessor().get_value(me, 'parent') == [dad, grandfather]

    def test_recursive_children(self, family):
        grandfather, dad, me = family
        assert RecursivePropertyAccessor().get_value(grandfather, 'children') == [dad, me]

    def test_cycles_terminate(self):
        a = Person('a')
        b = Person('b', parent=a)
        a.parent = b
        assert RecursivePropertyAccessor().get_value(a, 'parent') == [b, a]


class TestObjects:
    """Test object helpers."""

    def test_get_set_has(self, family):
        _, _, me = family

        objects.set(me, 'name', 'myself')

        assert objects.get(me, 'name') == 'myself'
        assert objects.has(me, 'parent.name')
        assert not objects.has(me, 'parent.age')
        assert objects.identifier(me) == id(me)

    def test_get_recursive(self, family):
        grandfather, dad, me = family
        assert objects.get_recursive(me, 'parent') == [dad, grandfather]

    def test_internal_members(self):
        person = Person('me')

        assert objects.get_internal(person, 'secret') == 'hidden'
        assert objects.get_internal(person, 'nickname') is None
        assert objects.call_internal(person, 'greet', ['you']) == 'Hello you'

        objects.set_internal(person, 'secret', 'revealed')
        objects.set_internal(person, 'created', 1)

        assert person._Person__secret == 'revealed'
        assert person._Person__created == 1

    def test_internal_missing(self):
        with pytest.raises(AttributeError):
            objects.get_internal(Plain(), 'missing')

    def test_to_class_name(self):
        assert objects.to_class_name(Person) == f'{__name__}.Person'
        assert objects.to_class_name(Person('x')) == f'{__name__}.Person'
        assert objects.to_class_name('collections.OrderedDict') == 'collections.OrderedDict'
        assert objects.to_class_name('no.such.Class') is None

    def test_to_string(self):
        plain = Plain()

        assert objects.to_string(Person('me')) == 'me'
        assert objects.to_string(Color.RED) == 'red'
        assert objects.to_string(Color.GREEN) == '2'
        assert objects.to_string(Flag.ON) == 'ON'
        assert objects.to_string(plain) == f'{__name__}.Plain@{id(plain)}'

    def test_get_property_recursive(self, family):
        grandfather, dad, me = family

        assert objects.get_property_recursive(grandfather, 'children') == [dad, me]
        assert objects.get_property_recursive(me, 'parent', add_source=True) == [me, dad, grandfather]

    def test_get_property_recursive_last(self, family):
        grandfather, _, me = family

        assert objects.get_property_recursive_last(me, 'parent') == [grandfather]


class TestClasses:
    """Test class and callable helpers."""

    def test_names(self):
        assert classes.short_name(Person('x')) == 'Person'
        assert classes.full_name(Person) == f'{__name__}.Person'

    def test_resolve_class(self):
        assert classes.resolve_class('collections.OrderedDict').__name__ == 'OrderedDict'
        assert classes.resolve_class('os.path.join') is None
        assert classes.resolve_class('missing.Module') is None

    def test_parse_callable(self):
        assert classes.parse_callable('os.path::join') is __import__('os').path.join
        assert classes.parse_callable('os.path.join')('a', 'b')
        assert classes.parse_callable('len') is len

        with pytest.raises(InvalidArgumentError):
            classes.parse_callable('os.path::missing')
        with pytest.raises(InvalidArgumentError):
            classes.parse_callable('os.sep')

    def test_kinds(self):
        assert classes.is_closure(lambda: None)
        assert not classes.is_closure(module_function)

        assert classes.is_function(module_function)
        assert classes.is_function(len)
        assert not classes.is_function(Person.create)

        assert classes.is_method(Person('x').get_display_name)
        assert classes.is_method(Person.create)
        assert not classes.is_method(module_function)

        assert classes.is_static_method(Person.create)
        assert classes.is_static_method(Person.anonymous)
        assert not classes.is_static_method(Person('x').get_display_name)
        assert classes.is_static_method((Person, 'create'))

    def test_kinds_by_expression(self):
        assert classes.is_function('os.path::join')
        assert classes.is_method('gears.util.classes::Foo.bar')
        assert classes.is_static_method('gears.util.classes::Foo.bar')

    def test_reflection(self):
        signature = classes.reflection((Person, 'create'))
        assert list(signature.parameters) == ['name']
        assert isinstance(classes.reflection('os.path::join'), inspect.Signature)


class TestComposite:
    """Test uniform access to arrays and objects."""

    def test_array_access(self):
        data = {'a': 1}

        assert composite.has_array_access(data)
        assert not composite.has_array_access('text')
        assert composite.has(data, 'a')
        assert composite.get([1, 2], -1) == 2

        result = composite.set(data, 'b', 2)
        assert result == {'a': 1, 'b': 2}
        assert data == {'a': 1}
        assert composite.set((1, 2), 0, 9) == [9, 2]

    def test_object_access(self):
        person = Person('me')

        assert composite.has(person, 'name')
        assert composite.get(person, 'name') == 'me'
        assert composite.set(person, 'name', 'you') is person
        assert person.name == 'you'

    @pytest.mark.parametrize("source", [None, 42, 'text'])
    def test_unsupported(self, source):
        with pytest.raises(InvalidArgumentError, match='is not supported'):
            composite.get(source, 'x')
