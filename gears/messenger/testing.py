"""
Test helpers for message buses.
"""

from typing import Any, Optional, Type

from ..errors import HandlerFailedError
from ..util.classes import full_name


def assert_command_should_fail(
    bus: Any,
    command: Any,
    exception_type: Optional[Type[BaseException]] = None,
) -> BaseException:
    """
    Assert that dispatching a command raises, and return the exception.

        assert_command_should_fail(command_bus, PlaceOrder(order_id))
        assert_command_should_fail(command_bus, PlaceOrder(order_id), OutOfStockError)

    Handler exceptions are unwrapped from HandlerFailedError before they
    are compared with exception_type.
    """
    try:
        bus.dispatch(command)
    except HandlerFailedError as e:
        exception = e.get_previous()
    except Exception as e:
        exception = e
    else:
        raise AssertionError(f'"{full_name(type(command))}" should fail')

    if exception_type is not None and not isinstance(exception, exception_type):
        raise AssertionError(
            f'"{full_name(type(command))}" failed with "{full_name(type(exception))}", '
            f'expected "{full_name(exception_type)}"'
        ) from exception

    return exception
