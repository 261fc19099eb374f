"""
Functional-interface wrapper factory.

Materialises a one-method subclass of an abstract class (the "functional
interface") whose single abstract method delegates to a captured callable.
Generated classes are cached per (interface, method name) and carry a unique
name of the form ``<Interface>$$Wrapper$$<n>``.
"""

import inspect
import itertools
import logging
import threading
from functools import lru_cache
from typing import Callable, Optional

logger = logging.getLogger(__name__)

# Used to ensure that each generated class name is unique
_counter = itertools.count(1)
_counter_lock = threading.Lock()


def _unique_name(interface: type) -> str:
    with _counter_lock:
        n = next(_counter)
    return f"{interface.__name__}$$Wrapper$${n}"


def single_abstract_method(interface: type) -> str:
    """
    Find the name of the single abstract method of an interface.

    Raises:
        TypeError: If the interface has zero or several abstract methods
    """
    abstract = sorted(getattr(interface, "__abstractmethods__", ()))
    if len(abstract) != 1:
        raise TypeError(
            f"{interface.__name__} must declare exactly one abstract method, "
            f"found {len(abstract)}: {abstract}"
        )
    return abstract[0]


def _make_delegate(interface: type, method_name: str) -> Callable:
    def delegate(self, *args, **kwargs):
        return self.__wrapped__(*args, **kwargs)

    delegate.__name__ = method_name
    delegate.__qualname__ = f"{interface.__name__}$$Wrapper.{method_name}"
    delegate.__doc__ = getattr(getattr(interface, method_name), "__doc__", None)
    return delegate


@lru_cache(maxsize=None)
def wrapper_class_for(interface: type, method_name: Optional[str] = None) -> type:
    """
    Generate a class implementing ``method_name`` of ``interface``.

    Args:
        interface: Class with a single abstract method (or the named method)
        method_name: Method to implement; defaults to the single abstract method

    Returns:
        A concrete subclass whose instances are built as ``cls(target)``
    """
    if not inspect.isclass(interface):
        raise TypeError(f"Expected a class, got {interface!r}")

    if method_name is None:
        method_name = single_abstract_method(interface)
    elif not callable(getattr(interface, method_name, None)):
        raise TypeError(f"{interface.__name__} has no method {method_name!r}")

    remaining = set(getattr(interface, "__abstractmethods__", ())) - {method_name}
    if remaining:
        raise TypeError(
            f"{interface.__name__} has other abstract methods: {sorted(remaining)}"
        )

    def __init__(self, target):
        if not callable(target):
            raise TypeError(f"Wrapper target must be callable, got {target!r}")
        self.__wrapped__ = target

    def __repr__(self):
        return f"<{type(self).__name__} -> {self.__wrapped__!r}>"

    name = _unique_name(interface)
    cls = type(interface)(
        name,
        (interface,),
        {
            "__init__": __init__,
            "__repr__": __repr__,
            "__module__": interface.__module__,
            method_name: _make_delegate(interface, method_name),
        },
    )
    logger.debug(f"Generated {name} implementing {interface.__name__}.{method_name}")
    return cls


def wrap_functional(interface: type, target: Callable, method_name: Optional[str] = None):
    """
    Bind a callable to a functional interface.

    Args:
        interface: Class with a single abstract method
        target: Callable invoked by the implemented method
        method_name: Method to implement; defaults to the single abstract method

    Returns:
        Instance of ``interface`` whose method calls ``target``
    """
    return wrapper_class_for(interface, method_name)(target)
