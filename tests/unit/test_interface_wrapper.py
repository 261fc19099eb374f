"""Tests for the functional-interface wrapper factory."""

from abc import ABC, abstractmethod

import pytest

from string_dispatch.wrapper import single_abstract_method, wrap_functional, wrapper_class_for


class Greeter(ABC):
    @abstractmethod
    def greet(self, name: str) -> str:
        """Greet someone."""


class Combiner(ABC):
    @abstractmethod
    def combine(self, left, right, *, sep=""):
        """Combine two values."""


class TwoMethods(ABC):
    @abstractmethod
    def first(self):
        pass

    @abstractmethod
    def second(self):
        pass


class Runner:
    def run(self):
        return "original"


def test_wrap_delegates():
    """Test the generated method calls the target."""
    greeter = wrap_functional(Greeter, lambda name: f"hello {name}")

    assert isinstance(greeter, Greeter)
    assert greeter.greet("world") == "hello world"


def test_keyword_arguments_forwarded():
    combiner = wrap_functional(Combiner, lambda left, right, sep="": f"{left}{sep}{right}")

    assert combiner.combine("a", "b") == "ab"
    assert combiner.combine("a", "b", sep="-") == "a-b"


def test_generated_class_name():
    """Test generated classes get unique wrapper names."""
    cls = wrapper_class_for(Greeter)

    assert cls.__name__.startswith("Greeter$$Wrapper$$")
    assert issubclass(cls, Greeter)
    assert cls.greet.__doc__ == "Greet someone."
    assert wrapper_class_for(Combiner).__name__ != cls.__name__


def test_class_is_cached():
    assert wrapper_class_for(Greeter) is wrapper_class_for(Greeter)
    assert type(wrap_functional(Greeter, str)) is type(wrap_functional(Greeter, repr))


def test_wrapped_target_exposed():
    target = lambda name: name  # noqa: E731
    greeter = wrap_functional(Greeter, target)

    assert greeter.__wrapped__ is target
    assert "Greeter$$Wrapper$$" in repr(greeter)


def test_single_abstract_method():
    assert single_abstract_method(Greeter) == "greet"

    with pytest.raises(TypeError):
        single_abstract_method(TwoMethods)


def test_ambiguous_interface_rejected():
    with pytest.raises(TypeError):
        wrap_functional(TwoMethods, lambda: None)


def test_named_method_with_other_abstracts_rejected():
    with pytest.raises(TypeError):
        wrap_functional(TwoMethods, lambda: None, method_name="first")


def test_explicit_method_on_concrete_class():
    """Test overriding a named method of a class without abstract methods."""
    runner = wrap_functional(Runner, lambda: "wrapped", method_name="run")

    assert isinstance(runner, Runner)
    assert runner.run() == "wrapped"


def test_concrete_class_needs_method_name():
    with pytest.raises(TypeError):
        wrap_functional(Runner, lambda: None)


def test_unknown_method_name():
    with pytest.raises(TypeError):
        wrap_functional(Runner, lambda: None, method_name="walk")


def test_target_must_be_callable():
    with pytest.raises(TypeError):
        wrap_functional(Greeter, "not callable")


def test_interface_must_be_class():
    with pytest.raises(TypeError):
        wrapper_class_for(lambda: None)
