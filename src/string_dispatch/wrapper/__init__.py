"""
Functional-interface wrappers.

Binds plain callables to one-method abstract classes.
"""

from .interface_wrapper import single_abstract_method, wrap_functional, wrapper_class_for

__all__ = ["wrap_functional", "wrapper_class_for", "single_abstract_method"]
