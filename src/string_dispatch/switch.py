"""
String switch lowered to a perfect-hash jump table.

A switch over string case labels becomes ``handlers[dispatcher(value)]``:
the dispatcher maps each label to a distinct index and every other value to
MISS, which selects the default arm appended at the end of the table.
"""

import logging
from typing import Any, Callable, Mapping, Optional

from .config import DispatchConfig
from .mph import MISS, Dispatcher, minimal_perfect_hash

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]


class StringSwitch:
    """
    Dispatch a value to the handler registered for its case label.

    Usage:
        switch = StringSwitch({"get": on_get, "put": on_put}, default=on_other)
        switch("get", request)  # calls on_get("get", request)
    """

    def __init__(
        self,
        cases: Mapping[Any, Handler],
        default: Optional[Handler] = None,
        hasher=None,
        config: Optional[DispatchConfig] = None,
    ):
        """
        Initialize string switch.

        Args:
            cases: Case label -> handler
            default: Handler for values matching no label (None = raise KeyError)
            hasher: Hasher for the labels (default hasher if None)
            config: Construction options for the dispatcher
        """
        for label, handler in cases.items():
            if not callable(handler):
                raise TypeError(f"Handler for case {label!r} is not callable")
        if default is not None and not callable(default):
            raise TypeError("Default handler is not callable")

        self.dispatcher: Dispatcher = minimal_perfect_hash(
            cases.keys(), hasher, config=config
        )

        # Index order comes from the dispatcher, not from the mapping
        table: list[Optional[Handler]] = [None] * len(self.dispatcher)
        for label, handler in cases.items():
            table[self.dispatcher.lookup(label)] = handler
        table.append(default if default is not None else self._no_match)
        self._table = tuple(table)
        self.default = default

        logger.debug(f"Lowered switch with {len(cases)} cases")

    @staticmethod
    def _no_match(value, *args, **kwargs):
        raise KeyError(value)

    def index_of(self, value) -> int:
        """Case index for value, or MISS."""
        return self.dispatcher.lookup(value)

    def __call__(self, value, *args, **kwargs):
        """
        Run the handler selected by value.

        Handlers are called as handler(value, *args, **kwargs).

        Raises:
            KeyError: If no case matches and there is no default handler
        """
        # MISS (-1) selects the default arm at the end of the table
        return self._table[self.dispatcher.lookup(value)](value, *args, **kwargs)

    def __contains__(self, value) -> bool:
        return self.dispatcher.lookup(value) != MISS

    def __len__(self) -> int:
        return len(self.dispatcher)
