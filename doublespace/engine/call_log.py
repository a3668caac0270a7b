from __future__ import annotations

from typing import List, Mapping, Sequence, Tuple


class CallLogMixin:
    """Collects (method_name, args, kwargs) for every call a double receives."""

    def __init__(self) -> None:
        self.received_calls: List[Tuple[str, tuple, dict]] = []

    def _record_call(self, method_name: str, args: Sequence, kwargs: Mapping) -> None:
        self.received_calls.append((method_name, tuple(args), dict(kwargs)))

    def times_received(self, *args, **kwargs) -> int:
        return sum(
            1 for _, called_args, called_kwargs in self.received_calls
            if called_args == args and called_kwargs == kwargs
        )
