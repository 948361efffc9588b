# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Event members — multicast handler lists declared at class level.

Usage::

    class Account:
        balance_changed = event("Raised after every deposit or withdrawal.")

        def deposit(self, amount: int) -> None:
            ...
            self.balance_changed.fire(amount)

    account.balance_changed += on_change
    account.balance_changed -= on_change
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any


class BoundEvent:
    """An event bound to one instance, with ``+=`` / ``-=`` sugar."""

    __slots__ = ("instance", "_add", "_remove", "_fire")

    def __init__(
        self,
        instance: Any,
        add: Callable[[Any], Any],
        remove: Callable[[Any], Any],
        fire: Callable[..., Any],
    ) -> None:
        self.instance = instance
        self._add = add
        self._remove = remove
        self._fire = fire

    def add(self, handler: Callable[..., Any]) -> None:
        self._add(handler)

    def remove(self, handler: Callable[..., Any]) -> None:
        self._remove(handler)

    def fire(self, *args: Any, **kwargs: Any) -> None:
        self._fire(*args, **kwargs)

    def __iadd__(self, handler: Callable[..., Any]) -> BoundEvent:
        self.add(handler)
        return self

    def __isub__(self, handler: Callable[..., Any]) -> BoundEvent:
        self.remove(handler)
        return self


class event:  # noqa: N801 - used like ``property``
    """Declare an event on a class.

    Handlers are stored per instance. Removing a handler that was never
    added is a no-op.
    """

    def __init__(self, doc: str | None = None) -> None:
        self.name: str | None = None
        self.__doc__ = doc

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return BoundEvent(
            instance,
            lambda handler: self.add(instance, handler),
            lambda handler: self.remove(instance, handler),
            lambda *args, **kwargs: self.fire(instance, *args, **kwargs),
        )

    def __set__(self, instance: Any, value: Any) -> None:
        # ``obj.evt += handler`` rebinds the result of __iadd__.
        if isinstance(value, BoundEvent) and value.instance is instance:
            return
        raise AttributeError(f"cannot assign to event '{self.name}'")

    def add(self, instance: Any, handler: Callable[..., Any]) -> None:
        self._handlers(instance).append(handler)

    def remove(self, instance: Any, handler: Callable[..., Any]) -> None:
        handlers = self._handlers(instance)
        if handler in handlers:
            handlers.remove(handler)

    def fire(self, instance: Any, *args: Any, **kwargs: Any) -> None:
        for handler in list(self._handlers(instance)):
            handler(*args, **kwargs)

    def handlers(self, instance: Any) -> tuple[Callable[..., Any], ...]:
        return tuple(self._handlers(instance))

    def _handlers(self, instance: Any) -> list[Callable[..., Any]]:
        if self.name is None:
            raise AttributeError("event is not bound to a class attribute")
        return instance.__dict__.setdefault(f"__event_{self.name}__", [])

    def __repr__(self) -> str:
        return f"<event {self.name!r}>"
