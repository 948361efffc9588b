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
"""Member descriptors — read-only views of constructors, events, properties and methods."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from flyproxy.reflection.events import event


class MethodKind(str, Enum):
    """How a method binds to its declaring class."""

    INSTANCE = "instance"
    STATIC = "static"
    CLASS = "class"


def _qualified(declaring_type: type | None, name: str) -> str:
    if declaring_type is None:
        return name
    return f"{declaring_type.__module__}.{declaring_type.__qualname__}.{name}"


@dataclass(frozen=True)
class MethodInfo:
    """A method, or an accessor of a property or event.

    Attributes:
        declaring_type: The class whose body defines the method.
        name: Member name the method is reachable under.
        function: The underlying plain function.
        kind: Instance, static or class method.
    """

    declaring_type: type | None
    name: str
    function: Callable[..., Any]
    kind: MethodKind = MethodKind.INSTANCE

    @property
    def qualified_name(self) -> str:
        return _qualified(self.declaring_type, self.name)

    @cached_property
    def signature(self) -> inspect.Signature:
        """Call signature as seen by callers (without ``self``/``cls``)."""
        sig = inspect.signature(self.function)
        if self.kind is MethodKind.STATIC:
            return sig
        parameters = list(sig.parameters.values())
        if not parameters:
            raise ValueError(f"{self.qualified_name} does not accept a receiver argument")
        return sig.replace(parameters=parameters[1:])

    @property
    def is_abstract(self) -> bool:
        return bool(getattr(self.function, "__isabstractmethod__", False))

    @property
    def is_final(self) -> bool:
        return bool(getattr(self.function, "__final__", False))

    @property
    def is_async(self) -> bool:
        return inspect.iscoroutinefunction(self.function)

    def __str__(self) -> str:
        return f"Method({self.qualified_name})"


@dataclass(frozen=True)
class PropertyInfo:
    """A property with its getter, setter and deleter accessors."""

    declaring_type: type | None
    name: str
    getter: MethodInfo | None = None
    setter: MethodInfo | None = None
    deleter: MethodInfo | None = None
    doc: str | None = None

    @classmethod
    def from_property(cls, declaring_type: type, name: str, prop: property) -> PropertyInfo:
        def accessor(fn: Callable[..., Any] | None) -> MethodInfo | None:
            return MethodInfo(declaring_type, name, fn) if fn is not None else None

        return cls(
            declaring_type,
            name,
            getter=accessor(prop.fget),
            setter=accessor(prop.fset),
            deleter=accessor(prop.fdel),
            doc=prop.__doc__,
        )

    @property
    def qualified_name(self) -> str:
        return _qualified(self.declaring_type, self.name)

    @property
    def accessors(self) -> tuple[MethodInfo, ...]:
        return tuple(a for a in (self.getter, self.setter, self.deleter) if a is not None)

    @property
    def can_read(self) -> bool:
        return self.getter is not None

    @property
    def can_write(self) -> bool:
        return self.setter is not None

    @property
    def is_abstract(self) -> bool:
        return any(a.is_abstract for a in self.accessors)

    @property
    def is_final(self) -> bool:
        return any(a.is_final for a in self.accessors)

    def __str__(self) -> str:
        return f"Property({self.qualified_name})"


@dataclass(frozen=True)
class EventInfo:
    """An event declared with :class:`~flyproxy.reflection.events.event`.

    ``adder`` and ``remover`` take exactly one argument, the handler.
    """

    declaring_type: type | None
    name: str
    declaration: event
    adder: MethodInfo
    remover: MethodInfo

    @classmethod
    def from_declaration(cls, declaring_type: type, name: str, declaration: event) -> EventInfo:
        return cls(
            declaring_type,
            name,
            declaration,
            adder=MethodInfo(declaring_type, name, declaration.add),
            remover=MethodInfo(declaring_type, name, declaration.remove),
        )

    @property
    def qualified_name(self) -> str:
        return _qualified(self.declaring_type, self.name)

    @property
    def accessors(self) -> tuple[MethodInfo, ...]:
        return (self.adder, self.remover)

    @property
    def is_final(self) -> bool:
        return bool(getattr(self.declaration, "__final__", False))

    def __str__(self) -> str:
        return f"Event({self.qualified_name})"


@dataclass(frozen=True)
class ConstructorInfo:
    """The ``__init__`` a proxy type chains to; ``object`` means none."""

    declaring_type: type | None
    function: Callable[..., Any]

    @classmethod
    def default(cls) -> ConstructorInfo:
        return cls(object, object.__init__)

    @property
    def is_default(self) -> bool:
        return self.declaring_type is object

    @cached_property
    def signature(self) -> inspect.Signature:
        if self.is_default:
            return inspect.Signature()
        parameters = list(inspect.signature(self.function).parameters.values())
        return inspect.Signature(parameters[1:])

    def __str__(self) -> str:
        owner = self.declaring_type.__qualname__ if self.declaring_type is not None else "?"
        return f"Constructor({owner}{self.signature})"


MemberInfo = Union[EventInfo, PropertyInfo, MethodInfo]
