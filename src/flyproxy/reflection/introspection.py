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
"""TypeDescriptor — enumerates the proxyable members of a class hierarchy."""

from __future__ import annotations

import abc
import inspect
import typing
from typing import Any

from flyproxy.reflection.events import event
from flyproxy.reflection.members import (
    ConstructorInfo,
    EventInfo,
    MemberInfo,
    MethodInfo,
    MethodKind,
    PropertyInfo,
)

# Names that shape the class itself rather than its callable surface.
STRUCTURAL_NAMES = frozenset(
    {
        "__init__",
        "__new__",
        "__init_subclass__",
        "__subclasshook__",
        "__class_getitem__",
        "__set_name__",
        "__getattribute__",
        "__getattr__",
        "__setattr__",
        "__delattr__",
        "__del__",
        "__dir__",
        "__reduce__",
        "__reduce_ex__",
        "__getstate__",
        "__setstate__",
        "__copy__",
        "__deepcopy__",
        "__post_init__",
    }
)

_INFRASTRUCTURE_TYPES: frozenset[Any] = frozenset({object, abc.ABC, typing.Protocol, typing.Generic})


def _describe(cls: type, name: str, value: Any) -> MemberInfo | None:
    if name in STRUCTURAL_NAMES:
        return None
    if isinstance(value, event):
        return EventInfo.from_declaration(cls, name, value)
    if isinstance(value, property):
        return PropertyInfo.from_property(cls, name, value)
    if isinstance(value, staticmethod):
        return MethodInfo(cls, name, value.__func__, MethodKind.STATIC)
    if isinstance(value, classmethod):
        return MethodInfo(cls, name, value.__func__, MethodKind.CLASS)
    if inspect.isfunction(value):
        return MethodInfo(cls, name, value)
    return None


class TypeDescriptor:
    """Cached, read-only description of one class.

    ``local_members`` follow the declaration order of the class body;
    ``members`` merge the whole hierarchy, most derived class first, the
    first declaration of a name winning.
    """

    # Descriptors hold their class and members, so described classes live for
    # the rest of the process.
    _cache: dict[type, TypeDescriptor] = {}

    @classmethod
    def for_type(cls, clazz: type) -> TypeDescriptor:
        descriptor = cls._cache.get(clazz)
        if descriptor is None:
            descriptor = TypeDescriptor(clazz)
            cls._cache[clazz] = descriptor

        return descriptor

    @staticmethod
    def is_infrastructure(clazz: type) -> bool:
        """True for ``object``, ``ABC``, ``Protocol`` and ``Generic``."""
        return clazz in _INFRASTRUCTURE_TYPES

    def __init__(self, clazz: type) -> None:
        self.cls = clazz
        self.local_members: list[MemberInfo] = []

        for name, value in list(vars(clazz).items()):
            member = _describe(clazz, name, value)
            if member is not None:
                self.local_members.append(member)

        self.super_types = [
            TypeDescriptor.for_type(base) for base in clazz.__mro__[1:] if not self.is_infrastructure(base)
        ]

    # public

    def members(self) -> list[MemberInfo]:
        merged: dict[str, MemberInfo] = {}
        for descriptor in [self, *self.super_types]:
            for member in descriptor.local_members:
                merged.setdefault(member.name, member)

        return list(merged.values())

    def get_member(self, name: str) -> MemberInfo | None:
        for member in self.members():
            if member.name == name:
                return member

        return None

    def constructor(self) -> ConstructorInfo:
        """The ``__init__`` instances of this class run, or the default one."""
        for clazz in self.cls.__mro__:
            if self.is_infrastructure(clazz):
                continue
            init = vars(clazz).get("__init__")
            # typing.Protocol installs a placeholder __init__ on protocol classes
            if inspect.isfunction(init) and init.__name__ != "_no_init_or_replace_init":
                return ConstructorInfo(clazz, init)

        return ConstructorInfo.default()
