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
"""ProxyTemplate — immutable description of a proxy shape and its traversal.

Traversal yields tagged members in a fixed order: interfaces (declaration
order, inherited interfaces following the one that brought them in), then
constructors, events, properties and methods. Within one member kind,
interface members come first, then base-type members in MRO order.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Protocol, Union, runtime_checkable

from flyproxy.kernel.exceptions import InvalidTemplateException
from flyproxy.reflection.introspection import TypeDescriptor
from flyproxy.reflection.members import (
    ConstructorInfo,
    EventInfo,
    MemberInfo,
    MethodInfo,
    PropertyInfo,
)

# =============================================================================
# Traversal variants
# =============================================================================


@dataclass(frozen=True)
class InterfaceMember:
    interface_type: type


@dataclass(frozen=True)
class ConstructorMember:
    constructor: ConstructorInfo


@dataclass(frozen=True)
class EventMember:
    event: EventInfo


@dataclass(frozen=True)
class PropertyMember:
    property: PropertyInfo


@dataclass(frozen=True)
class MethodMember:
    method: MethodInfo


TemplateMember = Union[InterfaceMember, ConstructorMember, EventMember, PropertyMember, MethodMember]


@runtime_checkable
class ProxyTemplateVisitor(Protocol):
    """Receives one callback per template element, in traversal order."""

    def visit_interface(self, interface_type: type) -> None: ...
    def visit_constructor(self, constructor_info: ConstructorInfo) -> None: ...
    def visit_event(self, event_info: EventInfo) -> None: ...
    def visit_property(self, property_info: PropertyInfo) -> None: ...
    def visit_method(self, method_info: MethodInfo) -> None: ...


# =============================================================================
# Template
# =============================================================================


def _kind(member: MemberInfo) -> str:
    return type(member).__name__.removesuffix("Info").lower()


def _overrides(member: MemberInfo, other: MemberInfo) -> bool:
    """True when *member* is declared on a strict subclass of *other*'s declaring type."""
    return member.declaring_type is not other.declaring_type and issubclass(
        member.declaring_type, other.declaring_type
    )


@dataclass(frozen=True)
class ProxyTemplate:
    """The requested shape: base type, interfaces and pre-resolved members."""

    base_type: type | None
    interfaces: tuple[type, ...] = ()
    constructors: tuple[ConstructorInfo, ...] = ()
    events: tuple[EventInfo, ...] = ()
    properties: tuple[PropertyInfo, ...] = ()
    methods: tuple[MethodInfo, ...] = ()

    def __post_init__(self) -> None:
        if self.base_type is not None and not isinstance(self.base_type, type):
            raise InvalidTemplateException(
                f"Base type must be a class, got {self.base_type!r}",
                context={"base_type": repr(self.base_type)},
            )
        for interface_type in self.interfaces:
            if not isinstance(interface_type, type):
                raise InvalidTemplateException(
                    f"Interface must be a class, got {interface_type!r}",
                    context={"interface": repr(interface_type)},
                )
        if len(set(self.interfaces)) != len(self.interfaces):
            raise InvalidTemplateException("Interfaces must not repeat")

        seen: dict[str, str] = {}
        for member in (*self.events, *self.properties, *self.methods):
            if member.declaring_type is None:
                raise InvalidTemplateException(
                    f"Member '{member.name}' has no declaring type",
                    context={"member": member.name},
                )
            kind = _kind(member)
            previous = seen.get(member.name)
            if previous is not None and previous != kind:
                raise InvalidTemplateException(
                    f"Member '{member.name}' is declared both as {previous} and as {kind}",
                    context={"member": member.name, "kinds": [previous, kind]},
                )
            if previous is not None:
                raise InvalidTemplateException(
                    f"Member '{member.name}' is declared more than once",
                    context={"member": member.name},
                )
            seen[member.name] = kind

    @classmethod
    def create(cls, base_type: type | None = None, interfaces: Iterable[type] = ()) -> ProxyTemplate:
        """Resolve the members of *base_type* and *interfaces* into a template."""
        if base_type is not None:
            if not isinstance(base_type, type):
                raise InvalidTemplateException(
                    f"Base type must be a class, got {base_type!r}",
                    context={"base_type": repr(base_type)},
                )
            if getattr(base_type, "__final__", False):
                raise InvalidTemplateException(
                    f"Cannot derive a proxy from final class {base_type.__qualname__}",
                    context={"base_type": base_type.__qualname__},
                )

        resolved = cls._expand_interfaces(base_type, interfaces)

        members: dict[str, MemberInfo] = {}
        sources = [m for i in resolved for m in TypeDescriptor.for_type(i).local_members]
        if base_type is not None:
            sources.extend(TypeDescriptor.for_type(base_type).members())

        for member in sources:
            existing = members.get(member.name)
            if existing is None:
                members[member.name] = member
            elif _overrides(member, existing):
                members[member.name] = member
            elif _overrides(existing, member):
                continue
            elif _kind(existing) != _kind(member):
                raise InvalidTemplateException(
                    f"Member '{member.name}' of {member.declaring_type.__qualname__} conflicts with "
                    f"{_kind(existing)} of {existing.declaring_type.__qualname__}",
                    context={"member": member.name},
                )

        constructor = (
            TypeDescriptor.for_type(base_type).constructor() if base_type is not None else ConstructorInfo.default()
        )

        return cls(
            base_type=base_type,
            interfaces=tuple(resolved),
            constructors=(constructor,),
            events=tuple(m for m in members.values() if isinstance(m, EventInfo)),
            properties=tuple(m for m in members.values() if isinstance(m, PropertyInfo)),
            methods=tuple(m for m in members.values() if isinstance(m, MethodInfo)),
        )

    @staticmethod
    def _expand_interfaces(base_type: type | None, interfaces: Iterable[type]) -> list[type]:
        resolved: list[type] = []
        for interface_type in interfaces:
            if not isinstance(interface_type, type):
                raise InvalidTemplateException(
                    f"Interface must be a class, got {interface_type!r}",
                    context={"interface": repr(interface_type)},
                )
            if interface_type is base_type:
                continue
            for candidate in interface_type.__mro__:
                if TypeDescriptor.is_infrastructure(candidate) or candidate in resolved:
                    continue
                if base_type is not None and candidate in base_type.__mro__:
                    continue
                resolved.append(candidate)

        return resolved

    # traversal

    def traverse(self) -> Iterator[TemplateMember]:
        """Yield every element of the template, unfiltered, in a stable order."""
        for interface_type in self.interfaces:
            yield InterfaceMember(interface_type)
        for constructor_info in self.constructors:
            yield ConstructorMember(constructor_info)
        for event_info in self.events:
            yield EventMember(event_info)
        for property_info in self.properties:
            yield PropertyMember(property_info)
        for method_info in self.methods:
            yield MethodMember(method_info)

    def accept_visitor(self, visitor: ProxyTemplateVisitor) -> None:
        for element in self.traverse():
            if isinstance(element, InterfaceMember):
                visitor.visit_interface(element.interface_type)
            elif isinstance(element, ConstructorMember):
                visitor.visit_constructor(element.constructor)
            elif isinstance(element, EventMember):
                visitor.visit_event(element.event)
            elif isinstance(element, PropertyMember):
                visitor.visit_property(element.property)
            else:
                visitor.visit_method(element.method)

    # introspection

    @property
    def parent_type(self) -> type:
        """The class the proxy type derives from: the base type or ``object``."""
        return self.base_type if self.base_type is not None else object

    @property
    def member_names(self) -> tuple[str, ...]:
        return tuple(m.name for m in (*self.events, *self.properties, *self.methods))

    def implements(self, interface_type: type) -> bool:
        if interface_type in self.interfaces:
            return True
        return self.base_type is not None and issubclass(self.base_type, interface_type)
