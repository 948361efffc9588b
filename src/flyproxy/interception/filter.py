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
"""Interception filters — decide which members of a proxy shape are intercepted.

Filters are pure and hashable: they take part in proxy cache keys, and a
rejection is an answer, never an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from flyproxy.interception.decorators import is_non_intercepted
from flyproxy.interception.pointcut import matches_pointcut
from flyproxy.reflection.introspection import STRUCTURAL_NAMES
from flyproxy.reflection.members import EventInfo, MemberInfo, MethodInfo, MethodKind, PropertyInfo


@runtime_checkable
class InterceptionFilter(Protocol):
    """Per-kind accept/reject policy."""

    def accept_event(self, event_info: EventInfo) -> bool: ...
    def accept_property(self, property_info: PropertyInfo) -> bool: ...
    def accept_method(self, method_info: MethodInfo) -> bool: ...


def _is_excluded(name: str) -> bool:
    if name in STRUCTURAL_NAMES:
        return True
    return name.startswith("_") and not (name.startswith("__") and name.endswith("__"))


@dataclass(frozen=True)
class DefaultInterceptionFilter:
    """Accepts every member a proxy can override.

    Rejects private names, special methods that shape the class itself
    (``__init__``, ``__setattr__``, ...), static and class methods,
    ``typing.final`` members and members marked with :func:`non_intercepted`.
    """

    def accept_event(self, event_info: EventInfo) -> bool:
        return (
            not _is_excluded(event_info.name)
            and not event_info.is_final
            and not is_non_intercepted(event_info.declaration)
        )

    def accept_property(self, property_info: PropertyInfo) -> bool:
        return (
            not _is_excluded(property_info.name)
            and not property_info.is_final
            and not any(is_non_intercepted(a.function) for a in property_info.accessors)
        )

    def accept_method(self, method_info: MethodInfo) -> bool:
        return (
            method_info.kind is MethodKind.INSTANCE
            and not _is_excluded(method_info.name)
            and not method_info.is_final
            and not is_non_intercepted(method_info.function)
        )


@dataclass(frozen=True)
class NonInterceptionFilter:
    """Rejects everything; the proxy forwards every call untouched."""

    def accept_event(self, event_info: EventInfo) -> bool:
        return False

    def accept_property(self, property_info: PropertyInfo) -> bool:
        return False

    def accept_method(self, method_info: MethodInfo) -> bool:
        return False


@dataclass(frozen=True)
class PointcutInterceptionFilter(DefaultInterceptionFilter):
    """Default rules, narrowed to members whose qualified name matches *pattern*.

    Example: ``PointcutInterceptionFilter("**.*Service.get_*")``.
    """

    pattern: str = "**"

    def _matches(self, member: MemberInfo) -> bool:
        return matches_pointcut(self.pattern, member.qualified_name)

    def accept_event(self, event_info: EventInfo) -> bool:
        return super().accept_event(event_info) and self._matches(event_info)

    def accept_property(self, property_info: PropertyInfo) -> bool:
        return super().accept_property(property_info) and self._matches(property_info)

    def accept_method(self, method_info: MethodInfo) -> bool:
        return super().accept_method(method_info) and self._matches(method_info)
