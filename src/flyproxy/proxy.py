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
"""Proxy — a generated proxy type with its template and intercepted members."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from flyproxy.emit import dispatch
from flyproxy.interception.invocation import Interceptor, as_interceptor
from flyproxy.reflection.members import EventInfo, MemberInfo, MethodInfo, PropertyInfo
from flyproxy.template.proxy_template import ProxyTemplate


class ProxyAttribute:
    """Marker attached to every generated proxy type."""

    def __repr__(self) -> str:
        return "ProxyAttribute()"


@dataclass(frozen=True)
class Proxy:
    """A generated proxy type, shared read-only by all instances drawn from it.

    Attributes:
        template: The shape the type was generated from.
        proxy_type: The generated class.
        events: Events routed through the interceptor chain.
        properties: Properties routed through the interceptor chain.
        methods: Methods routed through the interceptor chain.
    """

    template: ProxyTemplate
    proxy_type: type
    events: tuple[EventInfo, ...] = ()
    properties: tuple[PropertyInfo, ...] = ()
    methods: tuple[MethodInfo, ...] = ()

    def create_instance(
        self,
        *interceptors: Interceptor,
        target: Any = None,
        args: tuple[Any, ...] = (),
        kwargs: dict[str, Any] | None = None,
    ) -> Any:
        """Instantiate the proxy type bound to *target* and *interceptors*.

        *args* and *kwargs* go to the constructor. The interceptor chain is
        in place before the constructor runs.
        """
        kwargs = kwargs or {}
        chain = tuple(as_interceptor(i) for i in interceptors)

        new = self.proxy_type.__new__
        if new is object.__new__:
            instance = new(self.proxy_type)
        else:
            instance = new(self.proxy_type, *args, **kwargs)

        dispatch.bind_state(instance, target, chain)
        instance.__init__(*args, **kwargs)
        return instance

    def is_intercepted(self, member: MemberInfo) -> bool:
        return member in self.events or member in self.properties or member in self.methods

    @property
    def intercepted_names(self) -> tuple[str, ...]:
        return tuple(m.name for m in (*self.events, *self.properties, *self.methods))


def is_proxy_type(cls: Any) -> bool:
    """True if *cls* is a type generated by a proxy generator."""
    if not isinstance(cls, type):
        return False
    return any(isinstance(a, ProxyAttribute) for a in getattr(cls, dispatch.ATTRIBUTES_ATTR, ()))


def is_proxy(obj: Any) -> bool:
    """True if *obj* is an instance of a generated proxy type."""
    return is_proxy_type(type(obj))


def get_proxy_target(obj: Any) -> Any:
    """The target a proxy instance forwards to (``None`` if it has none)."""
    if not is_proxy(obj):
        raise TypeError(f"{obj!r} is not a proxy")
    return dispatch.get_state(obj)[0]
