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
"""ProxyGenerator — walks a template and drives a type builder."""

from __future__ import annotations

import structlog

from flyproxy.emit.ports.outbound import TypeBuilder
from flyproxy.interception.filter import InterceptionFilter
from flyproxy.kernel.exceptions import BackendFailureException, FlyProxyException, ProxyGenerationException
from flyproxy.proxy import Proxy, ProxyAttribute
from flyproxy.reflection.members import ConstructorInfo, EventInfo, MethodInfo, PropertyInfo
from flyproxy.template.proxy_template import ProxyTemplate

logger = structlog.get_logger("flyproxy.generator")


class ProxyGenerator:
    """Generates one proxy from one template.

    Interfaces and constructors always reach the type builder. Events,
    properties and methods reach it only when the interception filter
    accepts them; accepted members are recorded on the resulting
    :class:`Proxy`. Generation is all-or-nothing, and a generator is single
    use because its type builder is.
    """

    def __init__(self, type_builder: TypeBuilder, interception_filter: InterceptionFilter) -> None:
        if type_builder is None:
            raise ValueError("type_builder is required")
        if interception_filter is None:
            raise ValueError("interception_filter is required")

        self._type_builder = type_builder
        self._interception_filter = interception_filter
        self._events: list[EventInfo] = []
        self._properties: list[PropertyInfo] = []
        self._methods: list[MethodInfo] = []
        self._used = False

    def generate_proxy(self, template: ProxyTemplate) -> Proxy:
        if template is None:
            raise ValueError("template is required")
        if self._used:
            raise ProxyGenerationException("ProxyGenerator instances generate exactly one proxy")
        self._used = True

        try:
            self._type_builder.add_custom_attribute(ProxyAttribute)
            template.accept_visitor(self)
            proxy_type = self._type_builder.create_type()
        except FlyProxyException as exc:
            logger.warning(
                "proxy_generation_failed",
                base_type=_name(template.base_type),
                interfaces=[i.__qualname__ for i in template.interfaces],
                error=str(exc),
                error_code=exc.code,
            )
            raise
        except Exception as exc:
            logger.warning(
                "proxy_generation_failed",
                base_type=_name(template.base_type),
                interfaces=[i.__qualname__ for i in template.interfaces],
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise BackendFailureException(
                f"Type builder failed: {exc}",
                context={"base_type": _name(template.base_type), "error_type": type(exc).__name__},
            ) from exc

        logger.debug(
            "proxy_generated",
            proxy_type=proxy_type.__qualname__,
            events=len(self._events),
            properties=len(self._properties),
            methods=len(self._methods),
        )
        return Proxy(template, proxy_type, tuple(self._events), tuple(self._properties), tuple(self._methods))

    # ProxyTemplateVisitor

    def visit_interface(self, interface_type: type) -> None:
        self._type_builder.add_interface(interface_type)

    def visit_constructor(self, constructor_info: ConstructorInfo) -> None:
        self._type_builder.build_constructor(constructor_info)

    def visit_event(self, event_info: EventInfo) -> None:
        if not self._interception_filter.accept_event(event_info):
            return

        self._type_builder.build_event(event_info)
        self._events.append(event_info)

    def visit_property(self, property_info: PropertyInfo) -> None:
        if not self._interception_filter.accept_property(property_info):
            return

        self._type_builder.build_property(property_info)
        self._properties.append(property_info)

    def visit_method(self, method_info: MethodInfo) -> None:
        if not self._interception_filter.accept_method(method_info):
            return

        self._type_builder.build_method(method_info)
        self._methods.append(method_info)


def _name(cls: type | None) -> str | None:
    return cls.__qualname__ if cls is not None else None
