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
"""ProxyFactory — the entry point for generating, caching and instantiating proxies."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

import structlog

from flyproxy.cache.adapters.memory import InMemoryProxyCache
from flyproxy.cache.adapters.noop import NoOpProxyCache
from flyproxy.cache.key import ProxyCacheKey, ProxyGenerationOptions
from flyproxy.cache.ports.outbound import ProxyCache
from flyproxy.config.properties import ProxyProperties
from flyproxy.core.config import Config
from flyproxy.emit.adapters.dynamic import DynamicTypeBuilder
from flyproxy.emit.invocation_factory import InvocationTypeFactory
from flyproxy.emit.ports.outbound import TypeBuilder
from flyproxy.generator import ProxyGenerator
from flyproxy.interception.filter import (
    DefaultInterceptionFilter,
    InterceptionFilter,
    NonInterceptionFilter,
    PointcutInterceptionFilter,
)
from flyproxy.interception.invocation import Interceptor
from flyproxy.proxy import Proxy
from flyproxy.template.proxy_template import ProxyTemplate

logger = structlog.get_logger("flyproxy.factory")

TypeBuilderFactory = Callable[[type | None, InvocationTypeFactory], TypeBuilder]


def _interfaces(interfaces: type | Iterable[type]) -> tuple[type, ...]:
    if isinstance(interfaces, type):
        return (interfaces,)
    return tuple(interfaces)


class ProxyFactory:
    """Generates proxy types on demand and caches them by structural key.

    Usage::

        factory = ProxyFactory()
        greeter = factory.create_proxy(Greeter, lambda inv: f"hello {inv.args[0]}")
        greeter.greet("world")  # "hello world"

    Args:
        cache: Proxy cache; defaults to an :class:`InMemoryProxyCache`.
        interception_filter: Filter used when a call does not pass one.
        type_builder_factory: Creates a fresh type builder per generation
            from the parent type and the shared invocation type factory.
    """

    def __init__(
        self,
        cache: ProxyCache | None = None,
        interception_filter: InterceptionFilter | None = None,
        type_builder_factory: TypeBuilderFactory | None = None,
    ) -> None:
        self._cache: ProxyCache = cache if cache is not None else InMemoryProxyCache()
        self._interception_filter = interception_filter or DefaultInterceptionFilter()
        self._type_builder_factory: TypeBuilderFactory = type_builder_factory or DynamicTypeBuilder
        self._invocation_types = InvocationTypeFactory()

    @classmethod
    def from_config(cls, config: Config) -> ProxyFactory:
        """Build a factory from the ``flyproxy.proxy`` configuration section."""
        properties = config.bind(ProxyProperties)

        cache: ProxyCache = InMemoryProxyCache() if properties.cache.enabled else NoOpProxyCache()

        interception_filter: InterceptionFilter
        if properties.interception.filter == "none":
            interception_filter = NonInterceptionFilter()
        elif properties.interception.pointcut:
            interception_filter = PointcutInterceptionFilter(properties.interception.pointcut)
        else:
            interception_filter = DefaultInterceptionFilter()

        logger.debug(
            "proxy_factory_configured",
            cache=type(cache).__name__,
            interception_filter=type(interception_filter).__name__,
        )
        return cls(cache=cache, interception_filter=interception_filter)

    @property
    def cache(self) -> ProxyCache:
        return self._cache

    @property
    def interception_filter(self) -> InterceptionFilter:
        return self._interception_filter

    def generate_proxy(self, template: ProxyTemplate, interception_filter: InterceptionFilter | None = None) -> Proxy:
        """Generate a proxy for *template* without consulting the cache."""
        type_builder = self._type_builder_factory(template.base_type, self._invocation_types)
        generator = ProxyGenerator(type_builder, interception_filter or self._interception_filter)
        return generator.generate_proxy(template)

    def get_proxy(
        self,
        base_type: type | None = None,
        interfaces: type | Iterable[type] = (),
        interception_filter: InterceptionFilter | None = None,
    ) -> Proxy:
        """Return the cached proxy for this shape, generating it on first request."""
        interface_types = _interfaces(interfaces)
        interception_filter = interception_filter or self._interception_filter
        key = ProxyCacheKey.create(base_type, interface_types, ProxyGenerationOptions(interception_filter))

        def generate() -> Proxy:
            with structlog.contextvars.bound_contextvars(proxy_key=str(key)):
                template = ProxyTemplate.create(base_type, interface_types)
                return self.generate_proxy(template, interception_filter)

        return self._cache.get_or_create(key, generate)

    def create_proxy(
        self,
        interfaces: type | Iterable[type],
        *interceptors: Interceptor,
        base_type: type | None = None,
        target: Any = None,
        args: tuple[Any, ...] = (),
        kwargs: dict[str, Any] | None = None,
        interception_filter: InterceptionFilter | None = None,
    ) -> Any:
        """Get (or generate) the proxy for a shape and instantiate it."""
        proxy = self.get_proxy(base_type, interfaces, interception_filter)
        return proxy.create_instance(*interceptors, target=target, args=args, kwargs=kwargs)

    def create_class_proxy(
        self,
        base_type: type,
        *interceptors: Interceptor,
        interfaces: type | Iterable[type] = (),
        target: Any = None,
        args: tuple[Any, ...] = (),
        kwargs: dict[str, Any] | None = None,
        interception_filter: InterceptionFilter | None = None,
    ) -> Any:
        """Like :meth:`create_proxy`, for proxies deriving from *base_type*."""
        proxy = self.get_proxy(base_type, interfaces, interception_filter)
        return proxy.create_instance(*interceptors, target=target, args=args, kwargs=kwargs)
