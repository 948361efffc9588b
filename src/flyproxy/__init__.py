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
"""FlyProxy — runtime proxy generation with call interception.

Generates classes implementing a set of interfaces and/or deriving from a
base class, routes their events, properties and methods through an
interceptor chain, and caches generated classes by structural key.
"""

from flyproxy.cache import InMemoryProxyCache, NoOpProxyCache, ProxyCache, ProxyCacheKey, ProxyGenerationOptions
from flyproxy.emit import DynamicTypeBuilder, InvocationTypeFactory, TypeBuilder
from flyproxy.factory import ProxyFactory
from flyproxy.generator import ProxyGenerator
from flyproxy.interception import (
    DefaultInterceptionFilter,
    InterceptionFilter,
    Interceptor,
    Invocation,
    LoggingInterceptor,
    MethodInterceptor,
    NonInterceptionFilter,
    PointcutInterceptionFilter,
    non_intercepted,
)
from flyproxy.kernel import (
    BackendFailureException,
    CacheKeyCollisionException,
    FlyProxyException,
    InvalidTemplateException,
    NotImplementedException,
    ProxyGenerationException,
    UnsupportedMemberException,
)
from flyproxy.proxy import Proxy, ProxyAttribute, get_proxy_target, is_proxy, is_proxy_type
from flyproxy.reflection import BoundEvent, ConstructorInfo, EventInfo, MethodInfo, PropertyInfo, event
from flyproxy.template import ProxyTemplate

__version__ = "0.1.0"

__all__ = [
    # Factory
    "ProxyFactory",
    "ProxyGenerator",
    "Proxy",
    "ProxyAttribute",
    "ProxyTemplate",
    "get_proxy_target",
    "is_proxy",
    "is_proxy_type",
    # Interception
    "DefaultInterceptionFilter",
    "InterceptionFilter",
    "Interceptor",
    "Invocation",
    "LoggingInterceptor",
    "MethodInterceptor",
    "NonInterceptionFilter",
    "PointcutInterceptionFilter",
    "non_intercepted",
    # Reflection
    "BoundEvent",
    "ConstructorInfo",
    "EventInfo",
    "MethodInfo",
    "PropertyInfo",
    "event",
    # Emission
    "DynamicTypeBuilder",
    "InvocationTypeFactory",
    "TypeBuilder",
    # Cache
    "InMemoryProxyCache",
    "NoOpProxyCache",
    "ProxyCache",
    "ProxyCacheKey",
    "ProxyGenerationOptions",
    # Exceptions
    "FlyProxyException",
    "ProxyGenerationException",
    "InvalidTemplateException",
    "UnsupportedMemberException",
    "BackendFailureException",
    "CacheKeyCollisionException",
    "NotImplementedException",
]
