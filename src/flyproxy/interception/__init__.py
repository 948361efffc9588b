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
"""Interception — filters, invocations and interceptors."""

from flyproxy.interception.decorators import is_non_intercepted, non_intercepted
from flyproxy.interception.filter import (
    DefaultInterceptionFilter,
    InterceptionFilter,
    NonInterceptionFilter,
    PointcutInterceptionFilter,
)
from flyproxy.interception.interceptors import LoggingInterceptor
from flyproxy.interception.invocation import Interceptor, Invocation, MethodInterceptor, as_interceptor
from flyproxy.interception.pointcut import matches_pointcut

__all__ = [
    "DefaultInterceptionFilter",
    "InterceptionFilter",
    "Interceptor",
    "Invocation",
    "LoggingInterceptor",
    "MethodInterceptor",
    "NonInterceptionFilter",
    "PointcutInterceptionFilter",
    "as_interceptor",
    "is_non_intercepted",
    "matches_pointcut",
    "non_intercepted",
]
