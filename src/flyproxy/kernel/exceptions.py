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
"""FlyProxy exception hierarchy.

All errors raised by the generation engine derive from :class:`FlyProxyException`,
which carries a machine-readable error code and a context dict. Exceptions
raised by interceptors or proxy targets are never wrapped.
"""

from __future__ import annotations

# =============================================================================
# Base Exception
# =============================================================================


class FlyProxyException(Exception):
    """Base exception for all FlyProxy errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "PROXY_INVALID_TEMPLATE").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Generation Exceptions
# =============================================================================


class ProxyGenerationException(FlyProxyException):
    """A proxy type could not be generated. Nothing is cached."""


class InvalidTemplateException(ProxyGenerationException):
    """The requested proxy shape is malformed or inconsistent."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="PROXY_INVALID_TEMPLATE", context=context)


class UnsupportedMemberException(ProxyGenerationException):
    """The type builder cannot represent a member or accessor shape."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="PROXY_UNSUPPORTED_MEMBER", context=context)


class BackendFailureException(ProxyGenerationException):
    """A type builder primitive failed while emitting the proxy type."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="PROXY_BACKEND_FAILURE", context=context)


# =============================================================================
# Cache Exceptions
# =============================================================================


class CacheKeyCollisionException(FlyProxyException):
    """Two different proxy shapes resolved to the same cache key.

    Signals a key canonicalization bug; not recoverable by the caller.
    """

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="PROXY_CACHE_KEY_COLLISION", context=context)


# =============================================================================
# Invocation Exceptions
# =============================================================================


class NotImplementedException(FlyProxyException):
    """An invocation proceeded past the last interceptor with nothing to call."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="PROXY_NOT_IMPLEMENTED", context=context)
