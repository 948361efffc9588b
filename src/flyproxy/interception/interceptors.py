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
"""Stock interceptors."""

from __future__ import annotations

import inspect
import time
from typing import Any

import structlog

from flyproxy.interception.invocation import Invocation

logger = structlog.get_logger("flyproxy.interception")


class LoggingInterceptor:
    """Logs member name and duration of each call, and failures with their error type."""

    def __init__(self, logger_name: str | None = None) -> None:
        self._logger = structlog.get_logger(logger_name) if logger_name else logger

    def intercept(self, invocation: Invocation) -> Any:
        start = time.perf_counter()
        try:
            result = invocation.proceed()
        except Exception as exc:
            self._failed(invocation, start, exc)
            raise

        if inspect.isawaitable(result):
            return self._await(invocation, start, result)

        self._completed(invocation, start)
        return result

    async def _await(self, invocation: Invocation, start: float, result: Any) -> Any:
        try:
            value = await result
        except Exception as exc:
            self._failed(invocation, start, exc)
            raise
        self._completed(invocation, start)
        return value

    def _completed(self, invocation: Invocation, start: float) -> None:
        self._logger.info(
            "proxy_invocation",
            member=invocation.member.qualified_name,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
        )

    def _failed(self, invocation: Invocation, start: float, exc: Exception) -> None:
        self._logger.error(
            "proxy_invocation_failed",
            member=invocation.member.qualified_name,
            duration_ms=round((time.perf_counter() - start) * 1000, 2),
            error=str(exc),
            error_type=type(exc).__name__,
        )
