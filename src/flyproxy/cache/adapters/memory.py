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
"""In-memory proxy cache with per-key single-flight generation."""

from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import Future

import structlog

from flyproxy.cache.key import ProxyCacheKey
from flyproxy.kernel.exceptions import CacheKeyCollisionException
from flyproxy.proxy import Proxy

logger = structlog.get_logger("flyproxy.cache")


class InMemoryProxyCache:
    """Unbounded in-process cache of generated proxies.

    The first caller for a missing key runs the factory; concurrent callers
    for the same key wait on its future and receive the same proxy (or the
    same exception). The internal lock only guards the dictionaries, so
    generations for different keys run in parallel. A failed generation
    leaves no entry behind; the next call retries.
    """

    def __init__(self) -> None:
        self._entries: dict[ProxyCacheKey, Proxy] = {}
        self._in_flight: dict[ProxyCacheKey, Future[Proxy]] = {}
        self._lock = threading.Lock()

    def contains(self, key: ProxyCacheKey) -> bool:
        with self._lock:
            return key in self._entries

    def get_or_create(self, key: ProxyCacheKey, factory: Callable[[], Proxy]) -> Proxy:
        with self._lock:
            proxy = self._entries.get(key)
            if proxy is None:
                future = self._in_flight.get(key)
                owner = future is None
                if owner:
                    future = Future()
                    self._in_flight[key] = future

        if proxy is not None:
            self._check(key, proxy)
            logger.debug("proxy_cache_hit", key=str(key))
            return proxy

        if not owner:
            logger.debug("proxy_cache_wait", key=str(key))
            return future.result()

        try:
            logger.debug("proxy_cache_miss", key=str(key))
            proxy = factory()
            self._check(key, proxy)
        except BaseException as exc:
            with self._lock:
                del self._in_flight[key]
            future.set_exception(exc)
            raise

        with self._lock:
            self._entries[key] = proxy
            del self._in_flight[key]
        future.set_result(proxy)
        return proxy

    def store(self, key: ProxyCacheKey, proxy: Proxy) -> None:
        self._check(key, proxy)
        with self._lock:
            self._entries[key] = proxy

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @staticmethod
    def _check(key: ProxyCacheKey, proxy: Proxy) -> None:
        if not key.matches(proxy):
            raise CacheKeyCollisionException(
                f"Cache key {key} does not describe proxy type {proxy.proxy_type.__qualname__}",
                context={"key": str(key), "proxy_type": proxy.proxy_type.__qualname__},
            )
