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
"""Proxy cache protocol."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable

from flyproxy.cache.key import ProxyCacheKey
from flyproxy.proxy import Proxy


@runtime_checkable
class ProxyCache(Protocol):
    """Memoizes generated proxies by structural key.

    ``get_or_create`` must run *factory* at most once per key, also under
    concurrent calls, and must never keep an entry for a failed factory.
    """

    def contains(self, key: ProxyCacheKey) -> bool: ...

    def get_or_create(self, key: ProxyCacheKey, factory: Callable[[], Proxy]) -> Proxy: ...

    def store(self, key: ProxyCacheKey, proxy: Proxy) -> None: ...

    def clear(self) -> None: ...
