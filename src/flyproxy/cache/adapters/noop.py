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
"""Cache that never caches — every request generates a fresh proxy."""

from __future__ import annotations

from collections.abc import Callable

from flyproxy.cache.key import ProxyCacheKey
from flyproxy.proxy import Proxy


class NoOpProxyCache:
    """Isolates generation cost from caching effects, e.g. in benchmarks."""

    def contains(self, key: ProxyCacheKey) -> bool:
        return False

    def get_or_create(self, key: ProxyCacheKey, factory: Callable[[], Proxy]) -> Proxy:
        return factory()

    def store(self, key: ProxyCacheKey, proxy: Proxy) -> None:
        pass

    def clear(self) -> None:
        pass
