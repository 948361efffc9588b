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
"""Structural proxy cache keys."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from flyproxy.interception.filter import DefaultInterceptionFilter, InterceptionFilter
from flyproxy.proxy import Proxy


@dataclass(frozen=True)
class ProxyGenerationOptions:
    """Options that change the generated type for an otherwise equal shape."""

    interception_filter: InterceptionFilter = field(default_factory=DefaultInterceptionFilter)


@dataclass(frozen=True)
class ProxyCacheKey:
    """Base type + unordered interface set + generation options.

    Interface order never affects equality or hashing, even though the
    template keeps declaration order for traversal.
    """

    base_type: type | None
    interfaces: frozenset[type]
    options: ProxyGenerationOptions = field(default_factory=ProxyGenerationOptions)

    @classmethod
    def create(
        cls,
        base_type: type | None = None,
        interfaces: Iterable[type] = (),
        options: ProxyGenerationOptions | None = None,
    ) -> ProxyCacheKey:
        return cls(base_type, frozenset(interfaces), options or ProxyGenerationOptions())

    def matches(self, proxy: Proxy) -> bool:
        """True if *proxy* has the structure this key describes."""
        template = proxy.template
        if template.base_type is not self.base_type:
            return False
        return all(template.implements(i) for i in self.interfaces)

    def __str__(self) -> str:
        base = _name(self.base_type) if self.base_type is not None else "-"
        interfaces = ",".join(sorted(_name(i) for i in self.interfaces))
        return f"{base}[{interfaces}]"


def _name(cls: object) -> str:
    return getattr(cls, "__qualname__", None) or repr(cls)
