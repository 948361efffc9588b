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
"""Proxy subsystem configuration properties."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from flyproxy.core.config import config_properties


class ProxyCacheProperties(BaseModel):
    """Proxy type cache settings (flyproxy.proxy.cache.*)."""

    enabled: bool = True


class InterceptionProperties(BaseModel):
    """Default interception policy (flyproxy.proxy.interception.*)."""

    filter: Literal["default", "none"] = "default"
    pointcut: str | None = None


@config_properties(prefix="flyproxy.proxy")
class ProxyProperties(BaseModel):
    """Configuration for proxy generation (flyproxy.proxy.*)."""

    cache: ProxyCacheProperties = Field(default_factory=ProxyCacheProperties)
    interception: InterceptionProperties = Field(default_factory=InterceptionProperties)
