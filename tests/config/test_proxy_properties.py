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
"""Tests for binding the flyproxy.proxy configuration section."""

import pytest

from flyproxy.config import InterceptionProperties, ProxyCacheProperties, ProxyProperties
from flyproxy.core.config import Config


class TestProxyProperties:
    def test_defaults_without_config(self):
        props = Config({}).bind(ProxyProperties)
        assert props.cache == ProxyCacheProperties(enabled=True)
        assert props.interception == InterceptionProperties(filter="default", pointcut=None)

    def test_packaged_defaults_bind(self):
        props = Config.defaults().bind(ProxyProperties)
        assert props.cache.enabled is True
        assert props.interception.filter == "default"

    def test_bind_overrides(self):
        config = Config(
            {
                "flyproxy": {
                    "proxy": {
                        "cache": {"enabled": False},
                        "interception": {"pointcut": "**.*Service.*"},
                    }
                }
            }
        )
        props = config.bind(ProxyProperties)
        assert props.cache.enabled is False
        assert props.interception.pointcut == "**.*Service.*"

    def test_invalid_filter_is_rejected(self):
        config = Config({"flyproxy": {"proxy": {"interception": {"filter": "sometimes"}}}})
        with pytest.raises(ValueError, match="ProxyProperties"):
            config.bind(ProxyProperties)
