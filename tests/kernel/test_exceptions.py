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
"""Tests for the FlyProxy exception hierarchy."""

import pytest

from flyproxy.kernel import (
    BackendFailureException,
    CacheKeyCollisionException,
    FlyProxyException,
    InvalidTemplateException,
    NotImplementedException,
    ProxyGenerationException,
    UnsupportedMemberException,
)


class TestFlyProxyException:
    def test_basic_creation(self):
        exc = FlyProxyException("something went wrong")
        assert str(exc) == "something went wrong"
        assert exc.code is None
        assert exc.context == {}

    def test_with_error_code(self):
        exc = FlyProxyException("bad shape", code="PROXY_CUSTOM")
        assert exc.code == "PROXY_CUSTOM"

    def test_with_context(self):
        exc = FlyProxyException("bad shape", context={"member": "greet"})
        assert exc.context["member"] == "greet"

    def test_context_defaults_to_empty_dict(self):
        exc = FlyProxyException("test")
        exc.context["key"] = "value"
        exc2 = FlyProxyException("test2")
        assert exc2.context == {}


class TestExceptionCodes:
    @pytest.mark.parametrize(
        ("exc_type", "code"),
        [
            (InvalidTemplateException, "PROXY_INVALID_TEMPLATE"),
            (UnsupportedMemberException, "PROXY_UNSUPPORTED_MEMBER"),
            (BackendFailureException, "PROXY_BACKEND_FAILURE"),
            (CacheKeyCollisionException, "PROXY_CACHE_KEY_COLLISION"),
            (NotImplementedException, "PROXY_NOT_IMPLEMENTED"),
        ],
    )
    def test_fixed_code(self, exc_type, code):
        exc = exc_type("failure", context={"member": "greet"})
        assert exc.code == code
        assert exc.context == {"member": "greet"}


class TestExceptionHierarchy:
    def test_generation_errors_share_a_parent(self):
        for exc_type in (InvalidTemplateException, UnsupportedMemberException, BackendFailureException):
            assert issubclass(exc_type, ProxyGenerationException)

    def test_cache_and_invocation_errors_are_not_generation_errors(self):
        assert not issubclass(CacheKeyCollisionException, ProxyGenerationException)
        assert not issubclass(NotImplementedException, ProxyGenerationException)

    def test_not_implemented_is_distinct_from_builtin(self):
        assert not issubclass(NotImplementedException, NotImplementedError)

    def test_catch_all_flyproxy_exceptions(self):
        exceptions = [
            InvalidTemplateException("bad"),
            UnsupportedMemberException("unsupported"),
            BackendFailureException("backend"),
            CacheKeyCollisionException("collision"),
            NotImplementedException("missing"),
        ]
        for exc in exceptions:
            with pytest.raises(FlyProxyException) as caught:
                raise exc
            assert caught.value is exc
