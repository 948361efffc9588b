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
"""Tests for interception filters and the non_intercepted marker."""

from abc import ABC, abstractmethod
from typing import final

from flyproxy.interception import (
    DefaultInterceptionFilter,
    InterceptionFilter,
    NonInterceptionFilter,
    PointcutInterceptionFilter,
    is_non_intercepted,
    non_intercepted,
)
from flyproxy.reflection import EventInfo, MethodInfo, MethodKind, PropertyInfo, event
from flyproxy.reflection.introspection import TypeDescriptor


class OrderService(ABC):
    placed = event()
    audited = non_intercepted(event())

    @abstractmethod
    def get_order(self, order_id: int) -> dict: ...

    def place_order(self, order: dict) -> None:
        pass

    @non_intercepted
    def describe(self) -> str:
        return "orders"

    @final
    def version(self) -> int:
        return 1

    def _helper(self) -> None:
        pass

    def __len__(self) -> int:
        return 0

    @staticmethod
    def build() -> "OrderService":
        raise NotImplementedError

    @classmethod
    def named(cls, name: str) -> "OrderService":
        raise NotImplementedError

    @property
    def status(self) -> str:
        return "open"

    @property
    @non_intercepted
    def region(self) -> str:
        return "eu"

    @property
    def _secret(self) -> str:
        return "hidden"


def _member(name: str):
    return TypeDescriptor.for_type(OrderService).get_member(name)


class TestDefaultInterceptionFilter:
    filter = DefaultInterceptionFilter()

    def test_conforms_to_protocol(self):
        assert isinstance(self.filter, InterceptionFilter)

    def test_accepts_public_and_dunder_methods(self):
        assert self.filter.accept_method(_member("get_order"))
        assert self.filter.accept_method(_member("place_order"))
        assert self.filter.accept_method(_member("__len__"))

    def test_rejects_private_methods(self):
        assert not self.filter.accept_method(_member("_helper"))

    def test_rejects_structural_methods(self):
        def __setattr__(self, name, value):
            pass

        assert not self.filter.accept_method(MethodInfo(OrderService, "__setattr__", __setattr__))

    def test_rejects_final_methods(self):
        assert not self.filter.accept_method(_member("version"))

    def test_rejects_marked_methods(self):
        assert not self.filter.accept_method(_member("describe"))

    def test_rejects_static_and_class_methods(self):
        assert _member("build").kind is MethodKind.STATIC
        assert not self.filter.accept_method(_member("build"))
        assert not self.filter.accept_method(_member("named"))

    def test_properties(self):
        assert self.filter.accept_property(_member("status"))
        assert not self.filter.accept_property(_member("region"))
        assert not self.filter.accept_property(_member("_secret"))

    def test_events(self):
        assert self.filter.accept_event(_member("placed"))
        assert not self.filter.accept_event(_member("audited"))

    def test_filters_are_hashable_values(self):
        assert DefaultInterceptionFilter() == DefaultInterceptionFilter()
        assert hash(DefaultInterceptionFilter()) == hash(DefaultInterceptionFilter())
        assert DefaultInterceptionFilter() != NonInterceptionFilter()


class TestNonInterceptionFilter:
    def test_rejects_everything(self):
        f = NonInterceptionFilter()
        members = TypeDescriptor.for_type(OrderService).members()
        assert not any(
            f.accept_event(m) if isinstance(m, EventInfo)
            else f.accept_property(m) if isinstance(m, PropertyInfo)
            else f.accept_method(m)
            for m in members
        )


class TestPointcutInterceptionFilter:
    def test_narrows_by_qualified_name(self):
        f = PointcutInterceptionFilter("**.OrderService.get_*")
        assert f.accept_method(_member("get_order"))
        assert not f.accept_method(_member("place_order"))

    def test_keeps_default_rules(self):
        f = PointcutInterceptionFilter("**")
        assert not f.accept_method(_member("describe"))
        assert not f.accept_method(_member("_helper"))

    def test_applies_to_properties_and_events(self):
        f = PointcutInterceptionFilter("**.OrderService.status")
        assert f.accept_property(_member("status"))
        assert not f.accept_event(_member("placed"))

    def test_pattern_is_part_of_equality(self):
        assert PointcutInterceptionFilter("**.a") == PointcutInterceptionFilter("**.a")
        assert PointcutInterceptionFilter("**.a") != PointcutInterceptionFilter("**.b")
        assert PointcutInterceptionFilter() != DefaultInterceptionFilter()


class TestNonInterceptedMarker:
    def test_marks_functions(self):
        assert is_non_intercepted(OrderService.describe)
        assert not is_non_intercepted(OrderService.place_order)

    def test_sees_through_bound_methods(self):
        declaration = vars(OrderService)["audited"]
        info = EventInfo.from_declaration(OrderService, "audited", declaration)
        assert is_non_intercepted(info.adder.function)

    def test_returns_the_member(self):
        def fn(self):
            pass

        assert non_intercepted(fn) is fn
        assert is_non_intercepted(MethodInfo(OrderService, "fn", fn).function)
