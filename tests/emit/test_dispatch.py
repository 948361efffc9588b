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
"""Tests for target forwarding from generated proxies."""

import pytest

from flyproxy.emit import DynamicTypeBuilder, dispatch
from flyproxy.kernel import NotImplementedException
from flyproxy.reflection import event


class Document:
    edited = event()

    def __init__(self) -> None:
        self._title = "untitled"

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, value: str) -> None:
        self._title = value

    @title.deleter
    def title(self) -> None:
        self._title = ""

    def word_count(self) -> int:
        return 0


class RemoteDocument:
    edited = event()

    def __init__(self) -> None:
        self.title = "remote"

    def word_count(self) -> int:
        return 1200


def _proxy(target=None):
    proxy_type = DynamicTypeBuilder(Document).create_type()
    instance = proxy_type.__new__(proxy_type)
    dispatch.bind_state(instance, target, ())
    return instance


class TestState:
    def test_bind_and_get_state(self):
        instance = _proxy(target="target")
        assert dispatch.get_state(instance) == ("target", ())

    def test_proxy_class_of_subclass_instance(self):
        proxy_type = DynamicTypeBuilder(Document).create_type()
        subclass = type("Sub", (proxy_type,), {})
        assert dispatch.proxy_class_of(subclass()) is proxy_type


class TestForwarding:
    def test_target_member_wins(self):
        instance = _proxy(RemoteDocument())
        assert dispatch.call_method(instance, dispatch.get_state(instance)[0], "word_count", (), {}) == 1200

    def test_inherited_member_without_target(self):
        instance = _proxy()
        assert dispatch.call_method(instance, None, "word_count", (), {}) == 0

    def test_missing_member_raises(self):
        instance = _proxy()
        with pytest.raises(NotImplementedException) as exc_info:
            dispatch.call_method(instance, None, "publish", (), {})
        assert exc_info.value.code == "PROXY_NOT_IMPLEMENTED"

    def test_properties_forward_to_target(self):
        target = RemoteDocument()
        instance = _proxy(target)
        assert dispatch.get_property(instance, target, "title") == "remote"
        dispatch.set_property(instance, target, "title", "changed")
        assert target.title == "changed"
        dispatch.delete_property(instance, target, "title")
        assert not hasattr(target, "title")

    def test_properties_fall_back_to_inherited_accessors(self):
        instance = _proxy()
        object.__setattr__(instance, "_title", "local")
        assert dispatch.get_property(instance, None, "title") == "local"
        dispatch.set_property(instance, None, "title", "renamed")
        assert instance._title == "renamed"
        dispatch.delete_property(instance, None, "title")
        assert instance._title == ""

    def test_events_forward_to_target(self):
        target = RemoteDocument()
        instance = _proxy(target)
        seen: list[str] = []
        dispatch.add_handler(instance, target, "edited", seen.append)
        dispatch.fire_event(instance, target, "edited", ("v2",), {})
        target.edited.fire("v3")
        dispatch.remove_handler(instance, target, "edited", seen.append)
        target.edited.fire("v4")
        assert seen == ["v2", "v3"]

    def test_missing_event_raises(self):
        instance = _proxy()
        with pytest.raises(NotImplementedException):
            dispatch.add_handler(instance, None, "published", print)
