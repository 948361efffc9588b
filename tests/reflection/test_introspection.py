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
"""Tests for TypeDescriptor."""

import gc
import weakref
from abc import ABC, abstractmethod
from typing import Protocol

from flyproxy.reflection import EventInfo, MethodInfo, MethodKind, PropertyInfo, event
from flyproxy.reflection.introspection import TypeDescriptor


class Repository(ABC):
    saved = event()

    def __init__(self, name: str) -> None:
        self.name = name

    @abstractmethod
    def find(self, key: str) -> object: ...

    def count(self) -> int:
        return 0

    @property
    def size(self) -> int:
        return self.count()

    @classmethod
    def create(cls, name: str) -> "Repository":
        return cls(name)

    @staticmethod
    def version() -> int:
        return 1

    def __repr__(self) -> str:
        return "Repository()"

    limit = 10


class CachedRepository(Repository):
    def find(self, key: str) -> object:
        return key

    def evict(self) -> None:
        pass


class Readable(Protocol):
    def read(self) -> bytes: ...


class TestTypeDescriptor:
    def test_local_members_follow_declaration_order(self):
        names = [m.name for m in TypeDescriptor.for_type(Repository).local_members]
        assert names == ["saved", "find", "count", "size", "create", "version", "__repr__"]

    def test_member_kinds(self):
        members = {m.name: m for m in TypeDescriptor.for_type(Repository).local_members}
        assert isinstance(members["saved"], EventInfo)
        assert isinstance(members["size"], PropertyInfo)
        assert isinstance(members["find"], MethodInfo)
        assert members["create"].kind is MethodKind.CLASS
        assert members["version"].kind is MethodKind.STATIC

    def test_structural_names_are_excluded(self):
        names = {m.name for m in TypeDescriptor.for_type(Repository).local_members}
        assert "__init__" not in names
        assert "limit" not in names

    def test_members_merge_hierarchy_most_derived_first(self):
        members = TypeDescriptor.for_type(CachedRepository).members()
        names = [m.name for m in members]
        assert names[:2] == ["find", "evict"]
        assert names.count("find") == 1
        find = next(m for m in members if m.name == "find")
        assert find.declaring_type is CachedRepository

    def test_get_member(self):
        descriptor = TypeDescriptor.for_type(CachedRepository)
        assert descriptor.get_member("count").declaring_type is Repository
        assert descriptor.get_member("missing") is None

    def test_for_type_is_cached(self):
        assert TypeDescriptor.for_type(Repository) is TypeDescriptor.for_type(Repository)

    def test_described_classes_stay_cached(self):
        class Transient:
            def run(self) -> None: ...

        descriptor_id = id(TypeDescriptor.for_type(Transient))
        class_ref = weakref.ref(Transient)
        del Transient
        gc.collect()

        assert class_ref() is not None
        assert id(TypeDescriptor.for_type(class_ref())) == descriptor_id

    def test_infrastructure_types_are_skipped(self):
        assert [d.cls for d in TypeDescriptor.for_type(CachedRepository).super_types] == [Repository]


class TestConstructor:
    def test_inherited_constructor(self):
        constructor = TypeDescriptor.for_type(CachedRepository).constructor()
        assert constructor.declaring_type is Repository
        assert list(constructor.signature.parameters) == ["name"]

    def test_default_constructor(self):
        class Plain:
            pass

        assert TypeDescriptor.for_type(Plain).constructor().is_default

    def test_protocol_placeholder_is_ignored(self):
        assert TypeDescriptor.for_type(Readable).constructor().is_default
