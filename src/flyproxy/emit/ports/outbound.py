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
"""Type builder port — the primitives a proxy generator drives."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from flyproxy.reflection.members import ConstructorInfo, EventInfo, MethodInfo, PropertyInfo


@runtime_checkable
class TypeBuilder(Protocol):
    """Materializes one proxy type. Single use: ``create_type`` ends it.

    ``build_event``, ``build_property`` and ``build_method`` emit the
    intercepted version of a member. Members of the parent type and
    interfaces that are never built are the builder's concern.
    """

    def add_interface(self, interface_type: type) -> None: ...

    def add_custom_attribute(self, attribute_type: type) -> None: ...

    def build_constructor(self, constructor_info: ConstructorInfo) -> None: ...

    def build_event(self, event_info: EventInfo) -> None: ...

    def build_property(self, property_info: PropertyInfo) -> None: ...

    def build_method(self, method_info: MethodInfo) -> None: ...

    def create_type(self) -> type: ...
