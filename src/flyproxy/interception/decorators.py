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
"""Interception markers — opt members out of interception."""

from __future__ import annotations

from typing import Any, TypeVar

T = TypeVar("T")

_NON_INTERCEPTED_ATTR = "__flyproxy_non_intercepted__"


def non_intercepted(member: T) -> T:
    """Exclude a method, property accessor or event from interception.

    The member is still present on generated proxies as a pass-through.

    Usage::

        class Repository(ABC):
            @non_intercepted
            def describe(self) -> str: ...

            @property
            @non_intercepted
            def name(self) -> str: ...

            changed = non_intercepted(event())
    """
    setattr(member, _NON_INTERCEPTED_ATTR, True)
    return member


def is_non_intercepted(member: Any) -> bool:
    """True if *member* (or the function behind a bound method) was marked."""
    if getattr(member, _NON_INTERCEPTED_ATTR, False):
        return True
    return bool(getattr(getattr(member, "__self__", None), _NON_INTERCEPTED_ATTR, False))
