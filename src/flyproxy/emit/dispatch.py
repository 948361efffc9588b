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
"""Runtime plumbing shared by generated proxy members.

Holds the per-instance proxy state and the forwarding rules used when an
invocation reaches the end of its chain, or when a member was not
intercepted at all: the target's member if the target has one, otherwise
the implementation inherited from the proxy's parent classes, otherwise
:class:`~flyproxy.kernel.exceptions.NotImplementedException`.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

from flyproxy.kernel.exceptions import NotImplementedException
from flyproxy.reflection.events import event

TARGET_ATTR = "__flyproxy_target__"
INTERCEPTORS_ATTR = "__flyproxy_interceptors__"
ATTRIBUTES_ATTR = "__flyproxy_attributes__"

_MISSING = object()


# =============================================================================
# Proxy state
# =============================================================================


def bind_state(instance: Any, target: Any, interceptors: tuple[Callable[..., Any], ...]) -> None:
    object.__setattr__(instance, TARGET_ATTR, target)
    object.__setattr__(instance, INTERCEPTORS_ATTR, interceptors)


def get_state(instance: Any) -> tuple[Any, tuple[Callable[..., Any], ...]]:
    return getattr(instance, TARGET_ATTR, None), getattr(instance, INTERCEPTORS_ATTR, ())


def proxy_class_of(instance: Any) -> type:
    """The generated proxy class in the MRO of *instance*'s type."""
    for cls in type(instance).__mro__:
        if ATTRIBUTES_ATTR in vars(cls):
            return cls
    return type(instance)


def inherited_attribute(instance: Any, name: str) -> Any:
    """Raw class attribute *name* as defined above the proxy class, or ``None``."""
    for cls in proxy_class_of(instance).__mro__[1:]:
        if name in vars(cls):
            return vars(cls)[name]
    return None


def _has_member(target: Any, name: str) -> bool:
    return target is not None and inspect.getattr_static(target, name, _MISSING) is not _MISSING


def _unimplemented(instance: Any, name: str) -> NotImplementedException:
    owner = proxy_class_of(instance).__qualname__
    return NotImplementedException(
        f"{owner}.{name} has no target and no inherited implementation",
        context={"proxy_type": owner, "member": name},
    )


def _abstract(fn: Any) -> bool:
    return fn is None or bool(getattr(fn, "__isabstractmethod__", False))


# =============================================================================
# Forwarding
# =============================================================================


def call_method(instance: Any, target: Any, name: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
    if _has_member(target, name):
        return getattr(target, name)(*args, **kwargs)

    impl = inherited_attribute(instance, name)
    if _abstract(impl) or not hasattr(impl, "__get__"):
        raise _unimplemented(instance, name)
    return impl.__get__(instance, type(instance))(*args, **kwargs)


def _inherited_property(instance: Any, name: str) -> property | None:
    prop = inherited_attribute(instance, name)
    return prop if isinstance(prop, property) else None


def get_property(instance: Any, target: Any, name: str) -> Any:
    if _has_member(target, name):
        return getattr(target, name)

    prop = _inherited_property(instance, name)
    if prop is None or _abstract(prop.fget):
        raise _unimplemented(instance, name)
    return prop.fget(instance)  # type: ignore[misc]


def set_property(instance: Any, target: Any, name: str, value: Any) -> None:
    if _has_member(target, name):
        setattr(target, name, value)
        return

    prop = _inherited_property(instance, name)
    if prop is None or _abstract(prop.fset):
        raise _unimplemented(instance, name)
    prop.fset(instance, value)  # type: ignore[misc]


def delete_property(instance: Any, target: Any, name: str) -> None:
    if _has_member(target, name):
        delattr(target, name)
        return

    prop = _inherited_property(instance, name)
    if prop is None or _abstract(prop.fdel):
        raise _unimplemented(instance, name)
    prop.fdel(instance)  # type: ignore[misc]


def _inherited_event(instance: Any, name: str) -> event:
    declaration = inherited_attribute(instance, name)
    if not isinstance(declaration, event):
        raise _unimplemented(instance, name)
    return declaration


def add_handler(instance: Any, target: Any, name: str, handler: Callable[..., Any]) -> None:
    if _has_member(target, name):
        getattr(target, name).add(handler)
        return
    _inherited_event(instance, name).add(instance, handler)


def remove_handler(instance: Any, target: Any, name: str, handler: Callable[..., Any]) -> None:
    if _has_member(target, name):
        getattr(target, name).remove(handler)
        return
    _inherited_event(instance, name).remove(instance, handler)


def fire_event(instance: Any, target: Any, name: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
    if _has_member(target, name):
        getattr(target, name).fire(*args, **kwargs)
        return
    _inherited_event(instance, name).fire(instance, *args, **kwargs)
