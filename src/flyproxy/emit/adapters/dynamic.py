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
"""DynamicTypeBuilder — TypeBuilder adapter that emits classes with ``types.new_class``.

Built members route through invocation types from the
:class:`~flyproxy.emit.invocation_factory.InvocationTypeFactory`. Members of
the parent classes that were never built become pass-throughs that forward
to the proxy target (see :mod:`flyproxy.emit.dispatch`); static, class and
final members are inherited unchanged.
"""

from __future__ import annotations

import functools
import inspect
import types
from collections.abc import Callable
from typing import Any

import structlog

from flyproxy.emit import dispatch
from flyproxy.emit.invocation_factory import InvocationTypeFactory
from flyproxy.interception.invocation import Invocation
from flyproxy.kernel.exceptions import BackendFailureException, UnsupportedMemberException
from flyproxy.reflection.events import BoundEvent
from flyproxy.reflection.introspection import TypeDescriptor
from flyproxy.reflection.members import (
    ConstructorInfo,
    EventInfo,
    MemberInfo,
    MethodInfo,
    MethodKind,
    PropertyInfo,
)

logger = structlog.get_logger("flyproxy.emit")


# =============================================================================
# Member emitters
# =============================================================================


def _emit_constructor(constructor_info: ConstructorInfo) -> Callable[..., None]:
    if constructor_info.is_default:

        def __init__(self: Any) -> None:
            pass

    else:
        base_init = constructor_info.function

        def __init__(self: Any, *args: Any, **kwargs: Any) -> None:  # type: ignore[misc]
            base_init(self, *args, **kwargs)

        __init__.__doc__ = base_init.__doc__

    __init__.__signature__ = constructor_info.signature.replace(  # type: ignore[attr-defined]
        parameters=[inspect.Parameter("self", inspect.Parameter.POSITIONAL_ONLY)]
        + list(constructor_info.signature.parameters.values())
    )
    return __init__


def _wrap(function: Callable[..., Any], like: Callable[..., Any]) -> Callable[..., Any]:
    # updated=() keeps __isabstractmethod__ and __final__ off the override
    return functools.update_wrapper(function, like, updated=())


def _emit_method(method_info: MethodInfo, invocation_type: type[Invocation]) -> Callable[..., Any]:
    if method_info.is_async:

        async def method(self: Any, *args: Any, **kwargs: Any) -> Any:
            target, interceptors = dispatch.get_state(self)
            result = invocation_type(self, target, args, kwargs, interceptors).proceed()
            if inspect.isawaitable(result):
                result = await result
            return result

    else:

        def method(self: Any, *args: Any, **kwargs: Any) -> Any:  # type: ignore[misc]
            target, interceptors = dispatch.get_state(self)
            return invocation_type(self, target, args, kwargs, interceptors).proceed()

    return _wrap(method, method_info.function)


def _emit_pass_through_method(method_info: MethodInfo) -> Callable[..., Any]:
    name = method_info.name
    if method_info.is_async:

        async def method(self: Any, *args: Any, **kwargs: Any) -> Any:
            target, _ = dispatch.get_state(self)
            return await dispatch.call_method(self, target, name, args, kwargs)

    else:

        def method(self: Any, *args: Any, **kwargs: Any) -> Any:  # type: ignore[misc]
            target, _ = dispatch.get_state(self)
            return dispatch.call_method(self, target, name, args, kwargs)

    return _wrap(method, method_info.function)


def _emit_property(
    property_info: PropertyInfo,
    get_type: type[Invocation] | None,
    set_type: type[Invocation] | None,
    delete_type: type[Invocation] | None,
) -> property:
    def invoke(invocation_type: type[Invocation], instance: Any, *args: Any) -> Any:
        target, interceptors = dispatch.get_state(instance)
        return invocation_type(instance, target, args, {}, interceptors).proceed()

    fget = functools.partial(invoke, get_type) if get_type is not None else None
    fset = functools.partial(invoke, set_type) if set_type is not None else None
    fdel = functools.partial(invoke, delete_type) if delete_type is not None else None
    return property(fget, fset, fdel, property_info.doc)


def _emit_pass_through_property(property_info: PropertyInfo) -> property:
    name = property_info.name

    def fget(self: Any) -> Any:
        return dispatch.get_property(self, dispatch.get_state(self)[0], name)

    def fset(self: Any, value: Any) -> None:
        dispatch.set_property(self, dispatch.get_state(self)[0], name, value)

    def fdel(self: Any) -> None:
        dispatch.delete_property(self, dispatch.get_state(self)[0], name)

    return property(
        fget if property_info.can_read else None,
        fset if property_info.can_write else None,
        fdel if property_info.deleter is not None else None,
        property_info.doc,
    )


class ProxyEvent:
    """Event member of a generated proxy type.

    With invocation types, ``add``/``remove`` run through the interceptor
    chain; without them they forward straight to the target.
    """

    def __init__(
        self,
        event_info: EventInfo,
        add_type: type[Invocation] | None = None,
        remove_type: type[Invocation] | None = None,
    ) -> None:
        self.event_info = event_info
        self._add_type = add_type
        self._remove_type = remove_type
        self.__doc__ = event_info.declaration.__doc__

    @property
    def intercepted(self) -> bool:
        return self._add_type is not None

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        name = self.event_info.name

        def add(handler: Callable[..., Any]) -> None:
            target, interceptors = dispatch.get_state(instance)
            if self._add_type is None:
                dispatch.add_handler(instance, target, name, handler)
            else:
                self._add_type(instance, target, (handler,), {}, interceptors).proceed()

        def remove(handler: Callable[..., Any]) -> None:
            target, interceptors = dispatch.get_state(instance)
            if self._remove_type is None:
                dispatch.remove_handler(instance, target, name, handler)
            else:
                self._remove_type(instance, target, (handler,), {}, interceptors).proceed()

        def fire(*args: Any, **kwargs: Any) -> None:
            dispatch.fire_event(instance, dispatch.get_state(instance)[0], name, args, kwargs)

        return BoundEvent(instance, add, remove, fire)

    def __set__(self, instance: Any, value: Any) -> None:
        if isinstance(value, BoundEvent) and value.instance is instance:
            return
        raise AttributeError(f"cannot assign to event '{self.event_info.name}'")


def _emit_pass_through(member: MemberInfo) -> Any:
    if isinstance(member, EventInfo):
        return None if member.is_final else ProxyEvent(member)
    if isinstance(member, PropertyInfo):
        return None if member.is_final else _emit_pass_through_property(member)
    if member.kind is not MethodKind.INSTANCE or member.is_final:
        return None
    return _emit_pass_through_method(member)


# =============================================================================
# Builder
# =============================================================================


class DynamicTypeBuilder:
    """Builds one proxy class deriving from *base_type* and the added interfaces."""

    def __init__(
        self,
        base_type: type | None = None,
        invocation_type_factory: InvocationTypeFactory | None = None,
        name: str | None = None,
    ) -> None:
        self._base_type = base_type
        self._invocation_types = (
            invocation_type_factory if invocation_type_factory is not None else InvocationTypeFactory()
        )
        self._name = name
        self._interfaces: list[type] = []
        self._attributes: list[Any] = []
        self._namespace: dict[str, Any] = {}
        self._created = False

    def add_interface(self, interface_type: type) -> None:
        if not isinstance(interface_type, type):
            raise UnsupportedMemberException(
                f"Interface must be a class, got {interface_type!r}",
                context={"interface": repr(interface_type)},
            )
        if interface_type not in self._interfaces:
            self._interfaces.append(interface_type)

    def add_custom_attribute(self, attribute_type: type) -> None:
        self._attributes.append(attribute_type())

    def build_constructor(self, constructor_info: ConstructorInfo) -> None:
        self._namespace["__init__"] = _emit_constructor(constructor_info)

    def build_event(self, event_info: EventInfo) -> None:
        add_type = self._invocation_types.create_event_invocation_type(event_info, event_info.adder)
        remove_type = self._invocation_types.create_event_invocation_type(event_info, event_info.remover)
        self._namespace[event_info.name] = ProxyEvent(event_info, add_type, remove_type)

    def build_property(self, property_info: PropertyInfo) -> None:
        def invocation_type(accessor: MethodInfo | None) -> type[Invocation] | None:
            if accessor is None:
                return None
            return self._invocation_types.create_property_invocation_type(property_info, accessor)

        self._namespace[property_info.name] = _emit_property(
            property_info,
            invocation_type(property_info.getter),
            invocation_type(property_info.setter),
            invocation_type(property_info.deleter),
        )

    def build_method(self, method_info: MethodInfo) -> None:
        invocation_type = self._invocation_types.create_method_invocation_type(method_info)
        self._namespace[method_info.name] = _emit_method(method_info, invocation_type)

    def create_type(self) -> type:
        if self._created:
            raise BackendFailureException("Type builder was already used to create a type")

        bases = self._bases()
        namespace = dict(self._namespace)
        namespace.setdefault("__init__", _emit_constructor(ConstructorInfo.default()))
        self._add_pass_throughs(bases, namespace)

        name = self._type_name(bases)
        namespace.update(
            {
                "__module__": __name__,
                "__qualname__": name,
                dispatch.ATTRIBUTES_ATTR: tuple(self._attributes),
                dispatch.TARGET_ATTR: None,
                dispatch.INTERCEPTORS_ATTR: (),
            }
        )

        try:
            proxy_type = types.new_class(name, bases, exec_body=lambda ns: ns.update(namespace))
        except TypeError as exc:
            raise BackendFailureException(
                f"Cannot create proxy type {name}: {exc}",
                context={"bases": [b.__qualname__ for b in bases]},
            ) from exc

        # Every abstract member now has an override or a pass-through.
        if getattr(proxy_type, "__abstractmethods__", None):
            proxy_type.__abstractmethods__ = frozenset()

        self._created = True
        logger.debug("proxy_type_created", proxy_type=name, bases=[b.__qualname__ for b in bases])
        return proxy_type

    def _bases(self) -> tuple[type, ...]:
        candidates = ([self._base_type] if self._base_type is not None else []) + self._interfaces
        bases: list[type] = []
        for candidate in candidates:
            if candidate in bases:
                continue
            # implied by a more derived candidate; listing both breaks the MRO
            if any(other is not candidate and issubclass(other, candidate) for other in candidates):
                continue
            bases.append(candidate)
        return tuple(bases) or (object,)

    def _add_pass_throughs(self, bases: tuple[type, ...], namespace: dict[str, Any]) -> None:
        seen = set(namespace)
        for base in bases:
            if TypeDescriptor.is_infrastructure(base):
                continue
            for member in TypeDescriptor.for_type(base).members():
                if member.name in seen:
                    continue
                seen.add(member.name)
                pass_through = _emit_pass_through(member)
                if pass_through is not None:
                    namespace[member.name] = pass_through

    def _type_name(self, bases: tuple[type, ...]) -> str:
        if self._name:
            return self._name
        return f"{bases[0].__name__}Proxy" if bases[0] is not object else "ObjectProxy"
