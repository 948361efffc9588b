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
"""InvocationTypeFactory — one invocation type per intercepted accessor.

Each generated type is an :class:`~flyproxy.interception.invocation.Invocation`
subclass bound to a member and one of its accessors. It knows how raw call
arguments map onto the accessor (a method takes its declared parameters, a
property getter none, a setter one value, an event adder or remover one
handler) and how to reach the target once the interceptor chain is done.
"""

from __future__ import annotations

import inspect
import threading
from typing import Any

from flyproxy.emit import dispatch
from flyproxy.interception.invocation import Invocation
from flyproxy.kernel.exceptions import UnsupportedMemberException
from flyproxy.reflection.members import EventInfo, MemberInfo, MethodInfo, MethodKind, PropertyInfo

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


# =============================================================================
# Invocation kinds
# =============================================================================


class MethodInvocation(Invocation):
    __slots__ = ()

    signature: inspect.Signature

    def bind_arguments(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> tuple[tuple[Any, ...], dict[str, Any]]:
        bound = self.signature.bind(*args, **kwargs)
        return bound.args, bound.kwargs

    def invoke_target(self) -> Any:
        return dispatch.call_method(self.proxy, self.target, self.member.name, self.args, self.kwargs)


class _AccessorInvocation(Invocation):
    """Accessors take a fixed number of positional arguments and no keywords."""

    __slots__ = ()

    arity: int = 0

    def bind_arguments(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> tuple[tuple[Any, ...], dict[str, Any]]:
        if kwargs or len(args) != self.arity:
            raise TypeError(
                f"{self.method.qualified_name} accessor takes {self.arity} positional argument(s), "
                f"got {len(args)} and keywords {sorted(kwargs)}"
            )
        return args, {}


class PropertyGetInvocation(_AccessorInvocation):
    __slots__ = ()

    def invoke_target(self) -> Any:
        return dispatch.get_property(self.proxy, self.target, self.member.name)


class PropertySetInvocation(_AccessorInvocation):
    __slots__ = ()

    arity = 1

    def invoke_target(self) -> Any:
        dispatch.set_property(self.proxy, self.target, self.member.name, self.args[0])


class PropertyDeleteInvocation(_AccessorInvocation):
    __slots__ = ()

    def invoke_target(self) -> Any:
        dispatch.delete_property(self.proxy, self.target, self.member.name)


class EventAddInvocation(_AccessorInvocation):
    __slots__ = ()

    arity = 1

    def invoke_target(self) -> Any:
        dispatch.add_handler(self.proxy, self.target, self.member.name, self.args[0])


class EventRemoveInvocation(_AccessorInvocation):
    __slots__ = ()

    arity = 1

    def invoke_target(self) -> Any:
        dispatch.remove_handler(self.proxy, self.target, self.member.name, self.args[0])


# =============================================================================
# Factory
# =============================================================================


def _unsupported(member: MemberInfo, accessor: MethodInfo, reason: str) -> UnsupportedMemberException:
    return UnsupportedMemberException(
        f"Cannot intercept {member.qualified_name}: {reason}",
        context={"member": member.qualified_name, "accessor": accessor.name},
    )


def _signature(member: MemberInfo, accessor: MethodInfo) -> inspect.Signature:
    try:
        return accessor.signature
    except (TypeError, ValueError) as exc:
        raise _unsupported(member, accessor, f"signature is not introspectable ({exc})") from exc


def _require_arity(member: MemberInfo, accessor: MethodInfo, arity: int) -> None:
    parameters = list(_signature(member, accessor).parameters.values())
    positional = [p for p in parameters if p.kind in _POSITIONAL]
    required_keywords = [
        p for p in parameters if p.kind is inspect.Parameter.KEYWORD_ONLY and p.default is inspect.Parameter.empty
    ]
    variadic = any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in parameters)
    if variadic or required_keywords or len(positional) != arity:
        raise _unsupported(member, accessor, f"accessor must take exactly {arity} positional argument(s)")


class InvocationTypeFactory:
    """Creates and memoizes invocation types, keyed by (member, accessor).

    Shapes that cannot be represented raise
    :class:`~flyproxy.kernel.exceptions.UnsupportedMemberException` here, at
    generation time, never at call time.
    """

    def __init__(self) -> None:
        self._types: dict[tuple[MemberInfo, MethodInfo], type[Invocation]] = {}
        self._lock = threading.Lock()

    def create_event_invocation_type(self, event_info: EventInfo, method_info: MethodInfo) -> type[Invocation]:
        if method_info == event_info.adder:
            base: type[Invocation] = EventAddInvocation
        elif method_info == event_info.remover:
            base = EventRemoveInvocation
        else:
            raise _unsupported(event_info, method_info, "method is not an accessor of the event")

        _require_arity(event_info, method_info, 1)
        return self._define(event_info, method_info, base, {})

    def create_property_invocation_type(self, property_info: PropertyInfo, method_info: MethodInfo) -> type[Invocation]:
        if method_info == property_info.getter:
            base: type[Invocation] = PropertyGetInvocation
            arity = 0
        elif method_info == property_info.setter:
            base, arity = PropertySetInvocation, 1
        elif method_info == property_info.deleter:
            base, arity = PropertyDeleteInvocation, 0
        else:
            raise _unsupported(property_info, method_info, "method is not an accessor of the property")

        if method_info.kind is not MethodKind.INSTANCE:
            raise _unsupported(property_info, method_info, "accessor is not an instance method")
        _require_arity(property_info, method_info, arity)
        return self._define(property_info, method_info, base, {})

    def create_method_invocation_type(self, method_info: MethodInfo) -> type[Invocation]:
        if method_info.kind is not MethodKind.INSTANCE:
            raise _unsupported(method_info, method_info, f"{method_info.kind.value} methods cannot be intercepted")

        signature = _signature(method_info, method_info)
        return self._define(method_info, method_info, MethodInvocation, {"signature": signature})

    def _define(
        self,
        member: MemberInfo,
        accessor: MethodInfo,
        base: type[Invocation],
        namespace: dict[str, Any],
    ) -> type[Invocation]:
        key = (member, accessor)
        with self._lock:
            invocation_type = self._types.get(key)
            if invocation_type is None:
                owner = member.declaring_type.__name__ if member.declaring_type is not None else "Proxy"
                invocation_type = type(
                    f"{owner}_{member.name}_{base.__name__}",
                    (base,),
                    {"__slots__": (), "__module__": __name__, "member": member, "method": accessor, **namespace},
                )
                self._types[key] = invocation_type

        return invocation_type

    def __len__(self) -> int:
        return len(self._types)
