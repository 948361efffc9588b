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
"""Invocation — the call context handed to interceptors.

An interceptor is either a callable taking the invocation or an object with
an ``intercept(invocation)`` method. It either calls
:meth:`Invocation.proceed` to continue down the chain (eventually reaching
the target) or returns a value of its own to short-circuit the call::

    def audit(invocation: Invocation) -> Any:
        log.info("calling", member=invocation.member.name, args=invocation.args)
        return invocation.proceed()

For ``async`` members ``proceed()`` returns an awaitable.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ClassVar, Protocol, runtime_checkable

from flyproxy.reflection.members import MemberInfo, MethodInfo


@runtime_checkable
class MethodInterceptor(Protocol):
    def intercept(self, invocation: Invocation) -> Any: ...


Interceptor = Callable[["Invocation"], Any] | MethodInterceptor


def as_interceptor(interceptor: Interceptor) -> Callable[[Invocation], Any]:
    """Normalize an interceptor object or callable into a plain callable."""
    intercept = getattr(interceptor, "intercept", None)
    if callable(intercept):
        return intercept
    if callable(interceptor):
        return interceptor
    raise TypeError(f"{interceptor!r} is neither callable nor has an intercept() method")


class Invocation:
    """One intercepted call at one position of the interceptor chain.

    Concrete invocation types are generated per member by the
    :class:`~flyproxy.emit.invocation_factory.InvocationTypeFactory`; they
    fix ``member`` (the intercepted event, property or method), ``method``
    (the accessor being called) and how raw arguments are shaped.

    Attributes:
        proxy: The proxy instance the call was made on.
        target: The object calls are forwarded to, or ``None``.
        args: Positional arguments, normalized for the accessor.
        kwargs: Keyword arguments, normalized for the accessor.
    """

    __slots__ = ("proxy", "target", "args", "kwargs", "_interceptors", "_position")

    member: ClassVar[MemberInfo]
    method: ClassVar[MethodInfo]

    def __init__(
        self,
        proxy: Any,
        target: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        interceptors: tuple[Callable[[Invocation], Any], ...] = (),
    ) -> None:
        self.proxy = proxy
        self.target = target
        self.args, self.kwargs = self.bind_arguments(tuple(args), dict(kwargs))
        self._interceptors = interceptors
        self._position = 0

    def proceed(self, *args: Any, **kwargs: Any) -> Any:
        """Continue with the next interceptor, or the target once the chain is done.

        Passing arguments replaces them for the rest of the chain.
        """
        invocation = self._copy(self._position) if (args or kwargs) else self
        if args or kwargs:
            invocation.args, invocation.kwargs = self.bind_arguments(args, kwargs)

        if self._position >= len(self._interceptors):
            return invocation.invoke_target()

        interceptor = self._interceptors[self._position]
        return interceptor(invocation._copy(self._position + 1))

    def bind_arguments(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> tuple[tuple[Any, ...], dict[str, Any]]:
        """Validate and normalize raw call arguments for this accessor."""
        return args, kwargs

    def invoke_target(self) -> Any:
        """Perform the real call once no interceptor is left."""
        raise NotImplementedError

    def _copy(self, position: int) -> Invocation:
        clone = object.__new__(type(self))
        clone.proxy = self.proxy
        clone.target = self.target
        clone.args = self.args
        clone.kwargs = self.kwargs
        clone._interceptors = self._interceptors
        clone._position = position
        return clone

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.method.qualified_name} args={self.args!r}>"
