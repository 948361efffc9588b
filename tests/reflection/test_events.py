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
"""Tests for event declarations."""

import pytest

from flyproxy.reflection import BoundEvent, event


class Account:
    balance_changed = event("Raised after every deposit.")

    def __init__(self) -> None:
        self.balance = 0

    def deposit(self, amount: int) -> None:
        self.balance += amount
        self.balance_changed.fire(self.balance)


class TestEvent:
    def test_class_access_returns_declaration(self):
        declaration = Account.balance_changed
        assert isinstance(declaration, event)
        assert declaration.name == "balance_changed"
        assert declaration.__doc__ == "Raised after every deposit."

    def test_instance_access_returns_bound_event(self):
        account = Account()
        assert isinstance(account.balance_changed, BoundEvent)
        assert account.balance_changed.instance is account

    def test_add_fire_remove(self):
        account = Account()
        seen: list[int] = []

        account.balance_changed += seen.append
        account.deposit(5)
        account.balance_changed -= seen.append
        account.deposit(5)

        assert seen == [5]

    def test_handlers_are_per_instance(self):
        first, second = Account(), Account()
        seen: list[int] = []
        first.balance_changed += seen.append

        second.deposit(1)
        assert seen == []
        assert Account.balance_changed.handlers(first) == (seen.append,)
        assert Account.balance_changed.handlers(second) == ()

    def test_handlers_fire_in_subscription_order(self):
        account = Account()
        calls: list[str] = []
        account.balance_changed += lambda _: calls.append("first")
        account.balance_changed += lambda _: calls.append("second")

        account.deposit(1)
        assert calls == ["first", "second"]

    def test_removing_unknown_handler_is_noop(self):
        account = Account()
        account.balance_changed -= print
        assert Account.balance_changed.handlers(account) == ()

    def test_assignment_is_rejected(self):
        account = Account()
        with pytest.raises(AttributeError, match="cannot assign"):
            account.balance_changed = print

    def test_bound_event_of_other_instance_is_rejected(self):
        first, second = Account(), Account()
        with pytest.raises(AttributeError):
            first.balance_changed = second.balance_changed
