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
"""End-to-end proxy scenarios through the public API."""

import asyncio
from abc import ABC, abstractmethod

import pytest
from structlog.testing import capture_logs

from flyproxy import (
    Invocation,
    LoggingInterceptor,
    NonInterceptionFilter,
    NotImplementedException,
    ProxyFactory,
    event,
    non_intercepted,
)


class Greeter(ABC):
    @abstractmethod
    def greet(self, name: str, *, punctuation: str = "") -> str: ...


class Thermometer(ABC):
    reading_changed = event("Raised with the new reading.")

    @property
    @abstractmethod
    def unit(self) -> str: ...

    @unit.setter
    @abstractmethod
    def unit(self, value: str) -> None: ...

    @abstractmethod
    def read(self) -> float: ...

    @non_intercepted
    def describe(self) -> str:
        return f"thermometer in {self.unit}"


class LabThermometer:
    reading_changed = event()

    def __init__(self) -> None:
        self.unit = "C"
        self.value = 21.5

    def read(self) -> float:
        self.reading_changed.fire(self.value)
        return self.value


class Downloader(ABC):
    @abstractmethod
    async def fetch(self, url: str) -> bytes: ...


class HttpDownloader:
    async def fetch(self, url: str) -> bytes:
        await asyncio.sleep(0)
        return url.encode()


class TestGreeterScenario:
    def test_interceptor_answers_without_target(self):
        greeter = ProxyFactory().create_proxy(Greeter, lambda inv: f"hello {inv.args[0]}")
        assert greeter.greet("world") == "hello world"

    def test_keyword_arguments_are_bound(self):
        def shout(inv: Invocation) -> str:
            return f"hello {inv.args[0]}{inv.kwargs.get('punctuation', '')}"

        greeter = ProxyFactory().create_proxy(Greeter, shout)
        assert greeter.greet("world", punctuation="!") == "hello world!"

    def test_wrong_arguments_fail_before_the_chain(self):
        calls: list[str] = []
        greeter = ProxyFactory().create_proxy(Greeter, lambda inv: calls.append("called"))
        with pytest.raises(TypeError):
            greeter.greet()
        assert calls == []

    def test_without_interceptors_or_target(self):
        greeter = ProxyFactory().create_proxy(Greeter)
        with pytest.raises(NotImplementedException):
            greeter.greet("world")

    def test_reject_all_filter(self):
        factory = ProxyFactory(interception_filter=NonInterceptionFilter())
        proxy = factory.get_proxy(interfaces=Greeter)
        assert proxy.methods == ()
        greeter = proxy.create_instance(lambda inv: pytest.fail("nothing is intercepted"))
        assert isinstance(greeter, Greeter)


class TestThermometerScenario:
    def test_property_and_method_calls_are_intercepted(self):
        target = LabThermometer()
        calls: list[str] = []

        def record(inv):
            calls.append(f"{inv.member.name}:{inv.method.function.__name__}")
            return inv.proceed()

        thermometer = ProxyFactory().create_proxy(Thermometer, record, target=target)
        thermometer.unit = "F"
        assert thermometer.unit == "F"
        assert thermometer.read() == 21.5
        assert target.unit == "F"
        assert calls == ["unit:unit", "unit:unit", "read:read"]

    def test_non_intercepted_member_still_runs(self):
        calls: list[str] = []

        def record(inv):
            calls.append(inv.member.name)
            return inv.proceed()

        thermometer = ProxyFactory().create_proxy(Thermometer, record, target=LabThermometer())
        assert thermometer.describe() == "thermometer in C"
        assert calls == ["unit"]

    def test_event_subscription_reaches_target(self):
        target = LabThermometer()
        thermometer = ProxyFactory().create_proxy(Thermometer, target=target)
        readings: list[float] = []

        thermometer.reading_changed += readings.append
        target.read()
        thermometer.reading_changed -= readings.append
        target.read()

        assert readings == [21.5]

    def test_interceptor_can_veto_subscription(self):
        def veto(inv):
            if inv.member.name == "reading_changed":
                return None
            return inv.proceed()

        target = LabThermometer()
        thermometer = ProxyFactory().create_proxy(Thermometer, veto, target=target)
        thermometer.reading_changed += print
        assert LabThermometer.reading_changed.handlers(target) == ()


class TestAsyncScenario:
    @pytest.mark.asyncio
    async def test_async_method_forwards_to_target(self):
        downloader = ProxyFactory().create_proxy(Downloader, target=HttpDownloader())
        assert await downloader.fetch("a") == b"a"

    @pytest.mark.asyncio
    async def test_async_interceptor(self):
        async def upper(inv):
            return (await inv.proceed()).upper()

        downloader = ProxyFactory().create_proxy(Downloader, upper, target=HttpDownloader())
        results = await asyncio.gather(downloader.fetch("a"), downloader.fetch("b"))
        assert results == [b"A", b"B"]

    @pytest.mark.asyncio
    async def test_sync_interceptor_short_circuits_async_method(self):
        downloader = ProxyFactory().create_proxy(Downloader, lambda inv: b"cached")
        assert await downloader.fetch("a") == b"cached"

    @pytest.mark.asyncio
    async def test_logging_interceptor(self):
        with capture_logs() as logs:
            downloader = ProxyFactory().create_proxy(
                Downloader, LoggingInterceptor("flyproxy.test.downloads"), target=HttpDownloader()
            )
            assert await downloader.fetch("x") == b"x"

        assert [e["event"] for e in logs if e["event"].startswith("proxy_invocation")] == ["proxy_invocation"]
