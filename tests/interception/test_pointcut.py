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
"""Tests for pointcut expressions over qualified member names."""

from __future__ import annotations

from flyproxy.interception import matches_pointcut


class TestMatchesPointcut:
    """matches_pointcut covers exact, single-star, double-star and partial globs."""

    def test_exact_match(self) -> None:
        assert matches_pointcut("app.Greeter.greet", "app.Greeter.greet")

    def test_star_matches_single_segment(self) -> None:
        assert matches_pointcut("app.*.greet", "app.Greeter.greet")
        assert matches_pointcut("app.Greeter.*", "app.Greeter.greet")

    def test_star_does_not_cross_dots(self) -> None:
        assert not matches_pointcut("*.greet", "app.Greeter.greet")

    def test_doublestar_any_depth(self) -> None:
        assert matches_pointcut("**.*Repository.find_*", "app.data.UserRepository.find_by_id")
        assert matches_pointcut("**.greet", "a.b.c.d.Greeter.greet")

    def test_doublestar_crosses_locals(self) -> None:
        assert matches_pointcut("**.Greeter.greet", "tests.TestX.test_y.<locals>.Greeter.greet")

    def test_partial_glob_question_mark(self) -> None:
        assert matches_pointcut("app.Greeter.get_?", "app.Greeter.get_a")
        assert not matches_pointcut("app.Greeter.get_?", "app.Greeter.get_ab")

    def test_prefix_wildcard_no_match(self) -> None:
        assert not matches_pointcut("app.Greeter.get_*", "app.Greeter.set_name")

    def test_no_match_completely_different(self) -> None:
        assert not matches_pointcut("app.Greeter.greet", "other.Foo.bar")
