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
"""Layered configuration for flyproxy.

Values come from the packaged ``flyproxy-defaults.yaml``, an optional YAML or
TOML file with profile overlays, and ``FLYPROXY_*`` environment variables,
the environment winning. String values may reference ``${ENV_VAR}``,
``${dotted.key}`` or ``${key:fallback}``.
"""

from __future__ import annotations

import importlib.resources
import os
import re
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ValidationError

M = TypeVar("M", bound=BaseModel)

_PLACEHOLDER_RE = re.compile(r"\$\{([^}]+)\}")

_PREFIX_ATTR = "__flyproxy_config_prefix__"

_ENV_PREFIX = "FLYPROXY_"

_MAX_PLACEHOLDER_DEPTH = 10


def config_properties(prefix: str) -> Callable[[type[M]], type[M]]:
    """Attach a Pydantic model to the configuration section at *prefix*.

    Usage:
        @config_properties(prefix="flyproxy.proxy")
        class ProxyProperties(BaseModel):
            cache: ProxyCacheProperties = Field(default_factory=ProxyCacheProperties)
    """

    def decorator(cls: type[M]) -> type[M]:
        setattr(cls, _PREFIX_ATTR, prefix)
        return cls

    return decorator


def _env_key(key: str) -> str:
    # flyproxy.proxy.cache.enabled -> FLYPROXY_PROXY_CACHE_ENABLED
    return _ENV_PREFIX + key.removeprefix("flyproxy.").upper().replace(".", "_").replace("-", "_")


def _read(path: Path) -> dict[str, Any]:
    if path.suffix == ".toml":
        with open(path, "rb") as f:
            return tomllib.load(f)
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _load_defaults() -> dict[str, Any]:
    resource = importlib.resources.files("flyproxy.resources").joinpath("flyproxy-defaults.yaml")
    return yaml.safe_load(resource.read_text()) or {}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Dot-notation view over nested configuration data.

    ``FLYPROXY_PROXY_CACHE_ENABLED`` overrides ``flyproxy.proxy.cache.enabled``
    in :meth:`get` and :meth:`bind`.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}

    @classmethod
    def defaults(cls) -> Config:
        """Configuration holding only the packaged defaults."""
        return cls(_load_defaults())

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        active_profiles: list[str] | None = None,
        load_defaults: bool = True,
    ) -> Config:
        """Load *path* over the packaged defaults.

        Profile overlays named ``{stem}-{profile}{suffix}`` beside *path* are
        merged on top in the order given. A missing *path* leaves only the
        defaults.
        """
        path = Path(path)
        data = _load_defaults() if load_defaults else {}

        if path.exists():
            overlays = [path, *(path.with_name(f"{path.stem}-{p}{path.suffix}") for p in active_profiles or [])]
            for overlay in overlays:
                if overlay.exists():
                    data = _deep_merge(data, _read(overlay))

        return cls(data)

    # lookup

    def get(self, key: str, default: Any = None) -> Any:
        env_value = os.environ.get(_env_key(key))
        if env_value is not None:
            return env_value

        value = self._lookup(key)
        if value is None:
            return default

        return self._resolve(value)

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Values under *prefix* as a nested dict, placeholders resolved."""
        section = self._lookup(prefix)
        return self._resolve(section) if isinstance(section, dict) else {}

    def bind(self, properties_cls: type[M]) -> M:
        """Validate the section a ``@config_properties`` model is attached to.

        Each field is read through :meth:`get`, so environment overrides
        reach nested models as well.
        """
        prefix = getattr(properties_cls, _PREFIX_ATTR, None)
        if prefix is None:
            raise ValueError(f"{properties_cls.__name__} is not decorated with @config_properties")

        try:
            return properties_cls.model_validate(self._collect(prefix, properties_cls))
        except ValidationError as exc:
            raise ValueError(
                f"Configuration validation failed for '{properties_cls.__name__}' (prefix='{prefix}'):\n{exc}"
            ) from exc

    # internals

    def _lookup(self, key: str) -> Any:
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict):
                return None
            current = current.get(part)
        return current

    def _collect(self, prefix: str, model: type[BaseModel]) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for name, field in model.model_fields.items():
            key = f"{prefix}.{name}"
            annotation = field.annotation
            if isinstance(annotation, type) and issubclass(annotation, BaseModel):
                value: Any = self._collect(key, annotation)
            else:
                value = self.get(key)
            if value is not None and value != {}:
                values[name] = value
        return values

    def _resolve(self, value: Any, depth: int = 0) -> Any:
        if isinstance(value, dict):
            return {k: self._resolve(v, depth) for k, v in value.items()}
        if not isinstance(value, str) or "${" not in value:
            return value
        if depth > _MAX_PLACEHOLDER_DEPTH:
            raise ValueError(
                f"Max recursion depth exceeded resolving placeholders in '{value}'. Check for circular references."
            )

        def substitute(match: re.Match[str]) -> str:
            name, separator, fallback = match.group(1).partition(":")

            found = os.environ.get(name)
            if found is None:
                referenced = self._lookup(name)
                if referenced is not None:
                    found = str(self._resolve(str(referenced), depth + 1))
            if found is not None:
                return found
            if separator:
                return fallback

            raise ValueError(f"Cannot resolve placeholder '${{{match.group(1)}}}': not found in environment or config")

        return _PLACEHOLDER_RE.sub(substitute, value)
