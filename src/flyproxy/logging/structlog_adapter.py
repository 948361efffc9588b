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
"""StructlogAdapter — renders flyproxy's structlog events on the ``flyproxy`` logger tree."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from flyproxy.core.config import Config

ROOT_LOGGER = "flyproxy"


def _logger_name(key: str) -> str:
    """Map a ``flyproxy.logging.level`` key to a stdlib logger name."""
    if key == "root":
        return ROOT_LOGGER
    if key == ROOT_LOGGER or key.startswith(ROOT_LOGGER + "."):
        return key
    return f"{ROOT_LOGGER}.{key}"


class StructlogAdapter:
    """Default LoggingPort implementation.

    Events go through structlog's stdlib integration and are rendered by a
    ``ProcessorFormatter`` on a handler attached to the ``flyproxy`` logger,
    which stops propagating to the host application's root logger.

    Configuration::

        flyproxy:
          logging:
            format: json          # or console
            level:
              root: INFO          # the flyproxy logger
              cache: DEBUG        # flyproxy.cache
    """

    def __init__(self) -> None:
        self._levels: dict[str, str] = {}
        self._format: str = "console"
        self._handler: logging.Handler | None = None

    def configure(self, config: Config) -> None:
        """Configure structlog and the flyproxy logger tree from config."""
        levels = config.get_section("flyproxy.logging.level")
        self._levels = {_logger_name(str(k)): str(v).upper() for k, v in levels.items()}
        self._levels.setdefault(ROOT_LOGGER, "INFO")
        self._format = str(config.get("flyproxy.logging.format", "console")).lower()

        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        self._install_handler()

        for name, level in self._levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(_logger_name(name)).setLevel(getattr(logging, level.upper(), logging.INFO))

    def shutdown(self) -> None:
        """Detach the handler and let flyproxy records propagate again."""
        root = logging.getLogger(ROOT_LOGGER)
        if self._handler is not None:
            root.removeHandler(self._handler)
            self._handler = None
        root.propagate = True

    def _install_handler(self) -> None:
        renderer: structlog.types.Processor
        if self._format == "json":
            renderer = structlog.processors.JSONRenderer()
        else:
            renderer = structlog.dev.ConsoleRenderer(colors=False)

        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(structlog.stdlib.ProcessorFormatter(processor=renderer))

        self.shutdown()
        root = logging.getLogger(ROOT_LOGGER)
        root.addHandler(handler)
        root.propagate = False
        self._handler = handler
