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
"""Structured logging configuration using structlog."""

from __future__ import annotations

import logging
import sys

import structlog

from redstore.config import Config
from redstore.properties import LoggingProperties


def configure_logging(config: Config | None = None) -> LoggingProperties:
    """Configure structlog and stdlib logging from ``redstore.logging.*``.

    ``level`` is either a single level name or a map of logger names to
    levels, where the ``root`` entry sets the default::

        redstore:
          logging:
            level:
              root: INFO
              redstore.store: DEBUG

    ``format: json`` renders JSON lines; anything else uses the colored
    console renderer.  Returns the bound properties.
    """
    props = (config or Config()).bind(LoggingProperties)
    if isinstance(props.level, dict):
        module_levels = {str(k): str(v).upper() for k, v in props.level.items()}
        root_level = module_levels.pop("root", "INFO")
    else:
        module_levels = {}
        root_level = str(props.level).upper()
    log_level = getattr(logging, root_level, logging.INFO)

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if props.format.lower() == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
        force=True,
    )
    for module, level in module_levels.items():
        set_level(module, level)
    return props


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger by name."""
    return structlog.get_logger(name)


def set_level(name: str, level: str) -> None:
    """Set the level of the stdlib logger *name*."""
    logging.getLogger(name).setLevel(getattr(logging, level.upper(), logging.INFO))
