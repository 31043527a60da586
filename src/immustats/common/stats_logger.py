# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Logger wrapper with a TRACE level and lazily evaluated messages.

Messages may be passed as callables. They are only invoked when the logger is
enabled for the level, so expensive f-strings cost nothing when filtered out::

    _logger = StatsLogger(__name__)
    _logger.debug(lambda: f"Parsed {len(families)} families")
"""

import logging
from collections.abc import Callable
from typing import Any

_TRACE = logging.DEBUG - 5
_DEBUG = logging.DEBUG
_WARNING = logging.WARNING

logging.addLevelName(_TRACE, "TRACE")

MessageT = str | Callable[[], str]


class StatsLogger:
    """Drop-in companion to logging.Logger that accepts lazy messages."""

    def __init__(self, logger_name: str) -> None:
        self.logger_name = logger_name
        self._logger = logging.getLogger(logger_name)

    def log(self, level: int, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        if callable(msg):
            msg = msg()
        # stacklevel=3 attributes the record to the caller, not this wrapper
        kwargs.setdefault("stacklevel", 3)
        self._logger.log(level, msg, *args, **kwargs)

    def trace(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        self.log(_TRACE, msg, *args, **kwargs)

    def debug(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        self.log(_DEBUG, msg, *args, **kwargs)

    def warning(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        self.log(_WARNING, msg, *args, **kwargs)


class StatsLoggerMixin:
    """Gives a class ``self.debug(...)``-style helpers bound to its own logger.

    The logger is named after the concrete class unless ``logger_name`` is given.
    """

    def __init__(self, logger_name: str | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.logger = StatsLogger(logger_name or self.__class__.__name__)

    def trace(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("stacklevel", 4)
        self.logger.trace(msg, *args, **kwargs)

    def debug(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("stacklevel", 4)
        self.logger.debug(msg, *args, **kwargs)

    def warning(self, msg: MessageT, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("stacklevel", 4)
        self.logger.warning(msg, *args, **kwargs)
