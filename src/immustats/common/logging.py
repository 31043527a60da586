# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Rich console logging for immustats.

Call ``setup_rich_logging()`` once from the embedding application to render
log records as::

    12:26:52.092 DEBUG    Aggregated 14 RPC methods: 6 read, 3 write (SnapshotAggregator:120)
"""

import logging
from datetime import datetime

from rich.console import Console, ConsoleRenderable, Group
from rich.highlighter import RegexHighlighter
from rich.logging import RichHandler
from rich.text import Text
from rich.traceback import Traceback

from immustats.common.environment import Environment
from immustats.common.stats_logger import StatsLogger

_logger = StatsLogger(__name__)


def setup_rich_logging(
    level: str | int | None = None, console: Console | None = None
) -> "CustomRichHandler":
    """Install a CustomRichHandler on the root logger.

    Existing CustomRichHandlers are replaced so repeated calls do not duplicate
    output.

    Args:
        level: Root log level. Defaults to Environment.LOGGING.LEVEL.
        console: Rich console to write to. Defaults to a new stderr console.

    Returns:
        The installed handler.
    """
    if level is None:
        level = Environment.LOGGING.LEVEL
    if isinstance(level, str):
        level = level.upper()
    logging.root.setLevel(level)

    for existing_handler in logging.root.handlers[:]:
        if isinstance(existing_handler, CustomRichHandler):
            logging.root.removeHandler(existing_handler)

    rich_handler = CustomRichHandler(
        rich_tracebacks=True,
        show_path=False,
        console=console or Console(stderr=True),
        show_time=False,
        show_level=False,
        tracebacks_show_locals=False,
    )
    rich_handler.setLevel(level)
    logging.root.addHandler(rich_handler)

    _logger.debug(lambda: f"Logging initialized with level: {level}")
    return rich_handler


class LogHighlighter(RegexHighlighter):
    """Highlights the patterns that show up in metric logs.

    Metric and family names, IPs, numbers, quoted strings and key=value pairs.
    """

    base_style = "repr."
    highlights = [
        r"(?P<ipv4>\b\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}\b)"
        r"|(?P<number>(?<![.\w])-?\d+\.?\d*(?:e[+-]?\d+)?\b)"
        r"|(?P<str>\"[^\"]*\"|'[^']*'|`[^`]*`)"
        r"|\b(?P<bool_true>True)\b|\b(?P<bool_false>False)\b|\b(?P<none>None)\b"
        r"|(?P<brace>[\[\](){}])"
        r"|\b(?P<attrib_name>\w+)=(?P<attrib_value>[^\s,=\[\](){}]+)?",
    ]  # fmt: skip


class CustomRichHandler(RichHandler):
    """Rich logging handler with a compact, width-aware line format.

    Each record renders as ``HH:MM:SS.mmm LEVEL    message (logger:lineno)``.
    Long messages wrap at character boundaries. On consoles at least
    MIN_CONSOLE_INDENT_WRAP_WIDTH wide, continuation lines are indented to line
    up with the first line's message.
    """

    LOG_LEVEL_STYLES = {
        "TRACE": "dim",
        "DEBUG": "dim",
        "INFO": "cyan",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold red",
    }

    ABSOLUTE_MIN_CONSOLE_WIDTH = 40
    PREFIX_LENGTH = 22  # "HH:MM:SS.mmm LEVEL    "

    _HIGHLIGHT_CHARS = frozenset("\"'=()[]{}0123456789")

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.highlighter = LogHighlighter()

    def _console_width(self) -> int:
        if self.console is None:
            return Environment.LOGGING.DEFAULT_CONSOLE_WIDTH
        return self.console.size.width

    def render(
        self,
        *,
        record: logging.LogRecord,
        traceback: Traceback | None,
        message_renderable: ConsoleRenderable,
    ) -> ConsoleRenderable:
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]
        level_style = self.LOG_LEVEL_STYLES.get(record.levelname, "white")
        message = record.getMessage()[: Environment.LOGGING.MAX_CONSOLE_MESSAGE_LENGTH]
        message = " ".join(segment for segment in message.split("\n") if segment)
        suffix = f"({record.name}:{record.lineno})"

        console_width = self._console_width()
        target_width = max(console_width - 2, self.ABSOLUTE_MIN_CONSOLE_WIDTH)
        content_width = target_width - self.PREFIX_LENGTH
        indent = console_width >= Environment.LOGGING.MIN_CONSOLE_INDENT_WRAP_WIDTH

        body = Text(f"{message} ")
        if self._HIGHLIGHT_CHARS & set(message):
            self.highlighter.highlight(body)
        body.append(suffix, style="dim italic")

        parts: list[Text] = [
            Text(f"{timestamp} ", style="log.time"),
            Text(f"{record.levelname:<8} ", style=level_style),
        ]
        line_width = content_width
        position = 0
        while position < len(body):
            if position:
                parts.append(Text("\n"))
                if indent:
                    parts.append(Text(" " * self.PREFIX_LENGTH))
                else:
                    line_width = target_width
            parts.append(body[position : position + line_width])
            position += line_width

        formatted_log = Text.assemble(*parts)
        formatted_log.no_wrap = True
        return Group(formatted_log, traceback) if traceback else formatted_log

    def emit(self, record: logging.LogRecord) -> None:
        traceback = None
        if (
            self.rich_tracebacks
            and record.exc_info
            and record.exc_info != (None, None, None)
        ):
            traceback = Traceback.from_exception(*record.exc_info)

        log_renderable = self.render(
            record=record, traceback=traceback, message_renderable=Text("")
        )
        self.console.print(log_renderable, soft_wrap=False)
