"""Logging utilities for user_form.

Every record emitted under the ``user_form`` logger carries a ``form_id``
attribute so that edits and submissions of concurrent form instances can
be told apart in one stream.
"""

from __future__ import annotations

import logging
from typing import Union

NO_FORM = "-"
DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | form=%(form_id)s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class FormIdFilter(logging.Filter):
    """Fill in ``form_id`` for records logged outside a form instance."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "form_id"):
            record.form_id = NO_FORM
        return True


class FormLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that attaches the form identifier to each record."""

    def process(self, msg: str, kwargs):  # type: ignore[override]
        extra = dict(kwargs.get("extra") or {})
        extra.setdefault("form_id", self.extra.get("form_id", NO_FORM))
        kwargs["extra"] = extra
        return msg, kwargs


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """Install the user_form stream handler.

    Args:
        level: Logging level or level name. Unknown names fall back to INFO.
    """

    if isinstance(level, str):
        level_value = getattr(logging, level.upper(), logging.INFO)
    else:
        level_value = level

    form_logger = logging.getLogger("user_form")
    if not form_logger.handlers:
        handler = logging.StreamHandler()
        handler.addFilter(FormIdFilter())
        handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT, DEFAULT_DATE_FORMAT))
        form_logger.addHandler(handler)
    form_logger.setLevel(level_value)
    form_logger.propagate = False


def get_form_logger(component: str, form_id: str) -> FormLoggerAdapter:
    """Return a logger adapter bound to one form instance."""

    logger = logging.getLogger(f"user_form.{component}")
    return FormLoggerAdapter(logger, {"form_id": form_id})
