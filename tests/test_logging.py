import logging
from datetime import date
from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from user_form.config import Config
from user_form.form import FormModel
from user_form.utils.logging import (
    DEFAULT_LOG_FORMAT,
    FormIdFilter,
    NO_FORM,
    get_form_logger,
)


def test_form_records_carry_form_id(caplog):
    form = FormModel(
        config=Config(education_options=["Bachelors"], today=None),
        clock=lambda: date(2026, 10, 19),
    )
    caplog.set_level(logging.DEBUG, logger="user_form")

    form.add_social_profile()
    form.submit()

    records = [r for r in caplog.records if r.name == "user_form.form"]
    assert records
    assert {r.form_id for r in records} == {form.form_id}
    assert any("제출 거부" in r.getMessage() for r in records)


def test_adapter_keeps_caller_extra(caplog):
    caplog.set_level(logging.INFO, logger="user_form")
    logger = get_form_logger("tests", "abc123")

    logger.info("hello", extra={"step": 3})

    record = caplog.records[-1]
    assert record.form_id == "abc123"
    assert record.step == 3


def test_filter_fills_missing_form_id():
    record = logging.LogRecord("user_form.events", logging.INFO, __file__, 1, "msg", None, None)

    assert FormIdFilter().filter(record) is True
    assert record.form_id == NO_FORM
    assert "form=-" in logging.Formatter(DEFAULT_LOG_FORMAT).format(record)
