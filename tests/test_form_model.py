from datetime import date
from pathlib import Path
import sys

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from user_form.config import Config
from user_form.form import (
    FieldValueError,
    FormModel,
    ReadOnlyFieldError,
    SocialProfileIndexError,
    UnknownEducationLevelError,
    UnknownFieldError,
    calculate_age,
)
from user_form.models import Accepted, Rejected, UserRecord

TODAY = date(2026, 10, 19)
EDUCATION = ["High School", "Diploma", "Bachelors", "Masters", "PhD"]


# ---------------------------------------------------------------------------
# Helper builders
# ---------------------------------------------------------------------------


def build_form(today: date = TODAY) -> FormModel:
    config = Config(education_options=list(EDUCATION), today=None)
    return FormModel(config=config, clock=lambda: today)


def fill_jane(form: FormModel) -> None:
    form.set_field("first_name", "Jane")
    form.set_field("last_name", "Doe")
    form.set_field("date_of_birth", date(2000, 6, 15))
    form.set_field("address", "221B Baker Street")
    form.set_field("city", "London")
    form.set_field("postal_code", "123456")
    form.set_field("tax_id", "ABCDE1234F")
    form.set_field("gender", "female")
    form.toggle_education("Bachelors", True)
    form.set_field("salary", 50000)


# ---------------------------------------------------------------------------
# Initialization
# ---------------------------------------------------------------------------


def test_initial_values_are_defaults():
    form = build_form()

    assert form.value() == {
        "first_name": "",
        "last_name": "",
        "date_of_birth": None,
        "age": 0,
        "address": "",
        "city": "",
        "postal_code": "",
        "tax_id": "",
        "gender": "male",
        "education_levels": [],
        "salary": 0,
        "social_profiles": [],
    }
    assert all(not field.touched for _, field in form.iter_fields())


def test_initialize_resets_edits():
    form = build_form()
    fill_jane(form)
    form.add_social_profile()

    form.initialize()

    assert form.get_field("first_name").value == ""
    assert form.get_field("age").value == 0
    assert form.social_profiles == []
    form.set_field("date_of_birth", date(2000, 1, 1))
    assert form.get_field("age").value == 26


# ---------------------------------------------------------------------------
# Age derivation
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "birth, expected",
    [
        (date(2000, 6, 15), 26),
        (date(2000, 10, 19), 26),
        (date(2000, 10, 20), 25),
        (date(2000, 12, 1), 25),
        (date(2026, 10, 19), 0),
    ],
)
def test_age_follows_date_of_birth(birth, expected):
    form = build_form()

    form.set_field("date_of_birth", birth)

    assert form.get_field("age").value == expected


def test_age_accepts_iso_string_input():
    form = build_form()

    form.set_field("date_of_birth", "1990-11-02")

    assert form.get_field("date_of_birth").value == date(1990, 11, 2)
    assert form.get_field("age").value == 35


def test_leap_day_birthday_counts_from_march():
    assert calculate_age(date(2000, 2, 29), date(2025, 2, 28)) == 24
    assert calculate_age(date(2000, 2, 29), date(2025, 3, 1)) == 25


def test_clearing_date_of_birth_keeps_last_age():
    form = build_form()
    form.set_field("date_of_birth", date(2000, 6, 15))

    form.set_field("date_of_birth", "")

    assert form.get_field("date_of_birth").value is None
    assert form.get_field("age").value == 26
    assert "date_of_birth" in form.validate()


def test_age_is_read_only():
    form = build_form()

    with pytest.raises(ReadOnlyFieldError):
        form.set_field("age", 40)
    with pytest.raises(ReadOnlyFieldError):
        form.on_change("age", lambda value: None)


def test_change_observers_run_synchronously_without_reentry():
    form = build_form()
    seen = []

    def echo_city(value):
        seen.append(value)
        form.set_field("city", value.upper())

    form.on_change("city", echo_city)
    form.set_field("city", "london")

    assert seen == ["london"]
    assert form.get_field("city").value == "LONDON"


def test_unsubscribed_observer_is_not_called():
    form = build_form()
    seen = []

    unsubscribe = form.on_change("address", seen.append)
    form.set_field("address", "first value")
    unsubscribe()
    form.set_field("address", "second value")

    assert seen == ["first value"]


# ---------------------------------------------------------------------------
# Social profiles
# ---------------------------------------------------------------------------


def test_add_social_profile_returns_index_with_defaults():
    form = build_form()

    assert form.add_social_profile() == 0
    assert form.add_social_profile() == 1
    assert form.value()["social_profiles"][1] == {
        "platform": "Facebook",
        "email": "",
        "username": "",
        "channel_name": "",
    }


def test_add_then_remove_restores_previous_list():
    form = build_form()
    form.add_social_profile()
    form.set_field("social_profiles.0.username", "first")
    before = form.value()["social_profiles"]

    index = form.add_social_profile()
    form.remove_social_profile(index)

    assert form.value()["social_profiles"] == before


def test_remove_keeps_order_of_remaining_profiles():
    form = build_form()
    for name in ("a", "b", "c"):
        index = form.add_social_profile()
        form.set_field(f"social_profiles.{index}.username", name)

    form.remove_social_profile(1)

    assert [p["username"] for p in form.value()["social_profiles"]] == ["a", "c"]


@pytest.mark.parametrize("index", [5, 2, -1])
def test_remove_out_of_range_raises_and_leaves_list(index):
    form = build_form()
    form.add_social_profile()
    form.add_social_profile()

    with pytest.raises(SocialProfileIndexError) as excinfo:
        form.remove_social_profile(index)

    assert isinstance(excinfo.value, IndexError)
    assert len(form.social_profiles) == 2


def test_invalid_platform_is_rejected():
    form = build_form()
    form.add_social_profile()

    form.set_field("social_profiles.0.platform", "YouTube")
    with pytest.raises(FieldValueError):
        form.set_field("social_profiles.0.platform", "MySpace")

    assert form.get_field("social_profiles.0.platform").value == "YouTube"


def test_unknown_paths_raise():
    form = build_form()

    with pytest.raises(UnknownFieldError):
        form.get_field("nickname")
    with pytest.raises(UnknownFieldError):
        form.get_field("social_profiles.x.email")
    with pytest.raises(SocialProfileIndexError):
        form.get_field("social_profiles.0.email")


# ---------------------------------------------------------------------------
# Education checklist
# ---------------------------------------------------------------------------


def test_toggle_education_is_idempotent():
    form = build_form()

    form.toggle_education("Masters", True)
    form.toggle_education("Masters", True)
    assert form.get_field("education_levels").value == ["Masters"]

    form.toggle_education("Masters", False)
    form.toggle_education("Masters", False)
    assert form.get_field("education_levels").value == []


def test_toggle_education_rejects_unknown_level():
    form = build_form()

    with pytest.raises(UnknownEducationLevelError):
        form.toggle_education("Kindergarten", True)


def test_set_education_levels_deduplicates():
    form = build_form()

    form.set_field("education_levels", ["PhD", "Bachelors", "PhD"])

    assert form.get_field("education_levels").value == ["PhD", "Bachelors"]


# ---------------------------------------------------------------------------
# Validation and submission
# ---------------------------------------------------------------------------


def test_validate_reports_every_empty_required_field_and_touches():
    form = build_form()
    form.add_social_profile()

    failures = form.validate()

    assert failures == {
        "first_name",
        "last_name",
        "date_of_birth",
        "address",
        "city",
        "postal_code",
        "tax_id",
        "education_levels",
        "social_profiles.0.email",
        "social_profiles.0.username",
    }
    assert all(field.touched for _, field in form.iter_fields())
    assert form.get_field("first_name").errors == {"required": True}


def test_salary_zero_passes_but_missing_salary_fails():
    form = build_form()
    fill_jane(form)

    form.set_field("salary", 0)
    assert "salary" not in form.validate()

    form.set_field("salary", "")
    assert form.get_field("salary").errors == {"required": True}

    form.set_field("salary", "-5")
    assert "min" in form.get_field("salary").errors


def test_tax_id_pattern_matches_as_substring():
    form = build_form()

    form.set_field("tax_id", "xxABCDE1234Fyy")
    assert form.get_field("tax_id").valid

    form.set_field("tax_id", "ABCD1234F")
    assert "pattern" in form.get_field("tax_id").errors


def test_field_rules_report_specific_errors():
    form = build_form()

    form.set_field("first_name", "J4ne")
    form.set_field("address", "abc")
    form.set_field("postal_code", 12345)
    form.set_field("gender", "other")

    assert "pattern" in form.get_field("first_name").errors
    assert form.get_field("address").errors == {
        "minlength": {"required_length": 5, "actual_length": 3}
    }
    assert form.get_field("postal_code").value == "12345"
    assert "pattern" in form.get_field("postal_code").errors
    assert "one_of" in form.get_field("gender").errors


def test_submit_rejected_leaves_record_unchanged():
    form = build_form()
    fill_jane(form)
    form.set_field("city", "")
    before = form.value()

    result = form.submit()

    assert isinstance(result, Rejected)
    assert result.accepted is False
    assert result.failures == {"city": {"required": True}}
    assert form.value() == before


def test_submit_rejects_invalid_social_email():
    form = build_form()
    fill_jane(form)
    form.add_social_profile()
    form.set_field("social_profiles.0.email", "not-an-email")
    form.set_field("social_profiles.0.username", "janedoe")

    result = form.submit()

    assert isinstance(result, Rejected)
    assert result.failures == {"social_profiles.0.email": {"email": True}}


def test_end_to_end_submission_returns_snapshot():
    form = build_form()
    fill_jane(form)
    index = form.add_social_profile()
    form.set_field(f"social_profiles.{index}.email", "jane@x.com")
    form.set_field(f"social_profiles.{index}.username", "janedoe")

    result = form.submit()

    assert isinstance(result, Accepted)
    record = result.record
    assert isinstance(record, UserRecord)
    assert record.first_name == "Jane"
    assert record.last_name == "Doe"
    assert record.date_of_birth == date(2000, 6, 15)
    assert record.age == calculate_age(date(2000, 6, 15), TODAY) == 26
    assert record.postal_code == "123456"
    assert record.tax_id == "ABCDE1234F"
    assert record.gender.value == "female"
    assert record.education_levels == ["Bachelors"]
    assert record.salary == 50000
    assert len(record.social_profiles) == 1
    assert record.social_profiles[0].platform.value == "Facebook"
    assert record.social_profiles[0].email == "jane@x.com"
    assert record.social_profiles[0].username == "janedoe"


def test_accepted_snapshot_is_detached_from_model():
    form = build_form()
    fill_jane(form)

    result = form.submit()
    form.toggle_education("PhD", True)
    form.set_field("city", "Paris")

    assert result.record.education_levels == ["Bachelors"]
    assert result.record.city == "London"


def test_submit_recomputes_age_for_current_day():
    today = {"value": date(2026, 6, 14)}
    form = FormModel(
        config=Config(education_options=list(EDUCATION), today=None),
        clock=lambda: today["value"],
    )
    fill_jane(form)
    assert form.get_field("age").value == 25

    today["value"] = date(2026, 6, 15)
    result = form.submit()

    assert result.record.age == 26


# ---------------------------------------------------------------------------
# Edge values
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "path, value",
    [
        ("first_name", "Jane\n"),
        ("last_name", "Doe\n"),
        ("postal_code", "123456\n"),
    ],
)
def test_anchored_patterns_reject_trailing_newline(path, value):
    form = build_form()

    form.set_field(path, value)

    assert "pattern" in form.get_field(path).errors


def test_trailing_spaces_in_name_still_submit():
    form = build_form()
    fill_jane(form)
    form.set_field("first_name", "Jane ")

    result = form.submit()

    assert isinstance(result, Accepted)
    assert result.record.first_name == "Jane "


def test_none_channel_name_submits_as_empty_string():
    form = build_form()
    fill_jane(form)
    form.add_social_profile()
    form.set_field("social_profiles.0.email", "jane@x.com")
    form.set_field("social_profiles.0.username", "janedoe")

    form.set_field("social_profiles.0.channel_name", None)
    result = form.submit()

    assert form.get_field("social_profiles.0.channel_name").value == ""
    assert isinstance(result, Accepted)
    assert result.record.social_profiles[0].channel_name == ""


def test_none_text_value_fails_required_instead_of_submitting():
    form = build_form()
    fill_jane(form)

    form.set_field("city", None)
    result = form.submit()

    assert isinstance(result, Rejected)
    assert result.failures == {"city": {"required": True}}


@pytest.mark.parametrize("value", ["nan", "inf", "-inf", float("nan"), float("inf")])
def test_non_finite_salary_is_treated_as_missing(value):
    form = build_form()
    fill_jane(form)

    form.set_field("salary", value)
    result = form.submit()

    assert form.get_field("salary").value is None
    assert isinstance(result, Rejected)
    assert result.failures == {"salary": {"required": True}}


def test_numeric_string_salary_submits():
    form = build_form()
    fill_jane(form)

    form.set_field("salary", " 1234.5 ")
    result = form.submit()

    assert isinstance(result, Accepted)
    assert result.record.salary == 1234.5


@pytest.mark.parametrize(
    "path, value",
    [
        ("social_profiles.0.channel_name", None),
        ("social_profiles.0.channel_name", 42),
        ("social_profiles.0.platform", "LinkedIn"),
        ("postal_code", 654321),
        ("tax_id", "xxABCDE1234F"),
        ("salary", 0),
        ("salary", "0"),
        ("gender", "male"),
        ("date_of_birth", "1999-02-28"),
        ("address", "12345"),
    ],
)
def test_any_validator_passing_edit_yields_accepted(path, value):
    form = build_form()
    fill_jane(form)
    form.add_social_profile()
    form.set_field("social_profiles.0.email", "jane@x.com")
    form.set_field("social_profiles.0.username", "janedoe")

    form.set_field(path, value)

    assert form.valid
    assert isinstance(form.submit(), Accepted)
