"""Date/time actions: unix mode, locale formatting and input errors."""
# @file purpose: Test date/time actions.

from datetime import datetime, timezone

from content_actions.core.context import ActionContext
from content_actions.core.controller.runner import execute
from content_actions.core.result import FAILURE_CODE, SUCCESS_CODE


def _epoch(*args: int) -> str:
    return str(int(datetime(*args, tzinfo=timezone.utc).timestamp()))


def test_offset_unix_timestamp_input() -> None:
    res = execute("offset_time_by", {"date": "0", "offset": "3600", "localeLang": "unix"})
    assert res.to_outputs() == {"returnCode": SUCCESS_CODE, "returnResult": "3600"}


def test_offset_iso_input_negative_offset() -> None:
    res = execute(
        "offset_time_by",
        {"date": "2016-04-25T10:00:00Z", "offset": "-60", "localeLang": "UNIX", "localeCountry": "US"},
    )
    assert res.to_outputs()["returnResult"] == _epoch(2016, 4, 25, 9, 59)


def test_naive_iso_input_is_utc() -> None:
    res = execute("offset_time_by", {"date": "2016-04-25T10:00:00", "offset": "0", "localeLang": "unix"})
    assert res.to_outputs()["returnResult"] == _epoch(2016, 4, 25, 10, 0)


def test_default_locale_is_english() -> None:
    res = execute("offset_time_by", {"date": "2016-04-25T10:00:00Z", "offset": "0"})
    assert res.to_outputs()["returnResult"].startswith("April 25, 2016")


def test_country_ignored_without_language() -> None:
    res = execute(
        "offset_time_by", {"date": "2016-04-25T10:00:00Z", "offset": "0", "localeCountry": "FR"}
    )
    assert res.to_outputs()["returnResult"].startswith("April 25, 2016")


def test_locale_formatting() -> None:
    res = execute(
        "offset_time_by",
        {"date": "2016-04-25T10:00:00Z", "offset": "86400", "localeLang": "fr", "localeCountry": "fr"},
    )
    out = res.to_outputs()
    assert out["returnCode"] == SUCCESS_CODE
    assert "26 avril 2016" in out["returnResult"]


def test_unknown_locale_fails() -> None:
    out = execute(
        "offset_time_by", {"date": "0", "offset": "0", "localeLang": "xx"}
    ).to_outputs()
    assert out["returnCode"] == FAILURE_CODE
    assert out["returnResult"] == "Unknown locale: xx"


def test_bad_date_fails() -> None:
    out = execute("offset_time_by", {"date": "yesterday", "offset": "1"}).to_outputs()
    assert out["returnCode"] == FAILURE_CODE
    assert out["returnResult"] == "The date is not an ISO 8601 date or unix timestamp: yesterday"


def test_missing_offset_fails() -> None:
    out = execute("offset_time_by", {"date": "0"}).to_outputs()
    assert out["returnResult"] == "The offset can't be null or empty."


def test_bad_offset_fails() -> None:
    out = execute("offset_time_by", {"date": "0", "offset": "1.5"}).to_outputs()
    assert out["returnResult"] == "The offset must be an integer, got: 1.5"


def test_current_date_time_uses_context_clock(fixed_clock_ctx: ActionContext) -> None:
    res = execute("get_current_date_time", {"localeLang": "unix"}, fixed_clock_ctx)
    assert res.to_outputs()["returnResult"] == "1577836800"
    res = execute("get_current_date_time", {}, fixed_clock_ctx)
    assert res.to_outputs()["returnResult"].startswith("January 1, 2020")


def test_unlisted_language_country_pair_uses_language() -> None:
    out = execute(
        "offset_time_by",
        {"date": "2016-04-25T10:00:00Z", "offset": "0", "localeLang": "ja", "localeCountry": "US"},
    ).to_outputs()
    assert out["returnCode"] == SUCCESS_CODE
    assert "2016年4月25日" in out["returnResult"]


def test_unknown_language_with_country_fails() -> None:
    out = execute(
        "offset_time_by", {"date": "0", "offset": "0", "localeLang": "xx", "localeCountry": "US"}
    ).to_outputs()
    assert out["returnResult"] == "Unknown locale: xx"


def test_offset_out_of_range_names_offset() -> None:
    out = execute(
        "offset_time_by", {"date": "0", "offset": "999999999999999", "localeLang": "unix"}
    ).to_outputs()
    assert out["returnCode"] == FAILURE_CODE
    assert out["returnResult"] == "The offset moves the date out of range: 999999999999999"
