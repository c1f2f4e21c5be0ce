"""
Date/time actions (local computation, no network):
- offset_time_by: shift a date by N seconds
- get_current_date_time: current time from the context clock

Both render the result the same way:
- localeLang "unix"  -> epoch seconds, localeCountry ignored
- localeLang given   -> Babel long datetime format for that locale, in UTC;
                       a pair CLDR does not list (ja_US) uses the language alone
- localeLang absent  -> settings.locale_lang/locale_country, localeCountry ignored
"""
# @file purpose: Implement and register date/time actions.

from __future__ import annotations

import logging
import re
from datetime import datetime, timedelta, timezone
from typing import Annotated, Any, Optional

from babel import Locale, UnknownLocaleError
from babel.dates import format_datetime
from pydantic import BeforeValidator
from pydantic_core import PydanticCustomError

from ..core.context import ActionContext
from ..core.errors import InputValidationError
from ..core.registry import action
from ..core.settings import settings
from ..core.validators import ActionParams, IntStr

logger = logging.getLogger(__name__)

UNIX = "unix"

_EPOCH_SECONDS = re.compile(r"-?\d+")


def parse_date(value: Any) -> datetime:
    """Epoch seconds or ISO 8601; naive values are taken as UTC."""
    if isinstance(value, datetime):
        moment = value
    else:
        text = "" if value is None else str(value).strip()
        if not text:
            raise PydanticCustomError("null_or_empty", "can't be null or empty")
        try:
            if _EPOCH_SECONDS.fullmatch(text):
                moment = datetime.fromtimestamp(int(text), tz=timezone.utc)
            else:
                moment = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except (ValueError, OverflowError, OSError):
            raise PydanticCustomError(
                "invalid_date",
                "not an ISO 8601 date or unix timestamp: {value}",
                {"value": text},
            ) from None
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


DateInput = Annotated[datetime, BeforeValidator(parse_date)]


class LocaleInputs(ActionParams):
    locale_lang: Optional[str] = None
    locale_country: Optional[str] = None


class OffsetTimeByParams(LocaleInputs):
    date: DateInput
    offset: IntStr


def resolve_locale(lang: Optional[str], country: Optional[str]) -> Locale:
    if not lang:
        lang, country = settings.locale_lang, settings.locale_country
    language = lang.strip().lower()
    if country:
        try:
            return Locale(language, country.strip().upper())
        except (UnknownLocaleError, ValueError):
            # CLDR has no data for every pair (ja_US); the language alone still formats
            logger.debug("no locale data for %s_%s, using %s", lang, country, language)
    try:
        return Locale(language)
    except (UnknownLocaleError, ValueError) as e:
        raise InputValidationError("localeLang", f"Unknown locale: {lang}") from e


def render(moment: datetime, lang: Optional[str], country: Optional[str]) -> str:
    if lang and lang.strip().lower() == UNIX:
        return str(int(moment.timestamp()))
    locale = resolve_locale(lang, country)
    return format_datetime(moment.astimezone(timezone.utc), format="long", locale=locale)


@action("offset_time_by", params_model=OffsetTimeByParams)
def offset_time_by(ctx: ActionContext, params: OffsetTimeByParams) -> str:
    """Change the time represented by a date by the specified number of seconds."""
    try:
        moment = params.date + timedelta(seconds=params.offset)
    except OverflowError as e:
        raise InputValidationError(
            "offset", f"The offset moves the date out of range: {params.offset}"
        ) from e
    return render(moment, params.locale_lang, params.locale_country)


@action("get_current_date_time", params_model=LocaleInputs)
def get_current_date_time(ctx: ActionContext, params: LocaleInputs) -> str:
    """Current date and time, formatted for the locale."""
    return render(ctx.clock(), params.locale_lang, params.locale_country)
