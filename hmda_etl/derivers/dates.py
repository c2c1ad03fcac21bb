from __future__ import annotations

from datetime import date, datetime, timedelta
import math
import re

from hmda_etl.models.canonical import is_blank, to_text

_UNIX_EPOCH = date(1970, 1, 1)
# Days between the spreadsheet epoch (1899-12-30) and 1970-01-01.
_SERIAL_UNIX_OFFSET = 25569
_SERIAL_MIN = 1000
_SERIAL_MAX = 100000
_COMPACT_DATE = re.compile(r"^\d{8}$")


def _format_mdy(value: date) -> str:
    return f"{value.month}/{value.day}/{value:%y}"


def format_hmda_date(value: object) -> str:
    """Render a source date as M/D/YY.

    Accepts date objects, YYYYMMDD strings or numbers, and spreadsheet serial
    day counts. Text that already looks like a date is returned unchanged and
    anything unrecognized comes back as its string form.
    """
    if is_blank(value):
        return ""
    if isinstance(value, (datetime, date)):
        return _format_mdy(value)

    text = to_text(value)
    if isinstance(value, str) and ("/" in text or "-" in text):
        return text
    if _COMPACT_DATE.match(text):
        return f"{int(text[4:6])}/{int(text[6:8])}/{text[2:4]}"

    try:
        serial = float(text)
    except ValueError:
        return text
    if math.isnan(serial) or serial < _SERIAL_MIN or serial > _SERIAL_MAX:
        return text

    days = math.floor(serial) - _SERIAL_UNIX_OFFSET
    return _format_mdy(_UNIX_EPOCH + timedelta(days=days))
