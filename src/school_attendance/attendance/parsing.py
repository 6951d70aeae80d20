"""Request-shape validation for attendance marking.

Everything here runs before the database is touched: a bad date, a
non-list or an oversized batch rejects the whole request, while individual
records are only coerced into MarkEntry (bad ones get skipped later).
"""

from __future__ import annotations

from ..common.datetime_utils import parse_iso_date
from ..common.validators import coerce_positive_int, require_json_object
from ..core.constants import MAX_RECORDS_PER_MARK
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .model import MarkEntry, MarkRequest

# accepted spellings of the record identifier, first usable one wins
ID_FIELDS = ("student_id", "id")


def normalize_record(index: int, raw: dict) -> MarkEntry:
    student_id = None
    for name in ID_FIELDS:
        student_id = coerce_positive_int(raw.get(name))
        if student_id is not None:
            break
    return MarkEntry(index=index, student_id=student_id, status=AttendanceStatus.parse(raw.get("status")), raw=raw)


def parse_mark_request(payload) -> MarkRequest:
    body = require_json_object(payload)

    records = body.get("records")
    if body.get("date") in (None, "") or records is None or not isinstance(records, list):
        raise ValidationError("Invalid request body")

    if len(records) > MAX_RECORDS_PER_MARK:
        raise ValidationError(f"Too many records in one request (limit {MAX_RECORDS_PER_MARK})")

    day = parse_iso_date(body["date"])

    entries = []
    for index, raw in enumerate(records):
        if not isinstance(raw, dict):
            raise ValidationError("Each record must be an object")
        entries.append(normalize_record(index, raw))
    return MarkRequest(day=day, entries=entries)
