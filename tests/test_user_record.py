"""Tests for campus_checkin.models.user_record — schema validation and serialization."""

import json

import pytest

from campus_checkin.core.errors import InvalidRecord
from campus_checkin.models.user_record import UserRecord, dump_record, parse_record


def _raw(record, **changes):
    data = record.model_dump(mode="json")
    data.update(changes)
    return json.dumps(data)


class TestParseRecord:
    def test_round_trip(self, make_record):
        record = make_record(skip_count=3, in_campus=False)
        assert parse_record(dump_record(record), "user:1001") == record

    def test_chinese_fields_survive(self, make_record):
        record = make_record()
        raw = dump_record(record)
        assert "北京航空航天大学" in raw
        assert parse_record(raw, "user:1001").address == record.address

    def test_invalid_json(self):
        with pytest.raises(InvalidRecord) as exc_info:
            parse_record("{not json", "user:1")
        assert exc_info.value.key == "user:1"
        assert exc_info.value.issues[0][0] == "<root>"

    @pytest.mark.parametrize("hour", [15, 20, 0])
    def test_hour_outside_domain(self, make_record, hour):
        with pytest.raises(InvalidRecord) as exc_info:
            parse_record(_raw(make_record(), checkin_hour=hour), "user:1001")
        assert exc_info.value.issues[0][0] == "checkin_hour"

    def test_minute_outside_domain(self, make_record):
        with pytest.raises(InvalidRecord):
            parse_record(_raw(make_record(), checkin_minute=15), "user:1001")

    def test_negative_skip_rejected(self, make_record):
        with pytest.raises(InvalidRecord) as exc_info:
            parse_record(_raw(make_record(), skip_count=-1), "user:1001")
        assert exc_info.value.issues == [("skip_count", exc_info.value.issues[0][1])]

    def test_missing_field_reports_path(self, make_record):
        data = make_record().model_dump(mode="json")
        del data["location"]["latitude"]
        with pytest.raises(InvalidRecord) as exc_info:
            parse_record(json.dumps(data), "user:1001")
        assert exc_info.value.issues[0][0] == "location.latitude"

    def test_unknown_field_rejected(self, make_record):
        with pytest.raises(InvalidRecord):
            parse_record(_raw(make_record(), hh=17), "user:1001")

    @pytest.mark.parametrize("field,value", [
        ("checkin_minute", False),
        ("checkin_hour", "17"),
        ("skip_count", True),
        ("chat_id", "1001"),
        ("in_campus", 1),
    ])
    def test_no_type_coercion(self, make_record, field, value):
        with pytest.raises(InvalidRecord) as exc_info:
            parse_record(_raw(make_record(), **{field: value}), "user:1001")
        assert exc_info.value.issues[0][0] == field

    def test_record_is_immutable(self, make_record):
        record = make_record()
        with pytest.raises(Exception):
            record.skip_count = 5
        assert isinstance(record, UserRecord)
