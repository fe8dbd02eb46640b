# doglog/api/daily_logs/schemas.py
from datetime import timezone
from marshmallow import Schema, fields, validate

from doglog.models.outcome import Outcome

OUTCOME_VALUES = [e.value for e in Outcome]

class ActivityEntrySchema(Schema):
    """하루 기록에 포함되는 활동 한 건."""
    activity_type = fields.Str(required=True, validate=[validate.Length(min=1, max=50), validate.Regexp(r'.*\S', error="활동 이름이 비어 있습니다.")])
    outcome = fields.Str(required=True, validate=validate.OneOf(OUTCOME_VALUES))
    notes = fields.Str(allow_none=True, validate=validate.Length(max=1000))
    # 생략 가능. 날짜는 입력한 시간대 기준으로 판단하고 시각은 UTC 로 저장합니다. 시간대가 없으면 UTC 로 간주합니다.
    logged_at = fields.AwareDateTime(allow_none=True, default_timezone=timezone.utc)

class DayLogSchema(Schema):
    """PUT /api/dogs/<dog_id>/days/<date> 하루 기록 저장 요청 스키마 (기존 기록을 교체)."""
    activities = fields.List(fields.Nested(ActivityEntrySchema), load_default=list)
    rating = fields.Str(allow_none=True, load_default=None, validate=validate.OneOf(OUTCOME_VALUES))
    notes = fields.Str(allow_none=True, load_default=None, validate=validate.Length(max=2000))

class CalendarQuerySchema(Schema):
    """GET /api/dogs/<dog_id>/calendar 쿼리 파라미터 스키마."""
    month = fields.Str(required=True, validate=validate.Regexp(r'^\d{4}-(0[1-9]|1[0-2])$', error="month 는 YYYY-MM 형식이어야 합니다."))

class CustomActivitySchema(Schema):
    """POST /api/activity-types 사용자 정의 활동 추가 요청 스키마."""
    name = fields.Str(required=True, validate=[validate.Length(min=1, max=50), validate.Regexp(r'.*\S', error="활동 이름이 비어 있습니다.")])

class ActivityResponseSchema(Schema):
    activity_id = fields.Str()
    date = fields.DateTime()
    activity_type = fields.Str()
    outcome = fields.Str()
    notes = fields.Str(allow_none=True)
    logged_at = fields.DateTime(allow_none=True)

class DailyRatingResponseSchema(Schema):
    rating_id = fields.Str()
    date = fields.DateTime()
    rating = fields.Str(allow_none=True)
    notes = fields.Str(allow_none=True)
    saved_at = fields.DateTime(allow_none=True)

class DayLogResponseSchema(Schema):
    """하루 기록 조회/저장 응답 스키마."""
    date = fields.Date()
    activities = fields.List(fields.Nested(ActivityResponseSchema))
    rating = fields.Nested(DailyRatingResponseSchema, allow_none=True)

class CalendarDaySchema(Schema):
    date = fields.Str()
    activity_count = fields.Int()
    rating = fields.Str(allow_none=True)
    has_notes = fields.Bool()
