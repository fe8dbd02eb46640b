# doglog/api/insights/schemas.py
from typing import Dict, Any

from marshmallow import Schema, fields, validate

from doglog.analytics.time_range import TimeRange
from doglog.schemas.llm_analysis_schema import LLMAnalysisSchema
from doglog.utils.datetime_utils import DateTimeUtils

class TimeRangeQuerySchema(Schema):
    """
    분석 기간 파라미터.
    - range=all (기본값): 전체 기간
    - range=month: month(YYYY-MM) 로 지정한 달, 생략하면 이번 달
    """
    scope = fields.Str(data_key="range", load_default=TimeRange.ALL_TIME,
                       validate=validate.OneOf([TimeRange.ALL_TIME, TimeRange.THIS_MONTH]))
    month = fields.Str(validate=validate.Regexp(r'^\d{4}-(0[1-9]|1[0-2])$', error="month 는 YYYY-MM 형식이어야 합니다."))

class TrainingPlanRequestSchema(TimeRangeQuerySchema):
    """
    POST /api/dogs/<dog_id>/training-plan 요청 스키마.
    analysis 를 생략하면 같은 기간의 캐시된 분석 결과를 사용합니다.
    """
    analysis = fields.Nested(LLMAnalysisSchema, allow_none=True, load_default=None)

def to_time_range(data: Dict[str, Any]) -> TimeRange:
    """검증된 기간 파라미터를 TimeRange 로 변환합니다."""
    if data.get('scope') == TimeRange.THIS_MONTH:
        month = data.get('month')
        reference = DateTimeUtils.parse_month_string(month) if month else DateTimeUtils.today()
        return TimeRange.this_month(reference)
    return TimeRange.all_time()
