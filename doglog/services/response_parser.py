# doglog/services/response_parser.py
"""
모델 응답 텍스트에서 JSON 객체를 추출하고 구조화된 결과로 변환합니다.
모델이 JSON 앞뒤에 설명 문장을 덧붙이는 경우가 있으므로
첫 '{' 부터 마지막 '}' 까지만 잘라내어 해석합니다.
"""
import json
from typing import Dict, Any

from marshmallow import ValidationError

from doglog.core.errors import MalformedResponseError
from doglog.models.llm_analysis import LLMAnalysis, TrainingPlan
from doglog.schemas.llm_analysis_schema import LLMAnalysisSchema, TrainingPlanSchema


def extract_json_object(content: str) -> Dict[str, Any]:
    if not content:
        raise MalformedResponseError("AI 응답이 비어 있습니다.")

    start = content.find('{')
    end = content.rfind('}')
    if start == -1 or end < start:
        raise MalformedResponseError("AI 응답에서 JSON 객체를 찾을 수 없습니다.")

    try:
        parsed = json.loads(content[start:end + 1])
    except ValueError as e:
        raise MalformedResponseError(f"AI 응답 JSON 디코딩 실패: {e}")

    if not isinstance(parsed, dict):
        raise MalformedResponseError("AI 응답이 JSON 객체가 아닙니다.")
    return parsed


def parse_analysis(content: str) -> LLMAnalysis:
    try:
        return LLMAnalysisSchema().load(extract_json_object(content))
    except ValidationError as err:
        raise MalformedResponseError(f"AI 분석 응답 형식이 올바르지 않습니다: {err.messages}")


def parse_training_plan(content: str) -> TrainingPlan:
    try:
        return TrainingPlanSchema().load(extract_json_object(content))
    except ValidationError as err:
        raise MalformedResponseError(f"훈련 계획 응답 형식이 올바르지 않습니다: {err.messages}")
