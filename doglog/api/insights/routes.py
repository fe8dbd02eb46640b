# doglog/api/insights/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from doglog.core.errors import LLMGatewayError
from doglog.schemas.llm_analysis_schema import LLMAnalysisSchema, TrainingPlanSchema
from .schemas import TimeRangeQuerySchema, TrainingPlanRequestSchema, to_time_range
from .services import AnalysisRequiredError

insights_bp = Blueprint('insights_bp', __name__)

def _gateway_error_response(err: LLMGatewayError):
    return jsonify({"error_code": err.error_code, "message": err.message}), err.http_status

@insights_bp.route('/<string:dog_id>/insights', methods=['GET'])
def get_insights(dog_id: str):
    """로컬 패턴 분석 결과 조회 API. (?range=all|month&month=YYYY-MM)"""
    insight_service = current_app.services['insights']
    try:
        time_range = to_time_range(TimeRangeQuerySchema().load(request.args))
        insights = insight_service.get_insights(dog_id, time_range)
        response = {
            "dog_id": dog_id,
            "time_range": time_range.display_name,
            "range_tag": time_range.cache_tag,
            "has_cached_analysis": insight_service.has_cached_analysis(dog_id, time_range),
            **insights.to_dict(),
        }
        return jsonify(response), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except FileNotFoundError as e:
        return jsonify({"error_code": "DOG_NOT_FOUND", "message": str(e)}), 404
    except Exception as e:
        logging.error(f"Insights API error (dog_id: {dog_id}): {e}", exc_info=True)
        return jsonify({"error_code": "ANALYSIS_FAILED", "message": "인사이트 분석 중 오류가 발생했습니다."}), 500

@insights_bp.route('/<string:dog_id>/ai-analysis', methods=['POST'])
def request_ai_analysis(dog_id: str):
    """LLM 전문가 분석 요청 API. 24시간 이내 같은 기간의 결과가 있으면 캐시에서 반환합니다."""
    insight_service = current_app.services['insights']
    try:
        params = request.get_json(silent=True) or request.args.to_dict()
        time_range = to_time_range(TimeRangeQuerySchema().load(params))
        analysis = insight_service.request_ai_analysis(dog_id, time_range)
        return jsonify(LLMAnalysisSchema().dump(analysis)), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except FileNotFoundError as e:
        return jsonify({"error_code": "DOG_NOT_FOUND", "message": str(e)}), 404
    except LLMGatewayError as err:
        return _gateway_error_response(err)
    except Exception as e:
        logging.error(f"AI analysis API error (dog_id: {dog_id}): {e}", exc_info=True)
        return jsonify({"error_code": "INTERNAL_SERVER_ERROR", "message": "AI 분석 중 오류가 발생했습니다."}), 500

@insights_bp.route('/<string:dog_id>/ai-analysis/cached', methods=['GET'])
def get_cached_analysis(dog_id: str):
    """캐시된 AI 분석 결과 조회 API. 없거나 만료되었으면 404."""
    insight_service = current_app.services['insights']
    try:
        time_range = to_time_range(TimeRangeQuerySchema().load(request.args))
        analysis = insight_service.get_cached_analysis(dog_id, time_range)
        if analysis is None:
            return jsonify({"error_code": "ANALYSIS_NOT_CACHED", "message": "캐시된 분석 결과가 없습니다."}), 404
        return jsonify(LLMAnalysisSchema().dump(analysis)), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except FileNotFoundError as e:
        return jsonify({"error_code": "DOG_NOT_FOUND", "message": str(e)}), 404
    except Exception as e:
        logging.error(f"Cached analysis API error (dog_id: {dog_id}): {e}", exc_info=True)
        return jsonify({"error_code": "FETCH_FAILED", "message": "캐시 조회 중 오류가 발생했습니다."}), 500

@insights_bp.route('/<string:dog_id>/ai-analysis/cache', methods=['DELETE'])
def invalidate_analysis_cache(dog_id: str):
    """반려견의 모든 기간 AI 분석 캐시 삭제 API."""
    insight_service = current_app.services['insights']
    try:
        insight_service.invalidate_analysis_cache(dog_id)
        return '', 204
    except FileNotFoundError as e:
        return jsonify({"error_code": "DOG_NOT_FOUND", "message": str(e)}), 404
    except Exception as e:
        logging.error(f"Cache invalidation API error (dog_id: {dog_id}): {e}", exc_info=True)
        return jsonify({"error_code": "DELETE_FAILED", "message": "캐시 삭제 중 오류가 발생했습니다."}), 500

@insights_bp.route('/<string:dog_id>/training-plan', methods=['POST'])
def request_training_plan(dog_id: str):
    """AI 분석 결과를 바탕으로 7일 훈련 계획을 생성하는 API."""
    insight_service = current_app.services['insights']
    try:
        data = TrainingPlanRequestSchema().load(request.get_json(silent=True) or {})
        plan = insight_service.request_training_plan(dog_id, to_time_range(data), data.get('analysis'))
        return jsonify(TrainingPlanSchema().dump(plan)), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except FileNotFoundError as e:
        return jsonify({"error_code": "DOG_NOT_FOUND", "message": str(e)}), 404
    except AnalysisRequiredError as e:
        return jsonify({"error_code": "ANALYSIS_REQUIRED", "message": str(e)}), 409
    except LLMGatewayError as err:
        return _gateway_error_response(err)
    except Exception as e:
        logging.error(f"Training plan API error (dog_id: {dog_id}): {e}", exc_info=True)
        return jsonify({"error_code": "INTERNAL_SERVER_ERROR", "message": "훈련 계획 생성 중 오류가 발생했습니다."}), 500
