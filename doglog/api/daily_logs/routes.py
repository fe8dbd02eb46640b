# doglog/api/daily_logs/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from doglog.utils.datetime_utils import DateTimeUtils
from .schemas import (
    DayLogSchema, DayLogResponseSchema, CalendarQuerySchema, CalendarDaySchema,
    CustomActivitySchema,
)

daily_logs_bp = Blueprint('daily_logs_bp', __name__)

def _parse_day(date_str: str):
    try:
        return DateTimeUtils.parse_date_string(date_str)
    except ValueError:
        raise ValidationError({"date": ["날짜는 YYYY-MM-DD 형식이어야 합니다."]})

# =====================================================================================
# 하루 기록
# =====================================================================================
@daily_logs_bp.route('/dogs/<string:dog_id>/days/<string:date_str>', methods=['GET'])
def get_day_log(dog_id: str, date_str: str):
    """특정 날짜의 활동/평가 기록 조회 API."""
    daily_log_service = current_app.services['daily_logs']
    try:
        day = _parse_day(date_str)
        day_log = daily_log_service.get_day(dog_id, day)
        return jsonify(DayLogResponseSchema().dump(day_log)), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except FileNotFoundError as e:
        return jsonify({"error_code": "DOG_NOT_FOUND", "message": str(e)}), 404
    except Exception as e:
        logging.error(f"Get day log API error (dog_id: {dog_id}, date: {date_str}): {e}", exc_info=True)
        return jsonify({"error_code": "FETCH_FAILED", "message": "기록 조회 중 오류가 발생했습니다."}), 500

@daily_logs_bp.route('/dogs/<string:dog_id>/days/<string:date_str>', methods=['PUT'])
def save_day_log(dog_id: str, date_str: str):
    """하루 기록 저장 API. 해당 날짜의 기존 기록은 모두 교체됩니다."""
    daily_log_service = current_app.services['daily_logs']
    try:
        day = _parse_day(date_str)
        validated_data = DayLogSchema().load(request.get_json(silent=True) or {})
        day_log = daily_log_service.save_day(dog_id, day, validated_data)
        return jsonify(DayLogResponseSchema().dump(day_log)), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except ValueError as e:
        return jsonify({"error_code": "INVALID_DAY_LOG", "message": str(e)}), 400
    except FileNotFoundError as e:
        return jsonify({"error_code": "DOG_NOT_FOUND", "message": str(e)}), 404
    except Exception as e:
        logging.error(f"Save day log API error (dog_id: {dog_id}, date: {date_str}): {e}", exc_info=True)
        return jsonify({"error_code": "SAVE_FAILED", "message": "기록 저장 중 오류가 발생했습니다."}), 500

@daily_logs_bp.route('/dogs/<string:dog_id>/calendar', methods=['GET'])
def get_calendar(dog_id: str):
    """월간 달력 요약 조회 API. (?month=YYYY-MM)"""
    daily_log_service = current_app.services['daily_logs']
    try:
        query = CalendarQuerySchema().load(request.args)
        month = DateTimeUtils.parse_month_string(query['month'])
        days = daily_log_service.get_month_calendar(dog_id, month)
        return jsonify({"month": query['month'], "days": CalendarDaySchema(many=True).dump(days)}), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except FileNotFoundError as e:
        return jsonify({"error_code": "DOG_NOT_FOUND", "message": str(e)}), 404
    except Exception as e:
        logging.error(f"Calendar API error (dog_id: {dog_id}): {e}", exc_info=True)
        return jsonify({"error_code": "FETCH_FAILED", "message": "달력 조회 중 오류가 발생했습니다."}), 500

# =====================================================================================
# 활동 카탈로그
# =====================================================================================
@daily_logs_bp.route('/activity-types', methods=['GET'])
def get_activity_types():
    """기본 제공 + 사용자 정의 활동 목록 조회 API."""
    catalog_service = current_app.services['activity_catalog']
    try:
        return jsonify(catalog_service.get_catalog()), 200
    except Exception as e:
        logging.error(f"Activity catalog API error: {e}", exc_info=True)
        return jsonify({"error_code": "FETCH_FAILED", "message": "활동 목록 조회 중 오류가 발생했습니다."}), 500

@daily_logs_bp.route('/activity-types', methods=['POST'])
def add_activity_type():
    """사용자 정의 활동 추가 API."""
    catalog_service = current_app.services['activity_catalog']
    try:
        data = CustomActivitySchema().load(request.get_json(silent=True) or {})
        custom = catalog_service.add_custom_activity(data['name'])
        return jsonify({"name": custom.name, "created_at": DateTimeUtils.to_iso_string(custom.created_at)}), 201
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except ValueError as e:
        return jsonify({"error_code": "DUPLICATE_ACTIVITY", "message": str(e)}), 409
    except Exception as e:
        logging.error(f"Add activity type API error: {e}", exc_info=True)
        return jsonify({"error_code": "INTERNAL_SERVER_ERROR", "message": "활동 추가 중 오류가 발생했습니다."}), 500

@daily_logs_bp.route('/activity-types/<string:name>', methods=['DELETE'])
def delete_activity_type(name: str):
    """사용자 정의 활동 삭제 API. (기본 제공 활동은 삭제할 수 없습니다)"""
    catalog_service = current_app.services['activity_catalog']
    try:
        catalog_service.delete_custom_activity(name)
        return '', 204
    except FileNotFoundError as e:
        return jsonify({"error_code": "ACTIVITY_NOT_FOUND", "message": str(e)}), 404
    except Exception as e:
        logging.error(f"Delete activity type API error ({name}): {e}", exc_info=True)
        return jsonify({"error_code": "DELETE_FAILED", "message": "활동 삭제 중 오류가 발생했습니다."}), 500
