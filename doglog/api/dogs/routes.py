# doglog/api/dogs/routes.py
import logging
from flask import Blueprint, request, jsonify, current_app
from marshmallow import ValidationError

from .schemas import DogCreateSchema, DogUpdateSchema, DogResponseSchema

dogs_bp = Blueprint('dogs_bp', __name__)

@dogs_bp.route('/', methods=['POST'])
def create_dog():
    """반려견 등록 API."""
    dog_service = current_app.services['dogs']
    try:
        validated_data = DogCreateSchema().load(request.get_json(silent=True) or {})
        new_dog = dog_service.create_dog(validated_data)
        return jsonify(DogResponseSchema().dump(new_dog.to_dict())), 201
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except Exception as e:
        logging.error(f"Dog creation API error: {e}", exc_info=True)
        return jsonify({"error_code": "DOG_CREATION_FAILED", "message": "반려견 등록 중 오류가 발생했습니다."}), 500

@dogs_bp.route('/', methods=['GET'])
def list_dogs():
    """등록된 반려견 목록 조회 API."""
    dog_service = current_app.services['dogs']
    try:
        dogs = dog_service.list_dogs()
        return jsonify(DogResponseSchema(many=True).dump([dog.to_dict() for dog in dogs])), 200
    except Exception as e:
        logging.error(f"List dogs API error: {e}", exc_info=True)
        return jsonify({"error_code": "FETCH_FAILED", "message": "반려견 목록 조회 중 오류가 발생했습니다."}), 500

@dogs_bp.route('/<string:dog_id>', methods=['GET'])
def get_dog(dog_id: str):
    """반려견 프로필 조회 API."""
    dog_service = current_app.services['dogs']
    try:
        dog = dog_service.get_dog(dog_id)
        return jsonify(DogResponseSchema().dump(dog.to_dict())), 200
    except FileNotFoundError as e:
        return jsonify({"error_code": "DOG_NOT_FOUND", "message": str(e)}), 404
    except Exception as e:
        logging.error(f"Get dog API error (dog_id: {dog_id}): {e}", exc_info=True)
        return jsonify({"error_code": "FETCH_FAILED", "message": "프로필 조회 중 오류가 발생했습니다."}), 500

@dogs_bp.route('/<string:dog_id>', methods=['PATCH'])
def update_dog(dog_id: str):
    """반려견 프로필 부분 수정 API."""
    dog_service = current_app.services['dogs']
    try:
        update_data = DogUpdateSchema().load(request.get_json(silent=True) or {})
        updated_dog = dog_service.update_dog(dog_id, update_data)
        return jsonify(DogResponseSchema().dump(updated_dog.to_dict())), 200
    except ValidationError as err:
        return jsonify({"error_code": "VALIDATION_ERROR", "details": err.messages}), 400
    except ValueError as e:
        return jsonify({"error_code": "EMPTY_UPDATE", "message": str(e)}), 400
    except FileNotFoundError as e:
        return jsonify({"error_code": "DOG_NOT_FOUND", "message": str(e)}), 404
    except Exception as e:
        logging.error(f"Update dog API error (dog_id: {dog_id}): {e}", exc_info=True)
        return jsonify({"error_code": "INTERNAL_SERVER_ERROR", "message": "프로필 수정 중 오류가 발생했습니다."}), 500

@dogs_bp.route('/<string:dog_id>', methods=['DELETE'])
def delete_dog(dog_id: str):
    """반려견 삭제 API. 모든 활동/평가 기록도 함께 삭제됩니다."""
    dog_service = current_app.services['dogs']
    try:
        dog_service.delete_dog(dog_id)
        return '', 204
    except FileNotFoundError as e:
        return jsonify({"error_code": "DOG_NOT_FOUND", "message": str(e)}), 404
    except Exception as e:
        logging.error(f"Delete dog API error (dog_id: {dog_id}): {e}", exc_info=True)
        return jsonify({"error_code": "DELETE_FAILED", "message": "반려견 삭제 중 오류가 발생했습니다."}), 500
