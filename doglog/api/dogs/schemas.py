# doglog/api/dogs/schemas.py
from marshmallow import Schema, fields, validate

from doglog.models.dog import DogGender

class DogCreateSchema(Schema):
    """POST /api/dogs/ 반려견 등록 요청 스키마."""
    name = fields.Str(required=True, validate=validate.Length(min=1, max=50))
    breed = fields.Str(allow_none=True, validate=validate.Length(max=50))
    birthdate = fields.Date(allow_none=True, format="%Y-%m-%d")
    gender = fields.Str(allow_none=True, validate=validate.OneOf([e.value for e in DogGender]))
    notes = fields.Str(allow_none=True, validate=validate.Length(max=1000))

class DogUpdateSchema(Schema):
    """PATCH /api/dogs/<dog_id> 부분 수정 스키마. 이름을 제외한 필드는 null 로 비울 수 있습니다."""
    name = fields.Str(validate=validate.Length(min=1, max=50))
    breed = fields.Str(allow_none=True, validate=validate.Length(max=50))
    birthdate = fields.Date(allow_none=True, format="%Y-%m-%d")
    gender = fields.Str(allow_none=True, validate=validate.OneOf([e.value for e in DogGender]))
    notes = fields.Str(allow_none=True, validate=validate.Length(max=1000))

class DogResponseSchema(Schema):
    """반려견 프로필 응답 스키마."""
    dog_id = fields.Str(dump_only=True)
    name = fields.Str()
    breed = fields.Str(allow_none=True)
    birthdate = fields.Date(allow_none=True)
    gender = fields.Str(allow_none=True)
    notes = fields.Str(allow_none=True)
    created_at = fields.DateTime(allow_none=True)
