# doglog/models/dog.py
from dataclasses import dataclass, asdict
from datetime import date, datetime
from typing import Optional, Dict, Any
from enum import Enum
import logging

class DogGender(Enum):
    MALE = "Male"
    FEMALE = "Female"

@dataclass
class Dog:
    """
    Firestore 'dogs' 컬렉션 문서 구조.
    기록(활동, 하루 평가)의 주인이 되는 반려견 프로필.
    dog_id 는 생성 후 바뀌지 않으며, 나머지 설명 필드는 수정 가능합니다.
    """
    dog_id: str
    name: str
    breed: Optional[str] = None
    birthdate: Optional[date] = None
    gender: Optional[DogGender] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Dog":
        """
        Firestore에서 받은 딕셔너리로부터 Dog 인스턴스를 생성합니다.
        문자열로 저장된 Enum 값과 Timestamp 로 저장된 생일을 변환합니다.
        """
        processed_data = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}

        gender_str = processed_data.get('gender')
        if isinstance(gender_str, str):
            try:
                processed_data['gender'] = DogGender(gender_str)
            except ValueError:
                logging.warning(f"Invalid DogGender value '{gender_str}' for dog {processed_data.get('dog_id')}. Ignoring.")
                processed_data['gender'] = None

        birthdate_obj = processed_data.get('birthdate')
        if isinstance(birthdate_obj, datetime):  # Firestore Timestamp 포함
            processed_data['birthdate'] = birthdate_obj.date()
        elif isinstance(birthdate_obj, str):
            try:
                processed_data['birthdate'] = datetime.strptime(birthdate_obj, "%Y-%m-%d").date()
            except ValueError:
                logging.warning(f"Invalid birthdate format '{birthdate_obj}' for dog {processed_data.get('dog_id')}")
                processed_data['birthdate'] = None

        return cls(**processed_data)

    def to_dict(self) -> Dict[str, Any]:
        dog_dict = asdict(self)
        dog_dict['gender'] = self.gender.value if self.gender else None
        return dog_dict
