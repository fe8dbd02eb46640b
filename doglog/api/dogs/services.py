# doglog/api/dogs/services.py
import logging
import uuid
from typing import Dict, Any, List

from firebase_admin import firestore

from doglog.models.dog import Dog, DogGender
from doglog.utils.datetime_utils import DateTimeUtils

class DogService:
    """반려견 프로필의 생성/조회/수정/삭제를 전담하는 서비스."""
    def __init__(self, analysis_gateway=None, db=None):
        self.db = db or firestore.client()
        self.dogs_ref = self.db.collection('dogs')
        self.activities_ref = self.db.collection('activities')
        self.ratings_ref = self.db.collection('daily_ratings')
        self.analysis_gateway = analysis_gateway
        logging.info("DogService initialized.")

    def create_dog(self, dog_data: Dict[str, Any]) -> Dog:
        dog_id = str(uuid.uuid4())
        gender = dog_data.get('gender')
        new_dog = Dog(
            dog_id=dog_id,
            name=dog_data['name'],
            breed=dog_data.get('breed'),
            birthdate=dog_data.get('birthdate'),
            gender=DogGender(gender) if gender else None,
            notes=dog_data.get('notes'),
            created_at=DateTimeUtils.now(),
        )
        try:
            self.dogs_ref.document(dog_id).set(DateTimeUtils.for_firestore(new_dog.to_dict()))
        except Exception as e:
            logging.error(f"Failed to create dog profile: {e}", exc_info=True)
            raise
        logging.info(f"Dog profile created: {dog_id}")
        return new_dog

    def get_dog(self, dog_id: str) -> Dog:
        doc = self.dogs_ref.document(dog_id).get()
        if not doc.exists:
            raise FileNotFoundError("해당 ID의 반려견을 찾을 수 없습니다.")
        return Dog.from_dict(DateTimeUtils.from_firestore(doc.to_dict()))

    def list_dogs(self) -> List[Dog]:
        """등록 순서대로 모든 반려견을 반환합니다."""
        dogs = [Dog.from_dict(DateTimeUtils.from_firestore(doc.to_dict())) for doc in self.dogs_ref.stream()]
        return sorted(dogs, key=lambda d: (d.created_at is None, d.created_at or DateTimeUtils.now()))

    def update_dog(self, dog_id: str, update_data: Dict[str, Any]) -> Dog:
        """반려견 프로필을 부분 업데이트합니다. dog_id 는 변경할 수 없습니다."""
        if not update_data:
            raise ValueError("수정할 데이터가 제공되지 않았습니다.")

        dog_ref = self.dogs_ref.document(dog_id)
        if not dog_ref.get().exists:
            raise FileNotFoundError("해당 ID의 반려견을 찾을 수 없습니다.")

        dog_ref.update(DateTimeUtils.for_firestore(dict(update_data)))
        logging.info(f"Dog profile updated for {dog_id} with fields: {list(update_data.keys())}")
        return self.get_dog(dog_id)

    def delete_dog(self, dog_id: str) -> None:
        """반려견과 그 반려견의 모든 활동/평가 기록을 함께 삭제하고 AI 분석 캐시를 비웁니다."""
        dog_ref = self.dogs_ref.document(dog_id)
        if not dog_ref.get().exists:
            raise FileNotFoundError("해당 ID의 반려견을 찾을 수 없습니다.")

        batch = self.db.batch()
        activity_count = 0
        for doc in self.activities_ref.where('dog_id', '==', dog_id).stream():
            batch.delete(doc.reference)
            activity_count += 1
        rating_count = 0
        for doc in self.ratings_ref.where('dog_id', '==', dog_id).stream():
            batch.delete(doc.reference)
            rating_count += 1
        batch.delete(dog_ref)

        try:
            batch.commit()
        except Exception as e:
            logging.error(f"Failed to delete dog {dog_id}: {e}", exc_info=True)
            raise

        if self.analysis_gateway:
            self.analysis_gateway.invalidate_cache(dog_id)
        logging.info(f"Dog {dog_id} deleted with {activity_count} activities and {rating_count} ratings")
