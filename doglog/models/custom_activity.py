# doglog/models/custom_activity.py
from dataclasses import dataclass
from datetime import datetime

# 기본 제공 활동 종류 (사용자 정의 활동과 함께 카탈로그를 구성)
PREDEFINED_ACTIVITY_TYPES = [
    "Walk", "Training", "Playtime", "Feeding", "Grooming",
    "Vet Visit", "Socialization", "Rest", "Exercise", "Bath",
]

@dataclass
class CustomActivity:
    """Firestore 'custom_activities' 컬렉션 문서 구조. 이름은 대소문자까지 정확히 비교합니다."""
    activity_id: str
    name: str
    created_at: datetime
