# conftest.py
"""
공용 pytest 픽스처

- FakeFirestore: 서비스가 사용하는 Firestore API 일부를 흉내 내는 메모리 저장소
- app / client: create_app('testing', db=FakeFirestore()) 로 만든 Flask 앱과 테스트 클라이언트
- analysis_payload: LLM 분석 응답 JSON 예시
"""
import copy
import uuid

import pytest

from doglog import create_app


class FakeSnapshot:
    def __init__(self, reference, data):
        self.reference = reference
        self.id = reference.id
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return copy.deepcopy(self._data) if self._data is not None else None


class FakeDocument:
    def __init__(self, collection, doc_id):
        self._collection = collection
        self.id = doc_id

    def get(self):
        return FakeSnapshot(self, self._collection._docs.get(self.id))

    def set(self, data):
        self._collection._docs[self.id] = copy.deepcopy(data)

    def update(self, data):
        if self.id not in self._collection._docs:
            raise KeyError(f"No document to update: {self.id}")
        self._collection._docs[self.id].update(copy.deepcopy(data))

    def delete(self):
        self._collection._docs.pop(self.id, None)


_OPERATORS = {
    '==': lambda a, b: a == b,
    '>=': lambda a, b: a is not None and a >= b,
    '<=': lambda a, b: a is not None and a <= b,
    '>': lambda a, b: a is not None and a > b,
    '<': lambda a, b: a is not None and a < b,
}


class FakeQuery:
    def __init__(self, collection, filters=()):
        self._collection = collection
        self._filters = list(filters)

    def where(self, field, op, value):
        return FakeQuery(self._collection, self._filters + [(field, _OPERATORS[op], value)])

    def stream(self):
        for doc_id, data in list(self._collection._docs.items()):
            if all(op(data.get(field), value) for field, op, value in self._filters):
                yield FakeSnapshot(FakeDocument(self._collection, doc_id), data)


class FakeCollection(FakeQuery):
    def __init__(self):
        self._docs = {}
        super().__init__(self)

    def document(self, doc_id=None):
        return FakeDocument(self, doc_id or uuid.uuid4().hex)


class FakeBatch:
    """commit 전까지 쓰기를 모아 두었다가 한 번에 적용합니다."""

    def __init__(self):
        self._operations = []

    def set(self, reference, data):
        self._operations.append(lambda: reference.set(data))

    def update(self, reference, data):
        self._operations.append(lambda: reference.update(data))

    def delete(self, reference):
        self._operations.append(reference.delete)

    def commit(self):
        for operation in self._operations:
            operation()
        self._operations = []


class FakeFirestore:
    def __init__(self):
        self._collections = {}

    def collection(self, name):
        return self._collections.setdefault(name, FakeCollection())

    def batch(self):
        return FakeBatch()


@pytest.fixture
def fake_db():
    return FakeFirestore()


@pytest.fixture
def app(fake_db):
    return create_app('testing', db=fake_db)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def analysis_payload():
    return {
        "summary": "Bori is a bright, food-motivated dog with a steady routine.",
        "breedAnalysis": {
            "breedTraits": ["intelligent", "energetic", "herding instinct"],
            "exerciseNeeds": "At least 60 minutes of vigorous exercise daily.",
            "mentalStimulationNeeds": "Puzzle feeders and short training sessions.",
            "commonIssues": ["nipping", "barking"],
        },
        "ageConsiderations": {
            "developmentalStage": "adult",
            "ageAppropriateExpectations": "Settled energy with consistent manners.",
            "trainingReadiness": "Ready for advanced cues.",
        },
        "behaviorAssessment": {
            "strengths": ["recall", "calm at home"],
            "concerns": ["leash pulling"],
            "overallScore": 82,
            "progressTrend": "improving",
        },
        "trainingRecommendations": [
            {
                "issue": "Leash pulling",
                "technique": "Stop-and-go walking",
                "steps": ["Stop when the leash tightens", "Reward loose leash", "Repeat daily"],
                "duration": "2-3 weeks",
                "frequency": "Every walk",
                "priority": "high",
            }
        ],
        "keyInsights": ["Walks go well", "Mood is stable"],
        "healthIndicators": {
            "exerciseLevel": "good",
            "mentalStimulation": "fair",
            "routineConsistency": "excellent",
        },
    }


@pytest.fixture
def training_plan_payload():
    return {
        "weekTitle": "Perfect Training Week for Bori",
        "weekGoal": "Loose-leash walking",
        "days": [
            {
                "dayName": "Monday",
                "theme": "Foundation Building",
                "activities": [
                    {
                        "time": "7:00 AM",
                        "activity": "Morning Walk",
                        "duration": "20 minutes",
                        "focus": "Physical exercise",
                        "instructions": "Stop whenever the leash tightens.",
                        "trainingGoal": "Loose leash",
                    }
                ],
                "dailyGoal": "Five loose-leash minutes",
                "successMetrics": ["Fewer pulls", "Shorter walk if struggling"],
            }
        ],
        "weeklyTips": ["Keep sessions short"],
        "troubleshooting": {
            "commonIssues": ["Distractions"],
            "solutions": ["Practice in a quiet area first"],
        },
    }
