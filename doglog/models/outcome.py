# doglog/models/outcome.py
from enum import Enum
from typing import Optional


class Outcome(str, Enum):
    """활동 결과 및 하루 컨디션 평가에 공통으로 쓰이는 3단계 라벨."""
    GOOD = "good"
    OKAY = "okay"
    BAD = "bad"

    @property
    def score(self) -> float:
        return _SCORES[self]

    @classmethod
    def parse(cls, label: Optional[str]) -> Optional["Outcome"]:
        """
        문자열 라벨을 Outcome 으로 변환합니다.
        대소문자를 포함해 정확히 일치해야 하며, 알 수 없는 값은 None 을 반환합니다.
        """
        if isinstance(label, cls):
            return label
        try:
            return cls(label)
        except ValueError:
            return None


_SCORES = {
    Outcome.GOOD: 1.0,
    Outcome.OKAY: 0.5,
    Outcome.BAD: 0.0,
}

# 알 수 없는 라벨에 부여되는 중립 점수
NEUTRAL_SCORE = 0.5
