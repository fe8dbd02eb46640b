# doglog/analytics/scoring.py
"""
라벨('good'/'okay'/'bad') <-> 점수 변환 및 공통 통계 함수.
모든 분석기가 알 수 없는 라벨을 동일하게 처리하도록 점수 변환은 이 모듈에서만 합니다.
"""
from typing import Iterable, List, Optional

from doglog.models.outcome import Outcome, NEUTRAL_SCORE


def score_of(label: Optional[str]) -> float:
    """good -> 1.0, okay -> 0.5, bad -> 0.0, 그 외 모든 값 -> 0.5"""
    outcome = Outcome.parse(label)
    if outcome is None:
        return NEUTRAL_SCORE
    return outcome.score


def label_for_score(score: float) -> str:
    """평균 점수를 다시 라벨로 변환 (0.75 이상 good, 0.25 이상 okay)"""
    if score >= 0.75:
        return Outcome.GOOD.value
    if score >= 0.25:
        return Outcome.OKAY.value
    return Outcome.BAD.value


def mean(values: List[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def mean_score(labels: Iterable[Optional[str]]) -> float:
    return mean([score_of(label) for label in labels])


def consistency(labels: Iterable[Optional[str]]) -> float:
    """
    점수의 모분산으로부터 일관성을 계산합니다: max(0, 1 - variance).
    기록이 하나면 1.0, 없으면 0.0 입니다.
    """
    scores = [score_of(label) for label in labels]
    if not scores:
        return 0.0
    if len(scores) == 1:
        return 1.0
    average = mean(scores)
    variance = sum((s - average) ** 2 for s in scores) / len(scores)
    return clamp(1.0 - variance)


def relative_change(first_mean: float, second_mean: float) -> float:
    """
    (second - first) / first 비율.
    first 가 0 이면(전부 'bad') 나눗셈 대신 second 가 0보다 크면 1.0, 아니면 0.0 을 반환합니다.
    """
    if first_mean == 0:
        return 1.0 if second_mean > 0 else 0.0
    return (second_mean - first_mean) / first_mean


def split_halves(items: list):
    """
    앞/뒤 절반으로 나눕니다. 개수가 홀수면 가운데 항목은 어느 쪽에도 들어가지 않습니다.
    """
    half = len(items) // 2
    if half == 0:
        return [], []
    return items[:half], items[-half:]


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))
