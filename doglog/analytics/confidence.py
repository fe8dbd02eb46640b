# doglog/analytics/confidence.py

# (상한 미만, 신뢰도) 구간표
_CONFIDENCE_STEPS = [
    (5, 0.3),
    (10, 0.5),
    (20, 0.7),
    (50, 0.85),
]


def calculate_confidence(data_points: int) -> float:
    """활동 수 + 평가 수에 따른 계단형 신뢰도"""
    for upper_bound, confidence in _CONFIDENCE_STEPS:
        if data_points < upper_bound:
            return confidence
    return 0.95
