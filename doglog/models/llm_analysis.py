# doglog/models/llm_analysis.py
"""
외부 LLM(행동 전문가 페르소나)이 돌려주는 구조화된 분석 결과 모델.
JSON 키(camelCase)와의 변환은 doglog/schemas/llm_analysis_schema.py 가 담당합니다.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional, List


@dataclass
class BreedAnalysis:
    breed_traits: List[str]
    exercise_needs: str
    mental_stimulation_needs: str
    common_issues: List[str]


@dataclass
class AgeConsiderations:
    developmental_stage: str  # puppy | adolescent | adult | senior
    age_appropriate_expectations: str
    training_readiness: str


@dataclass
class BehaviorAssessment:
    strengths: List[str]
    concerns: List[str]
    overall_score: int
    progress_trend: str  # improving | stable | declining


@dataclass
class TrainingRecommendation:
    issue: str
    technique: str
    steps: List[str]
    duration: str
    frequency: str
    priority: str


@dataclass
class HealthIndicators:
    exercise_level: str
    mental_stimulation: str
    routine_consistency: str


@dataclass
class LLMAnalysis:
    summary: str
    breed_analysis: BreedAnalysis
    age_considerations: AgeConsiderations
    behavior_assessment: BehaviorAssessment
    training_recommendations: List[TrainingRecommendation]
    key_insights: List[str]
    health_indicators: HealthIndicators
    generated_at: Optional[datetime] = None  # 캐시 만료(24시간) 계산 기준

    def stamped(self, generated_at: datetime) -> "LLMAnalysis":
        return replace(self, generated_at=generated_at)


@dataclass
class TrainingActivity:
    time: str
    activity: str
    duration: str
    focus: str
    instructions: str
    training_goal: str


@dataclass
class TrainingDay:
    day_name: str
    theme: str
    activities: List[TrainingActivity]
    daily_goal: str
    success_metrics: List[str]


@dataclass
class Troubleshooting:
    common_issues: List[str] = field(default_factory=list)
    solutions: List[str] = field(default_factory=list)


@dataclass
class TrainingPlan:
    """분석 결과를 바탕으로 생성한 7일 훈련 계획"""
    week_title: str
    week_goal: str
    days: List[TrainingDay]
    weekly_tips: List[str]
    troubleshooting: Troubleshooting
