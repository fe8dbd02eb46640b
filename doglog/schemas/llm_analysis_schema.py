# doglog/schemas/llm_analysis_schema.py
from marshmallow import Schema, fields, post_load, EXCLUDE

from doglog.models.llm_analysis import (
    LLMAnalysis, BreedAnalysis, AgeConsiderations, BehaviorAssessment,
    TrainingRecommendation, HealthIndicators,
    TrainingPlan, TrainingDay, TrainingActivity, Troubleshooting,
)


class _LLMSchema(Schema):
    """모델이 스키마 밖의 키를 덧붙여도 무시하도록 하는 공통 베이스."""
    class Meta:
        unknown = EXCLUDE


class BreedAnalysisSchema(_LLMSchema):
    breed_traits = fields.List(fields.Str(), required=True, data_key="breedTraits")
    exercise_needs = fields.Str(required=True, data_key="exerciseNeeds")
    mental_stimulation_needs = fields.Str(required=True, data_key="mentalStimulationNeeds")
    common_issues = fields.List(fields.Str(), required=True, data_key="commonIssues")

    @post_load
    def make_object(self, data, **kwargs):
        return BreedAnalysis(**data)


class AgeConsiderationsSchema(_LLMSchema):
    developmental_stage = fields.Str(required=True, data_key="developmentalStage")
    age_appropriate_expectations = fields.Str(required=True, data_key="ageAppropriateExpectations")
    training_readiness = fields.Str(required=True, data_key="trainingReadiness")

    @post_load
    def make_object(self, data, **kwargs):
        return AgeConsiderations(**data)


class BehaviorAssessmentSchema(_LLMSchema):
    strengths = fields.List(fields.Str(), required=True)
    concerns = fields.List(fields.Str(), required=True)
    overall_score = fields.Int(required=True, data_key="overallScore")
    progress_trend = fields.Str(required=True, data_key="progressTrend")

    @post_load
    def make_object(self, data, **kwargs):
        return BehaviorAssessment(**data)


class TrainingRecommendationSchema(_LLMSchema):
    issue = fields.Str(required=True)
    technique = fields.Str(required=True)
    steps = fields.List(fields.Str(), required=True)
    duration = fields.Str(required=True)
    frequency = fields.Str(required=True)
    priority = fields.Str(required=True)

    @post_load
    def make_object(self, data, **kwargs):
        return TrainingRecommendation(**data)


class HealthIndicatorsSchema(_LLMSchema):
    exercise_level = fields.Str(required=True, data_key="exerciseLevel")
    mental_stimulation = fields.Str(required=True, data_key="mentalStimulation")
    routine_consistency = fields.Str(required=True, data_key="routineConsistency")

    @post_load
    def make_object(self, data, **kwargs):
        return HealthIndicators(**data)


class LLMAnalysisSchema(_LLMSchema):
    """
    LLM 분석 응답 JSON 의 검증/역직렬화 및 캐시 저장용 직렬화 스키마.
    모델 응답에는 generatedAt 이 없으므로 선택 필드입니다.
    """
    summary = fields.Str(required=True)
    breed_analysis = fields.Nested(BreedAnalysisSchema, required=True, data_key="breedAnalysis")
    age_considerations = fields.Nested(AgeConsiderationsSchema, required=True, data_key="ageConsiderations")
    behavior_assessment = fields.Nested(BehaviorAssessmentSchema, required=True, data_key="behaviorAssessment")
    training_recommendations = fields.List(
        fields.Nested(TrainingRecommendationSchema), required=True, data_key="trainingRecommendations"
    )
    key_insights = fields.List(fields.Str(), required=True, data_key="keyInsights")
    health_indicators = fields.Nested(HealthIndicatorsSchema, required=True, data_key="healthIndicators")
    generated_at = fields.AwareDateTime(
        format="iso", allow_none=True, load_default=None, data_key="generatedAt"
    )

    @post_load
    def make_object(self, data, **kwargs):
        return LLMAnalysis(**data)


class TrainingActivitySchema(_LLMSchema):
    time = fields.Str(required=True)
    activity = fields.Str(required=True)
    duration = fields.Str(required=True)
    focus = fields.Str(required=True)
    instructions = fields.Str(required=True)
    training_goal = fields.Str(required=True, data_key="trainingGoal")

    @post_load
    def make_object(self, data, **kwargs):
        return TrainingActivity(**data)


class TrainingDaySchema(_LLMSchema):
    day_name = fields.Str(required=True, data_key="dayName")
    theme = fields.Str(required=True)
    activities = fields.List(fields.Nested(TrainingActivitySchema), required=True)
    daily_goal = fields.Str(required=True, data_key="dailyGoal")
    success_metrics = fields.List(fields.Str(), required=True, data_key="successMetrics")

    @post_load
    def make_object(self, data, **kwargs):
        return TrainingDay(**data)


class TroubleshootingSchema(_LLMSchema):
    common_issues = fields.List(fields.Str(), required=True, data_key="commonIssues")
    solutions = fields.List(fields.Str(), required=True)

    @post_load
    def make_object(self, data, **kwargs):
        return Troubleshooting(**data)


class TrainingPlanSchema(_LLMSchema):
    """7일 훈련 계획 응답 JSON 스키마."""
    week_title = fields.Str(required=True, data_key="weekTitle")
    week_goal = fields.Str(required=True, data_key="weekGoal")
    days = fields.List(fields.Nested(TrainingDaySchema), required=True)
    weekly_tips = fields.List(fields.Str(), required=True, data_key="weeklyTips")
    troubleshooting = fields.Nested(TroubleshootingSchema, required=True)

    @post_load
    def make_object(self, data, **kwargs):
        return TrainingPlan(**data)
