# doglog/api/insights/services.py
"""
반려견 인사이트 서비스

로컬 패턴 분석(PatternAnalyzer)과 LLM 분석 게이트웨이(OpenAIService)를
반려견 프로필/기록 저장소와 연결합니다.
"""

import logging
from typing import Optional

from doglog.analytics.analyzer import PatternAnalyzer
from doglog.analytics.time_range import TimeRange
from doglog.models.insights import DogInsights
from doglog.models.llm_analysis import LLMAnalysis, TrainingPlan

logger = logging.getLogger(__name__)


class AnalysisRequiredError(LookupError):
    """훈련 계획을 만들 분석 결과가 없을 때 발생합니다."""


class InsightService:
    """반려견 기록에 대한 로컬 인사이트와 AI 분석/훈련 계획 요청을 담당하는 서비스"""

    def __init__(self, dog_service, daily_log_service, analysis_gateway, analyzer: Optional[PatternAnalyzer] = None):
        self.dog_service = dog_service
        self.daily_log_service = daily_log_service
        self.analysis_gateway = analysis_gateway
        self.analyzer = analyzer or PatternAnalyzer()
        logger.info("InsightService initialized.")

    def _load_records(self, dog_id: str):
        activities = self.daily_log_service.get_activities(dog_id)
        daily_ratings = self.daily_log_service.get_ratings(dog_id)
        return activities, daily_ratings

    def _analyze(self, activities, daily_ratings, time_range: TimeRange) -> DogInsights:
        # 메모만 있고 평가가 없는 날은 기분 분석에서 제외
        rated = [r for r in daily_ratings if r.rating is not None]
        return self.analyzer.analyze_dog(activities, rated, time_range)

    def get_insights(self, dog_id: str, time_range: TimeRange) -> DogInsights:
        """
        로컬 패턴 분석 결과를 계산합니다. (저장하지 않음)

        Args:
            dog_id: 반려견 ID
            time_range: 분석 기간

        Returns:
            DogInsights
        """
        self.dog_service.get_dog(dog_id)
        activities, daily_ratings = self._load_records(dog_id)
        insights = self._analyze(activities, daily_ratings, time_range)
        logger.info(f"Insights computed for dog {dog_id} ({time_range.cache_tag}), confidence={insights.confidence}")
        return insights

    def request_ai_analysis(self, dog_id: str, time_range: TimeRange) -> LLMAnalysis:
        """로컬 분석 결과를 바탕으로 LLM 전문가 분석을 요청합니다. (24시간 캐시)"""
        dog = self.dog_service.get_dog(dog_id)
        activities, daily_ratings = self._load_records(dog_id)
        insights = self._analyze(activities, daily_ratings, time_range)
        return self.analysis_gateway.request_analysis(dog, time_range, insights, activities, daily_ratings)

    def get_cached_analysis(self, dog_id: str, time_range: TimeRange) -> Optional[LLMAnalysis]:
        self.dog_service.get_dog(dog_id)
        return self.analysis_gateway.get_cached_analysis(dog_id, time_range)

    def has_cached_analysis(self, dog_id: str, time_range: TimeRange) -> bool:
        return self.analysis_gateway.has_cached_analysis(dog_id, time_range)

    def invalidate_analysis_cache(self, dog_id: str) -> None:
        self.dog_service.get_dog(dog_id)
        self.analysis_gateway.invalidate_cache(dog_id)

    def request_training_plan(self, dog_id: str, time_range: TimeRange,
                              analysis: Optional[LLMAnalysis] = None) -> TrainingPlan:
        """
        분석 결과로부터 7일 훈련 계획을 생성합니다.
        analysis 가 없으면 같은 기간의 캐시된 분석을 사용하며, 그것도 없으면 AnalysisRequiredError.
        """
        dog = self.dog_service.get_dog(dog_id)
        if analysis is None:
            analysis = self.analysis_gateway.get_cached_analysis(dog_id, time_range)
        if analysis is None:
            raise AnalysisRequiredError("훈련 계획을 만들려면 먼저 AI 분석을 요청해주세요.")
        return self.analysis_gateway.request_training_plan(dog, analysis)
