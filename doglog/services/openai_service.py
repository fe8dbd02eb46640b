# doglog/services/openai_service.py
import logging
import threading
from datetime import timedelta
from typing import Optional, List, Sequence

import openai
from flask import Flask
from openai import OpenAI

from doglog.analytics.time_range import TimeRange
from doglog.core.errors import (
    MissingCredentialError, InvalidCredentialError, RateLimitedError,
    RemoteError, MalformedResponseError,
)
from doglog.models.activity import Activity
from doglog.models.daily_rating import DailyRating
from doglog.models.dog import Dog
from doglog.models.insights import DogInsights
from doglog.models.llm_analysis import LLMAnalysis, TrainingPlan
from doglog.services.analysis_cache import AnalysisCache, InMemoryCacheStore
from doglog.services.prompts import (
    ANALYSIS_SYSTEM_PROMPT, TRAINING_PLAN_SYSTEM_PROMPT,
    build_data_summary, build_training_plan_prompt,
)
from doglog.services.response_parser import parse_analysis, parse_training_plan
from doglog.utils.datetime_utils import DateTimeUtils

DEFAULT_MODEL = "gpt-4o-mini"

ANALYSIS_TEMPERATURE = 0.3
ANALYSIS_MAX_TOKENS = 1500
TRAINING_PLAN_TEMPERATURE = 0.4
TRAINING_PLAN_MAX_TOKENS = 2000


class OpenAIService:
    """
    OpenAI Chat Completions 연동을 담당하는 LLM 분석 게이트웨이.
    행동 전문가 분석과 7일 훈련 계획을 생성하며, 분석 결과는 반려견 + 기간 단위로 캐시합니다.

    API 키와 엔드포인트는 생성자 또는 init_app 으로 주입되며 전역 상태로 보관하지 않습니다.
    모든 오류는 자동 재시도 없이 doglog.core.errors 의 예외로 변환되어 전달됩니다.
    """

    def __init__(self,
                 api_key: Optional[str] = None,
                 base_url: Optional[str] = None,
                 model: str = DEFAULT_MODEL,
                 timeout: float = 60.0,
                 cache: Optional[AnalysisCache] = None,
                 client=None):
        """
        :param api_key: OpenAI API 키 (없으면 요청 시 MissingCredentialError)
        :param base_url: 호환 엔드포인트 주소 (None 이면 SDK 기본값)
        :param cache: 분석 결과 캐시 (None 이면 메모리 캐시)
        :param client: 미리 구성된 OpenAI 클라이언트 (테스트 주입용)
        """
        self.api_key = api_key
        self.base_url = base_url
        self.model = model
        self.timeout = timeout
        self.cache = cache or AnalysisCache(InMemoryCacheStore())
        self.client = client
        # 화면 표시용 플래그일 뿐, 동시 요청을 막지는 않습니다.
        self._in_flight = 0
        self._in_flight_lock = threading.Lock()

    def init_app(self, app: Flask):
        """
        Flask 앱 설정으로부터 API 키, 모델, 타임아웃, 캐시 TTL 을 읽어 클라이언트를 구성합니다.
        API 키가 없어도 앱은 정상 기동하며, AI 분석 요청만 실패합니다.

        :param app: Flask 애플리케이션 객체
        """
        self.api_key = app.config.get('OPENAI_API_KEY')
        self.base_url = app.config.get('OPENAI_BASE_URL')
        self.model = app.config.get('OPENAI_MODEL', DEFAULT_MODEL)
        self.timeout = app.config.get('OPENAI_TIMEOUT_SECONDS', 60.0)
        self.cache.ttl = timedelta(hours=app.config.get('AI_CACHE_TTL_HOURS', 24))
        self.client = None

        if self.has_credential:
            logging.info(f"OpenAIService: OpenAI API 서비스가 초기화되었습니다. (model: {self.model})")
        else:
            logging.warning("OpenAIService: OPENAI_API_KEY 가 설정되지 않아 AI 분석 기능이 비활성화됩니다.")

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    def _get_client(self) -> OpenAI:
        if not self.has_credential:
            raise MissingCredentialError()
        if self.client is None:
            self.client = OpenAI(
                api_key=self.api_key,
                base_url=self.base_url,
                timeout=self.timeout,
                max_retries=0,
            )
        return self.client

    def request_analysis(self,
                         dog: Dog,
                         time_range: TimeRange,
                         insights: DogInsights,
                         activities: Sequence[Activity] = (),
                         daily_ratings: Sequence[DailyRating] = ()) -> LLMAnalysis:
        """
        로컬 분석 결과를 요약해 전문가 분석을 요청합니다.
        24시간 이내에 같은 반려견/기간으로 생성된 결과가 있으면 외부 호출 없이 반환합니다.

        :param dog: 분석 대상 반려견 프로필
        :param time_range: 분석 기간
        :param insights: 같은 기간에 대한 로컬 분석 결과
        :param activities: 메모 요약에 사용할 활동 기록
        :param daily_ratings: 메모 요약에 사용할 하루 평가 기록
        :return: 생성 시각이 기록된 분석 결과
        """
        if not self.has_credential:
            raise MissingCredentialError()

        cached = self.cache.get(dog.dog_id, time_range)
        if cached is not None:
            logging.info(f"Returning cached AI analysis for dog {dog.dog_id} ({time_range.cache_tag})")
            return cached

        summary = build_data_summary(dog, time_range, insights, list(activities), list(daily_ratings))
        content = self._complete(ANALYSIS_SYSTEM_PROMPT, summary,
                                 temperature=ANALYSIS_TEMPERATURE, max_tokens=ANALYSIS_MAX_TOKENS)

        analysis = parse_analysis(content).stamped(DateTimeUtils.now())
        self.cache.put(dog.dog_id, time_range, analysis)
        return analysis

    def request_training_plan(self, dog: Dog, analysis: LLMAnalysis) -> TrainingPlan:
        """
        이전 분석 결과를 바탕으로 7일 훈련 계획을 생성합니다. (캐시하지 않음)

        :param dog: 대상 반려견 프로필
        :param analysis: request_analysis 로 얻은 분석 결과
        """
        prompt = build_training_plan_prompt(dog, analysis)
        content = self._complete(TRAINING_PLAN_SYSTEM_PROMPT, prompt,
                                 temperature=TRAINING_PLAN_TEMPERATURE, max_tokens=TRAINING_PLAN_MAX_TOKENS)
        return parse_training_plan(content)

    def get_cached_analysis(self, dog_id: str, time_range: TimeRange) -> Optional[LLMAnalysis]:
        return self.cache.get(dog_id, time_range)

    def has_cached_analysis(self, dog_id: str, time_range: TimeRange) -> bool:
        return self.cache.has(dog_id, time_range)

    def invalidate_cache(self, dog_id: str) -> None:
        """반려견의 기록이 바뀔 때마다 호출되어야 합니다."""
        self.cache.invalidate(dog_id)

    def _complete(self, system_prompt: str, user_prompt: str, temperature: float, max_tokens: int) -> str:
        """
        Chat Completions 를 호출하고 응답 텍스트를 반환합니다.
        SDK 예외는 게이트웨이 오류로 변환됩니다.
        """
        client = self._get_client()
        messages: List[dict] = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]

        with self._in_flight_lock:
            self._in_flight += 1
        try:
            response = client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
            )
        except openai.AuthenticationError as e:
            logging.warning(f"OpenAI authentication failed: {e}")
            raise InvalidCredentialError()
        except openai.RateLimitError as e:
            logging.warning(f"OpenAI rate limit exceeded: {e}")
            raise RateLimitedError()
        except openai.APIStatusError as e:
            logging.error(f"OpenAI API error (HTTP {e.status_code}): {e}")
            raise RemoteError(e.status_code)
        except openai.APIConnectionError as e:
            logging.error(f"OpenAI API connection failed: {e}", exc_info=True)
            raise RemoteError(None)
        finally:
            with self._in_flight_lock:
                self._in_flight -= 1

        if not response.choices or not response.choices[0].message.content:
            raise MalformedResponseError("AI 응답에 내용이 없습니다.")
        return response.choices[0].message.content
