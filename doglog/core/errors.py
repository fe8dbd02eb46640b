# doglog/core/errors.py
"""
LLM 분석 게이트웨이 오류 분류.
모든 오류는 자동 재시도 없이 호출자에게 그대로 전달되며,
HTTP 계층은 error_code / http_status 로 응답을 구성합니다.
"""
from typing import Optional


class LLMGatewayError(Exception):
    """LLM 게이트웨이 오류의 기반 클래스."""
    error_code = "LLM_GATEWAY_ERROR"
    http_status = 502
    default_message = "AI 분석 요청 중 오류가 발생했습니다."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class MissingCredentialError(LLMGatewayError):
    error_code = "MISSING_CREDENTIAL"
    http_status = 400
    default_message = "OpenAI API 키가 설정되지 않았습니다."


class InvalidCredentialError(LLMGatewayError):
    error_code = "INVALID_CREDENTIAL"
    http_status = 401
    default_message = "OpenAI API 키가 유효하지 않습니다."


class RateLimitedError(LLMGatewayError):
    error_code = "RATE_LIMITED"
    http_status = 429
    default_message = "OpenAI 요청 한도를 초과했습니다. 잠시 후 다시 시도해주세요."


class RemoteError(LLMGatewayError):
    """
    그 외 원격 오류. status_code 는 HTTP 응답 코드이며,
    연결 실패/타임아웃처럼 응답 자체가 없으면 None 입니다.
    """
    error_code = "REMOTE_ERROR"
    http_status = 502

    def __init__(self, status_code: Optional[int] = None, message: Optional[str] = None):
        self.status_code = status_code
        if message is None:
            message = (f"OpenAI API 오류: HTTP {status_code}" if status_code is not None
                       else "OpenAI API 에 연결할 수 없습니다.")
        super().__init__(message)


class MalformedResponseError(LLMGatewayError):
    error_code = "MALFORMED_RESPONSE"
    http_status = 502
    default_message = "AI 응답을 해석할 수 없습니다."
