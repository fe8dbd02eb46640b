# doglog/core/config.py

import os # 환경 변수를 읽기 위해 사용합니다.

class Config:
    """모든 환경 설정의 기반이 되는 공통 설정 클래스입니다."""
    # OpenAI API 키. 없으면 AI 분석 기능만 비활성화되고 나머지 기능은 정상 동작합니다.
    OPENAI_API_KEY = os.getenv('OPENAI_API_KEY')
    # 호환 엔드포인트(프록시 등)를 쓰는 경우에만 지정합니다. None 이면 SDK 기본값을 사용합니다.
    OPENAI_BASE_URL = os.getenv('OPENAI_BASE_URL')
    OPENAI_MODEL = os.getenv('OPENAI_MODEL', 'gpt-4o-mini')
    OPENAI_TIMEOUT_SECONDS = float(os.getenv('OPENAI_TIMEOUT_SECONDS', 60))

    # AI 분석 결과 캐시: 생성 후 24시간 동안 유효합니다.
    AI_CACHE_TTL_HOURS = int(os.getenv('AI_CACHE_TTL_HOURS', 24))
    # 'firestore' 또는 'memory'
    AI_CACHE_BACKEND = os.getenv('AI_CACHE_BACKEND', 'firestore')

    # 쉼표로 구분된 허용 Origin 목록 (웹 클라이언트 개발 서버 기본값)
    CORS_ALLOWED_ORIGINS = os.getenv('CORS_ALLOWED_ORIGINS', 'http://localhost:3000,http://localhost:5173')

class DevelopmentConfig(Config):
    """개발 환경을 위한 설정 클래스입니다."""
    DEBUG = True
    # 개발용 Firebase 프로젝트의 서비스 계정 키 파일 경로
    FIREBASE_CREDENTIALS_PATH = os.getenv('DEV_FIREBASE_CREDENTIALS_PATH', os.getenv('FIREBASE_CREDENTIALS_PATH'))

class TestingConfig(Config):
    """테스트 환경을 위한 설정 클래스입니다."""
    TESTING = True
    DEBUG = False
    FIREBASE_CREDENTIALS_PATH = os.getenv('TEST_FIREBASE_CREDENTIALS_PATH')
    # 테스트에서는 외부 호출과 Firestore 캐시를 쓰지 않습니다.
    OPENAI_API_KEY = None
    AI_CACHE_BACKEND = 'memory'

class ProductionConfig(Config):
    """운영 환경을 위한 설정 클래스입니다."""
    DEBUG = False
    FIREBASE_CREDENTIALS_PATH = os.getenv('FIREBASE_CREDENTIALS_PATH')

# create_app 에서 FLASK_ENV 값에 따라 설정 클래스를 선택하는 데 사용됩니다.
config_by_name = dict(
    development=DevelopmentConfig,
    testing=TestingConfig,
    production=ProductionConfig
)
