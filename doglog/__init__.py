# doglog/__init__.py

# =====================================================================================
# 1. 환경 변수 로드 (가장 먼저 실행)
# =====================================================================================
from dotenv import load_dotenv
load_dotenv()

# =====================================================================================
# 2. 모듈 임포트 (Module Imports)
# =====================================================================================
import os
import logging
from datetime import timedelta
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from flask_cors import CORS
from marshmallow import ValidationError
import firebase_admin
from firebase_admin import credentials, firestore

# - 설정
from doglog.core.config import config_by_name

# - API 블루프린트
from doglog.api.dogs.routes import dogs_bp
from doglog.api.daily_logs.routes import daily_logs_bp
from doglog.api.insights.routes import insights_bp

# - 서비스 모듈
from doglog.services.analysis_cache import AnalysisCache, InMemoryCacheStore, FirestoreCacheStore
from doglog.services.openai_service import OpenAIService
from doglog.api.dogs.services import DogService
from doglog.api.daily_logs.services import DailyLogService, ActivityCatalogService
from doglog.api.insights.services import InsightService
from doglog.analytics.analyzer import PatternAnalyzer

def create_app(config_name=None, db=None):
    """
    Flask 애플리케이션 팩토리 함수.

    :param config_name: 'development' | 'testing' | 'production' (생략 시 FLASK_ENV)
    :param db: Firestore 클라이언트 (생략 시 firebase_admin 으로 초기화한 클라이언트)
    """
    # =====================================================================================
    # 3. Flask 앱 생성 및 기본 설정
    # =====================================================================================
    config_name = config_name or os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.json.ensure_ascii = False

    # =====================================================================================
    # 4. 확장 기능 및 외부 서비스 초기화
    # =====================================================================================
    origins = [o.strip() for o in app.config['CORS_ALLOWED_ORIGINS'].split(',') if o.strip()]
    CORS(app, resources={r"/api/*": {"origins": origins}})

    if db is None:
        if not firebase_admin._apps:
            cred_path = app.config['FIREBASE_CREDENTIALS_PATH']
            if not cred_path or not os.path.exists(cred_path):
                raise FileNotFoundError(f"Firebase 인증 파일을 찾을 수 없습니다: {cred_path}")
            cred = credentials.Certificate(cred_path)
            firebase_admin.initialize_app(cred)
        db = firestore.client()

    # =====================================================================================
    # 5. 서비스 인스턴스 생성 및 'app.services'에 저장 (의존성 주입)
    # =====================================================================================
    app.services = {}

    # 5-1. 다른 서비스의 기반이 되는 AI 분석 게이트웨이 먼저 생성
    try:
        if app.config['AI_CACHE_BACKEND'] == 'memory':
            cache_store = InMemoryCacheStore()
        else:
            cache_store = FirestoreCacheStore(db=db)
        analysis_cache = AnalysisCache(cache_store, ttl=timedelta(hours=app.config['AI_CACHE_TTL_HOURS']))

        openai_instance = OpenAIService(cache=analysis_cache)
        openai_instance.init_app(app)
        app.services['openai'] = openai_instance
        logging.info(f"OpenAI service initialized (cache backend: {app.config['AI_CACHE_BACKEND']})")
    except Exception as e:
        logging.error(f"Failed to initialize OpenAI service: {e}")
        raise

    # 5-2. 게이트웨이를 주입받아야 하는 도메인 서비스 생성
    app.services['dogs'] = DogService(analysis_gateway=app.services['openai'], db=db)
    app.services['daily_logs'] = DailyLogService(
        dog_service=app.services['dogs'],
        analysis_gateway=app.services['openai'],
        db=db
    )
    app.services['activity_catalog'] = ActivityCatalogService(db=db)
    app.services['insights'] = InsightService(
        dog_service=app.services['dogs'],
        daily_log_service=app.services['daily_logs'],
        analysis_gateway=app.services['openai'],
        analyzer=PatternAnalyzer()
    )

    # =====================================================================================
    # 6. 블루프린트 등록
    # =====================================================================================
    app.register_blueprint(dogs_bp, url_prefix='/api/dogs')
    app.register_blueprint(insights_bp, url_prefix='/api/dogs')
    app.register_blueprint(daily_logs_bp, url_prefix='/api')

    @app.route('/health', methods=['GET'])
    def health_check():
        return jsonify({
            "status": "OK",
            "has_api_key": app.services['openai'].has_credential,
        }), 200

    # =====================================================================================
    # 7. 전역 에러 핸들러 설정
    # =====================================================================================
    @app.errorhandler(ValidationError)
    def handle_marshmallow_validation(err):
        response = {"error_code": "VALIDATION_ERROR", "details": err.messages}
        return jsonify(response), 400

    @app.errorhandler(404)
    def handle_not_found(err):
        return jsonify({"error_code": "NOT_FOUND", "message": "요청한 리소스를 찾을 수 없습니다."}), 404

    @app.errorhandler(Exception)
    def handle_generic_exception(err):
        # 다른 핸들러에서 처리되지 않은 모든 예외를 여기서 처리 (405 등 HTTP 예외는 그대로 반환)
        if isinstance(err, HTTPException):
            return err
        logging.error(f"An unhandled exception occurred: {err}", exc_info=True)
        response = {"error_code": "INTERNAL_SERVER_ERROR", "message": "서버 내부에서 예상치 못한 오류가 발생했습니다."}
        return jsonify(response), 500

    # =====================================================================================
    # 8. 로깅 및 앱 반환
    # =====================================================================================
    if not app.debug:
        logging.basicConfig(level=logging.INFO, format='%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]')

    logging.info(f"Flask app created for '{config_name}' environment.")

    return app
