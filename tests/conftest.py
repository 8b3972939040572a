"""테스트 공통 설정

core.config 는 import 시점에 Settings 를 생성하므로 필수 환경변수를 먼저 채운다.
"""
import os

os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")
os.environ.setdefault("PADDLE_WEBHOOK_SECRET", "")
