"""설정 관리 모듈"""
from pydantic_settings import BaseSettings, SettingsConfigDict

from remitano.api.endpoints import API_URL, DEFAULT_TIMEOUT_MS


class Settings(BaseSettings):
    """환경 변수(REMITANO_*) 기반 설정"""
    
    api_key: str = ""
    api_secret: str = ""
    api_url: str = API_URL
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    
    model_config = SettingsConfigDict(
        env_prefix="REMITANO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# 전역 설정 인스턴스
settings = Settings()
