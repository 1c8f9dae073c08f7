"""Pydantic 스키마"""
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, field_validator

from remitano.core.exceptions import ConfigurationError
from remitano.api.endpoints import API_URL, DEFAULT_TIMEOUT_MS


class Credentials(BaseModel):
    """API 키/시크릿 쌍 (생성 후 변경 불가)"""
    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Remitano API Key")
    secret: SecretStr = Field(..., description="Remitano API Secret")

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("API key is required")
        # Authorization 헤더에 그대로 들어가므로 출력 가능한 ASCII만 허용
        if not (v.isascii() and v.isprintable()):
            raise ValueError("API key must be printable ASCII")
        return v

    @field_validator("secret")
    @classmethod
    def validate_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value().strip():
            raise ValueError("API secret is required")
        return v


class ClientConfig(BaseModel):
    """클라이언트 설정"""
    model_config = ConfigDict(frozen=True)

    credentials: Credentials
    api_url: str = Field(default=API_URL, description="API 기본 URL")
    timeout_ms: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0, description="요청 타임아웃 (밀리초)")

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError("api_url must start with http:// or https://")
        return v

    @property
    def timeout(self) -> float:
        """httpx에 전달할 타임아웃 (초)"""
        return self.timeout_ms / 1000

    @classmethod
    def build(
        cls,
        key: Optional[str],
        secret: Optional[str],
        api_url: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ) -> "ClientConfig":
        """
        검증된 설정 생성
        
        Args:
            key: API 키
            secret: API 시크릿
            api_url: API 기본 URL (생략 시 운영 URL)
            timeout_ms: 요청 타임아웃 (생략 시 3000ms)
            
        Returns:
            ClientConfig

        Raises:
            ConfigurationError: 키/시크릿 누락 또는 잘못된 값
        """
        data = {"credentials": {"key": key, "secret": secret}}
        if api_url is not None:
            data["api_url"] = api_url
        if timeout_ms is not None:
            data["timeout_ms"] = timeout_ms
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            # 입력값(시크릿 포함)은 메시지에 넣지 않음
            raise ConfigurationError(f"Invalid client configuration: {fields}") from None
