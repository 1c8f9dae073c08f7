"""커스텀 예외 클래스"""
from typing import Any, Optional


class RemitanoException(Exception):
    """기본 예외 클래스"""
    
    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class ConfigurationError(RemitanoException):
    """API 키/시크릿 등 설정 오류 (클라이언트 생성 시점)"""
    pass


class SigningError(RemitanoException):
    """요청 서명 생성 실패"""
    pass


class TransportError(RemitanoException):
    """연결/DNS/TLS/타임아웃 등 네트워크 계층 오류"""
    pass


class HttpStatusError(RemitanoException):
    """2xx 이외의 HTTP 응답"""
    
    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"HTTP error: {status_code} - {body}", details=body)


class DeserializationError(RemitanoException):
    """응답 본문을 요청한 타입으로 변환할 수 없음"""
    
    def __init__(self, message: str, body: str):
        self.body = body
        super().__init__(message, details=body)
