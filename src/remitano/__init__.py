"""Remitano 거래소 REST API 클라이언트"""
from loguru import logger

from .api import RemitanoClient, API_URL
from .core import (
    Method,
    RemitanoException,
    ConfigurationError,
    SigningError,
    TransportError,
    HttpStatusError,
    DeserializationError,
    RetryHandler,
    retry_on_network_error,
)
from .models import Credentials, ClientConfig

# 라이브러리 로그는 기본 비활성화, 필요 시 logger.enable("remitano")
logger.disable("remitano")

__version__ = "0.1.0"

__all__ = [
    "RemitanoClient",
    "API_URL",
    "Method",
    "RemitanoException",
    "ConfigurationError",
    "SigningError",
    "TransportError",
    "HttpStatusError",
    "DeserializationError",
    "RetryHandler",
    "retry_on_network_error",
    "Credentials",
    "ClientConfig",
]
