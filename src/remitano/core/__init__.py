"""Core 패키지"""
from .exceptions import (
    RemitanoException,
    ConfigurationError,
    SigningError,
    TransportError,
    HttpStatusError,
    DeserializationError,
)
from .signing import (
    Method,
    RequestSpec,
    SignaturePayload,
    encode_body,
    encode_query,
    content_md5,
    hmac_sha1,
    http_date,
)
from .retry import RetryHandler, retry_on_network_error

__all__ = [
    "RemitanoException",
    "ConfigurationError",
    "SigningError",
    "TransportError",
    "HttpStatusError",
    "DeserializationError",
    "Method",
    "RequestSpec",
    "SignaturePayload",
    "encode_body",
    "encode_query",
    "content_md5",
    "hmac_sha1",
    "http_date",
    "RetryHandler",
    "retry_on_network_error",
]
