"""
Remitano APIAuth 요청 서명

서명 대상 문자열(canonical string)은 아래 순서로 쉼표로 연결합니다.

    {METHOD},application/json,{Content-MD5},/{request_url},{Date}

- Content-MD5: 실제로 전송하는 본문 바이트의 MD5 (Base64)
- request_url: ``api/v1/{endpoint}`` + 쿼리 문자열
- Date: RFC 1123 형식의 HTTP 날짜 (GMT)

서명은 API 시크릿을 키로 한 HMAC-SHA1 결과를 Base64로 인코딩한 값이며,
``Authorization: APIAuth {key}:{signature}`` 헤더로 전송됩니다.
"""
import base64
import hashlib
import hmac
import json
from dataclasses import dataclass
from email.utils import formatdate
from enum import Enum
from typing import Any, Iterator, List, Mapping, Optional, Tuple, Union
from urllib.parse import quote, quote_plus

from pydantic import BaseModel

from .exceptions import SigningError

JSON_CONTENT_TYPE = "application/json"


class Method(str, Enum):
    """지원하는 HTTP 메서드"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, method: Union[str, "Method"]) -> "Method":
        if isinstance(method, cls):
            return method
        try:
            return cls(str(method).upper())
        except ValueError:
            raise ValueError(f"Unsupported method: {method}") from None


def encode_body(body: Any) -> bytes:
    """
    요청 본문을 compact JSON 바이트로 변환

    Args:
        body: JSON 값 또는 pydantic 모델 (None이면 빈 본문)

    Returns:
        서명과 전송에 동일하게 사용할 바이트

    Raises:
        SigningError: JSON으로 표현할 수 없는 값 (NaN, Infinity 포함)
    """
    if body is None:
        return b""
    if isinstance(body, BaseModel):
        body = body.model_dump(mode="json")
    try:
        text = json.dumps(body, separators=(",", ":"), sort_keys=True, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise SigningError(f"Request body is not JSON serializable: {e}") from e
    return text.encode("utf-8")


def _flatten(prefix: str, value: Any) -> Iterator[Tuple[str, str]]:
    # 중첩 구조는 a[b]=1, ids[0]=1 형태로 펼침
    if isinstance(value, Mapping):
        for k, v in sorted(value.items(), key=lambda item: str(item[0])):
            yield from _flatten(f"{prefix}[{k}]", v)
    elif isinstance(value, (list, tuple)):
        for i, v in enumerate(value):
            yield from _flatten(f"{prefix}[{i}]", v)
    elif value is None:
        return
    elif isinstance(value, bool):
        yield prefix, "true" if value else "false"
    else:
        yield prefix, str(value)


def encode_query(params: Mapping[str, Any]) -> str:
    """
    쿼리 파라미터를 form 인코딩 문자열로 변환 (선행 '?' 제외)

    Args:
        params: 쿼리 파라미터 (중첩 dict/list 허용, 키는 정렬됨)

    Returns:
        ``key=value&...`` 문자열
    """
    pairs: List[Tuple[str, str]] = []
    for key, value in sorted(params.items(), key=lambda item: str(item[0])):
        pairs.extend(_flatten(str(key), value))
    return "&".join(f"{quote_plus(k)}={quote_plus(v)}" for k, v in pairs)


def content_md5(data: bytes) -> str:
    """본문 바이트의 MD5 다이제스트 (Base64)"""
    return base64.b64encode(hashlib.md5(data).digest()).decode("ascii")


def hmac_sha1(secret: str, message: Union[str, bytes]) -> str:
    """
    HMAC-SHA1 서명 생성

    Args:
        secret: API 시크릿
        message: 서명할 문자열

    Returns:
        Base64 인코딩된 서명
    """
    try:
        key = secret.encode("utf-8")
        if isinstance(message, str):
            message = message.encode("utf-8")
        digest = hmac.new(key, message, hashlib.sha1).digest()
    except (TypeError, UnicodeEncodeError) as e:
        raise SigningError(f"Failed to compute signature: {e}") from e
    return base64.b64encode(digest).decode("ascii")


def http_date(timestamp: float) -> str:
    """Unix 타임스탬프를 HTTP Date 헤더 형식으로 변환"""
    return formatdate(timestamp, usegmt=True)


@dataclass(frozen=True)
class RequestSpec:
    """호출 단위로 생성되는 요청 명세"""
    method: Method
    endpoint: str
    params: Optional[Mapping[str, Any]] = None
    body: Any = None

    def request_url(self, prefix: str) -> str:
        """base URL 기준 상대 경로 (선행 '/' 없음, 쿼리 포함)"""
        path = quote(self.endpoint.lstrip("/"), safe="/%")
        url = f"{prefix.strip('/')}/{path}"
        if self.params:
            url = f"{url}?{encode_query(self.params)}"
        return url


@dataclass(frozen=True)
class SignaturePayload:
    """서명 대상 필드 묶음"""
    method: Method
    content_md5: str
    request_url: str
    date: str

    def canonical_string(self) -> str:
        return ",".join([
            self.method.value,
            JSON_CONTENT_TYPE,
            self.content_md5,
            f"/{self.request_url}",
            self.date,
        ])

    def sign(self, secret: str) -> str:
        return hmac_sha1(secret, self.canonical_string())
