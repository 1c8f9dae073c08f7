"""Remitano REST API 클라이언트"""
import time
from functools import lru_cache
from typing import Any, Callable, Mapping, Optional, Type, TypeVar, Union

import httpx
from loguru import logger
from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError

from remitano.core.exceptions import (
    DeserializationError,
    HttpStatusError,
    SigningError,
    TransportError,
)
from remitano.core.signing import (
    JSON_CONTENT_TYPE,
    Method,
    RequestSpec,
    SignaturePayload,
    content_md5,
    encode_body,
    http_date,
)
from remitano.models.schemas import ClientConfig
from .endpoints import API_PREFIX, AUTH_SCHEME, USER_AGENT


T = TypeVar("T")


@lru_cache(maxsize=128)
def _cached_adapter(response_model: Any) -> TypeAdapter:
    return TypeAdapter(response_model)


def _response_adapter(response_model: Any) -> TypeAdapter:
    """response_model용 TypeAdapter (해시 가능한 타입은 캐시)"""
    try:
        hash(response_model)
    except TypeError:
        return TypeAdapter(response_model)
    return _cached_adapter(response_model)


class RemitanoClient:
    """
    Remitano API 클라이언트

    엔드포인트별 메서드는 제공하지 않습니다. 모든 호출은 ``request``를 통해
    서명된 요청으로 전송되고, 응답은 호출자가 지정한 타입으로 변환됩니다.
    인스턴스는 호출 간 변경되는 상태가 없으므로 여러 코루틴에서 동시에
    사용할 수 있습니다.
    """

    def __init__(
        self,
        key: Optional[str],
        secret: Optional[str],
        api_url: Optional[str] = None,
        timeout_ms: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        clock: Callable[[], float] = time.time,
    ):
        """
        초기화

        Args:
            key: API 키
            secret: API 시크릿
            api_url: API 기본 URL (기본: 운영 URL)
            timeout_ms: 요청 타임아웃 (밀리초, 기본: 3000)
            transport: httpx 전송 계층 (테스트용 교체 가능)
            clock: 현재 Unix 시간을 반환하는 함수

        Raises:
            ConfigurationError: 키/시크릿 누락 또는 잘못된 설정
        """
        self.config = ClientConfig.build(key, secret, api_url=api_url, timeout_ms=timeout_ms)
        self._clock = clock
        self.client = httpx.AsyncClient(transport=transport, timeout=self.config.timeout)

    @classmethod
    def from_settings(cls, settings, **kwargs: Any) -> "RemitanoClient":
        """환경 설정(Settings)으로부터 클라이언트 생성"""
        return cls(
            key=settings.api_key,
            secret=settings.api_secret,
            api_url=settings.api_url,
            timeout_ms=settings.timeout_ms,
            **kwargs,
        )

    def __repr__(self) -> str:
        return f"RemitanoClient(api_url={self.config.api_url!r})"

    async def __aenter__(self) -> "RemitanoClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.client.aclose()

    async def close(self) -> None:
        """클라이언트 종료"""
        await self.client.aclose()

    @property
    def api_url(self) -> str:
        return self.config.api_url

    def _sign(
        self,
        spec: RequestSpec,
        body: bytes,
        timestamp: float,
        timeout: Optional[float] = None,
    ) -> httpx.Request:
        """
        서명된 httpx 요청 생성

        서명에 사용한 본문 바이트, request URL, Date 문자열을 그대로 요청에 싣습니다.
        """
        payload = SignaturePayload(
            method=spec.method,
            content_md5=content_md5(body),
            request_url=spec.request_url(API_PREFIX),
            date=http_date(timestamp),
        )
        credentials = self.config.credentials
        signature = payload.sign(credentials.secret.get_secret_value())
        headers = {
            "User-Agent": USER_AGENT,
            "Accept": JSON_CONTENT_TYPE,
            "Content-Type": JSON_CONTENT_TYPE,
            "Content-MD5": payload.content_md5,
            "Date": payload.date,
            "Authorization": f"{AUTH_SCHEME} {credentials.key}:{signature}",
        }
        try:
            return self.client.build_request(
                spec.method.value,
                f"{self.config.api_url}/{payload.request_url}",
                headers=headers,
                content=body,
                timeout=httpx.USE_CLIENT_DEFAULT if timeout is None else timeout,
            )
        except (httpx.InvalidURL, UnicodeEncodeError) as e:
            raise SigningError(f"Failed to build signed request: {e}") from e

    async def request(
        self,
        method: Union[str, Method],
        endpoint: str,
        params: Optional[Mapping[str, Any]] = None,
        body: Any = None,
        response_model: Type[T] = Any,
        timeout: Optional[float] = None,
    ) -> T:
        """
        서명된 API 요청

        Args:
            method: HTTP 메서드 (GET, POST, PUT, DELETE)
            endpoint: ``api/v1/`` 이후의 경로 (예: ``users/me``)
            params: 쿼리 파라미터
            body: JSON 본문 (dict, list, pydantic 모델 등)
            response_model: 응답을 변환할 타입 (기본: JSON 그대로)
            timeout: 이번 호출의 타임아웃 (초, 생략 시 설정값)

        Returns:
            response_model 타입으로 변환된 응답

        Raises:
            SigningError: 본문 직렬화 또는 서명 실패
            HttpStatusError: 2xx 이외의 응답
            TransportError: 네트워크 오류, 응답 본문 디코딩 실패, 닫힌 클라이언트 (재시도하지 않음)
            DeserializationError: 응답을 response_model로 변환할 수 없음.
                pydantic이 지원하지 않는 response_model이면 요청을 보내기 전에 발생
        """
        spec = RequestSpec(
            method=Method.parse(method),
            endpoint=endpoint,
            params=params,
            body=body,
        )
        try:
            adapter = _response_adapter(response_model)
        except PydanticSchemaGenerationError as e:
            raise DeserializationError(f"Unsupported response_model: {response_model!r}", body="") from e

        request = self._sign(spec, encode_body(spec.body), self._clock(), timeout)
        if self.client.is_closed:
            raise TransportError("Client is closed")

        logger.debug(f"{spec.method.value} {request.url.raw_path.decode('ascii')}")
        try:
            response = await self.client.send(request)
        except httpx.RequestError as e:
            logger.error(f"Request failed: {spec.method.value} {spec.endpoint}: {e!r}")
            raise TransportError(f"Request failed: {e}") from e

        text = response.text
        if not response.is_success:
            logger.warning(f"HTTP error: {response.status_code} {spec.method.value} {spec.endpoint}")
            raise HttpStatusError(response.status_code, text)

        return self._decode(text, adapter, response_model)

    @staticmethod
    def _decode(text: str, adapter: TypeAdapter, response_model: Any) -> Any:
        """응답 본문을 response_model로 변환"""
        try:
            return adapter.validate_json(text or "null")
        except ValidationError as e:
            logger.warning(f"Response does not match {response_model!r}: {e.error_count()} error(s)")
            raise DeserializationError(f"Failed to decode response: {e}", body=text) from e
