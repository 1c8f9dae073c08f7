"""
호출자 측 재시도 로직

RemitanoClient.request 자체는 재시도하지 않습니다. 재시도가 필요한 호출자는
이 모듈의 데코레이터나 헬퍼로 감싸서 사용합니다. 재시도마다 request가 다시
호출되므로 Date 헤더와 서명도 매번 새로 생성됩니다.
"""
from typing import TypeVar, Callable, Awaitable, Any
from functools import wraps

from loguru import logger
from tenacity import (
    AsyncRetrying,
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
    before_sleep_log,
)

from .exceptions import TransportError


T = TypeVar('T')


class RetryHandler:
    """네트워크 오류 재시도 로직"""
    
    @staticmethod
    def with_retry(
        max_attempts: int = 3,
        min_wait: float = 1,
        max_wait: float = 10,
        multiplier: float = 1
    ):
        """
        지수 백오프를 사용한 재시도 데코레이터
        
        Args:
            max_attempts: 최대 시도 횟수
            min_wait: 최소 대기 시간 (초)
            max_wait: 최대 대기 시간 (초)
            multiplier: 대기 시간 배수
            
        Returns:
            데코레이터 함수
        """
        return retry(
            stop=stop_after_attempt(max_attempts),
            wait=wait_exponential(multiplier=multiplier, min=min_wait, max=max_wait),
            retry=retry_if_exception_type(TransportError),
            before_sleep=before_sleep_log(logger, logger.level("WARNING").no),
            reraise=True
        )
    
    @staticmethod
    async def execute_with_retry(
        func: Callable[..., Awaitable[T]],
        *args: Any,
        max_attempts: int = 3,
        min_wait: float = 1,
        max_wait: float = 10,
        **kwargs: Any
    ) -> T:
        """
        함수를 재시도 로직과 함께 실행
        
        Args:
            func: 실행할 코루틴 함수
            *args: 함수 인자
            max_attempts: 최대 시도 횟수
            min_wait: 최소 대기 시간 (초)
            max_wait: 최대 대기 시간 (초)
            **kwargs: 함수 키워드 인자
            
        Returns:
            함수 실행 결과
            
        Raises:
            TransportError: 모든 시도 실패 시
        """
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(max_attempts),
            wait=wait_exponential(min=min_wait, max=max_wait),
            retry=retry_if_exception_type(TransportError),
            reraise=True,
        ):
            with attempt:
                number = attempt.retry_state.attempt_number
                if number > 1:
                    logger.warning(f"Retrying {getattr(func, '__name__', func)} ({number}/{max_attempts})")
                return await func(*args, **kwargs)


def retry_on_network_error(max_attempts: int = 3, min_wait: float = 1, max_wait: float = 10):
    """
    네트워크 에러 발생 시 재시도하는 데코레이터
    
    Args:
        max_attempts: 최대 시도 횟수
        min_wait: 최소 대기 시간 (초)
        max_wait: 최대 대기 시간 (초)
        
    Returns:
        데코레이터 함수
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            return await RetryHandler.execute_with_retry(
                func, *args, max_attempts=max_attempts,
                min_wait=min_wait, max_wait=max_wait, **kwargs
            )
        return wrapper
    return decorator
