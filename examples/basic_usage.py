"""
RemitanoClient 사용 예제

REMITANO_API_KEY, REMITANO_API_SECRET 환경 변수(또는 .env)가 필요합니다.
"""
import asyncio
import sys
from typing import List, Optional

from loguru import logger
from pydantic import BaseModel

from remitano import (
    HttpStatusError,
    Method,
    RemitanoClient,
    RemitanoException,
    retry_on_network_error,
)
from remitano.config import settings


class Me(BaseModel):
    """users/me 응답 중 필요한 필드만"""
    id: int
    username: str
    email: Optional[str] = None


class Offer(BaseModel):
    id: int
    offer_type: str
    price: float


async def main():
    """기본 사용 예제"""
    # 라이브러리 로그 활성화
    logger.remove()
    logger.add(sys.stderr, level="DEBUG")
    logger.enable("remitano")

    async with RemitanoClient.from_settings(settings) as client:
        # 1. 타입 지정 조회
        me = await client.request(Method.GET, "users/me", response_model=Me)
        print(f"Logged in as {me.username} (#{me.id})")

        # 2. 쿼리 파라미터 + 리스트 타입
        offers = await client.request(
            Method.GET,
            "offers",
            params={"country_code": "vn", "coin_currency": "btc", "offer_type": "buy"},
            response_model=List[Offer],
        )
        print(f"{len(offers)} offers")

        # 3. 호출자 측 재시도 (네트워크 오류만)
        @retry_on_network_error(max_attempts=3)
        async def balances():
            return await client.request(Method.GET, "users/coin_accounts")

        try:
            print(await balances())
        except HttpStatusError as e:
            print(f"HTTP {e.status_code}: {e.body}")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except RemitanoException as e:
        print(f"Error: {e.message}")
