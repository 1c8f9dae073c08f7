"""Remitano API 상수"""

# Base URL
API_URL = "https://api.remitano.com"

# 모든 REST 엔드포인트 앞에 붙는 경로
API_PREFIX = "api/v1"

DEFAULT_TIMEOUT_MS = 3000

USER_AGENT = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.15; rv:85.0) Gecko/20100101 Firefox/85.0"

AUTH_SCHEME = "APIAuth"
