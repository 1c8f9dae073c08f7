"""요청 서명 테스트"""
import json
from itertools import combinations

import pytest
from pydantic import BaseModel

from remitano.core.exceptions import SigningError
from remitano.core.signing import (
    Method,
    RequestSpec,
    SignaturePayload,
    content_md5,
    encode_body,
    encode_query,
    hmac_sha1,
    http_date,
)


SECRET = "test_api_secret"
EMPTY_MD5 = "1B2M2Y8AsgTpgAmY7PhCfg=="


def _signature(method, endpoint, body, timestamp, params=None):
    spec = RequestSpec(method=Method(method), endpoint=endpoint, params=params, body=body)
    payload = SignaturePayload(
        method=spec.method,
        content_md5=content_md5(encode_body(spec.body)),
        request_url=spec.request_url("api/v1"),
        date=http_date(timestamp),
    )
    return payload.sign(SECRET)


def test_content_md5_known_vector():
    """MD5 다이제스트 테스트"""
    assert content_md5(b"hash me") == "F7Mdzpa51sbQprqV9HeW+w=="
    assert content_md5(b"") == EMPTY_MD5


def test_hmac_sha1_known_vector():
    """HMAC-SHA1 서명 테스트"""
    assert hmac_sha1("secret", "hash me") == "oSVlCBpf9BqviWbUjOm4DXEcgRo="
    assert hmac_sha1("secret", b"hash me") == "oSVlCBpf9BqviWbUjOm4DXEcgRo="


def test_http_date_format():
    """HTTP Date 헤더 형식 테스트"""
    assert http_date(0) == "Thu, 01 Jan 1970 00:00:00 GMT"
    assert http_date(1704067200) == "Mon, 01 Jan 2024 00:00:00 GMT"


def test_encode_body_empty():
    assert encode_body(None) == b""


def test_encode_body_compact_sorted():
    """본문은 공백 없는 JSON, 키 정렬"""
    body = {"side": "buy", "amount": "0.5", "meta": {"z": 1, "a": [1, 2]}}
    assert encode_body(body) == b'{"amount":"0.5","meta":{"a":[1,2],"z":1},"side":"buy"}'


def test_encode_body_keeps_unicode():
    assert encode_body({"name": "김치"}) == '{"name":"김치"}'.encode("utf-8")


def test_encode_body_pydantic_model():
    class Offer(BaseModel):
        price: float
        coin: str

    assert encode_body(Offer(price=1.5, coin="btc")) == b'{"coin":"btc","price":1.5}'


def test_encode_body_not_serializable():
    with pytest.raises(SigningError):
        encode_body({"when": object()})


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_encode_body_rejects_non_finite_numbers(value):
    """NaN/Infinity는 JSON이 아니므로 서명하지 않음"""
    with pytest.raises(SigningError):
        encode_body({"price": value})


@pytest.mark.parametrize("body", [
    {"id": 1, "tags": ["a", "b"], "nested": {"deep": {"value": None, "flag": True}}},
    [{"coin": "btc", "amount": 0.25}, {"coin": "eth", "amount": 3}],
    {"unicode": "đồng", "empty": {}, "list": []},
    "plain string",
    42,
])
def test_encode_body_round_trip(body):
    """직렬화 후 다시 파싱하면 원래 값과 같아야 함"""
    assert json.loads(encode_body(body)) == body


def test_encode_query_flat():
    assert encode_query({"coin_currency": "btc", "page": 2}) == "coin_currency=btc&page=2"


def test_encode_query_nested():
    """중첩 구조는 대괄호 표기 (퍼센트 인코딩)"""
    query = encode_query({"filter": {"side": "buy"}, "ids": [1, 2]})
    assert query == "filter%5Bside%5D=buy&ids%5B0%5D=1&ids%5B1%5D=2"


def test_encode_query_sorted_keys():
    """쿼리 키는 호출자의 입력 순서와 무관하게 정렬"""
    query = encode_query({"page": 2, "coin_currency": "btc", "filter": {"side": "buy", "country": "vn"}})
    assert query == "coin_currency=btc&filter%5Bcountry%5D=vn&filter%5Bside%5D=buy&page=2"
    assert query == encode_query({"filter": {"country": "vn", "side": "buy"}, "coin_currency": "btc", "page": 2})


def test_encode_query_values():
    query = encode_query({"q": "a b&c", "active": True, "skip": None})
    assert query == "active=true&q=a+b%26c"


def test_request_url():
    """request URL 생성 테스트"""
    assert RequestSpec(Method.GET, "users/me").request_url("api/v1") == "api/v1/users/me"
    assert RequestSpec(Method.GET, "/users/me").request_url("api/v1") == "api/v1/users/me"
    assert RequestSpec(Method.GET, "users/me", params={}).request_url("api/v1") == "api/v1/users/me"

    spec = RequestSpec(Method.GET, "offers", params={"page": 1})
    assert spec.request_url("api/v1") == "api/v1/offers?page=1"


def test_canonical_string():
    """서명 대상 문자열 순서 및 구분자 테스트"""
    payload = SignaturePayload(
        method=Method.GET,
        content_md5=EMPTY_MD5,
        request_url="api/v1/users/me",
        date="Thu, 01 Jan 1970 00:00:00 GMT",
    )

    assert payload.canonical_string() == (
        "GET,application/json,1B2M2Y8AsgTpgAmY7PhCfg==,/api/v1/users/me,Thu, 01 Jan 1970 00:00:00 GMT"
    )
    assert payload.sign(SECRET) == hmac_sha1(SECRET, payload.canonical_string())


def test_signature_is_deterministic():
    """같은 입력이면 같은 서명"""
    first = _signature("POST", "offers", {"amount": 1}, 1704067200)
    second = _signature("POST", "offers", {"amount": 1}, 1704067200)

    assert first == second


def test_signature_changes_with_each_field():
    """method, path, body, timestamp 중 하나만 바뀌어도 서명이 달라야 함"""
    base = ("POST", "offers", {"amount": 1}, 1704067200)
    variants = [
        base,
        ("PUT", "offers", {"amount": 1}, 1704067200),
        ("DELETE", "offers", {"amount": 1}, 1704067200),
        ("POST", "offers/1", {"amount": 1}, 1704067200),
        ("POST", "users/me", {"amount": 1}, 1704067200),
        ("POST", "offers", {"amount": 2}, 1704067200),
        ("POST", "offers", {"amount": 1, "coin": "btc"}, 1704067200),
        ("POST", "offers", None, 1704067200),
        ("POST", "offers", {"amount": 1}, 1704067201),
        ("POST", "offers", {"amount": 1}, 1704153600),
    ]

    signatures = [_signature(*v) for v in variants]

    for (i, a), (j, b) in combinations(enumerate(signatures), 2):
        assert a != b, f"{variants[i]} and {variants[j]} produced the same signature"


def test_signature_covers_query():
    assert _signature("GET", "offers", None, 0, {"page": 1}) != _signature("GET", "offers", None, 0, {"page": 2})


def test_method_parse():
    assert Method.parse("get") is Method.GET
    assert Method.parse(Method.DELETE) is Method.DELETE

    with pytest.raises(ValueError):
        Method.parse("PATCH")
