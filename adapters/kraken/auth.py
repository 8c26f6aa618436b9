"""
Kraken 인증

API 키 보관, nonce 생성, 요청 서명.

서명 방식:
    API-Sign = base64(HMAC-SHA512(base64_decode(secret),
                                  url_path + SHA256(nonce + data)))
"""

import base64
import binascii
import hashlib
import hmac
import time
from dataclasses import dataclass, field

from adapters.kraken.errors import KrakenSigningError


@dataclass(frozen=True)
class KrakenCredentials:
    """Private API 인증 정보

    생성 시 검증하지 않음. secret의 base64 검증은 첫 서명 시점에 수행.

    Attributes:
        key: API 키 이름
        secret: base64로 인코딩된 API 시크릿
    """

    key: str
    secret: str = field(repr=False)


@dataclass(frozen=True)
class SignedRequest:
    """서명된 요청

    Attributes:
        post_data: 요청 본문으로 전송할 문자열
        signature: API-Sign 헤더 값
    """

    post_data: str
    signature: str = field(repr=False)


def generate_nonce() -> int:
    """현재 시각 기반 nonce 반환 (Unix epoch 밀리초)

    시스템 시계가 뒤로 가는 경우는 방어하지 않음.
    """
    return int(time.time() * 1000)


def _decode_secret(secret: str) -> bytes:
    """base64 시크릿 -> HMAC 키 바이트"""
    try:
        return base64.b64decode(secret, validate=True)
    except (binascii.Error, ValueError) as e:
        raise KrakenSigningError(f"API secret is not valid base64: {e}") from e


def sign_request(
    credentials: KrakenCredentials,
    url_path: str,
    query: str | None,
    post_data: str,
    nonce: int,
) -> SignedRequest:
    """Kraken 방식으로 요청 서명

    post_data가 어떻게 만들어졌는지(JSON/폼)는 알 필요 없음.

    Args:
        credentials: 인증 정보
        url_path: URL 경로만 (예: /0/private/Balance)
        query: URL 쿼리 문자열 (없으면 None)
        post_data: 요청 본문 문자열 (nonce 포함)
        nonce: post_data에 포함된 nonce

    Returns:
        SignedRequest (post_data, signature)

    Raises:
        KrakenSigningError: secret이 올바른 base64가 아닌 경우
    """
    data = f"{query}{post_data}" if query else post_data

    sha256_digest = hashlib.sha256(
        (str(nonce) + data).encode("utf-8")
    ).digest()

    hmac_key = _decode_secret(credentials.secret)

    mac = hmac.new(
        hmac_key,
        url_path.encode("utf-8") + sha256_digest,
        hashlib.sha512,
    ).digest()

    signature = base64.b64encode(mac).decode("ascii")
    return SignedRequest(post_data=post_data, signature=signature)


def build_auth_headers(credentials: KrakenCredentials, signature: str) -> dict[str, str]:
    """인증 헤더 생성"""
    return {
        "API-Key": credentials.key,
        "API-Sign": signature,
    }

