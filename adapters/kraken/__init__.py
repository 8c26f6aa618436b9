"""
Kraken 어댑터 패키지

Private REST API 클라이언트, 요청 서명, 응답 envelope 처리 제공.
"""

from adapters.kraken.auth import KrakenCredentials, SignedRequest, generate_nonce, sign_request
from adapters.kraken.errors import (
    KrakenApiError,
    KrakenDecodeError,
    KrakenEncodeError,
    KrakenError,
    KrakenMissingResultError,
    KrakenSigningError,
    KrakenTransportError,
    MissingCredentialsError,
)
from adapters.kraken.models import TradeRecord, TradesHistoryPage, TransactionRecord
from adapters.kraken.rest_client import KrakenRestClient
from adapters.kraken.transport import HttpxTransport

__all__ = [
    "KrakenRestClient",
    "HttpxTransport",
    "KrakenCredentials",
    "SignedRequest",
    "generate_nonce",
    "sign_request",
    "TransactionRecord",
    "TradeRecord",
    "TradesHistoryPage",
    # Errors
    "KrakenError",
    "KrakenEncodeError",
    "KrakenSigningError",
    "KrakenTransportError",
    "KrakenDecodeError",
    "KrakenMissingResultError",
    "KrakenApiError",
    "MissingCredentialsError",
]
