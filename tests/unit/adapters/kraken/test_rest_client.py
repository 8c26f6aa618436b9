"""
Kraken REST 클라이언트 테스트

MockTransport로 요청 형태(URL, 헤더, 본문, 서명)와 응답 처리 검증.
"""

import base64
import hashlib
import hmac
import json
from unittest.mock import patch

import pytest

from adapters.interfaces import IKrakenPrivateClient
from adapters.kraken.auth import KrakenCredentials, sign_request
from adapters.kraken.errors import (
    KrakenApiError,
    KrakenDecodeError,
    KrakenMissingResultError,
    KrakenSigningError,
    KrakenTransportError,
    MissingCredentialsError,
)
from adapters.kraken.rest_client import KrakenRestClient
from adapters.kraken.transport import HttpxTransport
from adapters.mock.transport import MockTransport
from core.config.client import ClientConfig
from core.types import PostDataEncoding, TradeHistoryType, TransactionStatus


NONCE = 1616492376594

# (operation, result decoder)
OPERATION_DECODERS = [
    ("get_btc_balances", "adapters.kraken.rest_client.filter_bitcoin_balances"),
    ("get_btc_balance", "adapters.kraken.rest_client.filter_bitcoin_balances"),
    ("get_deposit_transactions", "adapters.kraken.rest_client.parse_transactions"),
    ("get_withdraw_transactions", "adapters.kraken.rest_client.parse_transactions"),
    ("get_trades_history", "adapters.kraken.rest_client.TradesHistoryPage.from_api"),
]

# error와 함께 오는 result (연산별 정상 형태)
PARTIAL_RESULTS = {
    "get_btc_balances": {"XBT": "1.0"},
    "get_btc_balance": {"XBT": "1.0"},
    "get_deposit_transactions": [],
    "get_withdraw_transactions": [],
    "get_trades_history": {"trades": {}, "count": 0},
}


class TestKrakenRestClientInit:
    """생성 테스트"""

    def test_default_transport(self) -> None:
        """transport 미지정 시 HttpxTransport (설정 반영)"""
        config = ClientConfig(timeout=5.0, user_agent="ua/1.0")

        client = KrakenRestClient(None, config=config)

        assert isinstance(client.transport, HttpxTransport)
        assert client.transport.timeout == 5.0
        assert client.transport.user_agent == "ua/1.0"

    def test_protocol_compliance(self, client: KrakenRestClient) -> None:
        """IKrakenPrivateClient Protocol 준수"""
        assert isinstance(client, IKrakenPrivateClient)


class TestKrakenRestClientRequest:
    """요청 형태 테스트"""

    @pytest.mark.asyncio
    async def test_balance_request_shape(
        self,
        client: KrakenRestClient,
        credentials: KrakenCredentials,
        mock_transport: MockTransport,
        kraken_balance_response: dict,
    ) -> None:
        """URL, 헤더, 본문, 서명"""
        mock_transport.queue_response(kraken_balance_response)

        await client.get_btc_balances()

        request = mock_transport.last_request
        assert request.url == "https://api.kraken.com/0/private/Balance"
        assert request.content == '{"nonce":1616492376594}'
        assert request.headers["API-Key"] == "test_api_key"
        assert request.headers["Content-Type"] == "application/json"

        expected = sign_request(
            credentials, "/0/private/Balance", None, request.content, NONCE
        )
        assert request.headers["API-Sign"] == expected.signature

    @pytest.mark.asyncio
    async def test_signature_covers_path_and_body(
        self,
        client: KrakenRestClient,
        credentials: KrakenCredentials,
        mock_transport: MockTransport,
    ) -> None:
        """서명 = HMAC-SHA512(path + SHA256(nonce + body))"""
        mock_transport.queue_response({"error": [], "result": []})

        await client.get_deposit_transactions("XBT")

        request = mock_transport.last_request
        assert request.content == '{"nonce":1616492376594,"asset":"XBT"}'

        digest = hashlib.sha256((str(NONCE) + request.content).encode()).digest()
        mac = hmac.new(
            base64.b64decode(credentials.secret),
            b"/0/private/DepositStatus" + digest,
            hashlib.sha512,
        )
        assert request.headers["API-Sign"] == base64.b64encode(mac.digest()).decode()

    @pytest.mark.asyncio
    async def test_nonce_drawn_per_request(
        self,
        credentials: KrakenCredentials,
        mock_transport: MockTransport,
    ) -> None:
        """요청마다 nonce 새로 발급"""
        nonces = iter([100, 101])
        client = KrakenRestClient(
            credentials,
            transport=mock_transport,
            nonce_factory=lambda: next(nonces),
        )
        mock_transport.queue_response({"error": [], "result": {}})
        mock_transport.queue_response({"error": [], "result": {}})

        await client.get_btc_balances()
        await client.get_btc_balances()

        assert [r.content for r in mock_transport.requests] == [
            '{"nonce":100}',
            '{"nonce":101}',
        ]
        assert (
            mock_transport.requests[0].headers["API-Sign"]
            != mock_transport.requests[1].headers["API-Sign"]
        )

    @pytest.mark.asyncio
    async def test_form_encoding(
        self,
        credentials: KrakenCredentials,
        mock_transport: MockTransport,
    ) -> None:
        """FORM 방식 설정 시 본문/Content-Type 변경"""
        client = KrakenRestClient(
            credentials,
            config=ClientConfig(post_data_encoding=PostDataEncoding.FORM),
            transport=mock_transport,
            nonce_factory=lambda: NONCE,
        )
        mock_transport.queue_response({"error": [], "result": []})

        await client.get_withdraw_transactions("XBT")

        request = mock_transport.last_request
        assert request.content == "nonce=1616492376594&asset=XBT"
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        expected = sign_request(
            credentials, "/0/private/WithdrawStatus", None, request.content, NONCE
        )
        assert request.headers["API-Sign"] == expected.signature

    @pytest.mark.asyncio
    async def test_custom_root_url_and_version(
        self,
        credentials: KrakenCredentials,
        mock_transport: MockTransport,
    ) -> None:
        client = KrakenRestClient(
            credentials,
            config=ClientConfig(root_url="https://example.test/", api_version=1),
            transport=mock_transport,
            nonce_factory=lambda: NONCE,
        )
        mock_transport.queue_response({"error": [], "result": {}})

        await client.get_btc_balances()

        assert mock_transport.last_request.url == "https://example.test/1/private/Balance"

    @pytest.mark.asyncio
    async def test_trades_history_request(
        self,
        client: KrakenRestClient,
        mock_transport: MockTransport,
        kraken_trades_history_result: dict,
    ) -> None:
        mock_transport.queue_response({"error": [], "result": kraken_trades_history_result})

        page = await client.get_trades_history(
            type=TradeHistoryType.ALL,
            include_trades=True,
            offset=50,
        )

        request = mock_transport.last_request
        assert request.url.endswith("/0/private/TradesHistory")
        assert json.loads(request.content) == {
            "nonce": NONCE,
            "type": "all",
            "trades": True,
            "ofs": 50,
        }
        assert page.count == 2346
        assert len(page.trades) == 2


class TestKrakenRestClientBalances:
    """잔고 조회 테스트"""

    @pytest.mark.asyncio
    async def test_get_btc_balances_filters(
        self,
        client: KrakenRestClient,
        mock_transport: MockTransport,
        kraken_balance_response: dict,
    ) -> None:
        mock_transport.queue_response(kraken_balance_response)

        balances = await client.get_btc_balances()

        assert balances == pytest.approx({"XBT": 1.5, "XBT.F": 2.3})

    @pytest.mark.asyncio
    async def test_get_btc_balance_sum(
        self,
        client: KrakenRestClient,
        mock_transport: MockTransport,
        kraken_balance_response: dict,
    ) -> None:
        mock_transport.queue_response(kraken_balance_response)

        assert await client.get_btc_balance() == pytest.approx(3.8, abs=1e-4)

    @pytest.mark.asyncio
    async def test_get_btc_balance_empty(
        self,
        client: KrakenRestClient,
        mock_transport: MockTransport,
    ) -> None:
        mock_transport.queue_response({"error": [], "result": {"ZUSD": "100.0"}})

        assert await client.get_btc_balance() == 0.0

    @pytest.mark.asyncio
    async def test_custom_ticker_whitelist(
        self,
        credentials: KrakenCredentials,
        mock_transport: MockTransport,
    ) -> None:
        client = KrakenRestClient(
            credentials,
            config=ClientConfig(btc_tickers=frozenset({"XBT.NEW"})),
            transport=mock_transport,
            nonce_factory=lambda: NONCE,
        )
        mock_transport.queue_response({"error": [], "result": {"XBT": "1", "XBT.NEW": "2"}})

        assert await client.get_btc_balances() == {"XBT.NEW": 2.0}

    @pytest.mark.asyncio
    async def test_invalid_amount(
        self,
        client: KrakenRestClient,
        mock_transport: MockTransport,
    ) -> None:
        mock_transport.queue_response({"error": [], "result": {"XBT": "not_a_number"}})

        with pytest.raises(KrakenDecodeError):
            await client.get_btc_balance()


class TestKrakenRestClientTransactions:
    """입출금 내역 테스트"""

    @pytest.mark.asyncio
    async def test_get_deposit_transactions(
        self,
        client: KrakenRestClient,
        mock_transport: MockTransport,
        kraken_deposit_item: dict,
    ) -> None:
        mock_transport.queue_response({"error": [], "result": [kraken_deposit_item]})

        transactions = await client.get_deposit_transactions()

        assert mock_transport.last_request.content == '{"nonce":1616492376594}'
        assert len(transactions) == 1
        assert transactions[0].status == TransactionStatus.SUCCESS

    @pytest.mark.asyncio
    async def test_get_withdraw_transactions(
        self,
        client: KrakenRestClient,
        mock_transport: MockTransport,
        kraken_withdraw_item: dict,
    ) -> None:
        mock_transport.queue_response({"error": [], "result": [kraken_withdraw_item]})

        transactions = await client.get_withdraw_transactions()

        assert mock_transport.last_request.url.endswith("/0/private/WithdrawStatus")
        assert transactions[0].network == "Bitcoin"
        assert transactions[0].status == TransactionStatus.PENDING


class TestKrakenRestClientErrors:
    """에러 처리 테스트"""

    @pytest.mark.asyncio
    async def test_missing_credentials_before_network(
        self,
        mock_transport: MockTransport,
    ) -> None:
        """인증 정보 없으면 요청 전에 에러"""
        client = KrakenRestClient(None, transport=mock_transport)

        with pytest.raises(MissingCredentialsError):
            await client.get_btc_balance()
        with pytest.raises(MissingCredentialsError):
            await client.get_deposit_transactions()

        assert mock_transport.requests == []

    @pytest.mark.asyncio
    async def test_invalid_secret_before_network(
        self,
        mock_transport: MockTransport,
    ) -> None:
        """잘못된 secret은 서명 단계에서 실패 (요청 없음)"""
        client = KrakenRestClient(
            KrakenCredentials(key="key", secret="%%%"),
            transport=mock_transport,
        )

        with pytest.raises(KrakenSigningError):
            await client.get_btc_balances()

        assert mock_transport.requests == []

    @pytest.mark.asyncio
    async def test_exchange_error(
        self,
        client: KrakenRestClient,
        mock_transport: MockTransport,
    ) -> None:
        """거래소 에러는 KrakenApiError로 그대로 전달"""
        mock_transport.queue_response({"error": ["EAPI:Invalid nonce"]})

        with pytest.raises(KrakenApiError) as exc_info:
            await client.get_btc_balances()

        assert exc_info.value.errors == ["EAPI:Invalid nonce"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation, decoder_path", OPERATION_DECODERS)
    async def test_partial_failure_is_error(
        self,
        client: KrakenRestClient,
        mock_transport: MockTransport,
        operation: str,
        decoder_path: str,
    ) -> None:
        """result가 있어도 error가 있으면 에러 (result는 디코딩하지 않음)"""
        errors = ["EGeneral:Internal error", "EAPI:Rate limit exceeded"]
        mock_transport.queue_response({"error": errors, "result": PARTIAL_RESULTS[operation]})

        with patch(decoder_path) as decoder:
            with pytest.raises(KrakenApiError) as exc_info:
                await getattr(client, operation)()

        assert exc_info.value.errors == errors
        decoder.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("operation, decoder_path", OPERATION_DECODERS)
    @pytest.mark.parametrize(
        "payload",
        [{"error": [], "result": None}, {"error": []}],
        ids=["null", "absent"],
    )
    async def test_missing_result(
        self,
        client: KrakenRestClient,
        mock_transport: MockTransport,
        operation: str,
        decoder_path: str,
        payload: dict,
    ) -> None:
        mock_transport.queue_response(payload)

        with patch(decoder_path) as decoder:
            with pytest.raises(KrakenMissingResultError):
                await getattr(client, operation)()

        decoder.assert_not_called()

    @pytest.mark.asyncio
    async def test_transport_error_not_retried(
        self,
        client: KrakenRestClient,
        mock_transport: MockTransport,
    ) -> None:
        """전송 에러는 재시도 없이 전파"""
        mock_transport.queue_http_error(503, "Service Unavailable")
        mock_transport.queue_response({"error": [], "result": {"XBT": "1"}})

        with pytest.raises(KrakenTransportError) as exc_info:
            await client.get_btc_balances()

        assert exc_info.value.status_code == 503
        assert len(mock_transport.requests) == 1


class TestKrakenRestClientLifecycle:
    """종료 테스트"""

    @pytest.mark.asyncio
    async def test_context_manager_closes_transport(
        self,
        credentials: KrakenCredentials,
        mock_transport: MockTransport,
    ) -> None:
        async with KrakenRestClient(credentials, transport=mock_transport) as client:
            assert isinstance(client, KrakenRestClient)

        assert mock_transport.closed
