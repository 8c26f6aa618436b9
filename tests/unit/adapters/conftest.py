"""
어댑터 테스트 픽스처

공통 테스트 설정 및 픽스처 제공.
"""

import pytest

from adapters.kraken.auth import KrakenCredentials
from adapters.kraken.rest_client import KrakenRestClient
from adapters.mock.transport import MockTransport


# Kraken 문서의 서명 예제 키
DOC_SECRET = "kQH5HW/8p1uGOVjbgWA7FunAmGO8lsSUXNsu3eow76sz84Q18fWxnyRzBHCd3pd5nE9qa99HAZtuZuj6F1huXg=="

FIXED_NONCE = 1616492376594


# -------------------------------------------------------------------------
# 공통 데이터 픽스처
# -------------------------------------------------------------------------

@pytest.fixture
def credentials() -> KrakenCredentials:
    """샘플 인증 정보"""
    return KrakenCredentials(key="test_api_key", secret=DOC_SECRET)


@pytest.fixture
def mock_transport() -> MockTransport:
    """Mock 전송"""
    return MockTransport()


@pytest.fixture
def client(credentials: KrakenCredentials, mock_transport: MockTransport) -> KrakenRestClient:
    """고정 nonce를 쓰는 클라이언트"""
    return KrakenRestClient(
        credentials,
        transport=mock_transport,
        nonce_factory=lambda: FIXED_NONCE,
    )


# -------------------------------------------------------------------------
# Kraken 응답 픽스처
# -------------------------------------------------------------------------

@pytest.fixture
def kraken_balance_response() -> dict:
    """Kraken Balance 응답"""
    return {
        "error": [],
        "result": {
            "XBT": "1.5",
            "XBT.F": "2.3",
            "ETH": "10.0",
            "USD": "1000.50",
        },
    }


@pytest.fixture
def kraken_deposit_item() -> dict:
    """Kraken DepositStatus 항목"""
    return {
        "method": "Bitcoin",
        "aclass": "currency",
        "asset": "XXBT",
        "refid": "FTQcuak-V6Za8qrWnhzTx67yYHz8Tg",
        "txid": "6544b41b607d8b2512baf801755a3a87b6890eacdb451be8a94059fb11f0a8d9",
        "info": "2Myd4eaAW96ojk38A2uDK4FbioCayvkEgVq",
        "amount": "0.78125000",
        "fee": "0.0000000000",
        "time": 1688992722,
        "status": "Success",
        "status-prop": "return",
    }


@pytest.fixture
def kraken_withdraw_item() -> dict:
    """Kraken WithdrawStatus 항목"""
    return {
        "method": "Bitcoin",
        "network": "Bitcoin",
        "aclass": "currency",
        "asset": "XXBT",
        "refid": "FTQcuak-V6Za8qrPnhsTx47yYLz8Tg",
        "txid": "KLETXZ-33IRN-P4EO2K",
        "info": "mzp6yUVMRxfasyfwzTZjjy38dHqMX7Z3GR",
        "amount": "0.72485000",
        "fee": "0.00020000",
        "time": 1688014586,
        "status": "PENDING",
    }


@pytest.fixture
def kraken_trades_history_result() -> dict:
    """Kraken TradesHistory result"""
    return {
        "trades": {
            "THVRQM-33VKH-UCI7BS": {
                "ordertxid": "OQCLML-BW3P3-BUCMWZ",
                "postxid": "TKH2SE-M7IF5-CFI7LT",
                "pair": "XXBTZUSD",
                "time": 1688667796.8802,
                "type": "buy",
                "ordertype": "limit",
                "price": "30010.00000",
                "cost": "600.20000",
                "fee": "0.00000",
                "vol": "0.02000000",
                "margin": "0.00000",
                "misc": "",
            },
            "TCWJEG-FL4SZ-3FKGH6": {
                "ordertxid": "OQCLML-BW3P3-BUCMWZ",
                "postxid": "TKH2SE-M7IF5-CFI7LT",
                "pair": "XXBTZUSD",
                "time": 1688667769.6396,
                "type": "sell",
                "ordertype": "market",
                "price": "30010.00000",
                "cost": "300.10000",
                "fee": "0.78026",
                "vol": "0.01000000",
                "margin": "0.00000",
                "misc": "",
            },
        },
        "count": 2346,
    }
