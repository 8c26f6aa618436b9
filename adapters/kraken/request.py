"""
Kraken Private API 요청 본문 모델

요청 유형별 본문(EmptyBody, AssetFilterBody, TradesHistoryBody)과
post-data 직렬화.

post-data 직렬화 방식:
- JSON (기본): {"nonce":1616492376594,"asset":"XBT"}
- FORM: nonce=1616492376594&asset=XBT

값이 없는 선택 필드는 null로 보내지 않고 키 자체를 생략.
"""

import json
from dataclasses import dataclass
from typing import Any, Union
from urllib.parse import urlencode

from adapters.kraken.errors import KrakenEncodeError
from core.types import PostDataEncoding, PrivateMethod, TradeHistoryType


def _drop_none(fields: dict[str, Any]) -> dict[str, Any]:
    """값이 None인 필드 제거"""
    return {key: value for key, value in fields.items() if value is not None}


@dataclass(frozen=True)
class EmptyBody:
    """필드가 없는 요청 (nonce만 전송)"""

    def to_fields(self) -> dict[str, Any]:
        return {}


@dataclass(frozen=True)
class AssetFilterBody:
    """자산 필터 요청 (DepositStatus, WithdrawStatus)

    Attributes:
        asset: 자산 코드 (None이면 전체)
    """

    asset: str | None = None

    def to_fields(self) -> dict[str, Any]:
        return _drop_none({"asset": self.asset})


@dataclass(frozen=True)
class TradesHistoryBody:
    """체결 내역 조회 요청

    Attributes:
        type: 조회 유형 (기본 all)
        trades: 포지션 관련 체결 포함 여부
        start: 시작 시각 (Unix 초 또는 txid)
        end: 종료 시각 (Unix 초 또는 txid)
        ofs: 결과 오프셋 (페이지네이션)
    """

    type: TradeHistoryType | None = None
    trades: bool | None = None
    start: int | str | None = None
    end: int | str | None = None
    ofs: int | None = None

    def to_fields(self) -> dict[str, Any]:
        return _drop_none({
            "type": self.type.value if self.type is not None else None,
            "trades": self.trades,
            "start": self.start,
            "end": self.end,
            "ofs": self.ofs,
        })


RequestBody = Union[EmptyBody, AssetFilterBody, TradesHistoryBody]


@dataclass(frozen=True)
class PrivateRequest:
    """Private API 요청 (메서드 + 본문)"""

    method: PrivateMethod
    body: RequestBody

    @classmethod
    def balance(cls) -> "PrivateRequest":
        return cls(PrivateMethod.BALANCE, EmptyBody())

    @classmethod
    def deposit_status(cls, asset: str | None = None) -> "PrivateRequest":
        return cls(PrivateMethod.DEPOSIT_STATUS, AssetFilterBody(asset=asset))

    @classmethod
    def withdraw_status(cls, asset: str | None = None) -> "PrivateRequest":
        return cls(PrivateMethod.WITHDRAW_STATUS, AssetFilterBody(asset=asset))

    @classmethod
    def trades_history(
        cls,
        type: TradeHistoryType | None = None,
        include_trades: bool | None = None,
        start: int | str | None = None,
        end: int | str | None = None,
        offset: int | None = None,
    ) -> "PrivateRequest":
        return cls(
            PrivateMethod.TRADES_HISTORY,
            TradesHistoryBody(
                type=type,
                trades=include_trades,
                start=start,
                end=end,
                ofs=offset,
            ),
        )


def _form_value(value: Any) -> str:
    """폼 인코딩용 값 변환 (bool은 소문자)"""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_post_data(
    body: RequestBody,
    nonce: int,
    encoding: PostDataEncoding = PostDataEncoding.JSON,
) -> str:
    """nonce와 본문 필드를 post-data 문자열로 직렬화

    nonce는 항상 첫 번째 필드. 필드가 없어도 nonce는 포함.

    Args:
        body: 요청 본문
        nonce: 이번 요청의 nonce
        encoding: 직렬화 방식

    Returns:
        post-data 문자열 (서명 입력 및 HTTP 본문)

    Raises:
        KrakenEncodeError: 직렬화할 수 없는 값이 있는 경우
    """
    fields: dict[str, Any] = {"nonce": nonce, **body.to_fields()}

    if encoding is PostDataEncoding.JSON:
        try:
            return json.dumps(fields, separators=(",", ":"), ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise KrakenEncodeError(f"Request body is not serializable: {e}") from e

    return urlencode([(key, _form_value(value)) for key, value in fields.items()])
