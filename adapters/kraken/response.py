"""
Kraken API 응답 envelope

Kraken은 모든 응답을 {"error": [...], "result": ...} 형태로 감싼다.
error가 비어 있지 않으면 result 유무와 관계없이 에러로 처리.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, TypeVar

from adapters.kraken.errors import (
    KrakenApiError,
    KrakenDecodeError,
    KrakenMissingResultError,
)

T = TypeVar("T")


def _load_json(raw: bytes | str | dict[str, Any]) -> Any:
    """원시 응답 -> JSON 객체"""
    if isinstance(raw, dict):
        return raw
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        raise KrakenDecodeError(f"Response is not valid JSON: {e}") from e


@dataclass(frozen=True)
class KrakenEnvelope(Generic[T]):
    """Kraken 응답 envelope

    Attributes:
        errors: 에러 문자열 목록 (순서 보존)
        result: 결과 (에러 시 생략되거나 null일 수 있음)
    """

    errors: list[str] = field(default_factory=list)
    result: T | None = None

    @classmethod
    def from_api(cls, raw: bytes | str | dict[str, Any]) -> "KrakenEnvelope[Any]":
        """API 응답에서 생성

        Raises:
            KrakenDecodeError: JSON이 아니거나 error 필드 형식이 잘못된 경우
        """
        data = _load_json(raw)

        if not isinstance(data, dict):
            raise KrakenDecodeError(
                f"Response must be a JSON object, got {type(data).__name__}"
            )

        if "error" not in data:
            raise KrakenDecodeError("Response has no 'error' field")

        errors = data["error"]
        if not isinstance(errors, list) or not all(isinstance(e, str) for e in errors):
            raise KrakenDecodeError("Response 'error' field must be a list of strings")

        return cls(errors=list(errors), result=data.get("result"))

    @property
    def is_error(self) -> bool:
        """에러 응답 여부"""
        return bool(self.errors)

    def extract(self) -> T:
        """결과 추출

        Raises:
            KrakenApiError: error 배열이 비어 있지 않은 경우 (result보다 우선)
            KrakenMissingResultError: error도 result도 없는 경우
        """
        if self.errors:
            raise KrakenApiError(self.errors)

        if self.result is None:
            raise KrakenMissingResultError()

        return self.result


def unwrap(
    raw: bytes | str | dict[str, Any],
    decoder: Callable[[Any], T] | None = None,
) -> T:
    """응답 envelope을 풀고 결과를 디코딩

    decoder는 에러 우선 처리 이후에만 호출되므로,
    부분 실패 응답(result와 error 동시 존재)은 항상 KrakenApiError.

    Args:
        raw: 원시 응답 (bytes, str 또는 이미 파싱된 dict)
        decoder: 결과 변환 함수 (None이면 그대로 반환)

    Returns:
        디코딩된 결과
    """
    result = KrakenEnvelope.from_api(raw).extract()
    if decoder is None:
        return result
    return decoder(result)
