"""
Kraken 클라이언트 에러

에러 종류별로 클래스를 분리하여 호출자가
"거래소가 거절함"과 "클라이언트/네트워크 실패"를 구분할 수 있게 함.
"""


class KrakenError(Exception):
    """Kraken 클라이언트 에러 (최상위)"""

    pass


class KrakenEncodeError(KrakenError):
    """요청 본문 직렬화 실패"""

    pass


class KrakenSigningError(KrakenEncodeError):
    """서명 생성 실패

    API 시크릿이 올바른 base64가 아닐 때 발생.
    생성 시점이 아닌 서명 시점에 검증됨.
    """

    pass


class KrakenTransportError(KrakenError):
    """HTTP 전송 에러

    연결/TLS/타임아웃 실패 또는 HTTP 4xx/5xx 응답 시 발생.
    자동 재시도하지 않음.
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        self.message = message
        if status_code is not None:
            super().__init__(f"HTTP {status_code}: {message}")
        else:
            super().__init__(message)


class KrakenDecodeError(KrakenError):
    """응답 디코딩 실패

    JSON 형식 오류, 숫자 문자열 파싱 실패, 알 수 없는 상태값 등.
    """

    pass


class KrakenMissingResultError(KrakenError):
    """응답에 error도 result도 없음 (프로토콜 위반)"""

    def __init__(self, message: str = "missing result"):
        super().__init__(message)


class KrakenApiError(KrakenError):
    """Kraken API 에러

    응답 envelope의 error 배열이 비어 있지 않을 때 발생.
    에러 문자열은 순서 그대로, 요약 없이 보존.
    """

    def __init__(self, errors: list[str]):
        self.errors = list(errors)
        super().__init__(f"Kraken API Error: {self.errors}")


class MissingCredentialsError(KrakenError):
    """API 키 없이 Private API 호출 시 발생 (네트워크 요청 전)"""

    def __init__(self, message: str = "missing credentials"):
        super().__init__(message)
