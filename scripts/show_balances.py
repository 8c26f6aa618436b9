"""BTC 잔고 조회 스크립트

config/secrets.yaml의 kraken 키로 비트코인 티커 잔고를 조회하여 출력.
"""
import asyncio
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from adapters.kraken import KrakenError, KrakenRestClient
from core.config.loader import SecretsLoadError, get_settings
from core.logging import setup_logging

logger = logging.getLogger(__name__)


async def main() -> int:
    setup_logging("show_balances")
    try:
        settings = get_settings()
    except SecretsLoadError as e:
        logger.error(f"설정 로드 실패: {e}")
        return 1

    async with KrakenRestClient(settings.credentials, config=settings.client_config) as client:
        try:
            balances = await client.get_btc_balances()
        except KrakenError as e:
            logger.error(f"잔고 조회 실패: {e}")
            return 1

    if not balances:
        print("No balances")
        return 0

    print("=" * 40)
    for ticker, amount in sorted(balances.items()):
        print(f"  {ticker:6} | {amount:>15.8f}")
    print("-" * 40)
    print(f"  Balance: {sum(balances.values()):.8f} BTC")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
