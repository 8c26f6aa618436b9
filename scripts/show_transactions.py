"""입출금 내역 조회 스크립트

최근 입금/출금 내역을 조회하여 출력.

사용법:
    python scripts/show_transactions.py [--asset XBT] [--verbose]
"""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from adapters.kraken import KrakenError, KrakenRestClient, TransactionRecord
from core.config.loader import SecretsLoadError, get_settings
from core.logging import setup_logging

logger = logging.getLogger(__name__)


def print_transactions(title: str, transactions: list[TransactionRecord]) -> None:
    print(f"\n[{title}] {len(transactions)}건")
    for tx in transactions:
        network = f" ({tx.network})" if tx.network else ""
        print(
            f"  {tx.time} | {tx.asset:6} | {tx.method}{network} | "
            f"{tx.amount:>15.8f} | fee {tx.fee:.8f} | {tx.status.value}"
        )


async def main() -> int:
    parser = argparse.ArgumentParser(description="Kraken 입출금 내역 조회")
    parser.add_argument("--asset", default=None, help="자산 코드 (예: XBT)")
    parser.add_argument("--verbose", action="store_true", help="요청 흐름(DEBUG) 출력")
    args = parser.parse_args()

    setup_logging("show_transactions", logging.DEBUG if args.verbose else logging.INFO)
    try:
        settings = get_settings()
    except SecretsLoadError as e:
        logger.error(f"설정 로드 실패: {e}")
        return 1

    async with KrakenRestClient(settings.credentials, config=settings.client_config) as client:
        try:
            deposits = await client.get_deposit_transactions(args.asset)
            withdrawals = await client.get_withdraw_transactions(args.asset)
        except KrakenError as e:
            logger.error(f"입출금 내역 조회 실패: {e}")
            return 1

    print_transactions("입금", deposits)
    print_transactions("출금", withdrawals)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
