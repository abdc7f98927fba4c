"""
承诺验证工具
Commitment Verifier - 用公开的密钥和电脑招式重算 HMAC
"""
import sys
import argparse
from typing import List, Optional

from .game.commitment import verify_commitment
from .utils.config_loader import SUPPORTED_DIGESTS
from .utils.logger import setup_logger

logger = setup_logger("FairRPS.Verify")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog='fairrps-verify',
        description='Check that a revealed HMAC key and move match the published HMAC.'
    )
    parser.add_argument('key', help='revealed HMAC key (hex)')
    parser.add_argument('move', help="computer's move exactly as printed")
    parser.add_argument('hmac', help='HMAC published before your move (hex)')
    parser.add_argument('--digest', default='sha256', choices=sorted(SUPPORTED_DIGESTS))
    args = parser.parse_args(argv)

    if verify_commitment(args.hmac, args.key, args.move, digest=args.digest):
        print("OK")
        return 0

    logger.info(f"承诺不匹配: move={args.move}")
    print("MISMATCH")
    return 1


if __name__ == "__main__":
    sys.exit(main())
