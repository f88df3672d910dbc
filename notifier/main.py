# notifier/main.py
import argparse
import asyncio
import sys
from typing import List, Optional
from notifier.core.errors import ConfigInvalid, DeliveryFailed, RecordPersistFailed
from notifier.core.models import Frequency
from notifier.observability.logging_setup import setup_logging, get_logger
from notifier.orchestrators.gate import DedupGate
from notifier.settings import build_settings, parse_recipients

EXIT_OK = 0
EXIT_PERSIST_FAILED = 1
EXIT_CONFIG_INVALID = 2
EXIT_DELIVERY_FAILED = 3

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="SendGrid 알림 발송 (중복 방지)")
    parser.add_argument("subject", help="메일 제목")
    parser.add_argument("message", help="메일 본문")
    parser.add_argument(
        "--frequency",
        choices=[f.value for f in Frequency],
        default=None,
        help="발송 빈도 (기본값: NOTIFIER_FREQUENCY 또는 always)"
    )
    parser.add_argument("--tag", default=None, help="메시지 태그")
    parser.add_argument(
        "--to",
        action="append",
        default=None,
        help="수신자 (반복 가능, 'Name <addr>' 또는 'addr')"
    )
    parser.add_argument("--db", default=None, help="기록 파일 경로")
    return parser

def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        s = build_settings()
    except ConfigInvalid as e:
        setup_logging()
        get_logger("notifier.main").error(f"설정 오류: {e}")
        return EXIT_CONFIG_INVALID
    if args.db:
        s.mail.database_file_path = args.db
    setup_logging(s.observability.log_level)
    log = get_logger("notifier.main")

    recipients = None
    if args.to:
        recipients = parse_recipients(",".join(args.to))

    gate = DedupGate(s.to_notifier_config())
    try:
        result = asyncio.run(gate.send(
            args.subject,
            args.message,
            frequency=Frequency(args.frequency) if args.frequency else None,
            tag=args.tag,
            recipients=recipients,
        ))
    except ConfigInvalid as e:
        log.error(f"설정 오류: {e}")
        return EXIT_CONFIG_INVALID
    except DeliveryFailed as e:
        log.error(f"발송 실패: {e}")
        return EXIT_DELIVERY_FAILED
    except RecordPersistFailed as e:
        log.warning(f"발송은 성공했지만 기록 저장 실패: {e}")
        return EXIT_PERSIST_FAILED

    log.info(f"완료 status:{result.status} key:{result.key}")
    return EXIT_OK

if __name__ == "__main__":
    sys.exit(main())
