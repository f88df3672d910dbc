"""
Frequency policy functions for the notifier.

This module contains pure functions mapping a frequency policy,
the current time and a message tag to a dedup key.
"""

from datetime import datetime, timezone
from .models import Frequency

# 버킷 포맷 (UTC 기준)
BUCKET_FORMATS = {
    Frequency.ONCE_PER_HOUR: "%Y-%m-%d-%H",
    Frequency.ONCE_PER_DAY: "%Y-%m-%d",
}

def is_deduplicated(frequency: Frequency) -> bool:
    """발송 기록 조회가 필요한 정책인지 반환합니다."""
    return Frequency(frequency) != Frequency.ALWAYS

def dedup_key(frequency: Frequency, tag: str, now: datetime) -> str:
    """
    중복 제거 키를 계산합니다.

    Args:
        frequency: 발송 빈도 정책
        tag: 메시지 태그
        now: 현재 시각 (naive 값은 UTC 로 간주)

    Returns:
        "<bucket>:<tag>" 형식의 키, ALWAYS 는 빈 문자열
    """
    frequency = Frequency(frequency)
    if frequency == Frequency.ALWAYS:
        return ""

    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    else:
        now = now.astimezone(timezone.utc)

    return f"{now.strftime(BUCKET_FORMATS[frequency])}:{tag}"
