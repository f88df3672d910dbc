"""
Configuration resolution for the notifier.

This module contains the pure function that validates a
NotifierConfig and fills in defaults for unset optional fields.
"""

from typing import Optional, Sequence
from .errors import ConfigInvalid
from .models import (
    DEFAULT_DATABASE_FILE_PATH,
    DEFAULT_MESSAGE_TAG,
    DEFAULT_SENDER_ADDRESS,
    DEFAULT_SENDER_TITLE,
    Frequency,
    NotifierConfig,
    Recipient,
)

def resolve_config(
    config: NotifierConfig,
    *,
    frequency: Optional[Frequency] = None,
    tag: Optional[str] = None,
    recipients: Optional[Sequence[Recipient]] = None,
    sender: Optional[Recipient] = None,
    has_transport: bool = False,
) -> NotifierConfig:
    """
    호출별 값과 기본값을 반영한 새 설정을 반환합니다.

    원본 config 는 변경되지 않습니다.

    Args:
        config: 기본 설정
        frequency: 호출별 발송 빈도
        tag: 호출별 메시지 태그 (빈 문자열도 유효)
        recipients: 호출별 수신자 목록
        sender: 호출별 발신자
        has_transport: 외부에서 주입된 전송 객체 존재 여부

    Returns:
        기본값이 모두 채워진 설정

    Raises:
        ConfigInvalid: API 키 또는 수신자가 없는 경우
    """
    if not config.sendgrid.api_key and not has_transport:
        raise ConfigInvalid("SendGrid API key is not set")

    to = list(recipients) if recipients is not None else list(config.recipients)
    if not to:
        raise ConfigInvalid("Recipients are not set")

    sender = sender or config.sender
    if sender is None or not sender.address:
        sender = Recipient(title=DEFAULT_SENDER_TITLE, address=DEFAULT_SENDER_ADDRESS)

    if tag is None:
        tag = config.message_tag if config.message_tag is not None else DEFAULT_MESSAGE_TAG

    return config.model_copy(update={
        "sender": sender,
        "recipients": to,
        "frequency": Frequency(frequency) if frequency is not None else config.frequency,
        "message_tag": tag,
        "database_file_path": config.database_file_path or DEFAULT_DATABASE_FILE_PATH,
    })
