"""
Error types for the notifier.

Every failure surfaced by the gate or the record store derives
from NotifierError.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .models import Recipient, SendResult

class NotifierError(Exception):
    """알림 모듈 기본 예외"""

class ConfigInvalid(NotifierError):
    """필수 설정(수신자, API 키)이 누락됨"""

class StoreUnavailable(NotifierError):
    """기록 파일을 열거나 생성할 수 없음"""

class CorruptStore(NotifierError):
    """기록 파일 내용을 해석할 수 없음"""

class DeliveryFailed(NotifierError):
    """수신자에게 메일 발송 실패"""

    def __init__(self, recipient: "Recipient", cause: Exception):
        super().__init__(f"Notifier failed to send message to {recipient}: {cause}")
        self.recipient = recipient
        self.cause = cause

class RecordPersistFailed(NotifierError):
    """
    발송은 성공했지만 발송 기록 저장에 실패함.

    result 에 성공한 발송 결과가 담겨 있습니다.
    """

    def __init__(self, key: str, cause: Exception, result: Optional["SendResult"] = None):
        super().__init__(f"Notifier failed to add {key} to database: {cause}")
        self.key = key
        self.cause = cause
        self.result = result
