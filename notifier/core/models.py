"""
Core domain models for the notifier.

This module defines the core domain models using Pydantic v2
for type safety and validation.
"""

from enum import Enum
from typing import List, Literal, Optional
from pydantic import BaseModel, Field

DEFAULT_API_HOST = "https://api.sendgrid.com"
DEFAULT_SENDER_TITLE = "SendGrid Notifier"
DEFAULT_SENDER_ADDRESS = "no-reply@no-where.tld"
DEFAULT_MESSAGE_TAG = "default_tag"
DEFAULT_DATABASE_FILE_PATH = "notifier.json"

class Frequency(str, Enum):
    """발송 빈도 정책"""
    ALWAYS = "always"
    ONCE_PER_HOUR = "once_per_hour"
    ONCE_PER_DAY = "once_per_day"

class Recipient(BaseModel):
    """이메일 주소와 표시 이름"""
    title: str = ""
    address: str

    def __str__(self) -> str:
        if self.title:
            return f"{self.title} <{self.address}>"
        return self.address

class SendGridConfig(BaseModel):
    """SendGrid API 설정"""
    api_host: str = DEFAULT_API_HOST
    api_key: str = ""
    timeout_sec: int = 10

class NotifierConfig(BaseModel):
    """
    알림 발송 설정.

    sender, message_tag, database_file_path 가 None 이면
    resolve_config() 에서 기본값으로 채워집니다.
    """
    model_config = {"frozen": True}

    sendgrid: SendGridConfig = Field(default_factory=SendGridConfig)
    sender: Optional[Recipient] = None
    recipients: List[Recipient] = Field(default_factory=list)
    frequency: Frequency = Frequency.ALWAYS
    message_tag: Optional[str] = None
    database_file_path: Optional[str] = None

class SendResult(BaseModel):
    """발송 결과 모델"""
    status: Literal["sent", "skipped"]
    key: str
    subject: str
    recipients: List[str] = Field(default_factory=list)

    @property
    def sent(self) -> bool:
        return self.status == "sent"
