# notifier/settings.py
from __future__ import annotations
import os
import re
from typing import List
from pydantic import BaseModel, Field
from notifier.core.errors import ConfigInvalid
from notifier.core.models import (
    DEFAULT_DATABASE_FILE_PATH,
    DEFAULT_MESSAGE_TAG,
    DEFAULT_SENDER_ADDRESS,
    DEFAULT_SENDER_TITLE,
    Frequency,
    NotifierConfig,
    Recipient,
    SendGridConfig,
)

_NAMED_ADDRESS = re.compile(r"^\s*(?P<title>.*?)\s*<(?P<address>[^<>]+)>\s*$")

class MailConfig(BaseModel):
    sender: Recipient = Field(default_factory=lambda: Recipient(
        title=DEFAULT_SENDER_TITLE, address=DEFAULT_SENDER_ADDRESS
    ))
    recipients: List[Recipient] = Field(default_factory=list)
    frequency: Frequency = Frequency.ALWAYS
    message_tag: str = DEFAULT_MESSAGE_TAG
    database_file_path: str = DEFAULT_DATABASE_FILE_PATH

class Observability(BaseModel):
    log_level: str = "INFO"

class Settings(BaseModel):
    sendgrid: SendGridConfig = Field(default_factory=SendGridConfig)
    mail: MailConfig = Field(default_factory=MailConfig)
    observability: Observability = Field(default_factory=Observability)

    def to_notifier_config(self) -> NotifierConfig:
        return NotifierConfig(
            sendgrid=self.sendgrid,
            sender=self.mail.sender,
            recipients=self.mail.recipients,
            frequency=self.mail.frequency,
            message_tag=self.mail.message_tag,
            database_file_path=self.mail.database_file_path,
        )

def parse_recipients(raw: str) -> List[Recipient]:
    """
    "Name <addr>, addr2" 형식의 수신자 목록을 파싱합니다.
    """
    out: List[Recipient] = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        m = _NAMED_ADDRESS.match(part)
        if m:
            out.append(Recipient(title=m.group("title").strip('"'), address=m.group("address").strip()))
        else:
            out.append(Recipient(address=part))
    return out

def build_settings() -> Settings:
    s = Settings()

    # SendGrid
    s.sendgrid.api_key = os.getenv("SENDGRID_API_KEY", s.sendgrid.api_key)
    s.sendgrid.api_host = os.getenv("SENDGRID_API_HOST", s.sendgrid.api_host)
    raw_timeout = os.getenv("SENDGRID_TIMEOUT_SEC", str(s.sendgrid.timeout_sec))
    try:
        s.sendgrid.timeout_sec = int(raw_timeout)
    except ValueError as e:
        raise ConfigInvalid(f"SENDGRID_TIMEOUT_SEC must be an integer: {raw_timeout!r}") from e

    # 발신/수신
    s.mail.sender = Recipient(
        title=os.getenv("NOTIFIER_FROM_TITLE", s.mail.sender.title),
        address=os.getenv("NOTIFIER_FROM_ADDRESS", s.mail.sender.address),
    )
    if os.getenv("NOTIFIER_TO"):
        s.mail.recipients = parse_recipients(os.environ["NOTIFIER_TO"])
    raw_frequency = os.getenv("NOTIFIER_FREQUENCY", s.mail.frequency.value)
    try:
        s.mail.frequency = Frequency(raw_frequency)
    except ValueError as e:
        choices = ", ".join(f.value for f in Frequency)
        raise ConfigInvalid(f"NOTIFIER_FREQUENCY must be one of {choices}: {raw_frequency!r}") from e
    s.mail.message_tag = os.getenv("NOTIFIER_TAG", s.mail.message_tag)
    s.mail.database_file_path = os.getenv("NOTIFIER_DB_PATH", s.mail.database_file_path)

    # 관측성
    s.observability.log_level = os.getenv("LOG_LEVEL", s.observability.log_level)

    return s
