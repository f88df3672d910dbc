"""
Mail transport port interface.

This module defines the protocol for outbound e-mail delivery.
"""

from typing import Protocol
from notifier.core.models import Recipient

class MailTransportPort(Protocol):
    """메일 발송 포트 인터페이스"""
    
    async def send(self, sender: Recipient, recipient: Recipient, subject: str, body: str) -> None:
        """
        메일 한 통을 발송합니다.
        
        Args:
            sender: 발신자
            recipient: 수신자
            subject: 제목
            body: 본문 (text/plain)
            
        Raises:
            발송 실패 시 예외
        """
        ...
