"""
SendGrid API client for the notifier.

This module provides the mail transport that delivers a plain text
message to a single recipient through the SendGrid v3 mail send API.
"""

import aiohttp
from typing import Dict, Optional
from notifier.core.models import DEFAULT_API_HOST, Recipient
from notifier.observability.logging_setup import get_logger

log = get_logger("notifier.sendgrid")

MAIL_SEND_ENDPOINT = "/v3/mail/send"

def _email(person: Recipient) -> Dict[str, str]:
    entry = {"email": person.address}
    if person.title:
        entry["name"] = person.title
    return entry

def build_mail_payload(sender: Recipient, recipient: Recipient, subject: str, body: str) -> Dict:
    """
    SendGrid v3 mail send 요청 본문을 만듭니다.
    
    Args:
        sender: 발신자
        recipient: 수신자
        subject: 제목
        body: 본문 (text/plain)
        
    Returns:
        요청 본문 딕셔너리
    """
    return {
        "personalizations": [{"to": [_email(recipient)]}],
        "from": _email(sender),
        "subject": subject,
        "content": [{"type": "text/plain", "value": body}],
    }

class SendGridTransport:
    """SendGrid 메일 발송 클라이언트"""
    
    def __init__(self, 
                 api_key: str, 
                 api_host: str = DEFAULT_API_HOST, 
                 timeout: int = 10):
        """
        초기화합니다.
        
        Args:
            api_key: SendGrid API 키
            api_host: SendGrid API 기본 URL
            timeout: 요청 타임아웃 (초)
        """
        self.api_host = api_host.rstrip('/')
        self.api_key = api_key
        self.timeout = timeout
        self.session: Optional[aiohttp.ClientSession] = None
    
    async def __aenter__(self):
        """비동기 컨텍스트 매니저 진입"""
        self.session = aiohttp.ClientSession(
            headers={
                "Authorization": f"Bearer {self.api_key}",
                "Content-Type": "application/json"
            },
            timeout=aiohttp.ClientTimeout(total=self.timeout)
        )
        return self
    
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """비동기 컨텍스트 매니저 종료"""
        if self.session:
            await self.session.close()
            self.session = None
    
    async def send(self, sender: Recipient, recipient: Recipient, subject: str, body: str) -> None:
        """
        메일 한 통을 발송합니다. 재시도하지 않습니다.
        
        Args:
            sender: 발신자
            recipient: 수신자
            subject: 제목
            body: 본문
            
        Raises:
            RuntimeError: async with 없이 호출한 경우
            aiohttp.ClientError: 요청 실패 또는 2xx 가 아닌 응답
        """
        if not self.session:
            raise RuntimeError("세션이 초기화되지 않았습니다. async with를 사용하세요.")
        
        url = f"{self.api_host}{MAIL_SEND_ENDPOINT}"
        payload = build_mail_payload(sender, recipient, subject, body)
        
        async with self.session.post(url, json=payload) as response:
            response.raise_for_status()
            log.info(f"SendGrid 응답 status:{response.status} to:{recipient.address}")
