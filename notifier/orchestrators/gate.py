"""
Dedup gate for the notifier.

This module implements the gate that sits in front of the mail
transport: it computes the dedup key for a notification, consults
the record store, delivers to every recipient and records the key.
"""

from contextlib import AsyncExitStack
from datetime import datetime, timezone
from typing import Callable, List, Optional, Sequence
from notifier.core.config import resolve_config
from notifier.core.errors import (
    CorruptStore,
    DeliveryFailed,
    RecordPersistFailed,
    StoreUnavailable,
)
from notifier.core.models import Frequency, NotifierConfig, Recipient, SendResult
from notifier.core.policy import dedup_key, is_deduplicated
from notifier.adapters.sendgrid.client import SendGridTransport
from notifier.adapters.storage.json_store import JsonRecordStore
from notifier.observability import metrics
from notifier.observability.logging_setup import get_logger
from notifier.ports.record_store import RecordStorePort
from notifier.ports.transport import MailTransportPort

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

class DedupGate:
    """중복 발송 방지 게이트"""
    
    def __init__(self, 
                 config: NotifierConfig, 
                 *,
                 transport: Optional[MailTransportPort] = None,
                 store: Optional[RecordStorePort] = None,
                 clock: Optional[Callable[[], datetime]] = None,
                 log=None):
        """
        초기화합니다.
        
        Args:
            config: 기본 발송 설정
            transport: 메일 발송 포트 (None 이면 호출마다 SendGridTransport 생성)
            store: 발송 기록 저장소 (None 이면 설정 경로의 JsonRecordStore)
            clock: 현재 시각 함수
            log: loguru 로거
        """
        self.config = config
        self.transport = transport
        self.store = store
        self.clock = clock or _utcnow
        self.log = log or get_logger("notifier.gate")
    
    async def send(self, 
                   subject: str, 
                   message: str, 
                   *,
                   frequency: Optional[Frequency] = None,
                   tag: Optional[str] = None,
                   recipients: Optional[Sequence[Recipient]] = None,
                   sender: Optional[Recipient] = None) -> SendResult:
        """
        중복 여부를 판단하고 필요한 경우 메일을 발송합니다.
        
        Args:
            subject: 제목
            message: 본문
            frequency: 호출별 발송 빈도
            tag: 호출별 메시지 태그
            recipients: 호출별 수신자 목록
            sender: 호출별 발신자
            
        Returns:
            발송 결과 (sent | skipped)
            
        Raises:
            ConfigInvalid: 필수 설정 누락
            DeliveryFailed: 수신자 발송 실패 (기록하지 않음)
            RecordPersistFailed: 발송 후 기록 저장 실패 (발송은 성공)
        """
        cfg = resolve_config(
            self.config,
            frequency=frequency,
            tag=tag,
            recipients=recipients,
            sender=sender,
            has_transport=self.transport is not None,
        )
        
        key = dedup_key(cfg.frequency, cfg.message_tag, self.clock())
        store = self._store_for(cfg)
        
        if is_deduplicated(cfg.frequency) and self._already_sent(store, key):
            self.log.info(f"Skip message {key}: {subject} {message}")
            metrics.notifications_skipped.labels(frequency=cfg.frequency.value).inc()
            return SendResult(status="skipped", key=key, subject=subject)
        
        self.log.info(f"Send message {cfg.message_tag}: {subject} {message}")
        delivered = await self._deliver(cfg, subject, message)
        metrics.notifications_sent.labels(frequency=cfg.frequency.value).inc()
        result = SendResult(status="sent", key=key, subject=subject, recipients=delivered)
        
        if is_deduplicated(cfg.frequency):
            self._record(store, key, subject, result)
        
        return result
    
    def _store_for(self, cfg: NotifierConfig) -> RecordStorePort:
        if self.store is not None:
            return self.store
        return JsonRecordStore(cfg.database_file_path)
    
    def _already_sent(self, store: RecordStorePort, key: str) -> bool:
        """기록 조회 실패 시 미발송으로 간주합니다."""
        try:
            records = store.load()
        except (StoreUnavailable, CorruptStore) as e:
            self.log.error(f"Notifier failed to load database: {e}")
            metrics.store_errors.labels(operation="load").inc()
            return False
        return key in records
    
    async def _deliver(self, cfg: NotifierConfig, subject: str, message: str) -> List[str]:
        """수신자별로 순차 발송하고, 첫 실패에서 중단합니다."""
        delivered = []
        async with AsyncExitStack() as stack:
            transport = self.transport
            if transport is None:
                transport = await stack.enter_async_context(SendGridTransport(
                    api_key=cfg.sendgrid.api_key,
                    api_host=cfg.sendgrid.api_host,
                    timeout=cfg.sendgrid.timeout_sec,
                ))
            
            for recipient in cfg.recipients:
                try:
                    await transport.send(cfg.sender, recipient, subject, message)
                except Exception as e:
                    self.log.error(f"Notifier failed to send message to {recipient}: {e}")
                    metrics.delivery_failures.inc()
                    raise DeliveryFailed(recipient, e) from e
                self.log.info(f"Message sent to {recipient}")
                delivered.append(recipient.address)
        return delivered
    
    def _record(self, store: RecordStorePort, key: str, subject: str, result: SendResult) -> None:
        """발송 후 다시 읽은 기록에 키를 추가해 저장합니다."""
        operation = "load"
        try:
            records = store.load()
            records[key] = subject
            operation = "save"
            store.save(records)
        except (StoreUnavailable, CorruptStore) as e:
            self.log.warning(f"Notifier failed to add {key} to database: {e}")
            metrics.store_errors.labels(operation=operation).inc()
            raise RecordPersistFailed(key, e, result) from e
