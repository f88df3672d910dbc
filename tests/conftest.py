"""
테스트 설정 및 픽스처

이 모듈은 pytest 설정과 공통 픽스처를 제공합니다.
"""

import pytest
from datetime import datetime, timezone
from loguru import logger
from notifier.core.models import NotifierConfig, Recipient, SendGridConfig


class FakeTransport:
    """발송 호출을 기록하는 테스트용 전송 객체"""
    
    def __init__(self, fail_for=()):
        self.calls = []
        self.fail_for = set(fail_for)
    
    async def send(self, sender, recipient, subject, body):
        if recipient.address in self.fail_for:
            raise ConnectionError(f"rejected {recipient.address}")
        self.calls.append((sender, recipient, subject, body))


class FixedClock:
    """테스트용 시계"""
    
    def __init__(self, now: datetime):
        self.now = now
    
    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def store_path(tmp_path):
    """존재하지 않는 기록 파일 경로"""
    return tmp_path / "notifier.json"


@pytest.fixture
def fake_transport():
    """테스트용 전송 객체"""
    return FakeTransport()


@pytest.fixture
def make_transport():
    """실패할 수신자를 지정할 수 있는 전송 객체 팩토리"""
    return FakeTransport


@pytest.fixture
def clock():
    """2024-05-01 09:00 UTC 로 고정된 시계"""
    return FixedClock(datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def sample_config(store_path):
    """테스트용 발송 설정"""
    return NotifierConfig(
        sendgrid=SendGridConfig(api_key="SG.test-key"),
        recipients=[Recipient(title="Ops", address="ops@example.com")],
        database_file_path=str(store_path),
    )


@pytest.fixture
def log_lines():
    """loguru 메시지를 수집합니다."""
    lines = []
    handler_id = logger.add(lambda m: lines.append(m.record["message"]), level="DEBUG")
    yield lines
    logger.remove(handler_id)


# pytest 설정
def pytest_configure(config):
    """pytest 설정"""
    config.addinivalue_line(
        "markers", "integration: 통합 테스트 마커"
    )


def pytest_collection_modifyitems(config, items):
    """테스트 아이템 수정"""
    for item in items:
        # 통합 테스트 마커 추가
        if "integration" in item.name:
            item.add_marker(pytest.mark.integration)
