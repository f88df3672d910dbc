"""
SendGrid 전송 어댑터 단위 테스트

이 모듈은 aiohttp 테스트 서버를 사용해 SendGridTransport 를 테스트합니다.
"""

import aiohttp
import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp import test_utils

from notifier.adapters.sendgrid.client import SendGridTransport, build_mail_payload
from notifier.core.models import Recipient


SENDER = Recipient(title="SendGrid Notifier", address="no-reply@no-where.tld")
OPS = Recipient(title="Ops", address="ops@example.com")


@pytest_asyncio.fixture
async def sendgrid_server():
    """요청을 기록하는 가짜 SendGrid 서버"""
    received = []
    state = {"status": 202}
    
    async def mail_send(request: web.Request) -> web.Response:
        received.append({
            "authorization": request.headers.get("Authorization"),
            "body": await request.json(),
        })
        return web.Response(status=state["status"])
    
    app = web.Application()
    app.router.add_post("/v3/mail/send", mail_send)
    server = test_utils.TestServer(app)
    await server.start_server()
    yield server, received, state
    await server.close()


class TestBuildMailPayload:
    """요청 본문 생성 테스트"""
    
    def test_payload_shape(self):
        """v3 mail send 본문 형식"""
        payload = build_mail_payload(SENDER, OPS, "Disk full", "95% used")
        
        assert payload == {
            "personalizations": [{"to": [{"email": "ops@example.com", "name": "Ops"}]}],
            "from": {"email": "no-reply@no-where.tld", "name": "SendGrid Notifier"},
            "subject": "Disk full",
            "content": [{"type": "text/plain", "value": "95% used"}],
        }
    
    def test_name_omitted_when_empty(self):
        """표시 이름이 없으면 name 생략"""
        payload = build_mail_payload(SENDER, Recipient(address="a@example.com"), "s", "b")
        assert payload["personalizations"][0]["to"] == [{"email": "a@example.com"}]


class TestSendGridTransport:
    """SendGridTransport 테스트"""
    
    def test_initialization(self):
        """초기화 테스트"""
        transport = SendGridTransport("SG.key", api_host="https://api.example.com/", timeout=5)
        
        assert transport.api_host == "https://api.example.com"
        assert transport.api_key == "SG.key"
        assert transport.timeout == 5
        assert transport.session is None
    
    @pytest.mark.asyncio
    async def test_send_requires_context(self):
        """async with 없이 호출하면 오류"""
        transport = SendGridTransport("SG.key")
        
        with pytest.raises(RuntimeError):
            await transport.send(SENDER, OPS, "s", "b")
    
    @pytest.mark.asyncio
    async def test_send_posts_payload(self, sendgrid_server):
        """요청 헤더와 본문 확인"""
        server, received, _ = sendgrid_server
        api_host = f"http://{server.host}:{server.port}"
        
        async with SendGridTransport("SG.key", api_host=api_host) as transport:
            await transport.send(SENDER, OPS, "Disk full", "95% used")
        
        assert len(received) == 1
        assert received[0]["authorization"] == "Bearer SG.key"
        assert received[0]["body"] == build_mail_payload(SENDER, OPS, "Disk full", "95% used")
    
    @pytest.mark.asyncio
    async def test_error_status_raises(self, sendgrid_server):
        """2xx 가 아닌 응답은 예외"""
        server, received, state = sendgrid_server
        state["status"] = 401
        api_host = f"http://{server.host}:{server.port}"
        
        async with SendGridTransport("SG.bad", api_host=api_host) as transport:
            with pytest.raises(aiohttp.ClientResponseError) as exc_info:
                await transport.send(SENDER, OPS, "s", "b")
        
        assert exc_info.value.status == 401
        assert len(received) == 1
    
    @pytest.mark.asyncio
    async def test_session_closed_on_exit(self, sendgrid_server):
        """컨텍스트 종료 시 세션 정리"""
        server, _, _ = sendgrid_server
        transport = SendGridTransport("SG.key", api_host=f"http://{server.host}:{server.port}")
        
        async with transport:
            assert transport.session is not None
        
        assert transport.session is None
