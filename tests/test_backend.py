"""Tests for the backend HTTP client."""

import json

import httpx
import pytest

from weatherify.backend import BackendClient, BackendError
from weatherify.config import Settings
from weatherify.models.weather import Mood

from conftest import BACKEND_URL, GENERATE_PATH, LOGOUT_PATH, STATUS_PATH, FakeServer


@pytest.fixture
async def backend(server: FakeServer):
    client = BackendClient(BACKEND_URL, transport=server.transport)
    yield client
    await client.aclose()


class TestSessionStatus:
    async def test_logged_in(self, backend: BackendClient, server: FakeServer):
        server.add("GET", STATUS_PATH, json={"loggedIn": True, "userDisplayName": "Ada"})

        status = await backend.get_session_status()

        assert status.logged_in is True
        assert status.user_display_name == "Ada"

    async def test_error_status(self, backend: BackendClient, server: FakeServer):
        server.add("GET", STATUS_PATH, status_code=500, text="boom")

        with pytest.raises(BackendError) as exc_info:
            await backend.get_session_status()

        assert exc_info.value.status_code == 500
        assert exc_info.value.is_rejection
        assert exc_info.value.detail is None

    async def test_malformed_body(self, backend: BackendClient, server: FakeServer):
        server.add("GET", STATUS_PATH, json={"user": "Ada"})

        with pytest.raises(BackendError, match="Malformed") as exc_info:
            await backend.get_session_status()

        assert not exc_info.value.is_rejection

    async def test_network_error_propagates(self, backend: BackendClient, server: FakeServer):
        server.add("GET", STATUS_PATH, exc=httpx.ConnectError)

        with pytest.raises(httpx.ConnectError):
            await backend.get_session_status()


class TestCredentials:
    async def test_cookies_from_responses_are_sent_back(self, server: FakeServer):
        def handler(request: httpx.Request) -> httpx.Response:
            server.requests.append(request)
            if request.url.path == LOGOUT_PATH:
                return httpx.Response(200, headers={"Set-Cookie": "JSESSIONID=abc; Path=/"})
            return httpx.Response(200, json={"loggedIn": False})

        async with BackendClient(BACKEND_URL, transport=httpx.MockTransport(handler)) as backend:
            await backend.logout()
            await backend.get_session_status()

        assert "JSESSIONID=abc" in server.requests[-1].headers.get("cookie", "")

    async def test_seeded_session_cookie(self, server: FakeServer):
        server.add("GET", STATUS_PATH, json={"loggedIn": True})
        settings = Settings(backend_base_url=BACKEND_URL, session_cookie="s3cr3t")

        async with BackendClient.from_settings(settings, transport=server.transport) as backend:
            await backend.get_session_status()

        assert "JSESSIONID=s3cr3t" in server.requests[0].headers["cookie"]


class TestLogout:
    async def test_success(self, backend: BackendClient, server: FakeServer):
        server.add("GET", LOGOUT_PATH, json={})
        await backend.logout()
        assert len(server.calls("GET", LOGOUT_PATH)) == 1

    async def test_failure(self, backend: BackendClient, server: FakeServer):
        server.add("GET", LOGOUT_PATH, status_code=500, json={})
        with pytest.raises(BackendError):
            await backend.logout()


class TestGeneratePlaylist:
    async def test_success(self, backend: BackendClient, server: FakeServer):
        server.add("POST", GENERATE_PATH, json={"playlistUrl": "https://example/playlist/1"})

        url = await backend.generate_playlist(Mood.CLOUDY)

        assert url == "https://example/playlist/1"
        request = server.calls("POST", GENERATE_PATH)[0]
        assert json.loads(request.content) == {"weather": "cloudy"}
        assert request.headers["content-type"] == "application/json"

    async def test_rejection_with_backend_message(self, backend: BackendClient, server: FakeServer):
        server.add("POST", GENERATE_PATH, status_code=400, json={"message": "User is not logged in."})

        with pytest.raises(BackendError) as exc_info:
            await backend.generate_playlist(Mood.SUNNY)

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail == "User is not logged in."

    async def test_rejection_without_message(self, backend: BackendClient, server: FakeServer):
        server.add("POST", GENERATE_PATH, status_code=502, text="Bad gateway")

        with pytest.raises(BackendError) as exc_info:
            await backend.generate_playlist(Mood.SUNNY)

        assert exc_info.value.detail is None
        assert "502" in str(exc_info.value)

    async def test_missing_playlist_url(self, backend: BackendClient, server: FakeServer):
        server.add("POST", GENERATE_PATH, json={"id": "1"})

        with pytest.raises(BackendError, match="Malformed") as exc_info:
            await backend.generate_playlist(Mood.RAINY)

        assert not exc_info.value.is_rejection

    def test_login_url(self):
        backend = BackendClient("http://backend.test/")
        assert backend.login_url == "http://backend.test/api/v1/auth/spotify/login"
