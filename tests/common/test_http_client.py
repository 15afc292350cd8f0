"""Tests for addbook/common/http_client.py"""

from addbook.common.http_client import DEFAULT_USER_AGENT, build_headers, create_session


class TestBuildHeaders:
    def test_default_user_agent(self):
        assert build_headers() == {"User-Agent": DEFAULT_USER_AGENT}

    def test_custom_user_agent_and_accept(self):
        headers = build_headers("TestAgent/1.0", accept="application/json")
        assert headers["User-Agent"] == "TestAgent/1.0"
        assert headers["Accept"] == "application/json"


class TestCreateSession:
    def test_session_declares_user_agent(self):
        session = create_session("TestAgent/1.0")
        assert session.headers["User-Agent"] == "TestAgent/1.0"
        session.close()
