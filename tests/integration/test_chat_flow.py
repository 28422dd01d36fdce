"""End-to-end tests: chat session -> query client -> proxy app -> fake upstream."""

import json

import pytest
import pytest_check as check
from fastapi import FastAPI
from httpx import ASGITransport

from cv_query.ui.client import QueryClient, QueryFailedError
from cv_query.ui.session import ChatSession
from tests.conftest import FakeUpstream


@pytest.fixture
def query_client(app: FastAPI) -> QueryClient:
    """Query client routed into the app in-process."""
    return QueryClient(base_url="http://test", transport=ASGITransport(app=app))


class TestChatFlow:
    """Full conversation turns through the real proxy."""

    async def test_skills_question_scenario(
        self, query_client: QueryClient, upstream: FakeUpstream
    ) -> None:
        """A sample question yields one user and one assistant message."""
        upstream.respond(200, json={"answer": "Kees is skilled in..."})
        session = ChatSession()
        session.input_value = "What are Kees' key technical skills?"

        await session.send(query_client)

        assert len(session.messages) == 2
        user, assistant = session.messages
        check.equal(user.role, "user")
        check.equal(user.content, "What are Kees' key technical skills?")
        check.equal(assistant.role, "assistant")
        check.equal(assistant.content, "Kees is skilled in...")
        check.equal(session.input_value, "")
        check.is_false(session.is_pending)

    async def test_upstream_404_becomes_error_message(
        self, query_client: QueryClient, upstream: FakeUpstream
    ) -> None:
        upstream.respond(404)
        session = ChatSession()
        notified: list[str] = []

        await session.send(query_client, prompt="List Kees' work experience", on_error=notified.append)

        check.equal(len(notified), 1)
        check.is_in("not available", notified[0])
        check.is_true(session.messages[-1].content.startswith("⚠️ Error: "))

    async def test_unreachable_upstream_keeps_session_usable(
        self, query_client: QueryClient, upstream: FakeUpstream
    ) -> None:
        session = ChatSession()

        upstream.fail()
        await session.send(query_client, prompt="First")
        upstream.respond(200, json={"answer": "Second answer"})
        await session.send(query_client, prompt="Second")

        assert [m.role for m in session.messages] == ["user", "assistant", "user", "assistant"]
        assert session.messages[-1].content == "Second answer"

    async def test_session_id_forwarded(
        self, query_client: QueryClient, upstream: FakeUpstream, mock_session_id: str
    ) -> None:
        session = ChatSession(session_id=mock_session_id)

        await session.send(query_client, prompt="Hello")
        await session.send(query_client, prompt="Again")

        assert [json.loads(r.content) for r in upstream.requests] == [
            {"session_id": mock_session_id, "prompt": "Hello"},
            {"session_id": mock_session_id, "prompt": "Again"},
        ]


class TestQueryClient:
    """Client-side envelope handling."""

    async def test_missing_answer_is_failure(
        self, query_client: QueryClient, upstream: FakeUpstream
    ) -> None:
        upstream.respond(200, json={"result": "no answer field"})
        session = ChatSession()
        request = session.submit("Hello")

        with pytest.raises(QueryFailedError, match="answer"):
            await query_client.query(request)

    async def test_unreachable_proxy(self) -> None:
        client = QueryClient(base_url="http://127.0.0.1:9")
        session = ChatSession()

        with pytest.raises(QueryFailedError, match="Connection failed"):
            await client.query(session.submit("Hello"))
