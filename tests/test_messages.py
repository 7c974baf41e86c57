from __future__ import annotations

import asyncio

from sqlalchemy import func, select

from intake.api.deps import get_message_queue, get_message_repository
from intake.domain.message import Message
from intake.main import app
from intake.models import QueuedMessage
from intake.repositories.message_repository import SqlAlchemyMessageRepository

TEXT_ERROR = 'The "text" field is required and must not exceed 255 characters.'


class _FailingQueue:
    def enqueue(self, text: str) -> str:
        raise ConnectionError("queue unavailable")


class _FailingRepository:
    def list_by_filter(self, request):
        raise RuntimeError("storage unavailable")

    def add(self, message: Message) -> None:
        raise RuntimeError("storage unavailable")


def _seed(session_factory, statuses: list[str]) -> None:
    with session_factory() as db:
        repository = SqlAlchemyMessageRepository(db)
        for index, status in enumerate(statuses, start=1):
            repository.add(Message.create(f"message {index}", status=status))
        db.commit()


def _queued_count(session_factory) -> int:
    with session_factory() as db:
        return db.scalar(select(func.count()).select_from(QueuedMessage))


def _consume(client) -> int:
    return asyncio.run(client.app.state.message_consumer.process_once())


def test_sent_message_is_listed_after_consumption(client):
    response = client.post("/messages/send", data={"text": "Hello World"})
    assert response.status_code == 202
    assert response.json() == {"message": "Message successfully sent."}

    before = client.get("/messages")
    assert before.status_code == 200
    assert before.json() == {"messages": []}

    assert _consume(client) == 1

    after = client.get("/messages")
    assert after.status_code == 200
    messages = after.json()["messages"]
    assert len(messages) == 1
    assert set(messages[0]) == {"uuid", "text", "status"}
    assert messages[0]["text"] == "Hello World"
    assert messages[0]["status"] == "sent"
    assert messages[0]["uuid"]


def test_send_accepts_json_body(client, session_factory):
    response = client.post("/messages/send", json={"text": "from json"})

    assert response.status_code == 202
    assert _queued_count(session_factory) == 1


def test_empty_text_is_rejected_and_not_queued(client, session_factory):
    response = client.post("/messages/send", data={"text": ""})

    assert response.status_code == 400
    assert response.json() == {"error": TEXT_ERROR}
    assert _queued_count(session_factory) == 0


def test_missing_overlong_or_non_string_text_is_rejected(client, session_factory):
    responses = [
        client.post("/messages/send"),
        client.post("/messages/send", data={"text": "x" * 256}),
        client.post("/messages/send", json={"text": 123}),
        client.post("/messages/send", json=["text"]),
        client.post("/messages/send", content=b"{not json", headers={"Content-Type": "application/json"}),
    ]

    for response in responses:
        assert response.status_code == 400
        assert response.json() == {"error": TEXT_ERROR}
    assert _queued_count(session_factory) == 0


def test_status_filtered_second_page(client, session_factory):
    _seed(session_factory, ["sent"] * 3 + ["read"] * 2 + ["sent"] * 4)

    response = client.get("/messages", params={"status": "sent", "page": 2, "limit": 5})

    assert response.status_code == 200
    messages = response.json()["messages"]
    assert [message["text"] for message in messages] == ["message 8", "message 9"]
    assert all(message["status"] == "sent" for message in messages)


def test_zero_page_and_limit_are_clamped(client, session_factory):
    _seed(session_factory, ["sent", "read", "sent"])

    response = client.get("/messages", params={"page": 0, "limit": 0})

    assert response.status_code == 200
    assert [message["text"] for message in response.json()["messages"]] == ["message 1"]


def test_unknown_status_lists_everything(client, session_factory):
    _seed(session_factory, ["sent", "read"])

    response = client.get("/messages", params={"status": "archived"})

    assert response.status_code == 200
    assert [message["status"] for message in response.json()["messages"]] == ["sent", "read"]


def test_default_limit_is_ten(client, session_factory):
    _seed(session_factory, ["sent"] * 12)

    response = client.get("/messages")

    assert response.status_code == 200
    assert len(response.json()["messages"]) == 10


def test_non_integer_pagination_is_a_bad_request(client):
    page_response = client.get("/messages", params={"page": "abc"})
    assert page_response.status_code == 400
    assert page_response.json() == {"error": 'The "page" parameter must be an integer.'}

    limit_response = client.get("/messages", params={"limit": "1.5"})
    assert limit_response.status_code == 400
    assert limit_response.json() == {"error": 'The "limit" parameter must be an integer.'}


def test_queue_failure_is_a_generic_server_error(client):
    app.dependency_overrides[get_message_queue] = lambda: _FailingQueue()

    response = client.post("/messages/send", data={"text": "Hello World"})

    assert response.status_code == 500
    assert response.json() == {"error": "An error occurred while sending the message."}


def test_storage_failure_is_a_generic_server_error(client):
    app.dependency_overrides[get_message_repository] = lambda: _FailingRepository()

    response = client.get("/messages")

    assert response.status_code == 500
    assert response.json() == {"error": "An error occurred while retrieving messages."}


def test_health_check(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_page_beyond_storage_range_is_an_empty_page(client, session_factory):
    _seed(session_factory, ["sent", "read"])

    response = client.get("/messages", params={"page": "9" * 25})
    assert response.status_code == 200
    assert response.json() == {"messages": []}

    filtered = client.get("/messages", params={"status": "sent", "page": "9" * 25, "limit": 5})
    assert filtered.status_code == 200
    assert filtered.json() == {"messages": []}


def test_json_content_type_is_matched_case_insensitively(client, session_factory):
    response = client.post(
        "/messages/send",
        content=b'{"text": "mixed case header"}',
        headers={"Content-Type": "Application/JSON; charset=UTF-8"},
    )

    assert response.status_code == 202
    assert response.json() == {"message": "Message successfully sent."}
    assert _queued_count(session_factory) == 1
