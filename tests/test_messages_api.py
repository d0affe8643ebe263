"""
Messages API tests
"""

import pytest
from dependency_injector import providers

from api.features.messages.service import MessageService
from api.main import app
from tests.conftest import at


async def test_send_message(client, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")

    response = await client.post(
        "/api/messages",
        json={"content": "Still for sale?", "senderId": alice.id, "receiverId": bob.id},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["senderId"] == alice.id
    assert body["receiverId"] == bob.id
    assert body["read"] is False
    assert body["status"] == "sent"
    assert "createdAt" in body
    assert body["sender"] == {"id": alice.id, "name": "Alice", "email": "alice@example.com"}
    assert body["receiver"]["name"] == "Bob"


async def test_send_message_accepts_string_ids(client, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")

    response = await client.post(
        "/api/messages",
        json={"content": "hi", "senderId": str(alice.id), "receiverId": str(bob.id)},
    )

    assert response.status_code == 201
    assert response.json()["receiverId"] == bob.id


async def test_send_message_missing_fields(client):
    response = await client.post("/api/messages", json={"senderId": 1})

    assert response.status_code == 400
    body = response.json()
    assert body["errorCode"] == "VALIDATION_ERROR"
    assert body["details"]["missing"] == ["content", "receiverId"]


async def test_send_message_blank_content(client, make_user):
    alice = await make_user("Alice")
    bob = await make_user("Bob")

    response = await client.post(
        "/api/messages",
        json={"content": "   ", "senderId": alice.id, "receiverId": bob.id},
    )

    assert response.status_code == 400


async def test_send_message_malformed_id(client, make_user):
    bob = await make_user("Bob")

    response = await client.post(
        "/api/messages",
        json={"content": "hi", "senderId": "abc", "receiverId": bob.id},
    )

    assert response.status_code == 400
    assert response.json()["details"] == {"field": "senderId"}


@pytest.mark.parametrize("sender_id", [True, 1.5, [1], {"id": 1}])
async def test_send_message_non_integer_sender_id(client, make_user, sender_id):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    assert alice.id == 1

    response = await client.post(
        "/api/messages",
        json={"content": "hi", "senderId": sender_id, "receiverId": bob.id},
    )

    assert response.status_code == 400
    assert response.json()["errorCode"] == "VALIDATION_ERROR"
    assert response.json()["details"] == {"field": "senderId"}
    thread = await client.get(f"/api/messages/conversation/{alice.id}/{bob.id}")
    assert thread.json() == []


@pytest.mark.parametrize("content", [123, True, ["hi"]])
async def test_send_message_non_string_content(client, make_user, content):
    alice = await make_user("Alice")
    bob = await make_user("Bob")

    response = await client.post(
        "/api/messages",
        json={"content": content, "senderId": alice.id, "receiverId": bob.id},
    )

    assert response.status_code == 400
    assert response.json()["details"] == {"field": "content"}


async def test_send_message_zero_sender_is_looked_up(client, make_user):
    bob = await make_user("Bob")

    response = await client.post(
        "/api/messages",
        json={"content": "hi", "senderId": 0, "receiverId": bob.id},
    )

    assert response.status_code == 404
    assert response.json()["details"]["role"] == "Sender"


async def test_send_message_unknown_sender(client, make_user):
    bob = await make_user("Bob")

    response = await client.post(
        "/api/messages",
        json={"content": "hi", "senderId": 4242, "receiverId": bob.id},
    )

    assert response.status_code == 404
    body = response.json()
    assert body["errorCode"] == "USER_NOT_FOUND"
    assert body["details"]["role"] == "Sender"


async def test_send_message_unknown_receiver(client, make_user):
    alice = await make_user("Alice")

    response = await client.post(
        "/api/messages",
        json={"content": "hi", "senderId": alice.id, "receiverId": 4242},
    )

    assert response.status_code == 404
    assert response.json()["details"]["role"] == "Receiver"


async def test_send_message_to_self(client, make_user):
    alice = await make_user("Alice")

    response = await client.post(
        "/api/messages",
        json={"content": "hi", "senderId": alice.id, "receiverId": alice.id},
    )

    assert response.status_code == 400
    assert response.json()["errorCode"] == "SELF_MESSAGE"


async def test_list_conversations(client, make_user, make_message):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    carol = await make_user("Carol")
    await make_message(alice.id, bob.id, "hi", at(1))
    reply = await make_message(bob.id, alice.id, "hey", at(2))
    latest = await make_message(alice.id, carol.id, "yo", at(3))

    response = await client.get(f"/api/messages/conversations/{alice.id}")

    assert response.status_code == 200
    body = response.json()
    assert [c["contactId"] for c in body] == [carol.id, bob.id]
    assert body[0]["lastMessage"]["id"] == latest.id
    assert body[1]["lastMessage"]["id"] == reply.id
    assert body[1]["contact"] == {"id": bob.id, "name": "Bob", "email": "bob@example.com"}
    assert body[1]["error"] is None


async def test_list_conversations_empty(client, make_user):
    alice = await make_user("Alice")

    response = await client.get(f"/api/messages/conversations/{alice.id}")

    assert response.status_code == 200
    assert response.json() == []


async def test_list_conversations_unresolvable_contact(client, make_user, make_message):
    alice = await make_user("Alice")
    await make_message(alice.id, 777, "into the void", at(1))

    response = await client.get(f"/api/messages/conversations/{alice.id}")

    assert response.status_code == 500
    body = response.json()
    assert body["errorCode"] == "CONTACT_RESOLUTION_ERROR"
    assert body["details"] == {"user_id": alice.id, "contact_id": 777}


async def test_list_conversations_isolates_unresolvable_contact(client, make_user, make_message):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    await make_message(alice.id, bob.id, "hi", at(1))
    orphan = await make_message(777, alice.id, "from nowhere", at(2))

    isolating = providers.Factory(MessageService, contact_failure_policy="isolate")
    with app.container.services.message_service.override(isolating):
        response = await client.get(f"/api/messages/conversations/{alice.id}")

    assert response.status_code == 200
    body = response.json()
    assert [c["contactId"] for c in body] == [777, bob.id]
    assert body[0]["contact"] is None
    assert body[0]["lastMessage"]["id"] == orphan.id
    assert body[0]["error"]["errorCode"] == "CONTACT_RESOLUTION_ERROR"
    assert body[0]["error"]["details"] == {"user_id": alice.id, "contact_id": 777}
    assert body[1]["contact"]["name"] == "Bob"
    assert body[1]["error"] is None


async def test_get_conversation_thread(client, make_user, make_message):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    carol = await make_user("Carol")
    await make_message(bob.id, alice.id, "second", at(2))
    await make_message(alice.id, bob.id, "first", at(1))
    await make_message(alice.id, carol.id, "elsewhere", at(3))

    forward = await client.get(f"/api/messages/conversation/{alice.id}/{bob.id}")
    backward = await client.get(f"/api/messages/conversation/{bob.id}/{alice.id}")

    assert forward.status_code == 200
    assert [m["content"] for m in forward.json()] == ["first", "second"]
    assert forward.json() == backward.json()
    assert forward.json()[0]["sender"]["name"] == "Alice"


async def test_list_user_messages(client, make_user, make_message):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    carol = await make_user("Carol")
    await make_message(alice.id, bob.id, "old", at(1))
    await make_message(carol.id, alice.id, "new", at(2))
    await make_message(bob.id, carol.id, "unrelated", at(3))

    response = await client.get(f"/api/messages/user/{alice.id}")

    assert response.status_code == 200
    assert [m["content"] for m in response.json()] == ["new", "old"]


async def test_mark_read(client, make_user, make_message):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    message = await make_message(alice.id, bob.id, "hi", at(1))

    first = await client.put(f"/api/messages/read/{message.id}")
    second = await client.put(f"/api/messages/read/{message.id}")

    assert first.status_code == 200
    assert first.json()["read"] is True
    assert first.json()["status"] == "read"
    assert second.status_code == 200
    assert second.json()["status"] == "read"


async def test_mark_read_unknown_message(client):
    response = await client.put("/api/messages/read/9999")

    assert response.status_code == 404
    assert response.json()["errorCode"] == "MESSAGE_NOT_FOUND"


async def test_mark_conversation_read_only_incoming(client, make_user, make_message):
    alice = await make_user("Alice")
    bob = await make_user("Bob")
    incoming = await make_message(bob.id, alice.id, "from bob", at(1))
    outgoing = await make_message(alice.id, bob.id, "from alice", at(2))

    response = await client.put(f"/api/messages/read-conversation/{alice.id}/{bob.id}")

    assert response.status_code == 200
    assert response.json()["updated"] == 1

    thread = await client.get(f"/api/messages/conversation/{alice.id}/{bob.id}")
    state = {m["id"]: (m["read"], m["status"]) for m in thread.json()}
    assert state[incoming.id] == (True, "read")
    assert state[outgoing.id] == (False, "sent")


async def test_invalid_path_parameter(client):
    response = await client.get("/api/messages/conversations/not-a-number")

    assert response.status_code == 422
    assert response.json()["errorCode"] == "REQUEST_VALIDATION_ERROR"
