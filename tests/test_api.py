"""
TechNotes Backend — API Integration Tests
===========================================

What:  Full request → route → service → repository → SQL round trips.
How:   HTTPX AsyncClient over ASGI against an in-memory SQLite database
       (see conftest.test_client). No mocks.

What we test:
    ✅ Status codes and messages for each endpoint
    ✅ Passwords never appear in responses
    ✅ Notes listing carries the owner's username and camelCase timestamps
    ✅ Users with notes cannot be deleted
    ✅ Wrong-typed body fields are rejected with 400, not coerced
"""

from uuid import uuid4

import pytest


async def _create_user(client, username="jdoe", roles=None):
    response = await client.post(
        "/users",
        json={"username": username, "password": "s3cret", "roles": roles or ["Employee"]},
    )
    assert response.status_code == 201
    users = (await client.get("/users")).json()
    return next(u for u in users if u["username"] == username)


async def _create_note(client, user_id, title="Fix printer", text="Jams on duplex"):
    response = await client.post("/notes", json={"user": user_id, "title": title, "text": text})
    assert response.status_code == 201
    notes = (await client.get("/notes")).json()
    return next(n for n in notes if n["title"] == title)


class TestUsersAPI:

    @pytest.mark.asyncio
    async def test_empty_user_list(self, test_client):
        response = await test_client.get("/users")

        assert response.status_code == 400
        assert response.json()["message"] == "No users found"

    @pytest.mark.asyncio
    async def test_create_and_list_user(self, test_client):
        response = await test_client.post(
            "/users",
            json={"username": "jdoe", "password": "s3cret", "roles": ["Employee"]},
        )

        assert response.status_code == 201
        assert response.json() == {"message": "User jdoe created"}

        listed = await test_client.get("/users")
        assert listed.status_code == 200
        users = listed.json()
        assert len(users) == 1
        assert users[0]["username"] == "jdoe"
        assert users[0]["roles"] == ["Employee"]
        assert users[0]["active"] is True
        assert "password" not in users[0]
        assert "createdAt" in users[0] and "updatedAt" in users[0]

    @pytest.mark.asyncio
    async def test_duplicate_username(self, test_client):
        await _create_user(test_client, "jdoe")

        response = await test_client.post(
            "/users",
            json={"username": "jdoe", "password": "other", "roles": ["Admin"]},
        )

        assert response.status_code == 409
        assert response.json()["message"] == "User already exists"

    @pytest.mark.asyncio
    async def test_create_missing_fields(self, test_client):
        response = await test_client.post("/users", json={"username": "jdoe"})

        assert response.status_code == 400
        assert response.json()["message"] == "Please enter all fields"

    @pytest.mark.asyncio
    async def test_update_user_with_id_in_body(self, test_client):
        user = await _create_user(test_client, "jdoe")

        response = await test_client.patch(
            f"/users/{user['id']}",
            json={"id": user["id"], "username": "jdoe", "roles": ["Manager"], "active": False},
        )

        assert response.status_code == 200
        assert response.json() == {"message": "User jdoe updated"}
        users = (await test_client.get("/users")).json()
        assert users[0]["roles"] == ["Manager"]
        assert users[0]["active"] is False

    @pytest.mark.asyncio
    async def test_update_user_id_from_path(self, test_client):
        user = await _create_user(test_client, "jdoe")

        response = await test_client.patch(
            f"/users/{user['id']}",
            json={"username": "jdoe2", "roles": ["Employee"], "active": True},
        )

        assert response.status_code == 200
        assert response.json()["message"] == "User jdoe2 updated"

    @pytest.mark.asyncio
    async def test_update_to_taken_username(self, test_client):
        await _create_user(test_client, "alice")
        bob = await _create_user(test_client, "bob")

        response = await test_client.patch(
            f"/users/{bob['id']}",
            json={"username": "alice", "roles": ["Employee"], "active": True},
        )

        assert response.status_code == 409
        assert response.json()["message"] == "User alice already exists"

    @pytest.mark.asyncio
    async def test_active_must_be_boolean(self, test_client):
        user = await _create_user(test_client, "jdoe")

        response = await test_client.patch(
            f"/users/{user['id']}",
            json={"username": "jdoe", "roles": ["Employee"], "active": "yes"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_update_unknown_user(self, test_client):
        missing = str(uuid4())

        response = await test_client.patch(
            f"/users/{missing}",
            json={"username": "ghost", "roles": ["Employee"], "active": True},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "User not found"

    @pytest.mark.asyncio
    async def test_delete_user(self, test_client):
        user = await _create_user(test_client, "jdoe")

        response = await test_client.delete(f"/users/{user['id']}")

        assert response.status_code == 200
        assert response.json()["message"] == f"Username jdoe with ID {user['id']} deleted"
        assert (await test_client.get("/users")).status_code == 400

    @pytest.mark.asyncio
    async def test_user_with_notes_cannot_be_deleted(self, test_client):
        user = await _create_user(test_client, "jdoe")
        await _create_note(test_client, user["id"])

        response = await test_client.request(
            "DELETE", f"/users/{user['id']}", json={"id": user["id"]}
        )

        assert response.status_code == 400
        assert response.json()["message"] == "User has assigned notes"
        users = (await test_client.get("/users")).json()
        assert [u["username"] for u in users] == ["jdoe"]


class TestNotesAPI:

    @pytest.mark.asyncio
    async def test_empty_note_list(self, test_client):
        response = await test_client.get("/notes")

        assert response.status_code == 400
        assert response.json()["message"] == "No notes found"

    @pytest.mark.asyncio
    async def test_create_and_list_note(self, test_client):
        user = await _create_user(test_client, "jdoe")

        response = await test_client.post(
            "/notes",
            json={"user": user["id"], "title": "Fix printer", "text": "Jams on duplex"},
        )

        assert response.status_code == 201
        assert response.json() == {"message": "Note Fix printer created"}

        notes = (await test_client.get("/notes")).json()
        assert len(notes) == 1
        note = notes[0]
        assert note["user"] == user["id"]
        assert note["username"] == "jdoe"
        assert note["completed"] is False
        assert "createdAt" in note and "updatedAt" in note

    @pytest.mark.asyncio
    async def test_duplicate_title(self, test_client):
        user = await _create_user(test_client, "jdoe")
        await _create_note(test_client, user["id"], title="Fix printer")

        response = await test_client.post(
            "/notes",
            json={"user": user["id"], "title": "Fix printer", "text": "again"},
        )

        assert response.status_code == 409
        assert response.json()["message"] == "Note title already exists"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("owner", [str(uuid4()), "not-a-uuid"])
    async def test_unknown_owner(self, test_client, owner):
        response = await test_client.post(
            "/notes",
            json={"user": owner, "title": "Orphan", "text": "No owner"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "User does not exist"

    @pytest.mark.asyncio
    async def test_update_note(self, test_client):
        user = await _create_user(test_client, "jdoe")
        note = await _create_note(test_client, user["id"], title="Fix printer")

        response = await test_client.patch(
            "/notes",
            json={"id": note["id"], "title": "Fix printer", "text": "Replaced roller", "completed": True},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Note updated"
        assert body["updatedNote"]["id"] == note["id"]
        assert body["updatedNote"]["text"] == "Replaced roller"
        assert body["updatedNote"]["completed"] is True

    @pytest.mark.asyncio
    async def test_update_to_taken_title(self, test_client):
        user = await _create_user(test_client, "jdoe")
        await _create_note(test_client, user["id"], title="First")
        second = await _create_note(test_client, user["id"], title="Second")

        response = await test_client.patch(
            "/notes",
            json={"id": second["id"], "title": "First", "text": "x", "completed": False},
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_completed_string_rejected(self, test_client):
        user = await _create_user(test_client, "jdoe")
        note = await _create_note(test_client, user["id"])

        response = await test_client.patch(
            "/notes",
            json={"id": note["id"], "title": note["title"], "text": "x", "completed": "yes"},
        )

        assert response.status_code == 400
        assert "completed" in response.json()["details"]["fields"]

    @pytest.mark.asyncio
    async def test_update_missing_fields(self, test_client):
        response = await test_client.patch("/notes", json={"id": str(uuid4()), "title": "T"})

        assert response.status_code == 400
        assert response.json()["message"] == "All fields are required"

    @pytest.mark.asyncio
    async def test_delete_note(self, test_client):
        user = await _create_user(test_client, "jdoe")
        note = await _create_note(test_client, user["id"], title="Fix printer")

        response = await test_client.request("DELETE", "/notes", json={"id": note["id"]})

        assert response.status_code == 200
        assert response.json()["message"] == f"Note 'Fix printer' with ID {note['id']} deleted"
        assert (await test_client.get("/notes")).status_code == 400

        # Owner is free to go once the note is gone
        assert (await test_client.delete(f"/users/{user['id']}")).status_code == 200

    @pytest.mark.asyncio
    async def test_delete_missing_note(self, test_client):
        response = await test_client.request("DELETE", "/notes", json={"id": str(uuid4())})

        assert response.status_code == 400
        assert response.json()["message"] == "Note does not exist"

    @pytest.mark.asyncio
    async def test_delete_without_id(self, test_client):
        response = await test_client.request("DELETE", "/notes", json={})

        assert response.status_code == 400
        assert response.json()["message"] == "Note ID required"


class TestHealthAndHeaders:

    @pytest.mark.asyncio
    async def test_health(self, test_client):
        response = await test_client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, test_client):
        response = await test_client.get("/users", headers={"X-Request-ID": "abc12345"})

        assert response.headers["X-Request-ID"] == "abc12345"
        assert response.json()["request_id"] == "abc12345"
