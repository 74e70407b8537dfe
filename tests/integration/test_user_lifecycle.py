"""End-to-end user lifecycle tests through the HTTP API, run against every store backend."""

import uuid

from fastapi.testclient import TestClient


class TestUserLifecycle:
    """Create, read, update and delete a user over HTTP."""

    def test_full_lifecycle(self, client: TestClient, alice_payload):
        created = client.post("/users", json=alice_payload)
        assert created.status_code == 201
        body = created.json()
        assert body["message"] == "User created successfully!"
        user_id = body["user"]["id"]
        uuid.UUID(user_id)
        assert body["user"]["firstName"] == "Alice"
        assert body["user"]["age"] == 28

        fetched = client.get(f"/users/{user_id}")
        assert fetched.status_code == 200
        assert fetched.json() == {"id": user_id, **alice_payload}

        listed = client.get("/users")
        assert listed.status_code == 200
        assert [user["id"] for user in listed.json()] == [user_id]

        patched = client.patch(f"/users/{user_id}", json={"firstName": "AliceUpdated"})
        assert patched.status_code == 200
        assert patched.json()["message"] == "User updated successfully!"
        assert patched.json()["user"] == {
            "id": user_id,
            **alice_payload,
            "firstName": "AliceUpdated",
        }
        assert client.get(f"/users/{user_id}").json()["firstName"] == "AliceUpdated"

        deleted = client.delete(f"/users/{user_id}")
        assert deleted.status_code == 200
        assert deleted.json()["message"] == "User deleted successfully!"

        assert client.get(f"/users/{user_id}").status_code == 404
        assert client.delete(f"/users/{user_id}").status_code == 404
        assert client.get("/users").json() == []

    def test_patch_status_and_last_name(self, client: TestClient, alice_payload):
        user_id = client.post("/users", json=alice_payload).json()["user"]["id"]

        patched = client.patch(
            f"/users/{user_id}", json={"lastName": "Jones", "status": "Inactive"}
        )

        assert patched.status_code == 200
        assert patched.json()["user"] == {
            "id": user_id,
            **alice_payload,
            "lastName": "Jones",
            "status": "Inactive",
        }

    def test_display_name_email_is_rejected(self, client: TestClient, alice_payload):
        response = client.post(
            "/users", json={**alice_payload, "email": "Alice Smith <alice@example.com>"}
        )

        assert response.status_code == 400
        assert client.get("/users").json() == []

    def test_age_beyond_column_range_is_rejected(self, client: TestClient, alice_payload):
        response = client.post("/users", json={**alice_payload, "age": 10**20})

        assert response.status_code == 400
        assert client.get("/users").json() == []

    def test_status_defaults_to_active(self, client: TestClient, alice_payload):
        del alice_payload["status"]
        del alice_payload["age"]

        response = client.post("/users", json=alice_payload)

        assert response.status_code == 201
        user = response.json()["user"]
        assert user["status"] == "Active"
        assert user["age"] == 0

    def test_empty_patch_changes_nothing(self, client: TestClient, alice_payload):
        created = client.post("/users", json=alice_payload).json()["user"]

        response = client.patch(f"/users/{created['id']}", json={})

        assert response.status_code == 200
        assert response.json()["user"] == created

    def test_invalid_patch_leaves_user_untouched(self, client: TestClient, alice_payload):
        created = client.post("/users", json=alice_payload).json()["user"]

        response = client.patch(
            f"/users/{created['id']}", json={"firstName": "Bob", "email": "nope"}
        )

        assert response.status_code == 400
        assert client.get(f"/users/{created['id']}").json() == created

    def test_duplicate_email_is_a_store_failure(self, client: TestClient, alice_payload):
        assert client.post("/users", json=alice_payload).status_code == 201

        response = client.post("/users", json={**alice_payload, "firstName": "Alicia"})

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to Create User!"
        assert len(client.get("/users").json()) == 1

    def test_patch_to_taken_email_is_a_store_failure(self, client: TestClient, alice_payload):
        client.post("/users", json=alice_payload)
        other = client.post(
            "/users",
            json={**alice_payload, "email": "other@example.com"},
        ).json()["user"]

        response = client.patch(
            f"/users/{other['id']}", json={"email": "alice@example.com"}
        )

        assert response.status_code == 500
        assert client.get(f"/users/{other['id']}").json()["email"] == "other@example.com"

    def test_unknown_user(self, client: TestClient):
        missing = uuid.uuid4()

        assert client.get(f"/users/{missing}").status_code == 404
        assert client.patch(f"/users/{missing}", json={"age": 30}).status_code == 404
        assert client.delete(f"/users/{missing}").status_code == 404

    def test_malformed_ids_are_rejected(self, client: TestClient):
        for response in (
            client.get("/users/invalid-uuid"),
            client.patch("/users/invalid-uuid", json={"age": 30}),
            client.delete("/users/invalid-uuid"),
        ):
            assert response.status_code == 400
            assert response.json()["detail"] == "Invalid User Id!"

    def test_error_responses_carry_request_id(self, client: TestClient):
        response = client.get(
            f"/users/{uuid.uuid4()}", headers={"X-Request-ID": "req-123"}
        )

        assert response.status_code == 404
        assert response.json() == {"detail": "User Not Found!", "request_id": "req-123"}
        assert response.headers["X-Request-ID"] == "req-123"
