"""Route tests for user accounts."""

from __future__ import annotations

from app.core.enums import RoleName

ADMIN = "admin@example.com"


class TestUpsert:
    def test_first_and_returning_login(self, client, auth_headers) -> None:
        body = {
            "email": "new@example.com",
            "name": "New User",
            "photoURL": "https://example.com/p.png",
            "role": "tutor",
        }

        first = client.put("/users", json=body, headers=auth_headers("new@example.com"))
        second = client.put("/users", json=body, headers=auth_headers("new@example.com"))

        assert first.status_code == 200
        assert first.json()["upsertedCount"] == 1
        assert first.json()["upsertedId"]
        assert second.json() == {
            "acknowledged": True,
            "matchedCount": 1,
            "modifiedCount": 1,
            "upsertedId": None,
            "upsertedCount": 0,
        }
        role = client.get("/user/role", headers=auth_headers("new@example.com"))
        assert role.json() == {"role": "tutor"}

    def test_body_email_must_match_token(self, client, auth_headers) -> None:
        response = client.put(
            "/users", json={"email": "victim@example.com"}, headers=auth_headers("me@example.com")
        )

        assert response.status_code == 403

    def test_role_of_unknown_caller_is_null(self, client, auth_headers) -> None:
        response = client.get("/user/role", headers=auth_headers("nobody@example.com"))

        assert response.json() == {"role": None}


class TestAdministration:
    def test_admin_lists_everyone_but_self(self, client, make_user, auth_headers) -> None:
        make_user(ADMIN, RoleName.ADMIN)
        other = make_user("other@example.com", RoleName.STUDENT)

        response = client.get("/users", headers=auth_headers(ADMIN))

        users = response.json()
        assert [u["_id"] for u in users] == [other.id]
        assert {"photoURL", "created_at", "last_loggedIn", "timestamp"} <= set(users[0])

    def test_non_admin_may_not_list_users(self, client, make_user, auth_headers) -> None:
        make_user("student@example.com", RoleName.STUDENT)

        assert client.get("/users", headers=auth_headers("student@example.com")).status_code == 403

    def test_patch_and_delete_user(self, client, make_user, auth_headers) -> None:
        make_user(ADMIN, RoleName.ADMIN)
        target = make_user("target@example.com", RoleName.STUDENT)

        patched = client.patch(
            f"/users/{target.id}",
            json={"name": "Target", "role": "tutor", "status": "active", "verified": True},
            headers=auth_headers(ADMIN),
        )
        assert patched.json()["matchedCount"] == 1
        role = client.get("/user/role", headers=auth_headers("target@example.com")).json()
        assert role == {"role": "tutor"}

        deleted = client.delete(f"/users/{target.id}", headers=auth_headers(ADMIN))
        assert deleted.json() == {"acknowledged": True, "deletedCount": 1}
        assert client.delete(f"/users/{target.id}", headers=auth_headers(ADMIN)).status_code == 404

    def test_patch_rejects_unknown_role(self, client, make_user, auth_headers) -> None:
        make_user(ADMIN, RoleName.ADMIN)
        target = make_user("target@example.com")

        response = client.patch(
            f"/users/{target.id}", json={"role": "superuser"}, headers=auth_headers(ADMIN)
        )

        assert response.status_code == 422

    def test_patch_to_taken_email_is_rejected(self, client, make_user, auth_headers) -> None:
        make_user(ADMIN, RoleName.ADMIN)
        make_user("first@example.com")
        second = make_user("second@example.com")

        response = client.patch(
            f"/users/{second.id}",
            json={"email": "first@example.com"},
            headers=auth_headers(ADMIN),
        )

        assert response.status_code == 400
        assert response.json()["code"] == "EMAIL_TAKEN"
        role = client.get("/user/role", headers=auth_headers("second@example.com")).json()
        assert role == {"role": "student"}
