"""End-to-end tests over the HTTP surface (in-memory database)."""

from unittest.mock import AsyncMock

from bson import ObjectId

from devconnector.dependencies import get_profile_service


def auth(token):
    return {"x-auth-token": token}


# ─────────────────────────────────────────────────────────────────
# Auth
# ─────────────────────────────────────────────────────────────────


class TestAuthEndpoints:
    def test_register_login_and_whoami(self, client, register):
        register(email="a@x.com", password="secret123")

        response = client.post("/api/auth", json={"email": "a@x.com", "password": "secret123"})
        assert response.status_code == 200
        token = response.json()["token"]

        response = client.get("/api/auth", headers=auth(token))
        assert response.status_code == 200
        user = response.json()
        assert user["email"] == "a@x.com"
        assert user["name"] == "Ada Lovelace"
        assert "password" not in user

    def test_login_email_is_case_insensitive(self, client, register):
        register(email="a@x.com")

        response = client.post("/api/auth", json={"email": "A@X.com", "password": "secret123"})

        assert response.status_code == 200

    def test_wrong_password_is_invalid_user(self, client, register):
        register(email="a@x.com", password="secret123")

        response = client.post("/api/auth", json={"email": "a@x.com", "password": "nope123"})

        assert response.status_code == 400
        assert response.json()["errors"][0]["msg"] == "Invalid user"

    def test_unknown_email_is_invalid_user(self, client):
        response = client.post("/api/auth", json={"email": "ghost@x.com", "password": "secret123"})

        assert response.status_code == 400
        assert response.json()["errors"][0]["msg"] == "Invalid user"

    def test_login_input_validation(self, client):
        response = client.post("/api/auth", json={"email": "not-an-email"})

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "VALIDATION_ERROR"
        messages = {e["param"]: e["msg"] for e in body["errors"]}
        assert messages == {
            "email": "Please include a valid email",
            "password": "Password is required",
        }

    def test_whoami_without_token(self, client):
        response = client.get("/api/auth")

        assert response.status_code == 401
        assert response.json() == {"msg": "No token, authorization denied", "code": "NO_TOKEN"}

    def test_whoami_with_bad_token(self, client):
        response = client.get("/api/auth", headers=auth("garbage"))

        assert response.status_code == 401
        assert response.json()["msg"] == "Token is not valid"

    def test_register_duplicate_and_short_password(self, client, register):
        register(email="a@x.com")

        duplicate = client.post(
            "/api/users", json={"name": "Ada", "email": "a@x.com", "password": "secret123"}
        )
        short = client.post(
            "/api/users", json={"name": "Ada", "email": "b@x.com", "password": "abc"}
        )

        assert duplicate.status_code == 400
        assert duplicate.json()["errors"][0]["msg"] == "User already exists"
        assert short.status_code == 400
        assert short.json()["errors"][0]["msg"] == (
            "Please enter a password with 6 or more characters"
        )


# ─────────────────────────────────────────────────────────────────
# Profile
# ─────────────────────────────────────────────────────────────────


class TestProfileEndpoints:
    def test_create_then_partial_update(self, client, register):
        token = register()

        created = client.post(
            "/api/profile", json={"status": "Developer", "skills": "go,rust"}, headers=auth(token)
        )
        assert created.status_code == 200
        assert created.json()["skills"] == ["go", "rust"]

        updated = client.post(
            "/api/profile", json={"status": "Senior Developer"}, headers=auth(token)
        )
        assert updated.status_code == 200
        assert updated.json()["status"] == "Senior Developer"
        assert updated.json()["skills"] == ["go", "rust"]
        assert updated.json()["_id"] == created.json()["_id"]

    def test_status_is_required(self, client, register):
        token = register()

        response = client.post("/api/profile", json={"skills": "go"}, headers=auth(token))

        assert response.status_code == 400
        assert response.json()["errors"] == [
            {"msg": "Status is required", "location": "body", "param": "status"}
        ]

    def test_first_profile_needs_skills(self, client, register):
        token = register()

        response = client.post("/api/profile", json={"status": "Developer"}, headers=auth(token))

        assert response.status_code == 400
        assert response.json()["errors"][0]["msg"] == "Skills is required"

    def test_profile_requires_token(self, client):
        response = client.post("/api/profile", json={"status": "Developer", "skills": "go"})

        assert response.status_code == 401

    def test_me_without_profile(self, client, register):
        token = register()

        response = client.get("/api/profile/me", headers=auth(token))

        assert response.status_code == 400
        assert response.json()["msg"] == "There is no profile for this user"

    def test_public_reads(self, client, register):
        token = register()
        created = client.post(
            "/api/profile", json={"status": "Developer", "skills": "go"}, headers=auth(token)
        ).json()
        owner_id = created["user"]["_id"]

        listed = client.get("/api/profile")
        by_user = client.get(f"/api/profile/user/{owner_id}")

        assert listed.status_code == 200
        assert [p["_id"] for p in listed.json()] == [created["_id"]]
        assert listed.json()[0]["user"]["name"] == "Ada Lovelace"
        assert by_user.status_code == 200
        assert by_user.json()["_id"] == created["_id"]

    def test_profile_by_bad_or_unknown_user_id(self, client):
        malformed = client.get("/api/profile/user/bad-id")
        unknown = client.get(f"/api/profile/user/{ObjectId()}")

        assert malformed.status_code == 400
        assert malformed.json() == unknown.json()
        assert malformed.json()["msg"] == "Profile not found"

    def test_experience_add_and_remove(self, client, register):
        token = register()
        client.post("/api/profile", json={"status": "Developer", "skills": "go"}, headers=auth(token))

        first = client.put(
            "/api/profile/experience",
            json={"title": "Junior", "company": "Acme", "from": "2018-01-01"},
            headers=auth(token),
        )
        second = client.put(
            "/api/profile/experience",
            json={"title": "Senior", "company": "Acme", "from": "2020-01-01", "current": True},
            headers=auth(token),
        )
        assert second.status_code == 200
        titles = [e["title"] for e in second.json()["experience"]]
        assert titles == ["Senior", "Junior"]

        newest_id = second.json()["experience"][0]["_id"]
        removed = client.delete(f"/api/profile/experience/{newest_id}", headers=auth(token))
        assert removed.status_code == 200
        assert removed.json()["experience"] == first.json()["experience"]

        unknown = client.delete("/api/profile/experience/not-an-id", headers=auth(token))
        assert unknown.status_code == 200
        assert unknown.json()["experience"] == first.json()["experience"]

    def test_experience_accepts_timestamps_and_plain_dates(self, client, register):
        token = register()
        client.post("/api/profile", json={"status": "Developer", "skills": "go"}, headers=auth(token))

        response = client.put(
            "/api/profile/experience",
            json={
                "title": "Engineer",
                "company": "Acme",
                "from": "2020-01-01T05:00:00.000Z",
                "to": "2021-06-30",
            },
            headers=auth(token),
        )

        assert response.status_code == 200
        entry = response.json()["experience"][0]
        assert entry["from"].startswith("2020-01-01T05:00:00")
        assert entry["to"].startswith("2021-06-30T00:00:00")

    def test_experience_validation(self, client, register):
        token = register()
        client.post("/api/profile", json={"status": "Developer", "skills": "go"}, headers=auth(token))

        response = client.put("/api/profile/experience", json={}, headers=auth(token))

        assert response.status_code == 400
        messages = sorted(e["msg"] for e in response.json()["errors"])
        assert messages == ["Company is required", "From date is required", "Title is required"]

    def test_education_add_and_remove(self, client, register):
        token = register()
        client.post("/api/profile", json={"status": "Developer", "skills": "go"}, headers=auth(token))

        added = client.put(
            "/api/profile/education",
            json={
                "school": "MIT",
                "degree": "BSc",
                "fieldofstudy": "CS",
                "from": "2010-09-01",
                "to": "2014-06-01",
            },
            headers=auth(token),
        )
        assert added.status_code == 200
        entry = added.json()["education"][0]
        assert entry["school"] == "MIT"

        removed = client.delete(f"/api/profile/education/{entry['_id']}", headers=auth(token))
        assert removed.json()["education"] == []

    def test_education_without_profile(self, client, register):
        token = register()

        response = client.put(
            "/api/profile/education",
            json={"school": "MIT", "degree": "BSc", "from": "2010-09-01"},
            headers=auth(token),
        )

        assert response.status_code == 400
        assert response.json()["code"] == "PROFILE_NOT_FOUND"


# ─────────────────────────────────────────────────────────────────
# Account deletion
# ─────────────────────────────────────────────────────────────────


class TestDeleteAccount:
    def test_delete_removes_user_and_profile(self, client, register, fake_db):
        token = register()
        client.post("/api/profile", json={"status": "Developer", "skills": "go"}, headers=auth(token))

        response = client.delete("/api/profile", headers=auth(token))

        assert response.status_code == 200
        assert response.json() == {"msg": "User deleted"}
        assert fake_db["profiles"].docs == []
        assert fake_db["users"].docs == []

        # Token is still well-formed but the account is gone
        whoami = client.get("/api/auth", headers=auth(token))
        assert whoami.status_code == 400
        assert whoami.json()["code"] == "USER_NOT_FOUND"

        login = client.post("/api/auth", json={"email": "a@x.com", "password": "secret123"})
        assert login.status_code == 400


# ─────────────────────────────────────────────────────────────────
# Errors and health
# ─────────────────────────────────────────────────────────────────


class TestUnexpectedErrors:
    def test_store_failure_is_generic_500(self, client, monkeypatch):
        monkeypatch.setattr(
            get_profile_service(),
            "list_profiles",
            AsyncMock(side_effect=RuntimeError("connection reset by mongo-3:27017")),
        )

        response = client.get("/api/profile")

        assert response.status_code == 500
        assert response.json() == {"msg": "Server error", "code": "INTERNAL_ERROR"}

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
