"""Integration tests for Profile API endpoints."""

from typing import Any
from uuid import uuid4

import pytest
from httpx import AsyncClient

from tests.conftest import GITHUB_REPOS

PROFILE = {
    "status": "Developer",
    "skills": "python, sql ,go",
    "company": "Acme",
    "twitter": "https://twitter.com/alice",
    "youtube": "https://youtube.com/alice",
}

EXPERIENCE = {"title": "Engineer", "company": "Acme", "from": "2020-01-01", "current": True}

EDUCATION = {
    "school": "MIT",
    "degree": "BSc",
    "field_of_study": "Computer Science",
    "from": "2015-09-01",
    "to": "2019-06-01",
}


async def _create_profile(
    client: AsyncClient, headers: dict[str, str], **overrides: Any
) -> dict[str, Any]:
    response = await client.post("/api/profile", json={**PROFILE, **overrides}, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()  # type: ignore[no-any-return]


class TestOwnProfile:
    @pytest.mark.asyncio
    async def test_no_profile_yet(self, client: AsyncClient, alice_headers: dict[str, str]) -> None:
        response = await client.get("/api/profile/me", headers=alice_headers)

        assert response.status_code == 404
        assert response.json()["message"] == "There is no profile for this user"

    @pytest.mark.asyncio
    async def test_requires_token(self, client: AsyncClient) -> None:
        response = await client.get("/api/profile/me")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_create_and_read_back(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ) -> None:
        created = await _create_profile(client, alice_headers)

        assert created["skills"] == ["python", "sql", "go"]
        assert created["user"]["name"] == "Alice"
        assert created["social"] == {
            "twitter": "https://twitter.com/alice",
            "youtube": "https://youtube.com/alice",
        }

        response = await client.get("/api/profile/me", headers=alice_headers)
        assert response.status_code == 200
        assert response.json()["id"] == created["id"]


class TestUpsertProfile:
    @pytest.mark.asyncio
    async def test_second_upsert_updates_the_same_profile(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ) -> None:
        first = await _create_profile(client, alice_headers)
        second = await _create_profile(
            client,
            alice_headers,
            status="Lead",
            skills="rust",
            company=None,
            twitter="https://twitter.com/alice2",
            youtube=None,
        )

        assert second["id"] == first["id"]
        assert second["status"] == "Lead"
        assert second["skills"] == ["rust"]
        assert second["company"] == "Acme"
        assert second["social"] == {
            "twitter": "https://twitter.com/alice2",
            "youtube": "https://youtube.com/alice",
        }

        listing = await client.get("/api/profile")
        assert len(listing.json()) == 1

    @pytest.mark.asyncio
    async def test_status_and_skills_are_required(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ) -> None:
        response = await client.post(
            "/api/profile", json={"status": " ", "skills": " , "}, headers=alice_headers
        )

        assert response.status_code == 422
        fields = {detail["field"] for detail in response.json()["details"]}
        assert fields == {"body.status", "body.skills"}

    @pytest.mark.asyncio
    async def test_githubusername_spelling_is_accepted(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ) -> None:
        profile = await _create_profile(client, alice_headers, githubusername="octocat")

        assert profile["github_username"] == "octocat"


class TestPublicProfiles:
    @pytest.mark.asyncio
    async def test_list_profiles(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        bob_headers: dict[str, str],
    ) -> None:
        await _create_profile(client, alice_headers)
        await _create_profile(client, bob_headers)

        response = await client.get("/api/profile")

        assert response.status_code == 200
        assert {p["user"]["name"] for p in response.json()} == {"Alice", "Bob"}

    @pytest.mark.asyncio
    async def test_get_by_user_id(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ) -> None:
        created = await _create_profile(client, alice_headers)

        response = await client.get(f"/api/profile/user/{created['user']['id']}")

        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("user_id", ["not-an-id", str(uuid4())])
    async def test_unknown_or_malformed_user_id(self, client: AsyncClient, user_id: str) -> None:
        response = await client.get(f"/api/profile/user/{user_id}")

        assert response.status_code == 404
        assert response.json()["error_code"] == "PROFILE_NOT_FOUND"


class TestExperienceAndEducation:
    @pytest.mark.asyncio
    async def test_experience_is_prepended_and_removable(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ) -> None:
        await _create_profile(client, alice_headers)

        await client.put("/api/profile/experience", json=EXPERIENCE, headers=alice_headers)
        response = await client.put(
            "/api/profile/experience",
            json={**EXPERIENCE, "title": "Senior Engineer"},
            headers=alice_headers,
        )

        assert response.status_code == 200
        experience = response.json()["experience"]
        assert [e["title"] for e in experience] == ["Senior Engineer", "Engineer"]
        assert experience[0]["from"] == "2020-01-01"

        removed = await client.delete(
            f"/api/profile/experience/{experience[1]['id']}", headers=alice_headers
        )
        assert removed.status_code == 200
        assert [e["title"] for e in removed.json()["experience"]] == ["Senior Engineer"]

    @pytest.mark.asyncio
    async def test_experience_requires_profile(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ) -> None:
        response = await client.put(
            "/api/profile/experience", json=EXPERIENCE, headers=alice_headers
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_experience_requires_title_company_and_from(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ) -> None:
        await _create_profile(client, alice_headers)

        response = await client.put("/api/profile/experience", json={}, headers=alice_headers)

        assert response.status_code == 422
        fields = {detail["field"] for detail in response.json()["details"]}
        assert fields == {"body.title", "body.company", "body.from"}

    @pytest.mark.asyncio
    async def test_remove_unknown_experience(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ) -> None:
        await _create_profile(client, alice_headers)

        response = await client.delete(
            f"/api/profile/experience/{uuid4()}", headers=alice_headers
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "EXPERIENCE_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_education_round_trip(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ) -> None:
        await _create_profile(client, alice_headers)

        added = await client.put("/api/profile/education", json=EDUCATION, headers=alice_headers)
        assert added.status_code == 200
        entry = added.json()["education"][0]
        assert entry["school"] == "MIT"
        assert entry["to"] == "2019-06-01"

        removed = await client.delete(
            f"/api/profile/education/{entry['id']}", headers=alice_headers
        )
        assert removed.status_code == 200
        assert removed.json()["education"] == []

    @pytest.mark.asyncio
    async def test_education_accepts_camel_case_field_of_study(
        self, client: AsyncClient, alice_headers: dict[str, str]
    ) -> None:
        await _create_profile(client, alice_headers)
        body = {k: v for k, v in EDUCATION.items() if k != "field_of_study"}

        added = await client.put(
            "/api/profile/education",
            json={**body, "fieldOfStudy": "Mathematics"},
            headers=alice_headers,
        )

        assert added.status_code == 200
        assert added.json()["education"][0]["field_of_study"] == "Mathematics"


class TestDeleteAccount:
    @pytest.mark.asyncio
    async def test_removes_profile_and_user_but_keeps_posts(
        self,
        client: AsyncClient,
        alice_headers: dict[str, str],
        bob_headers: dict[str, str],
    ) -> None:
        await _create_profile(client, alice_headers)
        post = await client.post("/api/posts", json={"text": "Hello"}, headers=alice_headers)

        response = await client.delete("/api/profile", headers=alice_headers)

        assert response.status_code == 200
        assert response.json()["message"] == "User deleted"
        assert (await client.get("/api/profile")).json() == []
        assert (await client.get("/api/auth", headers=alice_headers)).status_code == 404
        login = await client.post(
            "/api/auth", json={"email": "alice@example.com", "password": "123456"}
        )
        assert login.status_code == 400

        kept = await client.get(f"/api/posts/{post.json()['id']}", headers=bob_headers)
        assert kept.status_code == 200
        assert kept.json()["name"] == "Alice"


class TestGitHubRepos:
    @pytest.mark.asyncio
    async def test_lists_repositories(self, client: AsyncClient) -> None:
        response = await client.get("/api/profile/github/octocat")

        assert response.status_code == 200
        assert response.json() == GITHUB_REPOS

    @pytest.mark.asyncio
    async def test_unknown_user(self, client: AsyncClient) -> None:
        response = await client.get("/api/profile/github/ghost")

        assert response.status_code == 404
        assert response.json()["message"] == "No GitHub profile found"

    @pytest.mark.asyncio
    async def test_query_characters_in_username_are_not_forwarded(
        self, client: AsyncClient
    ) -> None:
        response = await client.get("/api/profile/github/octocat%3F")

        assert response.status_code == 404
        assert response.json()["error_code"] == "GITHUB_PROFILE_NOT_FOUND"
