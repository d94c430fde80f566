"""Integration tests for category and keyword rule endpoints."""

from uuid import uuid4

import pytest
from httpx import AsyncClient


class TestCategories:
    @pytest.mark.asyncio
    async def test_list_categories(self, client: AsyncClient, auth_headers: dict):
        response = await client.get("/api/v1/categories", headers=auth_headers)

        assert response.status_code == 200
        names = [c["name"] for c in response.json()]
        assert len(names) == 10
        assert "Groceries" in names


class TestCategoryRules:
    @pytest.mark.asyncio
    async def test_create_and_list(self, client: AsyncClient, auth_headers: dict, categories: dict):
        transport = categories["Transport"]

        created = await client.post(
            "/api/v1/category-rules",
            json={"keyword": "uber", "category_id": transport},
            headers=auth_headers,
        )
        listed = await client.get("/api/v1/category-rules", headers=auth_headers)

        assert created.status_code == 201
        assert created.json()["keyword"] == "uber"
        rules = listed.json()
        assert len(rules) == 1
        assert rules[0]["category"] == "Transport"

    @pytest.mark.asyncio
    async def test_duplicate_keyword(self, client: AsyncClient, auth_headers: dict):
        first = await client.post(
            "/api/v1/category-rules",
            json={"keyword": "coffee", "category_id": 1},
            headers=auth_headers,
        )
        second = await client.post(
            "/api/v1/category-rules",
            json={"keyword": "coffee", "category_id": 2},
            headers=auth_headers,
        )

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json()["error_code"] == "RULE_003"

    @pytest.mark.asyncio
    async def test_duplicate_keyword_returns_catalog_body(
        self, client: AsyncClient, auth_headers: dict
    ):
        await client.post(
            "/api/v1/category-rules",
            json={"keyword": "taxi", "category_id": 1},
            headers=auth_headers,
        )

        conflict = await client.post(
            "/api/v1/category-rules",
            json={"keyword": "taxi", "category_id": 2},
            headers=auth_headers,
        )
        listed = await client.get("/api/v1/category-rules", headers=auth_headers)

        assert conflict.status_code == 409
        body = conflict.json()
        assert body["error_code"] == "RULE_003"
        assert body["retry_allowed"] is False
        assert "user_message" in body
        assert listed.status_code == 200
        assert [r["keyword"] for r in listed.json()] == ["taxi"]

    @pytest.mark.asyncio
    async def test_unknown_category(self, client: AsyncClient, auth_headers: dict):
        response = await client.post(
            "/api/v1/category-rules",
            json={"keyword": "coffee", "category_id": 999},
            headers=auth_headers,
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "CAT_001"

    @pytest.mark.asyncio
    async def test_empty_keyword_rejected(self, client: AsyncClient, auth_headers: dict):
        response = await client.post(
            "/api/v1/category-rules",
            json={"keyword": "", "category_id": 1},
            headers=auth_headers,
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_delete_own_rule(self, client: AsyncClient, auth_headers: dict):
        created = await client.post(
            "/api/v1/category-rules",
            json={"keyword": "coffee", "category_id": 1},
            headers=auth_headers,
        )

        response = await client.delete(
            f"/api/v1/category-rules/{created.json()['id']}", headers=auth_headers
        )
        listed = await client.get("/api/v1/category-rules", headers=auth_headers)

        assert response.status_code == 200
        assert listed.json() == []

    @pytest.mark.asyncio
    async def test_delete_foreign_rule_looks_like_missing(
        self, client: AsyncClient, auth_headers: dict, other_auth_headers: dict
    ):
        foreign = await client.post(
            "/api/v1/category-rules",
            json={"keyword": "coffee", "category_id": 1},
            headers=other_auth_headers,
        )

        foreign_response = await client.delete(
            f"/api/v1/category-rules/{foreign.json()['id']}", headers=auth_headers
        )
        missing_response = await client.delete(
            f"/api/v1/category-rules/{uuid4()}", headers=auth_headers
        )
        still_there = await client.get("/api/v1/category-rules", headers=other_auth_headers)

        assert foreign_response.status_code == missing_response.status_code == 404
        assert foreign_response.json() == missing_response.json()
        assert len(still_there.json()) == 1
