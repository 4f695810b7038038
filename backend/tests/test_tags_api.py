"""HTTP behaviour of /api/tags..."""

import pytest


class TestTagsApi:
    @pytest.mark.asyncio
    async def test_create_and_get(self, test_client):
        response = await test_client.post("/api/tags", json={"name": "work"})

        assert response.status_code == 201
        tag = response.json()
        assert tag["name"] == "work"
        assert tag["color_id"] is None

        response = await test_client.get(f"/api/tags/{tag['id']}")
        assert response.status_code == 200
        assert response.json() == tag

    @pytest.mark.asyncio
    async def test_duplicate_name_conflicts(self, test_client):
        first = await test_client.post("/api/tags", json={"name": "work"})
        assert first.status_code == 201
        assert isinstance(first.json()["id"], int)

        response = await test_client.post("/api/tags", json={"name": "work"})

        assert response.status_code == 409
        body = response.json()
        assert body["error"] == "duplicate_entry"
        assert body["message"] == "duplicate entry"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload, error",
        [
            ({}, "undefined"),
            ({"name": ""}, "min_value"),
            ({"name": "x" * 26}, "max_value"),
            ({"name": ["work"]}, "invalid_type"),
        ],
    )
    async def test_invalid_name(self, test_client, payload, error):
        response = await test_client.post("/api/tags", json=payload)

        assert response.status_code == 400
        assert response.json()["error"] == error

    @pytest.mark.asyncio
    async def test_list(self, test_client):
        await test_client.post("/api/tags", json={"name": "a"})
        await test_client.post("/api/tags", json={"name": "b"})

        response = await test_client.get("/api/tags")

        assert response.status_code == 200
        assert sorted(t["name"] for t in response.json()) == ["a", "b"]

    @pytest.mark.asyncio
    async def test_get_missing(self, test_client):
        response = await test_client.get("/api/tags/9")
        assert response.status_code == 404

    @pytest.mark.asyncio
    @pytest.mark.parametrize("huge_id", ["2147483648", "99999999999999999999"])
    async def test_id_past_column_range_is_not_found(self, test_client, huge_id):
        response = await test_client.get(f"/api/tags/{huge_id}")
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

        response = await test_client.delete(f"/api/tags/{huge_id}")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_get_invalid_id(self, test_client):
        response = await test_client.get("/api/tags/1.5")
        assert response.status_code == 400
        assert response.json()["message"] == "Id must be an integer"

    @pytest.mark.asyncio
    async def test_by_name(self, test_client):
        created = (await test_client.post("/api/tags", json={"name": "to read"})).json()

        response = await test_client.get("/api/tags/by-name/to read")
        assert response.status_code == 200
        assert response.json() == created

        response = await test_client.get("/api/tags/by-name/unknown")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_twice(self, test_client):
        tag = (await test_client.post("/api/tags", json={"name": "work"})).json()

        first = await test_client.delete(f"/api/tags/{tag['id']}")
        second = await test_client.delete(f"/api/tags/{tag['id']}")

        assert first.status_code == 204
        assert second.status_code == 404
        assert second.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_delete_by_name(self, test_client):
        await test_client.post("/api/tags", json={"name": "work"})

        response = await test_client.delete("/api/tags/by-name/work")
        assert response.status_code == 204

        response = await test_client.delete("/api/tags/by-name/work")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_by_name_too_long(self, test_client):
        response = await test_client.delete(f"/api/tags/by-name/{'x' * 26}")
        assert response.status_code == 400
