"""Tests for the catalog hydrate endpoint."""

import pytest


@pytest.mark.asyncio
async def test_hydrate_returns_canonical_hits(client, search_service_stub, make_hit):
    search_service_stub.hydrate.return_value = [make_hit()]

    response = await client.post(
        "/catalog/hydrate",
        json={"handles": ["Evoken-Quietus", "missing"]},
    )

    assert response.status_code == 200
    hits = response.json()["hits"]
    assert [hit["handle"] for hit in hits] == ["evoken-quietus"]
    search_service_stub.hydrate.assert_awaited_once_with(["Evoken-Quietus", "missing"])


@pytest.mark.asyncio
async def test_hydrate_rejects_too_many_handles(client, search_service_stub):
    handles = [f"release-{index}" for index in range(51)]

    response = await client.post("/catalog/hydrate", json={"handles": handles})

    assert response.status_code == 422
    search_service_stub.hydrate.assert_not_awaited()


@pytest.mark.asyncio
async def test_hydrate_requires_handles(client, search_service_stub):
    response = await client.post("/catalog/hydrate", json={})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_hydrate_unconfigured(client, unconfigured_search):
    response = await client.post("/catalog/hydrate", json={"handles": ["a"]})

    assert response.status_code == 503
