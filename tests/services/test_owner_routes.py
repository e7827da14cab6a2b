"""Owner Dashboard — live aggregate and raters for the caller's store."""

from store_ratings.core.domain_types import Role


async def test_dashboard_reflects_latest_ratings(
    client, make_user, make_store, auth_header,
):
    owner_id = await make_user(Role.OWNER)
    store_id = await make_store(owner_id=owner_id)
    alice, bob = await make_user(), await make_user()
    owner_headers = auth_header(owner_id, Role.OWNER)

    await client.post(
        "/api/user/ratings", json={"store_id": store_id, "rating": 2},
        headers=auth_header(alice, Role.USER),
    )
    await client.post(
        "/api/user/ratings", json={"store_id": store_id, "rating": 5},
        headers=auth_header(bob, Role.USER),
    )
    res = await client.get("/api/owner/dashboard", headers=owner_headers)
    assert res.status_code == 200
    data = res.json()
    assert data["store"]["id"] == store_id
    assert data["avgRating"] == 3.5
    assert data["totalRatings"] == 2
    assert [r["id"] for r in data["raters"]] == [bob, alice]

    await client.patch(
        f"/api/user/ratings/{store_id}", json={"rating": 4},
        headers=auth_header(alice, Role.USER),
    )
    data = (await client.get("/api/owner/dashboard", headers=owner_headers)).json()
    assert data["avgRating"] == 4.5
    assert data["raters"][0]["id"] == alice


async def test_dashboard_without_ratings(client, make_user, make_store, auth_header):
    owner_id = await make_user(Role.OWNER)
    await make_store(owner_id=owner_id)
    res = await client.get(
        "/api/owner/dashboard", headers=auth_header(owner_id, Role.OWNER),
    )
    assert res.status_code == 200
    assert res.json()["avgRating"] == 0.0
    assert res.json()["totalRatings"] == 0
    assert res.json()["raters"] == []


async def test_dashboard_owner_without_store_404(client, make_user, auth_header):
    owner_id = await make_user(Role.OWNER)
    res = await client.get(
        "/api/owner/dashboard", headers=auth_header(owner_id, Role.OWNER),
    )
    assert res.status_code == 404


async def test_dashboard_forbidden_for_customers(client, make_user, auth_header):
    user_id = await make_user(Role.USER)
    res = await client.get(
        "/api/owner/dashboard", headers=auth_header(user_id, Role.USER),
    )
    assert res.status_code == 403


async def test_dashboard_requires_token(client):
    res = await client.get("/api/owner/dashboard")
    assert res.status_code == 401
