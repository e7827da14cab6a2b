"""Customer Rating Routes — role gate, upsert semantics and request validation.

Invariants:
    - Only Role.USER reaches the handlers (401 without token, 403 for other roles)
    - POST twice for one store leaves a single row holding the second value
    - PATCH/DELETE on a missing rating → 404, nothing created
    - rating outside 1..5 or not an integer → 400
"""

import pytest
from sqlalchemy import func, select

from store_ratings.core.domain_types import Role
from store_ratings.models.rating import Rating

PASSWORD = "Abcdefg1!"


@pytest.fixture
async def customer(make_user, auth_header):
    user_id = await make_user(Role.USER)
    return user_id, auth_header(user_id, Role.USER)


async def test_signup_login_rate_twice(client, make_store, test_db):
    """End to end: one account, two submits, one ledger row."""
    store_id = await make_store()
    signup = await client.post("/api/auth/signup", json={
        "name": "Rating Enthusiast Number One",
        "email": "rater@example.com",
        "password": PASSWORD,
    })
    assert signup.status_code == 201
    login = await client.post(
        "/api/auth/login", json={"email": "rater@example.com", "password": PASSWORD},
    )
    headers = {"Authorization": f"Bearer {login.json()['token']}"}

    first = await client.post(
        "/api/user/ratings", json={"store_id": store_id, "rating": 3}, headers=headers,
    )
    second = await client.post(
        "/api/user/ratings", json={"store_id": store_id, "rating": 5}, headers=headers,
    )
    assert first.status_code == second.status_code == 200
    assert first.json()["ratingId"] == second.json()["ratingId"]

    result = await test_db.execute(
        select(Rating.value).where(Rating.store_id == store_id),
    )
    assert result.scalars().all() == [5]


async def test_submit_unknown_store_404(client, customer):
    _, headers = customer
    res = await client.post(
        "/api/user/ratings", json={"store_id": 999, "rating": 3}, headers=headers,
    )
    assert res.status_code == 404


@pytest.mark.parametrize("rating", [0, 6, 3.5, "3", True, None])
async def test_submit_invalid_rating_400(client, customer, make_store, rating):
    _, headers = customer
    store_id = await make_store()
    res = await client.post(
        "/api/user/ratings", json={"store_id": store_id, "rating": rating},
        headers=headers,
    )
    assert res.status_code == 400


async def test_submit_requires_token(client, make_store):
    store_id = await make_store()
    res = await client.post("/api/user/ratings", json={"store_id": store_id, "rating": 3})
    assert res.status_code == 401


@pytest.mark.parametrize("role", [Role.ADMIN, Role.OWNER])
async def test_submit_forbidden_for_other_roles(
    client, make_user, make_store, auth_header, test_db, role,
):
    user_id = await make_user(role)
    store_id = await make_store()
    res = await client.post(
        "/api/user/ratings", json={"store_id": store_id, "rating": 3},
        headers=auth_header(user_id, role),
    )
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "FORBIDDEN"
    assert await test_db.scalar(select(func.count(Rating.id))) == 0


async def test_update_existing_rating(client, customer, make_store, test_db):
    user_id, headers = customer
    store_id = await make_store()
    await client.post(
        "/api/user/ratings", json={"store_id": store_id, "rating": 2}, headers=headers,
    )
    res = await client.patch(
        f"/api/user/ratings/{store_id}", json={"rating": 4}, headers=headers,
    )
    assert res.status_code == 200
    value = await test_db.scalar(
        select(Rating.value)
        .where(Rating.user_id == user_id)
        .where(Rating.store_id == store_id),
    )
    assert value == 4


async def test_update_missing_rating_404(client, customer, make_store, test_db):
    _, headers = customer
    store_id = await make_store()
    res = await client.patch(
        f"/api/user/ratings/{store_id}", json={"rating": 4}, headers=headers,
    )
    assert res.status_code == 404
    assert await test_db.scalar(select(func.count(Rating.id))) == 0


async def test_update_out_of_range_400(client, customer, make_store):
    _, headers = customer
    store_id = await make_store()
    await client.post(
        "/api/user/ratings", json={"store_id": store_id, "rating": 2}, headers=headers,
    )
    res = await client.patch(
        f"/api/user/ratings/{store_id}", json={"rating": 7}, headers=headers,
    )
    assert res.status_code == 400


async def test_delete_rating(client, customer, make_store, test_db):
    _, headers = customer
    store_id = await make_store()
    await client.post(
        "/api/user/ratings", json={"store_id": store_id, "rating": 2}, headers=headers,
    )
    res = await client.delete(f"/api/user/ratings/{store_id}", headers=headers)
    assert res.status_code == 200
    again = await client.delete(f"/api/user/ratings/{store_id}", headers=headers)
    assert again.status_code == 404
    assert await test_db.scalar(select(func.count(Rating.id))) == 0


async def test_store_listing(client, customer, make_store):
    _, headers = customer
    rated = await make_store()
    await make_store()
    await client.post(
        "/api/user/ratings", json={"store_id": rated, "rating": 4}, headers=headers,
    )
    res = await client.get("/api/user/stores", headers=headers)
    assert res.status_code == 200
    listing = {s["id"]: s for s in res.json()}
    assert len(listing) == 2
    assert listing[rated]["userRating"] == 4
    assert listing[rated]["avgRating"] == 4.0


async def test_store_listing_filter(client, customer, make_store):
    _, headers = customer
    await make_store()
    await make_store()
    res = await client.get(
        "/api/user/stores", params={"name": "number 002"}, headers=headers,
    )
    assert [s["name"] for s in res.json()] == ["Neighbourhood Test Store Number 002"]
