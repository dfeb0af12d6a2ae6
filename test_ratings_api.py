"""
Rating submission (upsert), rating listings and end-to-end flows
"""

import pytest

from conftest import count_rows
from storerate.db import SessionLocal
from storerate.models import Rating
from storerate.schemas import RatingCreate
from storerate.services import rating_service
from storerate.services.rating_service import RatingService
from storerate.services.store_service import StoreService


def submit(client, headers, store_id, value):
    return client.post("/api/ratings", json={"storeId": store_id, "rating": value}, headers=headers)


def test_first_submission_creates_rating(client, regular_user, owner, create_store, auth_headers):
    store = create_store(owner)

    response = submit(client, auth_headers(regular_user), store.id, 4)

    assert response.status_code == 201
    body = response.json()
    assert body["storeId"] == store.id
    assert body["userId"] == regular_user.id
    assert body["rating"] == 4
    assert count_rows(Rating) == 1


def test_resubmission_overwrites_single_row(client, regular_user, owner, create_store, auth_headers):
    store = create_store(owner)
    headers = auth_headers(regular_user)

    first = submit(client, headers, store.id, 2)
    second = submit(client, headers, store.id, 5)

    assert first.status_code == 201
    assert second.status_code == 200
    assert second.json()["id"] == first.json()["id"]
    assert second.json()["rating"] == 5
    assert count_rows(Rating) == 1

    with SessionLocal() as session:
        assert StoreService.get_store_aggregate(session, store.id).average_rating == 5


def test_same_submission_twice_is_idempotent(client, regular_user, owner, create_store, auth_headers):
    store = create_store(owner)
    headers = auth_headers(regular_user)

    submit(client, headers, store.id, 3)
    once = client.get(f"/api/stores/{store.id}/stats", headers=auth_headers(owner)).json()
    submit(client, headers, store.id, 3)
    twice = client.get(f"/api/stores/{store.id}/stats", headers=auth_headers(owner)).json()

    assert count_rows(Rating) == 1
    assert (once["averageRating"], once["totalRatings"]) == (twice["averageRating"], twice["totalRatings"]) == (3, 1)


def test_ratings_are_per_store(client, regular_user, owner, create_store, auth_headers):
    first = create_store(owner, name="First")
    second = create_store(owner, name="Second")
    headers = auth_headers(regular_user)

    submit(client, headers, first.id, 1)
    submit(client, headers, second.id, 5)

    assert count_rows(Rating) == 2


def test_rating_value_out_of_range(client, regular_user, owner, create_store, auth_headers):
    store = create_store(owner)
    headers = auth_headers(regular_user)

    for value in (0, 6, 3.5):
        response = submit(client, headers, store.id, value)
        assert response.status_code == 400
        assert "rating" in response.json()["details"]
    assert count_rows(Rating) == 0


def test_rating_requires_store_id(client, regular_user, auth_headers):
    response = client.post("/api/ratings", json={"rating": 3}, headers=auth_headers(regular_user))
    assert response.status_code == 400
    assert "storeId" in response.json()["details"]


def test_rating_unknown_store(client, regular_user, auth_headers):
    response = submit(client, auth_headers(regular_user), "missing-store", 3)
    assert response.status_code == 404
    assert count_rows(Rating) == 0


def test_rating_requires_session(client, owner, create_store):
    store = create_store(owner)
    assert submit(client, {}, store.id, 3).status_code == 401
    assert count_rows(Rating) == 0


def test_rating_user_comes_from_session(client, create_user, owner, create_store, auth_headers):
    store = create_store(owner)
    author = create_user()
    someone_else = create_user()

    response = client.post(
        "/api/ratings",
        json={"storeId": store.id, "rating": 4, "userId": someone_else.id},
        headers=auth_headers(author),
    )

    assert response.json()["userId"] == author.id


def test_store_ratings_listing(client, create_user, owner, create_store, auth_headers):
    store = create_store(owner)
    author = create_user()
    submit(client, auth_headers(author), store.id, 4)

    response = client.get(f"/api/ratings/store/{store.id}", headers=auth_headers(create_user()))

    assert response.status_code == 200
    [rating] = response.json()
    assert rating["rating"] == 4
    assert rating["user"]["id"] == author.id
    assert "passwordHash" not in rating["user"]


def test_store_ratings_listing_unknown_store(client, regular_user, auth_headers):
    response = client.get("/api/ratings/store/missing-store", headers=auth_headers(regular_user))
    assert response.status_code == 404


def test_service_upsert_keeps_one_row(db, regular_user, owner, create_store):
    store = create_store(owner)

    rating, created = RatingService.submit_rating(
        db, RatingCreate(user_id=regular_user.id, store_id=store.id, rating=1)
    )
    assert created is True
    updated, created_again = RatingService.submit_rating(
        db, RatingCreate(user_id=regular_user.id, store_id=store.id, rating=4)
    )

    assert created_again is False
    assert updated.id == rating.id
    assert updated.rating == 4
    assert len(RatingService.list_store_ratings(db, store.id)) == 1


# ============================================================================
# End-to-end flows
# ============================================================================


def test_register_login_rate_and_list_own_ratings(client, owner, create_store):
    store = create_store(owner, name="Tech Store")
    registration = {
        "name": "Andrea Josephine Baxter",
        "email": "andrea@example.com",
        "password": "Andrea#Pw1",
        "address": "7 Elm Street",
    }

    assert client.post("/api/auth/register", json=registration).status_code == 201
    assert client.post("/api/auth/logout").status_code == 200
    login = client.post("/api/auth/login", json={"email": "andrea@example.com", "password": "Andrea#Pw1"})
    assert login.status_code == 200

    assert client.post("/api/ratings", json={"storeId": store.id, "rating": 5}).status_code == 201

    response = client.get("/api/ratings/user")
    assert response.status_code == 200
    [entry] = response.json()
    assert entry["storeId"] == store.id
    assert entry["rating"] == 5
    assert entry["store"]["name"] == "Tech Store"


def test_admin_creates_store_and_owner_reads_stats(client, admin, auth_headers):
    admin_headers = auth_headers(admin)
    created_owner = client.post(
        "/api/users",
        json={
            "name": "Olivia Ownership Whitfield",
            "email": "olivia@example.com",
            "password": "Olivia#Pw1",
            "address": "9 Market Square",
            "role": "store_owner",
        },
        headers=admin_headers,
    )
    assert created_owner.status_code == 201
    owner_id = created_owner.json()["id"]

    created_store = client.post(
        "/api/stores",
        json={"name": "Olivia's Deli", "email": "deli@example.com", "address": "9 Market Square", "ownerId": owner_id},
        headers=admin_headers,
    )
    assert created_store.status_code == 201
    store_id = created_store.json()["id"]

    login = client.post("/api/auth/login", json={"email": "olivia@example.com", "password": "Olivia#Pw1"})
    assert login.status_code == 200

    stats = client.get(f"/api/stores/{store_id}/stats")
    assert stats.status_code == 200
    assert stats.json()["averageRating"] == 0
    assert stats.json()["totalRatings"] == 0


# ============================================================================
# Upsert on engines without ON CONFLICT
# ============================================================================


def test_fallback_upsert_creates_then_updates(db, regular_user, owner, create_store, monkeypatch):
    monkeypatch.setattr(rating_service, "UPSERT_INSERTS", {})
    store = create_store(owner)

    rating, created = RatingService.submit_rating(
        db, RatingCreate(user_id=regular_user.id, store_id=store.id, rating=2)
    )
    updated, created_again = RatingService.submit_rating(
        db, RatingCreate(user_id=regular_user.id, store_id=store.id, rating=5)
    )

    assert (created, created_again) == (True, False)
    assert updated.id == rating.id
    assert updated.rating == 5
    assert count_rows(Rating) == 1


def test_fallback_upsert_recovers_from_concurrent_insert(db, regular_user, owner, create_store, monkeypatch):
    store = create_store(owner)
    lookup = RatingService.get_user_rating
    calls = []

    def racing_lookup(session, user_id, store_id):
        calls.append(store_id)
        if len(calls) == 1:
            # Another request inserts the same (user, store) between lookup and commit
            session.add(Rating(user_id=user_id, store_id=store_id, rating=1))
            session.commit()
            return None
        return lookup(session, user_id, store_id)

    monkeypatch.setattr(RatingService, "get_user_rating", staticmethod(racing_lookup))

    RatingService._lookup_then_write(db, RatingCreate(user_id=regular_user.id, store_id=store.id, rating=4))

    assert len(calls) == 2
    assert count_rows(Rating) == 1
    with SessionLocal() as session:
        [row] = session.query(Rating).all()
        assert row.rating == 4


def test_fallback_upsert_gives_up_when_row_never_visible(db, regular_user, owner, create_store, monkeypatch):
    store = create_store(owner)
    db.add(Rating(user_id=regular_user.id, store_id=store.id, rating=3))
    db.commit()
    monkeypatch.setattr(RatingService, "get_user_rating", staticmethod(lambda session, user_id, store_id: None))

    with pytest.raises(RuntimeError):
        RatingService._lookup_then_write(db, RatingCreate(user_id=regular_user.id, store_id=store.id, rating=5))

    with SessionLocal() as session:
        [row] = session.query(Rating).all()
        assert row.rating == 3
