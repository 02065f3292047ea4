"""
Tests for the like rate limiter.
"""
from datetime import datetime, timedelta
from app.core.config import settings
from app.core.utils import utcnow
from app.models.photo import Photo
from app.models.like import LikeRecord
from app.models.gallery import ClientGallery, GalleryPhoto


def seed_photo(db, likes=0):
    db.add(Photo(id=1, title="Busy", image_url="http://img/1.jpg", likes=likes))
    db.commit()


def test_51st_like_request_is_rejected_without_mutation(client, db):
    seed_photo(db, likes=3)
    headers = {"X-Forwarded-For": "8.8.8.8"}

    for _ in range(49):
        assert client.patch("/api/photos/1/like", headers=headers).status_code == 200
    fiftieth = client.patch("/api/photos/1/like", headers=headers)
    assert fiftieth.status_code == 200
    assert fiftieth.json() == {"likes": 3, "isLiked": False, "photoId": 1}

    response = client.patch("/api/photos/1/like", headers=headers)
    assert response.status_code == 429
    assert "Retry-After" in response.headers

    db.expire_all()
    assert db.query(Photo).filter(Photo.id == 1).one().likes == 3
    assert db.query(LikeRecord).count() == 0


def test_retry_after_is_window_reset(client, db):
    seed_photo(db)
    headers = {"X-Forwarded-For": "8.8.8.8"}
    before = utcnow()

    for _ in range(50):
        client.patch("/api/photos/1/like", headers=headers)
    response = client.patch("/api/photos/1/like", headers=headers)

    assert response.status_code == 429
    body = response.json()
    assert body["detail"] == "Too many like requests, please try again later."
    retry_after = datetime.fromisoformat(body["retryAfter"].rstrip("Z"))
    assert before < retry_after <= utcnow() + timedelta(hours=1, seconds=1)
    assert 0 < int(response.headers["Retry-After"]) <= 3600


def test_rate_limit_is_per_address_behind_trusted_proxy(client, db):
    seed_photo(db)

    for _ in range(50):
        client.patch("/api/photos/1/like", headers={"X-Forwarded-For": "8.8.8.8"})
    assert client.patch("/api/photos/1/like", headers={"X-Forwarded-For": "8.8.8.8"}).status_code == 429

    response = client.patch("/api/photos/1/like", headers={"X-Forwarded-For": "4.4.4.4, 10.0.0.1"})
    assert response.status_code == 200
    assert response.json()["isLiked"] is True


def test_forwarded_header_ignored_without_trusted_proxy(client, db, monkeypatch):
    monkeypatch.setattr(settings, "TRUST_FORWARDED_FOR", False)
    seed_photo(db)

    statuses = [
        client.patch("/api/photos/1/like", headers={"X-Forwarded-For": f"10.0.0.{i}"}).status_code
        for i in range(60)
    ]

    assert statuses.count(200) == 50
    assert statuses.count(429) == 10
    # Every request came from one socket, so they were one visitor toggling
    db.expire_all()
    assert db.query(LikeRecord).count() == 0
    assert db.query(Photo).filter(Photo.id == 1).one().likes == 0


def test_default_does_not_trust_forwarded_header():
    assert type(settings).model_fields["TRUST_FORWARDED_FOR"].default is False


def test_like_routes_share_one_window(client, db):
    seed_photo(db)
    gallery = ClientGallery(client_name="Open", token="open")
    db.add(gallery)
    db.flush()
    db.add(GalleryPhoto(id=5, gallery_id=gallery.id, title="g", image_url="http://img/g.jpg"))
    db.commit()
    headers = {"X-Forwarded-For": "8.8.8.8"}

    for _ in range(25):
        assert client.patch("/api/photos/1/like", headers=headers).status_code == 200
        assert client.patch("/api/galleries/open/photos/5/like", headers=headers).status_code == 200

    assert client.patch("/api/galleries/open/photos/5/like", headers=headers).status_code == 429
    assert client.patch("/api/photos/1/like", headers=headers).status_code == 429


def test_gallery_fetch_is_not_rate_limited(client, db):
    db.add(ClientGallery(client_name="Open", token="open"))
    db.commit()

    for _ in range(60):
        assert client.get("/api/galleries/open", headers={"X-Forwarded-For": "8.8.8.8"}).status_code == 200
