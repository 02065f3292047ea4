"""
Tests for like toggling on public photos and client gallery photos.
"""
import pytest
from app.models.photo import Photo
from app.models.gallery import ClientGallery, GalleryPhoto
from app.models.like import LikeRecord, GalleryLikeRecord
from app.services import like_ledger, gallery_store
from app.services.like_service import toggle_photo_like, toggle_gallery_photo_like, VisitorIdentifier
from app.core.exceptions import NotFoundError, LikeConflictError


def from_ip(address: str) -> dict:
    return {"X-Forwarded-For": address}


@pytest.fixture
def photo(db):
    photo = Photo(id=7, title="Sunset", image_url="http://img/7.jpg", likes=10)
    db.add(photo)
    db.commit()
    return photo


@pytest.fixture
def gallery(db):
    gallery = ClientGallery(client_name="Smith wedding", token="abc")
    db.add(gallery)
    db.flush()
    db.add(GalleryPhoto(id=3, gallery_id=gallery.id, title="First dance", image_url="http://img/g3.jpg", likes=0))
    db.commit()
    return gallery


def photo_likes(db, photo_id: int) -> int:
    db.expire_all()
    return db.query(Photo).filter(Photo.id == photo_id).one().likes


def gallery_photo_likes(db, photo_id: int) -> int:
    db.expire_all()
    return db.query(GalleryPhoto).filter(GalleryPhoto.id == photo_id).one().likes


# Public photo path

def test_toggle_photo_like_and_unlike(client, photo):
    response = client.patch("/api/photos/7/like", headers=from_ip("1.2.3.4"))
    assert response.status_code == 200
    assert response.json() == {"likes": 11, "isLiked": True, "photoId": 7}

    response = client.patch("/api/photos/7/like", headers=from_ip("1.2.3.4"))
    assert response.status_code == 200
    assert response.json() == {"likes": 10, "isLiked": False, "photoId": 7}


def test_toggle_photo_like_counts_visitors_independently(client, db, photo):
    client.patch("/api/photos/7/like", headers=from_ip("1.1.1.1"))
    response = client.patch("/api/photos/7/like", headers=from_ip("2.2.2.2"))

    assert response.json()["likes"] == 12
    assert response.json()["isLiked"] is True
    assert db.query(LikeRecord).filter(LikeRecord.photo_id == 7).count() == 2


def test_toggle_missing_photo_is_404(client, db):
    response = client.patch("/api/photos/404/like", headers=from_ip("1.2.3.4"))
    assert response.status_code == 404
    assert response.json()["detail"] == "Photo not found"
    assert db.query(LikeRecord).count() == 0


def test_toggle_involution_restores_state(db, photo):
    visitor = VisitorIdentifier("5.5.5.5")
    first = toggle_photo_like(7, visitor, db)
    second = toggle_photo_like(7, visitor, db)

    assert first.is_liked is True
    assert second.is_liked is False
    assert second.likes == 10
    assert like_ledger.find_photo_like(7, visitor, db) is None


@pytest.mark.parametrize("toggles", [1, 2, 3, 4, 5])
def test_repeated_toggles_follow_parity(db, photo, toggles):
    visitor = VisitorIdentifier("6.6.6.6")
    for _ in range(toggles):
        result = toggle_photo_like(7, visitor, db)

    records = like_ledger.count_photo_likes(7, db)
    assert records == toggles % 2
    assert result.is_liked is bool(toggles % 2)
    assert photo_likes(db, 7) == 10 + toggles % 2


def test_counter_never_goes_negative(client, db):
    # Counter drifted to zero while a ledger row still exists
    db.add(Photo(id=9, title="Drifted", image_url="http://img/9.jpg", likes=0))
    db.add(LikeRecord(photo_id=9, visitor_id="1.2.3.4"))
    db.commit()

    response = client.patch("/api/photos/9/like", headers=from_ip("1.2.3.4"))
    assert response.status_code == 200
    assert response.json() == {"likes": 0, "isLiked": False, "photoId": 9}
    assert photo_likes(db, 9) == 0


def test_ledger_rejects_duplicate_pair(db, photo):
    like_ledger.add_photo_like(7, "1.2.3.4", db)
    db.commit()

    with pytest.raises(LikeConflictError):
        like_ledger.add_photo_like(7, "1.2.3.4", db)
    assert db.query(LikeRecord).count() == 1


def test_lost_like_race_applies_no_counter_change(db, photo, monkeypatch):
    # Another request inserted the like between our lookup and our insert
    like_ledger.add_photo_like(7, "1.2.3.4", db)
    db.commit()
    monkeypatch.setattr(like_ledger, "find_photo_like", lambda *args, **kwargs: None)

    with pytest.raises(LikeConflictError):
        toggle_photo_like(7, VisitorIdentifier("1.2.3.4"), db)

    assert db.query(LikeRecord).count() == 1
    assert photo_likes(db, 7) == 10


def test_lost_unlike_race_applies_no_counter_change(db, photo, monkeypatch):
    # Lookup saw a like that a concurrent unlike already removed
    monkeypatch.setattr(like_ledger, "find_photo_like", lambda *args, **kwargs: object())

    with pytest.raises(LikeConflictError):
        toggle_photo_like(7, VisitorIdentifier("1.2.3.4"), db)

    assert photo_likes(db, 7) == 10


def test_like_conflict_surfaces_as_409(client, db, photo, monkeypatch):
    like_ledger.add_photo_like(7, "1.2.3.4", db)
    db.commit()
    monkeypatch.setattr(like_ledger, "find_photo_like", lambda *args, **kwargs: None)

    response = client.patch("/api/photos/7/like", headers=from_ip("1.2.3.4"))
    assert response.status_code == 409


# Client gallery path

def test_gallery_like_counts_each_visitor(client, gallery):
    response = client.patch("/api/galleries/abc/photos/3/like", headers=from_ip("9.9.9.9"))
    assert response.status_code == 200
    assert response.json() == {"likes": 1, "isLiked": True, "photoId": 3}

    response = client.patch("/api/galleries/abc/photos/3/like", headers=from_ip("1.1.1.1"))
    assert response.json() == {"likes": 2, "isLiked": True, "photoId": 3}

    response = client.patch("/api/galleries/abc/photos/3/like", headers=from_ip("9.9.9.9"))
    assert response.json() == {"likes": 1, "isLiked": False, "photoId": 3}


def test_gallery_like_unknown_gallery(client, db):
    response = client.patch("/api/galleries/nope/photos/3/like", headers=from_ip("9.9.9.9"))
    assert response.status_code == 404
    assert response.json()["detail"] == "Gallery not found"


def test_gallery_like_photo_not_in_gallery(client, db, gallery):
    response = client.patch("/api/galleries/abc/photos/999/like", headers=from_ip("9.9.9.9"))
    assert response.status_code == 404
    assert response.json()["detail"] == "Photo not found in this gallery"
    assert db.query(GalleryLikeRecord).count() == 0


def test_gallery_like_rejects_photo_from_other_gallery(client, db, gallery):
    other = ClientGallery(client_name="Other", token="other")
    db.add(other)
    db.flush()
    db.add(GalleryPhoto(id=50, gallery_id=other.id, title="x", image_url="http://img/50.jpg"))
    db.commit()

    response = client.patch("/api/galleries/abc/photos/50/like", headers=from_ip("9.9.9.9"))
    assert response.status_code == 404
    assert gallery_photo_likes(db, 50) == 0


def test_gallery_likes_are_isolated(client, db, gallery):
    # Same imported photo id in two galleries plus a public photo with the same number
    other = ClientGallery(client_name="Other", token="def")
    db.add(other)
    db.flush()
    db.add(GalleryPhoto(id=20, gallery_id=gallery.id, legacy_id="555", title="a", image_url="http://img/a.jpg"))
    db.add(GalleryPhoto(id=21, gallery_id=other.id, legacy_id="555", title="a", image_url="http://img/a.jpg"))
    db.add(Photo(id=3, title="Public", image_url="http://img/p3.jpg", likes=4))
    db.commit()

    client.patch("/api/galleries/abc/photos/555/like", headers=from_ip("9.9.9.9"))
    client.patch("/api/galleries/abc/photos/3/like", headers=from_ip("9.9.9.9"))

    assert gallery_photo_likes(db, 20) == 1
    assert gallery_photo_likes(db, 21) == 0
    assert gallery_photo_likes(db, 3) == 1
    assert photo_likes(db, 3) == 4


def test_gallery_like_matches_legacy_string_id(client, db, gallery):
    db.add(GalleryPhoto(
        id=11, gallery_id=gallery.id, legacy_id="1712345678901",
        title="Imported", image_url="http://img/old.jpg", likes=2
    ))
    db.commit()

    response = client.patch("/api/galleries/abc/photos/1712345678901/like", headers=from_ip("9.9.9.9"))
    assert response.status_code == 200
    assert response.json() == {"likes": 3, "isLiked": True, "photoId": 1712345678901}
    assert gallery_photo_likes(db, 11) == 3


def test_gallery_like_is_one_toggle_across_id_forms(client, db, gallery):
    db.add(GalleryPhoto(
        id=11, gallery_id=gallery.id, legacy_id="1712345678901",
        title="Imported", image_url="http://img/old.jpg", likes=0
    ))
    db.commit()

    first = client.patch("/api/galleries/abc/photos/11/like", headers=from_ip("9.9.9.9"))
    assert first.json() == {"likes": 1, "isLiked": True, "photoId": 11}

    second = client.patch("/api/galleries/abc/photos/1712345678901/like", headers=from_ip("9.9.9.9"))
    assert second.status_code == 200
    assert second.json() == {"likes": 0, "isLiked": False, "photoId": 1712345678901}

    assert gallery_photo_likes(db, 11) == 0
    assert db.query(GalleryLikeRecord).count() == 0


def test_gallery_like_ledger_uses_canonical_id(client, db, gallery):
    db.add(GalleryPhoto(
        id=11, gallery_id=gallery.id, legacy_id="1712345678901",
        title="Imported", image_url="http://img/old.jpg", likes=0
    ))
    db.commit()

    client.patch("/api/galleries/abc/photos/1712345678901/like", headers=from_ip("9.9.9.9"))

    assert like_ledger.count_gallery_likes("abc", 11, db) == 1
    assert like_ledger.count_gallery_likes("abc", 1712345678901, db) == 0


def test_gallery_like_positional_update_failure_rolls_back(client, db, gallery, monkeypatch):
    monkeypatch.setattr(gallery_store, "adjust_photo_likes", lambda *args, **kwargs: None)

    response = client.patch("/api/galleries/abc/photos/3/like", headers=from_ip("9.9.9.9"))
    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to update photo likes"
    assert db.query(GalleryLikeRecord).count() == 0


def test_gallery_toggle_only_touches_one_photo(db, gallery):
    db.add(GalleryPhoto(id=4, gallery_id=gallery.id, title="Cake", image_url="http://img/g4.jpg", likes=5))
    db.commit()

    toggle_gallery_photo_like("abc", 3, VisitorIdentifier("1.1.1.1"), db)
    toggle_gallery_photo_like("abc", 4, VisitorIdentifier("1.1.1.1"), db)
    toggle_gallery_photo_like("abc", 3, VisitorIdentifier("2.2.2.2"), db)

    assert gallery_photo_likes(db, 3) == 2
    assert gallery_photo_likes(db, 4) == 6
    assert like_ledger.count_gallery_likes("abc", 3, db) == 2
    assert like_ledger.count_gallery_likes("abc", 4, db) == 1


def test_gallery_toggle_service_errors(db, gallery):
    with pytest.raises(NotFoundError):
        toggle_gallery_photo_like("missing", 3, VisitorIdentifier("1.1.1.1"), db)
    with pytest.raises(NotFoundError):
        toggle_gallery_photo_like("abc", 12345, VisitorIdentifier("1.1.1.1"), db)
