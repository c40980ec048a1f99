from datetime import datetime, timedelta

from app.models.video import Video


def _register(client, **fields):
    return client.post("/videos", json=fields)


def test_register_then_fetch_by_encoded_key(client):
    response = _register(client, title="Demo", s3_key="videos/abc.mp4")
    assert response.status_code == 201
    created = response.json()
    assert created["id"]
    assert created["title"] == "Demo"
    assert created["s3_key"] == "videos/abc.mp4"
    assert created["thumbnail_s3_key"] is None
    assert created["description"] is None
    assert created["created_at"] and created["updated_at"]

    fetched = client.get("/videos/videos%2Fabc.mp4")
    assert fetched.status_code == 200
    assert fetched.json() == created


def test_round_trip_keeps_optional_fields(client):
    _register(
        client,
        title="With thumb",
        description="A short clip",
        s3_key="videos/with-thumb.mp4",
        thumbnail_s3_key="thumbnails/with-thumb.png",
    )

    body = client.get("/videos/videos%2Fwith-thumb.mp4").json()
    assert body["description"] == "A short clip"
    assert body["thumbnail_s3_key"] == "thumbnails/with-thumb.png"


def test_plain_key_lookup(client):
    _register(client, title="T", s3_key="k1")

    body = client.get("/videos/k1").json()
    assert body["title"] == "T"
    assert body["s3_key"] == "k1"
    assert body["thumbnail_s3_key"] is None


def test_unknown_key_is_not_found(client):
    response = client.get("/videos/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"detail": "Video not found"}


def test_duplicate_key_is_a_conflict(client):
    assert _register(client, title="First", s3_key="videos/dup.mp4").status_code == 201

    second = _register(client, title="Second", s3_key="videos/dup.mp4")
    assert second.status_code == 409

    videos = client.get("/videos").json()
    matching = [video for video in videos if video["s3_key"] == "videos/dup.mp4"]
    assert len(matching) == 1
    assert matching[0]["title"] == "First"


def test_service_keeps_working_after_conflict(client):
    _register(client, title="First", s3_key="a.mp4")
    _register(client, title="Again", s3_key="a.mp4")

    assert _register(client, title="Other", s3_key="b.mp4").status_code == 201
    assert len(client.get("/videos").json()) == 2


def test_missing_required_fields_are_rejected(client):
    payloads = [
        {"title": None, "s3_key": "k"},
        {"title": "T", "s3_key": None},
        {"s3_key": "k"},
        {"title": "T"},
        {"title": "", "s3_key": "k"},
        {"title": "T", "s3_key": ""},
    ]
    for payload in payloads:
        response = client.post("/videos", json=payload)
        assert response.status_code == 400, payload
        assert response.json() == {"detail": "Title and s3_key are required."}

    assert client.get("/videos").json() == []


def test_empty_body_is_rejected(client):
    response = client.post("/videos")
    assert response.status_code == 400
    assert response.json() == {"detail": "Title and s3_key are required."}


def test_invalid_optional_fields_are_described(client):
    too_long = client.post("/videos", json={"title": "T" * 300, "s3_key": "k"})
    assert too_long.status_code == 400
    assert too_long.json()["detail"].startswith("title:")
    assert "255" in too_long.json()["detail"]

    bad_description = client.post("/videos", json={"title": "T", "s3_key": "k", "description": 123})
    assert bad_description.status_code == 400
    assert bad_description.json()["detail"].startswith("description:")

    mixed = client.post("/videos", json={"s3_key": "k", "description": 123})
    assert mixed.status_code == 400
    assert "description:" in mixed.json()["detail"]
    assert "title:" in mixed.json()["detail"]

    assert client.get("/videos").json() == []


def test_list_is_newest_first(client, database):
    base = datetime(2025, 1, 1, 12, 0, 0)
    with database.session() as db:
        for offset, key in [(1, "middle"), (0, "oldest"), (2, "newest")]:
            stamp = base + timedelta(minutes=offset)
            db.add(Video(title=key, s3_key=key, created_at=stamp, updated_at=stamp))
        db.commit()

    videos = client.get("/videos").json()
    assert [video["s3_key"] for video in videos] == ["newest", "middle", "oldest"]
    stamps = [video["created_at"] for video in videos]
    assert stamps == sorted(stamps, reverse=True)


def test_list_orders_registrations_newest_first(client):
    for key in ("one", "two", "three"):
        _register(client, title=key, s3_key=key)

    assert [video["s3_key"] for video in client.get("/videos").json()] == ["three", "two", "one"]


def test_video_duration_points_at_bucket(client):
    response = client.get("/video-duration/videos%2Fabc.mp4")
    assert response.status_code == 200
    assert response.json() == {
        "duration": None,
        "videoUrl": "https://video-catalog-test.s3.us-east-1.amazonaws.com/videos/abc.mp4",
    }
