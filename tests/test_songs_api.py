"""HTTP tests for the public and admin song routes."""


def test_create_song_derives_slug(client):
    response = client.post("/api/admin/songs", json={"title": "Test Song", "lyrics": "la la"})

    assert response.status_code == 201
    assert response.json() == {"success": True, "id": 1, "slug": "test-song"}
    assert response.headers["cache-control"] == "no-store"


def test_duplicate_slug_is_a_conflict(client, create_song):
    create_song("Test Song")

    response = client.post("/api/admin/songs", json={"title": "Test Song", "lyrics": "again"})

    assert response.status_code == 409
    assert response.json() == {"error": "A song with this slug already exists"}


def test_explicit_slug_is_normalized(client):
    response = client.post(
        "/api/admin/songs",
        json={"title": "Whatever", "lyrics": "x", "slug": "My Custom Slug!"},
    )

    assert response.json()["slug"] == "my-custom-slug"


def test_missing_required_fields_are_named(client):
    response = client.post("/api/admin/songs", json={"category": "Love"})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required field(s): title, lyrics"}


def test_blank_required_field_counts_as_missing(client):
    response = client.post("/api/admin/songs", json={"title": "   ", "lyrics": "x"})

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required field(s): title"}


def test_malformed_json_body(client):
    response = client.post(
        "/api/admin/songs",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Malformed JSON body"}


def test_unknown_fields_are_rejected(client):
    response = client.post("/api/admin/songs", json={"title": "A", "lyrics": "B", "views": 10})

    assert response.status_code == 400
    assert response.json() == {"error": "Unknown field(s): views"}


def test_symbol_only_title_needs_explicit_slug(client):
    response = client.post("/api/admin/songs", json={"title": "!!!", "lyrics": "x"})

    assert response.status_code == 400
    assert response.json() == {"error": "Could not derive a slug; provide one explicitly"}


def test_unknown_artist_reference_is_rejected(client):
    response = client.post("/api/admin/songs", json={"title": "A", "lyrics": "B", "artist_id": 42})

    assert response.status_code == 400
    assert response.json() == {"error": "Unknown artist_id"}


def test_song_detail_and_cache_header(client, create_song, create_artist):
    artist = create_artist("Mara Artist")
    create_song("Mara Hlasak", lyrics="Line 1\nLine 2", artist_id=artist["id"], category="Traditional")

    response = client.get("/api/song/mara-hlasak")

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Mara Hlasak"
    assert body["lyrics"] == "Line 1\nLine 2"
    assert body["artist_name"] == "Mara Artist"
    assert body["artist_slug"] == "mara-artist"
    assert response.headers["cache-control"] == "public, max-age=300"
    assert response.headers["content-type"] == "application/json; charset=utf-8"
    assert response.headers["access-control-allow-origin"] == "*"


def test_unknown_song_is_404(client):
    response = client.get("/api/song/nonexistent")

    assert response.status_code == 404
    assert response.json() == {"error": "Song not found"}
    assert response.headers["cache-control"] == "no-store"


def test_empty_slug_is_400(client):
    response = client.get("/api/song/")

    assert response.status_code == 400
    assert response.json() == {"error": "Slug is required"}


def test_list_songs_paginates(client, create_song):
    create_song("One")
    create_song("Two")

    response = client.get("/api/songs?page=2&limit=1")

    body = response.json()
    assert response.status_code == 200
    assert body["total"] == 2
    assert body["page"] == 2
    assert body["totalPages"] == 2
    assert len(body["songs"]) == 1
    assert response.headers["cache-control"] == "public, max-age=60"


def test_page_past_the_end_is_empty(client, create_song):
    create_song("Only")

    body = client.get("/api/songs?page=9&limit=1").json()

    assert body["songs"] == []
    assert body["totalPages"] == 1


def test_out_of_range_page_params_are_clamped(client, create_song):
    create_song("Only")

    body = client.get("/api/songs?page=-4&limit=1000").json()

    assert body["page"] == 1
    assert len(body["songs"]) == 1


def test_page_number_beyond_any_offset_is_an_empty_page(client, create_song):
    create_song("Only")

    response = client.get("/api/songs", params={"page": "99999999999999999999"})

    assert response.status_code == 200
    body = response.json()
    assert body["songs"] == []
    assert body["total"] == 1
    assert body["page"] > 1


def test_list_filters_by_category(client, create_song):
    create_song("Hymn", category="Gospel")
    create_song("Ballad", category="Love")

    body = client.get("/api/songs", params={"category": "Gospel"}).json()

    assert [song["slug"] for song in body["songs"]] == ["hymn"]


def test_search_sanitizes_query(client, create_song):
    create_song("Script Kiddie")

    response = client.get("/api/search", params={"q": "<script>"})

    assert response.status_code == 200
    body = response.json()
    assert body["query"] == "script"
    assert body["count"] == 1
    assert body["results"][0]["slug"] == "script-kiddie"


def test_search_requires_a_query(client):
    for params in ({}, {"q": "   "}, {"q": "<>;"}):
        response = client.get("/api/search", params=params)
        assert response.status_code == 400
        assert response.json() == {"error": "Search query is required"}


def test_categories_are_distinct_and_sorted(client, create_song):
    create_song("A", category="Traditional")
    create_song("B", category="Gospel")
    create_song("C", category="Traditional")
    create_song("D")

    response = client.get("/api/categories")

    assert response.json() == {"categories": ["Gospel", "Traditional"]}
    assert response.headers["cache-control"] == "public, max-age=600"


def test_view_counts_once_per_client(client, create_song):
    create_song("Test Song")
    headers = {"CF-Connecting-IP": "203.0.113.7"}

    first = client.post("/api/view/test-song", headers=headers)
    second = client.post("/api/view/test-song", headers=headers)
    other = client.post("/api/view/test-song", headers={"CF-Connecting-IP": "198.51.100.1"})

    assert first.status_code == 200
    assert first.json() == {"success": True, "slug": "test-song"}
    assert second.status_code == 429
    assert second.json() == {"error": "View already counted recently"}
    assert other.status_code == 200
    assert client.get("/api/song/test-song").json()["views"] == 2


def test_view_of_unknown_song_is_404(client):
    response = client.post("/api/view/missing", headers={"CF-Connecting-IP": "203.0.113.7"})

    assert response.status_code == 404


def test_popular_orders_by_views(client, create_song):
    create_song("Quiet")
    create_song("Loud")
    client.post("/api/view/loud", headers={"CF-Connecting-IP": "1.1.1.1"})
    client.post("/api/view/loud", headers={"CF-Connecting-IP": "2.2.2.2"})

    body = client.get("/api/popular?limit=1").json()

    assert [song["slug"] for song in body["songs"]] == ["loud"]


def test_update_keeping_own_slug_is_not_a_conflict(client, create_song):
    created = create_song("Test Song")

    response = client.put(
        f"/api/admin/song/{created['id']}",
        json={"title": "Test Song", "lyrics": "revised"},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True, "id": created["id"], "slug": "test-song"}
    assert client.get("/api/song/test-song").json()["lyrics"] == "revised"


def test_update_onto_another_slug_is_a_conflict(client, create_song):
    create_song("First")
    second = create_song("Second")

    response = client.put(f"/api/admin/song/{second['id']}", json={"title": "First", "lyrics": "x"})

    assert response.status_code == 409
    assert response.json() == {"error": "A different song with this slug already exists"}


def test_update_missing_song_is_404(client):
    response = client.put("/api/admin/song/999", json={"title": "A", "lyrics": "B"})

    assert response.status_code == 404


def test_delete_song(client, create_song):
    created = create_song("Doomed")

    first = client.delete(f"/api/admin/song/{created['id']}")
    second = client.delete(f"/api/admin/song/{created['id']}")

    assert first.json() == {"success": True}
    assert second.status_code == 404


def test_admin_reads_are_not_cached(client, create_song):
    created = create_song("Private")

    listing = client.get("/api/admin/songs")
    detail = client.get(f"/api/admin/song/{created['id']}")

    assert listing.headers["cache-control"] == "no-store"
    assert detail.headers["cache-control"] == "no-store"
    assert detail.json()["slug"] == "private"


def test_admin_id_must_be_numeric(client):
    response = client.get("/api/admin/song/abc")

    assert response.status_code == 404
    assert response.json() == {"error": "Not found"}


def test_admin_id_beyond_any_row_is_404(client):
    huge = "99999999999999999999"

    for response in (
        client.get(f"/api/admin/song/{huge}"),
        client.put(f"/api/admin/song/{huge}", json={"title": "T", "lyrics": "L"}),
        client.delete(f"/api/admin/artist/{huge}"),
        client.get(f"/api/admin/report/{huge}"),
        client.delete(f"/api/admin/contact/{huge}"),
        client.get(f"/api/admin/copyright-owner/{huge}"),
    ):
        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}


def test_credit_id_beyond_any_row_is_rejected(client):
    response = client.post(
        "/api/admin/songs",
        json={"title": "Too Far", "lyrics": "L", "artist_id": 99999999999999999999},
    )

    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid value for 'artist_id'")
