"""Plant endpoints: catalog page, detail, CRUD, history and photo upload."""
from conftest import auth_headers, link, make_plant

from scifanor.models import PlantActivityLog


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "healthy"}
    assert resp.headers["X-Content-Type-Options"] == "nosniff"
    assert "X-Request-ID" in resp.headers


def test_empty_catalog_reports_no_data(client):
    data = client.get("/plants").json()
    assert data["total_count"] == 0
    assert data["empty_state"] == "no_data"


def test_catalog_page_search_and_stats(client, db, alice, budi):
    mangga = make_plant(db, alice, "Mangga", "Anacardiaceae")
    make_plant(db, budi, "Manggis", "Clusiaceae")
    make_plant(db, alice, "Jambu", "Myrtaceae")
    link(db, mangga, budi)

    data = client.get("/plants", params={"q": "mang"}).json()
    assert [p["nama_indonesia"] for p in data["visible"]] == ["Mangga", "Manggis"]
    assert (data["visible_count"], data["total_count"]) == (2, 3)
    assert data["contributor_count"] == 2
    assert data["collaboration_count"] == 1
    assert data["families"] == ["Anacardiaceae", "Clusiaceae", "Myrtaceae"]
    assert data["empty_state"] is None


def test_catalog_page_family_and_sort(client, db, alice):
    make_plant(db, alice, "Jambu", "Myrtaceae", minutes=1)
    make_plant(db, alice, "Cengkeh", "Myrtaceae", minutes=2)
    make_plant(db, alice, "Mangga", "Anacardiaceae", minutes=3)

    data = client.get("/plants", params={"family": "Myrtaceae", "sort": "date-new"}).json()
    assert [p["nama_indonesia"] for p in data["visible"]] == ["Cengkeh", "Jambu"]
    assert data["query"] == {"q": "", "family": "Myrtaceae", "sort": "date-new"}

    data = client.get("/plants", params={"q": "kelapa"}).json()
    assert data["empty_state"] == "no_results"


def test_invalid_sort_key_is_rejected(client):
    assert client.get("/plants", params={"sort": "random"}).status_code == 422


def test_create_requires_login(client):
    resp = client.post("/plants", json={"nama_indonesia": "Mangga"})
    assert resp.status_code == 401


def test_create_plant_logs_activity(client, db, alice):
    resp = client.post(
        "/plants",
        json={
            "nama_indonesia": "  Mangga ",
            "class": "Magnoliopsida",
            "images": {"full_plant": "https://media.test/a.jpg"},
            "taxonomy_descriptions": {"genus": "Buah batu", "ordo": " "},
        },
        headers=auth_headers(alice),
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["nama_indonesia"] == "Mangga"
    assert body["class"] == "Magnoliopsida"
    assert body["kingdom"] == "Plantae"
    assert body["created_by"] == alice.id
    assert body["main_image"] == "https://media.test/a.jpg"
    assert body["image_url"] == "https://media.test/a.jpg"
    assert body["taxonomy_descriptions"] == {"genus": "Buah batu"}

    logs = db.query(PlantActivityLog).filter_by(plant_id=body["id"]).all()
    assert [log.action_type for log in logs] == ["create"]


def test_create_rejects_bad_video_link(client, alice):
    resp = client.post(
        "/plants",
        json={"nama_indonesia": "Mangga", "youtube_url": "https://vimeo.com/1"},
        headers=auth_headers(alice),
    )
    assert resp.status_code == 422


def test_plant_detail(client, db, alice, budi):
    plant = make_plant(
        db, alice, "Mangga", "Anacardiaceae",
        images={"leaf": "daun.jpg"},
        image_url="utuh.jpg",
        habitat="Dataran rendah. Tahan kering.",
        youtube_url="https://youtu.be/dQw4w9WgXcQ",
    )
    link(db, plant, budi)

    data = client.get(f"/plants/{plant.id}").json()
    assert data["plant"]["creator"]["full_name"] == "Alice Siregar"
    assert data["plant"]["creator"]["initial"] == "A"
    assert [c["profile"]["full_name"] for c in data["collaborators"]] == ["Budi Santoso"]
    assert [p["part"] for p in data["anatomy"]] == ["full_plant", "leaf"]
    assert data["anatomy_message"] is None
    assert data["share_url"].endswith(f"/plant-detail.html?id={plant.id}")
    assert data["habitat_preview"] == "Dataran rendah..."
    assert data["plant"]["youtube_embed_url"].startswith("https://www.youtube-nocookie.com/embed/")


def test_plant_detail_without_photos(client, db, alice):
    plant = make_plant(db, alice, "Mangga")
    data = client.get(f"/plants/{plant.id}").json()
    assert data["anatomy"] == []
    assert data["anatomy_message"] == "Gambar detail bagian tumbuhan belum tersedia"


def test_missing_plant_is_404(client):
    resp = client.get("/plants/does-not-exist")
    assert resp.status_code == 404
    assert resp.json()["error"] == "NotFound"


def test_update_logs_diff_summary(client, db, alice, budi):
    plant = make_plant(db, alice, "Mangga", "Anacardiaceae", habitat="Kebun")
    link(db, plant, budi)

    resp = client.put(
        f"/plants/{plant.id}",
        json={"nama_indonesia": "Mangga", "famili": "Anacardiaceae", "habitat": "Halaman sekolah"},
        headers=auth_headers(budi),
    )
    assert resp.status_code == 200
    assert resp.json()["habitat"] == "Halaman sekolah"

    history = client.get(f"/plants/{plant.id}/history").json()
    assert history[0]["action_type"] == "update"
    assert history[0]["details"] == "Mengubah Habitat"
    assert history[0]["user_name"] == "Budi Santoso"
    assert history[0]["time_ago"] == "baru saja"


def test_update_with_no_changes_logs_generic_summary(client, db, alice):
    plant = make_plant(db, alice, "Mangga")
    client.put(f"/plants/{plant.id}", json={"nama_indonesia": "Mangga"}, headers=auth_headers(alice))
    history = client.get(f"/plants/{plant.id}/history").json()
    assert history[0]["details"] == "Melakukan update data"


def test_update_by_stranger_is_forbidden(client, db, alice, budi):
    plant = make_plant(db, alice, "Mangga")
    resp = client.put(f"/plants/{plant.id}", json={"nama_indonesia": "X"}, headers=auth_headers(budi))
    assert resp.status_code == 403


def test_delete_plant(client, db, alice, budi):
    plant = make_plant(db, alice, "Mangga")
    assert client.delete(f"/plants/{plant.id}", headers=auth_headers(budi)).status_code == 403
    assert client.delete(f"/plants/{plant.id}", headers=auth_headers(alice)).status_code == 204
    assert client.get(f"/plants/{plant.id}").status_code == 404


def test_upload_image(client, storage, alice):
    resp = client.post(
        "/media/images",
        files={"file": ("daun.png", b"\x89PNG fake", "image/png")},
        headers=auth_headers(alice),
    )
    assert resp.status_code == 201
    body = resp.json()
    assert body["url"].startswith("https://media.test/plant-images/")
    assert body["path"].endswith(".png")
    assert len(storage.objects) == 1


def test_oversized_upload_never_reaches_storage(client, storage, alice):
    resp = client.post(
        "/media/images",
        files={"file": ("besar.jpg", b"x" * (1024 * 1024 + 1), "image/jpeg")},
        headers=auth_headers(alice),
    )
    assert resp.status_code == 422
    assert resp.json()["detail"] == "Ukuran foto terlalu besar (maks 1MB)"
    assert storage.objects == {}


def test_failed_upload_is_503(client, storage, alice):
    storage.fail = True
    resp = client.post(
        "/media/images",
        files={"file": ("daun.jpg", b"jpeg", "image/jpeg")},
        headers=auth_headers(alice),
    )
    assert resp.status_code == 503


def test_clearing_descriptions_is_logged(client, db, alice):
    plant = make_plant(db, alice, "Mangga", taxonomy_descriptions={"genus": "Buah batu"})
    resp = client.put(
        f"/plants/{plant.id}",
        json={"nama_indonesia": "Mangga", "taxonomy_descriptions": {"genus": " "}},
        headers=auth_headers(alice),
    )
    assert resp.status_code == 200
    assert resp.json()["taxonomy_descriptions"] == {}

    history = client.get(f"/plants/{plant.id}/history").json()
    assert history[0]["details"] == "Mengupdate deskripsi Genus"
