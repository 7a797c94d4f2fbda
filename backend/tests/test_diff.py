"""Activity summaries built from two versions of a plant."""
from scifanor.catalog.diff import detect_changes, diff_to_summary
from scifanor.catalog.views import PlantImages, PlantView

MANGGA = {
    "id": "p1",
    "nama_indonesia": "Mangga",
    "nama_latin": "Mangifera indica",
    "famili": "Anacardiaceae",
    "genus": "Mangifera",
    "spesies": "M. indica",
    "habitat": "Dataran rendah",
    "taxonomy_descriptions": {"genus": "Genus buah batu"},
    "images": {"full_plant": "a.jpg", "leaf": "leaf.jpg"},
}


def test_identical_records_give_generic_summary():
    assert diff_to_summary(MANGGA, dict(MANGGA)) == "Melakukan update data"


def test_identical_view_models_give_generic_summary():
    view = PlantView(id="p1", nama_indonesia="Mangga", images=PlantImages(full_plant="a.jpg"))
    assert diff_to_summary(view, view) == "Melakukan update data"


def test_single_change_is_named():
    new = {**MANGGA, "habitat": "Pegunungan"}
    assert diff_to_summary(MANGGA, new) == "Mengubah Habitat"


def test_two_changes_are_joined():
    new = {**MANGGA, "nama_indonesia": "Mangga Arumanis", "famili": "Anacardiaceae "}
    assert diff_to_summary(MANGGA, new) == "Mengubah Nama Indonesia, Mengubah Famili"


def test_three_or_more_changes_collapse_to_a_count():
    new = {
        **MANGGA,
        "nama_latin": "Mangifera odorata",
        "genus": "Mangifera x",
        "images": {"full_plant": "a.jpg", "leaf": "leaf2.jpg", "flower": "f.jpg"},
    }
    summary = diff_to_summary(MANGGA, new)
    assert summary == "Mengupdate 4 data detail"
    assert "Nama Latin" not in summary


def test_new_photo_is_reported_with_part_label():
    new = {**MANGGA, "images": {"full_plant": "a.jpg", "leaf": "leaf.jpg", "root": "root.jpg"}}
    assert diff_to_summary(MANGGA, new) == "Menambahkan/Mengupdate foto Akar"


def test_removed_photo_is_not_reported():
    new = {**MANGGA, "images": {"full_plant": "a.jpg", "leaf": None}}
    assert detect_changes(MANGGA, new) == []


def test_images_are_skipped_when_new_record_has_none():
    new = {**MANGGA, "images": None}
    assert diff_to_summary(MANGGA, new) == "Melakukan update data"


def test_only_genus_and_species_descriptions_are_compared():
    new = {
        **MANGGA,
        "taxonomy_descriptions": {"genus": "Genus buah batu", "ordo": "Ordo baru", "kingdom": "x"},
    }
    assert detect_changes(MANGGA, new) == []

    new["taxonomy_descriptions"]["spesies"] = "Spesies asli India"
    assert diff_to_summary(MANGGA, new) == "Mengupdate deskripsi Spesies"


def test_descriptions_are_skipped_when_new_record_has_none():
    new = {**MANGGA, "taxonomy_descriptions": {}}
    assert detect_changes(MANGGA, new) == []


def test_scalar_changes_are_listed_before_photos():
    new = {
        **MANGGA,
        "genus": "Mangifera baru",
        "images": {"full_plant": "b.jpg", "leaf": "leaf.jpg"},
    }
    assert diff_to_summary(MANGGA, new) == "Mengubah Genus, Menambahkan/Mengupdate foto Tumbuhan Utuh"


def test_cleared_descriptions_are_reported():
    old = {"taxonomy_descriptions": {"genus": "Mangifera adalah genus buah batu"}}
    assert diff_to_summary(old, {"taxonomy_descriptions": {}}) == "Mengupdate deskripsi Genus"


def test_missing_descriptions_are_not_compared():
    old = {"taxonomy_descriptions": {"genus": "Mangifera adalah genus buah batu"}}
    assert diff_to_summary(old, {}) == "Melakukan update data"
