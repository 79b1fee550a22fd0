import pytest

from pptmaker import storage
from pptmaker.models import (
    ContentSlide,
    Outline,
    QuoteSlide,
    SectionSlide,
    TitleSlide,
    TwoColumnSlide,
    UnknownSlide,
)
from pptmaker.storage import LocalStore, SidecarStatus, filename_from, sidecar_path


@pytest.mark.parametrize("title,expected", [
    ("My Talk: Q3 Review!", "My-Talk-Q3-Review.pptx"),
    ("  leading and   trailing  ", "leading-and-trailing.pptx"),
    ("snake_case_title", "snake-case-title.pptx"),
    ("Café résumé 2024", "Café-résumé-2024.pptx"),
    ("", "Presentation.pptx"),
    ("?!... --- ***", "Presentation.pptx"),
])
def test_filename_from(title, expected):
    assert filename_from(title) == expected


def test_filename_truncated_to_50_characters():
    name = filename_from("word " * 30)
    base = name[: -len(".pptx")]
    assert len(base) == 50
    assert name.endswith(".pptx")


def _outline():
    return Outline(
        presentation_title="Quarterly Review",
        template="sunset",
        slides=[
            TitleSlide(slide_number=1, title="Quarterly Review", subtitle="Q3"),
            ContentSlide(slide_number=2, title="Numbers", bullet_points=["up", "down"]),
            SectionSlide(slide_number=3, title="Outlook"),
            QuoteSlide(slide_number=4, title="Words", quote_text="Onward", quote_author="CEO"),
            TwoColumnSlide(slide_number=5, title="Plan", column_left_title="Now", column_left_points=["a"],
                           column_right_title="Next", column_right_points=["b", "c"]),
            UnknownSlide(slide_number=6, type="timeline", title="Dates", points=["Jan"], caption=None),
        ],
    )


def test_save_overwrites_same_name(store):
    first = store.save(b"one", "Deck.pptx")
    second = store.save(b"two", "Deck.pptx")
    assert first == second
    assert second.read_bytes() == b"two"


def test_sidecar_round_trip(store):
    path = store.save(b"pptx", "Quarterly-Review.pptx")
    outline = _outline()
    side = store.save_outline_sidecar(outline, path)
    assert side == path.with_suffix(".json")
    assert side.read_text("utf-8").startswith("{\n")  # pretty printed

    loaded = store.load_outline_sidecar(path)
    assert loaded == outline
    assert loaded.template == "sunset"
    assert loaded.slides[5].model_extra == {"points": ["Jan"], "caption": None}


def test_missing_and_corrupt_sidecars_are_distinguished(store):
    path = store.save(b"pptx", "Deck.pptx")
    missing = store.read_outline_sidecar(path)
    assert missing.status == SidecarStatus.MISSING
    assert missing.error is None

    sidecar_path(path).write_text("{ not json", "utf-8")
    corrupt = store.read_outline_sidecar(path)
    assert corrupt.status == SidecarStatus.CORRUPT
    assert corrupt.error is not None
    assert store.load_outline_sidecar(path) is None


def test_list_only_output_files_newest_first(store, monkeypatch):
    old = store.save(b"1", "Old.pptx")
    new = store.save(b"2", "New.pptx")
    unknown = store.save(b"3", "Unknown.pptx")
    store.save_outline_sidecar(_outline(), new)
    (store.directory / "notes.txt").write_text("x")
    (store.directory / ".hidden.pptx").write_bytes(b"h")

    times = {old.name: 100.0, new.name: 200.0}
    monkeypatch.setattr(storage, "_created_at", lambda p: times.get(p.name, 0.0))

    assert store.list() == [new, old, unknown]


def test_list_missing_directory_is_empty(tmp_path):
    store = LocalStore(tmp_path / "docs")
    store.directory.rmdir()
    assert store.list() == []


def test_delete_removes_sidecar_too(store):
    path = store.save(b"x", "Deck.pptx")
    store.save_outline_sidecar(_outline(), path)
    store.delete(path)
    assert not path.exists()
    assert not sidecar_path(path).exists()


def test_delete_without_sidecar(store):
    path = store.save(b"x", "Deck.pptx")
    store.delete(path)
    assert not path.exists()


def test_delete_missing_file_raises(store):
    with pytest.raises(FileNotFoundError):
        store.delete(store.directory / "Nope.pptx")
