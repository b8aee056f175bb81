from pathlib import Path

import pytest

from tidyup.core.models import FileRecord, MoveDirective, Suggestion
from tidyup.core.planner import (
    build_directives,
    build_plan,
    is_safe_folder,
    select_suggestions,
)

ROOT = Path("/in")
RECORDS = [
    FileRecord(name="a.txt", path=ROOT / "a.txt", size=1024 * 1024, extension=".txt", modified=0.0),
    FileRecord(name="b.jpg", path=ROOT / "b.jpg", size=1024 * 1024, extension=".jpg", modified=0.0),
    FileRecord(name="c.jpg", path=ROOT / "c.jpg", size=2 * 1024 * 1024, extension=".jpg", modified=0.0),
]


def test_directives_take_source_from_matching_record():
    suggestions = [Suggestion("b.jpg", "Images", "high"), Suggestion("a.txt", "Text", "low")]

    directives = build_directives(suggestions, RECORDS)

    assert directives == [
        MoveDirective(name="b.jpg", folder="Images", source=ROOT / "b.jpg"),
        MoveDirective(name="a.txt", folder="Text", source=ROOT / "a.txt"),
    ]


def test_unknown_file_names_are_dropped(caplog):
    suggestions = [Suggestion("a.txt", "Text"), Suggestion("imaginary.doc", "Documents")]

    with caplog.at_level("WARNING", logger="tidyup.core.planner"):
        directives = build_directives(suggestions, RECORDS)

    assert [d.name for d in directives] == ["a.txt"]
    assert any("imaginary.doc" in r.message for r in caplog.records)


@pytest.mark.parametrize(
    "folder, safe",
    [
        ("Docs", True),
        ("Images/Photos/2024", True),
        ("", False),
        ("/etc", False),
        ("../outside", False),
        ("Docs/../../outside", False),
        ("..\\outside", False),
    ],
)
def test_is_safe_folder(folder, safe):
    assert is_safe_folder(folder) is safe


def test_unsafe_folders_are_dropped():
    directives = build_directives([Suggestion("a.txt", "../../tmp")], RECORDS)

    assert directives == []


def test_select_suggestions_exclusions_and_confidence_floor():
    suggestions = [
        Suggestion("a.txt", "Text", "high"),
        Suggestion("b.jpg", "Images", "medium"),
        Suggestion("c.jpg", "Images", "low"),
        Suggestion("d.bin", "Other", "weird"),
    ]

    assert [s.name for s in select_suggestions(suggestions)] == ["a.txt", "b.jpg", "c.jpg", "d.bin"]
    assert [s.name for s in select_suggestions(suggestions, exclude=["b.jpg"])] == ["a.txt", "c.jpg", "d.bin"]
    assert [s.name for s in select_suggestions(suggestions, min_confidence="medium")] == ["a.txt", "b.jpg"]
    assert [s.name for s in select_suggestions(suggestions, min_confidence="low")] == ["a.txt", "b.jpg", "c.jpg"]


def test_build_plan_groups_by_folder():
    suggestions = [
        Suggestion("c.jpg", "Images", "high", "photo"),
        Suggestion("b.jpg", "Images", "low", "photo?"),
        Suggestion("a.txt", "Text", "medium", "notes"),
        Suggestion("ghost.txt", "Text", "high", "hallucinated"),
        Suggestion("a.txt", "/abs", "high", "unsafe"),
    ]

    plan = build_plan(suggestions, RECORDS, ROOT)

    assert plan.root_path == ROOT
    assert plan.total_files == 3
    assert plan.num_dropped == 2
    assert plan.total_size_mb == pytest.approx(4.0)

    by_folder = {f.folder: f for f in plan.folders}
    assert set(by_folder) == {"Images", "Text"}
    images = by_folder["Images"]
    assert images.file_count == 2
    assert images.total_size_mb == pytest.approx(3.0)
    assert images.confidence_counts == {"high": 1, "low": 1}
    assert images.sample_files == ["b.jpg", "c.jpg"]

    assert set(plan.df.columns) >= {"name", "folder", "confidence", "reason", "source", "size_bytes"}


def test_build_plan_with_no_suggestions():
    plan = build_plan([], RECORDS, ROOT)

    assert plan.total_files == 0
    assert plan.folders == []
    assert plan.df.empty
