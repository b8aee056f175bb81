from typer.testing import CliRunner

from conftest import fake_client
from tidyup.cli import app
from tidyup.core.service import OrganizerService

runner = CliRunner()

SUGGESTIONS = [
    {"name": "a.txt", "folder": "Docs", "confidence": "high", "reason": "text file"},
    {"name": "b.png", "folder": "Images", "confidence": "low", "reason": "maybe an image"},
]


def make_service(store, content=SUGGESTIONS, error=None):
    return OrganizerService(store, llm_client=fake_client(content, error=error))


def populate(base):
    (base / "a.txt").write_text("A")
    (base / "b.png").write_text("B")


def test_organize_moves_files_and_undo_restores_them(base, store):
    populate(base)
    service = make_service(store)

    result = runner.invoke(app, ["organize", str(base), "--yes"], obj=service)

    assert result.exit_code == 0, result.output
    assert "Moved 2 files successfully!" in result.output
    assert (base / "Docs" / "a.txt").exists()
    assert (base / "Images" / "b.png").exists()

    result = runner.invoke(app, ["history"], obj=service)
    assert "Batches that can be undone: 1" in result.output

    result = runner.invoke(app, ["undo"], obj=service)
    assert result.exit_code == 0, result.output
    assert "Undid 2 file moves" in result.output
    assert (base / "a.txt").exists()
    assert (base / "b.png").exists()


def test_organize_respects_exclude_and_min_confidence(base, store):
    populate(base)

    result = runner.invoke(
        app,
        ["organize", str(base), "--yes", "--min-confidence", "medium"],
        obj=make_service(store),
    )

    assert result.exit_code == 0, result.output
    assert (base / "Docs" / "a.txt").exists()
    assert (base / "b.png").exists()

    result = runner.invoke(
        app,
        ["organize", str(base), "--yes", "--exclude", "b.png"],
        obj=make_service(store, content=[SUGGESTIONS[1]]),
    )
    assert result.exit_code == 1
    assert "select at least one file" in result.output
    assert (base / "b.png").exists()


def test_organize_declined_moves_nothing(base, store):
    populate(base)

    result = runner.invoke(app, ["organize", str(base)], obj=make_service(store), input="n\n")

    assert result.exit_code == 0
    assert "No changes applied." in result.output
    assert (base / "a.txt").exists()
    assert not (base / "Docs").exists()


def test_organize_reports_collisions(base, store):
    populate(base)
    (base / "Docs").mkdir()
    (base / "Docs" / "a.txt").write_text("already here")

    result = runner.invoke(app, ["organize", str(base), "--yes"], obj=make_service(store))

    assert result.exit_code == 0, result.output
    assert "File already exists at destination" in result.output
    assert (base / "a.txt").read_text() == "A"


def test_scan_is_read_only(base, store):
    populate(base)

    result = runner.invoke(app, ["scan", str(base)], obj=make_service(store))

    assert result.exit_code == 0, result.output
    assert "No files were moved." in result.output
    assert (base / "a.txt").exists()


def test_scan_prompts_for_folder_when_path_omitted(base, store):
    populate(base)

    result = runner.invoke(app, ["scan"], obj=make_service(store), input=f"{base}\n")

    assert result.exit_code == 0, result.output
    assert "Scan complete" in result.output


def test_empty_folder_is_an_error(base, store):
    result = runner.invoke(app, ["organize", str(base), "--yes"], obj=make_service(store))

    assert result.exit_code == 1
    assert "No files found" in result.output


def test_missing_path_is_an_error(tmp_path, store):
    result = runner.invoke(app, ["scan", str(tmp_path / "nope")], obj=make_service(store))

    assert result.exit_code == 1
    assert "Path not found" in result.output


def test_missing_api_key(base, store):
    populate(base)

    result = runner.invoke(app, ["scan", str(base)], obj=OrganizerService(store))

    assert result.exit_code == 1
    assert "API key not configured" in result.output


def test_llm_failure_moves_nothing(base, store):
    populate(base)
    service = make_service(store, content=None, error=RuntimeError("boom"))

    result = runner.invoke(app, ["organize", str(base), "--yes"], obj=service)

    assert result.exit_code == 1
    assert "No files were moved." in result.output
    assert (base / "a.txt").exists()


def test_unparseable_llm_reply(base, store):
    populate(base)

    result = runner.invoke(app, ["organize", str(base), "--yes"], obj=make_service(store, content="nope"))

    assert result.exit_code == 1
    assert "Failed to parse the AI response" in result.output


def test_undo_with_empty_history(store):
    result = runner.invoke(app, ["undo"], obj=OrganizerService(store))

    assert result.exit_code == 0
    assert "Nothing to undo" in result.output


def test_set_key_and_version(store):
    service = OrganizerService(store)

    result = runner.invoke(app, ["set-key", "bad"], obj=service)
    assert result.exit_code == 1

    result = runner.invoke(app, ["set-key", "sk-123"], obj=service)
    assert result.exit_code == 0, result.output
    assert store.load()["apiKey"] == "sk-123"

    result = runner.invoke(app, ["version"], obj=service)
    assert "API key: set" in result.output
