import json
import os

from click.testing import CliRunner

from staff_photos.cli import main
from staff_photos.preview import DATA_URI_PREFIX


def test_scan_lists_members(tmp_path, make_image):
    make_image(tmp_path / "Jane Doe - Manager.png")
    make_image(tmp_path / "John.jpg")
    (tmp_path / "notes.txt").write_text("x", encoding="utf-8")

    result = CliRunner().invoke(main, ["scan", os.fspath(tmp_path)])

    assert result.exit_code == 0, result.output
    assert set(result.stdout.splitlines()) == {"Jane Doe\tManager", "John"}


def test_scan_json(tmp_path, make_image):
    make_image(tmp_path / "Jane Doe - Manager.png")

    result = CliRunner().invoke(main, ["scan", "--json", os.fspath(tmp_path)])

    assert result.exit_code == 0, result.output
    records = json.loads(result.stdout)
    assert records == [{
        "name": "Jane Doe",
        "job_title": "Manager",
        "image_path": os.path.join(os.fspath(tmp_path), "Jane Doe - Manager.png"),
        "is_intern": False,
    }]


def test_scan_missing_directory(tmp_path):
    result = CliRunner().invoke(main, ["scan", os.fspath(tmp_path / "missing")])

    assert result.exit_code == 1
    assert "Directory does not exist" in result.output


def test_preview_prints_data_uri(tmp_path, make_image):
    path = make_image(tmp_path / "John.jpg", size=(800, 600))

    result = CliRunner().invoke(main, ["preview", os.fspath(path)])

    assert result.exit_code == 0, result.output
    assert result.output.startswith(DATA_URI_PREFIX)


def test_preview_writes_output_file(tmp_path, make_image):
    path = make_image(tmp_path / "John.jpg")
    output = tmp_path / "john.txt"

    result = CliRunner().invoke(main, ["preview", os.fspath(path), "--output", os.fspath(output)])

    assert result.exit_code == 0, result.output
    assert output.read_text(encoding="utf-8").startswith(DATA_URI_PREFIX)


def test_preview_corrupt_image(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"garbage")

    result = CliRunner().invoke(main, ["preview", os.fspath(path)])

    assert result.exit_code == 1
    assert "Unsupported image format" in result.output


def test_export_builds_sections(tmp_path, make_image):
    admin = tmp_path / "admin"
    nurses = tmp_path / "nurses"
    admin.mkdir()
    nurses.mkdir()
    make_image(admin / "John.jpg")
    make_image(nurses / "Jane - Nurse.png", size=(900, 450))
    output = tmp_path / "board.json"

    result = CliRunner().invoke(main, [
        "export",
        "--title", "Our Team",
        "--section", f"Administration={admin}",
        "--section", f"Nurses={nurses}",
        "--with-previews",
        "--output", os.fspath(output),
    ])

    assert result.exit_code == 0, result.output
    document = json.loads(output.read_text(encoding="utf-8"))
    assert document["title"] == "Our Team"
    assert [s["title"] for s in document["sections"]] == ["Administration", "Nurses"]
    nurse = document["sections"][1]["members"][0]
    assert nurse["name"] == "Jane"
    assert nurse["job_title"] == "Nurse"
    assert nurse["preview"].startswith(DATA_URI_PREFIX)


def test_export_without_previews(tmp_path, make_image):
    make_image(tmp_path / "John.jpg")
    output = tmp_path / "board.json"

    result = CliRunner().invoke(main, [
        "export", "--section", f"Staff={tmp_path}", "--output", os.fspath(output),
    ])

    assert result.exit_code == 0, result.output
    document = json.loads(output.read_text(encoding="utf-8"))
    assert document["title"] == "Staff"
    assert "preview" not in document["sections"][0]["members"][0]


def test_export_rejects_malformed_section(tmp_path):
    result = CliRunner().invoke(main, ["export", "--section", os.fspath(tmp_path)])

    assert result.exit_code == 2
    assert "TITLE=DIRECTORY" in result.output


def test_preview_oversized_image(tmp_path, make_image, monkeypatch):
    from PIL import Image

    path = make_image(tmp_path / "group.jpg", size=(1000, 1000))
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 400_000)

    result = CliRunner().invoke(main, ["preview", os.fspath(path)])

    assert result.exit_code == 1
    assert "Could not decode image" in result.output


def test_preview_unwritable_output(tmp_path, make_image):
    path = make_image(tmp_path / "John.jpg")
    output = tmp_path / "missing" / "john.txt"

    result = CliRunner().invoke(main, ["preview", os.fspath(path), "--output", os.fspath(output)])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert not output.exists()


def test_export_unwritable_output(tmp_path, make_image):
    make_image(tmp_path / "John.jpg")
    output = tmp_path / "missing" / "board.json"

    result = CliRunner().invoke(main, [
        "export", "--section", f"Staff={tmp_path}", "--output", os.fspath(output),
    ])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
