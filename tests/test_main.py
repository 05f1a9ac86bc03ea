import json

from swiftui_tree.main import main


def test_dump_outline(content_view_path, capsys):
    assert main(["--dump", content_view_path]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Container NavigationStack\n")
    assert "CustomView HeaderView" in out


def test_dump_json_with_explicit_root(content_view_path, capsys):
    assert main(["--dump", "--format", "json", "--root", "RowView", content_view_path]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["name"] == "HStack"


def test_dump_reports_empty_states(tmp_path, capsys):
    empty = tmp_path / "empty.swift"
    empty.write_text("   \n", encoding="utf-8")
    assert main(["--dump", str(empty)]) == 1
    assert "No input" in capsys.readouterr().err

    helpers = tmp_path / "helpers.swift"
    helpers.write_text("struct Model { let id: Int }\n", encoding="utf-8")
    assert main(["--dump", str(helpers)]) == 1
    assert "No root candidates" in capsys.readouterr().err

    views = tmp_path / "views.swift"
    views.write_text("struct Blank: View {\n    var body: some View {\n    }\n}\n", encoding="utf-8")
    assert main(["--dump", str(views)]) == 1
    assert "Selected root has no body: Blank" in capsys.readouterr().err
