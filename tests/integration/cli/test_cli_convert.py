"""Integration tests for the convert and plan commands"""

from typer.testing import CliRunner

from mdgen.cli.cli import app


runner = CliRunner()


def _project(tmp_path):
    content = tmp_path / "content"
    content.mkdir()
    (content / "index.md").write_text("# Hello\n\n[Guide](guide.md)\n")
    (content / "guide.md").write_text("Guide\n")
    return content


def test_convert_cmd_writes_kotlin(tmp_path, monkeypatch):
    """convert produces one .kt file per markdown file under --out-dir."""
    monkeypatch.chdir(tmp_path)
    content = _project(tmp_path)

    result = runner.invoke(app, [
        "convert", "--root", str(content),
        "--generated-dir", str(tmp_path / "generated"),
        "--out-dir", str(tmp_path / "kotlin"),
    ])

    assert result.exit_code == 0, result.output
    assert "Converted 2 document(s)" in result.output
    assert sorted(p.name for p in (tmp_path / "kotlin").rglob("*.kt")) == ["Guide.kt", "Index.kt"]


def test_convert_cmd_reports_warnings(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    content = _project(tmp_path)
    (content / "guide.md").unlink()

    result = runner.invoke(app, ["convert", "--root", str(content), "--out-dir", str(tmp_path / "kotlin")])

    assert result.exit_code == 0, result.output
    assert "1 warning(s)" in result.output


def test_convert_cmd_collision_exits_1(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    content = _project(tmp_path)
    generated = tmp_path / "generated"
    generated.mkdir()
    (generated / "guide.md").write_text("duplicate\n")

    result = runner.invoke(app, [
        "convert", "--root", str(content),
        "--generated-dir", str(generated),
        "--out-dir", str(tmp_path / "kotlin"),
    ])

    assert result.exit_code == 1
    assert "both map to" in result.output


def test_convert_cmd_uses_config_yaml(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    _project(tmp_path)
    (tmp_path / "config.yaml").write_text(
        "markdown_roots: [content]\noutput_dir: gen\ngroup: org.site\n"
    )

    result = runner.invoke(app, ["convert"])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "gen" / "org" / "site" / "pages" / "Index.kt").exists()


def test_plan_cmd_lists_mapping_without_writing(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    content = _project(tmp_path)

    result = runner.invoke(app, ["plan", "--root", str(content), "--out-dir", str(tmp_path / "kotlin")])

    assert result.exit_code == 0, result.output
    assert "index.md ->" in result.output
    assert "com.example.pages.IndexPage" in result.output
    assert not (tmp_path / "kotlin").exists()


def test_plan_cmd_no_files(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "empty").mkdir()

    result = runner.invoke(app, ["plan", "--root", str(tmp_path / "empty")])

    assert result.exit_code == 1
    assert "No markdown files found." in result.output
