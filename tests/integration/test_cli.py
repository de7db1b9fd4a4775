"""
Integration tests for the smartocr command-line interface.
"""

import json

import pytest

from smartocr.cli import expand_paths, main


@pytest.fixture
def linked_file(write_file):
    """Return a capture file containing two links."""
    return write_file("oup_1-0.txt", "Visit https://example.com/page\nMail help@example.org")


class TestCLI:
    """Tests for the CLI subcommands."""

    def test_version(self, capsys):
        """--version prints the package version."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert "0.1.0" in capsys.readouterr().out

    def test_command_required(self):
        """A subcommand is required."""
        with pytest.raises(SystemExit):
            main([])

    def test_extract(self, linked_file, tmp_path, capsys):
        """extract prints the text and where links were saved."""
        code = main(["--output-dir", str(tmp_path / "out"), "extract", str(linked_file)])
        out = capsys.readouterr().out
        assert code == 0
        assert "Visit https://example.com/page" in out
        assert "Links saved to:" in out

    def test_extract_json(self, linked_file, tmp_path, capsys):
        """extract --json prints the full result."""
        code = main(["--no-save-links", "extract", str(linked_file), "--json"])
        data = json.loads(capsys.readouterr().out)
        assert code == 0
        assert data["links"] == ["https://example.com/page", "help@example.org"]
        assert data["saved_links_json"] is None

    def test_links(self, linked_file, capsys):
        """links lists numbered links."""
        assert main(["links", str(linked_file)]) == 0
        out = capsys.readouterr().out
        assert "Found 2 link(s)" in out
        assert "1: https://example.com/page" in out

    def test_missing_file(self, tmp_path, capsys):
        """Errors are reported on stderr with exit code 1."""
        assert main(["extract", str(tmp_path / "missing.txt")]) == 1
        assert "Error: File not found" in capsys.readouterr().err

    def test_unsupported_file(self, write_file, capsys):
        """Unsupported formats are reported as errors."""
        assert main(["extract", str(write_file("a.zip", "x"))]) == 1
        assert "Unsupported file type" in capsys.readouterr().err

    def test_save_and_load_links(self, linked_file, tmp_path, capsys):
        """save-links writes a report that load-links reads back."""
        out_dir = str(tmp_path / "links")
        assert main(["--output-dir", out_dir, "save-links", str(linked_file)]) == 0
        assert "2 link(s)" in capsys.readouterr().out

        assert main(["--output-dir", out_dir, "load-links", "oup", "--stage", "initial_page"]) == 0
        out = capsys.readouterr().out
        assert "Search term: oup" in out
        assert "Total links: 2" in out
        assert "2: help@example.org (email)" in out

    def test_load_links_missing(self, tmp_path, capsys):
        """load-links fails when nothing was saved."""
        assert main(["--output-dir", str(tmp_path), "load-links", "oup"]) == 1
        assert "No saved links found" in capsys.readouterr().err

    def test_batch_directory(self, write_file, tmp_path, capsys):
        """batch expands directories and reports each file."""
        write_file("a.txt", "https://example.com/page")
        write_file("b.csv", "name\nBob\n")
        write_file("c.zip", "ignored")
        code = main(["--no-save-links", "batch", str(tmp_path)])
        out = capsys.readouterr().out
        assert code == 0
        assert "Processed 2 file(s), 0 failed" in out

    def test_batch_failure_exit_code(self, write_file, tmp_path, capsys):
        """batch exits 1 when any file fails."""
        good = write_file("a.txt", "text")
        code = main(["--no-save-links", "batch", str(good), str(tmp_path / "missing.txt")])
        assert code == 1
        assert "FAILED" in capsys.readouterr().out

    def test_structured(self, linked_file, tmp_path, capsys):
        """structured writes JSON and CSV reports."""
        out_dir = tmp_path / "data"
        assert main(["--output-dir", str(out_dir), "structured", str(linked_file)]) == 0
        assert (out_dir / "oup_1-0_structured_data.json").exists()
        assert (out_dir / "oup_1-0_structured_data.csv").exists()

    def test_render(self, linked_file, tmp_path, capsys):
        """render writes HTML with anchors."""
        output = tmp_path / "page.html"
        assert main(["render", str(linked_file), "-o", str(output)]) == 0
        html = output.read_text(encoding="utf-8")
        assert '<a href="https://example.com/page"' in html
        assert 'href="mailto:help@example.org"' in html


class TestExpandPaths:
    """Tests for expand_paths."""

    def test_directories_expand_to_supported_files(self, write_file, tmp_path):
        """Only supported files directly inside a directory are kept."""
        a = write_file("a.txt", "x")
        write_file("b.zip", "x")
        (tmp_path / "sub").mkdir()
        assert expand_paths([tmp_path]) == [a]

    def test_files_kept(self, tmp_path):
        """Plain file paths pass through, existing or not."""
        path = tmp_path / "missing.pdf"
        assert expand_paths([path]) == [path]
