"""Unit tests for cli.file_converter module."""

import json
from unittest.mock import patch

import pytest

from src.adf.errors import AdfValidationError
from src.cli.errors import InputPathError
from src.cli.file_converter import FileConverter
from src.cli.models import Direction, FileConversionResult
from src.content_converter.errors import FilesystemError, FrontmatterError
from src.content_converter.models import ConverterConfig
from tests.fixtures.adf_fixtures import ADF_MINIMAL


@pytest.fixture
def file_converter() -> FileConverter:
    return FileConverter()


def write_json(path, data) -> str:
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


class TestAdfFileToMarkdown:
    """Test cases for FileConverter.adf_file_to_markdown()."""

    def test_bare_document(self, file_converter, tmp_path):
        path = write_json(tmp_path / "page.json", ADF_MINIMAL)

        assert file_converter.adf_file_to_markdown(path) == "Hello, world!"

    def test_explicit_metadata_overrides_stored_metadata(self, file_converter, tmp_path):
        path = write_json(tmp_path / "page.json", {
            "adf": ADF_MINIMAL,
            "metadata": {"pageId": "1", "title": "Stored"},
        })

        markdown = file_converter.adf_file_to_markdown(path, {"title": "Override"})

        assert markdown == '---\npageId: "1"\ntitle: Override\n---\n\nHello, world!'

    def test_non_mapping_metadata_raises(self, file_converter, tmp_path):
        path = write_json(tmp_path / "page.json", {"adf": ADF_MINIMAL, "metadata": ["x"]})

        with pytest.raises(AdfValidationError) as exc_info:
            file_converter.adf_file_to_markdown(path)

        assert "'metadata' must be an object" in str(exc_info.value)

    def test_invalid_json_names_file(self, file_converter, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{", encoding="utf-8")

        with pytest.raises(AdfValidationError) as exc_info:
            file_converter.adf_file_to_markdown(str(path))

        assert "broken.json" in str(exc_info.value)

    def test_missing_file(self, file_converter, tmp_path):
        with pytest.raises(FilesystemError) as exc_info:
            file_converter.adf_file_to_markdown(str(tmp_path / "missing.json"))

        assert exc_info.value.operation == "read"

    def test_non_utf8_file(self, file_converter, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b"\xff\xfe{")

        with pytest.raises(FilesystemError) as exc_info:
            file_converter.adf_file_to_markdown(str(path))

        assert "Not UTF-8" in str(exc_info.value)


class TestMarkdownFileToAdfJson:
    """Test cases for FileConverter.markdown_file_to_adf_json()."""

    def test_frontmatter_error_names_file(self, file_converter, tmp_path):
        path = tmp_path / "bad.md"
        path.write_text("---\n- a\n---\n", encoding="utf-8")

        with pytest.raises(FrontmatterError) as exc_info:
            file_converter.markdown_file_to_adf_json(str(path))

        assert exc_info.value.source == str(path)


class TestConvertFile:
    """Test cases for FileConverter.convert_file()."""

    def test_writes_sibling_markdown(self, file_converter, tmp_path):
        path = write_json(tmp_path / "page.json", ADF_MINIMAL)

        result = file_converter.convert_file(path, Direction.MARKDOWN)

        assert result == FileConversionResult(source=path, destination=str(tmp_path / "page.md"))
        assert (tmp_path / "page.md").read_text(encoding="utf-8") == "Hello, world!\n"

    def test_custom_suffixes(self, tmp_path):
        converter = FileConverter(ConverterConfig(markdown_suffix=".markdown", adf_suffix=".adf"))
        source = tmp_path / "page.markdown"
        source.write_text("# Title\n", encoding="utf-8")

        result = converter.convert_file(str(source), Direction.ADF)

        assert result.destination == str(tmp_path / "page.adf")
        data = json.loads((tmp_path / "page.adf").read_text(encoding="utf-8"))
        assert data == {"adf": {"version": 1, "type": "doc", "content": [{
            "type": "heading",
            "attrs": {"level": 1},
            "content": [{"type": "text", "text": "Title"}],
        }]}}


class TestConvertDirectory:
    """Test cases for FileConverter.convert_directory()."""

    def test_find_inputs_filters_by_suffix(self, file_converter, tmp_path):
        (tmp_path / "b.json").write_text("{}", encoding="utf-8")
        (tmp_path / "a.json").write_text("{}", encoding="utf-8")
        (tmp_path / "notes.md").write_text("x", encoding="utf-8")
        (tmp_path / "dir.json").mkdir()

        inputs = file_converter.find_inputs(str(tmp_path), Direction.MARKDOWN)

        assert inputs == [str(tmp_path / "a.json"), str(tmp_path / "b.json")]

    def test_find_inputs_requires_directory(self, file_converter, tmp_path):
        with pytest.raises(InputPathError):
            file_converter.find_inputs(str(tmp_path / "missing"), Direction.ADF)

    def test_results_are_sorted_and_progress_reported(self, file_converter, tmp_path):
        for name in ("c", "a", "b"):
            write_json(tmp_path / f"{name}.json", ADF_MINIMAL)
        (tmp_path / "broken.json").write_text("{", encoding="utf-8")
        seen = []

        result = file_converter.convert_directory(
            str(tmp_path), Direction.MARKDOWN, workers=3, on_progress=seen.append
        )

        assert [item.source for item in result.converted] == [
            str(tmp_path / f"{name}.json") for name in ("a", "b", "c")
        ]
        assert [item.source for item in result.failed] == [str(tmp_path / "broken.json")]
        assert result.failed[0].success is False
        assert "not valid JSON" in result.failed[0].error
        assert len(seen) == 4
        assert result.total == 4

    def test_uses_configured_worker_count(self, tmp_path):
        converter = FileConverter(ConverterConfig(workers=7))
        write_json(tmp_path / "a.json", ADF_MINIMAL)

        with patch("src.cli.file_converter.ThreadPoolExecutor") as mock_executor:
            mock_executor.return_value.__enter__.return_value.submit.side_effect = RuntimeError("stop")
            with pytest.raises(RuntimeError):
                converter.convert_directory(str(tmp_path), Direction.MARKDOWN)

        mock_executor.assert_called_once_with(max_workers=7)

    def test_empty_directory(self, file_converter, tmp_path):
        result = file_converter.convert_directory(str(tmp_path), Direction.ADF)

        assert result.total == 0
        assert result.exit_code == 0
