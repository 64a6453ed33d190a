"""Tests for GitHub Actions workflow commands."""

import io

from release_uploader.actions import WorkflowCommands, escape_data


class TestWorkflowCommands:
    def test_set_output_appends_to_output_file(self, tmp_path):
        output = tmp_path / "github_output"
        output.write_text("existing=1\n")
        commands = WorkflowCommands(output_path=str(output), stream=io.StringIO())

        commands.set_output("browser_download_urls", '["https://dl.test/a"]')

        assert output.read_text() == 'existing=1\nbrowser_download_urls=["https://dl.test/a"]\n'

    def test_multiline_output_uses_delimiter(self, tmp_path):
        output = tmp_path / "github_output"
        commands = WorkflowCommands(output_path=str(output), stream=io.StringIO())

        commands.set_output("notes", "line one\nline two")

        lines = output.read_text().splitlines()
        assert lines[0].startswith("notes<<ghadelimiter_")
        delimiter = lines[0].split("<<", 1)[1]
        assert lines[1:] == ["line one", "line two", delimiter]

    def test_set_output_without_file_uses_legacy_command(self):
        stream = io.StringIO()
        WorkflowCommands(stream=stream).set_output("urls", "[]")
        assert stream.getvalue() == "::set-output name=urls::[]\n"

    def test_set_failed_emits_error_and_sets_exit_code(self):
        stream = io.StringIO()
        commands = WorkflowCommands(stream=stream)
        assert commands.exit_code == 0

        commands.set_failed("Release not found for tag 'v1'")

        assert stream.getvalue() == "::error::Release not found for tag 'v1'\n"
        assert commands.exit_code == 1

    def test_debug_and_info(self):
        stream = io.StringIO()
        commands = WorkflowCommands(stream=stream)
        commands.debug("Expanded paths: a, b")
        commands.info("done")
        assert stream.getvalue() == "::debug::Expanded paths: a, b\ndone\n"


class TestEscapeData:
    def test_escapes_percent_and_newlines(self):
        assert escape_data("100%\r\nnext") == "100%25%0D%0Anext"
