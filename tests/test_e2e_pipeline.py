"""
End-to-end pipeline tests

Tests the full pipeline: input file → env_check → source_read →
source_decorate → output_write, as run by the command line entry point.
"""

import pytest

from fusemods.__main__ import env_check, output_write, source_decorate, source_read
from fusemods.config import appsettings
from fusemods.models import ProgramState, pipeline


BOARD = """<!DOCTYPE html>
<html>
<head><title>Board</title></head>
<body>
<div class="message">&1Hello &lworld&r!</div>
<div class="message">no codes</div>
<span class="status-value">IN PRODUCTION</span>
<span class="status-value">READY FOR PRODUCTION</span>
</body>
</html>
"""


def run(tmp_path, **options):
    state = ProgramState(inputdir=tmp_path, outputdir=tmp_path / "out", verbosity=0, **options)
    return pipeline(state, env_check, source_read, source_decorate, output_write)


class TestPageDecoration:
    """Decorating an HTML page"""

    def test_board_page(self, tmp_path):
        (tmp_path / "board.html").write_text(BOARD)
        state = run(tmp_path, inputFile="board.html")

        assert state.envOK
        assert state.decorateResult == {"messages": 1, "statuses": 2, "styles": True}

        html = (tmp_path / "out" / "board.html").read_text()
        assert (
            '<div class="message message-formatted">'
            '<span class="message-color-1">Hello </span>'
            '<span class="message-format-bold message-color-1">world</span>'
            '!</div>'
        ) in html
        assert '<div class="message">no codes</div>' in html
        assert 'class="status-value status-in-production"' in html
        assert 'class="status-value status-ready-for-production"' in html
        assert '<style id="fusemods-styles" type="text/css">' in html
        assert html.startswith("<!DOCTYPE html>")

    def test_output_is_stable(self, tmp_path):
        """Decorating already decorated output changes nothing"""
        (tmp_path / "board.html").write_text(BOARD)
        run(tmp_path, inputFile="board.html")
        first = (tmp_path / "out" / "board.html").read_text()

        second_dir = tmp_path / "out"
        state = ProgramState(inputdir=second_dir, outputdir=tmp_path / "again", verbosity=0,
                             inputFile="board.html")
        state = pipeline(state, env_check, source_read, source_decorate, output_write)

        assert state.decorateResult == {"messages": 0, "statuses": 0, "styles": False}
        assert (tmp_path / "again" / "board.html").read_text() == first

    def test_theme_file(self, tmp_path):
        (tmp_path / "board.html").write_text(BOARD)
        theme_file = tmp_path / "theme.yaml"
        theme_file.write_text('colors:\n  "1": "#123456"\n')

        run(tmp_path, inputFile="board.html", themeFile=str(theme_file))
        assert ".message-color-1 { color: #123456; }" in (tmp_path / "out" / "board.html").read_text()

    def test_theme_file_from_settings(self, tmp_path, monkeypatch):
        """The configured theme_file applies when --themeFile is not given"""
        (tmp_path / "board.html").write_text(BOARD)
        theme_file = tmp_path / "theme.yaml"
        theme_file.write_text('colors:\n  "1": "#123456"\n')
        monkeypatch.setattr(appsettings, "theme_file", str(theme_file))

        state = run(tmp_path, inputFile="board.html")
        assert state.themeFile == str(theme_file)
        assert ".message-color-1 { color: #123456; }" in (tmp_path / "out" / "board.html").read_text()

    def test_theme_option_overrides_settings(self, tmp_path, monkeypatch):
        (tmp_path / "board.html").write_text(BOARD)
        configured = tmp_path / "configured.yaml"
        configured.write_text('colors:\n  "1": "#123456"\n')
        option = tmp_path / "option.yaml"
        option.write_text('colors:\n  "1": "#abcdef"\n')
        monkeypatch.setattr(appsettings, "theme_file", str(configured))

        run(tmp_path, inputFile="board.html", themeFile=str(option))
        html = (tmp_path / "out" / "board.html").read_text()
        assert ".message-color-1 { color: #abcdef; }" in html
        assert "#123456" not in html

    def test_output_subdir(self, tmp_path):
        (tmp_path / "board.html").write_text(BOARD)
        state = run(tmp_path, inputFile="board.html", outputSubdir="site")
        assert state.outputFile == tmp_path / "out" / "site" / "board.html"
        assert state.outputFile.exists()


class TestTextMode:
    """Decoding a single text message"""

    def test_text_message(self, tmp_path):
        (tmp_path / "motd.txt").write_text("&2Welcome&r <guest>")
        state = run(tmp_path, inputFile="motd.txt", text=True)

        assert state.outputFile.name == "motd.html"
        assert state.outputFile.read_text() == (
            '<span class="message-color-2">Welcome</span> &lt;guest&gt;'
        )


class TestErrors:
    """Stages exit on unusable input"""

    def test_missing_input(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            run(tmp_path, inputFile="missing.html")
        assert exc.value.code == 1

    def test_missing_theme(self, tmp_path):
        (tmp_path / "board.html").write_text(BOARD)
        with pytest.raises(SystemExit):
            run(tmp_path, inputFile="board.html", themeFile=str(tmp_path / "nope.yaml"))

    def test_missing_configured_theme(self, tmp_path, monkeypatch):
        (tmp_path / "board.html").write_text(BOARD)
        monkeypatch.setattr(appsettings, "theme_file", str(tmp_path / "nope.yaml"))
        with pytest.raises(SystemExit):
            run(tmp_path, inputFile="board.html")

    def test_invalid_theme(self, tmp_path):
        (tmp_path / "board.html").write_text(BOARD)
        theme_file = tmp_path / "bad.yaml"
        theme_file.write_text("colors: [unclosed\n")
        with pytest.raises(SystemExit):
            run(tmp_path, inputFile="board.html", themeFile=str(theme_file))

    def test_state_from_namespace_ignores_unknown_options(self, tmp_path):
        from argparse import Namespace

        options = Namespace(inputFile="x.html", verbosity=2, unrelated=True)
        state = ProgramState.state_createFromNamespace(options, tmp_path, tmp_path / "out")
        assert state.inputFile == "x.html"
        assert state.verbosity == 2
        assert not hasattr(state, "unrelated")
