#!/usr/bin/env python3
"""
fusemods - Inline message markup decorator

Decorates message board pages: text inside message containers that carries
&-codes is turned into styled <span> segments, status indicators are tagged
by their literal text, and the stylesheet presenting both is injected once.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Codes:
    &0 .. &5     colors (the newest replaces the previous)
    &k &l &m &n  obfuscated, bold, strikethrough, underline (stack)
    &i &b        italic, bold alias (stack)
    &r           reset all colors and formats

Usage:
    fusemods inputdir/ outputdir/ --inputFile board.html

Examples:
    # Decorate an HTML page
    fusemods . output/ --inputFile board.html

    # Decode a single plain text message into an HTML fragment
    fusemods . output/ --inputFile motd.txt --text

    # Custom presentation values, with the highlighted source dumped
    fusemods . output/ --inputFile board.html --themeFile dark.yaml -vvv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import (
    BoardDecorator,
    MessageFormatter,
    StatusClassifier,
    Theme,
    ThemeError,
    document_parse,
    styles_inject,
    __version__,
    LOG,
    state_connectToLogger,
)
from .lib.lexer import source_highlight
from .models import ProgramState, pipeline


# Define CLI arguments
parser = ArgumentParser(
    description="fusemods - decorate &-coded message text as styled HTML",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input HTML page or text message (relative to inputdir)"
)

parser.add_argument(
    "--outputSubdir",
    default=".",
    type=str,
    help="Subdirectory within outputdir for the decorated file",
)

parser.add_argument(
    "--text",
    action="store_true",
    default=False,
    help="Treat the input as a single plain text message instead of an HTML page",
)

parser.add_argument(
    "--themeFile",
    default=None,
    type=str,
    help="Theme YAML overriding the built-in presentation values",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve file paths.

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the input file
            - outputFile: Path the decorated output will be written to
            - themeFile: --themeFile, else the configured theme_file, else None
            - envOK: True if environment is valid

    Exits:
        1 if the input file or the theme file is not found
    """
    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile
    if not input_file.exists():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    # --themeFile wins over the FUSEMODS_THEME_FILE setting
    theme_file = state.themeFile or appsettings.theme_file
    if theme_file and not Path(theme_file).exists():
        print(f"Error: Theme file not found: {theme_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)
    state.themeFile = theme_file
    if theme_file:
        LOG(f"Theme file: {theme_file}", level=2)

    output_dir = state.outputdir / state.outputSubdir
    output_dir.mkdir(parents=True, exist_ok=True)
    output_name = input_file.with_suffix(".html").name if state.text else input_file.name
    state.outputFile = output_dir / output_name
    LOG(f"Output file: {state.outputFile}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the input file.

    Returns:
        ProgramState with added field:
            - sourceText: File contents

    Exits:
        1 if the file cannot be read
    """
    state = inputstate.copy()

    LOG("Reading source file...", level=1)

    try:
        state.sourceText = state.inputSourceFile.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Read {len(state.sourceText)} characters from {state.inputSourceFile.name}", level=2)
    if state.verbosity >= 3:
        LOG("Source:\n" + source_highlight(state.sourceText), level=3)
    return state


def source_decorate(inputstate: ProgramState) -> ProgramState:
    """
    Decorate the source.

    In text mode the whole file is one message and the output is the HTML
    fragment for it. Otherwise the file is parsed as an HTML page, the
    stylesheet is injected, message containers are decorated and status
    elements are tagged.

    Returns:
        ProgramState with added fields:
            - renderedOutput: Decorated HTML
            - decorateResult: Dict containing:
                - messages: int (containers decorated)
                - statuses: int (status elements tagged)
                - styles: bool (stylesheet injected)

    Exits:
        1 if the theme cannot be loaded
    """
    state = inputstate.copy()

    if state.sourceText is None:
        print("Error: No source available", file=sys.stderr)
        sys.exit(1)

    if state.text:
        LOG("Decoding text message...", level=1)
        state.renderedOutput = MessageFormatter(appsettings.marker).format(state.sourceText)
        state.decorateResult = {"messages": 1, "statuses": 0, "styles": False}
        return state

    try:
        theme = Theme(state.themeFile)
    except ThemeError as e:
        print(f"Theme error: {e}", file=sys.stderr)
        sys.exit(1)

    LOG("Decorating page...", level=1)
    document = document_parse(state.sourceText)
    injected = styles_inject(document, theme)
    messages = BoardDecorator().messages_format(document)
    statuses = StatusClassifier(theme.statusRules_get()).statuses_apply(document)

    state.renderedOutput = document.html_render()
    state.decorateResult = {"messages": messages, "statuses": statuses, "styles": injected}
    return state


def output_write(inputstate: ProgramState) -> ProgramState:
    """
    Write the decorated output.

    Exits:
        1 if there is nothing to write or the write fails
    """
    state = inputstate.copy()

    if state.renderedOutput is None:
        print("Error: Decoration failed", file=sys.stderr)
        sys.exit(1)

    try:
        state.outputFile.write_text(state.renderedOutput, encoding="utf-8")
    except OSError as e:
        print(f"Error writing output file: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Wrote {state.outputFile}", level=2)
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display a summary of the decoration.

    Returns:
        ProgramState unchanged (terminal pipeline stage)
    """
    state: ProgramState = inputstate.copy()
    if not state.decorateResult:
        print("Error: Decoration failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Decoration successful!", level=1)
    LOG(f"  Output:   {state.outputFile}", level=1)
    LOG(f"  Messages: {state.decorateResult['messages']}", level=1)
    LOG(f"  Statuses: {state.decorateResult['statuses']}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="fusemods - message markup decorator",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - decorate a message board page or a text message.

    Orchestrates the pipeline:
        1. env_check: Validate paths
        2. source_read: Read the input file
        3. source_decorate: Decode messages, tag statuses, inject styles
        4. output_write: Write the decorated file
        5. results_report: Summarise

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """
    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, source_read, source_decorate, output_write, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
