"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

import dataclasses
from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, Dict, Callable
from dataclasses import dataclass, field
from functools import reduce


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the decoration pipeline (state bus pattern).

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, outputSubdir,
          text, themeFile
        - env_check: inputSourceFile, outputFile, envOK
        - source_read: sourceText
        - source_decorate: renderedOutput, decorateResult
        - output_write: (writes outputFile)
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the input file
        outputdir: Base output directory
        verbosity: Logging verbosity level (1-3)
        inputFile: Input filename (relative to inputdir)
        outputSubdir: Subdirectory within outputdir for output
        text: Treat the input as one plain text message instead of an HTML page
        themeFile: Optional theme YAML overriding built-in presentation values
        envOK: Environment validation passed
        inputSourceFile: Resolved path to the input file
        outputFile: Resolved path of the file to write
        sourceText: Contents of the input file
        renderedOutput: Decorated HTML
        decorateResult: Counters from the decoration passes
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    outputSubdir: str = field(default=".")
    text: bool = field(default=False)
    themeFile: Optional[str] = field(default=None)

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    outputFile: Path = field(default=Path("/"))
    sourceText: Optional[str] = field(default=None)
    renderedOutput: Optional[str] = field(default=None)
    decorateResult: Optional[Dict[str, Any]] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Options without a matching field are ignored.

        Args:
            options: Parsed CLI arguments
            inputdir: Directory containing source files
            outputdir: Directory for output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in vars(options).items() if k in valid_fields}
        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_read,
            source_decorate,
            output_write,
            results_report,
        )

    This is equivalent to:
        results_report(output_write(source_decorate(source_read(env_check(initial_state)))))

    But reads left-to-right instead of inside-out.
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
