"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from pathlib import Path
from argparse import Namespace
from typing import Optional, Type, TypeVar, List, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class StapleResult:
    """
    Summary of one directory run

    Attributes:
        written: Basenames of parent documents written to the destination
        skippedChildren: Basenames skipped because they are child documents
        skippedPlain: Basenames skipped because they are not staplegun documents
    """
    written: List[str] = field(default_factory=list)
    skippedChildren: List[str] = field(default_factory=list)
    skippedPlain: List[str] = field(default_factory=list)


@dataclass
class ProgramState:
    """
    Central state container for the stapling pipeline (state bus pattern).

    This dataclass carries all program state through the functional pipeline,
    with each stage adding new fields as processing progresses.

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity
        - env_check: envOK
        - templates_staple: stapleResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Source directory holding parent and child templates
        outputdir: Destination directory for resolved parent documents
        verbosity: Logging verbosity level (1-3)
        envOK: Environment validation passed
        stapleResult: Summary of written and skipped files
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)

    # Pipeline state
    envOK: bool = field(default=False)
    stapleResult: Optional[StapleResult] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments (verbosity, etc.)
            inputdir: Directory containing source templates
            outputdir: Directory for resolved output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        # Only keep options that exist in ProgramState
        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

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

    Args:
        initial_state: Starting ProgramState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final ProgramState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            templates_staple,
            results_report
        )
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
