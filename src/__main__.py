#!/usr/bin/env python3
"""
staplegun - Template inheritance preprocessor

Flattens "parent" text templates that define blocks and import "child"
fragments into plain output documents.

As an aside, this codebase leverages the ChRIS "plugin" concept/pattern as
general purpose python app development framework.

Philosophy:
    - Line oriented: every directive occupies a whole line
    - Inheritance only: blocks, inserts and imports, no logic or variables
    - Traceable: every substitution is bracketed by marker comments
    - Fail fast: the first error aborts the run, nothing partial is written

Directives:
    {{ staplegun parent }}                 first line: write this document
    {{ staplegun child }}                  first line: fragment for import_file
    {{ staplegun define_block NAME }}      open a block
    {{ staplegun end }}                    close the block
    {{ staplegun insert_block NAME }}      insert a block
    {{ staplegun import_file PATH }}       import a file (relative to inputdir)

Usage:
    staplegun inputdir/ outputdir/

Examples:
    # Resolve all parent templates
    staplegun templates/ public/

    # Verbose output
    staplegun templates/ public/ -v
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .lib import Stapler, StaplegunError, __version__, LOG, state_connectToLogger
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
      _              _
  ___| |_ __ _ _ __ | | ___  __ _ _   _ _ __
 / __| __/ _` | '_ \| |/ _ \/ _` | | | | '_ \
 \__ \ || (_| | |_) | |  __/ (_| | |_| | | | |
 |___/\__\__,_| .__/|_|\___|\__, |\__,_|_| |_|
              |_|           |___/

  Template inheritance preprocessor
"""

# Define CLI arguments
parser = ArgumentParser(
    description="staplegun - resolve parent/child text templates into flat documents",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate that the input and output directories exist.

    Args:
        inputstate: Initial program state with CLI options

    Returns:
        ProgramState with envOK set

    Exits:
        1 if either path is missing or not a directory
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    for role, path in (("Input", state.inputdir), ("Output", state.outputdir)):
        if path is None or not Path(path).is_dir():
            print(f"Error: {role} directory not found: {path}", file=sys.stderr)
            state.envOK = False
            sys.exit(1)
        LOG(f"{role} directory: {path}", level=2)

    state.envOK = True
    return state


def templates_staple(inputstate: ProgramState) -> ProgramState:
    """
    Resolve every parent template of the input directory.

    Args:
        inputstate: Program state with validated directories

    Returns:
        ProgramState with added field:
            - stapleResult: StapleResult of written and skipped files

    Exits:
        1 on the first structure, reference or I/O error
    """

    state = inputstate.copy()

    LOG("Stapling templates...", level=1)

    try:
        stapler = Stapler(source_dir=state.inputdir, dest_dir=state.outputdir)
        state.stapleResult = stapler.staple()
    except (StaplegunError, OSError) as e:
        print(f"Staple error: {e}", file=sys.stderr)
        if state.verbosity >= 3:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display a summary of written and skipped files.

    Args:
        inputstate: Program state with stapleResult populated

    Returns:
        ProgramState unchanged (terminal pipeline stage)

    Exits:
        1 if stapleResult is None
    """
    state: ProgramState = inputstate.copy()
    if state.stapleResult is None:
        print("Error: Stapling failed", file=sys.stderr)
        sys.exit(1)

    result = state.stapleResult
    LOG("\n✓ Stapling successful!", level=1)
    LOG(f"  Written: {len(result.written)}", level=1)
    for name in result.written:
        LOG(f"    {name}", level=2)
    LOG(f"  Skipped: {len(result.skippedChildren)} child, {len(result.skippedPlain)} other", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="staplegun - Template inheritance preprocessor",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - resolve every parent template in inputdir.

    Orchestrates the pipeline:
        1. env_check: Validate directories
        2. templates_staple: Parse templates and write parent documents
        3. results_report: Display results to user

    Args:
        options: CLI arguments from argparse
            - verbosity: int - Logging verbosity level (1-3)
        inputdir: Directory containing parent and child templates
        outputdir: Directory where resolved parent documents are written

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, env_check, templates_staple, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
