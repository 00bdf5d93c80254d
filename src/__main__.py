#!/usr/bin/env python3
"""
etchnav - navigation code generator for the ETCH page builder

Turns a flat, parent-referenced menu plus a set of options into four
mutually consistent artifacts: template markup, a stylesheet, a behaviour
script and an ETCH block-tree import document.

As in the rest of this family of tools, the ChRIS "plugin" pattern is used
as a general purpose app framework: an inputdir holding the menu and
options files, an outputdir receiving the artifacts.

Outputs:
    navigation.html   template markup ({#loop} / {#if})
    navigation.css    nested stylesheet
    navigation.js     behaviour script (mobile menu support only)
    etch.json         ETCH import document
    menu.json         annotated menu preview
    options.json      options.menus data of every menu in the file, keyed by slug
    report.html       syntax-highlighted overview of all of the above

Usage:
    etchnav inputdir/ outputdir/ --menuFile menu.yaml --optionsFile options.yaml

Examples:
    # Defaults for every option
    etchnav . out/ --menuFile menu.json

    # Mark the current page from its URL
    etchnav . out/ --menuFile menu.yaml --optionsFile nav.yaml --currentUrl /about/team

    # Verbose output
    etchnav . out/ --menuFile menu.yaml -vv
"""

import json
import sys
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace
from pathlib import Path

from chris_plugin import chris_plugin

from .config import appsettings
from .lib import (
    LOG,
    MenuSourceError,
    NavigationGenerator,
    __version__,
    document_load,
    menuSource_fromData,
    menuSources_fromData,
    menusOption_build,
    menuTree_toJSON,
    options_load,
    report_render,
    state_connectToLogger,
    state_disconnectFromLogger,
)
from .models import NavOptions, ProgramState, pipeline


DISPLAY_TITLE = r"""
        _       _
   ___ | |_ ___| |__  _ __   __ ___   __
  / _ \| __/ __| '_ \| '_ \ / _` \ \ / /
 |  __/| || (__| | | | | | | (_| |\ V /
  \___| \__\___|_| |_|_| |_|\__,_| \_/

  Navigation code generator for ETCH
"""

# Define CLI arguments
parser = ArgumentParser(
    description="etchnav - navigation code generator for the ETCH page builder",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--menuFile", required=True, type=str, help="Menu file, JSON or YAML (relative to inputdir)"
)

parser.add_argument(
    "--optionsFile",
    default=None,
    type=str,
    help="Generation options file, JSON or YAML (relative to inputdir). Defaults apply when omitted",
)

parser.add_argument(
    "--currentUrl",
    default=None,
    type=str,
    help="URL of the page being rendered; matching items are marked current",
)

parser.add_argument(
    "--outputSubdir",
    default=".",
    type=str,
    help="Subdirectory within outputdir for the generated files",
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
    Validate environment and resolve all file paths.

    Returns:
        ProgramState with added fields:
            - menuSourceFile: Resolved menu file
            - optionsSourceFile: Resolved options file or None
            - navOutputdir: Created output directory
            - envOK: True if environment is valid

    Exits:
        1 if the menu or options file is not found
    """

    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    menu_file = state.inputdir / state.menuFile
    if not menu_file.exists():
        print(f"Error: Menu file not found: {menu_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)
    state.menuSourceFile = menu_file
    LOG(f"Menu file: {menu_file}", level=2)

    if state.optionsFile:
        options_file = state.inputdir / state.optionsFile
        if not options_file.exists():
            print(f"Error: Options file not found: {options_file}", file=sys.stderr)
            state.envOK = False
            sys.exit(1)
        state.optionsSourceFile = options_file
        LOG(f"Options file: {options_file}", level=2)

    state.navOutputdir = state.outputdir / state.outputSubdir
    state.navOutputdir.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.navOutputdir}", level=2)

    state.envOK = True
    return state


def menu_load(inputstate: ProgramState) -> ProgramState:
    """
    Read the options and the selected menu.

    Returns:
        ProgramState with added fields:
            - navOptions: Raw option mapping
            - menuSource: The selected menu
            - menuSources: Every menu of the file

    Exits:
        1 if a file does not parse or no menu matches the selection
    """

    state = inputstate.copy()

    LOG("Loading options and menu...", level=1)
    try:
        state.navOptions = options_load(state.optionsSourceFile)
        menu_id = NavOptions.model_validate(state.navOptions).menu_id
        data = document_load(state.menuSourceFile)
        state.menuSource = menuSource_fromData(data, menu_id)
        state.menuSources = menuSources_fromData(data)
    except MenuSourceError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Loaded {len(state.menuSource.items)} menu items", level=2)
    return state


def code_generate(inputstate: ProgramState) -> ProgramState:
    """
    Generate all artifacts.

    Returns:
        ProgramState with added fields:
            - generated: GeneratedNavigation
            - etchDocument: ETCH import document
            - menusOption: options.menus data of every menu

    Exits:
        1 if no menu was loaded or generation fails
    """

    state = inputstate.copy()

    if state.menuSource is None:
        print("Error: No menu loaded", file=sys.stderr)
        sys.exit(1)

    LOG("Generating navigation code...", level=1)
    try:
        generator = NavigationGenerator(
            state.navOptions, state.menuSource, appsettings, current_url=state.currentUrl
        )
        state.generated = generator.generate()
        state.etchDocument = generator.etchDocument_build(state.generated)
        state.menusOption = menusOption_build(state.menuSources, state.currentUrl, appsettings)
    except Exception as e:
        print(f"Generation error: {e}", file=sys.stderr)
        if state.verbosity >= 3:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    return state


def artifacts_write(inputstate: ProgramState) -> ProgramState:
    """
    Write the artifacts to the output directory.

    navigation.js is only written when a script was generated.

    Returns:
        ProgramState with added field:
            - writeResult: artifact name -> written path
    """
    state = inputstate.copy()
    generated = state.generated
    if generated is None or state.etchDocument is None:
        print("Error: Nothing generated", file=sys.stderr)
        sys.exit(1)

    indent = appsettings.json_indent
    etch_json = json.dumps(state.etchDocument, indent=indent)
    menu_json = menuTree_toJSON(generated.menu_tree, indent=indent)
    options_json = json.dumps(state.menusOption or {"menus": {}}, indent=indent)

    outputs = {
        "markup": ("navigation.html", generated.markup),
        "stylesheet": ("navigation.css", generated.stylesheet),
        "script": ("navigation.js", generated.script),
        "etch": ("etch.json", etch_json),
        "menu": ("menu.json", menu_json),
        "options": ("options.json", options_json),
        "report": ("report.html", report_render(
            generated.markup,
            generated.stylesheet,
            generated.script,
            etch_json,
            menu_json,
            title=f"{state.menuSource.name or 'Navigation'} code",
            style=appsettings.report_style,
        )),
    }

    written = {}
    for name, (filename, content) in outputs.items():
        if not content:
            LOG(f"Skipping empty {name}", level=2)
            continue
        path = state.navOutputdir / filename
        path.write_text(content + ("" if content.endswith("\n") else "\n"), encoding="utf-8")
        written[name] = path
        LOG(f"Wrote {path}", level=2)

    state.writeResult = written
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Summarise the written files.

    Exits:
        1 if nothing was written
    """
    state: ProgramState = inputstate.copy()
    if not state.writeResult:
        print("Error: Generation failed", file=sys.stderr)
        sys.exit(1)

    if state.verbosity >= 1:
        LOG("\n✓ Navigation generated!", level=1)
        for name, path in state.writeResult.items():
            LOG(f"  {name:<10} {path}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="etchnav - navigation code generator for ETCH",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - generate navigation code from a menu file.

    Orchestrates the pipeline:
        1. env_check: Validate paths and environment
        2. menu_load: Read options and the selected menu
        3. code_generate: Render markup, stylesheet, script and block tree
        4. artifacts_write: Write the files
        5. results_report: Display results to user

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    # Connect state to logger for entire pipeline
    token = state_connectToLogger(state)
    try:
        pipeline(state, env_check, menu_load, code_generate, artifacts_write, results_report)
    finally:
        state_disconnectFromLogger(token)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
