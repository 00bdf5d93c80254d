"""
Program state model and pipeline helper

Defines the ProgramState dataclass carried through the command line
pipeline and the pipeline() helper that composes the stages.
"""

import dataclasses
from argparse import Namespace
from dataclasses import dataclass, field
from functools import reduce
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Type, TypeVar

if TYPE_CHECKING:
    from ..lib.generator import GeneratedNavigation
    from .menu import MenuSource


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    State container for the generation pipeline (state bus pattern).

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, menuFile, optionsFile,
                   currentUrl, outputSubdir
        - env_check: menuSourceFile, optionsSourceFile, navOutputdir, envOK
        - menu_load: menuSource, menuSources, navOptions
        - code_generate: generated, etchDocument, menusOption
        - artifacts_write: writeResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory holding the menu and options files
        outputdir: Base output directory
        verbosity: Logging verbosity level (1-3)
        menuFile: Menu file (relative to inputdir)
        optionsFile: Optional options file (relative to inputdir)
        currentUrl: Optional URL of the page the menu is rendered on
        outputSubdir: Subdirectory within outputdir for the artifacts
        envOK: Environment validation passed
        menuSourceFile: Resolved menu file path
        optionsSourceFile: Resolved options file path, None for defaults
        navOutputdir: Final output directory (outputdir + outputSubdir)
        menuSource: Selected menu
        menuSources: Every menu of the menu file
        navOptions: Raw option mapping
        generated: Generated artifacts
        etchDocument: ETCH import document
        menusOption: Dynamic option data of every menu, keyed by slug
        writeResult: Written files by artifact name
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    menuFile: str = field(default="")
    optionsFile: Optional[str] = field(default=None)
    currentUrl: Optional[str] = field(default=None)
    outputSubdir: str = field(default=".")

    # Pipeline state
    envOK: bool = field(default=False)
    menuSourceFile: Path = field(default=Path("/"))
    optionsSourceFile: Optional[Path] = field(default=None)
    navOutputdir: Path = field(default=Path("/"))
    menuSource: Optional["MenuSource"] = field(default=None)
    menuSources: List["MenuSource"] = field(default_factory=list)
    navOptions: Dict[str, Any] = field(default_factory=dict)
    generated: Optional["GeneratedNavigation"] = field(default=None)
    etchDocument: Optional[Dict[str, Any]] = field(default=None)
    menusOption: Optional[Dict[str, Any]] = field(default=None)
    writeResult: Optional[Dict[str, Path]] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type[PS], options: Namespace, inputdir: Path, outputdir: Path
    ) -> PS:
        """
        Create ProgramState from argparse Namespace and directory paths.

        CLI options without a matching field are ignored; the explicit
        directories override any option of the same name.
        """
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in vars(options).items() if k in valid_fields}
        return cls(**{**filtered_options, "inputdir": inputdir, "outputdir": outputdir})

    def copy(self: PS) -> PS:
        """Shallow copy of the state"""
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
            menu_load,
            code_generate,
            artifacts_write,
            results_report
        )

    reads left-to-right instead of
        results_report(artifacts_write(code_generate(menu_load(env_check(initial_state)))))
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
