"""
Navigation generator

Top-level orchestration. Resolves the shared render context once (class
prefix, data path, menu slug, timings) and hands it to the four renderers,
so every artifact references identical class names and paths. No artifact
is derived from another one's output string.

Example:
    >>> source = MenuSource(name="Main Menu", items=(MenuItem(id=1, title="Home", url="/"),))
    >>> result = NavigationGenerator({"mobileMenuSupport": True}, source).generate()
    >>> result.context.data_path
    'options.menus.main_menu'
"""

import base64
import json
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from ..config import AppSettings, appsettings
from ..models.blocks import BlockTree
from ..models.context import RenderContext
from ..models.menu import MenuNode, MenuSource
from ..models.options import NavOptions
from .blocktree import BlockTreeRenderer
from .log import LOG
from .markup import MarkupRenderer
from .sanitize import identifier_toKebab, identifier_toProp, identifier_toSnake
from .script import ScriptRenderer
from .stylesheet import StylesheetRenderer
from .tree import currentPage_annotate, menuTree_build, menuTree_toDicts


OptionsInput = Union[NavOptions, Mapping[str, Any], None]


def options_resolve(options: OptionsInput) -> NavOptions:
    """Accept a NavOptions instance or a raw option mapping"""
    if isinstance(options, NavOptions):
        return options
    return NavOptions.model_validate(dict(options or {}))


def context_resolve(
    options: NavOptions, source: MenuSource, app_settings: AppSettings = appsettings
) -> RenderContext:
    """
    Resolve the parameters shared by all renderers.

    The class prefix comes from the container class, else the menu name,
    else the configured fallback. The data path binds to the menu slug
    (direct approach) or to the component prop (component approach).
    """
    menu_slug = identifier_toSnake(source.name) or app_settings.default_menu_slug
    prefix = (
        identifier_toKebab(options.container_class)
        or identifier_toKebab(source.name)
        or app_settings.default_class_prefix
    )
    prop_name = identifier_toProp(options.component_prop_name) or app_settings.default_prop_name
    data_path = app_settings.dataPath_make(options.approach, menu_slug, prop_name)

    LOG(f"Context: prefix={prefix!r} data_path={data_path!r}", level=2)
    return RenderContext(
        options=options,
        prefix=prefix,
        data_path=data_path,
        menu_slug=menu_slug,
        prop_name=prop_name,
        component_name=app_settings.component_name,
        style_collection=app_settings.style_collection,
        transition_ms=app_settings.transition_ms,
        hover_intent_ms=app_settings.hover_intent_ms,
    )


@dataclass
class GeneratedNavigation:
    """
    The artifacts of one generation.

    Attributes:
        markup: Template HTML
        stylesheet: Nested-shorthand CSS
        script: Behaviour script, "" without mobile support
        block_tree: Typed block tree plus style map
        menu_tree: Annotated menu forest (menu preview data)
        context: The render context every artifact was built from
    """
    markup: str
    stylesheet: str
    script: str
    block_tree: BlockTree
    menu_tree: List[MenuNode] = field(default_factory=list)
    context: Optional[RenderContext] = None

    def menuTree_toDicts(self) -> List[Dict[str, Any]]:
        return menuTree_toDicts(self.menu_tree)


class NavigationGenerator:
    """
    Generates the navigation artifacts for one menu and one option set.

    Args:
        options: NavOptions or a raw mapping (camelCase or snake_case keys)
        source: Menu items plus the menu name
        app_settings: Generator-wide defaults
        current_url: Optional URL of the page being rendered; items matching
                     it are flagged current in addition to host supplied flags
    """

    def __init__(
        self,
        options: OptionsInput,
        source: MenuSource,
        app_settings: AppSettings = appsettings,
        current_url: Optional[str] = None,
    ) -> None:
        self.options = options_resolve(options)
        self.source = source
        self.app_settings = app_settings
        self.current_url = current_url
        self.context = context_resolve(self.options, source, app_settings)

    def menuTree_build(self) -> List[MenuNode]:
        items = currentPage_annotate(self.source.items, self.current_url, self.app_settings.current_match)
        return menuTree_build(items)

    def generate(self) -> GeneratedNavigation:
        """
        Run every renderer against the shared context.

        Returns:
            GeneratedNavigation with all artifacts
        """
        ctx = self.context
        LOG(f"Generating navigation for {self.source.name or ctx.menu_slug!r}", level=1)

        result = GeneratedNavigation(
            markup=MarkupRenderer(ctx).render(),
            stylesheet=StylesheetRenderer(ctx).render(),
            script=ScriptRenderer(ctx).render(),
            block_tree=BlockTreeRenderer(ctx).render(),
            menu_tree=self.menuTree_build(),
            context=ctx,
        )
        LOG(
            f"Generated markup {len(result.markup)}B, stylesheet {len(result.stylesheet)}B, "
            f"script {len(result.script)}B, {len(result.block_tree.styles)} styles",
            level=2,
        )
        return result

    def etchDocument_build(
        self, result: Optional[GeneratedNavigation] = None, timestamp: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Assemble the ETCH import document.

        Args:
            result: Artifacts to package; generated when omitted
            timestamp: Seconds used for the script element id; defaults to now

        Returns:
            {type, version, gutenbergBlock, styles[, scripts][, component]}
        """
        result = result or self.generate()
        ctx = self.context

        document: Dict[str, Any] = {
            'type': 'block',
            'version': 2,
            'gutenbergBlock': result.block_tree.root.to_dict(),
            'styles': result.block_tree.styles_toDict(),
        }

        if result.script:
            stamp = int(time.time()) if timestamp is None else timestamp
            document['scripts'] = {
                f"{ctx.prefix}-script": {
                    'code': base64.b64encode(result.script.encode("utf-8")).decode("ascii"),
                    'id': f"{ctx.prefix}-{stamp}",
                }
            }

        if self.options.approach == 'component':
            document['component'] = {
                'name': ctx.component_name,
                'properties': [
                    {
                        'key': ctx.prop_name,
                        'name': ctx.prop_name,
                        'type': 'array',
                        'default': [],
                    }
                ],
            }
        return document

    def etchJSON_get(self, result: Optional[GeneratedNavigation] = None, timestamp: Optional[int] = None) -> str:
        return json.dumps(self.etchDocument_build(result, timestamp), indent=self.app_settings.json_indent)


def generate(
    options: OptionsInput,
    source: MenuSource,
    app_settings: AppSettings = appsettings,
    current_url: Optional[str] = None,
) -> GeneratedNavigation:
    """Generate all artifacts in one call"""
    return NavigationGenerator(options, source, app_settings, current_url).generate()


def menusOption_build(
    sources: Sequence[MenuSource],
    current_url: Optional[str] = None,
    app_settings: AppSettings = appsettings,
) -> Dict[str, Any]:
    """
    Dynamic option data for every menu, keyed by menu slug.

    This is the data the direct approach's loops read: the template's
    options.menus.<slug> resolves against the returned mapping. Menus
    without items are left out; when two menus share a slug the later
    one wins.

    Returns:
        {"menus": {slug: annotated forest as plain dicts}}
    """
    menus: Dict[str, List[Dict[str, Any]]] = {}
    for source in sources:
        if not source.items:
            continue
        slug = identifier_toSnake(source.name) or app_settings.default_menu_slug
        if slug in menus:
            LOG(f"Menu slug {slug!r} used twice, keeping the later menu", level=2)
        items = currentPage_annotate(source.items, current_url, app_settings.current_match)
        menus[slug] = menuTree_toDicts(menuTree_build(items))
    LOG(f"Menu option data for {len(menus)} menu(s)", level=2)
    return {'menus': menus}
