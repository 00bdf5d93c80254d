"""
Stylesheet renderer tests

Rule table contents per option and the nested serialisation.
"""

import pytest

from etchnav.lib.generator import context_resolve
from etchnav.lib.stylesheet import (
    HAMBURGER_ANIMATIONS,
    StylesheetRenderer,
    hamburgerAnimation_get,
    selector_nest,
    stylesheet_serialize,
)
from etchnav.models.css import CssRule
from etchnav.models.menu import MenuSource
from etchnav.models.options import NavOptions


def renderer_make(**options):
    context = context_resolve(NavOptions.model_validate(options), MenuSource(name="Nav"))
    return StylesheetRenderer(context)


def rule_find(rules, selector, media=False):
    """First rule with the selector; media=True restricts to media rules"""
    for rule in rules:
        if rule.selector == selector and (rule.media is not None) == media:
            return rule
    return None


class TestBase:
    """Always-present rules"""

    def test_tokens_on_root(self):
        rules = renderer_make().rules()
        root = rule_find(rules, ".nav")

        assert "--nav-accent: #0073aa" in root.declarations
        assert "--nav-transition: 300ms ease" in root.declarations

    def test_current_page_colours(self):
        rules = renderer_make().rules()

        assert rule_find(rules, ".nav__menu-link.current-page") is not None
        assert rule_find(rules, ".nav__menu-item.is-current-parent > .nav__menu-link") is not None

    def test_pure(self):
        assert renderer_make(mobileMenuSupport=True).rules() == renderer_make(mobileMenuSupport=True).rules()


class TestMobileGating:
    """Responsive block only with mobile support"""

    def test_no_media_without_mobile(self):
        renderer = renderer_make()

        assert "@media" not in renderer.render()
        assert all(rule.media is None for rule in renderer.rules())
        assert "hamburger" not in renderer.render()

    def test_single_media_block(self):
        css = renderer_make(mobileMenuSupport=True).render()
        assert css.count("@media (max-width: 1200px) {") == 1

    def test_breakpoint_verbatim(self):
        css = renderer_make(mobileMenuSupport=True, mobileBreakpoint=700).render()

        assert "@media (max-width: 700px) {" in css
        assert "(max-width: 1200px)" not in css


class TestHamburger:
    """Animation lookup table"""

    @pytest.mark.parametrize("name", sorted(HAMBURGER_ANIMATIONS))
    def test_animation_rules(self, name):
        rules = renderer_make(mobileMenuSupport=True, hamburgerAnimation=name).rules()

        for index, declarations in enumerate(HAMBURGER_ANIMATIONS[name], start=1):
            selector = f".nav__hamburger.is-active .nav__hamburger-line:nth-child({index})"
            assert rule_find(rules, selector).declarations == declarations

    def test_unknown_falls_back_to_spin(self):
        assert hamburgerAnimation_get("wobble") == HAMBURGER_ANIMATIONS["spin"]

    def test_spin_offsets(self):
        first, middle, last = HAMBURGER_ANIMATIONS["spin"]

        assert first == ("transform: translateY(8px) rotate(225deg)",)
        assert "opacity: 0" in middle
        assert last == ("transform: translateY(-8px) rotate(-225deg)",)

    def test_shown_on_mobile(self):
        rules = renderer_make(mobileMenuSupport=True).rules()

        assert "display: none" in rule_find(rules, ".nav__hamburger").declarations
        assert rule_find(rules, ".nav__hamburger", media=True).declarations == ("display: flex",)


class TestDesktopSubmenus:
    """Flyouts, reveal trigger and cascade"""

    def test_no_submenu_rules_at_depth_zero(self):
        css = renderer_make(submenuDepthDesktop=0).render()
        assert "submenu" not in css

    def test_hover_reveal_without_script(self):
        rules = renderer_make().rules()
        selectors = [rule.selector for rule in rules]

        assert any(".nav__menu-item.has-submenu:hover > .nav__submenu" in s for s in selectors)
        assert not any(".is-open" in s for s in selectors)

    def test_script_reveal_with_mobile(self):
        rules = renderer_make(mobileMenuSupport=True).rules()
        selectors = [rule.selector for rule in rules if rule.media is None]

        assert any(".nav__menu-item.is-open > .nav__submenu" in s for s in selectors)
        assert any(":focus-within > .nav__submenu" in s for s in selectors)

    def test_cascade(self):
        rules = renderer_make(submenuDepthDesktop=2).rules()

        assert rule_find(rules, ".nav__submenu.cascade-left") is not None
        nested = rule_find(rules, ".nav__submenu-item > .nav__submenu")
        assert "left: 100%" in nested.declarations
        assert rule_find(rules, ".nav__submenu-item > .nav__submenu.cascade-left") is not None

    def test_single_level_has_no_nested_flyout(self):
        rules = renderer_make(submenuDepthDesktop=1).rules()
        assert rule_find(rules, ".nav__submenu-item > .nav__submenu") is None


class TestPositions:
    """Mobile panel layout per menu position"""

    def menu_rule(self, position):
        rules = renderer_make(mobileMenuSupport=True, menuPosition=position).rules()
        return rule_find(rules, ".nav__menu", media=True)

    def test_left(self):
        declarations = self.menu_rule("left").declarations

        assert "left: 0" in declarations
        assert "transform: translateX(-100%)" in declarations

    def test_right(self):
        declarations = self.menu_rule("right").declarations

        assert "right: 0" in declarations
        assert "transform: translateX(100%)" in declarations

    def test_top(self):
        assert "max-height: 0" in self.menu_rule("top").declarations
        css = renderer_make(mobileMenuSupport=True, menuPosition="top").render()
        assert "max-height: calc(100vh - 60px);" in css

    def test_full(self):
        declarations = self.menu_rule("full").declarations

        assert "inset: 0" in declarations
        assert "visibility: hidden" in declarations


class TestBehaviors:
    """Mobile submenu behaviour and depth"""

    def media_rules(self, **options):
        return [rule for rule in renderer_make(mobileMenuSupport=True, **options).rules() if rule.media]

    def test_accordion(self):
        rules = self.media_rules(submenuBehavior="accordion")
        submenu = rule_find(rules, ".nav__submenu", media=True)

        assert "max-height: 0" in submenu.declarations
        assert "position: static" in submenu.declarations
        assert rule_find(rules, ".nav__submenu-toggle", media=True).declarations == ("display: inline-flex",)

    def test_clickable_hides_nested_lists(self):
        rules = self.media_rules(submenuBehavior="clickable")

        assert rule_find(rules, ".nav__submenu", media=True).declarations == ("display: none",)
        assert rule_find(rules, ".nav__submenu-toggle", media=True).declarations == ("display: none",)

    def test_always_expanded(self):
        rules = self.media_rules(submenuBehavior="always")
        assert "max-height: none" in rule_find(rules, ".nav__submenu", media=True).declarations

    def test_slide_panels(self):
        rules = self.media_rules(submenuBehavior="slide")

        for selector in (".nav__panels", ".nav__panel", ".nav__panel.is-active",
                         ".nav__panel.is-previous", ".nav__panel-back", ".nav__panel-list"):
            assert rule_find(rules, selector, media=True) is not None
        assert rule_find(rules, ".nav__menu.has-panels .nav__menu-list", media=True) is not None

    def test_mobile_depth_zero(self):
        rules = self.media_rules(submenuDepthDesktop=2, submenuDepthMobile=0)
        hidden = rule_find(rules, ".nav__submenu, .nav__submenu-toggle", media=True)

        assert hidden.declarations == ("display: none",)

    def test_mobile_depth_limits_levels(self):
        rules = self.media_rules(submenuDepthDesktop=3, submenuDepthMobile=1)

        assert rule_find(rules, ".nav__submenu--level-2", media=True).declarations == ("display: none",)
        assert rule_find(rules, ".nav__submenu--level-1 .nav__submenu-toggle", media=True) is not None

    def test_mobile_depth_equal_to_desktop(self):
        rules = self.media_rules(submenuDepthDesktop=2, submenuDepthMobile=2)
        assert not any("--level-" in rule.selector for rule in rules)


class TestSerialisation:
    """Nested shorthand output"""

    def test_selector_nest(self):
        assert selector_nest(".nav", ".nav") == "&"
        assert selector_nest(".nav__menu-link:hover", ".nav") == "&__menu-link:hover"
        assert selector_nest(".nav:focus-within", ".nav") == "&:focus-within"
        assert selector_nest(".navigation", ".nav") is None
        assert selector_nest("body", ".nav") is None

    def test_nested_output(self):
        css = renderer_make().render()

        assert css.startswith(".nav {\n  --nav-text: #2c3338;")
        assert "\n  &__container {\n    max-width: 1200px;" in css
        assert "  &__menu-link:hover,\n  &__menu-link:focus {" in css

    def test_media_block_nested_under_root(self):
        css = renderer_make(mobileMenuSupport=True).render()
        media = css[css.index("@media"):]

        assert media.startswith("@media (max-width: 1200px) {\n  .nav {\n    &__hamburger {")
        assert media.endswith("\n  }\n}")

    def test_foreign_selectors_stay_flat(self):
        rules = [
            CssRule(".nav", ("color: red",)),
            CssRule("body.nav-open", ("overflow: hidden",)),
        ]
        css = stylesheet_serialize(rules, ".nav")

        assert css == ".nav {\n  color: red;\n}\n\nbody.nav-open {\n  overflow: hidden;\n}"
