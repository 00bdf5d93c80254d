"""
Generation options model

NavOptions declares every user-facing option once, with its default. It
accepts both the camelCase keys of the builder UI and the snake_case keys
posted by the admin form. Values outside an option's vocabulary never raise:
they fall back to the option's default (see _fallback_log).
"""

from typing import Any, FrozenSet, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from ..lib.log import LOG
from .menu import flag_coerce


APPROACHES = ("direct", "component")
HAMBURGER_ANIMATIONS = ("spin", "squeeze", "collapse", "arrow")
MENU_POSITIONS = ("left", "right", "top", "full")
SUBMENU_BEHAVIORS = ("accordion", "clickable", "always", "slide")
CLOSE_METHODS = ("hamburger", "outside", "esc")
ACCESSIBILITY_FEATURES = ("focus_trap", "scroll_lock", "aria", "keyboard")


def _fallback_log(option: str, value: Any, default: Any) -> None:
    LOG(f"Unrecognised {option} {value!r}, using {default!r}", level=2)


class NavOptions(BaseModel):
    """
    User supplied configuration for one generation.

    Attributes:
        approach: "direct" binds to options.menus.<slug>, "component" to props.<prop>
        menu_id: Host reference of the menu to read (host concern only)
        component_prop_name: Prop name for the component approach
        container_class: CSS class prefix; empty means "derive from menu name"
        submenu_depth_desktop: Nested submenu levels rendered (desktop)
        submenu_depth_mobile: Nested submenu levels reachable on mobile
        mobile_menu_support: Emit hamburger, script and responsive CSS
        mobile_breakpoint: Max-width (px) of the mobile media query
        hamburger_animation: Open-state animation of the hamburger icon
        menu_position: Mobile panel layout
        submenu_behavior: Mobile submenu interaction
        close_methods: Close triggers wired by the script
        accessibility: Accessibility behaviours included in the script
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    approach: Literal["direct", "component"] = "direct"
    menu_id: Optional[int] = None
    component_prop_name: str = "menuItems"
    container_class: str = ""
    submenu_depth_desktop: int = 1
    submenu_depth_mobile: int = 1
    mobile_menu_support: bool = False
    mobile_breakpoint: int = 1200
    hamburger_animation: Literal["spin", "squeeze", "collapse", "arrow"] = "spin"
    menu_position: Literal["left", "right", "top", "full"] = "left"
    submenu_behavior: Literal["accordion", "clickable", "always", "slide"] = "accordion"
    close_methods: FrozenSet[str] = Field(default_factory=lambda: frozenset(CLOSE_METHODS))
    accessibility: FrozenSet[str] = Field(default_factory=lambda: frozenset(ACCESSIBILITY_FEATURES))

    @field_validator("approach", "hamburger_animation", "menu_position", "submenu_behavior", mode="before")
    @classmethod
    def enum_default(cls, value: Any, info: ValidationInfo) -> Any:
        allowed = {
            "approach": APPROACHES,
            "hamburger_animation": HAMBURGER_ANIMATIONS,
            "menu_position": MENU_POSITIONS,
            "submenu_behavior": SUBMENU_BEHAVIORS,
        }[info.field_name]
        candidate = str(value).strip().lower() if value is not None else ""
        if candidate in allowed:
            return candidate
        default = cls.model_fields[info.field_name].default
        _fallback_log(info.field_name, value, default)
        return default

    @field_validator("submenu_depth_desktop", "submenu_depth_mobile", "mobile_breakpoint", mode="before")
    @classmethod
    def int_default(cls, value: Any, info: ValidationInfo) -> Any:
        # Range is not clamped here: clamping belongs to the admin form
        try:
            return int(value)
        except (TypeError, ValueError):
            default = cls.model_fields[info.field_name].default
            _fallback_log(info.field_name, value, default)
            return default

    @field_validator("menu_id", mode="before")
    @classmethod
    def menuId_coerce(cls, value: Any) -> Optional[int]:
        if value in (None, "", 0, "0"):
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            _fallback_log("menu_id", value, None)
            return None

    @field_validator("mobile_menu_support", mode="before")
    @classmethod
    def bool_coerce(cls, value: Any) -> bool:
        return flag_coerce(value)

    @field_validator("component_prop_name", "container_class", mode="before")
    @classmethod
    def str_coerce(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("close_methods", "accessibility", mode="before")
    @classmethod
    def set_filter(cls, value: Any, info: ValidationInfo) -> FrozenSet[str]:
        allowed = CLOSE_METHODS if info.field_name == "close_methods" else ACCESSIBILITY_FEATURES
        if value is None:
            return frozenset()
        if isinstance(value, str):
            value = [part.strip() for part in value.split(",")]
        chosen = set()
        for member in value:
            if member in allowed:
                chosen.add(member)
            else:
                _fallback_log(info.field_name, member, "dropped")
        return frozenset(chosen)

    def closeMethod_has(self, method: str) -> bool:
        """Check whether a close trigger is enabled"""
        return method in self.close_methods

    def accessibility_has(self, feature: str) -> bool:
        """Check whether an accessibility behaviour is enabled"""
        return feature in self.accessibility
