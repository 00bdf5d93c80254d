"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use ETCHNAV_ prefix (e.g., ETCHNAV_DEFAULT_CLASS_PREFIX=site-nav).

Settings can also be loaded from a .env file in the project root.

These are generator-wide defaults. Per-generation choices (breakpoint,
animation, depths, ...) live in models.options.NavOptions.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use ETCHNAV_ prefix.

    Examples:
        ETCHNAV_DEFAULT_CLASS_PREFIX=site-nav
        ETCHNAV_TRANSITION_MS=250
        ETCHNAV_CURRENT_MATCH=prefix
    """

    model_config = SettingsConfigDict(
        env_prefix="ETCHNAV_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Fallback identifiers (used when sanitising yields an empty string)
    default_menu_slug: str = Field(
        default="global_navigation",
        description="Data-path slug used when no menu name is available",
    )

    default_class_prefix: str = Field(
        default="global-nav",
        description="CSS class prefix used when neither container class nor menu name sanitise to anything",
    )

    default_prop_name: str = Field(
        default="menuItems",
        description="Component prop name used when the configured one sanitises to nothing",
    )

    # Block tree / ETCH document
    component_name: str = Field(
        default="Global Navigation",
        description="Human readable name of the root navigation block",
    )

    style_collection: str = Field(
        default="default",
        description="ETCH style collection every generated rule is filed under",
    )

    json_indent: int = Field(
        default=4,
        description="Indentation for pretty-printed JSON artifacts",
    )

    # Behaviour script timings
    transition_ms: int = Field(
        default=300,
        description="Duration of the panel/submenu CSS transitions in milliseconds",
    )

    hover_intent_ms: int = Field(
        default=200,
        description="Delay before a desktop submenu closes after the pointer leaves",
    )

    # Code report
    report_style: str = Field(
        default="monokai",
        description="Pygments style of the highlighted code report",
    )

    # Current page detection
    current_match: Literal["exact", "prefix"] = Field(
        default="exact",
        description="How a current URL is matched against menu item URLs",
    )

    def dataPath_make(self, approach: str, slug: str, prop_name: str) -> str:
        """
        Build the template data path an item loop binds to.

        Args:
            approach: "direct" or "component"
            slug: Sanitised snake-case menu slug (may be empty)
            prop_name: Sanitised component prop name (may be empty)

        Returns:
            "options.menus.<slug>" or "props.<propName>"

        Example:
            >>> settings = AppSettings()
            >>> settings.dataPath_make("direct", "main_menu", "")
            'options.menus.main_menu'
            >>> settings.dataPath_make("component", "", "")
            'props.menuItems'
        """
        if approach == "component":
            return f"props.{prop_name or self.default_prop_name}"
        return f"options.menus.{slug or self.default_menu_slug}"


# Singleton instance - import this in your code
appsettings = AppSettings()
