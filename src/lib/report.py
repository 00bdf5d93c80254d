"""
Code report

Renders the generated artifacts into one standalone HTML page with
syntax-highlighted sections, the command line counterpart of the builder's
code tabs.
"""

import html
from typing import List, Tuple

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import CssLexer, JavascriptLexer, JsonLexer
from pygments.util import ClassNotFound
from pygments.styles import get_style_by_name

from .lexer import EtchTemplateLexer
from .log import LOG


REPORT_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
body {{ margin: 0; padding: 2rem; font-family: system-ui, sans-serif; background: #1e1f1c; color: #f8f8f2; }}
h1 {{ font-size: 1.5rem; }}
h2 {{ font-size: 1.1rem; margin-top: 2.5rem; }}
.report-empty {{ color: #75715e; font-style: italic; }}
.report-code pre {{ padding: 1rem; overflow-x: auto; border-radius: 4px; }}
</style>
</head>
<body>
<h1>{title}</h1>
{sections}
</body>
</html>
"""


def style_resolve(style: str) -> str:
    """Pygments style name, monokai when unknown"""
    try:
        get_style_by_name(style)
        return style
    except ClassNotFound:
        LOG(f"Unknown Pygments style {style!r}, using monokai", level=2)
        return "monokai"


def section_render(heading: str, code: str, lexer: Lexer, style: str) -> str:
    """One highlighted report section"""
    if not code:
        body = '<p class="report-empty">(not generated)</p>'
    else:
        formatter = HtmlFormatter(style=style, noclasses=True)
        body = f'<div class="report-code">{highlight(code, lexer, formatter)}</div>'
    return f"<h2>{html.escape(heading)}</h2>\n{body}"


def report_render(
    markup: str,
    stylesheet: str,
    script: str,
    etch_json: str,
    menu_json: str,
    title: str = "Navigation code",
    style: str = "monokai",
) -> str:
    """
    Render the code report page.

    Args:
        markup, stylesheet, script: Generated artifacts
        etch_json: ETCH import document, pretty-printed
        menu_json: Menu preview JSON
        title: Page heading
        style: Pygments style name

    Returns:
        Standalone HTML document
    """
    style = style_resolve(style)
    sections: List[Tuple[str, str, Lexer]] = [
        ("HTML", markup, EtchTemplateLexer()),
        ("CSS", stylesheet, CssLexer()),
        ("JavaScript", script, JavascriptLexer()),
        ("ETCH JSON", etch_json, JsonLexer()),
        ("Menu JSON", menu_json, JsonLexer()),
    ]
    LOG(f"Rendering code report ({style})", level=2)
    return REPORT_PAGE.format(
        title=html.escape(title),
        sections="\n".join(section_render(heading, code, lexer, style) for heading, code, lexer in sections),
    )
