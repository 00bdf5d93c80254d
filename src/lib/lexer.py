"""
Custom Pygments lexer for ETCH template markup

Highlights the generated navigation markup in the code report: HTML tags
with ETCH's block tags and expressions mixed into them.

Token types:
- Keyword: Block tags ({#loop}, {#if}, {/loop}, {/if})
- Name.Variable: Expressions ({item.title}) and loop iterators
- Name.Tag: HTML element names
- Name.Attribute: HTML attribute names
- String: Attribute values
- Comment: HTML comments
"""

from pygments.lexer import RegexLexer, bygroups
from pygments.token import (
    Comment,
    Keyword,
    Name,
    Operator,
    Punctuation,
    String,
    Text,
    Whitespace,
)


class EtchTemplateLexer(RegexLexer):
    """
    Lexer for ETCH template markup

    Example:
        <li class="nav__item {item.state_classes}">{#if item.children}...{/if}</li>

    Tokens:
        {#if → Keyword
        item.children → Name.Variable
        {item.state_classes} → Name.Variable (inside a String attribute value)
    """

    name = 'ETCH Template'
    aliases = ['etch', 'etch-template']
    filenames = ['*.etch.html']

    tokens = {
        'root': [
            (r'<!--.*?-->', Comment),

            # {#loop path as var}
            (r'(\{#)(loop)(\s+)([\w.]+)(\s+)(as)(\s+)(\w+)(\})',
             bygroups(Punctuation, Keyword, Whitespace, Name.Variable, Whitespace,
                      Keyword, Whitespace, Name.Variable, Punctuation)),

            # {#if expr}
            (r'(\{#)(if)(\s+)([^}]+)(\})',
             bygroups(Punctuation, Keyword, Whitespace, Name.Variable, Punctuation)),

            # {/loop} {/if}
            (r'(\{/)(\w+)(\})', bygroups(Punctuation, Keyword, Punctuation)),

            # {item.title}
            (r'\{[\w.]+\}', Name.Variable),

            (r'(</?)([\w-]+)', bygroups(Punctuation, Name.Tag), 'tag'),

            (r'\s+', Whitespace),
            (r'[^<{\s]+', Text),
            (r'.', Text),
        ],

        'tag': [
            (r'\s+', Whitespace),
            (r'([\w-]+)(=)', bygroups(Name.Attribute, Operator), 'value'),
            (r'[\w-]+', Name.Attribute),
            (r'/?>', Punctuation, '#pop'),
            (r'.', Text),
        ],

        'value': [
            (r'"', String, 'dquote'),
            (r"'[^']*'", String, '#pop'),
            (r'[^\s>]+', String, '#pop'),
        ],

        'dquote': [
            (r'\{[\w.]+\}', Name.Variable),
            (r'"', String, '#pop:2'),
            (r'[^"{]+', String),
            (r'\{', String),
        ],
    }


def get_lexer() -> EtchTemplateLexer:
    """
    Get the EtchTemplateLexer instance

    Returns:
        EtchTemplateLexer instance ready for use with Pygments
    """
    return EtchTemplateLexer()
