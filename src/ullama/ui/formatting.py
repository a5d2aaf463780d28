"""Markdown rendering for assistant messages.

Hides the details of how markdown becomes terminal output:
- Which element class renders which markdown node (``ChatMarkdown.elements``)
- Code highlighting theme and language detection
- Per-element styles (``MARKDOWN_STYLES``)

Rendering is text-to-visual only. Embedded HTML is never interpreted.
"""

import re
from typing import TYPE_CHECKING

from rich.console import Console, ConsoleOptions, RenderResult
from rich.markdown import CodeBlock, Heading, Markdown
from rich.syntax import Syntax
from rich.text import Text
from rich.theme import Theme

if TYPE_CHECKING:
    from markdown_it.token import Token

CODE_THEME = "dracula"

# Fence info strings look like "python", "language-python" or "js title=x"
_LANGUAGE_TAG = re.compile(r"(?:language-)?([\w+#-]+)")

MARKDOWN_STYLES = {
    "markdown.h1": "bold #ff79c6",
    "markdown.h2": "bold #bd93f9",
    "markdown.h3": "bold #8be9fd",
    "markdown.h4": "bold #f8f8f2",
    "markdown.h5": "bold #f8f8f2",
    "markdown.h6": "italic #f8f8f2",
    "markdown.code": "#f1fa8c on #343746",
    "markdown.link": "underline #8be9fd",
    "markdown.link_url": "underline #6272a4",
    "markdown.block_quote": "italic #a4a8c4",
    "markdown.item.bullet": "bold #50fa7b",
    "markdown.item.number": "bold #50fa7b",
    "markdown.table.header": "bold #bd93f9",
    "markdown.table.border": "#6272a4",
    "markdown.hr": "#6272a4",
}
MARKDOWN_THEME = Theme(MARKDOWN_STYLES)


def detect_code_language(info: str | None) -> str | None:
    """Extract the language tag from a code fence info string.

    >>> detect_code_language("python")
    'python'
    >>> detect_code_language("language-js title=app.js")
    'js'
    >>> detect_code_language("") is None
    True
    """
    if not info:
        return None
    match = _LANGUAGE_TAG.match(info.strip())
    return match.group(1).lower() if match else None


class FencedCodeBlock(CodeBlock):
    """Syntax-highlighted code block keyed on the fence's language tag."""

    @classmethod
    def create(cls, markdown: Markdown, token: "Token") -> "FencedCodeBlock":
        language = detect_code_language(token.info)
        return cls(language or "text", markdown.code_theme)

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        code = str(self.text).rstrip("\n")
        yield Syntax(
            code,
            self.lexer_name,
            theme=self.theme,
            word_wrap=True,
            padding=(0, 1),
        )


class LeftHeading(Heading):
    """Left-aligned heading without the framed h1 panel."""

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        text = self.text
        text.justify = "left"
        if self.tag in ("h1", "h2"):
            yield Text("")
        yield text


class ChatMarkdown(Markdown):
    """Markdown with chat-specific handlers for code and headings."""

    elements = {
        **Markdown.elements,
        "fence": FencedCodeBlock,
        "code_block": FencedCodeBlock,
        "heading_open": LeftHeading,
    }


class RenderedMarkdown:
    """Rich renderable that applies the markdown style table while rendering."""

    def __init__(self, markup: str) -> None:
        self.markup = markup
        self._markdown = ChatMarkdown(markup, code_theme=CODE_THEME, hyperlinks=True)

    def __rich_console__(self, console: Console, options: ConsoleOptions) -> RenderResult:
        with console.use_theme(MARKDOWN_THEME):
            yield from console.render(self._markdown, options)


def render_markdown(text: str) -> RenderedMarkdown:
    """Render assistant text as styled markdown."""
    return RenderedMarkdown(text)
