"""Terminal UI module for ullama.

Provides a Textual-based conversation UI that talks to the inference proxy.

Module structure (each module hides a design decision):
- config.py: UI constants (model choices, input sizing, welcome text)
- formatting.py: Markdown rendering of assistant replies
- widgets.py: Custom widgets (input bar, conversation list, transcript, log panel)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palette and theme configuration
- app.py: Application orchestration (user interaction flow)
"""

from .app import UllamaApp, run_textual_tui
from .config import LogLevel
from .formatting import render_markdown
from .widgets import ChatHistoryWidget, ChatInputBar, ConversationList, DebugPanel

__all__ = [
    "ChatHistoryWidget",
    "ChatInputBar",
    "ConversationList",
    "DebugPanel",
    "LogLevel",
    "UllamaApp",
    "render_markdown",
    "run_textual_tui",
]
