"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palette and visual appearance
- Theme variables (borders, scrollbars, cursor)

The palette follows Dracula so the UI matches the code highlighting theme.
"""

from textual.theme import Theme

DRACULA_NIGHT = Theme(
    name="ullama-dracula",
    primary="#bd93f9",      # Purple - main accent
    secondary="#6272a4",    # Comment blue - secondary accent
    accent="#ff79c6",       # Pink - highlights
    foreground="#f8f8f2",   # Light text
    background="#191a21",   # Deepest background
    success="#50fa7b",      # Green - user messages, send
    warning="#ffb86c",      # Orange - warnings
    error="#ff5555",        # Red - errors, delete
    surface="#282a36",      # Main surface
    panel="#21222c",        # Panel backgrounds
    dark=True,
    variables={
        "block-cursor-foreground": "#191a21",
        "block-cursor-background": "#f8f8f2",
        "block-cursor-text-style": "bold",
        "block-hover-background": "#44475a 30%",

        "input-cursor-background": "#f8f8f2",
        "input-cursor-foreground": "#191a21",
        "input-selection-background": "#bd93f9 30%",

        "border": "#44475a",
        "border-blurred": "#343746",

        "scrollbar": "#343746",
        "scrollbar-hover": "#44475a",
        "scrollbar-active": "#bd93f9",
        "scrollbar-background": "#21222c",

        "footer-key-foreground": "#bd93f9",
        "footer-description-foreground": "#f8f8f2",
    },
)
