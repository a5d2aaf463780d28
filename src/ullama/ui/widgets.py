"""Custom Textual widgets for the TUI.

Hides widget implementation details:
- Input sizing and Enter-to-submit handling
- Conversation list rendering and its selection/delete events
- Chat message rendering (plain text for the user, markdown for the assistant)
- Log rendering and level filtering
"""

from datetime import datetime

from rich.text import Text
from textual import events
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.widgets import Button, Label, LoadingIndicator, RichLog, Static, TextArea

from ..conversations import Conversation
from ..conversations import Message as ChatMessage
from .config import (
    INPUT_CHROME_LINES,
    INPUT_MAX_LINES,
    INPUT_MIN_LINES,
    LOG_TIMESTAMP_FORMAT,
    NEWLINE_KEYS,
    SAMPLE_PROMPT,
    WELCOME_INTRO,
    WELCOME_SUGGESTIONS,
    WELCOME_TITLE,
    LogLevel,
)
from .formatting import render_markdown


def input_height(line_count: int) -> int:
    """Height of the input area for a given number of text lines.

    Grows with the text up to ``INPUT_MAX_LINES``; past that the text
    area scrolls internally.
    """
    lines = min(max(line_count, INPUT_MIN_LINES), INPUT_MAX_LINES)
    return lines + INPUT_CHROME_LINES


class ChatTextArea(TextArea):
    """Multi-line input where Enter submits and Shift+Enter / Ctrl+J add a newline.

    Note: most terminals do not report Shift with Enter, so Ctrl+J is the
    dependable newline key.
    """

    class SubmitRequested(Message):
        """Posted when Enter is pressed without a modifier."""

    async def _on_key(self, event: events.Key) -> None:
        # Unhandled keys fall through to TextArea's own key handler.
        if event.key == "enter":
            event.prevent_default()
            event.stop()
            self.post_message(self.SubmitRequested())
        elif event.key in NEWLINE_KEYS:
            event.prevent_default()
            event.stop()
            self.insert("\n")


class ChatInputBar(Horizontal):
    """Chat input bar with an auto-sizing text area and a Send button."""

    class Submitted(Message):
        """Message sent when user submits input."""

        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def compose(self):
        text_area = ChatTextArea(id="chat-input", show_line_numbers=False)
        text_area.cursor_blink = False
        yield text_area
        yield Button("Send", id="send-btn", variant="success").with_tooltip(
            "Send message (Enter)"
        )

    def on_mount(self) -> None:
        text_area = self.query_one("#chat-input", ChatTextArea)
        text_area.highlight_cursor_line = False
        text_area.styles.height = input_height(1)
        text_area.focus()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "send-btn":
            event.stop()
            self._submit()

    def on_chat_text_area_submit_requested(self, event: ChatTextArea.SubmitRequested) -> None:
        event.stop()
        self._submit()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        """Resize the text area to fit its content."""
        event.text_area.styles.height = input_height(event.text_area.document.line_count)

    def _submit(self) -> None:
        # The app decides whether the text is accepted, and clears it if so.
        text_area = self.query_one("#chat-input", ChatTextArea)
        self.post_message(self.Submitted(text_area.text))

    def clear(self) -> None:
        """Empty the text area."""
        self.query_one("#chat-input", ChatTextArea).clear()

    def set_busy(self, busy: bool) -> None:
        """Disable input while a reply is outstanding."""
        text_area = self.query_one("#chat-input", ChatTextArea)
        button = self.query_one("#send-btn", Button)
        was_busy = text_area.disabled
        text_area.disabled = busy
        button.disabled = busy
        button.label = "..." if busy else "Send"
        if was_busy and not busy:
            text_area.focus()

    def focus_input(self) -> None:
        """Focus the text input."""
        self.query_one("#chat-input", ChatTextArea).focus()


class ConversationEntry(Horizontal):
    """One row of the conversation list: its name and a delete button."""

    class Selected(Message):
        """Posted when the row is clicked."""

        def __init__(self, conversation_id: str) -> None:
            super().__init__()
            self.conversation_id = conversation_id

    class DeleteRequested(Message):
        """Posted when the row's delete button is pressed."""

        def __init__(self, conversation_id: str) -> None:
            super().__init__()
            self.conversation_id = conversation_id

    def __init__(self, conversation: Conversation, active: bool = False) -> None:
        classes = "conversation-entry -active" if active else "conversation-entry"
        super().__init__(classes=classes)
        self.conversation_id = conversation.id
        self._name = conversation.name

    def compose(self):
        # Names come from user text, so they are never parsed as markup
        yield Label(Text(self._name, no_wrap=True, overflow="ellipsis"), classes="conversation-name")
        yield Button("x", classes="delete-conversation", variant="error").with_tooltip(
            "Delete conversation"
        )

    def on_click(self, event: events.Click) -> None:
        event.stop()
        self.post_message(self.Selected(self.conversation_id))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.post_message(self.DeleteRequested(self.conversation_id))


class ConversationList(VerticalScroll):
    """Sidebar list of conversations, newest first."""

    BORDER_TITLE = "Conversations"

    async def show_conversations(
        self,
        conversations: tuple[Conversation, ...],
        active_id: str,
    ) -> None:
        """Rebuild the list from the given conversations."""
        await self.remove_children()
        await self.mount_all(
            ConversationEntry(conversation, active=conversation.id == active_id)
            for conversation in conversations
        )
        self.border_subtitle = str(len(conversations))


class MessageView(Vertical):
    """A single transcript entry."""

    def __init__(self, message: ChatMessage) -> None:
        role_class = "user-message" if message.role == "user" else "assistant-message"
        super().__init__(classes=f"chat-message {role_class}")
        self._message = message

    def compose(self):
        if self._message.role == "user":
            yield Static("You", classes="message-header")
            # Plain text for user messages
            yield Static(Text(self._message.content), classes="message-content")
        else:
            yield Static("Assistant", classes="message-header")
            yield Static(render_markdown(self._message.content), classes="message-content")


class WelcomePanel(Vertical):
    """Introduction shown for an empty conversation."""

    def compose(self):
        yield Static(WELCOME_TITLE, id="welcome-title")
        yield Static(WELCOME_INTRO, id="welcome-intro")
        yield Static("Here are some things you can try:", id="welcome-lead")
        yield Static(
            Text("\n".join(f"- {suggestion}" for suggestion in WELCOME_SUGGESTIONS)),
            id="welcome-suggestions",
        )
        yield Button(f"Try: {SAMPLE_PROMPT}", id="sample-prompt", variant="primary")


class TypingIndicator(Vertical):
    """Placeholder assistant message shown while a reply is outstanding."""

    def compose(self):
        yield Static("Assistant", classes="message-header")
        yield LoadingIndicator()


class ChatHistoryWidget(VerticalScroll):
    """Scrollable transcript of the active conversation."""

    BORDER_TITLE = "Chat"
    BORDER_SUBTITLE = "Conversation history"
    ALLOW_MAXIMIZE = True

    async def show_conversation(
        self,
        conversation: Conversation,
        awaiting_reply: bool,
        error: str | None = None,
    ) -> None:
        """Rebuild the transcript view.

        Args:
            conversation: Conversation to display
            awaiting_reply: Show the typing indicator below the transcript
            error: Description of a failed send to show after the transcript
        """
        await self.remove_children()

        children: list[Static | Vertical] = []
        if not conversation.messages and not awaiting_reply:
            children.append(WelcomePanel(id="welcome"))
        children.extend(MessageView(message) for message in conversation.messages)
        if awaiting_reply:
            children.append(
                TypingIndicator(id="typing-indicator", classes="chat-message assistant-message")
            )
        if error:
            children.append(Static(Text(f"Error: {error}"), id="send-error"))

        await self.mount_all(children)

        self.border_title = Text(conversation.name)
        count = len(conversation.messages)
        self.border_subtitle = f"{count} message{'' if count == 1 else 's'}"

    def scroll_to_latest(self) -> None:
        """Scroll to the bottom once the new content has been laid out."""
        self.call_after_refresh(self.scroll_end, animate=False)


class DebugPanel(RichLog):
    """Log panel for diagnostics with level filtering.

    Shows timestamped entries from the UI and from ``ullama`` loggers.
    Supports standard log levels: DEBUG < INFO < WARNING < ERROR.
    Hidden by default, shown with --log-level flag or toggled with Ctrl+L.
    """

    BORDER_TITLE = "Log"
    BORDER_SUBTITLE = "Diagnostics"

    def __init__(self, *args, log_level: int = LogLevel.INFO, **kwargs) -> None:
        super().__init__(
            *args,
            markup=True,
            highlight=False,
            auto_scroll=True,
            wrap=True,
            **kwargs
        )
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        """Current log level threshold."""
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        """Set log level threshold."""
        self._log_level = level
        self._update_subtitle()

    def _update_subtitle(self) -> None:
        if self.display:
            self.border_subtitle = f"Level: {LogLevel.name(self._log_level)}"
        else:
            self.border_subtitle = "Hidden"

    def on_mount(self) -> None:
        """Hide by default."""
        self.display = False

    def write_entry(
        self,
        component: str,
        message: str,
        level: int = LogLevel.DEBUG
    ) -> None:
        """Add a log entry if it meets the current level threshold.

        Args:
            component: Component name (UI, STATE, CLIENT, PROXY, ...)
            message: Log message, written as plain text
            level: Log level (LogLevel.DEBUG, INFO, WARNING, ERROR)
        """
        if level < self._log_level:
            return

        level_colors = {
            LogLevel.DEBUG: "dim white",
            LogLevel.INFO: "cyan",
            LogLevel.WARNING: "yellow",
            LogLevel.ERROR: "red",
        }
        component_colors = {
            "UI": "cyan",
            "STATE": "green",
            "CLIENT": "magenta",
            "PROXY": "blue",
        }
        timestamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)

        line = Text()
        line.append(f"{timestamp} ", style="dim")
        line.append(f"{LogLevel.name(level):<7} ", style=level_colors.get(level, "white"))
        line.append(f"[{component}] ", style=component_colors.get(component, "white"))
        line.append(message)
        self.write(line)

    def debug(self, component: str, message: str) -> None:
        """Log a DEBUG level message."""
        self.write_entry(component, message, LogLevel.DEBUG)

    def info(self, component: str, message: str) -> None:
        """Log an INFO level message."""
        self.write_entry(component, message, LogLevel.INFO)

    def warning(self, component: str, message: str) -> None:
        """Log a WARNING level message."""
        self.write_entry(component, message, LogLevel.WARNING)

    def error(self, component: str, message: str) -> None:
        """Log an ERROR level message."""
        self.write_entry(component, message, LogLevel.ERROR)

    def show(self) -> None:
        """Show the log panel."""
        self.display = True
        self._update_subtitle()

    def hide(self) -> None:
        """Hide the log panel."""
        self.display = False
        self.border_subtitle = "Hidden"

    def toggle(self) -> bool:
        """Toggle visibility. Returns new state."""
        if self.display:
            self.hide()
            return False
        self.show()
        return True
