"""Main Textual TUI application.

Orchestrates the UI components and the chat session state. The app owns
the current ``ChatState``; every user action and every reply swaps it for
the result of a transition from ``ullama.conversations`` and then redraws.
"""

import asyncio
import logging
from typing import Any

from rich.markup import escape
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import Button, Footer, Header, Label, Select

from ..client import ProxyError
from ..conversations import (
    DEFAULT_MODEL,
    ChatState,
    PendingSend,
    begin_send,
    change_model,
    complete_send,
    create_conversation,
    delete_conversation,
    fail_send,
    new_chat_state,
    select_conversation,
)
from ..conversations import Message as ChatMessage
from .config import MODEL_CHOICES, SAMPLE_PROMPT, LogLevel
from .styles import APP_CSS
from .themes import DRACULA_NIGHT
from .widgets import (
    ChatHistoryWidget,
    ChatInputBar,
    ConversationEntry,
    ConversationList,
    DebugPanel,
)

logger = logging.getLogger(__name__)

# Logger name segment -> log panel component
_COMPONENTS = {
    "ui": "UI",
    "client": "CLIENT",
    "proxy": "PROXY",
    "conversations": "STATE",
}


class ReplyReceived(Message):
    """Posted by the send worker when the proxy answered."""

    def __init__(self, pending: PendingSend, reply: ChatMessage) -> None:
        super().__init__()
        self.pending = pending
        self.reply = reply


class ReplyFailed(Message):
    """Posted by the send worker when no reply could be obtained."""

    def __init__(self, pending: PendingSend, error: str) -> None:
        super().__init__()
        self.pending = pending
        self.error = error


class PanelLogHandler(logging.Handler):
    """Forwards ``ullama`` log records to the log panel."""

    def __init__(self, panel: DebugPanel) -> None:
        super().__init__()
        self._panel = panel

    def emit(self, record: logging.LogRecord) -> None:
        if not self._panel.is_attached:
            return
        try:
            parts = record.name.split(".")
            segment = parts[1] if len(parts) > 1 else parts[0]
            component = _COMPONENTS.get(segment, segment.upper())
            message = record.getMessage()
            if record.exc_info and record.exc_info[1] is not None:
                message = f"{message}: {record.exc_info[1]}"
            self._panel.write_entry(component, message, record.levelno)
        except Exception:
            self.handleError(record)


class UllamaApp(App):
    """Textual TUI for chatting with local models through the proxy."""

    CSS = APP_CSS
    TITLE = "Ullama"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", priority=True),
        Binding("ctrl+n", "new_conversation", "New Chat", priority=True),
        Binding("ctrl+k", "delete_conversation", "Delete Chat", priority=True),
        Binding("ctrl+l", "toggle_debug", "Log", priority=True),
    ]

    def __init__(
        self,
        client: Any,
        default_model: str = DEFAULT_MODEL,
        log_level: str | None = None,
    ) -> None:
        """Initialize the app.

        Args:
            client: Object with an async ``chat(messages, model)`` returning
                the assistant message, usually a ``ProxyClient``
            default_model: Model for the first conversation
            log_level: Log level for panel (debug/info/warning/error), None to hide
        """
        super().__init__()
        self._client = client
        self._log_level = log_level
        self._state = new_chat_state(default_model)
        self._model_options = list(MODEL_CHOICES)
        if default_model not in {value for _, value in MODEL_CHOICES}:
            self._model_options.append((default_model, default_model))
        self._view_key: tuple | None = None
        self._log_handler: PanelLogHandler | None = None

    @property
    def state(self) -> ChatState:
        """Current session state."""
        return self._state

    def compose(self) -> ComposeResult:
        yield Header()

        with Horizontal(id="workspace"):
            with Vertical(id="sidebar"):
                yield Button("+ New Conversation", id="new-conversation", variant="primary")
                yield Label("Model", id="model-label")
                yield Select(
                    self._model_options,
                    value=self._state.active_conversation.model,
                    allow_blank=False,
                    id="model-select",
                )
                yield ConversationList(id="conversation-list")

            with Vertical(id="main"):
                yield ChatHistoryWidget(id="chat-history")
                yield ChatInputBar(id="chat-input-bar")

        yield DebugPanel(id="debug-panel")
        yield Footer()

    async def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(DRACULA_NIGHT)
        self.theme = "ullama-dracula"

        panel = self.query_one("#debug-panel", DebugPanel)
        package_logger = logging.getLogger("ullama")
        if self._log_level is not None:
            panel.log_level = LogLevel.from_string(self._log_level)
            panel.show()
            panel.info("UI", f"Log panel enabled with level: {self._log_level.upper()}")
        if package_logger.level == logging.NOTSET or package_logger.level > panel.log_level:
            package_logger.setLevel(panel.log_level)
        self._log_handler = PanelLogHandler(panel)
        package_logger.addHandler(self._log_handler)

        await self._refresh_view()
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    def on_unmount(self) -> None:
        """Detach the log handler so records stop reaching the panel."""
        if self._log_handler is not None:
            logging.getLogger("ullama").removeHandler(self._log_handler)
            self._log_handler = None

    async def _apply(self, state: ChatState) -> None:
        """Swap in a new state and redraw."""
        self._state = state
        await self._refresh_view()

    async def _refresh_view(self) -> None:
        state = self._state
        active = state.active_conversation

        await self.query_one("#conversation-list", ConversationList).show_conversations(
            state.conversations, active.id
        )

        select = self.query_one("#model-select", Select)
        if select.value != active.model:
            select.value = active.model

        error = None
        if state.last_error is not None and state.last_error.conversation_id == active.id:
            error = state.last_error.description

        # Only rebuild the transcript when what it shows has changed
        view_key = (active.id, len(active.messages), state.awaiting_reply, error)
        if view_key != self._view_key:
            self._view_key = view_key
            chat = self.query_one("#chat-history", ChatHistoryWidget)
            await chat.show_conversation(active, state.awaiting_reply, error)
            chat.scroll_to_latest()

        self.query_one("#chat-input-bar", ChatInputBar).set_busy(state.awaiting_reply)
        self.sub_title = active.model

    async def _send(self, text: str, from_input: bool = False) -> None:
        """Submit text to the active conversation and request a reply."""
        state, pending = begin_send(self._state, text)
        if pending is None:
            return

        panel = self.query_one("#debug-panel", DebugPanel)
        panel.debug("STATE", f"Sending {len(pending.messages)} messages to {pending.model}")
        if from_input:
            self.query_one("#chat-input-bar", ChatInputBar).clear()
        await self._apply(state)
        self._request_reply(pending)

    @work(group="send")
    async def _request_reply(self, pending: PendingSend) -> None:
        """Ask the proxy for a reply as a background async worker."""
        logger.debug("Requesting reply for conversation %s", pending.conversation_id)
        try:
            reply = await self._client.chat(pending.messages, pending.model)
        except ProxyError as e:
            self.post_message(ReplyFailed(pending, str(e)))
            return
        except Exception as e:
            logger.exception("Unexpected error while requesting a reply")
            self.post_message(ReplyFailed(pending, str(e) or type(e).__name__))
            return
        self.post_message(ReplyReceived(pending, reply))

    async def on_reply_received(self, event: ReplyReceived) -> None:
        panel = self.query_one("#debug-panel", DebugPanel)
        if self._state.get_conversation(event.pending.conversation_id) is None:
            panel.warning("STATE", "Reply arrived for a deleted conversation; dropped")
        else:
            panel.debug("STATE", f"Reply received ({len(event.reply.content)} chars)")
        await self._apply(complete_send(self._state, event.pending, event.reply.content))

    async def on_reply_failed(self, event: ReplyFailed) -> None:
        panel = self.query_one("#debug-panel", DebugPanel)
        panel.error("CLIENT", event.error)
        self.notify(f"Error: {escape(event.error[:80])}", severity="error", timeout=5)
        await self._apply(fail_send(self._state, event.pending, event.error))

    async def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Handle user input submission."""
        await self._send(event.value, from_input=True)

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "new-conversation":
            await self.action_new_conversation()
        elif event.button.id == "sample-prompt":
            await self._send(SAMPLE_PROMPT)

    async def on_conversation_entry_selected(self, event: ConversationEntry.Selected) -> None:
        if event.conversation_id == self._state.active_conversation_id:
            return
        await self._apply(select_conversation(self._state, event.conversation_id))
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    async def on_conversation_entry_delete_requested(
        self, event: ConversationEntry.DeleteRequested
    ) -> None:
        await self._delete(event.conversation_id)

    async def on_select_changed(self, event: Select.Changed) -> None:
        if event.select.id != "model-select" or event.value is Select.BLANK:
            return
        model = str(event.value)
        # Also fired when the selector follows the active conversation
        if model == self._state.active_conversation.model:
            return
        self.query_one("#debug-panel", DebugPanel).info("STATE", f"Model changed to {model}")
        await self._apply(change_model(self._state, model))

    async def _delete(self, conversation_id: str) -> None:
        conversation = self._state.get_conversation(conversation_id)
        if conversation is None:
            return
        self.query_one("#debug-panel", DebugPanel).info(
            "STATE", f"Deleted conversation {conversation.name!r}"
        )
        await self._apply(delete_conversation(self._state, conversation_id))

    async def action_new_conversation(self) -> None:
        """Start a new conversation."""
        await self._apply(create_conversation(self._state))
        self.query_one("#chat-input-bar", ChatInputBar).focus_input()

    async def action_delete_conversation(self) -> None:
        """Delete the active conversation."""
        await self._delete(self._state.active_conversation_id)

    def action_toggle_debug(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#debug-panel", DebugPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)


async def run_textual_tui(
    client: Any,
    default_model: str = DEFAULT_MODEL,
    log_level: str | None = None,
) -> None:
    """Run the Textual TUI.

    Args:
        client: Proxy client used to request replies
        default_model: Model for the first conversation
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    app = UllamaApp(client=client, default_model=default_model, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
