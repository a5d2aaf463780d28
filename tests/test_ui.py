"""Tests for the Textual UI, driven through the test pilot."""
import asyncio

import httpx
import pytest
from textual.widgets import Button, Select

from ullama.client import ProxyClient
from ullama.conversations import Message
from ullama.proxy import create_app
from ullama.ui import UllamaApp
from ullama.ui.config import INPUT_MAX_LINES, SAMPLE_PROMPT
from ullama.ui.widgets import (
    ChatInputBar,
    ChatTextArea,
    ConversationEntry,
    DebugPanel,
    MessageView,
    input_height,
)


async def settle(app, pilot) -> None:
    """Wait for the send worker and the messages it posts."""
    await pilot.pause()
    await app.workers.wait_for_complete()
    await pilot.pause()
    await pilot.pause()


async def submit(app, pilot, text: str) -> None:
    app.query_one("#chat-input", ChatTextArea).text = text
    await pilot.press("enter")
    await settle(app, pilot)


async def after_layout(pilot) -> None:
    """Let deferred scrolling and resizing run."""
    for _ in range(4):
        await pilot.pause()


class GatedClient:
    """Client whose replies wait until the test opens the gate."""

    def __init__(self) -> None:
        self.gate = asyncio.Event()
        self.calls: list[tuple[tuple[Message, ...], str]] = []

    async def chat(self, messages, model: str) -> Message:
        self.calls.append((tuple(messages), model))
        await self.gate.wait()
        return Message(role="assistant", content="Done")

    async def close(self) -> None:
        pass


class TestInputHeight:
    """Tests for input auto-resize."""

    def test_single_line(self):
        assert input_height(1) == 3

    def test_grows_with_lines(self):
        assert input_height(4) == input_height(3) + 1

    def test_capped(self):
        assert input_height(50) == input_height(INPUT_MAX_LINES)

    def test_empty_counts_as_one_line(self):
        assert input_height(0) == input_height(1)

    @pytest.mark.asyncio
    async def test_input_follows_line_count(self, fake_client):
        """Test that the text area grows with its text, stops at the cap and shrinks after a send."""
        app = UllamaApp(client=fake_client)
        async with app.run_test() as pilot:
            await pilot.pause()
            text_area = app.query_one("#chat-input", ChatTextArea)
            assert text_area.styles.height.value == input_height(1)

            text_area.text = "one\ntwo\nthree"
            await after_layout(pilot)
            assert text_area.styles.height.value == input_height(3)

            text_area.text = "\n".join(f"line {n}" for n in range(INPUT_MAX_LINES + 5))
            await after_layout(pilot)
            assert text_area.styles.height.value == input_height(INPUT_MAX_LINES)

            await pilot.press("enter")
            await settle(app, pilot)
            assert text_area.text == ""
            assert text_area.styles.height.value == input_height(1)


class TestStartup:
    """Tests for the initial screen."""

    @pytest.mark.asyncio
    async def test_welcome_view(self, fake_client):
        app = UllamaApp(client=fake_client)
        async with app.run_test() as pilot:
            await pilot.pause()

            assert len(app.state.conversations) == 1
            assert len(app.query("#welcome")) == 1
            assert len(app.query(ConversationEntry)) == 1
            assert app.query_one("#model-select", Select).value == "llama3.2:latest"

    @pytest.mark.asyncio
    async def test_custom_default_model_offered(self, fake_client):
        app = UllamaApp(client=fake_client, default_model="qwen2.5")
        async with app.run_test() as pilot:
            await pilot.pause()

            assert app.state.active_conversation.model == "qwen2.5"
            assert app.query_one("#model-select", Select).value == "qwen2.5"

    @pytest.mark.asyncio
    async def test_log_panel_shown_with_level(self, fake_client):
        app = UllamaApp(client=fake_client, log_level="debug")
        async with app.run_test() as pilot:
            await pilot.pause()

            assert app.query_one("#debug-panel", DebugPanel).display is True


class TestSending:
    """Tests for the send cycle through the UI."""

    @pytest.mark.asyncio
    async def test_enter_sends_and_shows_reply(self, fake_client):
        app = UllamaApp(client=fake_client)
        async with app.run_test() as pilot:
            await submit(app, pilot, "What is AI?")

            conversation = app.state.active_conversation
            assert conversation.messages == (
                Message(role="user", content="What is AI?"),
                Message(role="assistant", content="**Hi** there"),
            )
            assert conversation.name == "What is AI?"
            assert app.state.awaiting_reply is False
            assert len(app.query(MessageView)) == 2
            assert len(app.query("#welcome")) == 0
            assert app.query_one("#chat-input", ChatTextArea).text == ""
            assert fake_client.calls == [
                ((Message(role="user", content="What is AI?"),), "llama3.2:latest"),
            ]

    @pytest.mark.asyncio
    async def test_round_trip_through_proxy(self, stub_provider):
        """Test that proxy replies extend the transcript, using the real client and proxy."""
        transport = httpx.ASGITransport(app=create_app(stub_provider))
        async with ProxyClient("http://testserver", transport=transport) as client:
            app = UllamaApp(client=client)
            async with app.run_test() as pilot:
                await submit(app, pilot, "one")
                await submit(app, pilot, "two")

                assert [(m.role, m.content) for m in app.state.active_conversation.messages] == [
                    ("user", "one"),
                    ("assistant", "Hello from the model"),
                    ("user", "two"),
                    ("assistant", "Hello from the model"),
                ]

        sent, model = stub_provider.calls[-1]
        assert model == "llama3.2:latest"
        assert [m.content for m in sent] == ["one", "Hello from the model", "two"]

    @pytest.mark.asyncio
    async def test_blank_enter_does_nothing(self, fake_client):
        app = UllamaApp(client=fake_client)
        async with app.run_test() as pilot:
            before = app.state
            await submit(app, pilot, "   ")

            assert app.state == before
            assert fake_client.calls == []

    @pytest.mark.asyncio
    async def test_ctrl_j_inserts_newline(self, fake_client):
        app = UllamaApp(client=fake_client)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("a", "ctrl+j", "b")
            await pilot.pause()

            text_area = app.query_one("#chat-input", ChatTextArea)
            assert text_area.text == "a\nb"
            assert fake_client.calls == []

    @pytest.mark.asyncio
    async def test_sample_prompt_button(self, fake_client):
        app = UllamaApp(client=fake_client)
        async with app.run_test() as pilot:
            await pilot.pause()
            app.query_one("#sample-prompt", Button).press()
            await settle(app, pilot)

            assert app.state.active_conversation.messages[0].content == SAMPLE_PROMPT
            assert len(app.state.active_conversation.messages) == 2

    @pytest.mark.asyncio
    async def test_failure_keeps_transcript_and_shows_error(self, failing_client):
        app = UllamaApp(client=failing_client)
        async with app.run_test() as pilot:
            await submit(app, pilot, "hello")

            conversation = app.state.active_conversation
            assert conversation.messages == (Message(role="user", content="hello"),)
            assert app.state.awaiting_reply is False
            assert app.state.last_error is not None
            assert app.state.last_error.description == "Proxy returned HTTP 500"
            assert len(app.query("#send-error")) == 1
            assert app.query_one("#chat-input", ChatTextArea).disabled is False

    @pytest.mark.asyncio
    async def test_unexpected_client_error_reported(self, broken_client):
        """Test that an error outside ProxyError is shown like any failed send."""
        app = UllamaApp(client=broken_client)
        async with app.run_test() as pilot:
            await submit(app, pilot, "hi")

            assert app.return_code is None
            assert app.state.awaiting_reply is False
            assert app.state.active_conversation.messages == (Message(role="user", content="hi"),)
            assert app.state.last_error is not None
            assert app.state.last_error.description == "unexpected"
            assert len(app.query("#send-error")) == 1

    @pytest.mark.asyncio
    async def test_one_request_in_flight(self):
        """Test that nothing else is sent while a reply is outstanding."""
        client = GatedClient()
        app = UllamaApp(client=client)
        async with app.run_test() as pilot:
            app.query_one("#chat-input", ChatTextArea).text = "first"
            await pilot.press("enter")
            await after_layout(pilot)

            assert app.state.awaiting_reply is True
            assert app.query_one("#chat-input", ChatTextArea).disabled is True
            assert app.query_one("#send-btn", Button).disabled is True
            assert len(app.query("#typing-indicator")) == 1

            await pilot.press("ctrl+n")
            await after_layout(pilot)
            # The welcome panel, and its sample prompt, stay hidden while waiting
            assert len(app.query("#sample-prompt")) == 0
            app.query_one("#chat-input-bar", ChatInputBar).post_message(
                ChatInputBar.Submitted("second")
            )
            await after_layout(pilot)

            assert len(client.calls) == 1
            assert app.state.active_conversation.messages == ()

            client.gate.set()
            await settle(app, pilot)

            assert app.state.awaiting_reply is False
            assert app.query_one("#send-btn", Button).disabled is False
            assert len(app.query("#sample-prompt")) == 1
            first = app.state.conversations[-1]
            assert [m.content for m in first.messages] == ["first", "Done"]

    @pytest.mark.asyncio
    async def test_model_change_used_for_next_send(self, fake_client):
        app = UllamaApp(client=fake_client)
        async with app.run_test() as pilot:
            await pilot.pause()
            app.query_one("#model-select", Select).value = "mistral"
            await pilot.pause()

            assert app.state.active_conversation.model == "mistral"
            assert app.state.last_chosen_model == "mistral"

            await submit(app, pilot, "hi")
            assert fake_client.calls[-1][1] == "mistral"


class TestConversations:
    """Tests for managing conversations from the UI."""

    @pytest.mark.asyncio
    async def test_new_conversation_binding(self, fake_client):
        app = UllamaApp(client=fake_client)
        async with app.run_test() as pilot:
            await pilot.pause()
            await pilot.press("ctrl+n")
            await pilot.pause()

            assert len(app.state.conversations) == 2
            assert app.state.active_conversation.name == "Conversation 2"
            entries = app.query(ConversationEntry)
            assert len(entries) == 2
            assert entries.first().has_class("-active")

    @pytest.mark.asyncio
    async def test_new_conversation_button(self, fake_client):
        app = UllamaApp(client=fake_client)
        async with app.run_test() as pilot:
            await pilot.pause()
            app.query_one("#new-conversation", Button).press()
            await pilot.pause()

            assert len(app.state.conversations) == 2

    @pytest.mark.asyncio
    async def test_select_conversation(self, fake_client):
        app = UllamaApp(client=fake_client)
        async with app.run_test() as pilot:
            await submit(app, pilot, "first")
            first_id = app.state.active_conversation_id
            await pilot.press("ctrl+n")
            await pilot.pause()

            entry = app.query(ConversationEntry).last()
            entry.post_message(ConversationEntry.Selected(entry.conversation_id))
            await pilot.pause()

            assert app.state.active_conversation_id == first_id
            assert len(app.query(MessageView)) == 2

    @pytest.mark.asyncio
    async def test_delete_last_conversation_replaced(self, fake_client):
        app = UllamaApp(client=fake_client)
        async with app.run_test() as pilot:
            await submit(app, pilot, "hello")
            old_id = app.state.active_conversation_id

            await pilot.press("ctrl+k")
            await pilot.pause()

            assert len(app.state.conversations) == 1
            assert app.state.active_conversation_id != old_id
            assert app.state.active_conversation.name == "New Conversation"
            assert len(app.query("#welcome")) == 1

    @pytest.mark.asyncio
    async def test_delete_button(self, fake_client):
        app = UllamaApp(client=fake_client)
        async with app.run_test() as pilot:
            await pilot.press("ctrl+n")
            await pilot.pause()

            entry = app.query(ConversationEntry).last()
            entry.query_one(Button).press()
            await pilot.pause()

            assert len(app.state.conversations) == 1
            assert app.state.get_conversation(entry.conversation_id) is None


class TestScrolling:
    """Tests for keeping the newest message in view."""

    @staticmethod
    def assert_at_bottom(app) -> None:
        chat = app.query_one("#chat-history")
        assert chat.max_scroll_y > 0
        assert chat.scroll_y == chat.max_scroll_y

    @pytest.mark.asyncio
    async def test_scrolled_to_reply(self, long_reply_client):
        app = UllamaApp(client=long_reply_client)
        async with app.run_test(size=(100, 30)) as pilot:
            await submit(app, pilot, "Tell me everything")
            await after_layout(pilot)

            self.assert_at_bottom(app)

    @pytest.mark.asyncio
    async def test_scrolled_after_switching_back(self, long_reply_client):
        app = UllamaApp(client=long_reply_client)
        async with app.run_test(size=(100, 30)) as pilot:
            await submit(app, pilot, "Tell me everything")
            await pilot.press("ctrl+n")
            await after_layout(pilot)

            entry = app.query(ConversationEntry).last()
            entry.post_message(ConversationEntry.Selected(entry.conversation_id))
            await after_layout(pilot)

            assert app.state.active_conversation_id == entry.conversation_id
            self.assert_at_bottom(app)


class TestLogPanel:
    """Tests for the diagnostic log panel."""

    @pytest.mark.asyncio
    async def test_toggle(self, fake_client):
        app = UllamaApp(client=fake_client)
        async with app.run_test() as pilot:
            await pilot.pause()
            panel = app.query_one("#debug-panel", DebugPanel)
            assert panel.display is False

            await pilot.press("ctrl+l")
            await pilot.pause()
            assert panel.display is True

            await pilot.press("ctrl+l")
            await pilot.pause()
            assert panel.display is False
