"""State transitions for a chat session.

Every function takes a ``ChatState`` and returns a new one; nothing here
touches the UI or the network. The app owns the current state and swaps it
for whatever these functions return.
"""

from .models import (
    NEW_CONVERSATION_NAME,
    ChatState,
    Conversation,
    Message,
    PendingSend,
    SendError,
)

# Conversation names are derived from at most this many words...
NAME_MAX_WORDS = 8
# ...and at most this many characters, before the ellipsis.
NAME_MAX_CHARS = 40
NAME_ELLIPSIS = "..."

CREATED_NAME_PREFIX = "Conversation "


class ConversationNotFoundError(KeyError):
    """Raised when an operation names a conversation that does not exist."""


def new_chat_state(default_model: str) -> ChatState:
    """Create the initial state: one empty "New Conversation"."""
    conversation = Conversation(model=default_model)
    return ChatState(
        conversations=(conversation,),
        active_conversation_id=conversation.id,
        last_chosen_model=default_model,
    )


def is_placeholder_name(name: str) -> bool:
    """Check whether a name was assigned automatically rather than derived."""
    return name == NEW_CONVERSATION_NAME or name.startswith(CREATED_NAME_PREFIX)


def derive_conversation_name(content: str) -> str:
    """Build a conversation name from the first message.

    Takes the first words of the message, caps the result in length and
    appends an ellipsis when anything was cut off.

    >>> derive_conversation_name("What is AI?")
    'What is AI?'
    >>> derive_conversation_name("one two three four five six seven eight nine")
    'one two three four five six seven eight...'
    """
    words = content.split(" ")
    topic = " ".join(words[:NAME_MAX_WORDS])
    if len(topic) > NAME_MAX_CHARS:
        topic = topic[:NAME_MAX_CHARS]
    if len(content) > len(topic):
        topic += NAME_ELLIPSIS
    return topic


def _replace_conversation(state: ChatState, updated: Conversation) -> tuple[Conversation, ...]:
    return tuple(
        updated if conversation.id == updated.id else conversation
        for conversation in state.conversations
    )


def _require(state: ChatState, conversation_id: str) -> Conversation:
    conversation = state.get_conversation(conversation_id)
    if conversation is None:
        raise ConversationNotFoundError(conversation_id)
    return conversation


def create_conversation(state: ChatState) -> ChatState:
    """Insert a new empty conversation at the front and make it active."""
    conversation = Conversation(
        name=f"{CREATED_NAME_PREFIX}{len(state.conversations) + 1}",
        model=state.last_chosen_model,
    )
    return state.model_copy(update={
        "conversations": (conversation, *state.conversations),
        "active_conversation_id": conversation.id,
    })


def select_conversation(state: ChatState, conversation_id: str) -> ChatState:
    """Switch the active conversation.

    Raises:
        ConversationNotFoundError: If no conversation has this id
    """
    _require(state, conversation_id)
    return state.model_copy(update={"active_conversation_id": conversation_id})


def delete_conversation(state: ChatState, conversation_id: str) -> ChatState:
    """Remove a conversation, keeping the list non-empty.

    If the deleted conversation was active, the first remaining one becomes
    active. Deleting the only conversation replaces it with a fresh
    "New Conversation" using the last chosen model.

    Raises:
        ConversationNotFoundError: If no conversation has this id
    """
    _require(state, conversation_id)
    remaining = tuple(c for c in state.conversations if c.id != conversation_id)

    if not remaining:
        replacement = Conversation(model=state.last_chosen_model)
        return state.model_copy(update={
            "conversations": (replacement,),
            "active_conversation_id": replacement.id,
        })

    active_id = state.active_conversation_id
    if active_id == conversation_id or state.get_conversation(active_id) is None:
        active_id = remaining[0].id
    return state.model_copy(update={
        "conversations": remaining,
        "active_conversation_id": active_id,
    })


def change_model(state: ChatState, model: str) -> ChatState:
    """Set the active conversation's model and remember it for new conversations."""
    active = state.active_conversation
    updated = active.model_copy(update={"model": model})
    return state.model_copy(update={
        "conversations": _replace_conversation(state, updated),
        "last_chosen_model": model,
    })


def begin_send(state: ChatState, text: str) -> tuple[ChatState, PendingSend | None]:
    """Accept a user message for the active conversation.

    Blank input and input submitted while a reply is outstanding are
    ignored: the state is returned unchanged together with ``None``.

    Returns:
        The new state and the request to issue, or the old state and None
    """
    if not text.strip() or state.awaiting_reply:
        return state, None

    active = state.active_conversation
    message = Message(role="user", content=text)

    name = active.name
    if not active.messages and is_placeholder_name(name):
        name = derive_conversation_name(text)

    messages = (*active.messages, message)
    updated = active.model_copy(update={"messages": messages, "name": name})
    new_state = state.model_copy(update={
        "conversations": _replace_conversation(state, updated),
        "active_conversation_id": active.id,
        "awaiting_reply": True,
        "last_error": None,
    })
    pending = PendingSend(conversation_id=active.id, messages=messages, model=active.model)
    return new_state, pending


def complete_send(state: ChatState, pending: PendingSend, content: str) -> ChatState:
    """Append the assistant reply and clear the awaiting flag.

    The reply goes to the conversation that sent the request. If that
    conversation was deleted in the meantime the reply is dropped.
    """
    update: dict[str, object] = {"awaiting_reply": False}
    conversation = state.get_conversation(pending.conversation_id)
    if conversation is not None:
        reply = Message(role="assistant", content=content)
        updated = conversation.model_copy(update={"messages": (*conversation.messages, reply)})
        update["conversations"] = _replace_conversation(state, updated)
    return state.model_copy(update=update)


def fail_send(state: ChatState, pending: PendingSend, error: str) -> ChatState:
    """Clear the awaiting flag and record the failure; the transcript is left as is."""
    return state.model_copy(update={
        "awaiting_reply": False,
        "last_error": SendError(conversation_id=pending.conversation_id, description=error),
    })
