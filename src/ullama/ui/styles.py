"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.

Layout:
- Sidebar on the left: new conversation, model selector, conversation list
- Main column: transcript above an auto-growing input bar
- Log panel docked below, hidden until toggled
"""

APP_CSS = """
/* ============================================
   Main Screen Layout
   ============================================ */
Screen {
    layout: vertical;
    background: $background;
}

#workspace {
    height: 1fr;
}

/* ============================================
   Sidebar - Conversations and Model
   ============================================ */
#sidebar {
    width: 34;
    height: 100%;
    background: $panel;
    border-right: solid $border;
    padding: 1 1 0 1;
}

#new-conversation {
    width: 100%;
    margin-bottom: 1;
}

#model-label {
    color: $text-muted;
    text-style: bold;
    padding: 0 1;
}

#model-select {
    width: 100%;
    margin-bottom: 1;
}

#conversation-list {
    height: 1fr;
    background: transparent;
    border: round $secondary 60%;
    border-title-color: $secondary;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    scrollbar-gutter: stable;
}

.conversation-entry {
    height: 1;
    padding: 0 0 0 1;
    margin-bottom: 1;

    &:hover {
        background: $primary 15%;
    }

    &.-active {
        background: $primary 30%;

        & .conversation-name {
            color: $foreground;
            text-style: bold;
        }
    }
}

.conversation-name {
    width: 1fr;
    height: 1;
    color: $text-muted;
}

.delete-conversation {
    width: 3;
    min-width: 3;
    height: 1;
    border: none;
    background: transparent;
    color: $error;

    &:hover {
        background: $error 30%;
    }
}

/* ============================================
   Main Column - Transcript and Input
   ============================================ */
#main {
    width: 1fr;
    height: 100%;
    padding: 0 1;
}

#chat-history {
    height: 1fr;
    background: $panel;
    border: round $primary 60%;
    border-title-color: $primary;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus {
        border: round $primary;
    }
}

/* ============================================
   Welcome View - Empty Conversation
   ============================================ */
#welcome {
    height: auto;
    padding: 1 2;
}

#welcome-title {
    color: $accent;
    text-style: bold;
    margin-bottom: 1;
}

#welcome-intro,
#welcome-lead {
    color: $foreground;
    margin-bottom: 1;
}

#welcome-suggestions {
    color: $text-muted;
    margin-bottom: 1;
}

#sample-prompt {
    width: auto;
}

/* ============================================
   Chat Messages - Conversation Display
   ============================================ */
.chat-message {
    width: 100%;
    height: auto;
    margin: 1 0 0 0;
    padding: 0 2;
    background: transparent;
}

/* User messages - Green accent */
.user-message {
    border-left: tall $success;
    background: $success 8%;

    & .message-header {
        color: $success;
    }
}

/* Assistant messages - Purple accent */
.assistant-message {
    border-left: tall $secondary;
    background: $secondary 8%;

    & .message-header {
        color: $secondary;
    }
}

.message-header {
    height: auto;
    text-style: bold;
}

.message-content {
    height: auto;
    color: $foreground;
}

#typing-indicator LoadingIndicator {
    width: 10;
    height: 1;
    min-height: 1;
    background: transparent;
    color: $secondary;
}

#send-error {
    height: auto;
    margin: 1 0;
    padding: 0 2;
    color: $error;
    border-left: tall $error;
    background: $error 10%;
}

/* ============================================
   Chat Input Bar - Text Entry + Send
   ============================================ */
ChatInputBar {
    height: auto;
    margin: 1 0;
}

/* Height is managed by ChatInputBar as the text grows */
#chat-input {
    width: 1fr;
    border: round $primary 60%;
    padding: 0 1;
    background: $panel;

    &:focus {
        border: round $primary;
    }

    &:disabled {
        opacity: 60%;
    }
}

#send-btn {
    width: 10;
    min-width: 8;
    height: 3;
    margin: 0 0 0 1;
    border: tall $success;
    background: $success;
    color: $background;
    text-style: bold;

    &:hover {
        background: $success-lighten-1;
        border: tall $success-lighten-1;
    }

    &:disabled {
        background: $success 40%;
        border: tall $success 40%;
    }
}

/* ============================================
   Debug/Log Panel
   ============================================ */
#debug-panel {
    height: auto;
    min-height: 6;
    max-height: 14;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus {
        border: round $warning;
    }
}

/* ============================================
   Notification Toasts
   ============================================ */
Toast {
    background: $surface;
    padding: 0 1;

    &.-error {
        border-left: tall $error;
        background: $error 12%;
    }
}

/* ============================================
   Header and Footer
   ============================================ */
Header {
    background: $panel;
    height: 1;
}

HeaderTitle {
    color: $primary;
    text-style: bold;
}

Footer {
    background: $panel;
}

* {
    scrollbar-background: $panel;
    scrollbar-color: $surface-lighten-1;
    scrollbar-color-hover: $primary 50%;
    scrollbar-color-active: $primary;
    scrollbar-size: 1 1;
}
"""
