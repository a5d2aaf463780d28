"""UI configuration constants.

Centralizes magic numbers and configuration values for the UI module.
"""


class LogLevel:
    """Log level constants with numeric values for comparison.

    Values match the stdlib ``logging`` levels, so log records can be
    forwarded to the log panel without translation.
    Lower numeric value = more verbose (shows more messages).
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _names = {
        DEBUG: "DEBUG",
        INFO: "INFO",
        WARNING: "WARNING",
        ERROR: "ERROR",
    }

    _from_string = {
        "debug": DEBUG,
        "info": INFO,
        "warning": WARNING,
        "error": ERROR,
    }

    @classmethod
    def name(cls, level: int) -> str:
        """Get the name for a log level."""
        return cls._names.get(level, "UNKNOWN")

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Convert string to log level. Returns DEBUG if invalid."""
        return cls._from_string.get(level_str.lower(), cls.DEBUG)


# Suggested models shown in the model selector: (label, identifier)
MODEL_CHOICES: list[tuple[str, str]] = [
    ("Llama 3", "llama3.2:latest"),
    ("Gemma", "gemma"),
    ("Mistral", "mistral"),
    ("Code Llama", "codellama"),
    ("Phi 3", "phi3"),
]

# Input area sizing, in text lines
INPUT_MIN_LINES = 1
INPUT_MAX_LINES = 8
INPUT_CHROME_LINES = 2  # Border rows around the text

# Keys that insert a newline instead of submitting
NEWLINE_KEYS = ("shift+enter", "ctrl+j")

# Empty-conversation welcome view
SAMPLE_PROMPT = "What is AI?"
WELCOME_TITLE = "Welcome to Ullama!"
WELCOME_INTRO = (
    "Ullama is your AI assistant, ready to help you with questions, ideas, "
    "and everyday tasks. Whether you're curious about technology, need help "
    "with code, or just want to brainstorm, I'm here for you."
)
WELCOME_SUGGESTIONS = [
    "Ask about AI, science, or technology",
    "Get help with programming or debugging code",
    "Summarize articles or documents",
    "Generate creative writing, emails, or ideas",
    "And much more, just start typing!",
]

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
