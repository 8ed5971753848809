from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    """Author of a message in a conversation.

    The value is the lowercase token used in wire payloads; ``marker`` is the
    uppercase form used to open a block in a transcript.
    """

    SYSTEM = "system"  # Pre-prompt guiding the model output
    USER = "user"
    ASSISTANT = "assistant"

    @property
    def marker(self) -> str:
        """Transcript marker for this role, e.g. ``USER:``."""
        return f"{self.value.upper()}:"

    @classmethod
    def parse(cls, token: str) -> "Role":
        """Parse a role token such as ``user``, ``USER`` or ``USER:``.

        Args:
            token: Role name, case-insensitive, with an optional trailing colon

        Returns:
            The matching Role

        Raises:
            ValueError: If the token does not name a known role
        """
        name = token.strip()
        if name.endswith(":"):
            name = name[:-1]
        try:
            return cls(name.lower())
        except ValueError:
            raise ValueError(f"Unknown role: {token!r}") from None


class Message(BaseModel):
    """A single conversation turn."""

    model_config = ConfigDict(frozen=True)

    role: Role = Field(description="Author of the message")
    content: str = Field(default="", description="Message text, possibly multi-line")

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=Role.USER, content=content)

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role=Role.SYSTEM, content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(role=Role.ASSISTANT, content=content)

    def to_wire(self) -> dict[str, str]:
        """Convert to the ``{"role", "content"}`` payload shape."""
        return {"role": self.role.value, "content": self.content}


class Usage(BaseModel):
    """Token usage reported by a backend for one exchange.

    Any field may be unknown; backends are free to omit usage entirely.
    """

    model_config = ConfigDict(frozen=True)

    prompt_tokens: int | None = Field(default=None, ge=0)
    completion_tokens: int | None = Field(default=None, ge=0)
    total_tokens: int | None = Field(default=None, ge=0)


def fold_usage(running: int | None, total: int | None) -> int | None:
    """Add a turn's total tokens to a running count.

    Unknown is sticky: once either side is None the result stays None.

    Args:
        running: Cumulative token count so far, or None if unknown
        total: Total tokens of the latest exchange, or None if unknown

    Returns:
        The new cumulative count, or None
    """
    if running is None or total is None:
        return None
    return running + total


class CompletionMessage(BaseModel):
    """Message object inside a completion choice."""

    content: str | None = None
    role: str | None = None


class CompletionChoice(BaseModel):
    """One candidate completion."""

    index: int | None = None
    message: CompletionMessage | None = None
    finish_reason: str | None = None


class ChatCompletionPayload(BaseModel):
    """Response body of a chat-completion style backend.

    Only the fields needed for normalization are declared; anything else in
    the body is ignored.
    """

    choices: list[CompletionChoice] = Field(description="Candidate completions")
    usage: Usage | None = Field(default=None, description="Token usage, if reported")
    model: str | None = Field(default=None, description="Model that produced the reply")


class ModelEntry(BaseModel):
    """One entry of a model-listing response."""

    id: str
    object: str
    owned_by: str | None = None


class ModelList(BaseModel):
    """Response body of a model-listing endpoint."""

    data: list[ModelEntry] = Field(default_factory=list)

    def available(self) -> list[str]:
        """Ids of entries that describe models."""
        return [entry.id for entry in self.data if entry.object == "model"]
