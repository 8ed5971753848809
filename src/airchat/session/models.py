from pydantic import BaseModel, ConfigDict, Field


class ClientConfig(BaseModel):
    """Options applied to every turn of a session."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_name: str | None = Field(
        default=None,
        description="Model override; None uses the provider's default"
    )
    max_tokens: int | None = Field(
        default=None,
        ge=1,
        description="Ceiling on tokens generated per reply"
    )
    verbose: bool = Field(default=False, description="Log usage for every turn")
