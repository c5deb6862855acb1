"""Response models for the transcription API."""

from pydantic import BaseModel, ConfigDict, Field


class TranscribeResponse(BaseModel):
    """Response returned after a successful transcription."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    transcription: str
    audio_url: str | None = Field(default=None, alias="audioUrl")
    provider: str
    language_code: str | None = Field(default=None, alias="languageCode")


class ErrorResponse(BaseModel):
    """Envelope returned for every failed request."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = False
    error: str
    error_kind: str = Field(alias="errorKind")
    details: str | None = None


class HealthResponse(BaseModel):
    """Liveness probe payload."""

    status: str = "ok"
    providers: list[str]
    storage: bool
