"""Audio transcription endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile
from transcription_common.logging import setup_logging

from dependencies import get_pipeline
from exceptions import InvalidUploadError
from handlers import TranscriptionPipeline
from handlers.persistence_handler import DEFAULT_USER_ID
from response_models import TranscribeResponse

logger = setup_logging()

router = APIRouter(prefix="/api", tags=["transcription"])

PipelineDep = Annotated[TranscriptionPipeline, Depends(get_pipeline)]


@router.post("/transcribe", response_model=TranscribeResponse)
def transcribe_audio(
    pipeline: PipelineDep,
    audio: UploadFile | None = File(None, description="Audio file to transcribe"),
    user_id: str = Form(DEFAULT_USER_ID, max_length=128),
) -> TranscribeResponse:
    """
    Transcribes an uploaded audio file.

    Stores the audio and transcript, then returns the transcript.
    """
    if audio is None:
        raise InvalidUploadError("No audio file provided")

    logger.info(
        "Received transcription request",
        extra={
            "upload_name": audio.filename,
            "content_type": audio.content_type,
            "size": audio.size,
        },
    )

    result = pipeline.run(
        filename=audio.filename,
        content_type=audio.content_type,
        size=audio.size,
        data=audio.file,
        user_id=user_id,
    )

    return TranscribeResponse(
        transcription=result.transcription.transcript,
        audio_url=result.record.audio_url,
        provider=result.transcription.provider,
        language_code=result.transcription.language_code,
    )
