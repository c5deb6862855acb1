"""Supabase (PostgREST) implementation of the TranscriptRepository interface."""

from typing import Any

from supabase import Client
from transcription_common import InsertFailedError, setup_logging

from interfaces import TranscriptRepository

logger = setup_logging()


class SupabaseTranscriptRepository(TranscriptRepository):
    """
    Stores transcript rows in a Supabase table.

    Rows are only ever appended; nothing here updates or deletes.
    """

    def __init__(self, client: Client, table_name: str):
        self._client = client
        self._table_name = table_name

    def insert(self, row: dict[str, Any]) -> dict[str, Any]:
        try:
            response = self._client.table(self._table_name).insert(row).execute()
        except Exception as e:
            logger.exception(
                "Supabase insert failed", extra={"table": self._table_name}
            )
            raise InsertFailedError(self._table_name, e) from e

        if not response.data:
            logger.error("Supabase insert returned no rows", extra={"table": self._table_name})
            raise InsertFailedError(
                self._table_name, ValueError("Insert returned no rows")
            )

        stored = response.data[0]
        logger.info(
            "Transcript row inserted",
            extra={"table": self._table_name, "record_id": stored.get("id")},
        )
        return stored

    def get(self, record_id: Any) -> dict[str, Any] | None:
        response = (
            self._client.table(self._table_name)
            .select("*")
            .eq("id", record_id)
            .limit(1)
            .execute()
        )
        return response.data[0] if response.data else None
