from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, field_serializer

from sentiment_backend.domain.analyses.entities import Analysis


class AnalyzeRequestDTO(BaseModel):
    # Emptiness and length limits are enforced by the analyze use case.
    text: str


class HistoryEntryDTO(BaseModel):
    text: str
    sentiment: str
    confidence: float
    created_at: datetime

    @field_serializer("created_at")
    def _serialize_created_at(self, value: datetime) -> str:
        return value.isoformat()

    @classmethod
    def from_domain(cls, analysis: Analysis) -> HistoryEntryDTO:
        return cls(
            text=analysis.text,
            sentiment=analysis.sentiment.value,
            confidence=analysis.confidence,
            created_at=analysis.created_at,
        )


class HistorySummaryQueryDTO(BaseModel):
    start: date | None = None
    end: date | None = None
