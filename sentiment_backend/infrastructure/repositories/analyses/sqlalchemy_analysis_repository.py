# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from sqlalchemy.exc import SQLAlchemyError

from sentiment_backend.domain.analyses.entities import Analysis as DomainAnalysis
from sentiment_backend.domain.analyses.entities import Sentiment
from sentiment_backend.domain.analyses.exceptions import PersistenceFailureError
from sentiment_backend.domain.analyses.repositories import AnalysisRepository
from sentiment_backend.infrastructure.db.models import Analysis
from sentiment_backend.infrastructure.db.session import Database, as_utc


def _to_domain(row: Analysis) -> DomainAnalysis:
    return DomainAnalysis(
        id=row.id,
        owner_id=row.user_id,
        text=row.text,
        sentiment=Sentiment(row.sentiment),
        confidence=float(row.confidence),
        created_at=as_utc(row.created_at),
    )


class SqlAlchemyAnalysisRepository(AnalysisRepository):
    def __init__(
        self,
        database: Database,
        *,
        clock: Callable[[], datetime] = lambda: datetime.now(UTC),
    ) -> None:
        self._db = database
        self._clock = clock

    def append(
        self, owner_id: int, text: str, sentiment: Sentiment, confidence: float
    ) -> DomainAnalysis:
        try:
            with self._db.session_scope() as session:
                row = Analysis(
                    user_id=owner_id,
                    text=text,
                    sentiment=sentiment.value,
                    confidence=confidence,
                    created_at=self._clock(),
                )
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except SQLAlchemyError as exc:
            raise PersistenceFailureError() from exc

    def list_by_owner(self, owner_id: int) -> list[DomainAnalysis]:
        try:
            with self._db.session_scope() as session:
                rows = (
                    session.query(Analysis)
                    .filter(Analysis.user_id == owner_id)
                    .order_by(Analysis.created_at.desc(), Analysis.id.desc())
                    .all()
                )
                return [_to_domain(row) for row in rows]
        except SQLAlchemyError as exc:
            raise PersistenceFailureError() from exc
