# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import ValidationError

from sentiment_backend.application.use_cases.analyses.analyze_text import AnalyzeTextUseCase
from sentiment_backend.application.use_cases.analyses.get_history import (
    GetHistorySummaryUseCase,
    GetHistoryUseCase,
)
from sentiment_backend.domain.analyses.exceptions import InvalidDateRangeError
from sentiment_backend.domain.users.entities import TokenClaims
from sentiment_backend.infrastructure.auth import AuthGate
from sentiment_backend.interfaces.http.dto.analysis import (
    AnalyzeRequestDTO,
    HistoryEntryDTO,
    HistorySummaryQueryDTO,
)
from sentiment_backend.shared.errors.validation import (
    format_pydantic_errors,
    raise_validation_error,
)


class AnalysisController:
    def __init__(
        self,
        *,
        auth_gate: AuthGate,
        analyze_use_case: AnalyzeTextUseCase,
        history_use_case: GetHistoryUseCase,
        summary_use_case: GetHistorySummaryUseCase,
    ) -> None:
        self._gate = auth_gate
        self._analyze = analyze_use_case
        self._history = history_use_case
        self._summary = summary_use_case

    def analyze(self, session: TokenClaims) -> tuple[Response, int]:
        try:
            dto = AnalyzeRequestDTO.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            raise_validation_error(exc)

        result = self._analyze.execute(session.user_id, dto.text)
        return jsonify(result.to_dict()), 200

    def history(self, session: TokenClaims) -> tuple[Response, int]:
        records = self._history.execute(session.user_id)
        payload = [HistoryEntryDTO.from_domain(record).model_dump() for record in records]
        return jsonify(payload), 200

    def history_summary(self, session: TokenClaims) -> tuple[Response, int]:
        params = {key: value for key, value in request.args.items() if value}
        try:
            query = HistorySummaryQueryDTO.model_validate(params)
        except ValidationError as exc:
            raise InvalidDateRangeError(context=format_pydantic_errors(exc)) from exc

        summary = self._summary.execute(session.user_id, query.start, query.end)
        return jsonify(summary.to_dict()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("analysis", __name__)
        bp.add_url_rule(
            "/analyze", view_func=self._gate.required(self.analyze), methods=["POST"]
        )
        bp.add_url_rule(
            "/history", view_func=self._gate.required(self.history), methods=["GET"]
        )
        bp.add_url_rule(
            "/history/summary",
            view_func=self._gate.required(self.history_summary),
            methods=["GET"],
        )
        return bp
