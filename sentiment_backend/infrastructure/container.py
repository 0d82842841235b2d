# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from sentiment_backend.application.services.password_hashing import WerkzeugPasswordHasher
from sentiment_backend.application.use_cases.analyses.analyze_text import AnalyzeTextUseCase
from sentiment_backend.application.use_cases.analyses.get_history import (
    GetHistorySummaryUseCase,
    GetHistoryUseCase,
)
from sentiment_backend.application.use_cases.users.login_user import (
    LoginUserUseCase,
    VerifyCredentialsUseCase,
)
from sentiment_backend.application.use_cases.users.register_user import RegisterUserUseCase
from sentiment_backend.domain.analyses.repositories import SentimentClassifier
from sentiment_backend.infrastructure.auth import AuthGate, JwtTokenService
from sentiment_backend.infrastructure.classifier import HuggingFaceClassifier
from sentiment_backend.infrastructure.db import Database
from sentiment_backend.infrastructure.repositories.analyses.sqlalchemy_analysis_repository import (
    SqlAlchemyAnalysisRepository,
)
from sentiment_backend.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from sentiment_backend.interfaces.http.controllers.analysis_controller import AnalysisController
from sentiment_backend.interfaces.http.controllers.auth_controller import AuthController
from sentiment_backend.interfaces.http.controllers.misc_controller import MiscController
from sentiment_backend.shared.config import AppConfig
from sentiment_backend.shared.logging import logger


class Container:
    """Process-scoped object graph built from one ``AppConfig``.

    Components are created lazily on first access; ``close`` releases the
    database pool and the classifier HTTP client.
    """

    def __init__(
        self,
        config: AppConfig,
        *,
        classifier: SentimentClassifier | None = None,
    ) -> None:
        self.config = config
        self._classifier_override = classifier

    @cached_property
    def database(self) -> Database:
        return Database(self.config.database)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.database)

    @cached_property
    def analysis_repository(self) -> SqlAlchemyAnalysisRepository:
        return SqlAlchemyAnalysisRepository(self.database)

    @cached_property
    def token_service(self) -> JwtTokenService:
        return JwtTokenService(
            self.config.secret_key,
            ttl=timedelta(seconds=self.config.tokens.ttl_seconds),
            algorithm=self.config.tokens.algorithm,
        )

    @cached_property
    def classifier(self) -> SentimentClassifier:
        if self._classifier_override is not None:
            return self._classifier_override
        return HuggingFaceClassifier(self.config.classifier)

    @cached_property
    def auth_gate(self) -> AuthGate:
        return AuthGate(self.token_service)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def verify_credentials_use_case(self) -> VerifyCredentialsUseCase:
        return VerifyCredentialsUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            credentials=self.verify_credentials_use_case,
            tokens=self.token_service,
        )

    @cached_property
    def analyze_text_use_case(self) -> AnalyzeTextUseCase:
        return AnalyzeTextUseCase(
            classifier=self.classifier,
            analyses=self.analysis_repository,
            max_length=self.config.analysis.text_max_length,
        )

    @cached_property
    def get_history_use_case(self) -> GetHistoryUseCase:
        return GetHistoryUseCase(analyses=self.analysis_repository)

    @cached_property
    def get_history_summary_use_case(self) -> GetHistorySummaryUseCase:
        return GetHistorySummaryUseCase(
            analyses=self.analysis_repository,
            timezone=self.config.analysis.history_timezone,
        )

    # Controllers

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
        )

    @cached_property
    def analysis_controller(self) -> AnalysisController:
        return AnalysisController(
            auth_gate=self.auth_gate,
            analyze_use_case=self.analyze_text_use_case,
            history_use_case=self.get_history_use_case,
            summary_use_case=self.get_history_summary_use_case,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(database=self.database)

    def close(self) -> None:
        classifier = self.__dict__.get("classifier")
        close_classifier = getattr(classifier, "close", None)
        if self._classifier_override is None and callable(close_classifier):
            close_classifier()
        database = self.__dict__.get("database")
        if database is not None:
            database.dispose()
        logger.info("container: closed")
