# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .use_cases.analyses.analyze_text import AnalyzeTextUseCase
from .use_cases.analyses.get_history import (
    GetHistorySummaryUseCase,
    GetHistoryUseCase,
    HistorySummary,
)
from .use_cases.users.login_user import LoginUserUseCase, VerifyCredentialsUseCase
from .use_cases.users.register_user import RegisterUserUseCase

__all__ = [
    "AnalyzeTextUseCase",
    "GetHistorySummaryUseCase",
    "GetHistoryUseCase",
    "HistorySummary",
    "LoginUserUseCase",
    "RegisterUserUseCase",
    "VerifyCredentialsUseCase",
]
