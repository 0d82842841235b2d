# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import (
    AnalysisConfig,
    AppConfig,
    ClassifierConfig,
    DatabaseConfig,
    SecurityConfig,
    TokenConfig,
    load_config,
)

__all__ = [
    "AnalysisConfig",
    "AppConfig",
    "ClassifierConfig",
    "DatabaseConfig",
    "SecurityConfig",
    "TokenConfig",
    "load_config",
]
