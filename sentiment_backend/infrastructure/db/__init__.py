# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from . import models
from .session import Base, Database, as_utc, build_engine

__all__ = ["Base", "Database", "as_utc", "build_engine", "models"]
