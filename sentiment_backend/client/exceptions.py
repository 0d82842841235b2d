# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass(slots=True)
class ApiClientError(Exception):
    status: int
    code: str
    message: str | None = None
    context: Mapping[str, Any] | None = None

    def __str__(self) -> str:
        return f"{self.status} {self.code}: {self.message or ''}".rstrip(": ")


class NotAuthenticatedError(ApiClientError):
    def __init__(self) -> None:
        super().__init__(status=401, code="not_authenticated", message="Please log in first")


class InvalidTextError(ApiClientError):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(status=400, code=code, message=message)
