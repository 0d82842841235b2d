# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import ApiClientError, InvalidTextError, NotAuthenticatedError
from .session import SessionClient

__all__ = [
    "ApiClientError",
    "InvalidTextError",
    "NotAuthenticatedError",
    "SessionClient",
]
