# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .gate import AuthGate, extract_bearer_token
from .tokens import JwtTokenService, parse_claims

__all__ = ["AuthGate", "JwtTokenService", "extract_bearer_token", "parse_claims"]
