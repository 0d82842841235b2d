# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .huggingface import HuggingFaceClassifier
from .normalization import normalize_label, normalize_response

__all__ = ["HuggingFaceClassifier", "normalize_label", "normalize_response"]
