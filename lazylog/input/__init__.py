"""Input layer: raw key decoding and key routing for the session loop."""

from .key_registry import KeyComboBinding, KeyComboRegistry
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key
from .router import InputRouter, handle_key

__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "InputRouter",
    "KeyComboBinding",
    "KeyComboRegistry",
    "handle_key",
    "read_key",
]
