# Popyx Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""Prompt Toolkit validators used by the Popyx value readers."""
from prompt_toolkit.validation import Validator


def number_validator(allow_empty: bool = True) -> Validator:
    """Validator for integer input. An empty answer passes when `allow_empty`."""

    def validate(text: str) -> bool:
        text = text.strip()
        if not text:
            return allow_empty
        try:
            int(text)
        except ValueError:
            return False
        return True

    return Validator.from_callable(validate, error_message="Enter a whole number.")
