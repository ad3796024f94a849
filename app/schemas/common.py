"""
Input clean-up applied before field rules run.

Text fields are trimmed, so a value of only spaces fails ``min_length=1``
like an empty one. Optional fields treat an empty string as "not given".
Passwords are never touched.
"""


def strip_text(value):
    return value.strip() if isinstance(value, str) else value


def blank_to_none(value):
    value = strip_text(value)
    return None if value == "" else value


def normalize_email(value):
    return value.strip().lower() if isinstance(value, str) else value
