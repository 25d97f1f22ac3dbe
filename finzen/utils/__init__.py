from .privacy import obfuscate_text, mask_email
from .timestamp import parse_timestamp, parse_calendar_date
from .formatting import format_money, format_signed_money, format_relative_date

__all__ = [
    "obfuscate_text",
    "mask_email",
    "parse_timestamp",
    "parse_calendar_date",
    "format_money",
    "format_signed_money",
    "format_relative_date",
]
