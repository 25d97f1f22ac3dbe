"""Privacy utilities for obfuscating sensitive data in logs."""
import re


def obfuscate_text(text: str) -> str:
    """
    Obfuscate free text (e.g. transaction descriptions).
    Replaces alphanumeric characters with asterisks, preserves structure.
    """
    return re.sub(r'[A-Za-z0-9]', '*', text or "")


def mask_email(email: str) -> str:
    """Keep the first character of the local part and the domain: ``j***@example.com``."""
    if not email or "@" not in email:
        return "***"
    local, domain = email.split("@", 1)
    return f"{local[:1]}***@{domain}"

