from __future__ import annotations


def mask_secret(value: str, visible: int = 6) -> str:
    """Return a log-safe preview of a secret such as a document signature.

    Example:
        >>> mask_secret("MIIBkzCCATigAwIBAgI")
        'MIIBkz...(19 chars)'
    """
    if len(value) <= visible:
        return "***"
    return f"{value[:visible]}...({len(value)} chars)"
