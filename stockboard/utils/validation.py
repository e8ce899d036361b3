"""Request parameter validation utilities."""
from fnmatch import fnmatch
from urllib.parse import urlsplit

MAX_SYMBOL_LENGTH = 20
MIN_SEARCH_QUERY_LENGTH = 2


def normalize_symbol(symbol: str) -> str:
    """
    Normalize a symbol to uppercase and stripped.

    Args:
        symbol: The symbol to normalize

    Returns:
        Uppercase, stripped symbol
    """
    return symbol.upper().strip()


def is_valid_symbol(symbol: str) -> bool:
    """
    Validate stock/index symbol format.

    Allows alphanumerics plus the separators exchanges put in tickers:
    periods (BRK.B, BHP.AX), hyphens, carets for indices (^GSPC) and
    equals signs for futures/FX (ES=F, EURUSD=X).

    Args:
        symbol: The symbol to validate (should already be uppercase/stripped)

    Returns:
        True if symbol format is valid, False otherwise
    """
    if not symbol or len(symbol) > MAX_SYMBOL_LENGTH:
        return False
    cleaned = symbol.replace("^", "").replace(".", "").replace("-", "").replace("=", "")
    return cleaned.isalnum()


def is_searchable_query(query: str | None) -> bool:
    """Return True when a free-text query is long enough to send upstream."""
    return query is not None and len(query.strip()) >= MIN_SEARCH_QUERY_LENGTH


def is_allowed_url(url: str, allowed_hosts: list[str]) -> bool:
    """
    Check a URL against a list of host patterns.

    Only http/https URLs qualify. Patterns use fnmatch syntax, so
    ``*.finnhub.io`` matches ``static2.finnhub.io`` but not ``finnhub.io``.

    Args:
        url: Absolute URL supplied by the caller
        allowed_hosts: Host patterns

    Returns:
        True if the URL's host matches any pattern
    """
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    if parts.scheme not in ("http", "https"):
        return False
    host = (parts.hostname or "").lower()
    if not host:
        return False
    return any(fnmatch(host, pattern.lower()) for pattern in allowed_hosts)
