"""
Number and symbol formatting shared by the app and the calculation sheet.
"""

import math

_ASCII_SYMBOLS = {
    'ρ': 'rho',
    'ε': 'e',
    'φ': 'phi',
    'β': 'B',
}


def format_number(value: float, decimals: int = 3) -> str:
    """Fixed-decimal string, or 'N/A' for inf/nan."""
    if not math.isfinite(value):
        return 'N/A'
    return f"{value:.{decimals}f}"


def format_percent(ratio: float, decimals: int = 3) -> str:
    """Ratio as a percentage, e.g. 0.011628 -> '1.163%'."""
    if not math.isfinite(ratio):
        return 'N/A'
    return f"{ratio * 100:.{decimals}f}%"


def to_ascii(text: str) -> str:
    """Transliterate Greek symbols for plain-ASCII output."""
    for symbol, ascii_name in _ASCII_SYMBOLS.items():
        text = text.replace(symbol, ascii_name)
    return text
