"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

_CURRENCY_SYMBOLS = re.compile(r"[$€£¥₪₽₹]")
_CURRENCY_CODE = re.compile(r"^[A-Z]{3}\s*|\s*[A-Z]{3}$", re.IGNORECASE)


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45", "₪ 123.45", "123.45 EUR", "123.45 eur"
    - "-123.45", "-$123.45", "123.45-"
    - "1,234.56", "1.234,56", "1 234,56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed or is not finite
    """
    if amount_str is None or not str(amount_str).strip():
        raise ValueError("Empty amount string")

    amount_str = str(amount_str).strip()
    original = amount_str

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1].strip()

    # Trailing minus, as some bank exports write debits
    if amount_str.endswith("-") and not amount_str.startswith("-"):
        is_negative = not is_negative
        amount_str = amount_str[:-1].strip()

    # Remove currency symbols and ISO codes
    amount_str = _CURRENCY_SYMBOLS.sub("", amount_str)
    amount_str = _CURRENCY_CODE.sub("", amount_str.strip())

    # Remove whitespace and apostrophe thousands separators
    amount_str = re.sub(r"[\s' ]", "", amount_str)
    amount_str = _normalize_separators(amount_str)

    try:
        amount = Decimal(amount_str)
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Could not parse amount '{original}': {e!r}")

    if not amount.is_finite():
        raise ValueError(f"Amount '{original}' is not a finite number")

    return -amount if is_negative else amount


def _normalize_separators(amount_str: str) -> str:
    """Reduce thousands/decimal separators to a plain ``1234.56`` form.

    The right-most of ``,`` and ``.`` is the decimal separator when both are
    present. A lone comma followed by exactly two digits is a decimal comma;
    any other comma groups thousands. A single dot is always the decimal
    point, so "1.234" is one and a fraction, never one thousand; dots are not
    accepted as thousands groups without a decimal comma.
    """
    if "," in amount_str and "." in amount_str:
        if amount_str.rfind(",") > amount_str.rfind("."):
            return amount_str.replace(".", "").replace(",", ".")
        return amount_str.replace(",", "")
    if amount_str.count(",") == 1 and re.search(r",\d{2}$", amount_str):
        return amount_str.replace(",", ".")
    return amount_str.replace(",", "")
