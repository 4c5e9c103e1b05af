from dataclasses import dataclass


@dataclass(frozen=True)
class Currency:
    code: str
    symbol: str
    label: str


CURRENCIES = {
    "USD": Currency("USD", "$", "USD ($)"),
    "EUR": Currency("EUR", "€", "EUR (€)"),
    "GBP": Currency("GBP", "£", "GBP (£)"),
    "JPY": Currency("JPY", "¥", "JPY (¥)"),
    "CAD": Currency("CAD", "$", "CAD ($)"),
    "CNY": Currency("CNY", "¥", "CNY (¥)"),
    "RON": Currency("RON", "L", "RON (L)"),
}


def currency_symbol(code: str) -> str:
    currency = CURRENCIES.get(code)
    return currency.symbol if currency else code


def format_currency(amount: float, code: str = "USD") -> str:
    """Format a float as currency string, e.g. '€1,234.56'."""
    if amount is None:
        return "N/A"
    return f"{currency_symbol(code)}{amount:,.2f}"


def format_signed(amount: float, code: str = "USD") -> str:
    """Format with +/- sign."""
    sign = "+" if amount >= 0 else "-"
    return f"{sign}{currency_symbol(code)}{abs(amount):,.2f}"
