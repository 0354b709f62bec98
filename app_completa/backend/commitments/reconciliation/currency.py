"""
Currency normalization.

Every stored amount carries the exchange rate recorded with it. Converting
normalizes the amount to the rate-1 baseline through its own rate and then
re-expresses it at the target rate.
"""

from typing import Dict, Iterable, Optional

from ..models import Currency, coerce_rate


def convert(amount: float, source_rate: float, target_rate: float) -> float:
    """
    Express `amount`, recorded under `source_rate`, under `target_rate`.

    Missing or zero rates count as 1, so the result is always finite.
    """
    return amount * (coerce_rate(source_rate) / coerce_rate(target_rate))


class CurrencyIndex:
    """
    Lookup of currency reference data by id and by code.

    Ids or codes not present in the index resolve to the fallback code and
    symbol.
    """

    def __init__(
        self,
        currencies: Iterable[Currency],
        fallback_code: str = "USD",
        fallback_symbol: str = "$",
    ):
        self.fallback_code = fallback_code.upper()
        self.fallback_symbol = fallback_symbol
        self.by_id: Dict[object, Currency] = {}
        self.by_code: Dict[str, Currency] = {}

        for currency in currencies:
            self.by_id.setdefault(currency.id, currency)
            if currency.code:
                self.by_code.setdefault(currency.code, currency)

    def __len__(self) -> int:
        return len(self.by_id)

    def get(self, currency_id) -> Optional[Currency]:
        return self.by_id.get(currency_id)

    def find_by_code(self, code: Optional[str]) -> Optional[Currency]:
        if not code:
            return None
        return self.by_code.get(code.strip().upper())

    def code_for(self, currency_id) -> str:
        currency = self.by_id.get(currency_id)
        if currency is None or not currency.code:
            return self.fallback_code
        return currency.code

    def symbol_for(self, currency_id) -> str:
        currency = self.by_id.get(currency_id)
        if currency is None or not currency.symbol:
            return self.fallback_symbol
        return currency.symbol
