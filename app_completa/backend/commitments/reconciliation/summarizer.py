"""Grouping of commitment results by currency."""

from typing import Dict, List

from ..models import CommitmentResult, CurrencyGroup


def group_by_currency(results: List[CommitmentResult]) -> List[CurrencyGroup]:
    """
    Group results by currency code.

    Groups appear in order of first encounter; results keep their relative
    order inside each group.
    """
    groups: Dict[str, CurrencyGroup] = {}

    for result in results:
        group = groups.get(result.currency_code)
        if group is None:
            group = CurrencyGroup(
                currency_code=result.currency_code,
                currency_symbol=result.currency_symbol,
            )
            groups[result.currency_code] = group
        group.commitments.append(result)

    return list(groups.values())
