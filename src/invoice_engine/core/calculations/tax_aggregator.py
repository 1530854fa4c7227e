from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from invoice_engine.core.models.document import LineItem

ZERO = Decimal("0")


@dataclass(frozen=True)
class TaxGroup:
    """All line items sharing one tax rate. Amounts are unrounded."""

    tax_rate_percent: Decimal
    net_amount: Decimal
    tax_amount: Decimal

    @property
    def gross_amount(self) -> Decimal:
        return self.net_amount + self.tax_amount


@dataclass(frozen=True)
class TaxSummary:
    groups: tuple[TaxGroup, ...]

    @property
    def net(self) -> Decimal:
        return sum((g.net_amount for g in self.groups), ZERO)

    @property
    def tax(self) -> Decimal:
        return sum((g.tax_amount for g in self.groups), ZERO)

    @property
    def gross(self) -> Decimal:
        return sum((g.gross_amount for g in self.groups), ZERO)

    @property
    def rates(self) -> list[Decimal]:
        return [g.tax_rate_percent for g in self.groups]


def aggregate(items: Iterable[LineItem]) -> TaxSummary:
    """
    Group usable items by tax rate, highest rate first.
    Negative quantities/prices are summed as given; an empty input yields one all-zero group.
    """
    nets: dict[Decimal, Decimal] = {}
    taxes: dict[Decimal, Decimal] = {}
    for item in items:
        if not item.is_usable:
            continue
        rate = item.tax_rate_percent
        net = item.quantity * item.unit_price
        # Decimal keys: 19 and 19.0 land in the same group
        nets[rate] = nets.get(rate, ZERO) + net
        taxes[rate] = taxes.get(rate, ZERO) + net * rate / Decimal(100)

    if not nets:
        return TaxSummary(groups=(TaxGroup(tax_rate_percent=ZERO, net_amount=ZERO, tax_amount=ZERO),))

    groups = [TaxGroup(tax_rate_percent=rate, net_amount=nets[rate], tax_amount=taxes[rate]) for rate in nets]
    groups.sort(key=lambda g: g.tax_rate_percent, reverse=True)
    return TaxSummary(groups=tuple(groups))
