"""Fold a transaction list into totals, breakdowns and a spend histogram."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from decimal import Decimal

from .models import (
    ZERO,
    Histogram,
    HistogramBin,
    NamedAmount,
    NamedDelta,
    Summary,
    SummaryComparison,
    SummaryDelta,
    Transaction,
)

# (label, lower, upper); lower inclusive, upper exclusive, ``None`` is open.
HISTOGRAM_BUCKETS: tuple[tuple[str, Decimal, Decimal | None], ...] = (
    ("$0-$25", Decimal("0"), Decimal("25")),
    ("$25-$50", Decimal("25"), Decimal("50")),
    ("$50-$100", Decimal("50"), Decimal("100")),
    ("$100-$200", Decimal("100"), Decimal("200")),
    ("$200-$400", Decimal("200"), Decimal("400")),
    ("$400+", Decimal("400"), None),
)

# Rows kept per breakdown when comparing two statements.
COMPARE_TOP_N = 10


def _bucket_index(amount: Decimal) -> int:
    for i, (_label, _lower, upper) in enumerate(HISTOGRAM_BUCKETS):
        if upper is None or amount < upper:
            return i
    return len(HISTOGRAM_BUCKETS) - 1


def make_histogram(amounts: Sequence[Decimal]) -> Histogram:
    """Count ``amounts`` into :data:`HISTOGRAM_BUCKETS`.

    An empty input gives no bins and a zero total rather than six empty bins.
    """

    if not amounts:
        return Histogram(bins=(), total_count=0)

    counts = [0] * len(HISTOGRAM_BUCKETS)
    for a in amounts:
        counts[_bucket_index(a)] += 1

    bins = tuple(
        HistogramBin(label=label, lower=lower, upper=upper, count=count)
        for (label, lower, upper), count in zip(HISTOGRAM_BUCKETS, counts, strict=True)
    )
    return Histogram(bins=bins, total_count=len(amounts))


def _ranked(totals: dict[str, Decimal]) -> tuple[NamedAmount, ...]:
    # sorted() is stable, so ties keep first-seen order.
    items = [NamedAmount(name=k, amount=v) for k, v in totals.items()]
    return tuple(sorted(items, key=lambda x: x.amount, reverse=True))


def summarize(txns: Iterable[Transaction]) -> Summary:
    """Compute the :class:`~statement_ledger.models.Summary` for ``txns``."""

    spent = ZERO
    income = ZERO
    transfers = ZERO
    by_category: dict[str, Decimal] = {}
    by_merchant: dict[str, Decimal] = {}
    spend_amounts: list[Decimal] = []

    for t in txns:
        if t.type == "spend":
            spent += t.withdrawal
            by_category[t.category] = by_category.get(t.category, ZERO) + t.withdrawal
            by_merchant[t.merchant] = by_merchant.get(t.merchant, ZERO) + t.withdrawal
            if t.withdrawal > 0:
                spend_amounts.append(t.withdrawal)
        elif t.type == "income":
            income += t.deposit
        elif t.type == "transfer":
            transfers += t.withdrawal + t.deposit

    return Summary(
        spent=spent,
        income=income,
        net=income - spent,
        transfers=transfers,
        categories=_ranked(by_category),
        merchants=_ranked(by_merchant),
        histogram=make_histogram(spend_amounts),
    )


def _named_deltas(
    a: Sequence[NamedAmount], b: Sequence[NamedAmount], limit: int = COMPARE_TOP_N
) -> tuple[NamedDelta, ...]:
    a_map = {x.name: x.amount for x in a}
    b_map = {x.name: x.amount for x in b}
    # Union in first-seen order: A's names, then names only B has.
    names = list(dict.fromkeys([*a_map, *b_map]))
    rows: list[NamedDelta] = []
    for name in names:
        a_amt = a_map.get(name, ZERO)
        b_amt = b_map.get(name, ZERO)
        rows.append(NamedDelta(name=name, a=a_amt, b=b_amt, delta=b_amt - a_amt))
    rows.sort(key=lambda r: abs(r.delta), reverse=True)
    return tuple(rows[:limit])


def compare_summaries(a: Summary, b: Summary) -> SummaryComparison:
    """Pair two statement summaries with the B-minus-A change in each total.

    Categories and merchants are compared by name across both statements; only
    the :data:`COMPARE_TOP_N` biggest absolute changes are kept.
    """

    delta = SummaryDelta(
        spent=b.spent - a.spent,
        income=b.income - a.income,
        net=b.net - a.net,
        transfers=b.transfers - a.transfers,
    )
    return SummaryComparison(
        a=a,
        b=b,
        delta=delta,
        categories=_named_deltas(a.categories, b.categories),
        merchants=_named_deltas(a.merchants, b.merchants),
    )


def format_money(amount: Decimal) -> str:
    """``Decimal("-12.3")`` -> ``"-$12.30"``."""

    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):.2f}"


__all__ = [
    "HISTOGRAM_BUCKETS",
    "COMPARE_TOP_N",
    "make_histogram",
    "summarize",
    "compare_summaries",
    "format_money",
]
