from __future__ import annotations

from gestionlait.models import DeliveryRecord, DepositRecord, Worker
from gestionlait.services import statistics
from gestionlait.services.records import RecordService
from gestionlait.services.statistics import StatisticsService


def _delivery(worker_id: str, day: int, quantity: float, *, month: int = 3, unit_price: float = 75) -> DeliveryRecord:
    return DeliveryRecord(
        id=f"l-{worker_id}-{month}-{day}",
        worker_id=worker_id,
        year=2024,
        month=month,
        day=day,
        quantity=quantity,
        unit_price=unit_price,
        recorded_at="2024-03-01T00:00:00+00:00",
    )


def _deposit(worker_id: str, day: int, amount: float, *, month: int = 3) -> DepositRecord:
    return DepositRecord(
        id=f"v-{worker_id}-{day}-{amount}",
        worker_id=worker_id,
        year=2024,
        month=month,
        day=day,
        amount=amount,
        created_at="2024-03-01T00:00:00+00:00",
    )


def test_ali_month_scenario(records: RecordService, stats: StatisticsService) -> None:
    ali = records.add_worker("Ali")
    records.upsert_delivery(ali.id, 2024, 3, 1, 10)

    month = stats.worker_month(ali.id, 2024, 3)
    assert month.days_worked == 1
    assert month.total_quantity == 10
    assert month.total_amount == 750
    assert month.average_per_day == 10
    assert month.model_dump(by_alias=True) == {
        "jours_travailles": 1,
        "total_litres": 10,
        "total_montant": 750,
        "moyenne_par_jour": 10,
    }

    records.add_deposit(ali.id, 2024, 3, 1, 200)
    combined = stats.combined(ali.id, 2024, 3)
    assert combined.balance == 550
    assert combined.total_deposit_amount == 200
    assert combined.deposit_count == 1

    records.upsert_delivery(ali.id, 2024, 3, 1, 0)
    month = stats.worker_month(ali.id, 2024, 3)
    assert month.days_worked == 0
    assert month.total_quantity == 0
    assert month.average_per_day == 0


def test_month_stats_filter_by_worker_and_month() -> None:
    deliveries = [
        _delivery("a", 1, 10),
        _delivery("a", 2, 5),
        _delivery("a", 1, 99, month=4),
        _delivery("b", 1, 7),
    ]

    month = statistics.worker_month_stats(deliveries, "a", 2024, 3)

    assert month.days_worked == 2
    assert month.total_quantity == 15
    assert month.total_amount == 15 * 75
    assert month.average_per_day == 7.5


def test_total_amount_uses_each_record_unit_price() -> None:
    deliveries = [_delivery("a", 1, 2, unit_price=70), _delivery("a", 2, 2, unit_price=75)]

    assert statistics.worker_month_stats(deliveries, "a", 2024, 3).total_amount == 290


def test_balance_is_deliveries_minus_deposits() -> None:
    deliveries = [_delivery("a", 1, 3.5), _delivery("a", 2, 1.25), _delivery("b", 2, 40)]
    deposits = [_deposit("a", 1, 100), _deposit("a", 1, 33.3), _deposit("a", 5, 12, month=4)]

    combined = statistics.combined_month_stats(deliveries, deposits, "a", 2024, 3)

    expected_delivered = 3.5 * 75 + 1.25 * 75
    expected_deposited = 100 + 33.3
    assert combined.total_delivery_amount == expected_delivered
    assert combined.total_deposit_amount == expected_deposited
    assert combined.balance == expected_delivered - expected_deposited
    assert combined.days_worked == 2
    assert combined.deposit_count == 2


def test_global_listing_sorted_by_day_with_unknown_fallback() -> None:
    workers = [Worker(id="a", name="Ali", created_at="x")]
    deliveries = [_delivery("a", 9, 1), _delivery("ghost", 2, 4), _delivery("a", 5, 2), _delivery("a", 1, 1, month=2)]
    deposits = [_deposit("ghost", 3, 10), _deposit("a", 1, 20)]

    rows = statistics.global_deliveries(workers, deliveries, 2024, 3)
    assert [(r.day, r.worker_name) for r in rows] == [(2, "Inconnu"), (5, "Ali"), (9, "Ali")]
    assert rows[0].total_amount == 300

    deposit_rows = statistics.global_deposits(workers, deposits, 2024, 3)
    assert [(r.day, r.worker_name) for r in deposit_rows] == [(1, "Ali"), (3, "Inconnu")]
    assert deposit_rows[0].model_dump(by_alias=True)["livreur_nom"] == "Ali"


def test_worker_listings_sorted_by_day() -> None:
    deliveries = [_delivery("a", 20, 1), _delivery("a", 3, 2), _delivery("b", 1, 9)]
    deposits = [_deposit("a", 7, 5), _deposit("a", 2, 6)]

    assert [r.day for r in statistics.worker_deliveries(deliveries, "a", 2024, 3)] == [3, 20]
    assert [v.day for v in statistics.worker_deposits(deposits, "a", 2024, 3)] == [2, 7]


def test_ranking_non_increasing_and_keeps_idle_workers() -> None:
    workers = [
        Worker(id="a", name="Ali", created_at="x"),
        Worker(id="b", name="Bilal", created_at="x"),
        Worker(id="c", name="Chris", created_at="x"),
    ]
    deliveries = [_delivery("a", 1, 5), _delivery("c", 1, 20), _delivery("c", 2, 1), _delivery("b", 1, 50, month=4)]

    rows = statistics.ranking(workers, deliveries, 2024, 3)

    assert [r.id for r in rows] == ["c", "a", "b"]
    quantities = [r.total_quantity for r in rows]
    assert quantities == sorted(quantities, reverse=True)
    idle = rows[-1]
    assert idle.total_quantity == 0 and idle.total_amount == 0 and idle.days_worked == 0
    assert rows[0].days_worked == 2


def test_ranking_ties_keep_store_order() -> None:
    workers = [Worker(id="a", name="Ali", created_at="x"), Worker(id="b", name="Bilal", created_at="x")]

    rows = statistics.ranking(workers, [], 2024, 3)

    assert [r.id for r in rows] == ["a", "b"]
