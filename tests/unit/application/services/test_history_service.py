# nosec B101


from datetime import datetime

from application.services.history_service import ConversionHistory
from domain.models.currency import ConversionRecord


def make_record(amount: float) -> ConversionRecord:
    return ConversionRecord(
        from_currency='USD',
        to_currency='EUR',
        amount=amount,
        converted_amount=amount * 0.85,
        rate=0.85,
        timestamp=datetime(2025, 11, 5, 10, 30, 0),
    )


def test_record_then_list_returns_entry():
    history = ConversionHistory()
    record = make_record(10)

    history.record(record)

    assert history.list() == [record]
    assert len(history) == 1


def test_list_keeps_insertion_order():
    history = ConversionHistory()
    records = [make_record(amount) for amount in (1, 2, 3)]
    for record in records:
        history.record(record)

    assert history.list() == records


def test_list_returns_a_copy():
    history = ConversionHistory()
    history.record(make_record(10))

    snapshot = history.list()
    snapshot.append(make_record(20))
    snapshot.clear()

    assert len(history.list()) == 1


def test_clear_empties_history():
    history = ConversionHistory()
    history.record(make_record(10))

    history.clear()

    assert history.list() == []
    assert len(history) == 0


def test_latest_is_most_recent_first_and_truncated():
    history = ConversionHistory()
    records = [make_record(amount) for amount in range(15)]
    for record in records:
        history.record(record)

    latest = history.latest(10)

    assert len(latest) == 10
    assert latest[0] is records[-1]
    assert latest[-1] is records[5]
    assert history.latest(0) == []
    assert len(history.latest(100)) == 15
