import pytest

from infrastructure.notifications.models import DeliveryOutcome, DeliverySummary


@pytest.mark.unit
def test_delivery_outcome_token_prefix_is_ten_characters():
    outcome = DeliveryOutcome(token="abcdefghijklmnop", delivered=False)

    assert outcome.token_prefix == "abcdefghij"


@pytest.mark.unit
def test_delivery_summary_defaults():
    summary = DeliverySummary()

    assert summary.sent_count == 0
    assert summary.total_count == 0
    assert summary.failed_count == 0
    assert summary.outcomes == []


@pytest.mark.unit
def test_delivery_summary_failed_count():
    summary = DeliverySummary(sent_count=1, total_count=3)

    assert summary.failed_count == 2
