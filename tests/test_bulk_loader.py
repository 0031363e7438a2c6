# tests/test_bulk_loader.py

import pytest

from app.core.errors import ValidationError
from app.services.bulk_loader import BulkLoader, normalize_codes
from app.services.campaign_service import CampaignService
from app.services.claim_allocator import ClaimAllocator


def test_normalize_trims_and_drops_blanks():
    assert normalize_codes([" A ", "", "  ", "B\n"]) == ["A", "B"]


@pytest.mark.parametrize("payload", [None, "ABC", ["A", 3]])
def test_normalize_rejects_malformed_payload(payload):
    with pytest.raises(ValidationError):
        normalize_codes(payload)


async def test_load_into_empty_pool(any_selector):
    report = await BulkLoader(any_selector).load(["A", "B", "C"])

    assert report.inserted == 3
    stats = await CampaignService(any_selector).stats()
    assert (stats.total, stats.claimed) == (3, 0)


async def test_duplicates_in_batch_are_absorbed(any_selector):
    report = await BulkLoader(any_selector).load(["A", "A", "B"])

    assert report.submitted == 3
    assert report.inserted == 2
    assert (await CampaignService(any_selector).stats()).available == 2


async def test_count_is_net_new_after_dedup(any_selector):
    loader = BulkLoader(any_selector)
    await loader.load(["A", "B"])
    await ClaimAllocator(any_selector).claim("u1")

    report = await loader.load(["A", "B", "C", " C "])

    assert report.submitted == 4
    assert report.inserted == 1
    stats = await CampaignService(any_selector).stats()
    assert (stats.total, stats.claimed) == (3, 1)


async def test_blank_batch_rejected(any_selector):
    with pytest.raises(ValidationError):
        await BulkLoader(any_selector).load(["", "   "])


async def test_load_falls_back_when_durable_store_drops(selector, fake_server):
    fake_server.connected = False

    report = await BulkLoader(selector).load(["A", "B"])

    assert report.mode == "memory"
    assert report.inserted == 2
