import asyncio

import pytest

from pptmaker.paywall_settings import CACHE_KEY
from pptmaker.preferences import Preferences
from pptmaker.usage import UsageCounter

from fake_backend import SETTINGS


@pytest.fixture
def usage(prefs, settings_service, entitlements):
    # No fetch: the default record applies (2 presentations, 3 outlines)
    return UsageCounter(prefs, settings_service, entitlements)


def test_counters_start_at_zero_and_persist(usage, prefs):
    assert usage.outline_count() == 0
    assert usage.presentation_count() == 0
    usage.record_outline_generation()
    usage.record_outline_generation()
    usage.record_presentation_generation()

    reopened = Preferences(prefs.path)
    assert reopened.get_int("outline_generation_count") == 2
    assert reopened.get_int("presentation_generation_count") == 1


def test_limit_reached_at_count_equal_limit(usage):
    for _ in range(2):
        assert asyncio.run(usage.has_reached_outline_limit()) is False
        usage.record_outline_generation()
    assert asyncio.run(usage.has_reached_outline_limit()) is False
    usage.record_outline_generation()
    assert asyncio.run(usage.has_reached_outline_limit()) is True
    assert asyncio.run(usage.has_reached_presentation_limit()) is False
    assert asyncio.run(usage.has_reached_any_limit()) is True


def test_limits_follow_current_settings(usage, prefs):
    prefs.set(CACHE_KEY, dict(SETTINGS))
    for _ in range(3):
        usage.record_outline_generation()
    assert asyncio.run(usage.has_reached_outline_limit()) is False
    assert usage.remaining_outlines() == 4


def test_premium_bypasses_and_is_checked_every_time(usage, entitlements):
    for _ in range(5):
        usage.record_presentation_generation()
    assert asyncio.run(usage.has_reached_presentation_limit()) is True

    entitlements.active = True
    assert asyncio.run(usage.has_reached_presentation_limit()) is False
    assert asyncio.run(usage.has_reached_any_limit()) is False

    entitlements.active = False
    assert asyncio.run(usage.has_reached_presentation_limit()) is True
    assert entitlements.calls == 4


def test_entitlement_errors_count_as_free(prefs, settings_service):
    class Broken:
        async def has_premium_access(self):
            raise RuntimeError("store unavailable")

    usage = UsageCounter(prefs, settings_service, Broken())
    for _ in range(3):
        usage.record_outline_generation()
    assert asyncio.run(usage.has_reached_outline_limit()) is True


def test_remaining_never_negative_and_summary(usage):
    for _ in range(4):
        usage.record_presentation_generation()
    usage.record_outline_generation()
    assert usage.remaining_presentations() == 0
    assert usage.remaining_outlines() == 2

    summary = usage.usage_summary()
    assert (summary.presentations, summary.outlines) == (4, 1)
    assert (summary.presentation_limit, summary.outline_limit) == (2, 3)


def test_reset_all_counts(usage):
    usage.record_outline_generation()
    usage.record_presentation_generation()
    usage.reset_all_counts()
    assert usage.outline_count() == 0
    assert usage.presentation_count() == 0


def test_garbage_in_prefs_reads_as_zero(usage, prefs):
    prefs.set("outline_generation_count", "seven")
    assert usage.outline_count() == 0
    usage.record_outline_generation()
    assert usage.outline_count() == 1
