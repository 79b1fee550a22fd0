import logging
from dataclasses import dataclass
from typing import Protocol

from .paywall_settings import PaywallSettingsService
from .preferences import Preferences

logger = logging.getLogger("pptmaker.usage")

PRESENTATION_COUNT_KEY = "presentation_generation_count"
OUTLINE_COUNT_KEY = "outline_generation_count"


class EntitlementChecker(Protocol):
    """Boundary to the commerce SDK. Must be configured before any limit check."""

    async def has_premium_access(self) -> bool:
        ...


class NoEntitlements:
    """Checker for builds without a commerce backend: nobody is premium."""

    async def has_premium_access(self) -> bool:
        return False


@dataclass(frozen=True)
class UsageSummary:
    presentations: int
    outlines: int
    presentation_limit: int
    outline_limit: int


class UsageCounter:
    """Persistent generation counters and the limit checks built on them."""

    def __init__(self, prefs: Preferences, settings: PaywallSettingsService,
                 entitlements: EntitlementChecker):
        self.prefs = prefs
        self.settings = settings
        self.entitlements = entitlements

    # ---------- counters ----------
    def record_presentation_generation(self) -> int:
        count = self.presentation_count() + 1
        self.prefs.set(PRESENTATION_COUNT_KEY, count)
        logger.info("presentation count: %d", count)
        return count

    def record_outline_generation(self) -> int:
        count = self.outline_count() + 1
        self.prefs.set(OUTLINE_COUNT_KEY, count)
        logger.info("outline count: %d", count)
        return count

    def presentation_count(self) -> int:
        return max(0, self.prefs.get_int(PRESENTATION_COUNT_KEY))

    def outline_count(self) -> int:
        return max(0, self.prefs.get_int(OUTLINE_COUNT_KEY))

    def reset_all_counts(self) -> None:
        self.prefs.set(PRESENTATION_COUNT_KEY, 0)
        self.prefs.set(OUTLINE_COUNT_KEY, 0)
        logger.info("all usage counts reset")

    # ---------- limits ----------
    async def has_premium_access(self) -> bool:
        # Asked fresh every time: a purchase can complete anywhere in the app.
        try:
            return bool(await self.entitlements.has_premium_access())
        except Exception as e:
            logger.warning("entitlement check failed, treating as free user: %r", e)
            return False

    async def has_reached_presentation_limit(self) -> bool:
        if await self.has_premium_access():
            return False
        return self.presentation_count() >= self.settings.get_settings().presentation_limit

    async def has_reached_outline_limit(self) -> bool:
        if await self.has_premium_access():
            return False
        return self.outline_count() >= self.settings.get_settings().outline_limit

    async def has_reached_any_limit(self) -> bool:
        if await self.has_premium_access():
            return False
        settings = self.settings.get_settings()
        return (self.presentation_count() >= settings.presentation_limit
                or self.outline_count() >= settings.outline_limit)

    def remaining_presentations(self) -> int:
        return max(0, self.settings.get_settings().presentation_limit - self.presentation_count())

    def remaining_outlines(self) -> int:
        return max(0, self.settings.get_settings().outline_limit - self.outline_count())

    def usage_summary(self) -> UsageSummary:
        settings = self.settings.get_settings()
        return UsageSummary(
            presentations=self.presentation_count(),
            outlines=self.outline_count(),
            presentation_limit=settings.presentation_limit,
            outline_limit=settings.outline_limit,
        )
