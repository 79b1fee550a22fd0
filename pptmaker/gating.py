import logging
from enum import Enum

from .analytics import Analytics
from .usage import UsageCounter
from .workflow import WorkflowController

logger = logging.getLogger("pptmaker.gate")


class GateOutcome(str, Enum):
    COMPLETED = "completed"
    FAILED = "failed"
    LIMIT_REACHED = "limit_reached"
    NOT_READY = "not_ready"


class GenerationGate:
    """Quota check in front of the controller's two generation entry points."""

    def __init__(self, controller: WorkflowController, usage: UsageCounter, analytics: Analytics):
        self.controller = controller
        self.usage = usage
        self.analytics = analytics

    async def generate_outline(self) -> GateOutcome:
        if not self.controller.can_generate_outline:
            return GateOutcome.NOT_READY
        if await self.usage.has_reached_outline_limit():
            self._paywall_shown("limit_reached")
            return GateOutcome.LIMIT_REACHED
        if await self.controller.generate_outline():
            self.usage.record_outline_generation()
            return GateOutcome.COMPLETED
        return GateOutcome.FAILED

    async def generate_presentation(self) -> GateOutcome:
        if not self.controller.can_generate_presentation:
            return GateOutcome.NOT_READY
        if await self.usage.has_reached_presentation_limit():
            self._paywall_shown("limit_reached")
            return GateOutcome.LIMIT_REACHED
        if await self.controller.generate_presentation():
            self.usage.record_presentation_generation()
            return GateOutcome.COMPLETED
        return GateOutcome.FAILED

    def _paywall_shown(self, source: str) -> None:
        summary = self.usage.usage_summary()
        logger.info("limit reached (outlines %d/%d, presentations %d/%d)",
                    summary.outlines, summary.outline_limit,
                    summary.presentations, summary.presentation_limit)
        # Only reached after a negative entitlement check.
        self.analytics.paywall_shown(
            source=source,
            has_premium=False,
            outline_credits_used=summary.outlines,
            outline_credits_limit=summary.outline_limit,
            presentation_credits_used=summary.presentations,
            presentation_credits_limit=summary.presentation_limit,
        )
