import logging
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger("pptmaker.analytics")

EventSink = Callable[[str, Dict[str, Any]], None]


def log_sink(event: str, props: Dict[str, Any]) -> None:
    logger.info("event %s %s", event, props)


class Analytics:
    """Named product events, forwarded to whatever analytics SDK the host app wires in."""

    def __init__(self, sink: Optional[EventSink] = None):
        self.sink = sink or log_sink

    def track(self, event: str, **props: Any) -> None:
        try:
            self.sink(event, props)
        except Exception as e:
            logger.warning("analytics sink failed for %s: %r", event, e)

    # App
    def app_launched(self) -> None:
        self.track("app_launched")

    # Generation
    def outline_generated(self, num_slides: int, tone: str) -> None:
        self.track("outline_generated", num_slides=num_slides, tone=tone)

    def outline_generation_failed(self, error: str) -> None:
        self.track("outline_generation_failed", error=error)

    def presentation_generated(self, template: str, num_slides: int) -> None:
        self.track("presentation_generated", template=template, num_slides=num_slides)

    def presentation_generation_failed(self, error: str) -> None:
        self.track("presentation_generation_failed", error=error)

    # Editing
    def template_selected(self, template: str) -> None:
        self.track("template_selected", template=template)

    def slide_edited(self) -> None:
        self.track("slide_edited")

    def slide_removed(self) -> None:
        self.track("slide_removed")

    # History
    def history_viewed(self) -> None:
        self.track("history_viewed")

    # Paywall
    def paywall_shown(self, source: str, has_premium: bool, outline_credits_used: int,
                      outline_credits_limit: int, presentation_credits_used: int,
                      presentation_credits_limit: int) -> None:
        self.track(
            "paywall_shown",
            source=source,
            has_premium=has_premium,
            outline_credits_used=outline_credits_used,
            outline_credits_limit=outline_credits_limit,
            presentation_credits_used=presentation_credits_used,
            presentation_credits_limit=presentation_credits_limit,
        )
