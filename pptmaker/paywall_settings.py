import logging
from typing import Optional

import httpx
from pydantic import ValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
    wait_random,
)
from tenacity.wait import wait_base

from .models import DEFAULT_PAYWALL_SETTINGS, PaywallSettings, PaywallSettingsResponse
from .preferences import Preferences

logger = logging.getLogger("pptmaker.settings")

CACHE_KEY = "cached_paywall_settings"


def _raise_for_settings_error(resp: httpx.Response) -> None:
    raise httpx.HTTPStatusError(
        f"settings HTTP {resp.status_code}: {resp.text[:200]}",
        request=resp.request, response=resp,
    )


class PaywallSettingsService:
    """
    Feature limits and paywall behaviour, fetched remotely.

    Resolution order on every fetch: network -> local cache -> built-in
    defaults, so get_settings() always has an answer.
    """

    def __init__(self, settings_url: str, prefs: Preferences, timeout: float = 30.0,
                 attempts: int = 2, wait: Optional[wait_base] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings_url = settings_url
        self.prefs = prefs
        self.timeout = timeout
        self.attempts = max(1, attempts)
        if wait is None:
            wait = wait_exponential(multiplier=0.5, max=4) + wait_random(0, 0.5)
        self.wait = wait
        self._transport = transport
        self._current: Optional[PaywallSettings] = None

    async def initialize(self) -> None:
        await self._fetch_settings()

    async def refresh(self) -> None:
        await self._fetch_settings()

    def get_settings(self) -> PaywallSettings:
        if self._current is not None:
            return self._current
        cached = self._load_from_cache()
        if cached is not None:
            self._current = cached
            return cached
        return DEFAULT_PAYWALL_SETTINGS.model_copy()

    async def _download(self) -> PaywallSettings:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.attempts),
            wait=self.wait,
            retry=retry_if_exception_type((httpx.TransportError, httpx.HTTPStatusError)),
            reraise=True,
        ):
            with attempt:
                async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                    r = await client.get(self.settings_url)
                if r.status_code != 200:
                    _raise_for_settings_error(r)
        return PaywallSettingsResponse.model_validate_json(r.content).settings

    async def _fetch_settings(self) -> None:
        try:
            settings = await self._download()
        except (httpx.HTTPError, httpx.InvalidURL, ValidationError) as e:
            logger.warning("settings fetch failed (%s), using cache or defaults", e)
            self._current = self._load_from_cache() or DEFAULT_PAYWALL_SETTINGS.model_copy()
            return

        self._current = settings
        self._save_to_cache(settings)
        logger.info("paywall settings fetched: outlineLimit=%s presentationLimit=%s",
                    settings.outline_limit, settings.presentation_limit)

    def _save_to_cache(self, settings: PaywallSettings) -> None:
        try:
            self.prefs.set(CACHE_KEY, settings.model_dump(by_alias=True))
        except OSError as e:
            logger.warning("could not cache paywall settings: %r", e)

    def _load_from_cache(self) -> Optional[PaywallSettings]:
        raw = self.prefs.get(CACHE_KEY)
        if raw is None:
            return None
        try:
            return PaywallSettings.model_validate(raw)
        except ValidationError as e:
            logger.warning("cached paywall settings unreadable: %s", e)
            return None
