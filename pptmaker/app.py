import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from .analytics import Analytics, EventSink
from .api_client import BackendClient
from .config import ClientConfig
from .gating import GenerationGate
from .paywall_settings import PaywallSettingsService
from .preferences import Preferences
from .storage import LocalStore
from .usage import EntitlementChecker, NoEntitlements, UsageCounter
from .workflow import WorkflowController

logger = logging.getLogger("pptmaker")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@dataclass
class App:
    config: ClientConfig
    entitlements: EntitlementChecker
    prefs: Preferences
    settings: PaywallSettingsService
    usage: UsageCounter
    analytics: Analytics
    client: BackendClient
    store: LocalStore
    controller: WorkflowController
    gate: GenerationGate


def build_app(config: Optional[ClientConfig] = None,
              entitlements: Optional[EntitlementChecker] = None,
              analytics_sink: Optional[EventSink] = None,
              transport: Optional[httpx.AsyncBaseTransport] = None) -> App:
    """
    Wire every component explicitly, in dependency order:
    config, logging, entitlements, preferences, settings, usage, analytics,
    backend client, local store, controller, gate.

    The entitlement checker must already be usable when passed in; the gate
    consults it on every generation.
    """
    config = config or ClientConfig.from_env()
    configure_logging(config.log_level)
    logger.info("API base = %s", config.api_base)

    entitlements = entitlements or NoEntitlements()
    prefs = Preferences(config.prefs_path)
    settings = PaywallSettingsService(
        config.settings_url, prefs,
        timeout=config.http_timeout,
        attempts=config.settings_fetch_attempts,
        transport=transport,
    )
    usage = UsageCounter(prefs, settings, entitlements)
    analytics = Analytics(analytics_sink)
    client = BackendClient(config.api_base, timeout=config.http_timeout, transport=transport)
    store = LocalStore(config.data_dir)
    controller = WorkflowController(client, store, analytics, always_send_tone=config.always_send_tone)
    gate = GenerationGate(controller, usage, analytics)
    return App(config, entitlements, prefs, settings, usage, analytics, client, store, controller, gate)


def start(app: App) -> "asyncio.Task[None]":
    """Launch hook; must run inside an event loop. The settings fetch is not awaited."""
    app.analytics.app_launched()
    return asyncio.get_running_loop().create_task(app.settings.initialize())
