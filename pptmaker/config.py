import os
from dataclasses import dataclass, field
from pathlib import Path

_HOME = Path(os.path.expanduser("~")) / ".pptmaker"

DEFAULT_API_BASE = "http://localhost:8000"
DEFAULT_HTTP_TIMEOUT = 120.0
DEFAULT_SETTINGS_FETCH_ATTEMPTS = 2


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ClientConfig:
    api_base: str = DEFAULT_API_BASE
    settings_url: str = ""
    data_dir: Path = field(default_factory=lambda: _HOME / "documents")
    prefs_path: Path = field(default_factory=lambda: _HOME / "preferences.json")
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    settings_fetch_attempts: int = DEFAULT_SETTINGS_FETCH_ATTEMPTS
    # Send the default tone even when the user left tone on "auto".
    always_send_tone: bool = False
    log_level: str = "INFO"

    def __post_init__(self):
        if not self.settings_url:
            self.settings_url = self.api_base.rstrip("/") + "/settings"

    @classmethod
    def from_env(cls) -> "ClientConfig":
        api_base = os.getenv("PPTMAKER_API_BASE", DEFAULT_API_BASE)
        return cls(
            api_base=api_base,
            settings_url=os.getenv("PPTMAKER_SETTINGS_URL", ""),
            data_dir=Path(os.getenv("PPTMAKER_DATA_DIR", str(_HOME / "documents"))).expanduser(),
            prefs_path=Path(os.getenv("PPTMAKER_PREFS_PATH", str(_HOME / "preferences.json"))).expanduser(),
            http_timeout=float(os.getenv("PPTMAKER_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT)),
            settings_fetch_attempts=max(1, int(os.getenv("PPTMAKER_SETTINGS_FETCH_ATTEMPTS",
                                                         DEFAULT_SETTINGS_FETCH_ATTEMPTS))),
            always_send_tone=_env_bool("PPTMAKER_ALWAYS_SEND_TONE", False),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
