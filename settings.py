# settings.py
import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

DEFAULT_BROWSER_ARGS = ["--no-sandbox", "--disable-dev-shm-usage"]
BROWSERS = ("chrome", "firefox")


def _env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    browser: str = "chrome"
    headless: bool = False
    browser_args: List[str] = field(default_factory=lambda: list(DEFAULT_BROWSER_ARGS))
    page_timeout: float = 10.0
    mcp_transport: str = "sse"
    log_level: str = "INFO"


def settings_from_env():
    """Reads CASCADE_* variables, after loading a .env file if one exists."""
    load_dotenv()

    browser = os.getenv("CASCADE_BROWSER", "chrome").strip().lower()
    if browser not in BROWSERS:
        raise ValueError(f"CASCADE_BROWSER must be one of {', '.join(BROWSERS)}, got '{browser}'.")

    raw_args = os.getenv("CASCADE_BROWSER_ARGS")
    if raw_args is None:
        browser_args = list(DEFAULT_BROWSER_ARGS)
    else:
        browser_args = [a.strip() for a in raw_args.split(",") if a.strip()]

    return Settings(
        browser=browser,
        headless=_env_bool("CASCADE_HEADLESS"),
        browser_args=browser_args,
        page_timeout=float(os.getenv("CASCADE_PAGE_TIMEOUT", "10")),
        mcp_transport=os.getenv("CASCADE_MCP_TRANSPORT", "sse"),
        log_level=os.getenv("CASCADE_LOG_LEVEL", "INFO").upper(),
    )
