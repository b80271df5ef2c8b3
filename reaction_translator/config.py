"""Runtime settings, API endpoints, and .env loading.

WHY: The relay needs three secrets (Slack bot token, Slack signing secret,
DeepL key) plus a listening address. Loading them once into an immutable
record at startup and passing that record explicitly keeps the core logic
free of environment lookups, so tests can inject fakes.

HOW: python-dotenv loads the .env file on import. load_settings() reads the
environment and returns a frozen Settings dataclass, raising ValueError
when anything required is missing.

RULES:
- SLACK_BOT_TOKEN, SLACK_SIGNING_SECRET and DEEPL_AUTH_KEY are required
- PORT defaults to 10000, HOST defaults to 0.0.0.0
- Secrets are never hardcoded and never logged
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load .env from the project root (where the server is started from)
load_dotenv()

# ---------------------------------------------------------------------------
# API endpoints
# ---------------------------------------------------------------------------

SLACK_API_URL = os.getenv("SLACK_API_URL", "https://slack.com/api/")
DEEPL_API_URL = "https://api.deepl.com/v2"
DEEPL_FREE_API_URL = "https://api-free.deepl.com/v2"

DEEPL_FREE_KEY_SUFFIX = ":fx"
"""DeepL Free keys end with this suffix and must use the api-free host."""

HTTP_TIMEOUT_S = 30.0

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 10000

_REQUIRED_VARS = ("SLACK_BOT_TOKEN", "SLACK_SIGNING_SECRET", "DEEPL_AUTH_KEY")


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, loaded once at startup.

    RULES:
    - Immutable after creation
    - Passed explicitly to the app factory, the relay and the clients
    """

    slack_bot_token: str
    slack_signing_secret: str
    deepl_auth_key: str
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    def __repr__(self) -> str:
        return "Settings(host={!r}, port={!r})".format(self.host, self.port)


def load_settings() -> Settings:
    """Build Settings from the environment (populated by python-dotenv).

    RULES:
    - Raises ValueError naming every missing required variable
    - Raises ValueError if PORT is not an integer
    - Never returns a default/placeholder secret
    """
    values = {name: os.getenv(name, "").strip() for name in _REQUIRED_VARS}
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ValueError(
            "Missing required environment variables: {}. "
            "Add them to the environment or the .env file.".format(", ".join(missing))
        )

    raw_port = os.getenv("PORT", str(DEFAULT_PORT)).strip()
    try:
        port = int(raw_port)
    except ValueError:
        raise ValueError("PORT must be an integer, got {!r}".format(raw_port))

    return Settings(
        slack_bot_token=values["SLACK_BOT_TOKEN"],
        slack_signing_secret=values["SLACK_SIGNING_SECRET"],
        deepl_auth_key=values["DEEPL_AUTH_KEY"],
        host=os.getenv("HOST", DEFAULT_HOST).strip() or DEFAULT_HOST,
        port=port,
    )
