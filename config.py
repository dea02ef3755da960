"""Configuration for the CLOB wallet dashboard pipeline."""

import os
from dataclasses import dataclass
from typing import List, Mapping, Optional

# API base URL (HMAC-authenticated)
CLOB_API_BASE = os.environ.get("CLOB_BASE_URL", "https://clob.polymarket.com")

# Request timeout in seconds; 0 disables it
REQUEST_TIMEOUT = float(os.environ.get("CLOB_TIMEOUT", "30"))

# Page sizes
MARKET_LIMIT = 500
TRADE_LIMIT = 200

# Pattern / recent-market filter policy ("broad" or "narrow")
DEFAULT_POLICY = os.environ.get("PATTERN_POLICY", "broad")

# Paths
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
REPORT_PATH = os.environ.get("REPORT_PATH", os.path.join(BASE_DIR, "data.json"))
HTML_PATH = os.environ.get("HTML_PATH", os.path.join(BASE_DIR, "index.html"))

# Environment variable names
ENV_API_KEY = "POLYMARKET_API_KEY"
ENV_API_SECRET = "POLYMARKET_API_SECRET"
ENV_API_PASSPHRASE = "POLYMARKET_API_PASSPHRASE"
ENV_WALLET = "POLYMARKET_WALLET"


class ConfigError(Exception):
    """Raised when required configuration is missing."""


@dataclass(frozen=True)
class Credentials:
    api_key: str = ""
    api_secret: str = ""  # base64-encoded HMAC key
    api_passphrase: str = ""
    wallet: str = ""

    def missing(self) -> List[str]:
        """Names of the required environment variables that are unset."""
        required = [
            (ENV_API_KEY, self.api_key),
            (ENV_API_SECRET, self.api_secret),
            (ENV_API_PASSPHRASE, self.api_passphrase),
        ]
        return [name for name, value in required if not value]

    @property
    def complete(self) -> bool:
        return not self.missing()


def load_credentials(environ: Optional[Mapping[str, str]] = None) -> Credentials:
    """Read API credentials and wallet address from the environment."""
    env = os.environ if environ is None else environ
    return Credentials(
        api_key=env.get(ENV_API_KEY, "").strip(),
        api_secret=env.get(ENV_API_SECRET, "").strip(),
        api_passphrase=env.get(ENV_API_PASSPHRASE, "").strip(),
        wallet=env.get(ENV_WALLET, "").strip(),
    )


def require_credentials(creds: Credentials) -> Credentials:
    missing = creds.missing()
    if missing:
        raise ConfigError(
            f"Missing required environment variables: {', '.join(missing)}")
    return creds
