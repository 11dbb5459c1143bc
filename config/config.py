import os
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_YUTORI_API_URL = "https://api.yutori.com"
DEFAULT_PROBE_USER_AGENT = "Mozilla/5.0 (compatible; AccessScanBot/1.0; +https://example.com/bot)"
DEFAULT_OUTPUT_PATH = "shared/sites.json"


class Config:
    """Configuration management for the application."""

    def __init__(self):
        """Initialize configuration with environment variables."""
        # Load environment variables from .env file if it exists
        env_path = Path(__file__).parent.parent / '.env'
        if env_path.exists():
            load_dotenv(dotenv_path=env_path)

        # Provider credentials
        self.YUTORI_API_KEY = (os.getenv('YUTORI_API_KEY') or '').strip() or None
        self.OPENAI_API_KEY = (os.getenv('OPENAI_API_KEY') or '').strip() or None
        self.LINEAR_API_KEY = (os.getenv('LINEAR_API_KEY') or '').strip() or None

        self.YUTORI_API_URL = os.getenv('YUTORI_API_URL', DEFAULT_YUTORI_API_URL).rstrip('/')
        self.OPENAI_TICKET_MODEL = os.getenv('OPENAI_TICKET_MODEL', 'gpt-4o-mini')

        # Liveness probing
        self.PROBE_TIMEOUT_MS = int(os.getenv('PROBE_TIMEOUT_MS', '5000'))
        self.PROBE_USER_AGENT = os.getenv('PROBE_USER_AGENT', DEFAULT_PROBE_USER_AGENT)

        self.SCOUT_OUTPUT_PATH = os.getenv('SCOUT_OUTPUT_PATH', DEFAULT_OUTPUT_PATH)

    @property
    def has_yutori_key(self) -> bool:
        return bool(self.YUTORI_API_KEY)

    def require(self, name: str) -> str:
        """
        Return a credential that a real-mode-only action needs.

        Raises:
            MissingCredentialError: If the value is not configured
        """
        value = getattr(self, name, None)
        if not value:
            raise MissingCredentialError(name)
        return value


class MissingCredentialError(RuntimeError):
    """A real-mode-only action was requested without its credential."""

    def __init__(self, name: str):
        super().__init__(f"{name} is not set")
        self.name = name
