"""Factory for building the discovery pipeline from environment configuration."""

from config.config import Config
from orchestrator.discovery import DiscoveryOrchestrator
from utils.logger import get_logger

from .domain_policy import DomainPolicy
from .liveness import LivenessProber
from .source_adapter import YutoriSearchAdapter

logger = get_logger(__name__)


def create_discovery_orchestrator_from_env(config: Config | None = None) -> DiscoveryOrchestrator:
    """
    Create a DiscoveryOrchestrator from environment variables.

    Environment variables:
        YUTORI_API_KEY: Enables placeholder (non-mock) search mode when set
        PROBE_TIMEOUT_MS: Per-attempt liveness budget (default: 5000)
        PROBE_USER_AGENT: User agent sent with liveness probes

    Returns:
        Configured DiscoveryOrchestrator instance
    """
    config = config or Config()

    if config.has_yutori_key:
        logger.info("Yutori key detected for discovery runs")
    else:
        logger.warning("YUTORI_API_KEY not set; discovery runs will use mock data")

    return DiscoveryOrchestrator(
        source=YutoriSearchAdapter(api_key=config.YUTORI_API_KEY),
        prober=LivenessProber(user_agent=config.PROBE_USER_AGENT, timeout_ms=config.PROBE_TIMEOUT_MS),
        policy=DomainPolicy(),
    )
