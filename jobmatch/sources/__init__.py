from .base import JobSearchBase
from .mock import MockSource
from .adzuna import AdzunaSource
from .france_travail import FranceTravailAuthError, FranceTravailSource, TokenProvider

from jobmatch.log import get_logger

log = get_logger(__name__)

__all__ = [
    "JobSearchBase", "MockSource", "AdzunaSource", "FranceTravailSource",
    "FranceTravailAuthError", "TokenProvider", "get_sources",
]


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def get_sources(env_getter) -> list[JobSearchBase]:
    if _flag(env_getter("USE_MOCK_DATA")):
        log.info("USE_MOCK_DATA set — using MockSource")
        return [MockSource()]

    sources: list[JobSearchBase] = []

    ft_id = env_getter("FRANCE_TRAVAIL_CLIENT_ID") or env_getter("POLE_EMPLOI_CLIENT_ID")
    ft_secret = env_getter("FRANCE_TRAVAIL_CLIENT_SECRET") or env_getter("POLE_EMPLOI_CLIENT_SECRET")
    if ft_id and ft_secret:
        sources.append(FranceTravailSource(env_getter))
        log.info("Registered source: France Travail")

    if env_getter("ADZUNA_APP_ID") and env_getter("ADZUNA_APP_KEY"):
        sources.append(AdzunaSource(env_getter))
        log.info("Registered source: Adzuna")

    if not sources:
        sources.append(MockSource())
        log.info("No API keys found — using MockSource")

    return sources
