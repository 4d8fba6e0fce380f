"""France Travail (ex-Pôle Emploi) offers API — OAuth2 client credentials.

Register an application at https://francetravail.io to get a client id
and secret with the "Offres d'emploi v2" scope.
"""
from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import requests

from jobmatch.log import get_logger
from jobmatch.models import JobPosting, JobSource
from jobmatch.retry import is_client_error, retry
from jobmatch.sources.base import JobSearchBase

log = get_logger(__name__)

TOKEN_URL = "https://entreprise.francetravail.fr/connexion/oauth2/access_token?realm=/partenaire"
SEARCH_URL = "https://api.francetravail.io/partenaire/offresdemploi/v2/offres/search"
DETAIL_URL = "https://candidat.pole-emploi.fr/offres/recherche/detail/{id}"
SCOPE = "api_offresdemploiv2 o2dsoffre"

REGION_ILE_DE_FRANCE = "11"
GRAND_DOMAINE_IT = "M"
# The API only accepts 1, 3, 7, 14 or 31.
PUBLISHED_SINCE_DAYS = "14"

# A single call returns at most 150 offers (range 0-149).
PAGES_TO_FETCH = 3
PAGE_SIZE = 150
# Refresh the token this long before the server-side expiry.
TOKEN_EXPIRY_MARGIN_SECONDS = 300


class FranceTravailAuthError(RuntimeError):
    """Missing credentials or a rejected token exchange."""


@dataclass(frozen=True)
class AccessToken:
    value: str
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return bool(self.value) and self.expires_at > now


class TokenProvider:
    """Caches one access token; the snapshot is replaced whole under a lock."""

    def __init__(self, client_id: str, client_secret: str, clock=time.monotonic) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self._clock = clock
        self._lock = threading.Lock()
        self._token: AccessToken | None = None

    def get(self) -> str:
        token = self._token
        if token is not None and token.is_valid(self._clock()):
            return token.value
        with self._lock:
            token = self._token
            if token is not None and token.is_valid(self._clock()):
                return token.value
            self._token = self._request_token()
            return self._token.value

    def invalidate(self) -> None:
        with self._lock:
            self._token = None

    def _request_token(self) -> AccessToken:
        if not (self.client_id and self.client_secret):
            raise FranceTravailAuthError(
                "France Travail credentials not configured. "
                "Set FRANCE_TRAVAIL_CLIENT_ID and FRANCE_TRAVAIL_CLIENT_SECRET in .env"
            )
        now = self._clock()
        r = requests.post(
            TOKEN_URL,
            data={
                "grant_type": "client_credentials",
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "scope": SCOPE,
            },
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            timeout=15,
        )
        if not r.ok:
            raise FranceTravailAuthError(f"Failed to get access token: {r.status_code} {r.text[:200]}")
        data = r.json()
        expires_in = int(data.get("expires_in", 0))
        log.debug("France Travail token acquired, expires in %ds", expires_in)
        return AccessToken(
            value=data["access_token"],
            expires_at=now + max(0, expires_in - TOKEN_EXPIRY_MARGIN_SECONDS),
        )


_providers: dict[tuple[str, str], TokenProvider] = {}
_providers_lock = threading.Lock()


def shared_token_provider(client_id: str, client_secret: str) -> TokenProvider:
    """One provider per credential pair, kept for the life of the process."""
    key = (client_id or "", client_secret or "")
    with _providers_lock:
        provider = _providers.get(key)
        if provider is None:
            provider = _providers[key] = TokenProvider(client_id, client_secret)
        return provider


def _give_up(exc: BaseException) -> bool:
    # a 401 dropped the token, the next attempt fetches a fresh one
    status = getattr(getattr(exc, "response", None), "status_code", None)
    return is_client_error(exc) and status != 401


def to_posting(offer: dict) -> JobPosting:
    offer_id = str(offer.get("id", ""))
    return JobPosting(
        id=f"ft-{offer_id}",
        title=offer.get("intitule", ""),
        company=(offer.get("entreprise") or {}).get("nom") or "Entreprise confidentielle",
        location=(offer.get("lieuTravail") or {}).get("libelle") or "Non spécifié",
        description=offer.get("description") or "",
        url=(offer.get("origineOffre") or {}).get("urlOrigine") or DETAIL_URL.format(id=offer_id),
        date_posted=offer.get("dateCreation", ""),
        contract_type=offer.get("typeContratLibelle"),
        salary=(offer.get("salaire") or {}).get("libelle"),
        source=JobSource.FRANCE_TRAVAIL,
    )


def page_ranges(pages: int = PAGES_TO_FETCH, size: int = PAGE_SIZE) -> list[str]:
    return [f"{i * size}-{i * size + size - 1}" for i in range(pages)]


class FranceTravailSource(JobSearchBase):
    name = "france-travail"

    def __init__(self, env_getter, tokens: TokenProvider | None = None) -> None:
        client_id = env_getter("FRANCE_TRAVAIL_CLIENT_ID") or env_getter("POLE_EMPLOI_CLIENT_ID")
        client_secret = (
            env_getter("FRANCE_TRAVAIL_CLIENT_SECRET") or env_getter("POLE_EMPLOI_CLIENT_SECRET")
        )
        self.tokens = tokens or shared_token_provider(client_id, client_secret)

    @retry(
        max_attempts=3,
        base_delay=1.5,
        retryable=(requests.RequestException, OSError),
        giveup=_give_up,
    )
    def _fetch_range(self, keywords: str | None, range_: str) -> list[JobPosting]:
        params: dict = {
            "region": REGION_ILE_DE_FRANCE,
            "grandDomaine": GRAND_DOMAINE_IT,
            "range": range_,
            "publieeDepuis": PUBLISHED_SINCE_DAYS,
        }
        if keywords:
            params["motsCles"] = keywords

        r = requests.get(
            SEARCH_URL,
            params=params,
            headers={
                "Authorization": f"Bearer {self.tokens.get()}",
                "Accept": "application/json",
            },
            timeout=15,
        )
        if r.status_code == 401:
            self.tokens.invalidate()
        r.raise_for_status()
        # 204 means the range is past the last result
        if r.status_code == 204 or not r.content:
            return []
        data = r.json()
        return [to_posting(o) for o in data.get("resultats") or []]

    def _fetch_range_safe(self, keywords: str | None, range_: str) -> list[JobPosting]:
        try:
            return self._fetch_range(keywords, range_)
        except FranceTravailAuthError:
            raise
        except Exception as exc:
            log.warning("France Travail range=%s error: %s", range_, exc)
            return []

    def search(self, keywords: str | None = None, limit: int = PAGES_TO_FETCH * PAGE_SIZE) -> list[JobPosting]:
        try:
            self.tokens.get()
        except (FranceTravailAuthError, requests.RequestException) as exc:
            log.error("France Travail auth failed: %s", exc)
            return []

        ranges = page_ranges()
        with ThreadPoolExecutor(max_workers=len(ranges)) as pool:
            try:
                batches = list(pool.map(lambda r: self._fetch_range_safe(keywords, r), ranges))
            except FranceTravailAuthError as exc:
                log.error("France Travail auth failed: %s", exc)
                return []

        all_jobs: list[JobPosting] = []
        seen_ids: set[str] = set()
        for batch in batches:
            for j in batch:
                if j.id not in seen_ids:
                    seen_ids.add(j.id)
                    all_jobs.append(j)
        log.debug("France Travail returned %d jobs over %d ranges", len(all_jobs), len(ranges))
        return all_jobs[:limit]
