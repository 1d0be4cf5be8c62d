"""HTTP client for the public Deadlock asset API.

Thin wrapper over requests: one GET per endpoint, decoded JSON returned
as-is. Parsing into models happens in parser.catalog_parser; filtering and
merging happen in catalog.catalog.
"""

import logging

import requests

from deadlock_planner.models.constants import SLOT_TYPES


logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://assets.deadlock-api.com/v2"
DEFAULT_TIMEOUT = 30.0


class CatalogError(RuntimeError):
    """The catalog service couldn't be reached or returned bad data."""


class DeadlockApiClient:
    """Fetches raw hero/item JSON from the asset API."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    @property
    def base_url(self) -> str:
        return self._base_url

    def _get(self, path: str) -> object:
        url = f"{self._base_url}/{path.lstrip('/')}"
        logger.debug("GET %s", url)
        try:
            resp = self._session.get(url, timeout=self._timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.RequestException as exc:
            logger.error("Catalog request failed: %s: %s", url, exc)
            raise CatalogError(f"Failed to fetch {url}: {exc}") from exc
        except ValueError as exc:
            logger.error("Catalog returned invalid JSON: %s", url)
            raise CatalogError(f"Invalid JSON from {url}") from exc

    def _get_list(self, path: str) -> list:
        data = self._get(path)
        if not isinstance(data, list):
            raise CatalogError(f"Expected a list from /{path.lstrip('/')}, got {type(data).__name__}")
        return data

    def get_heroes(self) -> list:
        """Full hero roster, including non-selectable heroes."""
        return self._get_list("heroes")

    def get_hero(self, hero_id: int) -> dict:
        data = self._get(f"heroes/{int(hero_id)}")
        if not isinstance(data, dict):
            raise CatalogError(f"Expected an object for hero {hero_id}")
        return data

    def get_upgrade_items(self) -> list:
        """All shop upgrades, including unshoppable ones."""
        return self._get_list("items/by-type/upgrade")

    def get_weapon_items(self) -> list:
        return self._get_list("items/by-type/weapon")

    def get_ability_items(self) -> list:
        return self._get_list("items/by-type/ability")

    def get_items_by_slot_type(self, slot_type: str) -> list:
        if slot_type not in SLOT_TYPES:
            raise ValueError(f"Unknown slot type: {slot_type!r}")
        return self._get_list(f"items/by-slot-type/{slot_type}")
