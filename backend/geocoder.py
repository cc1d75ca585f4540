import logging
import re

from geopy.geocoders import Nominatim, Photon
from geopy.extra.rate_limiter import RateLimiter

from backend import config

logger = logging.getLogger(__name__)

# Leading words that often stop Nominatim matching a street address
_ADDRESS_PREFIX = re.compile(
    r'^(Near|Around|Behind|Opposite|Corner of)\s+', flags=re.IGNORECASE)


class GeocoderService:
    """Resolve an address or place name to the point the camera should
    fly to.  Photon is tried first, Nominatim second."""

    def __init__(self):
        self._nominatim = Nominatim(
            user_agent=config.NOMINATIM_USER_AGENT,
            timeout=config.NOMINATIM_TIMEOUT,
        )
        self._geocode_nominatim = RateLimiter(
            self._nominatim.geocode,
            min_delay_seconds=1.0,
        )
        self._photon = Photon(
            user_agent=config.NOMINATIM_USER_AGENT,
            timeout=config.NOMINATIM_TIMEOUT,
        )
        self._geocode_photon = RateLimiter(
            self._photon.geocode,
            min_delay_seconds=0.5,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def locate(self, query: str) -> dict:
        """Resolve *query* to ``{"latitude", "longitude", "display_name"}``.

        Raises ``ValueError`` when the location cannot be resolved.
        """
        result = self._try_photon(query)
        if result is not None:
            return result

        result = self._try_nominatim(query)
        if result is not None:
            return result

        raise ValueError(f"Could not geocode location: {query}")

    # ------------------------------------------------------------------
    # Geocoder backends
    # ------------------------------------------------------------------

    @staticmethod
    def _as_point(geo_result, fallback_name: str) -> dict:
        return {
            "latitude": float(geo_result.latitude),
            "longitude": float(geo_result.longitude),
            "display_name": geo_result.address or fallback_name,
        }

    def _try_nominatim(self, query: str) -> dict | None:
        """Try Nominatim geocoder. Returns a point dict or None."""
        try:
            logger.info(f"Trying Nominatim for '{query}'...")
            geo_result = self._geocode_nominatim(query, exactly_one=True)

            if geo_result is None:
                stripped = _ADDRESS_PREFIX.sub('', query, count=1)
                if stripped != query:
                    logger.info(f"Retrying Nominatim with: '{stripped}'")
                    geo_result = self._geocode_nominatim(stripped, exactly_one=True)

            if geo_result is None:
                logger.info("Nominatim returned no results")
                return None

            return self._as_point(geo_result, query)

        except Exception as e:
            logger.warning(f"Nominatim failed: {e}")
            return None

    def _try_photon(self, query: str) -> dict | None:
        """Try Photon (Komoot) geocoder. Returns a point dict or None."""
        try:
            logger.info(f"Trying Photon for '{query}'...")
            geo_result = self._geocode_photon(query, exactly_one=True)

            if geo_result is None:
                logger.info("Photon returned no results")
                return None

            logger.info(f"Photon resolved '{query}'")
            return self._as_point(geo_result, query)

        except Exception as e:
            logger.warning(f"Photon failed: {e}")
            return None
