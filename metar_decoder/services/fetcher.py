import logging
import requests
from typing import Optional
from metar_decoder import config
from metar_decoder.errors import MetarFetchError
from metar_decoder.grammar import STATION_RE
from metar_decoder.models.observation import Observation
from .decoder import decode_record

logger = logging.getLogger(__name__)


def normalize_station(station: str) -> str:
    code = (station or "").strip().upper()
    if not STATION_RE.fullmatch(code):
        raise ValueError(f"invalid station code {station!r}, expected 4 characters (e.g. KCNO)")
    return code


def fetch_metar(station: str, timeout: Optional[float] = None) -> Optional[str]:
    """Download the latest report for a station.

    Returns the raw two line record (date line + report), or None when the
    source has no report for the station.
    """
    code = normalize_station(station)
    url = f"{config.METAR_SOURCE_URL}{code}.TXT"
    logger.info(f"🌐 Fetching METAR: {url}")

    try:
        r = requests.get(url, timeout=timeout or config.METAR_FETCH_TIMEOUT)
    except requests.RequestException as e:
        logger.error(f"❌ METAR download failed for {code}: {e}")
        raise MetarFetchError(code, f"download failed: {e}") from e

    if r.status_code == 404:
        logger.info(f"📭 No METAR found for {code}")
        return None
    if r.status_code != 200:
        logger.error(f"❌ METAR source error {r.status_code} for {code}")
        raise MetarFetchError(code, f"unexpected status {r.status_code}", status_code=r.status_code)

    text = r.text.strip()
    if not text:
        logger.warning(f"⚠️ Empty METAR response for {code}")
        return None

    logger.debug(f"📄 METAR data for {code}: {text}")
    return text + "\n"


def get_observation(station: str, timeout: Optional[float] = None) -> Optional[Observation]:
    """Fetch and decode the latest report for a station (None if not found)."""
    record = fetch_metar(station, timeout=timeout)
    if record is None:
        return None
    return decode_record(record)
