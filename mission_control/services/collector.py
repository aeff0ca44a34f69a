"""
Collection job client — triggers the external scraper/scorer per platform.

POST {COLLECTOR_URL}/run/{platform}, no body. The job answers with
{"leads_saved": <int>} once it has written its new leads to the store.
There is no timeout unless COLLECTOR_TIMEOUT is set: runs can take minutes.
"""
import logging
from dataclasses import dataclass
from typing import Optional

import requests

from mission_control.config import COLLECTOR_URL, COLLECTOR_TIMEOUT
from mission_control.errors import TriggerUnavailable

logger = logging.getLogger('services.collector')


@dataclass(frozen=True)
class CollectionResult:
    platform: str
    leads_saved: int


class CollectorClient:

    def __init__(self, base_url: str = None, timeout: Optional[float] = None):
        self.base_url = (base_url or COLLECTOR_URL).rstrip('/')
        self.timeout = timeout

    def trigger(self, platform: str) -> CollectionResult:
        """Run the collection job for platform and wait for its answer."""
        url = f"{self.base_url}/run/{platform}"
        logger.info("Triggering collection job", extra={'platform': platform})
        try:
            resp = requests.post(url, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.ConnectionError as e:
            raise TriggerUnavailable(platform, f"could not connect to {self.base_url}") from e
        except requests.JSONDecodeError as e:
            # subclass of RequestException, so it must come first
            raise TriggerUnavailable(platform, 'invalid JSON response') from e
        except requests.RequestException as e:
            raise TriggerUnavailable(platform, str(e)) from e

        leads_saved = data.get('leads_saved') if isinstance(data, dict) else None
        if isinstance(leads_saved, bool) or not isinstance(leads_saved, int):
            raise TriggerUnavailable(platform, f"response has no integer leads_saved: {data!r}"[:200])

        return CollectionResult(platform=platform, leads_saved=leads_saved)


def build_collector() -> CollectorClient:
    return CollectorClient(COLLECTOR_URL, timeout=COLLECTOR_TIMEOUT)
