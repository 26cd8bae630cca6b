"""Random.org JSON-RPC randomness source."""

from __future__ import annotations

import concurrent.futures
import json
import logging
import time
from typing import Any

import requests

from fortune_score.models import MAX_SCORE, MIN_SCORE
from fortune_score.remote.base import RandomSource, RandomSourceRegistry

logger = logging.getLogger(__name__)

RANDOM_ORG_URL = "https://api.random.org/json-rpc/4/invoke"
DEFAULT_TIMEOUT_MS = 3000
_CHUNK_SIZE = 1024


@RandomSourceRegistry.register("random_org")
class RandomOrgSource(RandomSource):
    """Source backed by the Random.org ``generateIntegers`` method.

    Parameters
    ----------
    api_key : str
        Random.org API key. An empty key makes every fetch unavailable.
    url : str
        JSON-RPC endpoint.
    session : requests.Session | None
        Session to issue requests on. A short-lived session is opened and
        closed per fetch when omitted.
    """

    name = "random_org"

    def __init__(
        self,
        api_key: str = "",
        url: str = RANDOM_ORG_URL,
        session: requests.Session | None = None,
    ) -> None:
        self._api_key = api_key
        self._url = url
        self._session = session

    def _payload(self) -> dict[str, Any]:
        return {
            "jsonrpc": "2.0",
            "method": "generateIntegers",
            "params": {
                "apiKey": self._api_key,
                "n": 1,
                "min": MIN_SCORE,
                "max": MAX_SCORE,
                "replacement": True,
            },
            "id": 1,
        }

    def fetch(self, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> int | None:
        """Request one integer in ``[0, 100]`` from Random.org.

        The request runs on a worker thread against a single deadline that
        covers connecting, the status line and every body chunk. When the
        deadline passes the in-flight response is closed and ``None`` is
        returned without waiting for the worker.

        Parameters
        ----------
        timeout_ms : int
            Total time allowed for the request, in milliseconds.

        Returns
        -------
        int | None
            The random integer, or ``None`` on any failure.
        """
        if not self._api_key:
            logger.debug("Random.org fetch skipped: no API key configured")
            return None

        timeout = timeout_ms / 1000
        logger.debug("Random.org request url=%s deadline=%.3fs", self._url, timeout)
        if self._session is not None:
            data = self._fetch_within(self._session, timeout, timeout_ms)
        else:
            with requests.Session() as session:
                data = self._fetch_within(session, timeout, timeout_ms)
        if data is None:
            return None
        return _extract_score(data)

    def _fetch_within(self, session: requests.Session, timeout: float, timeout_ms: int) -> Any:
        deadline = time.monotonic() + timeout
        inflight: list[requests.Response] = []
        executor = concurrent.futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix="random-org")
        future = executor.submit(self._post, session, timeout, deadline, inflight)
        try:
            return future.result(timeout=timeout)
        except concurrent.futures.TimeoutError:
            for response in inflight:
                response.close()
            logger.warning("Random.org request exceeded its %dms deadline", timeout_ms)
            return None
        except requests.Timeout:
            logger.warning("Random.org request timed out after %dms", timeout_ms)
            return None
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Random.org request failed: %s", exc)
            return None
        finally:
            executor.shutdown(wait=False)

    def _post(
        self,
        session: requests.Session,
        timeout: float,
        deadline: float,
        inflight: list[requests.Response],
    ) -> Any:
        response = session.post(self._url, json=self._payload(), timeout=timeout, stream=True)
        inflight.append(response)
        try:
            response.raise_for_status()
            body = bytearray()
            for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                if time.monotonic() > deadline:
                    msg = "Random.org response body outlived the request deadline"
                    raise requests.Timeout(msg)
                body.extend(chunk)
            return json.loads(body)
        finally:
            response.close()


def _extract_score(data: Any) -> int | None:
    """Pull the single integer out of a ``generateIntegers`` response."""
    try:
        value = data["result"]["random"]["data"][0]
    except (KeyError, IndexError, TypeError):
        error = data.get("error") if isinstance(data, dict) else None
        logger.warning("Random.org returned no data: %s", error or data)
        return None
    if isinstance(value, bool) or not isinstance(value, int) or not MIN_SCORE <= value <= MAX_SCORE:
        logger.warning("Random.org returned out-of-range value: %r", value)
        return None
    return value


def fetch_remote_score(api_key: str, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> int | None:
    """Fetch one true-random score, or ``None`` when Random.org is unavailable."""
    return RandomOrgSource(api_key=api_key).fetch(timeout_ms)
