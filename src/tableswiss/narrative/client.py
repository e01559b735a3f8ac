"""HTTP client for the narrative generator.

Talks to the Gemini ``generateContent`` REST endpoint with httpx. Rate
limits, server errors, timeouts and empty replies are retried with
exponential backoff up to a fixed number of attempts; after that the
caller gets a degraded result carrying a user-facing message. Nothing in
here raises into the tournament engine.
"""

# Table Swiss
# Copyright (C) 2025  Table Swiss developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import os
import random
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import httpx

from tableswiss.constants import (
    NARRATIVE_API_KEY_ENV,
    NARRATIVE_BACKOFF_BASE,
    NARRATIVE_BACKOFF_JITTER,
    NARRATIVE_BASE_URL,
    NARRATIVE_MAX_RETRIES,
    NARRATIVE_MODEL,
    NARRATIVE_MODEL_ENV,
    NARRATIVE_TIMEOUT,
)
from tableswiss.exceptions import InvalidConfigurationException, NarrativeAPIException
from tableswiss.narrative.models import (
    NarrativeRequest,
    NarrativeResult,
    NarrativeSource,
)
from tableswiss.utils import setup_logger

logger = setup_logger(__name__)

DEFAULT_FAILURE_MESSAGE = "Failed to generate text. Please try again later."


@dataclass
class NarrativeConfig:
    """Connection settings for the narrative generator.

    Attributes
    ----------
    api_key : str
        Gemini API key. Requests are skipped when empty.
    model : str
        Model name used in the endpoint path.
    base_url : str
        API root, without trailing slash.
    timeout : float
        Per-request timeout in seconds.
    max_retries : int
        Total attempts per request.
    backoff_base : float
        First retry delay in seconds, doubled on every further attempt.
    backoff_jitter : float
        Upper bound of the uniform random delay added to each backoff.
    """

    api_key: str = ""
    model: str = NARRATIVE_MODEL
    base_url: str = NARRATIVE_BASE_URL
    timeout: float = NARRATIVE_TIMEOUT
    max_retries: int = NARRATIVE_MAX_RETRIES
    backoff_base: float = NARRATIVE_BACKOFF_BASE
    backoff_jitter: float = NARRATIVE_BACKOFF_JITTER

    def __post_init__(self) -> None:
        if self.max_retries < 1:
            raise InvalidConfigurationException(
                f"max_retries must be at least 1: {self.max_retries}"
            )
        if self.timeout <= 0:
            raise InvalidConfigurationException(
                f"timeout must be positive: {self.timeout}"
            )

    @classmethod
    def from_env(cls, **overrides: Any) -> "NarrativeConfig":
        """Read the API key and model from the environment."""
        settings: Dict[str, Any] = {
            "api_key": os.environ.get(NARRATIVE_API_KEY_ENV, ""),
            "model": os.environ.get(NARRATIVE_MODEL_ENV, NARRATIVE_MODEL),
        }
        settings.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**settings)

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"


def parse_sources(candidate: Dict[str, Any]) -> List[NarrativeSource]:
    """Pull cited web sources out of a response candidate.

    Entries without both a URI and a title are dropped.
    """
    metadata = candidate.get("groundingMetadata")
    if not isinstance(metadata, dict):
        return []
    entries = metadata.get("groundingAttributions") or metadata.get("groundingChunks") or []
    sources = []
    for entry in entries if isinstance(entries, list) else []:
        web = entry.get("web") if isinstance(entry, dict) else None
        if not isinstance(web, dict):
            continue
        uri = web.get("uri")
        title = web.get("title")
        if uri and title:
            sources.append(NarrativeSource(uri=str(uri), title=str(title)))
    return sources


def parse_response(data: Any) -> NarrativeResult:
    """Turn a generateContent reply into a NarrativeResult.

    Raises:
        NarrativeAPIException: If the reply is not the expected shape or holds no text
    """
    if not isinstance(data, dict):
        raise NarrativeAPIException(
            f"Unexpected reply from narrative API: {type(data).__name__}", retryable=True
        )
    candidates = data.get("candidates") or []
    candidate = candidates[0] if isinstance(candidates, list) and candidates else {}
    content = candidate.get("content") if isinstance(candidate, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    first = parts[0] if isinstance(parts, list) and parts else None
    text = first.get("text") if isinstance(first, dict) else None
    if not text or not isinstance(text, str):
        raise NarrativeAPIException(
            "Received empty response from narrative API", retryable=True
        )
    return NarrativeResult(text=text, sources=parse_sources(candidate))


class NarrativeClient:
    """Generates narrative text with bounded retries.

    Example:
        >>> with NarrativeClient(NarrativeConfig.from_env()) as client:
        ...     result = client.generate(NarrativeRequest(prompt="Hype round 2"))
        >>> print(result.text)
    """

    def __init__(
        self,
        config: Optional[NarrativeConfig] = None,
        http_client: Optional[httpx.Client] = None,
        sleep: Callable[[float], None] = time.sleep,
        rng: Optional[random.Random] = None,
    ):
        self.config = config if config is not None else NarrativeConfig.from_env()
        self._owns_client = http_client is None
        self._http = (
            http_client
            if http_client is not None
            else httpx.Client(timeout=self.config.timeout)
        )
        self._sleep = sleep
        self._rng = rng if rng is not None else random.Random()

    def __enter__(self) -> "NarrativeClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def backoff_delay(self, attempt: int) -> float:
        """Seconds to wait after failed attempt number ``attempt`` (0-based)."""
        return self.config.backoff_base * (2**attempt) + self._rng.uniform(
            0, self.config.backoff_jitter
        )

    def _post(self, payload: Dict[str, Any]) -> Any:
        try:
            response = self._http.post(
                self.config.endpoint,
                params={"key": self.config.api_key},
                json=payload,
                timeout=self.config.timeout,
            )
        except httpx.TimeoutException as e:
            raise NarrativeAPIException(
                f"Request timed out: {e}", retryable=True
            ) from e
        except httpx.TransportError as e:
            raise NarrativeAPIException(f"Network error: {e}", retryable=True) from e

        status = response.status_code
        if status == 429 or status >= 500:
            raise NarrativeAPIException(
                f"API error {status}: {response.reason_phrase}",
                status_code=status,
                retryable=True,
            )
        if status >= 400:
            raise NarrativeAPIException(
                f"API error {status}: {response.reason_phrase}",
                status_code=status,
                retryable=False,
            )

        try:
            return response.json()
        except ValueError as e:
            raise NarrativeAPIException(
                f"Invalid JSON from API: {e}", retryable=True
            ) from e

    def generate(
        self,
        request: NarrativeRequest,
        failure_message: str = DEFAULT_FAILURE_MESSAGE,
    ) -> NarrativeResult:
        """Generate text for ``request``.

        Never raises for API trouble: on failure the result has
        ``ok=False`` and ``failure_message`` as its text.
        """
        if not self.config.api_key:
            logger.warning(f"No narrative API key set ({NARRATIVE_API_KEY_ENV})")
            return NarrativeResult(text=failure_message, ok=False)

        payload = request.to_payload()
        attempts = self.config.max_retries
        for attempt in range(attempts):
            try:
                result = parse_response(self._post(payload))
                logger.debug(
                    f"Narrative generated on attempt {attempt + 1} "
                    f"with {len(result.sources)} source(s)"
                )
                return result
            except NarrativeAPIException as e:
                if not e.retryable:
                    logger.error(f"Narrative API call failed: {e}")
                    break
                if attempt == attempts - 1:
                    logger.error(f"All {attempts} attempts failed, last error: {e}")
                    break
                delay = self.backoff_delay(attempt)
                logger.warning(
                    f"Attempt {attempt + 1} failed ({e}), retrying in {delay:.1f}s..."
                )
                self._sleep(delay)

        return NarrativeResult(text=failure_message, ok=False)
