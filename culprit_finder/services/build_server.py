"""
Build Server Service
====================
The only door between culprit finding and the host build server.

BuildServer is the abstract collaborator the orchestrator talks to:
    - previous finished build of a build's configuration
    - replace a build's tag list
    - queue a bisection build

HttpBuildServer implements it over the build server's REST API:
    GET  {base}/builds/{id}/previous-finished  → build JSON, 404 = no previous build
    PUT  {base}/builds/{id}/tags               ← {"tags": [...]}
    POST {base}/queue                          ← BisectionJobRequest JSON

Error Policy:
    Lookups and tag updates raise BuildServerError; the caller decides what a
    failure means. queue_build never raises for HTTP or transport problems,
    it logs and returns False so one bad submission cannot stop the rest.
"""
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import httpx

from culprit_finder.core.config import BUILD_SERVER_TIMEOUT, BUILD_SERVER_TOKEN
from culprit_finder.models.bisection_job import BisectionJobRequest
from culprit_finder.models.build_record import BuildRecord

logger = logging.getLogger(__name__)


class BuildServerError(Exception):
    """Raised when the build server cannot answer a lookup or accept a tag update."""


class BuildServer(ABC):
    """Host build server as seen by culprit finding."""

    @abstractmethod
    def get_previous_finished(self, build: BuildRecord) -> Optional[BuildRecord]:
        """Return the previous finished build of `build`'s configuration, or None."""

    @abstractmethod
    def set_tags(self, build: BuildRecord, tags: List[str]) -> None:
        """Replace the tag list of `build` with `tags`."""

    @abstractmethod
    def queue_build(self, request: BisectionJobRequest) -> bool:
        """Enqueue one bisection build. Returns True if the server accepted it."""


class HttpBuildServer(BuildServer):
    """
    BuildServer backed by the build server's REST API.

    A fresh httpx.Client is opened per call so instances hold no connection
    state and can be shared between concurrent events.
    """

    def __init__(
        self,
        base_url: str,
        token: str = BUILD_SERVER_TOKEN,
        timeout: float = BUILD_SERVER_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport
        self.headers = {
            "Accept": "application/json",
            "User-Agent": "Culprit-Finder",
        }
        if token:
            self.headers["Authorization"] = f"Bearer {token}"

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.base_url,
            headers=self.headers,
            timeout=self.timeout,
            transport=self.transport,
        )

    def get_previous_finished(self, build: BuildRecord) -> Optional[BuildRecord]:
        url = f"/builds/{build.id}/previous-finished"
        try:
            with self._client() as client:
                response = client.get(url)
                if response.status_code == 404:
                    logger.debug("Build %s has no previous finished build", build.number)
                    return None
                response.raise_for_status()
                previous = BuildRecord.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as exc:
            # ValueError covers undecodable JSON and pydantic validation errors
            raise BuildServerError(f"Previous build lookup for {build.id} failed: {exc}") from exc

        logger.debug("Build %s: previous finished build is %s", build.number, previous.number)
        return previous

    def set_tags(self, build: BuildRecord, tags: List[str]) -> None:
        url = f"/builds/{build.id}/tags"
        try:
            with self._client() as client:
                response = client.put(url, json={"tags": tags})
                response.raise_for_status()
        except httpx.HTTPError as exc:
            raise BuildServerError(f"Tag update for {build.id} failed: {exc}") from exc

    def queue_build(self, request: BisectionJobRequest) -> bool:
        try:
            with self._client() as client:
                response = client.post("/queue", json=request.model_dump(mode="json"))
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Queueing change %s rejected - HTTP %d: %s",
                request.changes_up_to.id, exc.response.status_code, exc,
            )
            return False
        except httpx.HTTPError as exc:
            logger.error("Queueing change %s failed: %s", request.changes_up_to.id, exc)
            return False
        return True
