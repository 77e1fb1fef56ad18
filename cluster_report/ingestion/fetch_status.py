import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict

import requests

from .errors import DecodeError, PollError, PollTimeoutError, TriggerError

logger = logging.getLogger(__name__)

STATUS_PATH = "/api/v1/ocp-shared-clusters/status"
SUCCESS = "success"


@dataclass(frozen=True)
class StatusPayload:
    status: str
    clusters: Dict[str, object] = field(default_factory=dict)

    @property
    def is_success(self) -> bool:
        return self.status == SUCCESS


def parse_status_payload(data) -> StatusPayload:
    """
    Validate a decoded status response.

    Missing body/clusters means "no clusters yet"; a clusters value that
    is not an object is malformed.
    """
    if not isinstance(data, dict):
        raise DecodeError(f"Status response must be a JSON object, got {type(data).__name__}")

    status = data.get("status")
    body = data.get("body") or {}
    if not isinstance(body, dict):
        raise DecodeError("Status response 'body' must be a JSON object")

    clusters = body.get("clusters") or {}
    if not isinstance(clusters, dict):
        raise DecodeError("Status response 'body.clusters' must be a JSON object")

    return StatusPayload(status="" if status is None else str(status), clusters=clusters)


def trigger_status(api_route: str, token: str, timeout: float = 10) -> None:
    """Kick off the async status computation. The response body is ignored."""
    headers = {"Authorization": f"Bearer {token}"}
    try:
        response = requests.post(api_route + STATUS_PATH, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        raise TriggerError(f"Failed to start status computation: {exc}") from exc
    response.close()


def fetch_status(api_route: str, token: str, timeout: float = 10) -> StatusPayload:
    headers = {
        "Authorization": f"Bearer {token}",
        "Accept": "application/json"
    }
    try:
        response = requests.get(api_route + STATUS_PATH, headers=headers, timeout=timeout)
    except requests.RequestException as exc:
        raise PollError(f"Status request failed: {exc}") from exc

    try:
        data = response.json()
    except ValueError as exc:
        raise DecodeError(f"Status response is not valid JSON: {exc}") from exc

    return parse_status_payload(data)


def poll_for_status(
    api_route: str,
    token: str,
    attempts: int = 10,
    interval: float = 2,
    timeout: float = 10,
    sleep: Callable[[float], None] = time.sleep,
) -> StatusPayload:
    """
    Trigger the status job, then poll until it reports success.

    Sends exactly one POST and at most `attempts` GETs, sleeping
    `interval` seconds before each GET. Returns the first successful
    payload; raises PollTimeoutError once the budget is spent.
    """
    trigger_status(api_route, token, timeout=timeout)

    last_status = None
    for attempt in range(1, attempts + 1):
        logger.info("Polling for status (attempt %d/%d)...", attempt, attempts)
        sleep(interval)

        payload = fetch_status(api_route, token, timeout=timeout)
        if payload.is_success:
            logger.info("Status ready: %d clusters", len(payload.clusters))
            return payload

        last_status = payload.status
        logger.debug("Status not ready yet: %r", last_status)

    raise PollTimeoutError(
        f"Polling timed out after {attempts} attempts, "
        f"status never reached '{SUCCESS}' (last status: {last_status!r})"
    )
