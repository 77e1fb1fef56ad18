import logging

import requests

from .errors import AuthError

logger = logging.getLogger(__name__)

LOGIN_PATH = "/api/v1/login"


def get_access_token(api_route: str, admin_token: str, timeout: float = 10) -> str:
    """
    Exchange the admin credential for a short-lived access token.

    No retry: any transport error, non-200 status or unreadable body
    is raised as AuthError.
    """
    headers = {
        "Authorization": f"Bearer {admin_token}",
        "Accept": "application/json"
    }

    try:
        response = requests.get(
            api_route + LOGIN_PATH,
            headers=headers,
            timeout=timeout
        )
    except requests.RequestException as exc:
        raise AuthError(f"Login request failed: {exc}") from exc

    logger.debug("Auth status: %s", response.status_code)

    if response.status_code != 200:
        raise AuthError(f"Login failed with status: {response.status_code} {response.reason}")

    try:
        body = response.json()
    except ValueError as exc:
        raise AuthError(f"Login response is not valid JSON: {exc}") from exc

    token = body.get("access_token") if isinstance(body, dict) else None
    if not token or not isinstance(token, str):
        raise AuthError("Access token not found in response")

    return token
