"""
Cloudflare Turnstile server-side token verification
"""

import logging
from typing import Optional

import httpx

logger = logging.getLogger(__name__)


async def verify_token(
    client: httpx.AsyncClient,
    verify_url: str,
    secret: str,
    token: str,
    remote_ip: Optional[str] = None,
) -> bool:
    """Ask siteverify whether a widget token is genuine and unused

    Any failure to get a readable answer counts as a rejection.
    """
    data = {"secret": secret, "response": token}
    if remote_ip:
        data["remoteip"] = remote_ip

    try:
        response = await client.post(verify_url, data=data)
        if response.status_code != 200:
            logger.error("Turnstile siteverify error: %s - %s", response.status_code, response.text)
            return False
        outcome = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error("Turnstile siteverify unavailable: %s", e)
        return False

    if not isinstance(outcome, dict) or not outcome.get("success"):
        error_codes = outcome.get("error-codes", []) if isinstance(outcome, dict) else []
        logger.info("Turnstile rejected token: %s", error_codes)
        return False
    return True
