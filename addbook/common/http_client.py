"""
HTTP helpers

Shared request headers and session construction. Every request made by
the application declares a user agent.
"""

from typing import Dict, Optional

import requests

DEFAULT_USER_AGENT = "Mozilla/5.0"


def build_headers(user_agent: Optional[str] = None, accept: str = "") -> Dict[str, str]:
    """
    Build request headers.

    Args:
        user_agent: User-Agent value (default: DEFAULT_USER_AGENT)
        accept: Optional Accept header value

    Returns:
        Header dictionary
    """
    headers = {"User-Agent": user_agent or DEFAULT_USER_AGENT}
    if accept:
        headers["Accept"] = accept
    return headers


def create_session(user_agent: Optional[str] = None) -> requests.Session:
    """Create a requests session carrying the declared user agent."""
    session = requests.Session()
    session.headers.update(build_headers(user_agent))
    return session
