"""Share session handling."""

from share_client.auth.session import SessionManager, build_share_url, parse_login_response

__all__ = ["SessionManager", "build_share_url", "parse_login_response"]
