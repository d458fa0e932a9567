"""
Helpers shared by the upstream clients.
"""

from urllib.parse import urlencode


def build_upstream_url(api_url: str, query: dict[str, str], proxy_url: str = "") -> str:
    """
    Build the request URL for an upstream call.

    Without a proxy this is simply ``{api_url}?{query}``. With a proxy the
    full target URL is appended to the proxy after ``/?``, which is the form
    the CORS proxy in front of the upstream expects.

    Example:
        ```python
        build_upstream_url("https://api.test/queue", {"storeid": "34"})
        # "https://api.test/queue?storeid=34"
        build_upstream_url("https://api.test/queue", {"storeid": "34"}, "https://proxy.test")
        # "https://proxy.test/?https://api.test/queue?storeid=34"
        ```
    """
    target = f"{api_url}?{urlencode(query)}"
    if not proxy_url:
        return target
    return f"{proxy_url.rstrip('/')}/?{target}"
