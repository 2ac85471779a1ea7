"""Link sanitizing for third-party news URLs."""

from urllib.parse import unquote

from config import SAFE_NEWS_URL


def sanitize_url(url: str) -> str:
    """Return an absolute, decoded link that is safe to open.

    Empty links, ``#`` and anything containing ``javascript:`` map to
    ``SAFE_NEWS_URL``. Scheme-relative and bare-host links are upgraded to
    https. Percent-escapes are decoded unless they are not valid UTF-8, in
    which case the undecoded link is returned.

    Args:
        url: Link as received from upstream.

    Returns:
        Sanitized link.
    """
    if not url or url == "#" or "javascript:" in url:
        return SAFE_NEWS_URL

    if url.startswith("//"):
        clean_url = f"https:{url}"
    elif not url.startswith("http"):
        clean_url = f"https://{url}"
    else:
        clean_url = url

    try:
        return unquote(clean_url, errors="strict")
    except UnicodeDecodeError:
        return clean_url
