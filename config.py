"""Configuration for data sources, filtering and scoring."""

import os
from typing import Optional

from dotenv import load_dotenv

# Recognized stablecoin tickers (24 total)
STABLECOINS = [
    "USDT", "USDC", "DAI", "USDE", "PYUSD", "USDS", "USD1", "USDG",
    "GHO", "CRVUSD", "FRAX", "LUSD", "BUSD", "TUSD", "FDUSD", "UXD",
    "MIM", "ALUSD", "DOLA", "EUSD", "OUSD", "ZSUSD", "USDA", "USDP",
]

# Minimum pool TVL in USD ($10M)
MIN_TVL = 10_000_000

API_ENDPOINTS = {
    "defillama_pools": "https://yields.llama.fi/pools",
    "cryptopanic_posts": "https://cryptopanic.com/api/v1/posts/",
    "defillama_pool_page": "https://defillama.com/yields/pool/",
}

# CORS relays, tried in order
RELAY_ENDPOINTS = {
    "allorigins": "https://api.allorigins.win/get",
    "corsproxy": "https://corsproxy.io/",
}

# Tickers sent as the `currencies` filter when news is restricted to stablecoins
NEWS_CURRENCIES = STABLECOINS[:8]

# Placeholder shipped in examples; treated like a missing key
PLACEHOLDER_API_KEY = "YOUR_CRYPTOPANIC_API_KEY"

# Safe landing page for unusable news links
SAFE_NEWS_URL = "https://cryptopanic.com"

# Project slugs treated as audited when upstream gives no audit data
KNOWN_AUDITED_PROJECTS = [
    "aave", "makerdao", "curve", "convex", "lido", "ethena", "stargate",
    "morpho", "spark", "compound", "venus", "flux", "justlend", "hyperion",
    "uniswap", "pancakeswap", "mountain-protocol", "ethena-labs", "pendle",
    "beefy", "yearn", "instadapp", "frax", "eigenlayer", "ether.fi", "puffer",
]

# Source domains whose posts count as social chatter
SOCIAL_DOMAINS = ["twitter", "reddit", "t.me"]

# Pools per table page
PAGE_SIZE = 30

# Social posts shown in the intel sidebar
SOCIAL_LIMIT = 4

# Poll interval in seconds (5 minutes)
REFRESH_INTERVAL = 300

# No request deadline: failures surface only as transport errors
REQUEST_TIMEOUT = None

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Accept": "application/json, text/html, */*",
    "Accept-Language": "en-US,en;q=0.9",
}


def get_api_key() -> Optional[str]:
    """Return the CryptoPanic API key from the environment or a .env file."""
    load_dotenv()
    return os.environ.get("CRYPTOPANIC_API_KEY")
