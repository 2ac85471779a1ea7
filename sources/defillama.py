"""Source for DefiLlama stablecoin yield pools."""

import logging
from typing import List

from .base import BaseSource
from config import API_ENDPOINTS
from models.pool import Pool
from utils.audit import is_audited
from utils.symbols import passes_inclusion

logger = logging.getLogger(__name__)


class DefiLlamaSource(BaseSource):
    """Pure-stablecoin pools from the DefiLlama yields API.

    The API allows cross-origin calls, so requests go out directly.
    """

    name = "DefiLlama"

    POOLS_URL = API_ENDPOINTS["defillama_pools"]

    def _fetch_data(self) -> List[Pool]:
        response = self._make_request(self.POOLS_URL)
        records = response.json()["data"]
        if not isinstance(records, list):
            raise ValueError("Unexpected /pools payload: 'data' is not a list")

        pools = [
            Pool.from_record(record, is_audit=is_audited(record))
            for record in records
            if passes_inclusion(record["symbol"], record.get("tvlUsd"))
        ]
        logger.debug("DefiLlama: kept %d of %d pools", len(pools), len(records))
        return pools
