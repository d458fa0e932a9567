"""
Response health classification.

Every aggregation ends in exactly one ``Classification``. Each member maps to a
single contract (tier, HTTP status, success flag, error code) so the rules for
what the client sees live in one table.

Policy:
    Losing queue data is never fatal; losing the store roster is.

    ======================  ===============  ======  =======  =======================
    Classification          tier             status  success  error code
    ======================  ===============  ======  =======  =======================
    SUCCESS                 success          200     True     -
    PARTIAL_SUCCESS         partial_success  206     False    QUEUE_DATA_UNAVAILABLE
    NO_STORES_FOUND         error            404     False    NO_STORES_FOUND
    STORE_LIST_UNAVAILABLE  error            503     False    STORE_DATA_UNAVAILABLE
    ======================  ===============  ======  =======  =======================
"""

from dataclasses import dataclass
from enum import Enum

from common.exceptions import (
    HTTP_200_OK,
    HTTP_206_PARTIAL_CONTENT,
    HTTP_404_NOT_FOUND,
    HTTP_503_SERVICE_UNAVAILABLE,
)

TIER_SUCCESS = "success"
TIER_PARTIAL_SUCCESS = "partial_success"
TIER_ERROR = "error"


@dataclass(frozen=True)
class ClassificationContract:
    tier: str
    status_code: int
    success: bool
    error_code: str | None


class Classification(Enum):
    SUCCESS = "success"
    PARTIAL_SUCCESS = "partial_success"
    NO_STORES_FOUND = "no_stores_found"
    STORE_LIST_UNAVAILABLE = "store_list_unavailable"

    @property
    def contract(self) -> ClassificationContract:
        return CLASSIFICATION_CONTRACTS[self]

    @property
    def tier(self) -> str:
        return self.contract.tier

    @property
    def status_code(self) -> int:
        return self.contract.status_code

    @property
    def success(self) -> bool:
        return self.contract.success

    @property
    def error_code(self) -> str | None:
        return self.contract.error_code


CLASSIFICATION_CONTRACTS: dict[Classification, ClassificationContract] = {
    Classification.SUCCESS: ClassificationContract(
        tier=TIER_SUCCESS, status_code=HTTP_200_OK, success=True, error_code=None
    ),
    Classification.PARTIAL_SUCCESS: ClassificationContract(
        tier=TIER_PARTIAL_SUCCESS,
        status_code=HTTP_206_PARTIAL_CONTENT,
        success=False,
        error_code="QUEUE_DATA_UNAVAILABLE",
    ),
    Classification.NO_STORES_FOUND: ClassificationContract(
        tier=TIER_ERROR,
        status_code=HTTP_404_NOT_FOUND,
        success=False,
        error_code="NO_STORES_FOUND",
    ),
    Classification.STORE_LIST_UNAVAILABLE: ClassificationContract(
        tier=TIER_ERROR,
        status_code=HTTP_503_SERVICE_UNAVAILABLE,
        success=False,
        error_code="STORE_DATA_UNAVAILABLE",
    ),
}


def classify(
    store_list_available: bool, store_count: int, successful_fetches: int
) -> Classification:
    """
    Classify an aggregation run. Pure function.

    Args:
        store_list_available: Whether the store-list fetch succeeded.
        store_count: Number of stores the store list returned.
        successful_fetches: Number of stores that got queue data.

    Returns:
        Classification for the run.
    """
    if not store_list_available:
        return Classification.STORE_LIST_UNAVAILABLE
    if store_count == 0:
        return Classification.NO_STORES_FOUND
    if successful_fetches == 0:
        return Classification.PARTIAL_SUCCESS
    return Classification.SUCCESS
