# storefront/services/product_client.py
import requests
from requests import RequestException

from storefront.domain.errors import CatalogUnavailable
from storefront.utils.retry import http_retry
from storefront.utils.settings import PRODUCT_SERVICE_URL, PRODUCT_SERVICE_TIMEOUT
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ProductClient:
    """Odczyt z katalogu po HTTP. Produkty i ceny sa wlasnoscia katalogu."""

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = (base_url or PRODUCT_SERVICE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else PRODUCT_SERVICE_TIMEOUT

    @http_retry()
    def _get_product(self, product_id: int) -> dict | None:
        url = f"{self.base_url}/products/{product_id}"
        logger.info(f"ProductClient GET {url}")

        resp = requests.get(url, timeout=self.timeout)
        #404 to odpowiedz, nie awaria - bez ponawiania
        if resp.status_code == 404:
            return None
        resp.raise_for_status()
        return resp.json()

    def fetch_product(self, product_id: int) -> dict | None:
        try:
            return self._get_product(product_id)
        except RequestException as e:
            logger.error(f"Product service unavailable for product {product_id}: {e}")
            raise CatalogUnavailable() from e
