"""
Async client for the payment provider (Stripe REST API).

Only the "create payment intent" call is used: the store sends an amount in
minor currency units and gets back an intent id and the client secret the
browser needs to confirm the payment. Without a configured secret key the
client hands out mock intents so checkout works in development.
"""

import logging
import time
import uuid
from dataclasses import dataclass
from typing import Optional

import httpx

from selfpress.core.config import settings
from selfpress.core.exceptions import PaymentProviderError

logger = logging.getLogger(__name__)


@dataclass
class PaymentIntentResult:
    id: str
    client_secret: str
    is_mock: bool = False


class StripePaymentClient:
    """
    Creates payment intents with Stripe.

    Args:
        secret_key (str): Provider secret key. Keys not starting with 'sk_'
            switch the client to mock mode.
        api_base (str): Base URL of the provider API.
        timeout (float): Seconds before a provider call is abandoned.
        transport (Optional[httpx.AsyncBaseTransport]): Custom transport, used
            by tests to stub the provider.
    """

    def __init__(
        self,
        secret_key: str,
        api_base: str = "https://api.stripe.com/v1",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.secret_key = secret_key
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    @property
    def is_mock(self) -> bool:
        return not self.secret_key.startswith("sk_")

    async def create_payment_intent(self, amount: int, currency: str) -> PaymentIntentResult:
        """
        Creates a payment intent.

        Args:
            amount (int): Amount in minor currency units.
            currency (str): ISO currency code, e.g. 'usd'.

        Returns:
            PaymentIntentResult: Intent id and client secret.

        Raises:
            PaymentProviderError: If the provider cannot be reached or
                rejects the request. The provider's message is kept.
        """
        if self.is_mock:
            intent_id = f"mock_pi_{uuid.uuid4().hex}"
            logger.info(f"Mock payment intent {intent_id} created for {amount} {currency}.")
            return PaymentIntentResult(
                id=intent_id,
                client_secret=f"mock_client_secret_{int(time.time() * 1000)}",
                is_mock=True,
            )

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(
                    f"{self.api_base}/payment_intents",
                    data={"amount": amount, "currency": currency},
                    headers={"Authorization": f"Bearer {self.secret_key}"},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            message = _provider_message(exc.response)
            logger.error(f"Payment provider HTTP error: {exc.response.status_code} - {message}")
            raise PaymentProviderError(f"Error creating payment intent: {message}") from exc
        except httpx.RequestError as exc:
            logger.error(f"Error reaching the payment provider: {exc}")
            raise PaymentProviderError(f"Error creating payment intent: {exc}") from exc
        except ValueError as exc:
            logger.error(f"Payment provider returned a body that is not JSON: {exc}")
            raise PaymentProviderError("Error creating payment intent: invalid response from provider") from exc

        if not isinstance(data, dict):
            logger.error(f"Payment provider returned an unexpected body: {data!r}")
            raise PaymentProviderError("Error creating payment intent: invalid response from provider")
        intent_id = data.get("id")
        client_secret = data.get("client_secret")
        if not intent_id or not client_secret:
            logger.error(f"Payment provider returned an incomplete intent: {data}")
            raise PaymentProviderError("Error creating payment intent: incomplete response from provider")

        logger.info(f"Payment intent {intent_id} created for {amount} {currency}.")
        return PaymentIntentResult(id=intent_id, client_secret=client_secret)


def _provider_message(response: httpx.Response) -> str:
    """Extracts `error.message` from a Stripe error body, falling back to the raw text."""
    try:
        return response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return response.text or f"HTTP {response.status_code}"


def get_payment_client() -> StripePaymentClient:
    """FastAPI dependency returning a client configured from settings."""
    return StripePaymentClient(
        secret_key=settings.STRIPE_SECRET_KEY,
        api_base=settings.STRIPE_API_BASE,
        timeout=settings.PAYMENT_TIMEOUT_SECONDS,
    )
