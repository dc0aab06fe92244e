"""
Circuit Breaker for the upstream booking gateway.

Circuit Breaker Pattern:
- CLOSED: Normal operation, requests pass through
- OPEN: Too many failures, requests fail immediately (503 to our clients)
- HALF_OPEN: Testing if service recovered, one request allowed

Only timeouts and transport faults count as failures. HTTP error statuses and
business errors mean the gateway is alive and answering, so they never trip
the breaker.

Configuration (see ``app.config.Settings``):
- fail_max: consecutive failures before opening the circuit
- reset_timeout: seconds to wait before attempting recovery (HALF_OPEN)
"""

import asyncio
import logging

import httpx
from pybreaker import CircuitBreaker, CircuitBreakerError, CircuitBreakerListener

logger = logging.getLogger(__name__)

DEFAULT_FAIL_MAX = 5
DEFAULT_RESET_TIMEOUT = 60


def is_gateway_fault(exc: BaseException) -> bool:
    return isinstance(exc, (httpx.TransportError, asyncio.TimeoutError))


class GatewayBreakerListener(CircuitBreakerListener):
    """Logs circuit breaker state changes for monitoring and alerting."""

    def __init__(self, name: str):
        self.name = name

    def state_change(self, cb, old_state, new_state):
        logger.warning(
            "Circuit breaker state changed",
            extra={
                "breaker_name": self.name,
                "old_state": old_state.name if old_state else None,
                "new_state": new_state.name,
            },
        )


gateway_breaker = CircuitBreaker(
    fail_max=DEFAULT_FAIL_MAX,
    reset_timeout=DEFAULT_RESET_TIMEOUT,
    exclude=[lambda exc: not is_gateway_fault(exc)],
    listeners=[GatewayBreakerListener("booking_gateway")],
    name="booking_gateway_circuit_breaker",
)


def configure_gateway_breaker(fail_max: int, reset_timeout: int) -> CircuitBreaker:
    gateway_breaker.fail_max = fail_max
    gateway_breaker.reset_timeout = reset_timeout
    return gateway_breaker


__all__ = [
    "gateway_breaker",
    "configure_gateway_breaker",
    "is_gateway_fault",
    "CircuitBreakerError",
]
