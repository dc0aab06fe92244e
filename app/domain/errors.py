"""Excepciones de dominio para el flujo de reserva y emisión."""

from typing import Any


class DomainError(Exception):
    """Clase base para todos los errores de dominio."""

    http_status: int = 500

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)

    def details(self) -> dict[str, Any]:
        """Campos extra que se exponen al cliente junto con code/message."""
        return {}


# === Precondiciones ===


class MissingCredentialsError(DomainError):
    """Credenciales del gateway no configuradas."""

    http_status = 401

    def __init__(self) -> None:
        super().__init__(
            message="Credenciais ausentes (defina LARIAN_EMAIL e LARIAN_PASSWORD).",
            code="MISSING_CREDENTIALS",
        )


class MissingIdentifierError(DomainError):
    """No hay IdentificacaoDaViagem en ninguna de las fuentes."""

    http_status = 400

    def __init__(self) -> None:
        super().__init__(
            message="IdentificacaoDaViagem ausente e nenhum fallback configurado.",
            code="MISSING_IDENTIFIER",
        )


class MissingLocatorError(DomainError):
    """Emisión solicitada sin localizador."""

    http_status = 400

    def __init__(self) -> None:
        super().__init__(
            message="Informe 'localizador' para emitir.",
            code="MISSING_LOCATOR",
        )


# === Errores del gateway ===


class UpstreamTimeoutError(DomainError):
    """El gateway no respondió dentro del plazo configurado para la etapa."""

    http_status = 504
    stage = "upstream"

    def __init__(self, timeout_ms: int):
        super().__init__(
            message=f"{self.stage} timeout after {timeout_ms}ms",
            code=f"{self.stage.upper()}_TIMEOUT",
        )
        self.timeout_ms = timeout_ms

    def details(self) -> dict[str, Any]:
        return {"stage": self.stage, "timeoutMs": self.timeout_ms}


class AuthTimeoutError(UpstreamTimeoutError):
    stage = "login"


class ReserveTimeoutError(UpstreamTimeoutError):
    stage = "reserve"


class IssueTimeoutError(UpstreamTimeoutError):
    stage = "issue"


class UpstreamTransportError(DomainError):
    """Falla de red hacia el gateway (conexión rechazada, DNS, reset)."""

    http_status = 502
    stage = "upstream"

    def __init__(self, reason: str):
        super().__init__(
            message=f"{self.stage} transport error: {reason}",
            code=f"{self.stage.upper()}_TRANSPORT_ERROR",
        )
        self.reason = reason

    def details(self) -> dict[str, Any]:
        return {"stage": self.stage}


class AuthTransportError(UpstreamTransportError):
    stage = "login"


class ReserveTransportError(UpstreamTransportError):
    stage = "reserve"


class IssueTransportError(UpstreamTransportError):
    stage = "issue"


class AuthRejectedError(DomainError):
    """El login respondió con un status no-2xx."""

    def __init__(self, status: int, body: Any):
        super().__init__(message="Falha no login", code="LOGIN_FAILED")
        self.status = status
        self.body = body
        self.http_status = status if status >= 400 else 502

    def details(self) -> dict[str, Any]:
        return {"status": self.status, "details": self.body}


class AuthMalformedError(DomainError):
    """Login 2xx sin ningún campo de token reconocido."""

    http_status = 502

    def __init__(self, body: Any):
        super().__init__(
            message="Token de acesso não retornado pelo login",
            code="MISSING_TOKEN",
        )
        self.body = body

    def details(self) -> dict[str, Any]:
        return {"details": self.body}


class UpstreamHttpError(DomainError):
    """Reserva o emisión respondió con un status HTTP de error."""

    def __init__(self, stage: str, status: int, body: Any):
        super().__init__(
            message=f"{stage} failed with upstream status {status}",
            code="UPSTREAM_HTTP_ERROR",
        )
        self.stage = stage
        self.status = status
        self.body = body
        self.http_status = status if status >= 400 else 502

    def details(self) -> dict[str, Any]:
        return {"stage": self.stage, "status": self.status, "data": self.body}


class MalformedUpstreamResponseError(DomainError):
    """Respuesta 2xx con una forma que no permite continuar el flujo."""

    http_status = 502

    def __init__(self, message: str, body: Any, code: str = "MALFORMED_UPSTREAM_RESPONSE"):
        super().__init__(message=message, code=code)
        self.body = body

    def details(self) -> dict[str, Any]:
        return {"data": self.body}


class GatewayUnavailableError(DomainError):
    """Circuit breaker abierto: el gateway se considera caído."""

    http_status = 503

    def __init__(self, stage: str):
        super().__init__(
            message="Booking gateway temporarily unavailable (circuit breaker open)",
            code="CIRCUIT_OPEN",
        )
        self.stage = stage

    def details(self) -> dict[str, Any]:
        return {"stage": self.stage}


class BusinessError(DomainError):
    """
    Error de negocio reportado por el gateway dentro de un HTTP 200.

    Siempre incluye el payload original para diagnóstico.
    """

    http_status = 422

    def __init__(
        self,
        business_code: str | None,
        business_message: str,
        data: Any = None,
        stage: str | None = None,
        locator: str | None = None,
    ):
        super().__init__(message=business_message, code="BUSINESS_ERROR")
        self.business_code = business_code
        self.business_message = business_message
        self.data = data
        self.stage = stage
        self.locator = locator
        # Snapshot de la ejecución, lo completa el orquestador.
        self.debug: dict[str, Any] | None = None

    def details(self) -> dict[str, Any]:
        out: dict[str, Any] = {"data": self.data}
        if self.business_code is not None:
            out["code"] = self.business_code
        if self.stage:
            out["stage"] = self.stage
        if self.locator:
            out["localizador"] = self.locator
        if self.debug is not None:
            out["_debug"] = self.debug
        return out


# === Ofertas ===


class OfferNotFoundError(DomainError):
    """La oferta no existe o ya expiró."""

    http_status = 404

    def __init__(self, offer_id: str):
        super().__init__(
            message="Oferta não encontrada ou expirada.",
            code="NOT_FOUND",
        )
        self.offer_id = offer_id


class InvalidOfferPayloadError(DomainError):
    """Payload de oferta sin el tramo de ida."""

    http_status = 400

    def __init__(self) -> None:
        super().__init__(
            message="Payload da oferta é inválido.",
            code="INVALID_PAYLOAD",
        )


# === Validación ===


class ValidationError(DomainError):
    """Error de validación de datos de entrada."""

    http_status = 400

    def __init__(self, field: str, message: str):
        super().__init__(
            message=f"Validação falhou em '{field}': {message}",
            code="VALIDATION_ERROR",
        )
        self.field = field
