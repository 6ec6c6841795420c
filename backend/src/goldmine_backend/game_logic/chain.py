"""Chain-status lookups for purchase confirmation.

The status returned by the chain is advisory. What happens when it cannot be
obtained is decided by the configured :class:`SignaturePosture`.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

import httpx

from goldmine_backend.game_logic.errors import UnverifiableSignatureError, ValidationError
from goldmine_backend.shared.enums import ConfirmationStatus, SignaturePosture
from goldmine_backend.shared.events import AuditEvent, AuditEventType

if TYPE_CHECKING:
    from goldmine_backend.game_logic.persistence import AuditTrail

logger = logging.getLogger(__name__)


class ChainStatusClient(Protocol):
    """Protocol for querying the confirmation status of a signature."""

    async def get_confirmation_status(self, signature: str) -> ConfirmationStatus:
        """Return the status of *signature* or raise ``UnverifiableSignatureError``."""

    async def aclose(self) -> None:
        """Release network resources."""


def parse_signature_status(entry: dict[str, Any] | None) -> ConfirmationStatus:
    """Map one ``getSignatureStatuses`` entry onto a :class:`ConfirmationStatus`."""
    if entry is None:
        return ConfirmationStatus.UNKNOWN
    reported = entry.get("confirmationStatus")
    if reported in {"confirmed", "finalized"}:
        return ConfirmationStatus.CONFIRMED
    if reported == "processed":
        return ConfirmationStatus.PROCESSED
    if entry.get("err") is None:
        return ConfirmationStatus.PROCESSED
    return ConfirmationStatus.UNKNOWN


class SolanaRpcChainClient:
    """Query a Solana JSON-RPC node for signature statuses."""

    def __init__(
        self,
        cluster_url: str,
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._cluster_url = cluster_url
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def get_confirmation_status(self, signature: str) -> ConfirmationStatus:
        payload = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": "getSignatureStatuses",
            "params": [[signature], {"searchTransactionHistory": True}],
        }
        try:
            response = await self._client.post(self._cluster_url, json=payload)
            response.raise_for_status()
            body = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            msg = f"could not query signature status: {exc}"
            raise UnverifiableSignatureError(msg) from exc

        if "error" in body:
            msg = f"RPC error: {body['error']}"
            raise UnverifiableSignatureError(msg)
        try:
            entries = body["result"]["value"]
        except (KeyError, TypeError) as exc:
            msg = "malformed getSignatureStatuses response"
            raise UnverifiableSignatureError(msg) from exc
        return parse_signature_status(entries[0] if entries else None)

    async def aclose(self) -> None:
        await self._client.aclose()


class SignatureVerifier:
    """Check signature format and consult the chain according to posture."""

    def __init__(
        self,
        client: ChainStatusClient,
        audit: AuditTrail,
        *,
        posture: SignaturePosture = SignaturePosture.PERMISSIVE,
        min_length: int = 80,
        max_length: int = 90,
    ) -> None:
        self._client = client
        self._audit = audit
        self._posture = posture
        self._min_length = min_length
        self._max_length = max_length

    @property
    def posture(self) -> SignaturePosture:
        return self._posture

    def check_format(self, signature: object) -> str:
        """Return *signature* if it looks like a base58 transaction signature."""
        if not isinstance(signature, str) or not (
            self._min_length <= len(signature) <= self._max_length
        ):
            msg = "invalid signature format"
            raise ValidationError(msg)
        return signature

    async def verify(self, address: str, signature: object) -> ConfirmationStatus:
        """Return the status to report for a purchase paid with *signature*."""
        token = self.check_format(signature)
        try:
            status = await self._client.get_confirmation_status(token)
        except UnverifiableSignatureError as exc:
            if self._posture is SignaturePosture.STRICT:
                raise
            logger.warning(
                "Could not validate signature %s for %s, allowing anyway: %s",
                token,
                address,
                exc.reason,
            )
            status = ConfirmationStatus.UNVERIFIED

        if status in {ConfirmationStatus.CONFIRMED, ConfirmationStatus.PROCESSED}:
            return status
        if self._posture is SignaturePosture.STRICT:
            msg = "transaction not found or failed"
            raise ValidationError(msg, {"status": status.value})
        self._audit.record(
            AuditEvent(
                address=address,
                event_type=AuditEventType.SIGNATURE_UNVERIFIED,
                message=f"signature accepted with status {status.value}",
                payload={"signature": token, "status": status.value},
            )
        )
        return status


__all__ = [
    "ChainStatusClient",
    "SignatureVerifier",
    "SolanaRpcChainClient",
    "parse_signature_status",
]
