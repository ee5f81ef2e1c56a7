"""Payment specification supplied by the customer when paying an order."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from enum import Enum

from orderdesk.domain.exceptions import PaymentProofNotDecodable, PaymentTypeNotAllowed


class PaymentKind(Enum):
    BANK_TRANSFER = "BANK_TRANSFER"

    @staticmethod
    def parse(raw: str) -> PaymentKind:
        try:
            return PaymentKind(raw.strip().upper())
        except ValueError as exc:
            raise PaymentTypeNotAllowed(f"Payment type '{raw}' is not allowed") from exc


SUPPORTED_PAYMENT_KINDS = frozenset({PaymentKind.BANK_TRANSFER})


@dataclass(frozen=True)
class PaymentSpecification:
    """How an order was paid: kind, holder name, a verifiable identifier
    and a base64 encoded proof (e.g. a photo of the transfer receipt).
    """

    kind: PaymentKind
    holder_name: str
    identifier: str
    proof: str

    def validate(self) -> None:
        if self.kind not in SUPPORTED_PAYMENT_KINDS:
            raise PaymentTypeNotAllowed(f"Payment type {self.kind.value} is not allowed")
        # Padding is optional.
        proof = self.proof.rstrip("=")
        try:
            base64.b64decode(proof + "=" * (-len(proof) % 4), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise PaymentProofNotDecodable(
                "Payment proof is not a base64 encoded string"
            ) from exc
