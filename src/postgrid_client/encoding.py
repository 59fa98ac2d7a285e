"""
Address encoders for the two request body formats the API accepts.

The single verify endpoint historically takes a form-encoded body, the
batch endpoint a JSON body. The two formats do not agree on how empty
structured fields are handled:

- Form: every structured key is sent, empty or not (dense).
- JSON: only populated structured fields are sent (sparse).

Both behaviours are kept as separate encoders selected per endpoint.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import StrEnum
from typing import Any, List, Tuple, Dict

from .models import Address


class EncodingMode(StrEnum):
    """Request body format."""
    FORM = "form"
    JSON = "json"


# (python attribute, wire name), in the order they are emitted
FORM_FIELDS: List[Tuple[str, str]] = [
    ("line1", "line1"),
    ("line2", "line2"),
    ("city", "city"),
    ("province_or_state", "provinceOrState"),
    ("postal_or_zip", "postalOrZip"),
    ("country", "country"),
]

JSON_FIELDS: List[Tuple[str, str]] = FORM_FIELDS + [("input_id", "inputID")]


class AddressEncoder(ABC):
    """
    Abstract base for address encoders.

    Encoders turn an Address into the piece of a request body that
    describes it, and wrap it into a full body for one endpoint.
    """

    mode: EncodingMode
    content_type: str

    @abstractmethod
    def encode_address(self, address: Address) -> Any:
        """
        Encode a single address.

        Args:
            address: Address to encode

        Returns:
            Encoded representation (form pairs or a JSON-safe value)
        """
        pass

    @abstractmethod
    def single_body(self, address: Address) -> Any:
        """Build the body for the single verify endpoint."""
        pass


class FormAddressEncoder(AddressEncoder):
    """
    URL-form encoder.

    Freeform addresses become one ``address`` key. Structured addresses
    always emit all six ``address[...]`` keys, including empty ones.
    ``input_id`` is not part of the form body.
    """

    mode = EncodingMode.FORM
    content_type = "application/x-www-form-urlencoded"

    def encode_address(self, address: Address) -> List[Tuple[str, str]]:
        if address.is_freeform:
            return [("address", address.freeform)]
        return [
            (f"address[{wire}]", getattr(address, attr))
            for attr, wire in FORM_FIELDS
        ]

    def single_body(self, address: Address) -> List[Tuple[str, str]]:
        return self.encode_address(address)


class JSONAddressEncoder(AddressEncoder):
    """
    JSON encoder.

    Freeform addresses serialize as a bare string, structured ones as an
    object holding only the populated fields.
    """

    mode = EncodingMode.JSON
    content_type = "application/json"

    def encode_address(self, address: Address) -> str | Dict[str, str]:
        if address.is_freeform:
            return address.freeform
        return {
            wire: getattr(address, attr)
            for attr, wire in JSON_FIELDS
            if getattr(address, attr)
        }

    def single_body(self, address: Address) -> Dict[str, Any]:
        return {"address": self.encode_address(address)}

    def batch_body(self, addresses: List[Address]) -> Dict[str, Any]:
        """Build the body for the batch verify endpoint, keeping input order."""
        return {"addresses": [self.encode_address(a) for a in addresses]}


_ENCODERS: Dict[EncodingMode, AddressEncoder] = {
    EncodingMode.FORM: FormAddressEncoder(),
    EncodingMode.JSON: JSONAddressEncoder(),
}


def get_encoder(mode: EncodingMode | str) -> AddressEncoder:
    """
    Look up the encoder for a body format.

    Raises:
        ValueError: if ``mode`` is not a known EncodingMode
    """
    try:
        return _ENCODERS[EncodingMode(mode)]
    except ValueError as e:
        raise ValueError(
            f"Unknown encoding mode '{mode}'. "
            f"Known modes: {sorted(m.value for m in EncodingMode)}"
        ) from e
