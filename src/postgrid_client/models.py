"""
Data models for address verification requests and results.

Requests are plain frozen dataclasses built by the caller. Results are
frozen pydantic models decoded from the ``data`` part of a response
envelope; field names are snake_case in Python and camelCase on the wire.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


@dataclass(frozen=True)
class Address:
    """
    An address to be sent for verification.

    Either ``freeform`` holds the whole address as one string, or the
    structured fields are used. When ``freeform`` is non-empty the
    structured fields are ignored when encoding.
    """
    line1: str = ""
    line2: str = ""
    city: str = ""
    province_or_state: str = ""
    postal_or_zip: str = ""
    country: str = ""
    input_id: str = ""  # echoed back by the batch endpoint
    freeform: str = ""

    @classmethod
    def from_string(cls, text: str) -> "Address":
        """Build a freeform address, e.g. ``"22-20 bay st, Toronto, ON"``."""
        return cls(freeform=text)

    @property
    def is_freeform(self) -> bool:
        return bool(self.freeform)


@dataclass(frozen=True)
class VerifyAddressRequest:
    """Request model for the Verify Address endpoint."""
    address: Address


@dataclass(frozen=True)
class BatchVerifyAddressesRequest:
    """
    Request model for the Batch Verify Addresses endpoint.

    Results come back in the same order as ``addresses``. Callers are
    expected to keep batches at or below ``MAX_BATCH_SIZE``.
    """
    addresses: List[Address] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.addresses)


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # JSON null falls back to the field default
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class GeocodeLocation(_WireModel):
    latitude: float | None = Field(default=None, alias="lat")
    longitude: float | None = Field(default=None, alias="lng")


class GeocodeResult(_WireModel):
    """Geocode attached to a verified address when ``geocode=true``."""
    location: GeocodeLocation = Field(default_factory=GeocodeLocation)
    accuracy: float = 0.0
    accuracy_type: str = ""  # e.g. "rooftop"

    @property
    def latitude(self) -> float | None:
        return self.location.latitude

    @property
    def longitude(self) -> float | None:
        return self.location.longitude


class VerifiedAddressDetails(_WireModel):
    """
    Optional annotations returned with ``includeDetails=true``.

    The service adds fields to this record over time. The common ones are
    typed below; anything else is kept as an extra attribute and shows up
    in ``model_extra``.
    """
    model_config = ConfigDict(extra="allow")

    street_name: str | None = None
    street_type: str | None = None
    street_direction: str | None = None
    pre_direction: str | None = None
    post_direction: str | None = None
    street_number: str | None = None
    suite_id: str | None = Field(default=None, alias="suiteID")
    suite_key: str | None = None
    box_id: str | None = Field(default=None, alias="boxID")
    rural_route_number: str | None = None
    rural_route_type: str | None = None
    delivery_installation_area_name: str | None = None
    delivery_installation_type: str | None = None
    county: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _as_text(cls, value: Any) -> Any:
        # numbers and flags (e.g. streetNumber: 251) are kept as text
        if value is None or isinstance(value, str):
            return value
        return str(value)

    def get(self, name: str, default: Any = None) -> Any:
        """Look up a detail by its wire name or attribute name."""
        for field_name, info in type(self).model_fields.items():
            if name in (field_name, info.alias):
                value = getattr(self, field_name)
                return default if value is None else value
        return (self.model_extra or {}).get(name, default)


class VerifiedAddress(_WireModel):
    """An address that has been verified (and possibly corrected) by PostGrid."""
    line1: str = ""
    line2: str = ""
    city: str = ""
    province_or_state: str = ""
    postal_or_zip: str = ""
    zip_plus4: str = ""
    firm_name: str = ""
    country: str = ""
    country_name: str = ""
    status: str = ""  # "verified", "corrected" or "failed"
    errors: Dict[str, List[str]] = Field(default_factory=dict)
    details: VerifiedAddressDetails = Field(default_factory=VerifiedAddressDetails)
    geocode_result: GeocodeResult = Field(default_factory=GeocodeResult)

    def has_errors(self) -> bool:
        return any(self.errors.values())


class VerifiedAddressResponse(_WireModel):
    verified_address: VerifiedAddress


class BatchVerifyAddressesResponse(_WireModel):
    """Response model for the Batch Verify Addresses endpoint."""
    results: List[VerifiedAddressResponse] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.results)

    def verified_addresses(self) -> Iterator[VerifiedAddress]:
        """Iterate the verified addresses in request order."""
        return (r.verified_address for r in self.results)
