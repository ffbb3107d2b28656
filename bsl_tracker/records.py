"""Legislation record models consumed by the duplicate detector.

``CandidateRecord`` is built from submission form state and lives for one
detection call.  ``ExistingRecord`` mirrors a row of the legislation table and
is read-only.  Both accept the table's camelCase column names as aliases.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, List, Optional, Union

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field, field_validator


class MunicipalityType(str, Enum):
    CITY = "City"
    COUNTY = "County"


class LegislationType(str, Enum):
    BAN = "ban"
    RESTRICTION = "restriction"
    REPEALED = "repealed"
    UNVERIFIED = "unverified"


# New submissions may only describe active legislation.
CANDIDATE_LEGISLATION_TYPES = frozenset({LegislationType.BAN, LegislationType.RESTRICTION})


def _coerce_breeds(value: Any) -> Any:
    """Treat a missing breed list as empty and split comma-separated strings."""
    if value is None:
        return []
    if isinstance(value, str):
        return [b.strip() for b in value.split(",") if b.strip()]
    return value


def _parse_number(value: Any, cast) -> Any:
    """Read a spreadsheet-formatted number; unparseable cells become None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", "")
    elif not isinstance(value, (int, float)):
        return None
    try:
        return cast(float(value))
    except (ValueError, OverflowError):
        return None


def _coerce_count(value: Any) -> Any:
    return _parse_number(value, int)


def _coerce_coordinate(value: Any) -> Any:
    return _parse_number(value, float)


def _coerce_municipality_type(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().capitalize()
    return value


def _coerce_legislation_type(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    return value


BreedList = Annotated[List[str], BeforeValidator(_coerce_breeds)]
MunicipalityTypeField = Annotated[MunicipalityType, BeforeValidator(_coerce_municipality_type)]
LegislationTypeField = Annotated[LegislationType, BeforeValidator(_coerce_legislation_type)]
Count = Annotated[Optional[int], BeforeValidator(_coerce_count)]
Coordinate = Annotated[Optional[float], BeforeValidator(_coerce_coordinate)]

_RECORD_CONFIG = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class CandidateRecord(BaseModel):
    """A newly submitted legislation record, not yet persisted."""

    model_config = _RECORD_CONFIG

    municipality: str
    state: str
    municipality_type: MunicipalityTypeField = Field(
        validation_alias=AliasChoices("municipality_type", "municipalityType", "type")
    )
    banned_breeds: BreedList = Field(
        default_factory=list,
        validation_alias=AliasChoices("banned_breeds", "bannedBreeds"),
    )
    legislation_type: LegislationTypeField = Field(
        validation_alias=AliasChoices("legislation_type", "legislationType")
    )

    @field_validator("municipality", "state", mode="after")
    @classmethod
    def validate_required_text(cls, v: str, info) -> str:
        if not v.strip():
            raise ValueError(f"{info.field_name} must not be blank")
        return v

    @field_validator("legislation_type", mode="after")
    @classmethod
    def validate_candidate_type(cls, v: LegislationType) -> LegislationType:
        if v not in CANDIDATE_LEGISLATION_TYPES:
            raise ValueError("legislation_type must be 'ban' or 'restriction' for new submissions")
        return v


class ExistingRecord(BaseModel):
    """A row of the legislation table, referenced by ``id``."""

    model_config = _RECORD_CONFIG

    id: Union[int, str]
    municipality: str
    state: str
    municipality_type: MunicipalityTypeField = Field(
        validation_alias=AliasChoices("municipality_type", "municipalityType", "type")
    )
    banned_breeds: BreedList = Field(
        default_factory=list,
        validation_alias=AliasChoices("banned_breeds", "bannedBreeds"),
    )
    legislation_type: Optional[LegislationTypeField] = Field(
        None,
        validation_alias=AliasChoices("legislation_type", "legislationType"),
    )

    # Pass-through columns, unused by scoring; malformed numbers load as None
    ordinance: Optional[str] = None
    population: Count = None
    lat: Coordinate = None
    lng: Coordinate = None
    verification_date: Optional[str] = Field(
        None, validation_alias=AliasChoices("verification_date", "verificationDate")
    )
    ordinance_url: Optional[str] = Field(
        None, validation_alias=AliasChoices("ordinance_url", "ordinanceUrl")
    )
