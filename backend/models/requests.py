from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .findings import RawFinding
from .records import SocialFinding


class PersonalIdentifiers(BaseModel):
    """Vault values handed to the search provider. Never logged."""
    emails: list[str] = Field(default_factory=list)
    phones: list[str] = Field(default_factory=list)
    full_names: list[str] = Field(default_factory=list)
    usernames: list[str] = Field(default_factory=list)
    aliases: list[str] = Field(default_factory=list)
    addresses: list[str] = Field(default_factory=list)
    employers: list[str] = Field(default_factory=list)
    dob: Optional[str] = None
    ssn_last4: Optional[str] = Field(default=None, min_length=4, max_length=4)

    @field_validator('emails')
    @classmethod
    def normalize_emails(cls, v: list[str]) -> list[str]:
        return [e.lower().strip() for e in v]

    @field_validator('ssn_last4')
    @classmethod
    def numeric_only(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.isdigit():
            raise ValueError('SSN fragment must be numeric')
        return v

    def is_empty(self) -> bool:
        return not any(self.model_dump().values())


class IdentityScanRequest(BaseModel):
    findings: Optional[list[RawFinding]] = None
    identifiers: Optional[PersonalIdentifiers] = None
    strict: bool = False


class RiskRecomputeRequest(BaseModel):
    social_findings: list[SocialFinding] = Field(default_factory=list)
    correlation_multiplier: Optional[float] = Field(default=None, ge=1.0, le=3.0)
