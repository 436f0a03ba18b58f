"""Pydantic models shared across HTTP routes."""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class NameGenerationRequest(BaseModel):
    """Schema describing the payload used to generate a name set."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    region_abbreviation: str = Field(
        ...,
        alias="regionAbbreviation",
        description="Region short code: eus, eus2, wus2 or cus.",
    )
    environment: str = Field(..., description="Deployment environment: dev, qa or prod.")
    workload_name: str = Field(
        ...,
        alias="workloadName",
        min_length=2,
        max_length=10,
        description="Workload identifier embedded in every name.",
    )
    unique_suffix: str = Field(
        default="",
        alias="uniqueSuffix",
        max_length=13,
        description="Optional suffix for globally unique resource types.",
    )
    org_prefix: str = Field(
        default="",
        alias="orgPrefix",
        max_length=5,
        description="Optional organisation prefix prepended to every name.",
    )
    instance: int = Field(default=1, ge=1, le=999, description="Instance number, zero-padded to three digits.")
    cloud: str | None = Field(
        default=None,
        description="Cloud whose DNS suffixes are used for private DNS zones (AzureCloud, AzureUSGovernment, AzureChinaCloud).",
    )
    resource_types: List[str] | None = Field(
        default=None,
        alias="resourceTypes",
        description="Optional subset of resource-type keys to generate.",
    )
    category: str | None = Field(default=None, description="Optional rule category filter (e.g. networking).")


class NameGenerationResponse(BaseModel):
    """Successful response carrying the generated name set."""

    regionAbbreviation: str
    environment: str
    workloadName: str
    uniqueSuffix: str
    orgPrefix: str
    instance: int
    regionFullName: str
    instanceFormatted: str
    cloud: str
    names: Dict[str, str] = Field(default_factory=dict)


class TemplateFieldEntry(BaseModel):
    name: str
    type: str


class RuleDescriptionResponse(BaseModel):
    key: str
    abbreviation: str
    category: str
    description: str | None = None
    nameTemplate: str
    maxLength: int | None = None
    stripHyphens: bool = False
    lowercase: bool = False
    charset: str | None = None
    fixed: bool = False
    templateFields: List[TemplateFieldEntry] = Field(default_factory=list)


class RuleListResponse(BaseModel):
    resourceTypes: List[str] = Field(default_factory=list)


class PrivateDnsZonesResponse(BaseModel):
    cloud: str
    zones: Dict[str, str] = Field(default_factory=dict)


class MessageResponse(BaseModel):
    message: str
