"""Serializer configuration.

Defaults reproduce the ESMA AIFMD reporting wire format. Deployments can
override individual settings through ``ANNEX_IV_*`` environment variables.
"""

import os
from typing import Optional

from pydantic import BaseModel, Field

from annex_iv.core.errors import ConfigurationError

ENV_PREFIX = "ANNEX_IV_"


class SerializerConfig(BaseModel):
    """Configuration for Annex IV XML serialization."""

    model_config = {"frozen": True}

    namespace: str = Field(
        default="urn:esma:xsd:aifmd-reporting",
        description="Default namespace of the AIFReportingInfo root",
    )
    xsi_namespace: str = Field(
        default="http://www.w3.org/2001/XMLSchema-instance",
        description="XML Schema instance namespace",
    )
    schema_location: str = Field(
        default="urn:esma:xsd:aifmd-reporting AIFMD_Reporting_DataTypes.xsd",
        description="Value of xsi:schemaLocation on single-fund reports",
    )
    indent: str = Field(default="  ", description="Indent unit per nesting level")
    max_main_instruments: int = Field(
        default=5, ge=0, description="Asset breakdown entries reported as main instruments"
    )
    max_principal_markets: int = Field(
        default=5, ge=0, description="Geographic focus entries reported as principal markets"
    )
    max_investor_domiciles: int = Field(
        default=10, ge=0, description="By-domicile investor breakdown entries"
    )
    max_counterparties: int = Field(
        default=5, ge=0, description="Top counterparties reported"
    )
    pending_aifm_code: str = Field(
        default="PENDING", description="AIFMNationalCode when the manager LEI is unknown"
    )
    unspecified_aifm_name: str = Field(
        default="Not specified", description="AIFMName when the manager name is unknown"
    )
    default_depositary_country: str = Field(
        default="DE", description="DepositaryCountry when no jurisdiction is given"
    )
    default_sub_asset_type: str = Field(
        default="OTHR_OTHR", description="Fund-level SubAssetType when none is given"
    )
    compliance_extension_tag: str = Field(
        default="CaelithComplianceExtension",
        description="Element wrapping the compliance status extension",
    )

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "SerializerConfig":
        """Build a config from ``ANNEX_IV_*`` environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Returns:
            SerializerConfig with overrides applied

        Raises:
            ConfigurationError: If a truncation limit is not a non-negative integer
        """
        environ = os.environ if environ is None else environ
        overrides: dict = {}

        for name, field_info in cls.model_fields.items():
            key = f"{ENV_PREFIX}{name.upper()}"
            if key not in environ:
                continue
            raw = environ[key]
            if field_info.annotation is int:
                try:
                    value = int(raw)
                except ValueError:
                    raise ConfigurationError(
                        f"{key} must be an integer", setting=key, value=raw
                    ) from None
                if value < 0:
                    raise ConfigurationError(
                        f"{key} must not be negative", setting=key, value=raw
                    )
                overrides[name] = value
            else:
                overrides[name] = raw

        return cls(**overrides)


DEFAULT_CONFIG = SerializerConfig()
