"""
==============================================================================
Exchange Rate Schemas Module
==============================================================================

Records returned by the EUR exchange rate list endpoint.

The source publishes every value as a string and uses a comma as the
decimal separator, e.g. ``"srednji_tecaj": "1,0812"``.

==============================================================================
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ExchangeRateRecord(BaseModel):
    """One currency entry of the rate list."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    list_number: Optional[str] = Field(default=None, alias="broj_tecajnice")
    effective_date: Optional[str] = Field(default=None, alias="datum_primjene")
    country: Optional[str] = Field(default=None, alias="drzava")
    country_iso: Optional[str] = Field(default=None, alias="drzava_iso")
    buying_rate: Optional[str] = Field(default=None, alias="kupovni_tecaj")
    selling_rate: Optional[str] = Field(default=None, alias="prodajni_tecaj")
    currency_number: Optional[str] = Field(default=None, alias="sifra_valute")
    mid_rate: str = Field(..., alias="srednji_tecaj")
    currency: Optional[str] = Field(default=None, alias="valuta")
