from decimal import Decimal
from typing import Dict, Optional

from pydantic import BaseModel, Field, field_validator


class ProviderSettingsIn(BaseModel):
    shop_idp: str
    login: str
    password: Optional[str] = None  # None - не менять сохранённый пароль
    additional_fee: Decimal = Field(default=Decimal("0"), ge=0)
    additional_fee_percentage: bool = False

    shop_idp_override_for_store: bool = False
    login_override_for_store: bool = False
    password_override_for_store: bool = False
    additional_fee_override_for_store: bool = False
    additional_fee_percentage_override_for_store: bool = False

    @field_validator("shop_idp", "login")
    @classmethod
    def strip_value(cls, v: str) -> str:
        return v.strip()

    def override_for(self, field: str) -> bool:
        return bool(getattr(self, f"{field}_override_for_store"))


class ProviderSettingsOut(BaseModel):
    store_id: int
    shop_idp: str
    login: str
    has_password: bool
    additional_fee: Decimal
    additional_fee_percentage: bool
    overrides: Optional[Dict[str, bool]] = None
