from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Annotated, Any, ClassVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, model_validator

from influencehub.db.types import ensure_utc

_CENTS = Decimal("0.01")


def quantize_cents(value: Decimal) -> Decimal:
    return value.quantize(_CENTS, rounding=ROUND_HALF_UP)


Money = Annotated[Decimal, Field(ge=0, lt=Decimal("100000000")), AfterValidator(quantize_cents)]
Percentage = Annotated[Decimal, Field(ge=0, le=100), AfterValidator(quantize_cents)]
MetricValue = Annotated[Decimal, Field(lt=Decimal("10000000000000")), AfterValidator(quantize_cents)]
Timestamp = Annotated[datetime, AfterValidator(ensure_utc)]


class RecordModel(BaseModel):
    """Stored entity as returned by the storage layer; serializes with camelCase keys."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class PayloadModel(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True, extra="ignore", use_enum_values=True, validate_default=True
    )


class PatchModel(PayloadModel):
    """Partial update: only fields present in the input are applied."""

    # Columns that may be omitted from a patch but never set to null.
    non_nullable: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def reject_null_required(self):
        for name in sorted(self.model_fields_set & self.non_nullable):
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)
