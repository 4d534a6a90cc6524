# vegshop/models/stock.py
from datetime import datetime
from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt


class StockEntry(BaseModel):
    """One vegetable's quantity and photo within a daily stock record."""

    model_config = ConfigDict(extra="ignore")

    id: str
    quantity: Union[StrictInt, StrictFloat]
    photo: str


class DailyStockIn(BaseModel):
    """Body of POST /daily-stock.

    ``vegetables`` is checked entry by entry against the catalog before it is
    parsed into :class:`StockEntry` models, so it is accepted loosely here.
    """

    vegetables: Any = None
    date: Any = None


class DailyStockReplace(BaseModel):
    vegetables: Any = None


class CarryForwardIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: Any = None
    vegetable_ids: Optional[List[str]] = Field(default=None, alias="vegetableIds")


class DailyStockOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    date: str
    vegetables: List[StockEntry] = Field(default_factory=list)
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "DailyStockOut":
        data = dict(doc)
        data["date"] = data.pop("_id")
        return cls(**data)


class CarryForwardResult(BaseModel):
    date: str
    message: str
    carried: int
