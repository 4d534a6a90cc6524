# vegshop/models/vegetable.py
from datetime import datetime
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from vegshop.models.enums import Category
from vegshop.services.validation import coerce_number, validate_vegetable_data


class VegetableIn(BaseModel):
    """Body of POST and PUT /vegetables."""

    name: str
    price: float
    category: Category
    photo: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def check_catalog_rules(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            raise ValueError("Request body must be a JSON object")
        result = validate_vegetable_data(data)
        if not result.is_valid:
            raise ValueError(result.error)
        return {**data, "price": coerce_number(data["price"])}

    def to_document(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


class VegetableOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    price: float
    category: str
    photo: str = ""
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "VegetableOut":
        data = dict(doc)
        data["id"] = str(data.pop("_id"))
        return cls(**data)


class CreatedResponse(BaseModel):
    id: str
    message: str


class MessageResponse(BaseModel):
    message: str
