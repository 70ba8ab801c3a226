"""Menu, dish library and category API schemas."""

from datetime import date as dt_date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from weekly_orders.utils.week import ensure_day_label


class SizeOptionSchema(BaseModel):
    """Named serving configuration."""

    name: str = Field(min_length=1)
    servings: int = Field(gt=0)
    price: int = Field(ge=0)


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None
    display_order: int | None = None


class CategoryUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    display_order: int | None = None


class CategoryResponse(BaseModel):
    id: int
    name: str
    description: str | None
    display_order: int

    model_config = ConfigDict(from_attributes=True)


class DishCreate(BaseModel):
    """Payload for creating a library dish."""

    name: str = Field(min_length=1)
    description: str | None = None
    category: str | None = None
    base_price: int = Field(default=0, ge=0)
    image_url: str = ""
    size_options: list[SizeOptionSchema] = Field(default_factory=list)


class DishUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    category: str | None = None
    base_price: int | None = Field(default=None, ge=0)
    image_url: str | None = None
    size_options: list[SizeOptionSchema] | None = None


class DishResponse(BaseModel):
    """Serialized library dish."""

    id: int
    name: str
    description: str | None
    category: str | None
    base_price: int
    image_url: str
    size_options: list[SizeOptionSchema]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OfferingCreate(BaseModel):
    """Place a library dish on one day of one week."""

    dish_id: int
    day: str
    week_id: str = Field(min_length=1)
    is_featured: bool = False

    @field_validator("day")
    @classmethod
    def _known_day(cls, value: str) -> str:
        return ensure_day_label(value)


class OfferingUpdate(BaseModel):
    """Staff edits of a placed offering."""

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    category: str | None = None
    image_url: str | None = None
    day: str | None = None
    week_id: str | None = None
    is_featured: bool | None = None
    is_available: bool | None = None
    base_price: int | None = Field(default=None, ge=0)
    size_options: list[SizeOptionSchema] | None = None

    @field_validator("day")
    @classmethod
    def _known_day(cls, value: str | None) -> str | None:
        return None if value is None else ensure_day_label(value)


class OfferingResponse(BaseModel):
    """Serialized menu offering."""

    id: int
    dish_id: int | None
    name: str
    description: str | None
    category: str | None
    image_url: str
    day: str
    week_id: str | None
    is_featured: bool
    is_available: bool
    base_price: int
    size_options: list[SizeOptionSchema]

    model_config = ConfigDict(from_attributes=True)


class WeekDay(BaseModel):
    day: str
    date: dt_date


class WeekMenuResponse(BaseModel):
    """Offerings of one browsing week with the dates of its days."""

    week_id: str
    days: list[WeekDay]
    offerings: list[OfferingResponse]


class CopyWeekRequest(BaseModel):
    from_week_id: str = Field(min_length=1)
    to_week_id: str = Field(min_length=1)


class CopyWeekResponse(BaseModel):
    created: int
