"""Entity: Product."""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
CATEGORY_MAX_LENGTH = 50


class _CamelModel(BaseModel):
    # JSON speaks camelCase (inStock); Python attributes stay snake_case
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="ignore",
    )


class Product(_CamelModel):
    """Product record held by the catalog store.

    The ``id`` is assigned by the store and never reused once the record
    is deleted.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: int = Field(description="Store-assigned identifier")
    name: str = Field(description="Display name, unique case-insensitively")
    description: str = Field(default="", description="Free-text description")
    price: float = Field(ge=0, description="Unit price")
    category: str = Field(description="Category label")
    in_stock: bool = Field(description="Availability flag")

    def to_public(self) -> dict[str, Any]:
        """Serialize with the camelCase wire names."""
        return self.model_dump(by_alias=True)

    def __eq__(self, other: Any) -> bool:
        """Compare products by business attributes."""
        if not isinstance(other, Product):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.description == other.description
            and self.price == other.price
            and self.category == other.category
            and self.in_stock == other.in_stock
        )

    def __hash__(self) -> int:
        """Hash on the identifier only; other attributes are mutable."""
        return hash(self.id)


def _reject_bool_price(value: Any) -> Any:
    # bool is an int subclass, so lax float parsing would store true as 1.0
    if isinstance(value, bool):
        raise ValueError("must be a number")
    return value


class ProductCreate(_CamelModel):
    """Payload accepted by the create operation. Every field is required."""

    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    description: str = Field(max_length=DESCRIPTION_MAX_LENGTH)
    price: float = Field(gt=0, allow_inf_nan=False)
    category: str = Field(min_length=1, max_length=CATEGORY_MAX_LENGTH)
    in_stock: bool

    price_not_bool = field_validator("price", mode="before")(_reject_bool_price)


class ProductUpdate(_CamelModel):
    """Partial payload for the update operation.

    Fields left out stay untouched; fields sent as ``null`` are rejected.
    """

    name: Annotated[str, Field(min_length=1, max_length=NAME_MAX_LENGTH)] | None = None
    description: Annotated[str, Field(max_length=DESCRIPTION_MAX_LENGTH)] | None = None
    price: Annotated[float, Field(gt=0, allow_inf_nan=False)] | None = None
    category: (
        Annotated[str, Field(min_length=1, max_length=CATEGORY_MAX_LENGTH)] | None
    ) = None
    in_stock: bool | None = None

    price_not_bool = field_validator("price", mode="before")(_reject_bool_price)

    @field_validator("*", mode="after")
    @classmethod
    def _reject_null(cls, value: Any) -> Any:
        # Only runs for values actually supplied; defaults are not validated
        if value is None:
            raise ValueError("must not be null")
        return value

    def changes(self) -> dict[str, Any]:
        """The supplied fields, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)
