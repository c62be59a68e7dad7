"""Transaction schemas module for seeding and listing."""
from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator


class TransactionBase(BaseModel):
    """Base transaction schema with common fields."""

    title: str = Field(..., description="Product title")
    description: str = Field("", description="Product description")
    price: float = Field(..., description="Product price")
    category: str = Field(..., description="Free-form category label")
    image: str = Field("", description="Product image URL")
    sold: bool = Field(False, description="Whether the product was sold")
    date_of_sale: datetime = Field(
        ...,
        alias="dateOfSale",
        description="Sale timestamp",
    )

    class Config:
        populate_by_name = True


class TransactionCreate(TransactionBase):
    """Schema for a record fetched from the seed source.

    Extra source fields (such as the source's own ``id``) are ignored.
    """

    @field_validator("date_of_sale")
    @classmethod
    def normalize_to_utc(cls, value: datetime) -> datetime:
        """Store timestamps as naive UTC."""
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value


class TransactionResponse(TransactionBase):
    """Schema for transaction response."""

    id: int = Field(..., description="Transaction ID")

    class Config:
        from_attributes = True
        populate_by_name = True


class TransactionListResponse(BaseModel):
    """Schema for paginated transaction list response."""

    page: int = Field(..., description="Current page number")
    per_page: int = Field(..., description="Number of items per page")
    total: int = Field(..., description="Total number of matching transactions")
    total_pages: int = Field(..., description="Total number of pages")
    data: list[TransactionResponse] = Field(
        default_factory=list, description="Transactions on this page"
    )


class MessageResponse(BaseModel):
    """Informational response carrying no data."""

    msg: str


class SeedResponse(BaseModel):
    """Schema for the seed operation response."""

    msg: str = Field(..., description="Operation result message")
    count: int = Field(..., description="Number of transactions inserted")
    transactions: list[TransactionResponse] = Field(
        default_factory=list, description="Inserted transactions"
    )
