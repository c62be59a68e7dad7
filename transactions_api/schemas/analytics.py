"""Analytics schemas module.

Response schemas for the month-scoped statistics, bar chart, pie chart
and combined endpoints.
"""
from pydantic import BaseModel, Field


class StatisticsResponse(BaseModel):
    """Sale totals for a single month."""

    total_sale_amount: float = Field(
        ...,
        alias="totalSaleAmount",
        description="Sum of price over sold items",
    )
    total_sold_items: int = Field(
        ...,
        alias="totalSoldItems",
        description="Number of sold items",
    )
    total_unsold_items: int = Field(
        ...,
        alias="totalUnsoldItems",
        description="Number of unsold items",
    )

    class Config:
        populate_by_name = True


class CategoryCount(BaseModel):
    """Number of items in one category."""

    category: str
    count: int


class CombinedStatisticsResponse(BaseModel):
    """Statistics, bar chart and pie chart data for one month."""

    statistics: StatisticsResponse
    price_ranges: dict[str, int] = Field(..., alias="priceRanges")
    category_counts: list[CategoryCount] = Field(..., alias="categoryCounts")

    class Config:
        populate_by_name = True
