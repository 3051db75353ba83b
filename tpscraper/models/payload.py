"""Models for the ``__NEXT_DATA__`` payload embedded in listing pages.

Only the keys the extractor reads are declared; everything else is ignored.
Every field is optional so that missing data maps to an explicit default
instead of an error. Fields of the wrong type still fail validation.
"""

from pydantic import BaseModel, ConfigDict, Field


class _PayloadModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RawConsumer(_PayloadModel):
    display_name: str | None = Field(default=None, alias="displayName")


class RawDates(_PayloadModel):
    experienced_date: str | None = Field(default=None, alias="experiencedDate")


class RawReview(_PayloadModel):
    consumer: RawConsumer | None = None
    dates: RawDates | None = None
    rating: int | float | None = None
    title: str | None = None
    text: str | None = None


class RawPagination(_PayloadModel):
    total_pages: int | None = Field(default=None, alias="totalPages")


class RawFilters(_PayloadModel):
    pagination: RawPagination | None = None


class RawPageProps(_PayloadModel):
    reviews: list[RawReview] | None = None
    filters: RawFilters | None = None

    @property
    def total_pages(self) -> int:
        if self.filters and self.filters.pagination:
            return self.filters.pagination.total_pages or 0
        return 0


class RawProps(_PayloadModel):
    page_props: RawPageProps | None = Field(default=None, alias="pageProps")


class EmbeddedPayload(_PayloadModel):
    """Root of the embedded page data."""

    props: RawProps | None = None

    @property
    def page_props(self) -> RawPageProps | None:
        return self.props.page_props if self.props else None
