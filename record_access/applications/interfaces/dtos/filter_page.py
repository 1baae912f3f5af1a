from pydantic import BaseModel, Field

from record_access.domain.models.query import PageRequest


class PageQuery(BaseModel):
    # Not constrained here: non-positive values must surface as InvalidPageRequestError.
    page: int = Field(default=1, description="1-based page number")
    page_size: int = Field(default=10, description="Maximum number of items per page")

    def to_page_request(self) -> PageRequest:
        return PageRequest(page=self.page, page_size=self.page_size)
