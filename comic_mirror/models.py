from __future__ import annotations
from typing import Annotated, Optional, Literal, Union, Tuple
from urllib.parse import urlparse
from pydantic import (
    BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator,
)

from .utils import sanitize_filename

Selector = Annotated[StrictStr, Field(min_length=1)]


class SingleHop(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["single"] = "single"
    selector: Selector

    @property
    def hops(self) -> Tuple[str, ...]:
        return (self.selector,)


class MultiHop(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["multi"] = "multi"
    selectors: Tuple[Selector, ...] = Field(min_length=2)

    @property
    def hops(self) -> Tuple[str, ...]:
        return self.selectors


LatestPageLocator = Annotated[Union[SingleHop, MultiHop], Field(discriminator="kind")]


class DateSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    selector: Selector
    format: StrictStr
    lenient: bool = False


class ComicSource(BaseModel):
    """One entry of comics.json."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: StrictStr = Field(min_length=1)
    first_page_url: StrictStr = Field(alias="firstPageUrl", min_length=1)
    latest_page_link: LatestPageLocator = Field(alias="latestPageLink")
    previous_page_link: Selector = Field(alias="previousPageLink")
    image: Selector
    alt_image: Optional[Selector] = Field(default=None, alias="altImage")
    title_text: StrictBool = Field(alias="titleText")
    commentary: Optional[Selector] = None
    page_date: Optional[DateSpec] = Field(default=None, alias="pageDate")
    page_title: Optional[Selector] = Field(default=None, alias="pageTitle")

    @field_validator("name")
    @classmethod
    def _filesystem_safe(cls, v: str) -> str:
        if sanitize_filename(v) != v:
            raise ValueError(f"not a valid folder name: {v!r}")
        return v

    @field_validator("first_page_url")
    @classmethod
    def _absolute_http(cls, v: str) -> str:
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"not an absolute http(s) URL: {v!r}")
        return v

    @field_validator("latest_page_link", mode="before")
    @classmethod
    def _tag_locator(cls, v):
        if isinstance(v, str):
            return {"kind": "single", "selector": v}
        if isinstance(v, list):
            return {"kind": "multi", "selectors": v}
        raise ValueError("latestPageLink must be a selector or a list of selectors")

    @field_validator("page_date", mode="before")
    @classmethod
    def _date_tuple(cls, v):
        if v is None:
            return None
        if not isinstance(v, list) or len(v) < 2:
            raise ValueError("pageDate must be [selector, format, lenient?]")
        out = {"selector": v[0], "format": v[1]}
        if len(v) > 2:
            out["lenient"] = bool(v[2])
        return out


class Page(BaseModel):
    """A page found while walking back from the latest one."""

    page_url: str
    image_url: str = Field(min_length=1)
    page_date: Optional[str] = None  # YYYY-MM-DD
    page_title: Optional[str] = None
    title_text: Optional[str] = None
    commentary: Optional[str] = None


class UpdateResult(BaseModel):
    name: str
    downloaded: int = 0
    error: Optional[str] = None
