from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class Column(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: Any
    label: str


class TablePreview(BaseModel):
    name: str | None = None
    columns: list[Column] = Field(default_factory=list)
    rows: list[dict[Any, str]] = Field(default_factory=list)
    total_rows: int = 0
    sort_by: Any = None
    sort_order: Literal["asc", "desc"] | None = None
