from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

Scalar = Union[str, int, float]


class SortEntryModel(BaseModel):
    id: str
    desc: bool = False


class FilterEntryModel(BaseModel):
    id: str
    value: Any = None


class DraftSortEntryModel(BaseModel):
    id: str
    column_id: str
    direction: str = "asc"


class DraftFilterEntryModel(BaseModel):
    id: str
    filter_id: str
    values: List[Scalar] = Field(default_factory=list)
    condition: Optional[str] = None


class SortingPair(BaseModel):
    a: List[SortEntryModel] = Field(default_factory=list)
    b: List[SortEntryModel] = Field(default_factory=list)


class FiltersPair(BaseModel):
    a: List[FilterEntryModel] = Field(default_factory=list)
    b: List[FilterEntryModel] = Field(default_factory=list)


class MergeRequest(BaseModel):
    high_priority: List[FilterEntryModel] = Field(default_factory=list)
    low_priority: List[FilterEntryModel] = Field(default_factory=list)


class SortingDiffRequest(BaseModel):
    draft: List[DraftSortEntryModel] = Field(default_factory=list)
    baseline: List[SortEntryModel] = Field(default_factory=list)


class FiltersDiffRequest(BaseModel):
    draft: List[DraftFilterEntryModel] = Field(default_factory=list)
    baseline: List[FilterEntryModel] = Field(default_factory=list)


class ViewRequest(BaseModel):
    rows: List[Dict[str, Any]] = Field(default_factory=list)
    sorting: List[SortEntryModel] = Field(default_factory=list)
    filters: List[FilterEntryModel] = Field(default_factory=list)
    scope_filters: List[FilterEntryModel] = Field(default_factory=list)
    routine_id: Optional[str] = None
    scope_id: Optional[str] = None


class ColumnResponse(BaseModel):
    filter_id: str
    column_id: Optional[str]


class EqualResponse(BaseModel):
    equal: bool
