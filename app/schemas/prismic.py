from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class PrismicRef(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    ref: str
    label: Optional[str] = None
    isMasterRef: bool = False


class PrismicApi(BaseModel):
    model_config = ConfigDict(extra="ignore")

    refs: List[PrismicRef] = Field(default_factory=list)

    @property
    def master_ref(self) -> Optional[str]:
        return next((r.ref for r in self.refs if r.isMasterRef), None)


class PrismicDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    uid: Optional[str] = None
    type: str
    first_publication_date: Optional[str] = None
    last_publication_date: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)


class PrismicSearchResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    page: int = 1
    results_per_page: int = 0
    total_results_size: int = 0
    total_pages: int = 0
    next_page: Optional[str] = None
    prev_page: Optional[str] = None
    results: List[PrismicDocument] = Field(default_factory=list)
