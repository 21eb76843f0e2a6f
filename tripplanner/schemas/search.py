from pydantic import BaseModel


class SearchRequest(BaseModel):
    q: str | None = None


class SearchSource(BaseModel):
    title: str | None = None
    link: str | None = None
    snippet: str | None = None


class SearchAnswer(BaseModel):
    answer: str
    sources: list[SearchSource] = []


class SearchResponse(BaseModel):
    ok: bool = True
    results: SearchAnswer
