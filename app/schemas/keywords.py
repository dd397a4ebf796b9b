from typing import Optional

from pydantic import BaseModel


class KeywordCreate(BaseModel):
    keyword: str
    category: Optional[str] = None
    scope: Optional[str] = None
    kind: Optional[str] = None
    persona: Optional[str] = None
