from typing import Optional

from pydantic import BaseModel


class CreateEntryRequest(BaseModel):
    # Emptiness is checked by the service so the error uses the common envelope
    title: Optional[str] = None
    content: Optional[str] = None


class ExportRequest(BaseModel):
    year: int
    title: Optional[str] = None
