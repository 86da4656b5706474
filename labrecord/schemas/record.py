from pydantic import BaseModel
from typing import Optional
from datetime import datetime

class Record(BaseModel):
    assignment_id: int
    title: str
    description: Optional[str] = None
    algorithm: str
    code: str
    language: str
    output: str

class RecordSummary(BaseModel):
    id: int  # approved code submission id
    assignment_id: int
    assignment_title: str
    language: Optional[str] = None
    created_at: datetime
