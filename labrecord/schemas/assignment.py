from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from labrecord.core.enums import Difficulty

class AssignmentMetadata(BaseModel):
    difficulty: Difficulty = Difficulty.MEDIUM
    input_format: Optional[str] = None
    output_format: Optional[str] = None
    constraints: Optional[str] = None
    sample_input: Optional[str] = None
    sample_output: Optional[str] = None

class AssignmentCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    classroom_id: Optional[int] = None
    details: AssignmentMetadata = Field(default_factory=AssignmentMetadata)

class AssignmentUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    status: Optional[str] = None
    details: Optional[AssignmentMetadata] = None

class Assignment(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    status: str
    classroom_id: Optional[int] = None
    teacher_id: int
    details: AssignmentMetadata
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
