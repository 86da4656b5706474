from pydantic import BaseModel

class RunRequest(BaseModel):
    language: str
    source: str
    stdin: str = ""

class RunResult(BaseModel):
    stdout: str
    stderr: str
    output: str  # what the student sees and may store with a submission

class Language(BaseModel):
    id: str
    name: str
    version: str
