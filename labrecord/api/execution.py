from typing import List

from fastapi import APIRouter, Depends
from labrecord.api.deps import get_current_user, get_workflow
from labrecord.core.executor import LANGUAGES
from labrecord.db.models.user import User
from labrecord.schemas.execution import Language, RunRequest, RunResult
from labrecord.services.workflow import SubmissionWorkflow

router = APIRouter()


@router.get("/languages", response_model=List[Language])
def list_languages():
    return [Language(id=r.id, name=r.label, version=r.version) for r in LANGUAGES.values()]


# Running never stores anything; the client decides whether to submit the output
@router.post("/run", response_model=RunResult)
async def run_code(
    body: RunRequest,
    workflow: SubmissionWorkflow = Depends(get_workflow),
    current_user: User = Depends(get_current_user)
):
    result = await workflow.run_code(body.language, body.source, body.stdin)
    return RunResult(stdout=result.stdout, stderr=result.stderr, output=result.display_output)
