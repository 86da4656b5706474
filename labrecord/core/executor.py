# labrecord/core/executor.py
import httpx
import logging
from dataclasses import dataclass
from typing import Optional

from labrecord.core.config import settings
from labrecord.core.errors import TransportError, ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Runtime:
    id: str
    remote_name: str  # language name the runner expects
    version: str
    label: str


LANGUAGES = {
    "c": Runtime("c", "c", "10.2.0", "C"),
    "cpp": Runtime("cpp", "c++", "10.2.0", "C++"),
    "python": Runtime("python", "python", "3.10.0", "Python"),
    "java": Runtime("java", "java", "15.0.2", "Java"),
    "javascript": Runtime("javascript", "javascript", "18.15.0", "JavaScript"),
}


def get_runtime(language: str) -> Runtime:
    runtime = LANGUAGES.get((language or "").strip().lower())
    if runtime is None:
        raise ValidationError(f"Unsupported language: {language}")
    return runtime


@dataclass
class ExecutionResult:
    stdout: str = ""
    stderr: str = ""

    @property
    def display_output(self) -> str:
        if self.stderr:
            return f"Error:\n{self.stderr}"
        return self.stdout or "(No output)"


class CodeExecutor:
    """Client for the hosted code runner.

    The runner is best-effort: one request per run, no retries, and any failure
    to get a well-formed answer is reported as TransportError.
    """

    def __init__(
        self,
        api_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[httpx.Timeout] = None,
    ):
        self.api_url = api_url or settings.EXECUTION_API_URL
        self.transport = transport
        self.timeout = timeout or httpx.Timeout(
            settings.EXECUTION_CONNECT_TIMEOUT, read=settings.EXECUTION_READ_TIMEOUT
        )

    async def execute(self, language: str, source: str, stdin: str = "") -> ExecutionResult:
        runtime = get_runtime(language)
        payload = {
            "language": runtime.remote_name,
            "version": runtime.version,
            "files": [{"content": source}],
            "stdin": stdin or "",
        }

        logger.info(f"📡 [Runner] Executing {runtime.id} ({len(source)} chars)")
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.api_url, json=payload)
        except httpx.TimeoutException as e:
            logger.error(f"⏱️ [Runner] Timed out: {e}")
            raise TransportError("The compiler did not answer in time. Please try again.") from e
        except httpx.HTTPError as e:
            logger.error(f"❌ [Runner] Connection failed: {e}")
            raise TransportError("Failed to connect to the compiler. Please try again.") from e

        if not response.is_success:
            logger.error(f"❌ [Runner] API error: {response.status_code} — {response.text}")
            raise TransportError(f"Compiler service error ({response.status_code})")

        try:
            result = response.json()
            run = result.get("run")
            compile_stage = result.get("compile")
        except (ValueError, AttributeError) as e:
            logger.error(f"❌ [Runner] Unexpected response: {response.text}")
            raise TransportError("Unexpected response from the compiler") from e

        if not isinstance(run, dict) and not isinstance(compile_stage, dict):
            logger.error(f"❌ [Runner] Unexpected response: {response.text}")
            raise TransportError("Unexpected response from the compiler")

        # a failed compile may come back without a run stage
        run = run if isinstance(run, dict) else {}
        stdout = run.get("stdout") or ""
        stderr = run.get("stderr") or ""
        if isinstance(compile_stage, dict) and compile_stage.get("code"):
            stderr = (compile_stage.get("stderr") or "") + stderr

        logger.info(f"✅ [Runner] Finished {runtime.id}, stderr={'yes' if stderr else 'no'}")
        return ExecutionResult(stdout=stdout, stderr=stderr)
