"""Legacy resume endpoints.

Resume analysis moved to the resume analyzer service
(``/api/resume-analyzer``). Every legacy path answers 410 Gone, whatever
the method, body, trailing slash or sub-path, so old clients learn about
the move.
"""

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse

from hiremate.models.schemas import FailureResponse

router = APIRouter(prefix="/api/resume", tags=["resume (deprecated)"])

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

# First path segment -> feature name used in the 410 message
LEGACY_FEATURES = {
    "analyze": "Analyze",
    "status": "Status",
    "upload-and-extract": "Upload",
    "extract-skills": "Skills",
}


def gone(feature: str) -> JSONResponse:
    """Build the 410 response announcing a moved feature."""
    return JSONResponse(
        status_code=status.HTTP_410_GONE,
        content=FailureResponse(
            message=f"{feature} endpoint deprecated; feature moved to separate service.",
        ).model_dump(exclude_none=True),
    )


@router.api_route("/{path:path}", methods=ALL_METHODS, deprecated=True)
async def legacy_resume(path: str) -> JSONResponse:
    """Answer any legacy resume request with 410 Gone.

    Raises:
        404: The path was never a resume endpoint.
    """
    feature = LEGACY_FEATURES.get(path.strip("/").split("/", 1)[0])
    if feature is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    return gone(feature)
