from typing import Annotated

from fastapi import Path, status
from fastapi.responses import JSONResponse

from liftlog.schemas.result import ActionResult
from liftlog.schemas.workout_set import INT4_MAX

STATUS_BY_CODE = {
    "validation_error": 422,
    "unauthorized": status.HTTP_401_UNAUTHORIZED,
    "not_found": status.HTTP_404_NOT_FOUND,
    "storage_failure": status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Row ids in the path; anything outside int4 cannot name a row
RowIdPath = Annotated[int, Path(ge=1, le=INT4_MAX)]

def respond(result: ActionResult, success_status: int = status.HTTP_200_OK) -> JSONResponse:
    """Action result -> JSON response; the body is the result itself."""
    if result.success:
        code = success_status
    else:
        code = STATUS_BY_CODE.get(result.code, status.HTTP_400_BAD_REQUEST)
    headers = {"WWW-Authenticate": "Bearer"} if code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=code, content=result.model_dump(mode="json"), headers=headers)

def present(**params) -> dict:
    """Query parameters the caller actually sent."""
    return {k: v for k, v in params.items() if v is not None}
