from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse, Response
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_403_FORBIDDEN,
    HTTP_404_NOT_FOUND,
    HTTP_422_UNPROCESSABLE_ENTITY,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

from api.config import create_db
from api.routes.ai_routes import ai_routes
from api.routes.auth_routes import auth_routes
from api.routes.course_routes import course_routes
from api.schemas.quiz_schemas import GradingResponse
from api.utils.logger import clear_request_id, configure_logging, set_request_id
from learning.grading.errors import InvalidInputError, NotEnrolledError, UnknownEntityError

logger = configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db()
    logger.info("Leoaxis Learn started")
    yield


app = FastAPI(title="Leoaxis Learn", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    rid = set_request_id(request.headers.get("x-request-id"))
    path = request.url.path
    try:
        logger.info("-> %s %s", request.method, path)
        response: Response = await call_next(request)
        logger.info("<- %s %s %s", response.status_code, request.method, path)
        response.headers["x-request-id"] = rid
        return response
    finally:
        clear_request_id()


def _error(request: Request, status_code: int, detail) -> JSONResponse:
    log = logger.error if status_code >= 500 else logger.warning
    log("%s %s -> %s: %s", request.method, request.url.path, status_code, detail)
    return JSONResponse(status_code=status_code, content={"detail": detail})


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return _error(request, exc.status_code, exc.detail)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # ctx may hold exception objects, which are not JSON serializable
    errors = [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]
    return _error(request, HTTP_422_UNPROCESSABLE_ENTITY, errors)


@app.exception_handler(UnknownEntityError)
async def unknown_entity_handler(request: Request, exc: UnknownEntityError) -> JSONResponse:
    return _error(request, HTTP_404_NOT_FOUND, str(exc))


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError) -> JSONResponse:
    return _error(request, HTTP_400_BAD_REQUEST, str(exc))


@app.exception_handler(NotEnrolledError)
async def not_enrolled_handler(request: Request, exc: NotEnrolledError) -> JSONResponse:
    """The submission was still graded; hand the grading back so the client can show it."""
    detail = {"message": "You must be enrolled in this course"}
    if exc.result is not None:
        detail["grading"] = GradingResponse.from_result(exc.result).model_dump()
    return _error(request, HTTP_403_FORBIDDEN, detail)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error method=%s path=%s", request.method, request.url.path)
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal Server Error"},
    )


@app.get("/")
def read_root():
    return {"message": "Leoaxis Learn is Healthy"}


app.include_router(auth_routes, prefix="/auth")
app.include_router(course_routes)
app.include_router(ai_routes, prefix="/ai")

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
