import sys
import logging
import uvicorn
import httpx
from contextlib import asynccontextmanager
from fastapi import FastAPI, APIRouter, Depends, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from app.classifiers import get_classifier
from app.dependencies import (
    GEMINI_API_URL,
    get_gemini_api_key,
    get_http_client,
    merge_generation_config,
)
from app.errors import (
    BadRequestError,
    ConfigurationError,
    ParseError,
    TransportError,
    TrashClassifierError,
    UpstreamError,
)
from app.models import ScanResult
from app.models.request_body import ImageRequest
from app.session import CaptureSession


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.http_client = httpx.AsyncClient()
    logger.info("HTTP client created")
    yield
    # Clean up
    await app.state.http_client.aclose()
    app.state.http_client = None
    logger.info("HTTP client closed")


app = FastAPI(lifespan=lifespan)
origins = [
    "http://localhost:3000",  # local dev frontend
    "http://localhost:8000",
]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

router = APIRouter(prefix="/api")

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@router.get("/health")
async def health_check():
    return {"message": "ok"}


# region: Gemini relay
def error_response(status_code: int, error: str, message: str = None, **extra):
    content = {"error": error}
    if message is not None:
        content["message"] = message
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


@router.api_route("/classify", methods=["GET", "POST", "PUT", "PATCH", "DELETE"])
async def classify_relay(
    request: Request, client: httpx.AsyncClient = Depends(get_http_client)
):
    """Forward a Gemini generateContent payload, adding the server's API key.

    The key never reaches the browser: callers post {contents, generationConfig?}
    here instead of calling Gemini directly.
    """
    if request.method != "POST":
        return error_response(405, "Method not allowed")

    api_key = get_gemini_api_key()
    if not api_key:
        logger.error("GEMINI_API_KEY environment variable not set")
        return error_response(
            500, "Server configuration error", "API key not configured on server"
        )

    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict) or body.get("contents") is None:
        logger.warning("Relay request without contents")
        return error_response(400, "Bad request", "Missing contents in request body")

    generation_config = body.get("generationConfig")
    if generation_config is not None and not isinstance(generation_config, dict):
        logger.warning(f"Relay request with invalid generationConfig: {generation_config!r}")
        return error_response(
            400, "Bad request", "generationConfig must be a JSON object"
        )

    payload = {
        "contents": body["contents"],
        "generationConfig": merge_generation_config(generation_config),
    }

    try:
        response = await client.post(GEMINI_API_URL, params={"key": api_key}, json=payload)
        if not response.is_success:
            try:
                error_data = response.json()
            except ValueError:
                error_data = response.text
            logger.error(f"Gemini API error: {error_data}")
            message = "Unknown error"
            if isinstance(error_data, dict) and isinstance(error_data.get("error"), dict):
                message = error_data["error"].get("message") or message
            return error_response(
                response.status_code,
                "Gemini API error",
                message,
                details=error_data,
            )
        data = response.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.error(f"Server error: {e!r}")
        return error_response(500, "Internal server error", str(e))

    return data


# endregion: Gemini relay


# region: scan
ERROR_STATUS = {
    ConfigurationError: 500,
    BadRequestError: 400,
    ParseError: 502,
    TransportError: 502,
}


def to_http_exception(error: TrashClassifierError) -> HTTPException:
    if isinstance(error, UpstreamError):
        return HTTPException(status_code=error.status_code, detail=error.message)
    return HTTPException(status_code=ERROR_STATUS.get(type(error), 500), detail=str(error))


@router.post("/scan", response_model=ScanResult)
async def scan(
    request: ImageRequest, client: httpx.AsyncClient = Depends(get_http_client)
):
    """Run one capture cycle on the image: is there trash, and which bin.

    Each request gets its own CaptureSession; the processing guard belongs to
    the client that holds a session across captures, not to this endpoint.
    """
    try:
        classifier = get_classifier(use_relay=False, http_client=client)
        session = CaptureSession(classifier)
        result = await session.scan(request.base64_image)
    except TrashClassifierError as e:
        logger.error(f"/api/scan failed: {e!r}")
        raise to_http_exception(e)

    logger.info(f"/api/scan res: {result}")
    return result


# endregion: scan


app.include_router(router)
if __name__ == "__main__":
    dev_mode = "dev" in sys.argv
    print(f"Running in {'development' if dev_mode else 'production'} mode")
    uvicorn.run("app.server:app", host="0.0.0.0", port=8080, reload=dev_mode)
