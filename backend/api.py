import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.config import Settings, get_settings
from backend.llm import PredictionProxyError, complete_prompt
from backend.models.prediction import PredictionError, PredictionRequest
from backend.observability import setup_tracing

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

PREDICT_PATH = "/api/predict-price"

CORS_HEADERS = {
    "Access-Control-Allow-Credentials": "true",
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,OPTIONS,PATCH,DELETE,POST,PUT",
    "Access-Control-Allow-Headers": (
        "X-CSRF-Token, X-Requested-With, Accept, Accept-Version, Content-Length, "
        "Content-MD5, Content-Type, Date, X-Api-Version"
    ),
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logger.info(
        f"Prediction proxy targeting {settings.base_url} with model {settings.model} "
        f"(API key {settings.masked_api_key})"
    )
    setup_tracing()
    yield


app = FastAPI(
    title="Flight Price Dashboard API",
    description="Proxy that turns flight price summaries into LLM buy/wait advice",
    version="1.0.0",
    lifespan=lifespan,
)


def error_response(status_code: int, error: PredictionError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error.model_dump(exclude_none=True),
        headers=CORS_HEADERS,
    )


@app.exception_handler(PredictionProxyError)
async def prediction_error_handler(request: Request, exc: PredictionProxyError):
    return error_response(
        exc.status_code,
        PredictionError(
            error="Failed to fetch prediction",
            details=exc.details,
            type=exc.error_type,
            code=exc.code,
        ),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    )
    return error_response(
        422, PredictionError(error="Invalid prediction request", details=details)
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        return JSONResponse(
            status_code=405,
            content={"error": "Method Not Allowed"},
            headers={**CORS_HEADERS, **(exc.headers or {})},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail},
        headers=exc.headers,
    )


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"message": "Flight Price Dashboard API is running"}


@app.options(PREDICT_PATH)
async def predict_price_preflight():
    """Answer CORS preflight requests with an empty body."""
    return Response(status_code=200, headers=CORS_HEADERS)


@app.post(PREDICT_PATH)
async def predict_price(
    request: PredictionRequest, settings: Settings = Depends(get_settings)
):
    """
    Forward the prompt to the chat-completion API and relay its body unchanged.
    """
    try:
        logger.info(f"Requesting price prediction ({len(request.prompt)} chars)")
        body = await asyncio.to_thread(complete_prompt, settings, request.prompt)
    except PredictionProxyError:
        raise
    except Exception as e:
        logger.error(f"Error in price prediction: {str(e)}")
        raise PredictionProxyError(
            str(e) or e.__class__.__name__,
            error_type="Unknown",
            code="Unknown",
        ) from e

    return JSONResponse(status_code=200, content=body, headers=CORS_HEADERS)


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "service": "flight-price-dashboard-api"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
