from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse

from truthlens.config import check_api_keys_on_startup, logger
from truthlens.exceptions import (
    PaymentRequiredException,
    RateLimitException,
    TruthLensException,
    ValidationException,
)
from truthlens.middleware import RequestContextMiddleware, get_request_id
from truthlens.models import AnalyzeContentRequest, ChatRequest, VerifySourceRequest
from truthlens.services import analyze_content, start_chat_stream, verify_source

app = FastAPI(title="TruthLens AI gateway")

@app.on_event("startup")
async def startup_event():
    check_api_keys_on_startup()

app.add_middleware(RequestContextMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
)


def error_response(exc: Exception, fallback: str) -> JSONResponse:
    """Map an exception onto the ``{"error": ...}`` body the client expects."""
    if isinstance(exc, RateLimitException):
        return JSONResponse({"error": exc.message}, status_code=429)
    if isinstance(exc, PaymentRequiredException):
        return JSONResponse({"error": exc.message}, status_code=402)
    if isinstance(exc, ValidationException):
        return JSONResponse({"error": exc.message}, status_code=400)
    if isinstance(exc, TruthLensException):
        return JSONResponse({"error": exc.message}, status_code=500)
    return JSONResponse({"error": fallback}, status_code=500)


@app.get("/")
async def health_check():
    return {"status": "ok", "message": "TruthLens gateway is running."}


@app.post("/functions/v1/analyze-content")
async def analyze(req: AnalyzeContentRequest):
    try:
        result = await analyze_content(req)
    except TruthLensException as e:
        logger.error("Analysis error [%s]: %s", get_request_id(), e.message)
        return error_response(e, "Analysis failed")
    except Exception as e:
        logger.exception("Unexpected analysis error [%s]", get_request_id())
        return error_response(e, "Analysis failed")
    return result.to_wire()


@app.post("/functions/v1/verify-source")
async def verify(req: VerifySourceRequest):
    try:
        result = await verify_source(req)
    except TruthLensException as e:
        logger.error("Verification error [%s]: %s", get_request_id(), e.message)
        return error_response(e, "Verification failed")
    except Exception as e:
        logger.exception("Unexpected verification error [%s]", get_request_id())
        return error_response(e, "Verification failed")
    return result.to_wire()


@app.post("/functions/v1/chat-assistant")
async def chat(req: ChatRequest):
    try:
        stream = await start_chat_stream(req)
    except TruthLensException as e:
        logger.error("Chat error [%s]: %s", get_request_id(), e.message)
        return error_response(e, "Chat failed")
    except Exception as e:
        logger.exception("Unexpected chat error [%s]", get_request_id())
        return error_response(e, "Chat failed")

    return StreamingResponse(
        stream.iter_bytes(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("truthlens.main:app", host="0.0.0.0", port=8000)
