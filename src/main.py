"""
Content Credibility Service
HTTP surface over the analysis engine: text, image and URL checks
"""

from fastapi import FastAPI, File, HTTPException, Request, UploadFile, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field
from typing import Optional, Dict, Any
from collections import Counter
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging
import os
import time

from dotenv import load_dotenv
from credcheck.config import get_settings
from credcheck.engine import AnalysisFailedError, AnalysisInProgressError, ContentAnalyzer
from credcheck.extractors import InvalidInputError
from credcheck.models import AnalysisKind, AnalysisResult, ImagePayload

# Load environment variables early so settings pick them up
load_dotenv()
settings = get_settings()

# Logging configuration
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(),
        logging.FileHandler('logs/credcheck.log') if os.path.exists('logs') else logging.NullHandler()
    ]
)

logger = logging.getLogger(__name__)


# Metrics tracker
class Metrics:
    """Track service metrics"""

    def __init__(self):
        self.total_requests = 0
        self.successful_requests = 0
        self.failed_requests = 0
        self.rejected_requests = 0
        self.total_processing_time = 0.0
        self.by_kind: Counter = Counter()
        self.start_time = time.time()

    def record_request(self, kind: AnalysisKind, success: bool, processing_time: float):
        """Record request outcome"""
        self.total_requests += 1
        self.by_kind[kind.value] += 1
        if success:
            self.successful_requests += 1
        else:
            self.failed_requests += 1
        self.total_processing_time += processing_time

    def record_rejection(self):
        self.rejected_requests += 1

    def get_stats(self) -> Dict[str, Any]:
        """Get current metrics"""
        uptime = time.time() - self.start_time
        avg_time = self.total_processing_time / self.total_requests if self.total_requests > 0 else 0

        return {
            "total_requests": self.total_requests,
            "successful_requests": self.successful_requests,
            "failed_requests": self.failed_requests,
            "rejected_requests": self.rejected_requests,
            "success_rate": f"{(self.successful_requests / self.total_requests * 100):.1f}%" if self.total_requests > 0 else "N/A",
            "average_processing_time": f"{avg_time:.4f}s",
            "requests_by_kind": dict(self.by_kind),
            "uptime_seconds": int(uptime)
        }


metrics = Metrics()
analyzer = ContentAnalyzer()


# Application lifespan
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info("=" * 60)
    logger.info(f"Starting {settings.service_title} v{settings.service_version}")
    logger.info("=" * 60)
    logger.info("Configuration loaded:")
    logger.info(f"  Single flight: {settings.single_flight}")
    logger.info(f"  Random seed: {settings.random_seed}")
    logger.info(f"  Reliable domains: {len(analyzer.url_pipeline.tables.reliable)}")
    logger.info(f"  Unreliable domains: {len(analyzer.url_pipeline.tables.unreliable)}")
    logger.info("Service ready")

    yield

    logger.info("Shutdown complete")


# FastAPI application
app = FastAPI(
    title=settings.service_title,
    version=settings.service_version,
    description="Credibility checks for text, images and URLs",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AnalysisInProgressError)
async def in_progress_handler(request: Request, exc: AnalysisInProgressError):
    metrics.record_rejection()
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"error": "Analysis in progress", "detail": str(exc)}
    )


@app.exception_handler(AnalysisFailedError)
async def analysis_failed_handler(request: Request, exc: AnalysisFailedError):
    invalid_input = isinstance(exc.cause, InvalidInputError)
    return JSONResponse(
        status_code=422 if invalid_input else status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": str(exc),
            "kind": exc.kind.value,
            "detail": str(exc.cause) if invalid_input or settings.log_level.upper() == "DEBUG" else None
        }
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal server error",
            "detail": str(exc) if os.getenv("DEBUG") else "An error occurred"
        }
    )


# Request models
class TextRequest(BaseModel):
    """Text analysis request"""

    text: str = Field(..., max_length=settings.max_text_length, description="Content to analyze")


class UrlRequest(BaseModel):
    """URL analysis request"""

    url: str = Field(..., min_length=1, max_length=2048, description="Absolute URL to analyze")


def _serialize(result: AnalysisResult) -> Dict[str, Any]:
    return result.model_dump(mode="json", by_alias=True)


async def _timed(kind: AnalysisKind, call) -> Dict[str, Any]:
    start_time = time.time()
    try:
        result = await call
    except AnalysisFailedError:
        metrics.record_request(kind, False, time.time() - start_time)
        raise
    metrics.record_request(kind, True, time.time() - start_time)
    return _serialize(result)


# API endpoints
@app.get("/")
async def root():
    """Root endpoint with service information"""
    return {
        "service": settings.service_title,
        "version": settings.service_version,
        "status": "operational",
        "endpoints": {
            "text": "POST /analyze/text",
            "image": "POST /analyze/image",
            "url": "POST /analyze/url",
            "result": "GET /result",
            "reset": "DELETE /result",
            "health": "GET /health",
            "metrics": "GET /metrics"
        }
    }


@app.get("/health")
async def health_check():
    """Health check"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "components": {
            "api": "healthy",
            "engine": analyzer.state.value,
            "analyzing": analyzer.is_analyzing
        }
    }


@app.get("/metrics")
async def get_metrics():
    """Get service metrics"""
    return {
        "service": settings.service_title,
        "version": settings.service_version,
        "metrics": metrics.get_stats()
    }


@app.post("/analyze/text")
async def analyze_text(request_body: TextRequest):
    """Analyze a text snippet"""
    logger.info(f"Text analysis requested: {request_body.text[:50]!r}")
    return await _timed(AnalysisKind.TEXT, analyzer.analyze_text(request_body.text))


@app.post("/analyze/image")
async def analyze_image(file: UploadFile = File(...)):
    """Analyze an uploaded image"""
    limit = settings.max_image_bytes
    oversized = file.size is not None and file.size > limit
    data = b"" if oversized else await file.read(limit + 1)
    if oversized or len(data) > limit:
        raise HTTPException(
            status_code=413,
            detail=f"Image exceeds {limit} bytes"
        )
    payload = ImagePayload(data=data, filename=file.filename, content_type=file.content_type)
    logger.info(f"Image analysis requested: {file.filename} ({len(data)} bytes)")
    return await _timed(AnalysisKind.IMAGE, analyzer.analyze_image(payload))


@app.post("/analyze/url")
async def analyze_url(request_body: UrlRequest):
    """Analyze the source behind a URL"""
    logger.info(f"URL analysis requested: {request_body.url}")
    return await _timed(AnalysisKind.URL, analyzer.analyze_url(request_body.url))


@app.get("/result")
async def get_last_result():
    """Most recent successful analysis"""
    result: Optional[AnalysisResult] = analyzer.last_result
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No analysis result available"
        )
    return _serialize(result)


@app.delete("/result")
async def reset_result():
    """Clear the stored result"""
    analyzer.reset_results()
    logger.info("Result cleared")
    return {"message": "Result cleared"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8001,
        reload=True,
        log_level=settings.log_level.lower()
    )
