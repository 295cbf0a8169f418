"""FastAPI Certificate Batch Service - Main application."""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List
import logging

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response

from ..config import get_settings
from ..secret_store import build_secret_store
from .cert_issuer import CertificateIssuer
from .errors import BatchValidationError, CertBatchError, ItemProcessingError
from .models import CertificatesRequest, HealthResponse, ItemResult
from .orchestrator import BatchOrchestrator

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize collaborators
secret_store = build_secret_store(settings)
certificate_issuer = CertificateIssuer(
    key_size=settings.key_size,
    pfx_password=settings.pfx_password_bytes(),
)
orchestrator = BatchOrchestrator(
    certificate_issuer=certificate_issuer,
    secret_store=secret_store,
    issuer_pfx_password=settings.issuer_pfx_password_bytes(),
    item_timeout=settings.item_timeout_seconds,
    isolate_item_failures=settings.isolate_item_failures,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Certificate batch service started (secret store: {secret_store.name})")
    try:
        yield
    finally:
        await secret_store.aclose()
        logger.info("Certificate batch service stopped")


# Initialize FastAPI app
app = FastAPI(
    title="Certificate Batch Service",
    description="Issues X.509 certificates in batches and stores them in a vault",
    version="1.0.0",
    lifespan=lifespan,
)


def get_orchestrator() -> BatchOrchestrator:
    return orchestrator


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies are client errors with an empty body."""
    # Error entries echo the input, which may hold issuer key material
    locations = [".".join(str(part) for part in error.get("loc", ())) for error in exc.errors()]
    logger.warning(f"Rejected malformed request to {request.url.path}: {locations}")
    return Response(status_code=status.HTTP_400_BAD_REQUEST)


@app.get("/health", response_model=HealthResponse)
async def health_check(batch_orchestrator: BatchOrchestrator = Depends(get_orchestrator)):
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        secret_store=batch_orchestrator.secret_store.name,
        timestamp=datetime.now(timezone.utc),
    )


@app.post("/api/certificates", response_model=List[ItemResult])
async def generate_certificates(
    request: CertificatesRequest,
    batch_orchestrator: BatchOrchestrator = Depends(get_orchestrator),
):
    """
    Issue a batch of certificates.

    Returns one ``{pfx, result}`` entry per requested certificate, in request
    order. Failures answer with an empty body; details only go to the log.
    """
    try:
        return await batch_orchestrator.process_batch(request)

    except BatchValidationError as e:
        logger.warning(f"Rejected certificate batch: {e}")
        return Response(status_code=status.HTTP_400_BAD_REQUEST)
    except ItemProcessingError:
        # Each failed item was already logged with its traceback
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    except CertBatchError as e:
        logger.error(f"Certificate batch failed: {e}")
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    except Exception:
        logger.exception("Certificate batch failed unexpectedly")
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def run():
    """Run the service with uvicorn."""
    import uvicorn

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    run()
