"""Flash Clock addon API endpoints."""

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, Response

from services.flash_clock import __version__
from services.flash_clock.manifest import build_manifest, subtitle_tracks
from services.flash_clock.pages import render_configure_page, render_landing_page
from services.flash_clock.resolver import encode_config, resolve_config, resolve_mapping
from services.flash_clock.service import ClockDocumentService, create_cache
from services.flash_clock.validator import ClockConfigValidator
from shared.config import config
from shared.logging_utils import setup_logging
from shared.models import (
    AddonManifest,
    ClockConfigRequest,
    ResolvedConfigResponse,
    SubtitlesResponse,
    TokenResponse,
)
from shared.response_models import HealthResponse

logger = setup_logging("flash-clock-service")

VTT_MEDIA_TYPE = "text/vtt; charset=utf-8"
VTT_CACHE_CONTROL = f"public, max-age={config.get('cache_ttl_seconds', 30)}"

app = FastAPI(
    title="Flash Clock",
    description="WebVTT subtitle track showing the current wall-clock time",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.get("allowed_origins", ["*"]),
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type"],
)

# One cache per process, shared by every request
document_service = ClockDocumentService(cache=create_cache())
config_validator = ClockConfigValidator()


def get_document_service() -> ClockDocumentService:
    return document_service


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint for the clock service."""
    return HealthResponse(status="ok", message="Flash Clock is healthy", version=__version__)


@app.get("/", response_class=HTMLResponse)
async def landing_page() -> str:
    return render_landing_page()


@app.get("/configure", response_class=HTMLResponse)
async def configure_page() -> str:
    return render_configure_page(resolve_config(None))


@app.get("/manifest.json", response_model=AddonManifest)
async def manifest() -> AddonManifest:
    return build_manifest()


def _subtitles(media_type: str, media_id: str, token: str | None) -> SubtitlesResponse:
    logger.info(f"Subtitles request: type={media_type}, id={media_id}")
    clock_config = resolve_config(token)
    return SubtitlesResponse(subtitles=subtitle_tracks(media_type, clock_config))


@app.get("/subtitles/{media_type}/{media_id}.json", response_model=SubtitlesResponse)
async def subtitles(media_type: str, media_id: str) -> SubtitlesResponse:
    return _subtitles(media_type, media_id, None)


@app.get("/subtitles/{media_type}/{media_id}/{extra}.json", response_model=SubtitlesResponse)
async def subtitles_with_extra(media_type: str, media_id: str, extra: str) -> SubtitlesResponse:
    return _subtitles(media_type, media_id, None)


def _vtt_response(service: ClockDocumentService, token: str | None) -> Response:
    try:
        document = service.document_for_token(token)
    except Exception as e:
        logger.error(f"Failed to build clock document: {e}")
        raise HTTPException(status_code=500, detail=f"Clock document generation failed: {e!s}") from e

    return Response(
        content=document,
        media_type=VTT_MEDIA_TYPE,
        headers={"Cache-Control": VTT_CACHE_CONTROL},
    )


@app.get("/flashclock.vtt")
async def flashclock_vtt(
    cfg: str | None = Query(None, description="Configuration token"),
    service: ClockDocumentService = Depends(get_document_service),
) -> Response:
    """Serve the WebVTT clock document for the configuration in ``cfg``."""
    return _vtt_response(service, cfg)


@app.post("/api/config/encode", response_model=TokenResponse)
async def encode_configuration(request: ClockConfigRequest) -> TokenResponse:
    """Turn configuration editor selections into a token."""
    clock_config = resolve_mapping(request.model_dump(by_alias=True, exclude_none=True))
    return TokenResponse(token=encode_config(clock_config), config=clock_config.to_wire())


@app.get("/api/config/{token:path}", response_model=ResolvedConfigResponse)
async def resolve_configuration(token: str) -> ResolvedConfigResponse:
    """Decode a token into its resolved configuration and any validator warnings."""
    clock_config = resolve_config(token)
    report = config_validator.validate(clock_config)
    return ResolvedConfigResponse(
        config=clock_config.to_wire(),
        token=encode_config(clock_config),
        warnings=report["warnings"],
    )


# Token-prefixed routes. The token is base64 and may contain "/".
@app.get("/{token:path}/configure", response_class=HTMLResponse)
async def configure_page_with_token(token: str) -> str:
    return render_configure_page(resolve_config(token))


@app.get("/{token:path}/manifest.json", response_model=AddonManifest)
async def manifest_with_token(token: str) -> AddonManifest:
    return build_manifest()


@app.get("/{token:path}/subtitles/{media_type}/{media_id}.json", response_model=SubtitlesResponse)
async def subtitles_with_token(token: str, media_type: str, media_id: str) -> SubtitlesResponse:
    return _subtitles(media_type, media_id, token)


@app.get(
    "/{token:path}/subtitles/{media_type}/{media_id}/{extra}.json",
    response_model=SubtitlesResponse,
)
async def subtitles_with_token_and_extra(
    token: str, media_type: str, media_id: str, extra: str
) -> SubtitlesResponse:
    return _subtitles(media_type, media_id, token)


@app.get("/{token:path}/flashclock.vtt")
async def flashclock_vtt_with_token(
    token: str, service: ClockDocumentService = Depends(get_document_service)
) -> Response:
    return _vtt_response(service, token)


if __name__ == "__main__":
    try:
        import uvicorn
    except ImportError as e:
        raise RuntimeError("uvicorn must be installed to run this service.") from e
    uvicorn.run(app, host="0.0.0.0", port=config.get("port", 7000))
