import json
import logging
from typing import Optional

from charset_normalizer import from_bytes
from fastapi import Depends, FastAPI, UploadFile, File, HTTPException
from pydantic import ValidationError

from .config import ExporterConfiguration, load_config
from .models import AssetRecord, ExportResponse, HealthResponse, RemoteExportRequest
from .pipeline import export_assets, export_from_source
from .source import AssetSource, AssetSourceError, RemoteVersionIdentifier

logger = logging.getLogger(__name__)

app = FastAPI(
    title="icon-exporter",
    description="Deterministic icon font export for design-system assets",
    version="0.1.0",
)


def get_config() -> ExporterConfiguration:
    return load_config()


def get_source(config: ExporterConfiguration = Depends(get_config)) -> AssetSource:
    if not config.source_url:
        raise HTTPException(status_code=503, detail="No asset source configured")
    return AssetSource(config.source_url, token=config.source_token)


def _decode(raw: bytes) -> str:
    match = from_bytes(raw).best()
    encoding = match.encoding if match is not None else "utf-8"
    if raw.startswith(b"\xef\xbb\xbf"):
        encoding = "utf-8-sig"
    try:
        return raw.decode(encoding)
    except UnicodeDecodeError as e:
        # keep going with replacement chars, but say so
        logger.warning(f"Asset list is not valid {encoding} ({e}); undecodable bytes replaced")
        return raw.decode(encoding, errors="replace")


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/export", response_model=ExportResponse)
async def export_upload(
    file: UploadFile = File(...),
    brand_id: Optional[str] = None,
    config: ExporterConfiguration = Depends(get_config),
):
    if not file.filename.lower().endswith(".json"):
        raise HTTPException(status_code=422, detail="Only JSON asset lists are supported")

    raw = await file.read()
    try:
        payload = json.loads(_decode(raw))
    except ValueError:
        raise HTTPException(status_code=422, detail="Asset list is not valid JSON")
    if not isinstance(payload, list):
        raise HTTPException(status_code=422, detail="Asset list must be a JSON array")

    try:
        records = [AssetRecord.model_validate(item) for item in payload]
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=f"Malformed asset record: {e.errors()[0]['msg']}")

    return export_assets(records, config, brand_id=brand_id)


@app.post("/export/remote", response_model=ExportResponse)
async def export_remote(
    request: RemoteExportRequest,
    config: ExporterConfiguration = Depends(get_config),
    source: AssetSource = Depends(get_source),
):
    version = RemoteVersionIdentifier(request.design_system_id, request.version_id)
    try:
        return await export_from_source(source, version, config, brand_id=request.brand_id)
    except AssetSourceError as e:
        logger.error(f"Asset fetch failed for {version.path()}: {e}")
        raise HTTPException(status_code=502, detail=str(e))
