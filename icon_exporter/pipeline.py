from __future__ import annotations

import logging
from typing import Optional, Sequence

from .config import ExporterConfiguration
from .emit import build_output
from .models import AssetRecord, ExportReport, ExportResponse, ReportSummary
from .normalize import assign_icons
from .source import AssetSource, RemoteVersionIdentifier, filter_by_brand

logger = logging.getLogger(__name__)


def export_assets(
    records: Sequence[AssetRecord],
    config: ExporterConfiguration,
    brand_id: Optional[str] = None,
    groups: int = 0,
) -> ExportResponse:
    """
    Run one export over already-fetched records.
    Returns the response envelope: output files, icons and a run report.
    """
    records = filter_by_brand(records, brand_id)
    result = assign_icons(records, config.category_prefix, config.base_codepoint)

    return ExportResponse(
        files=build_output(result, config),
        icons=result.icons,
        report=ExportReport(
            summary=ReportSummary(
                assets=len(records),
                groups=groups,
                qualifying=result.qualifying,
                icons=len(result.icons),
                skipped=len(result.failures),
            ),
            failures=result.failures,
        ),
    )


async def export_from_source(
    source: AssetSource,
    version: RemoteVersionIdentifier,
    config: ExporterConfiguration,
    brand_id: Optional[str] = None,
) -> ExportResponse:
    assets = await source.get_assets(version)
    asset_groups = filter_by_brand(await source.get_asset_groups(version), brand_id)
    logger.info(f"Fetched {len(assets)} assets and {len(asset_groups)} groups for {version.path()}")

    return export_assets(assets, config, brand_id=brand_id, groups=len(asset_groups))
