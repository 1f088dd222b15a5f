"""Restructure stored guides: fetch, transform, write back."""

from __future__ import annotations

import asyncio
from typing import Iterable

import httpx

from guidetiles.config import GUIDETILES_CONCURRENCY
from guidetiles.exceptions import GuidetilesError
from guidetiles.http_utils import create_client
from guidetiles.schemas import Guide, RestructureResult
from guidetiles.serializer import count_tiles
from guidetiles.store import fetch_guide, list_guides, update_guide_body
from guidetiles.transform import TileOptions, restructure_body
from guidetiles.utils.logging_config import get_logger

logger = get_logger(__name__)


async def restructure_guide(
    slug: str,
    *,
    options: TileOptions | None = None,
    dry_run: bool = False,
    client: httpx.AsyncClient | None = None,
) -> RestructureResult:
    """Restructure the body of one guide.

    The body is written back only when it changed and ``dry_run`` is False.

    Raises:
        GuideNotFoundError: If the slug matches no guide.
        StoreError: If reading or writing fails.
    """
    guide = await fetch_guide(slug, client=client)
    return await _restructure(guide, options=options or TileOptions(), dry_run=dry_run, client=client)


async def restructure_guides(
    slugs: Iterable[str] | None = None,
    *,
    domain: str | None = None,
    limit: int | None = None,
    options: TileOptions | None = None,
    dry_run: bool = False,
    concurrency: int = GUIDETILES_CONCURRENCY,
) -> list[RestructureResult]:
    """Restructure many guides concurrently.

    Guides are selected by ``slugs`` when given, otherwise by ``domain``.
    A failure on one guide is recorded in its result and does not stop the
    others.

    Returns:
        One result per guide, in selection order.
    """
    opts = options or TileOptions()
    semaphore = asyncio.Semaphore(max(1, concurrency))

    async with create_client() as client:
        if slugs is not None:
            targets: list[str | Guide] = list(slugs)
        else:
            targets = list(await list_guides(domain=domain, limit=limit, client=client))
        logger.info("Restructuring guides", extra={"count": len(targets), "dry_run": dry_run})

        async def run_one(target: str | Guide) -> RestructureResult:
            slug = target if isinstance(target, str) else target.slug
            async with semaphore:
                try:
                    guide = target if isinstance(target, Guide) else await fetch_guide(slug, client=client)
                    return await _restructure(guide, options=opts, dry_run=dry_run, client=client)
                except GuidetilesError as exc:
                    logger.error("Failed to restructure guide", extra={"slug": slug, "error": str(exc)})
                    return RestructureResult(slug=slug, dry_run=dry_run, error=str(exc))

        return list(await asyncio.gather(*(run_one(target) for target in targets)))


async def _restructure(
    guide: Guide,
    *,
    options: TileOptions,
    dry_run: bool,
    client: httpx.AsyncClient | None,
) -> RestructureResult:
    current = guide.body or ""
    # The transform is CPU-bound; keep it off the event loop.
    new_body = await asyncio.to_thread(restructure_body, current, options)
    changed = new_body != current

    if changed and not dry_run:
        await update_guide_body(guide, new_body, client=client)

    result = RestructureResult(
        slug=guide.slug,
        title=guide.title,
        changed=changed,
        tiles_before=count_tiles(current, options.container_open),
        tile_count=count_tiles(new_body, options.container_open),
        body=new_body,
        dry_run=dry_run,
    )
    logger.info(
        "Restructured guide",
        extra={
            "slug": guide.slug,
            "changed": changed,
            "tiles_before": result.tiles_before,
            "tiles_after": result.tile_count,
            "dry_run": dry_run,
        },
    )
    return result
