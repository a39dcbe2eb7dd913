"""
Pagination Fetcher

Walks GET /xreports page by page and fetches the detail of every report.

PARALLELIZATION: within a page, detail requests run concurrently
(asyncio.gather over asyncio.to_thread, since the client is requests-based;
each worker thread uses its own requests session).
Pages are strictly sequential: a page is complete before the next listing
request is sent. Any failure aborts the walk; nothing is retried.
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import AsyncIterator, List, Optional

from tqdm import tqdm

from extract_serac.config import settings
from extract_serac.schemas.xreport import XReport
from extract_serac.services.c2c_client import C2CClient

logger = logging.getLogger(__name__)


@dataclass
class ReportPage:
    """Details of one listing page, in listing order."""
    offset: int
    total: int
    reports: List[XReport]


async def fetch_details(client: C2CClient, document_ids: List[int]) -> List[XReport]:
    """Fetch the detail of several reports concurrently, keeping their order."""
    return list(
        await asyncio.gather(
            *[asyncio.to_thread(client.get_xreport, document_id) for document_id in document_ids]
        )
    )


async def fetch_report_pages(
    client: C2CClient, page_size: Optional[int] = None
) -> AsyncIterator[ReportPage]:
    """
    Yield every page of fully-detailed reports.

    The total count comes from the first listing request, which is also used
    as the first page. The offset advances by the number of summaries the
    server actually returned, since the API may cap `limit` below page_size.

    Args:
        client: Authenticated client
        page_size: Reports requested per listing page (defaults to settings.PAGE_SIZE)
    """
    page_size = page_size or settings.PAGE_SIZE

    listing = await asyncio.to_thread(client.list_xreports, 0, page_size)
    total = listing.total
    logger.info(f"{total} reports in DB")

    offset = 0
    while offset < total:
        if offset > 0:
            listing = await asyncio.to_thread(client.list_xreports, offset, page_size)

        document_ids = [summary.document_id for summary in listing.documents]
        if not document_ids:
            logger.warning(
                f"Empty listing at offset {offset}, stopping with {offset}/{total} reports"
            )
            break

        logger.info(
            f"Fetching reports {offset + 1}-{offset + len(document_ids)}/{total}"
        )
        reports = await fetch_details(client, document_ids)
        yield ReportPage(offset=offset, total=total, reports=reports)

        offset += len(document_ids)


async def fetch_all_reports(
    client: C2CClient,
    page_size: Optional[int] = None,
    show_progress: bool = False,
) -> List[XReport]:
    """Fetch every report, optionally with a tqdm progress bar."""
    reports: List[XReport] = []

    with tqdm(desc="x-reports", unit="report", disable=not show_progress) as progress:
        async for page in fetch_report_pages(client, page_size):
            progress.total = page.total
            progress.update(len(page.reports))
            reports.extend(page.reports)

    return reports
