# threadly/utils/revalidate.py
import logging

import httpx

from threadly import config

logger = logging.getLogger(__name__)


async def revalidate_path(path: str) -> bool:
    """
    Ask the frontend to drop its cached render of `path`.
    Best effort: a missing hook or a failed call is logged, never raised.
    """
    url = config.REVALIDATE_WEBHOOK_URL
    if not url:
        logger.debug("No revalidation hook configured; skipping %s", path)
        return False

    try:
        async with httpx.AsyncClient(timeout=config.REVALIDATE_TIMEOUT) as client:
            res = await client.post(url, json={"path": path})
        res.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning("Revalidation of %s failed: %s", path, e)
        return False

    logger.info("Revalidated %s", path)
    return True
