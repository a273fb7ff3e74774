"""Service for pinging a batch of targets"""

import logging
from typing import Optional, Sequence

from keepwarm.application.ping_service import PingService

logger = logging.getLogger(__name__)


class BatchService:
    """Pings every configured target once per batch, strictly one after another"""

    def __init__(self, ping_service: Optional[PingService] = None):
        self.ping_service = ping_service or PingService()

    def run_all(self, urls: Sequence[str]) -> None:
        """Ping all targets in order

        A target that exhausts its retry budget is logged and skipped; it never
        stops the batch.

        Args:
            urls: Target URLs, in the order they should be pinged
        """
        logger.info(f"Scheduled ping batch started for {len(urls)} target(s): {list(urls)}")

        for i, url in enumerate(urls, 1):
            logger.debug(f"Pinging target {i}/{len(urls)}: {url}")
            if not self.ping_service.run(url):
                logger.error(f"Giving up on {url}")

        logger.info("All ping tasks finished.")
