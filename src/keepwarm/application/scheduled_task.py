"""Timer-triggered entrypoint.

The host (cron, a container scheduler or `keepwarm schedule`) supplies the
configuration at call time; nothing below the entrypoint reads the
environment.
"""

import logging
from pathlib import Path
from typing import Mapping, Optional

from keepwarm.application.batch_service import BatchService
from keepwarm.application.ping_service import PingService
from keepwarm.domain.config.app import AppConfig
from keepwarm.infrastructure.config.config_manager import ConfigManager

logger = logging.getLogger(__name__)


def run_scheduled_task(config: AppConfig, ping_service: Optional[PingService] = None) -> None:
    """Run one batch over the configured targets

    Args:
        config: Validated application configuration
        ping_service: Ping service (built from config.retry if None)
    """
    batch_service = BatchService(ping_service or PingService(config.retry))
    batch_service.run_all(config.targets.urls)


def scheduled(
    environ: Optional[Mapping[str, str]] = None,
    config_path: Optional[Path] = None,
) -> None:
    """Load configuration from the host environment and run one batch

    Args:
        environ: Environment mapping (os.environ if None)
        config_path: Optional path to .keepwarm.yml

    Raises:
        ConfigurationError: If API_LIST or the retry settings are malformed
    """
    config_manager = ConfigManager(config_path=config_path, environ=environ)
    run_scheduled_task(config_manager.config)
