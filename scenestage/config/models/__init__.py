"""Configuration model exports.

    from scenestage.config.models import StageConfig, ObservabilityConfig
"""

from scenestage.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
)
from scenestage.config.models.stage import StageConfig

__all__ = [
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
    "StageConfig",
]
