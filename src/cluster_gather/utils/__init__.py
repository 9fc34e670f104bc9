"""Pure helpers shared by the gatherers: anonymization and pod health checks."""

from cluster_gather.utils.anonymize import anonymize_url, redact_env_vars
from cluster_gather.utils.health import POD_GRACE_PERIOD, is_healthy_pod

__all__ = [
    "anonymize_url",
    "redact_env_vars",
    "is_healthy_pod",
    "POD_GRACE_PERIOD",
]
