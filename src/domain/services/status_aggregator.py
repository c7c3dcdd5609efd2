"""Domain service reducing a set of health checks to one status."""

from typing import Iterable

from src.domain.entities.health import UNKNOWN_STATUS, HealthCheck, HealthStatus


def aggregate_status(checks: Iterable[HealthCheck]) -> str:
    """
    Return the most representative status for ``checks``.

    A node or service may carry many checks, so the result follows the
    precedence ``maintenance > critical > warning > passing``. Maintenance is
    detected from the check id and wins regardless of the declared status.
    An empty collection is ``passing``.

    If any non-maintenance check has no status, or a status outside the
    vocabulary, the result is ``UNKNOWN_STATUS`` (an empty string). Callers
    must not treat that value as passing.
    """

    maintenance = False
    critical = False
    warning = False

    for check in checks:
        if check.is_maintenance:
            maintenance = True
            continue

        if check.status == HealthStatus.PASSING:
            continue
        if check.status == HealthStatus.WARNING:
            warning = True
        elif check.status == HealthStatus.CRITICAL:
            critical = True
        else:
            return UNKNOWN_STATUS

    if maintenance:
        return HealthStatus.MAINTENANCE.value
    if critical:
        return HealthStatus.CRITICAL.value
    if warning:
        return HealthStatus.WARNING.value
    return HealthStatus.PASSING.value
