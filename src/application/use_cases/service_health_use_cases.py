"""Use cases built on top of the health facade."""

from typing import List, Optional, Sequence

from src.application.dtos.summary_dto import InstanceHealthDTO, ServiceHealthSummaryDTO
from src.application.use_cases.health_facade import Health
from src.domain.entities.health import HealthCheck
from src.domain.entities.query import HealthVariant, QueryOptions
from src.domain.services.status_aggregator import aggregate_status


class GetServiceHealthSummaryUseCase:
    """Use case returning the aggregated health of a service."""

    def __init__(self, health: Health) -> None:
        self._health = health

    async def execute(
        self,
        service: str,
        tags: Sequence[str] = (),
        passing_only: bool = False,
        variant: HealthVariant = HealthVariant.PLAIN,
        options: Optional[QueryOptions] = None,
    ) -> ServiceHealthSummaryDTO:
        result = await self._health.service_entries(
            service, tags, passing_only, variant, options
        )

        instances: List[InstanceHealthDTO] = []
        all_checks: List[HealthCheck] = []
        for entry in result.items:
            checks = list(entry.checks or [])
            all_checks.extend(checks)
            instances.append(
                InstanceHealthDTO.from_domain(entry, aggregate_status(checks))
            )

        return ServiceHealthSummaryDTO(
            service=service,
            variant=HealthVariant(variant).value,
            status=aggregate_status(all_checks),
            instances=instances,
            last_index=result.meta.last_index,
        )


class GetServiceAddressesUseCase:
    """Use case returning the reachable addresses of a service."""

    def __init__(self, health: Health) -> None:
        self._health = health

    async def execute(
        self,
        service: str,
        tag: str = "",
        passing_only: bool = False,
        options: Optional[QueryOptions] = None,
    ) -> List[str]:
        return await self._health.service_address(service, tag, passing_only, options)
