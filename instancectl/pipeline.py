"""
Sequential lifecycle pipeline.

One invocation runs Validator -> Prober -> Resolver -> Locator -> Engine.
Every stage is awaited before the next one starts and the first failure
aborts the rest. Blocking provider calls run in worker threads through the
``a<method>`` variants generated by :class:`~instancectl.base.async_support.AsyncMixin`.
"""

from __future__ import annotations

import asyncio

from instancectl.base import existing_cloud_providers, existing_operations
from instancectl.base.config import OvhConfig
from instancectl.base.gateway import ApiGatewayBlueprint
from instancectl.base.logger import ic_logger
from instancectl.base.models import CreateRequest, TransitionOutcome
from instancectl.factory import build_gateway, universal_factory
from instancectl.lifecycle import LifecycleEngine


class Pipeline:
    """Runs one operation against one named instance.

    Attributes:
        operation: ``create``, ``start``, ``stop`` or ``shelve``.
        config: Configuration built once at the process boundary.
        cloud_provider: Provider the gateway and services are built for.
        gateway: Gateway to issue calls through; built from ``config`` for
            ``cloud_provider`` when None.
    """

    def __init__(
        self,
        operation: existing_operations,
        config: OvhConfig,
        cloud_provider: existing_cloud_providers = "ovh",
        gateway: ApiGatewayBlueprint | None = None,
    ) -> None:
        self.operation = operation
        self.config = config
        self.cloud_provider = cloud_provider
        self.gateway = gateway
        self.log = ic_logger.bind(
            project=config.service_name,
            instance=config.instance_name,
            operation=operation,
            provider=cloud_provider,
        )

    async def run(self) -> TransitionOutcome:
        """Execute every stage in order.

        Raises:
            InstanceCtlError: Whichever stage failed first.
        """
        self.config.require(self.operation)

        gateway = self.gateway
        if gateway is None:
            gateway = build_gateway(self.cloud_provider, self.config)
        prober = universal_factory("prober", self.cloud_provider, gateway)
        resolver = universal_factory("resolver", self.cloud_provider, gateway)
        compute = universal_factory("compute", self.cloud_provider, gateway)
        engine = LifecycleEngine(compute, self.log)

        name: str = self.config.instance_name  # type: ignore[assignment]

        self.log.info("Testing API connectivity...")
        server_time = await prober.acheck_connectivity()
        self.log.info(f"API connectivity test successful. Server time: {server_time}")
        self.log.info("Testing consumer key permissions...")
        await prober.acheck_credentials()

        self.log.info("Listing available projects...")
        project = await resolver.aresolve_project(self.config.service_name)

        if self.operation == "create":
            request = await self._resolve_create_request(resolver, project, name)
            return await engine.aapply(self.operation, project, None, name, request)

        self.log.info("Getting instances...")
        instance = await compute.afind_instance(project, name)
        if instance is not None:
            self.log.info(
                f"Found instance: id={instance.id} name={instance.name} status={instance.status}"
            )
        return await engine.aapply(self.operation, project, instance, name)

    async def _resolve_create_request(self, resolver, project: str, name: str) -> CreateRequest:
        cfg = self.config
        self.log.info(f"Checking region {cfg.region}...")
        region = await resolver.aresolve_region(project, cfg.region)
        self.log.info(f"Looking up SSH key {cfg.ssh_key}...")
        ssh_key = await resolver.aresolve_ssh_key(project, cfg.ssh_key)
        self.log.info(f"Looking up flavor {cfg.flavor_name}...")
        flavor = await resolver.aresolve_flavor(project, region, cfg.flavor_name)
        self.log.info(f"Looking up image {cfg.image_name}...")
        image = await resolver.aresolve_image(project, region, flavor.id, cfg.image_name)
        return CreateRequest(
            flavor_id=flavor.id,
            image_id=image.id,
            name=name,
            region=region,
            ssh_key_id=ssh_key.id,
        )


def run_operation(
    operation: existing_operations,
    config: OvhConfig,
    cloud_provider: existing_cloud_providers = "ovh",
) -> TransitionOutcome:
    """Synchronous entry point: run the pipeline to completion."""
    return asyncio.run(Pipeline(operation, config, cloud_provider).run())
