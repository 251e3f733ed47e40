"""Application service handing out template builders over one provider inventory."""
import time
from typing import Callable, Optional

from provisioning_core.config.schemas import DefaultTemplateConfig, TemplateConfig
from provisioning_core.domain.base.ports import LoggingPort
from provisioning_core.domain.compute import OsFamily
from provisioning_core.domain.template import Template, TemplateBuilder
from provisioning_core.domain.template.ports import GetImageStrategy, InventoryPort
from provisioning_core.infrastructure.adapters import LoggingAdapter
from provisioning_core.infrastructure.template import ImageCache


class TemplateResolutionService:
    """
    Entry point for template resolution.

    Owns the image cache shared by every builder it creates, so an image
    found through the fallback lookup is visible to later resolutions until
    the cache expires.
    """

    def __init__(self,
                 inventory: InventoryPort,
                 get_image_strategy: GetImageStrategy,
                 template_config: Optional[TemplateConfig] = None,
                 logger: Optional[LoggingPort] = None,
                 clock: Callable[[], float] = time.monotonic):
        """
        Initialize the service.

        Args:
            inventory: Provider inventory
            get_image_strategy: Single-image lookup used on cache misses
            template_config: Cache TTL and default-template constraints
            logger: Optional logger, shared with the cache and builders when given
            clock: Monotonic time source for the image cache
        """
        self._inventory = inventory
        self._config = template_config or TemplateConfig()
        self._logger = logger or LoggingAdapter(__name__)
        # components keep their own module loggers unless one was injected
        self._component_logger = logger
        self._image_cache = ImageCache(
            inventory.images,
            get_image_strategy,
            ttl_seconds=self._config.image_cache_ttl,
            clock=clock,
            logger=self._component_logger,
        )

    @property
    def image_cache(self) -> ImageCache:
        return self._image_cache

    def _new_builder(self, default_template_provider) -> TemplateBuilder:
        return TemplateBuilder(
            locations=self._inventory.locations,
            image_cache=self._image_cache,
            hardware=self._inventory.hardware,
            default_location=self._inventory.default_location,
            options_provider=self._inventory.default_template_options,
            default_template_provider=default_template_provider,
            logger=self._component_logger,
        )

    def template_builder(self) -> TemplateBuilder:
        """Fresh builder; an unconstrained build falls back to the default template."""
        return self._new_builder(self.default_template_builder)

    def default_template_builder(self) -> TemplateBuilder:
        """Builder pre-loaded with the configured default-template constraints."""
        builder = self._new_builder(None)
        _apply_defaults(builder, self._config.default_template)
        return builder

    def resolve(self, spec: Optional[str] = None) -> Template:
        """
        Resolve a template, optionally constrained by a ``key=value`` spec string.

        Args:
            spec: Constraint string such as ``imageId=us-east-1/ami-123,hardwareId=t3.micro``

        Returns:
            The resolved template

        Raises:
            ConfigurationError: On a malformed spec or an empty inventory
            NotFoundError: If the constraints cannot be satisfied
        """
        builder = self.template_builder()
        if spec:
            builder.from_spec(spec)
        template = builder.build()
        self._logger.info("Resolved template %s", template)
        return template


def _apply_defaults(builder: TemplateBuilder, defaults: DefaultTemplateConfig) -> None:
    if defaults.spec:
        builder.from_spec(defaults.spec)
    if defaults.os_family:
        builder.os_family(OsFamily.from_value(defaults.os_family))
    if defaults.os_version_matches:
        builder.os_version_matches(defaults.os_version_matches)
    if defaults.os_64bit is not None:
        builder.os_64bit(defaults.os_64bit)
    if defaults.image_name_matches:
        builder.image_name_matches(defaults.image_name_matches)
    if defaults.location_id:
        builder.location_id(defaults.location_id)
    if defaults.hardware_id:
        builder.hardware_id(defaults.hardware_id)
    if defaults.min_ram is not None:
        builder.min_ram(defaults.min_ram)
    if defaults.min_cores is not None:
        builder.min_cores(defaults.min_cores)
