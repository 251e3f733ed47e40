import os

import pytest
from fakes import FakeClock, FakeImageStrategy, FakeInventory

from provisioning_core.domain.compute import Location, LocationScope
from provisioning_core.domain.template import TemplateBuilder, TemplateOptions
from provisioning_core.infrastructure.template import ImageCache


@pytest.fixture(autouse=True)
def aws_credentials():
    """Mocked AWS Credentials for moto."""
    os.environ['AWS_ACCESS_KEY_ID'] = 'testing'
    os.environ['AWS_SECRET_ACCESS_KEY'] = 'testing'
    os.environ['AWS_SECURITY_TOKEN'] = 'testing'
    os.environ['AWS_SESSION_TOKEN'] = 'testing'
    os.environ['AWS_DEFAULT_REGION'] = 'us-east-1'


@pytest.fixture
def provider():
    return Location("provider", LocationScope.PROVIDER, description="provider")


@pytest.fixture
def region(provider):
    return Location("region-1", LocationScope.REGION, description="region 1", parent=provider)


@pytest.fixture
def other_region(provider):
    return Location("region-2", LocationScope.REGION, description="region 2", parent=provider)


@pytest.fixture
def zone(region):
    return Location("zone-1a", LocationScope.ZONE, description="zone 1a", parent=region)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def inventory(provider, region, other_region, zone):
    return FakeInventory([provider, region, other_region, zone], default_location=region)


@pytest.fixture
def strategy():
    return FakeImageStrategy()


@pytest.fixture
def image_cache(inventory, strategy, clock):
    return ImageCache(inventory.load_images, strategy, ttl_seconds=60, clock=clock)


@pytest.fixture
def builder_factory(inventory, image_cache):
    """Create builders over the fake inventory, optionally with a default-template provider."""

    def create(default_template_provider=None) -> TemplateBuilder:
        return TemplateBuilder(
            locations=lambda: inventory.locations,
            image_cache=image_cache,
            hardware=lambda: inventory.hardware,
            default_location=lambda: inventory.default_location,
            options_provider=TemplateOptions,
            default_template_provider=default_template_provider,
        )

    return create
