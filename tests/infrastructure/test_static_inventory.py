import pytest
import yaml

from provisioning_core.domain.compute import ImageStatus, LocationScope, OsFamily
from provisioning_core.domain.core import ConfigurationError
from provisioning_core.infrastructure.template import StaticInventoryProvider

INVENTORY_YAML = """
locations:
  - id: lab
    scope: provider
  - id: lab-east
    scope: region
    parent: lab
    iso_codes: [US-VA]
  - id: lab-east-a
    scope: zone
    parent: lab-east
default_location: lab-east
options:
  login_user: ops
images:
  - id: ubuntu-2204
    name: ubuntu-22.04
    os: {family: ubuntu, version: "22.04", arch: x86_64, is_64bit: true}
  - id: centos-7
hidden_images:
  - id: golden
    name: golden-image
    location: lab-east-a
hardware:
  - id: small
    ram: 1024
    processors: [{cores: 1}]
    volumes: [{size: 10, boot: true}]
  - id: gpu
    ram: 65536
    processors: [{cores: 8, speed: 3.0}]
    location: lab-east
    supported_image_ids: [ubuntu-2204]
"""


@pytest.fixture
def data():
    return yaml.safe_load(INVENTORY_YAML)


def test_from_dict(data):
    inventory = StaticInventoryProvider.from_dict(data)

    locations = {location.id: location for location in inventory.locations()}
    assert locations["lab-east-a"].parent == locations["lab-east"]
    assert locations["lab"].scope is LocationScope.PROVIDER
    assert locations["lab-east"].iso_codes == frozenset({"US-VA"})
    assert inventory.default_location().id == "lab-east"
    assert inventory.default_template_options().login_user == "ops"

    ubuntu = inventory.images()[0]
    assert ubuntu.operating_system.family is OsFamily.UBUNTU
    assert ubuntu.operating_system.is_64bit
    assert ubuntu.status is ImageStatus.AVAILABLE

    gpu = inventory.hardware()[1]
    assert gpu.total_compute == 24.0
    assert gpu.location.id == "lab-east"
    assert gpu.supports_image(ubuntu)
    assert not gpu.supports_image(inventory.images()[1])


def test_hidden_images_only_by_id(data):
    inventory = StaticInventoryProvider.from_dict(data)

    assert "golden" not in [image.id for image in inventory.images()]
    assert inventory.get_image("golden").location.id == "lab-east-a"
    assert inventory.get_image("centos-7").id == "centos-7"
    assert inventory.get_image("nothing") is None


def test_default_location_is_first_without_setting(data):
    del data["default_location"]

    assert StaticInventoryProvider.from_dict(data).default_location().id == "lab"


def test_invalid_status_rejected(data):
    data["images"][1]["status"] = "retired"

    with pytest.raises(ConfigurationError):
        StaticInventoryProvider.from_dict(data)


def test_unknown_parent_rejected(data):
    data["locations"][1]["parent"] = "elsewhere"

    with pytest.raises(ConfigurationError) as exc:
        StaticInventoryProvider.from_dict(data)
    assert "elsewhere" in str(exc.value)


def test_unknown_location_reference_rejected(data):
    data["hardware"][0]["location"] = "moon"

    with pytest.raises(ConfigurationError):
        StaticInventoryProvider.from_dict(data)


def test_missing_id_rejected(data):
    del data["hardware"][0]["id"]

    with pytest.raises(ConfigurationError):
        StaticInventoryProvider.from_dict(data)


def test_requires_a_location():
    with pytest.raises(ConfigurationError):
        StaticInventoryProvider([], [], [])
