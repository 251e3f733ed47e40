"""EC2 inventory: regions and zones, AMIs and instance types."""
import logging
from typing import Any, Dict, List, Optional, Tuple

from botocore.exceptions import BotoCoreError, ClientError

from provisioning_core.domain.compute import (
    Hardware,
    Image,
    ImagePredicates,
    ImageStatus,
    Location,
    LocationScope,
    OperatingSystem,
    OsFamily,
    Processor,
    Volume,
)
from provisioning_core.domain.template.ports import GetImageStrategy, InventoryPort
from provisioning_core.providers.aws.aws_client import AWSClient, error_code, translate_error

logger = logging.getLogger(__name__)

PROVIDER_ID = "aws-ec2"
MISSING_IMAGE_CODES = ("InvalidAMIID.NotFound", "InvalidAMIID.Malformed", "InvalidAMIID.Unavailable")

_IMAGE_STATES = {
    "available": ImageStatus.AVAILABLE,
    "pending": ImageStatus.PENDING,
    "deregistered": ImageStatus.DELETED,
    "failed": ImageStatus.ERROR,
    "error": ImageStatus.ERROR,
    "invalid": ImageStatus.ERROR,
}

# checked in order; the first keyword found in the name or description wins
_FAMILY_KEYWORDS: Tuple[Tuple[str, OsFamily], ...] = (
    ("windows", OsFamily.WINDOWS),
    ("ubuntu", OsFamily.UBUNTU),
    ("debian", OsFamily.DEBIAN),
    ("centos", OsFamily.CENTOS),
    ("rhel", OsFamily.RHEL),
    ("red hat", OsFamily.RHEL),
    ("suse", OsFamily.SUSE),
    ("fedora", OsFamily.FEDORA),
    ("freebsd", OsFamily.FREEBSD),
    ("coreos", OsFamily.COREOS),
    ("amzn", OsFamily.AMZN_LINUX),
    ("amazon linux", OsFamily.AMZN_LINUX),
)

_64BIT_ARCHITECTURES = ("x86_64", "arm64", "x86_64_mac", "arm64_mac")


def parse_os_family(*texts: Optional[str]) -> OsFamily:
    haystack = " ".join(text.lower() for text in texts if text)
    for keyword, family in _FAMILY_KEYWORDS:
        if keyword in haystack:
            return family
    return OsFamily.UNRECOGNIZED


def image_from_description(description: Dict[str, Any], region: Location) -> Image:
    """Map one DescribeImages entry to an Image with id ``<region>/<ami>``."""
    name = description.get("Name")
    text = description.get("Description")
    arch = description.get("Architecture")
    family = OsFamily.WINDOWS if description.get("Platform") == "windows" \
        else parse_os_family(name, text, description.get("PlatformDetails"))
    return Image(
        id=f"{region.id}/{description['ImageId']}",
        provider_id=description["ImageId"],
        name=name,
        version=description.get("CreationDate"),
        description=text,
        status=_IMAGE_STATES.get(description.get("State", ""), ImageStatus.UNRECOGNIZED),
        operating_system=OperatingSystem(
            family=family,
            name=name,
            arch=arch,
            is_64bit=arch in _64BIT_ARCHITECTURES,
            description=description.get("PlatformDetails"),
        ),
        location=region,
    )


def hardware_from_description(description: Dict[str, Any]) -> Hardware:
    """Map one DescribeInstanceTypes entry to a Hardware profile offered in every region."""
    processor_info = description.get("ProcessorInfo", {})
    vcpus = description.get("VCpuInfo", {}).get("DefaultVCpus", 1)
    speed = processor_info.get("SustainedClockSpeedInGhz") or 1.0
    storage = description.get("InstanceStorageInfo", {})
    volumes = (Volume(storage["TotalSizeInGB"], durable=False),) if storage.get("TotalSizeInGB") else ()
    architectures = processor_info.get("SupportedArchitectures", ["x86_64"])
    return Hardware(
        id=description["InstanceType"],
        name=description["InstanceType"],
        ram=int(description.get("MemoryInfo", {}).get("SizeInMiB", 0)),
        processors=(Processor(vcpus, speed),),
        volumes=volumes,
        hypervisor=description.get("Hypervisor"),
        deprecated=not description.get("CurrentGeneration", True),
        supports_image=ImagePredicates.arch_in(architectures),
    )


class EC2InventoryProvider(InventoryPort):
    """
    Inventory of the configured regions.

    Location tree: the provider, its regions, and their availability zones.
    Images are owned by the configured owners and carry region-qualified
    ids. Instance types are reported once, without a location, since every
    configured region offers the same catalogue.
    """

    def __init__(self, aws_client: AWSClient):
        self._aws_client = aws_client
        self._config = aws_client.provider_config
        self._provider = Location(PROVIDER_ID, LocationScope.PROVIDER, description="Amazon EC2")

    def region_location(self, region: str) -> Location:
        return Location(region, LocationScope.REGION, description=region, parent=self._provider)

    def locations(self) -> List[Location]:
        result = [self._provider]
        for region in self._config.all_regions():
            region_location = self.region_location(region)
            result.append(region_location)
            try:
                zones = self._aws_client.ec2(region).describe_availability_zones()["AvailabilityZones"]
            except (ClientError, BotoCoreError) as e:
                raise translate_error(e, f"describe availability zones in {region}")
            for zone in zones:
                result.append(Location(zone["ZoneName"], LocationScope.ZONE,
                                       description=zone["ZoneName"], parent=region_location))
        return result

    def images(self) -> List[Image]:
        result = []
        for region in self._config.all_regions():
            region_location = self.region_location(region)
            try:
                descriptions = self._aws_client.ec2(region).describe_images(
                    Owners=self._config.image_owners)["Images"]
            except (ClientError, BotoCoreError) as e:
                raise translate_error(e, f"describe images in {region}")
            result.extend(image_from_description(d, region_location) for d in descriptions)
        logger.debug("Listed %d images in %d regions", len(result), len(self._config.all_regions()))
        return result

    def hardware(self) -> List[Hardware]:
        params: Dict[str, Any] = {}
        if self._config.instance_types:
            params["InstanceTypes"] = self._config.instance_types
        try:
            paginator = self._aws_client.ec2().get_paginator("describe_instance_types")
            descriptions = [
                description
                for page in paginator.paginate(**params)
                for description in page["InstanceTypes"]
            ]
        except (ClientError, BotoCoreError) as e:
            raise translate_error(e, "describe instance types")
        return [hardware_from_description(d) for d in descriptions]

    def default_location(self) -> Location:
        return self.region_location(self._config.region)


class EC2GetImageStrategy(GetImageStrategy):
    """Looks up one AMI by ``<region>/<ami>`` or bare AMI id (default region)."""

    def __init__(self, aws_client: AWSClient, inventory: EC2InventoryProvider):
        self._aws_client = aws_client
        self._inventory = inventory

    def get_image(self, image_id: str) -> Optional[Image]:
        region, _, ami_id = image_id.rpartition("/")
        region = region or self._aws_client.region_name
        try:
            descriptions = self._aws_client.ec2(region).describe_images(ImageIds=[ami_id])["Images"]
        except ClientError as e:
            if error_code(e) in MISSING_IMAGE_CODES:
                logger.debug("Image %s not found in %s", ami_id, region)
                return None
            raise translate_error(e, f"describe image {image_id}")
        except BotoCoreError as e:
            raise translate_error(e, f"describe image {image_id}")
        if not descriptions:
            return None
        return image_from_description(descriptions[0], self._inventory.region_location(region))
