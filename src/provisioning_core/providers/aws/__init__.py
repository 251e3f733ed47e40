"""AWS EC2 binding of the inventory and status ports."""
from provisioning_core.providers.aws.aws_client import AWSClient, translate_error
from provisioning_core.providers.aws.inventory import EC2GetImageStrategy, EC2InventoryProvider
from provisioning_core.providers.aws.status import EC2ResourceStatusAdapter

__all__ = [
    "AWSClient",
    "EC2GetImageStrategy",
    "EC2InventoryProvider",
    "EC2ResourceStatusAdapter",
    "translate_error",
]
