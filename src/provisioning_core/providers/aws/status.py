"""EC2 implementation of the resource status port."""
from typing import Any, Callable, Dict, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from provisioning_core.domain.operation import (
    Operation,
    OperationStatus,
    PowerState,
    ProvisionedResource,
    ResourceKind,
    ResourceStatusPort,
)
from provisioning_core.infrastructure.exceptions import AWSError
from provisioning_core.providers.aws.aws_client import AWSClient, error_code, translate_error

_POWER_STATES = {
    "pending": PowerState.PENDING,
    "running": PowerState.RUNNING,
    "stopping": PowerState.STOPPED,
    "stopped": PowerState.STOPPED,
    "shutting-down": PowerState.TERMINATED,
    "terminated": PowerState.TERMINATED,
}

# AMI creation is tracked as an operation whose id is the image id
_IMAGE_OPERATION_STATES = {
    "pending": OperationStatus.RUNNING,
    "available": OperationStatus.DONE,
    "failed": OperationStatus.ERROR,
    "error": OperationStatus.ERROR,
    "invalid": OperationStatus.ERROR,
    "deregistered": OperationStatus.ERROR,
}

_PROVISIONING_STATES = {
    "available": "Succeeded",
    "pending": "Updating",
    "failed": "Failed",
    "error": "Failed",
}

_NOT_FOUND_CODES = (
    "InvalidInstanceID.NotFound",
    "InvalidInstanceID.Malformed",
    "InvalidAMIID.NotFound",
    "InvalidAMIID.Malformed",
    "InvalidGroup.NotFound",
    "InvalidGroupId.Malformed",
    "InvalidVpcID.NotFound",
)


class EC2ResourceStatusAdapter(ResourceStatusPort):
    """
    Fetches instance, AMI, security group and VPC state from EC2.

    Scopes are region names. Operation ids are ``<region>/<ami>`` image ids
    of pending AMI creations. EC2 has no soft delete, so deleted listings
    are always empty.
    """

    def __init__(self, aws_client: AWSClient):
        self._aws_client = aws_client

    def _call(self, region: str, action: str, call: Callable[[Any], Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """Run ``call`` against the region's client; None when the resource does not exist."""
        try:
            return call(self._aws_client.ec2(region))
        except ClientError as e:
            if error_code(e) in _NOT_FOUND_CODES:
                return None
            raise translate_error(e, action)
        except BotoCoreError as e:
            raise translate_error(e, action)

    def get_instance(self, scope: str, name: str) -> Optional[ProvisionedResource]:
        response = self._call(scope, f"describe instance {name}",
                              lambda ec2: ec2.describe_instances(InstanceIds=[name]))
        instances = [
            instance
            for reservation in (response or {}).get("Reservations", [])
            for instance in reservation["Instances"]
        ]
        if not instances:
            return None
        state = instances[0].get("State", {}).get("Name", "")
        return ProvisionedResource(
            kind=ResourceKind.INSTANCE,
            scope=scope,
            name=name,
            provisioning_state="Succeeded" if state in ("running", "stopped") else state.capitalize(),
            power_state=_POWER_STATES.get(state, PowerState.UNRECOGNIZED),
        )

    def _describe_image(self, region: str, ami_id: str) -> Optional[Dict[str, Any]]:
        response = self._call(region, f"describe image {ami_id}",
                              lambda ec2: ec2.describe_images(ImageIds=[ami_id]))
        images = (response or {}).get("Images", [])
        return images[0] if images else None

    def get_operation(self, operation_id: str) -> Optional[Operation]:
        region, _, ami_id = operation_id.rpartition("/")
        image = self._describe_image(region or self._aws_client.region_name, ami_id)
        if image is None:
            return None
        state_reason = image.get("StateReason", {})
        return Operation(
            id=operation_id,
            status=_IMAGE_OPERATION_STATES.get(image.get("State", ""), OperationStatus.UNRECOGNIZED),
            target_ref=ami_id,
            error_code=state_reason.get("Code"),
            error_message=state_reason.get("Message"),
        )

    def get_resource(self, kind: ResourceKind, scope: str, name: str) -> Optional[ProvisionedResource]:
        if kind == ResourceKind.INSTANCE:
            return self.get_instance(scope, name)
        if kind == ResourceKind.IMAGE:
            image = self._describe_image(scope, name)
            if image is None:
                return None
            state = _PROVISIONING_STATES.get(image.get("State", ""), image.get("State"))
        elif kind == ResourceKind.SECURITY_GROUP:
            response = self._call(scope, f"describe security group {name}",
                                  lambda ec2: ec2.describe_security_groups(GroupIds=[name]))
            if not (response or {}).get("SecurityGroups"):
                return None
            # security groups are usable as soon as they exist
            state = "Succeeded"
        elif kind == ResourceKind.NETWORK:
            response = self._call(scope, f"describe vpc {name}",
                                  lambda ec2: ec2.describe_vpcs(VpcIds=[name]))
            vpcs = (response or {}).get("Vpcs", [])
            if not vpcs:
                return None
            state = _PROVISIONING_STATES.get(vpcs[0].get("State", ""), vpcs[0].get("State"))
        else:
            raise AWSError(f"Resource kind {kind.value} is not supported by EC2")
        return ProvisionedResource(kind=kind, scope=scope, name=name, provisioning_state=state)

    def list_resource_names(self, kind: ResourceKind, scope: str, deleted: bool = False) -> List[str]:
        if deleted:
            return []
        if kind == ResourceKind.INSTANCE:
            response = self._call(scope, "describe instances", lambda ec2: ec2.describe_instances())
            return [
                instance["InstanceId"]
                for reservation in (response or {}).get("Reservations", [])
                for instance in reservation["Instances"]
                if instance.get("State", {}).get("Name") != "terminated"
            ]
        if kind == ResourceKind.IMAGE:
            response = self._call(scope, "describe images",
                                  lambda ec2: ec2.describe_images(Owners=["self"]))
            return [image["ImageId"] for image in (response or {}).get("Images", [])]
        if kind == ResourceKind.SECURITY_GROUP:
            response = self._call(scope, "describe security groups",
                                  lambda ec2: ec2.describe_security_groups())
            return [group["GroupId"] for group in (response or {}).get("SecurityGroups", [])]
        if kind == ResourceKind.NETWORK:
            response = self._call(scope, "describe vpcs", lambda ec2: ec2.describe_vpcs())
            return [vpc["VpcId"] for vpc in (response or {}).get("Vpcs", [])]
        raise AWSError(f"Resource kind {kind.value} is not supported by EC2")
