import boto3
import pytest
from moto import mock_aws

from provisioning_core.config.schemas import AWSProviderConfig
from provisioning_core.providers.aws import AWSClient


@pytest.fixture
def provider_config():
    return AWSProviderConfig(
        region="us-east-1",
        image_owners=["amazon"],
        instance_types=["t2.micro", "m5.large"],
    )


@pytest.fixture
def mocked_aws(aws_credentials):
    with mock_aws():
        yield


@pytest.fixture
def ec2(mocked_aws):
    """Raw client for arranging resources."""
    return boto3.client("ec2", region_name="us-east-1")


@pytest.fixture
def aws_client(mocked_aws, provider_config):
    return AWSClient(provider_config)


@pytest.fixture
def amazon_ami(ec2):
    images = ec2.describe_images(Owners=["amazon"])["Images"]
    return next(image for image in images if image.get("Architecture") == "x86_64")


@pytest.fixture
def running_instance(ec2, amazon_ami):
    reservation = ec2.run_instances(ImageId=amazon_ami["ImageId"], MinCount=1, MaxCount=1,
                                    InstanceType="t2.micro")
    return reservation["Instances"][0]["InstanceId"]
