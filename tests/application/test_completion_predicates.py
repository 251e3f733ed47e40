from typing import Dict, List, Optional, Tuple

import pytest

from provisioning_core.application.polling import (
    CompletionPredicates,
    ImageCapturedPredicate,
    InstanceInStatePredicateFactory,
    OperationDonePredicate,
    ResourceAvailablePredicateFactory,
    ResourceInStatusPredicate,
    ResourcePresencePredicateFactory,
)
from provisioning_core.config.schemas import PollingConfig
from provisioning_core.domain.core import OperationTimeoutError, TransientProviderError
from provisioning_core.domain.operation import (
    Operation,
    OperationStatus,
    PowerState,
    ProvisionedResource,
    ResourceKind,
    ResourceStatusPort,
)


class FakeStatusPort(ResourceStatusPort):
    """
    In-memory provider state.

    ``script`` holds per-key lists of states returned on successive fetches;
    the last state repeats once the list is exhausted.
    """

    def __init__(self):
        self.script: Dict[Tuple, List] = {}
        self.fetches: List[Tuple] = []

    def _next(self, key):
        self.fetches.append(key)
        states = self.script.get(key, [None])
        state = states.pop(0) if len(states) > 1 else states[0]
        if isinstance(state, Exception):
            raise state
        return state

    def get_instance(self, scope: str, name: str) -> Optional[ProvisionedResource]:
        return self._next(("instance", scope, name))

    def get_operation(self, operation_id: str) -> Optional[Operation]:
        return self._next(("operation", operation_id))

    def get_resource(self, kind, scope, name):
        return self._next((kind, scope, name))

    def list_resource_names(self, kind, scope, deleted=False):
        return self._next(("list", kind, scope, deleted)) or []


def instance(state: PowerState) -> ProvisionedResource:
    return ProvisionedResource(kind=ResourceKind.INSTANCE, scope="rg", name="vm", power_state=state)


def resource(kind: ResourceKind, state: str) -> ProvisionedResource:
    return ProvisionedResource(kind=kind, scope="rg", name="res", provisioning_state=state)


@pytest.fixture
def port():
    return FakeStatusPort()


@pytest.fixture
def poll(clock):
    return dict(period=1, max_period=2, clock=clock, sleep=clock.sleep)


def test_instance_reaches_running(port, poll):
    port.script[("instance", "rg", "vm")] = [
        instance(PowerState.PENDING), instance(PowerState.PENDING), instance(PowerState.RUNNING)]

    running = InstanceInStatePredicateFactory(port, PowerState.RUNNING, 10, **poll).create("rg")

    assert running("vm")
    assert len(port.fetches) == 3


def test_missing_instance_counts_as_terminated(port, poll):
    terminated = InstanceInStatePredicateFactory(port, PowerState.TERMINATED, 10, **poll).create("rg")
    running = InstanceInStatePredicateFactory(port, PowerState.RUNNING, 3, **poll).create("rg")

    assert terminated("vm")
    assert not running("vm")


def test_instance_timeout(port, poll, clock):
    port.script[("instance", "rg", "vm")] = [instance(PowerState.STOPPED)]

    predicate = InstanceInStatePredicateFactory(port, PowerState.RUNNING, 5, **poll).create("rg")

    with pytest.raises(OperationTimeoutError):
        predicate.wait_for("vm")
    assert clock.now == 5
    assert max(clock.sleeps) <= 2


def test_resource_available_ignores_case(port, poll):
    key = (ResourceKind.NETWORK, "rg", "net")
    port.script[key] = [None, resource(ResourceKind.NETWORK, "Updating"), resource(ResourceKind.NETWORK, "succeeded")]

    available = ResourceAvailablePredicateFactory(port, ResourceKind.NETWORK, 10, **poll).create("rg")

    assert available("net")
    assert port.fetches == [key, key, key]


def test_resource_in_custom_status(port, poll):
    port.script[(ResourceKind.VAULT, "rg", "kv")] = [resource(ResourceKind.VAULT, "Recovered")]

    factory = ResourceAvailablePredicateFactory(port, ResourceKind.VAULT, 10, expected_status="recovered", **poll)

    assert factory.create("rg")("kv")


def test_resource_absent_and_present(port, poll):
    live = ("list", ResourceKind.SECURITY_GROUP, "rg", False)
    port.script[live] = [["sg-1", "sg-2"], ["sg-2"]]

    deleted = ResourcePresencePredicateFactory(port, ResourceKind.SECURITY_GROUP, False, 10, **poll)
    present = ResourcePresencePredicateFactory(port, ResourceKind.SECURITY_GROUP, True, 10, **poll)

    assert deleted.create("rg")("sg-1")
    assert present.create("rg")("sg-2")
    assert port.fetches == [live, live, live]


def test_soft_deleted_listing(port, poll):
    soft_deleted = ("list", ResourceKind.VAULT_SECRET, "kv", True)
    port.script[soft_deleted] = [[], ["secret"]]

    factory = ResourcePresencePredicateFactory(
        port, ResourceKind.VAULT_SECRET, True, 10, in_deleted=True, **poll)

    assert factory.create("kv")("secret")


def test_operation_done(port):
    done = OperationDonePredicate(port)
    port.script[("operation", "op")] = [
        Operation(id="op", status=OperationStatus.RUNNING),
        Operation(id="op", status=OperationStatus.NO_CONTENT),
    ]

    assert not done("op")
    assert done("op")
    assert not done("unknown")


def test_operation_error_is_not_done(port):
    port.script[("operation", "op")] = [Operation(id="op", status=OperationStatus.ERROR, error_code="Boom")]

    assert not OperationDonePredicate(port)("op")


def test_image_captured_needs_fetchable_image(port):
    port.script[("operation", "cap")] = [Operation(id="cap", status=OperationStatus.DONE, target_ref="img-9")]
    port.script[(ResourceKind.IMAGE, "rg", "img-9")] = [None, resource(ResourceKind.IMAGE, "Succeeded")]

    captured = ImageCapturedPredicate(port, "rg")

    assert not captured("cap")
    assert captured("cap")


def test_image_captured_requires_target(port):
    port.script[("operation", "cap")] = [Operation(id="cap", status=OperationStatus.DONE)]

    assert not ImageCapturedPredicate(port, "rg")("cap")


def test_resource_in_status_predicate():
    in_status = ResourceInStatusPredicate("Succeeded")

    assert in_status(lambda: resource(ResourceKind.IMAGE, "SUCCEEDED"))
    assert not in_status(lambda: None)
    assert not in_status(lambda: ProvisionedResource(kind=ResourceKind.IMAGE, scope="rg", name="x"))


def test_transient_fetch_errors_are_retried(port, poll):
    port.script[("instance", "rg", "vm")] = [TransientProviderError("throttled"), instance(PowerState.RUNNING)]

    running = InstanceInStatePredicateFactory(port, PowerState.RUNNING, 10, **poll).create("rg")

    assert running("vm")


def test_completion_predicates_use_config(port, clock):
    config = PollingConfig(period={"initial_period": 1, "max_period": 2},
                           timeouts={"node_running": 7, "operation_timeout": 3})
    predicates = CompletionPredicates.from_config(port, config, clock=clock, sleep=clock.sleep)

    assert not predicates.node_running.create("rg")("vm")
    assert clock.now == 7

    assert predicates.operation_done.timeout == 3
    assert predicates.operation_done.period == 1
    assert predicates.operation_done.max_period == 2
    assert predicates.node_terminated.create("rg")("vm")


def test_completion_predicates_for_kinds(port, clock):
    predicates = CompletionPredicates(port, PollingConfig(), clock=clock, sleep=clock.sleep)
    port.script[("list", ResourceKind.PUBLIC_IP, "rg", False)] = [["ip-1"]]
    port.script[(ResourceKind.PUBLIC_IP, "rg", "ip-1")] = [resource(ResourceKind.PUBLIC_IP, "Succeeded")]
    port.script[("operation", "cap")] = [Operation(id="cap", status=OperationStatus.DONE, target_ref="img")]
    port.script[(ResourceKind.IMAGE, "rg", "img")] = [resource(ResourceKind.IMAGE, "Succeeded")]

    assert predicates.resource_available(ResourceKind.PUBLIC_IP).create("rg")("ip-1")
    assert predicates.resource_deleted(ResourceKind.PUBLIC_IP).create("rg")("ip-2")
    assert predicates.image_captured("rg")("cap")
    assert predicates.resource_soft_deleted(ResourceKind.VAULT_KEY).create("kv").timeout == 1200
