"""Provisioning Core - Root Package.

This package resolves provisioning templates (a compatible combination of
machine image, hardware profile and location) out of provider inventories,
and tracks asynchronous provider operations to completion through bounded,
backing-off retry polling.

Key Components:
    - domain: Compute value objects, template resolution and orderings
    - infrastructure: Logging, image cache and retry polling
    - application: Resolution service and completion predicates
    - providers: Cloud provider bindings of the inventory and status ports
    - config: Configuration schemas, loading and management

Architecture:
    The resolution and polling logic is provider-independent; providers only
    supply inventories, a single-image lookup strategy and status accessors.
"""

from ._version import __version__

__author__ = "Provisioning Core Maintainers"
__package_name__ = "provisioning-core"
