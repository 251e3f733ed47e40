from provisioning_core.infrastructure.adapters.logging_adapter import LoggingAdapter

__all__ = ["LoggingAdapter"]
