from provisioning_core.application.services.template_resolution_service import TemplateResolutionService

__all__ = ["TemplateResolutionService"]
