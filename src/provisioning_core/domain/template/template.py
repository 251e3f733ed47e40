"""Resolved template and the options bag attached to it."""
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict

from provisioning_core.domain.compute import Hardware, Image, Location


class TemplateOptions(BaseModel):
    """
    Open set of provisioning options carried along with a template.

    The resolver never interprets these; provider-specific flags are accepted
    as extra fields.
    """
    model_config = ConfigDict(frozen=True, extra="allow")

    login_user: Optional[str] = None
    login_password: Optional[str] = None
    login_private_key: Optional[str] = None
    authenticate_sudo: Optional[bool] = None


@dataclass(frozen=True)
class Template:
    """The immutable result of template resolution."""
    image: Image
    hardware: Hardware
    location: Location
    options: TemplateOptions

    def __str__(self) -> str:
        return (f"[image={self.image.id}, hardware={self.hardware.id}, "
                f"location={self.location.id}]")
