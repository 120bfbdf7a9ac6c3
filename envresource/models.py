"""Provisioning declaration passed from phase 1 (declare) to phase 2 (materialize)."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from envresource.static_folder import CopyManifest


class ProvisioningDeclaration(BaseModel):
    """
    What phase 2 must materialize. Self-describing: the host may persist it and hand it
    to another process. copy_manifest is set only for production; "" means no local file.
    """

    model_config = ConfigDict(frozen=True)

    prod_file: str
    local_file: str = ""
    copy_manifest: Optional[CopyManifest] = None

    @property
    def is_production(self) -> bool:
        return self.copy_manifest is not None

    def to_json(self) -> str:
        """Serialize as {"prod_file", "local_file", "copy_manifest"}."""
        return self.model_dump_json()

    @classmethod
    def from_json(cls, data: str) -> "ProvisioningDeclaration":
        return cls.model_validate_json(data)
