"""Resolve, validate and load an application's env file during provisioning."""

from envresource.errors import (
    DelegateConsumedError,
    EnvLoadFailure,
    EnvParseError,
    EnvResourceError,
    InvalidSourceFolder,
    ProvisioningError,
    StaticFolderCopyError,
    TraversalOutsideRoot,
)
from envresource.models import ProvisioningDeclaration
from envresource.resolver import EnvironmentResolver
from envresource.resource import EnvVars
from envresource.runtime import Environment, Factory, LocalFactory
from envresource.sink import EnvironmentSink, MappingEnvironment, ProcessEnvironment
from envresource.static_folder import CopyManifest, StaticFolder

__all__ = [
    "CopyManifest",
    "DelegateConsumedError",
    "EnvLoadFailure",
    "EnvParseError",
    "EnvResourceError",
    "EnvVars",
    "Environment",
    "EnvironmentResolver",
    "EnvironmentSink",
    "Factory",
    "InvalidSourceFolder",
    "LocalFactory",
    "MappingEnvironment",
    "ProcessEnvironment",
    "ProvisioningDeclaration",
    "ProvisioningError",
    "StaticFolder",
    "StaticFolderCopyError",
    "TraversalOutsideRoot",
]
