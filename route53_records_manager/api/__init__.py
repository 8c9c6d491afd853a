"""
Route53 request pipeline.

Credentials, request signing, the XML wire codec and the executor that ties
them together.
"""

from .credentials import (
    CredentialProvider,
    Credentials,
    EnvironmentCredentialSource,
    InstanceMetadataCredentialSource,
    StaticCredentialSource,
    build_credential_source,
)
from .errors import (
    AuthError,
    CodecError,
    NotSupportedError,
    RemoteError,
    Route53Error,
    TransportError,
    UnsupportedResultError,
)
from .executor import RequestExecutor
from .models import (
    AliasTarget,
    Change,
    ChangeAction,
    ChangeBatch,
    ChangeInfo,
    HostedZone,
    Request,
    ResponseShape,
    RRSet,
)

__all__ = [
    "AliasTarget",
    "AuthError",
    "Change",
    "ChangeAction",
    "ChangeBatch",
    "ChangeInfo",
    "CodecError",
    "CredentialProvider",
    "Credentials",
    "EnvironmentCredentialSource",
    "HostedZone",
    "InstanceMetadataCredentialSource",
    "NotSupportedError",
    "RemoteError",
    "Request",
    "RequestExecutor",
    "ResponseShape",
    "Route53Error",
    "RRSet",
    "StaticCredentialSource",
    "TransportError",
    "UnsupportedResultError",
    "build_credential_source",
]
