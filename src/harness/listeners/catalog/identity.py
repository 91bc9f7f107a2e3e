"""Identity listeners: users, roles, permittable groups and applications."""

from listeners.domain.value_objects import Acknowledge, ListenerSpec, ReadBack, Service
from shared_kernel.messaging.value_objects import Selector
from shared_kernel.recording.payloads import PayloadKind

DESTINATION = "identity-v1"
SELECTOR_HEADER = "operation"


def _on(
    operation: str,
    confirmation: ReadBack | Acknowledge | None = None,
    kind: PayloadKind = PayloadKind.IDENTIFIER,
) -> ListenerSpec:
    return ListenerSpec(
        destination=DESTINATION,
        selector=Selector(SELECTOR_HEADER, operation),
        operation_key=operation,
        kind=kind,
        confirmation=confirmation,
    )


def _user(summary: str) -> ReadBack:
    return ReadBack(
        service=Service.IDENTITY,
        path="/users/{identifier}",
        summary=summary,
        fields={"user": "identifier", "role": "role"},
    )


def _role(summary: str) -> ReadBack:
    return ReadBack(
        service=Service.IDENTITY,
        path="/roles/{identifier}",
        summary=summary,
        fields={
            "role": "identifier",
            "permissions": "permissions.*.permittableEndpointGroupIdentifier",
        },
    )


LISTENERS: tuple[ListenerSpec, ...] = (
    _on("post-user", _user("Created user {user} with role {role}")),
    _on("put-user-roleidentifier", _user("Updated user {user} role {role}")),
    _on("put-user-password", _user("Updated user {user} password")),
    _on("post-permittablegroup"),
    _on("post-application-permission", kind=PayloadKind.APPLICATION_PERMISSION),
    _on("put-application-signature", kind=PayloadKind.APPLICATION_SIGNATURE),
    _on(
        "put-application-permission-user-enabled",
        kind=PayloadKind.APPLICATION_PERMISSION_USER,
    ),
    _on("post-role", _role("Created role, {role} {permissions}")),
    _on("put-role", _role("Updated role, {role} {permissions}")),
    _on("delete-role", Acknowledge("Deleted role, {identifier}")),
)
