"""
Read everything about a source role that a clone needs: the role itself,
its inline policies and its managed policy attachments.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from botocore.exceptions import BotoCoreError, ClientError

from duplicate_iam_role.errors import RoleReadError
from duplicate_iam_role.pagination import collect_pages

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoleSnapshot:
    role_name: str
    path: str
    max_session_duration: int
    trust_policy_document: Any
    description: Optional[str] = None
    permissions_boundary_arn: Optional[str] = None
    tags: tuple = field(default_factory=tuple)

    @classmethod
    def from_role(cls, role: dict) -> 'RoleSnapshot':
        """Build a snapshot from the ``Role`` member of a GetRole response."""
        boundary = role.get('PermissionsBoundary') or {}
        return cls(
            role_name=role['RoleName'],
            path=role['Path'],
            max_session_duration=role['MaxSessionDuration'],
            trust_policy_document=role['AssumeRolePolicyDocument'],
            description=role.get('Description'),
            permissions_boundary_arn=boundary.get('PermissionsBoundaryArn'),
            tags=tuple({'Key': t['Key'], 'Value': t['Value']} for t in role.get('Tags', [])),
        )


@dataclass(frozen=True)
class InlinePolicy:
    name: str
    document: Any


@dataclass(frozen=True)
class ManagedPolicyRef:
    arn: str
    name: Optional[str] = None


@dataclass(frozen=True)
class PolicyInventory:
    inline_policies: tuple = ()
    managed_policies: tuple = ()


def role_name_from_arn(role_arn_or_name: str) -> str:
    """Extract the role name from a role ARN, or return the name if already a name."""
    if role_arn_or_name.startswith('arn:') and ':role/' in role_arn_or_name:
        # Roles with a path look like arn:aws:iam::123456789012:role/svc/name
        return role_arn_or_name.split('/')[-1]
    return role_arn_or_name


def read_role(iam_client, role_name: str) -> RoleSnapshot:
    try:
        role = iam_client.get_role(RoleName=role_name)['Role']
    except (ClientError, BotoCoreError) as e:
        raise RoleReadError(f"Failed to get role '{role_name}': {e}") from e

    logger.info("Read role %s (%s)", role_name, role.get('Arn'))
    return RoleSnapshot.from_role(role)


def list_inline_policy_names(iam_client, role_name: str) -> list:
    return collect_pages(iam_client, 'list_role_policies', 'PolicyNames', RoleName=role_name)


def read_inline_policies(iam_client, role_name: str) -> list:
    """
    Get the document of every inline policy on a role.  Any failure is an
    error, because a clone missing an inline policy would look complete.
    """
    inline_policies = []
    for policy_name in list_inline_policy_names(iam_client, role_name):
        try:
            policy_doc = iam_client.get_role_policy(
                RoleName=role_name,
                PolicyName=policy_name
            )['PolicyDocument']
        except (ClientError, BotoCoreError) as e:
            raise RoleReadError(f"Failed to get inline policy '{policy_name}' of role '{role_name}': {e}") from e

        inline_policies.append(InlinePolicy(name=policy_name, document=policy_doc))

    return inline_policies


def read_managed_policies(iam_client, role_name: str) -> list:
    attached = collect_pages(iam_client, 'list_attached_role_policies', 'AttachedPolicies', RoleName=role_name)
    return [ManagedPolicyRef(arn=p['PolicyArn'], name=p.get('PolicyName')) for p in attached]


def read_policy_inventory(iam_client, role_name: str) -> PolicyInventory:
    inventory = PolicyInventory(
        inline_policies=tuple(read_inline_policies(iam_client, role_name)),
        managed_policies=tuple(read_managed_policies(iam_client, role_name)),
    )
    logger.info("Role %s has %d inline and %d managed policies",
                role_name, len(inventory.inline_policies), len(inventory.managed_policies))
    return inventory
