import logging
from dataclasses import dataclass, field
from typing import Optional

from duplicate_iam_role.attach import replicate_inline_policies, replicate_managed_policies
from duplicate_iam_role.errors import CloneError
from duplicate_iam_role.replicate import build_create_role_request, create_role
from duplicate_iam_role.snapshot import PolicyInventory, RoleSnapshot, read_policy_inventory, read_role

logger = logging.getLogger(__name__)


@dataclass
class CloneResult:
    target_role_name: str
    snapshot: RoleSnapshot
    inventory: PolicyInventory
    create_role_request: dict
    dry_run: bool = False
    created_role: Optional[dict] = None
    copied_inline_policies: list = field(default_factory=list)
    attached_managed_policies: list = field(default_factory=list)
    failures: list = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def clone_role(iam_client, source_role_name: str, target_role_name: str, dry_run: bool = False) -> CloneResult:
    """
    Create ``target_role_name`` as a copy of ``source_role_name``.

    The source role and its complete policy inventory are read first, and any
    failure up to and including CreateRole raises a CloneError.  Once the
    target role exists, failures to copy individual policies are recorded in
    the result instead of raised.

    :param iam_client: a boto3 IAM client
    :param dry_run: read the source and build the request, but change nothing
    """
    if source_role_name == target_role_name:
        raise CloneError(f"Source and target role are both '{source_role_name}'")

    snapshot = read_role(iam_client, source_role_name)
    inventory = read_policy_inventory(iam_client, source_role_name)

    result = CloneResult(
        target_role_name=target_role_name,
        snapshot=snapshot,
        inventory=inventory,
        create_role_request=build_create_role_request(snapshot, target_role_name),
        dry_run=dry_run,
    )
    if dry_run:
        return result

    result.created_role = create_role(iam_client, snapshot, target_role_name)

    if inventory.inline_policies:
        copied, failures = replicate_inline_policies(iam_client, target_role_name, inventory.inline_policies)
        result.copied_inline_policies.extend(copied)
        result.failures.extend(failures)

    if inventory.managed_policies:
        attached, failures = replicate_managed_policies(iam_client, target_role_name, inventory.managed_policies)
        result.attached_managed_policies.extend(attached)
        result.failures.extend(failures)

    if result.failures:
        logger.info('Role %s was created, but %d policies could not be copied',
                    target_role_name, len(result.failures))
    return result
