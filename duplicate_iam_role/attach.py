"""
Replay a source role's policies onto the newly created target role.

The target role already exists by the time these run, so a failure on one
policy is logged and recorded and the remaining policies are still copied.
"""
import logging
from dataclasses import dataclass

from botocore.exceptions import BotoCoreError, ClientError

from duplicate_iam_role.documents import decode_policy_document
from duplicate_iam_role.errors import PolicyDocumentError

logger = logging.getLogger(__name__)

INLINE = 'inline'
MANAGED = 'managed'


@dataclass(frozen=True)
class AttachFailure:
    kind: str
    policy: str
    reason: str

    def __str__(self):
        return f'{self.kind} policy {self.policy}: {self.reason}'


def replicate_inline_policies(iam_client, target_role_name: str, inline_policies):
    """
    Put each inline policy on the target role under the same name.

    :returns: a tuple of (names of the copied policies, list of AttachFailure)
    """
    copied = []
    failures = []
    for policy in inline_policies:
        try:
            policy_document = decode_policy_document(policy.document)
        except PolicyDocumentError as e:
            logger.warning('Skipping inline policy %s: %s', policy.name, e)
            failures.append(AttachFailure(INLINE, policy.name, str(e)))
            continue

        try:
            iam_client.put_role_policy(
                RoleName=target_role_name,
                PolicyName=policy.name,
                PolicyDocument=policy_document,
            )
        except (ClientError, BotoCoreError) as e:
            logger.warning('Failed to add inline policy %s to %s: %s', policy.name, target_role_name, e)
            failures.append(AttachFailure(INLINE, policy.name, str(e)))
            continue

        logger.info('Copied inline policy: %s', policy.name)
        copied.append(policy.name)

    return copied, failures


def replicate_managed_policies(iam_client, target_role_name: str, managed_policies):
    """
    Attach each managed policy to the target role.  The policies themselves
    are shared, only the attachment is created.

    :returns: a tuple of (attached policy ARNs, list of AttachFailure)
    """
    attached = []
    failures = []
    for policy in managed_policies:
        try:
            iam_client.attach_role_policy(RoleName=target_role_name, PolicyArn=policy.arn)
        except (ClientError, BotoCoreError) as e:
            logger.warning('Failed to attach managed policy %s to %s: %s', policy.arn, target_role_name, e)
            failures.append(AttachFailure(MANAGED, policy.arn, str(e)))
            continue

        logger.info('Attached: %s', policy.name or policy.arn)
        attached.append(policy.arn)

    return attached, failures
