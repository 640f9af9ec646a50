import logging

from botocore.exceptions import BotoCoreError, ClientError

from duplicate_iam_role.documents import decode_policy_document
from duplicate_iam_role.errors import RoleCreateError
from duplicate_iam_role.snapshot import RoleSnapshot

logger = logging.getLogger(__name__)


def build_create_role_request(snapshot: RoleSnapshot, target_role_name: str) -> dict:
    """
    Build CreateRole parameters that copy a source role under a new name.

    The trust policy is decoded from its URL-encoded form, since CreateRole
    takes the raw document.  Optional fields the source doesn't have are left
    out of the request, including the permissions boundary.

    :raises PolicyDocumentError: if the trust policy can't be decoded
    """
    request = {
        'Path': snapshot.path,
        'RoleName': target_role_name,
        'AssumeRolePolicyDocument': decode_policy_document(snapshot.trust_policy_document),
        'MaxSessionDuration': snapshot.max_session_duration,
    }
    if snapshot.description is not None:
        request['Description'] = snapshot.description
    if snapshot.tags:
        request['Tags'] = [dict(tag) for tag in snapshot.tags]
    if snapshot.permissions_boundary_arn:
        request['PermissionsBoundary'] = snapshot.permissions_boundary_arn

    return request


def create_role(iam_client, snapshot: RoleSnapshot, target_role_name: str) -> dict:
    request = build_create_role_request(snapshot, target_role_name)
    try:
        role = iam_client.create_role(**request)['Role']
    except (ClientError, BotoCoreError) as e:
        raise RoleCreateError(f"Failed to create role '{target_role_name}': {e}") from e

    logger.info('Created role %s (%s)', target_role_name, role.get('Arn'))
    return role
