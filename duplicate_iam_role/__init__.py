"""Copy an IAM role, its trust policy and its policy attachments to a new role."""

from duplicate_iam_role.clone import CloneResult, clone_role
from duplicate_iam_role.errors import (
    CloneError,
    PaginationError,
    PolicyDocumentError,
    RoleCreateError,
    RoleReadError,
)

__version__ = '0.1.0'

__all__ = [
    'CloneError',
    'CloneResult',
    'PaginationError',
    'PolicyDocumentError',
    'RoleCreateError',
    'RoleReadError',
    'clone_role',
]
