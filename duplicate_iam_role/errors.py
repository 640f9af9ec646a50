class CloneError(Exception):
    pass


class RoleReadError(CloneError):
    pass


class PaginationError(CloneError):
    pass


class PolicyDocumentError(CloneError):
    pass


class RoleCreateError(CloneError):
    pass
