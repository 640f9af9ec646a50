import logging

from botocore.exceptions import BotoCoreError, ClientError

from duplicate_iam_role.errors import PaginationError

logger = logging.getLogger(__name__)


def collect_pages(client, operation_name: str, result_key: str, **params) -> list:
    """
    Page through an IAM listing operation with the client's paginator and
    return every item from every page.

    :param client: the boto3 client, e.g. an IAM client
    :param operation_name: the operation to page through, e.g. ``list_role_policies``
    :param result_key: the key holding the page's items, e.g. ``PolicyNames``
    :param params: request parameters sent with every page
    :returns: the accumulated items, in the order the service returned them
    :raises PaginationError: if any page fails, or the last page is still truncated
    """
    items = []
    page = {}
    try:
        paginator = client.get_paginator(operation_name)
        for page in paginator.paginate(**params):
            items.extend(page.get(result_key, []))
            logger.debug('%s returned %d %s so far', operation_name, len(items), result_key)
    except (ClientError, BotoCoreError) as e:
        raise PaginationError(f'Failed to list {result_key} with {operation_name}: {e}') from e

    # The paginator stops when there is no Marker, even if the page said
    # there were more results.
    if page.get('IsTruncated'):
        raise PaginationError(f'{operation_name} returned a truncated page of {result_key} without a Marker')

    return items
