import json
import re
from collections.abc import Mapping
from urllib.parse import unquote

from duplicate_iam_role.errors import PolicyDocumentError

# A '%' that doesn't start a two-digit hex escape.
_BAD_ESCAPE = re.compile(r'%(?![0-9A-Fa-f]{2})')


def decode_policy_document(document) -> str:
    """
    Return a policy document in the raw JSON form the IAM write APIs expect.

    IAM returns policy documents URL-encoded.  boto3 decodes the ones it can
    parse into a dict, and leaves the rest as the encoded string, so both
    forms are accepted here.  A '+' is left alone: the encoding is path-style,
    not form-style.

    :param document: the URL-encoded string or an already-decoded mapping
    :returns: the document as a JSON string
    :raises PolicyDocumentError: if the document can't be decoded
    """
    if isinstance(document, Mapping):
        return json.dumps(document, separators=(',', ':'), ensure_ascii=False)

    if not isinstance(document, str):
        raise PolicyDocumentError(f'Unexpected policy document type {type(document).__name__}')

    bad_escape = _BAD_ESCAPE.search(document)
    if bad_escape:
        raise PolicyDocumentError(f'Invalid URL escape {document[bad_escape.start():bad_escape.start() + 3]!r} '
                                  f'in policy document')

    try:
        return unquote(document, errors='strict')
    except UnicodeDecodeError as e:
        raise PolicyDocumentError(f'Policy document is not valid UTF-8 once decoded: {e}') from e
