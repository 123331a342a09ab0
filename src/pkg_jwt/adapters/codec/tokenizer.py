from ...domain.constants import SEGMENT_SEPARATOR
from ...domain.exceptions import MalformedTokenError
from ...domain.value_objects import TokenSegments


def split_token(token: str) -> TokenSegments:
    """
    Split a raw token on "." into its header, payload and signature.

    A token written as `header.payload.` (unsigned, trailing separator)
    yields an empty signature. No character-set checks happen here.

    Raises:
        MalformedTokenError: if the token does not have exactly 3 parts.
    """
    parts = token.split(SEGMENT_SEPARATOR)
    if len(parts) != 3:
        raise MalformedTokenError(len(parts))

    header, payload, signature = parts
    return TokenSegments(header=header, payload=payload, signature=signature)
