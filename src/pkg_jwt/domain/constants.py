from enum import Enum


class HeaderClaim(str, Enum):
    ALGORITHM = "alg"
    TYPE = "typ"
    CONTENT_TYPE = "cty"
    KEY_ID = "kid"


class PayloadClaim(str, Enum):
    ISSUER = "iss"
    SUBJECT = "sub"
    AUDIENCE = "aud"
    EXPIRES_AT = "exp"
    NOT_BEFORE = "nbf"
    ISSUED_AT = "iat"
    JWT_ID = "jti"


class ValidatedClaim(str, Enum):
    """Payload claims that can be enforced through expected claims."""
    JWT_ID = "jti"
    SUBJECT = "sub"


class Segment(str, Enum):
    HEADER = "header"
    PAYLOAD = "payload"
    SIGNATURE = "signature"


SEGMENT_SEPARATOR = "."
