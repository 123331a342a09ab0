from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from ...domain.constants import ValidatedClaim
from ...domain.entities import HeaderView, PayloadView
from ...domain.exceptions import AlgorithmMismatchError, InvalidClaimError
from ...domain.value_objects import ClaimRequirement

# One entry per enforceable claim: claim kind -> typed accessor.
_CLAIM_ACCESSORS: Dict[ValidatedClaim, Callable[[PayloadView], Optional[str]]] = {
    ValidatedClaim.JWT_ID: lambda payload: payload.jwt_id,
    ValidatedClaim.SUBJECT: lambda payload: payload.subject,
}


def check_algorithm(header: HeaderView, expected_algorithm: str) -> None:
    """
    Raise AlgorithmMismatchError unless the header declares exactly the
    algorithm the caller intends to enforce.

    Must run before any signature is computed.
    """
    if header.algorithm != expected_algorithm:
        raise AlgorithmMismatchError(expected_algorithm, header.algorithm)


@dataclass(slots=True)
class ValidateClaimsUseCase:
    """
    Application use case for checking expected claim values against a
    decoded payload.

    Takes:
      - a PayloadView (already signature-checked)
      - an iterable of ClaimRequirement objects

    and raises InvalidClaimError on the first requirement that is not met.
    Time claims (`exp`, `nbf`, `iat`) are not enforced here.
    """

    def _check_requirement(self, payload: PayloadView, requirement: ClaimRequirement) -> None:
        actual = _CLAIM_ACCESSORS[requirement.claim](payload)
        if actual != requirement.expected:
            raise InvalidClaimError(requirement.claim.value)

    def execute(
            self,
            payload: PayloadView,
            requirements: Iterable[ClaimRequirement],
    ) -> PayloadView:
        """
        Raises:
            InvalidClaimError if any of the requirements are not satisfied.

        Returns:
            The same PayloadView if every requirement holds (for chaining).
        """
        for requirement in requirements:
            self._check_requirement(payload, requirement)

        return payload
