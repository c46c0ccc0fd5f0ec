from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class APIError(Exception):
    status_code: int
    code: str
    message: str
    details: dict[str, Any] | None = None


class InvariantViolation(Exception):
    code = "invariant_violation"


class PositionNotSettable(InvariantViolation):
    code = "position_not_settable"


class EmptyPathError(InvariantViolation):
    code = "empty_path"


class HeterogeneousElementsError(InvariantViolation):
    code = "heterogeneous_elements"


class SpacingMismatchError(InvariantViolation):
    code = "spacing_mismatch"


class BuilderStateError(InvariantViolation):
    code = "builder_state"


def invariant_to_api_error(exc: InvariantViolation, status_code: int = 422) -> APIError:
    return APIError(status_code=status_code, code=exc.code, message=str(exc))
