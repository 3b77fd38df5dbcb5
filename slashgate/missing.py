from __future__ import annotations

from typing import Any, Literal, TypeGuard


__all__ = (
    'MISSING',
    'Nullable',
    'Optional',
    'is_not_missing',
)


class _MissingType:
    def __bool__(self) -> Literal[False]:
        return False

    def __repr__(self) -> str:
        return 'MISSING'

    def __copy__(self) -> _MissingType:
        return self

    def __deepcopy__(
        self,
        _: Any  # noqa: ANN401
    ) -> _MissingType:
        return self


def is_not_missing[T](value: T | _MissingType) -> TypeGuard[T]:
    return not isinstance(value, _MissingType)


MISSING = _MissingType()

type Optional[T] = T | _MissingType
type Nullable[T] = T | None
