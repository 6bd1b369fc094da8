from __future__ import annotations

from logmask.application.masking.masker import default_masker

__all__ = ["LogMask"]


class LogMask:
    """Mixin: ``str()`` and ``repr()`` render the instance masked.

    Subclasses keep a ``__repr__`` they define in their own body; otherwise
    the masked form is installed before ``@dataclass`` or pydantic get a
    chance to generate one.
    """

    __slots__ = ()

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        if "__repr__" not in cls.__dict__:
            cls.__repr__ = LogMask.__str__  # type: ignore[method-assign]

    def __str__(self) -> str:
        return default_masker().mask(self)
