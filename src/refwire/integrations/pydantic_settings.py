from __future__ import annotations

import importlib
import warnings
from typing import Any

_PYDANTIC_V1_WARNING_PATTERN = (
    r"Core Pydantic V1 functionality isn't compatible with Python 3\.14 or greater\."
)


def _load_pydantic_settings_base() -> type[Any] | None:
    return _load_base_settings("pydantic_settings")


def _load_pydantic_v1_base() -> type[Any] | None:
    with warnings.catch_warnings():
        warnings.filterwarnings(
            "ignore",
            message=_PYDANTIC_V1_WARNING_PATTERN,
            category=UserWarning,
        )
        return _load_base_settings("pydantic.v1")


def _load_base_settings(module_name: str) -> type[Any] | None:
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None
    base_settings = getattr(module, "BaseSettings", None)
    if isinstance(base_settings, type):
        return base_settings
    return None


def _build_settings_bases() -> tuple[type[Any], ...]:
    return tuple(
        candidate
        for candidate in (_load_pydantic_settings_base(), _load_pydantic_v1_base())
        if candidate is not None
    )


SETTINGS_BASES: tuple[type[Any], ...] = _build_settings_bases()


def is_pydantic_settings_instance(candidate: object) -> bool:
    """Return whether an object is an instance of a supported Pydantic settings model.

    Both ``pydantic_settings.BaseSettings`` and the legacy
    ``pydantic.v1.BaseSettings`` are recognized when installed. Without
    Pydantic this function returns ``False`` for every candidate.

    Args:
        candidate: Object to test.

    """
    return isinstance(candidate, SETTINGS_BASES) if SETTINGS_BASES else False


def settings_parameters(settings: Any) -> dict[str, Any]:
    """Turn a settings object into a container configuration mapping.

    Every settings field becomes a configuration key, so ``%field_name%``
    placeholders resolve to the field values.

    Args:
        settings: A Pydantic settings instance.

    """
    model_dump = getattr(settings, "model_dump", None)
    if model_dump is not None:
        return dict(model_dump())
    return dict(settings.dict())


__all__ = [
    "SETTINGS_BASES",
    "is_pydantic_settings_instance",
    "settings_parameters",
]
