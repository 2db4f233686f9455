"""Locale-aware number rendering."""

from __future__ import annotations

import locale
import logging
from collections.abc import Iterable

logger = logging.getLogger(__name__)


def setup_locale() -> None:
    """Adopt the environment's numeric locale (LC_NUMERIC / LANG)."""
    try:
        locale.setlocale(locale.LC_NUMERIC, "")
    except locale.Error as e:
        logger.debug("Keeping C numeric locale: %s", e)


def format_number(value: float, precision: int = 6, use_locale: bool = True) -> str:
    """Render *value* in ``%g`` style with *precision* significant digits.

    With ``use_locale`` the current ``LC_NUMERIC`` decimal point is used.
    """
    if use_locale:
        return locale.format_string("%.*g", (precision, value))
    return "%.*g" % (precision, value)


def format_stack(stack: Iterable[float], precision: int = 6, use_locale: bool = True) -> str:
    """Render stack contents bottom first, space separated."""
    return " ".join(format_number(v, precision, use_locale) for v in stack)
