"""Translator settings read from the environment.

``MOTEXT_BASE_PATH``  directory holding ``<locale>/<domain>.mo`` catalogs
``MOTEXT_LOCALE``     default locale, e.g. ``de_DE``
``MOTEXT_DOMAIN``     default domain (``main``)
``MOTEXT_DEBUG``      ``1``/``true``/``yes`` to raise catalog errors
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from motext.translation.translator import DEFAULT_DOMAIN, Translator

ENV_PREFIX = "MOTEXT_"
_TRUTHY = {"1", "true", "yes", "on"}


def _flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in _TRUTHY


@dataclass
class Settings:
    base_path: Path = Path("locale")
    locale: str = "en_US"
    domain: str = DEFAULT_DOMAIN
    debug: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Settings:
        """Build settings from ``MOTEXT_*`` variables, keeping defaults for the rest."""
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            base_path=Path(env.get(f"{ENV_PREFIX}BASE_PATH") or defaults.base_path),
            locale=env.get(f"{ENV_PREFIX}LOCALE") or defaults.locale,
            domain=env.get(f"{ENV_PREFIX}DOMAIN") or defaults.domain,
            debug=_flag(env.get(f"{ENV_PREFIX}DEBUG")),
        )

    def translator(self) -> Translator:
        return Translator(self.locale, self.base_path, debug=self.debug)
