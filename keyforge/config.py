"""Kullanıcı yapılandırması: ``~/.keyforge.yaml`` yükleme/kaydetme.

Tanınan anahtarlar ``model`` ve ``openai_api_key``'dir. ``KEYFORGE_MODEL`` ve
``KEYFORGE_OPENAI_API_KEY`` ortam değişkenleri okumada dosyayı ezer ama
dosyaya asla yazılmaz.
"""

import logging
import os
import subprocess
from typing import Mapping, Optional

import yaml

from keyforge.constants import CONFIG_FILENAME, CONFIG_KEYS, ENV_PREFIX

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Yapılandırma okunamadı, geçersiz ya da bilinmeyen anahtar."""


def default_config_path() -> str:
    return os.path.join(os.path.expanduser("~"), CONFIG_FILENAME)


def redact(secret: str) -> str:
    """Gizli değeri ``abc…xyz`` biçiminde kısaltır (6 karakterden uzunsa)."""
    if len(secret) > 6:
        return secret[:3] + "…" + secret[-3:]
    return secret


class ConfigManager:
    """Düz anahtar-değer YAML belgesi; ``set`` çağrısında diske yazılır."""

    def __init__(self, path: Optional[str] = None,
                 environ: Optional[Mapping[str, str]] = None):
        self._path = path or default_config_path()
        self._environ = os.environ if environ is None else environ
        self._data: dict[str, str] = {}
        self._loaded_from_file = False

    @property
    def path(self) -> str:
        return self._path

    @property
    def file_exists(self) -> bool:
        return self._loaded_from_file

    # --- Yükleme / kaydetme ------------------------------------------------

    def load(self) -> "ConfigManager":
        """Dosyayı okur; dosya yoksa boş yapılandırma ile devam eder."""
        if not os.path.exists(self._path):
            logger.debug("config file %s not found, using empty config", self._path)
            self._data = {}
            self._loaded_from_file = False
            return self

        try:
            with open(self._path, "r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"cannot read config file {self._path}: {exc}") from exc

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigError(f"config file {self._path} must contain a mapping")

        self._data = {str(k): "" if v is None else str(v) for k, v in raw.items()}
        self._loaded_from_file = True
        logger.debug("loaded config from %s", self._path)
        return self

    def save(self) -> None:
        """Dosya değerlerini yazar; izinleri sadece sahibine kısıtlar."""
        directory = os.path.dirname(self._path)
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            # Dosya ilk andan itibaren 0600 ile oluşturulur
            fd = os.open(self._path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                yaml.safe_dump(self._data, fh, default_flow_style=False,
                               allow_unicode=True)
        except OSError as exc:
            raise ConfigError(f"cannot write config file {self._path}: {exc}") from exc
        self._restrict_file_permissions(self._path)
        self._loaded_from_file = True
        logger.debug("saved config to %s", self._path)

    @staticmethod
    def _restrict_file_permissions(path: str) -> None:
        """API anahtarı içerebilir: sadece sahibine okuma/yazma izni."""
        try:
            if os.name == "nt":
                subprocess.run(
                    ["icacls", path, "/inheritance:r", "/grant:r",
                     f"{os.environ.get('USERNAME', '')}:(R,W)"],
                    capture_output=True, timeout=5,
                )
            else:
                os.chmod(path, 0o600)
        except (OSError, subprocess.TimeoutExpired) as exc:
            logger.warning("could not restrict permissions on %s: %s", path, exc)

    # --- Erişim ------------------------------------------------------------

    @staticmethod
    def _check_key(key: str) -> None:
        if key not in CONFIG_KEYS:
            raise ConfigError(
                f"unknown config key {key!r} (expected one of: {', '.join(CONFIG_KEYS)})"
            )

    def get(self, key: str) -> str:
        """Ortam değişkeni varsa onu, yoksa dosya değerini döndürür."""
        self._check_key(key)
        env_value = self._environ.get(ENV_PREFIX + key.upper())
        if env_value:
            return env_value
        return self._data.get(key, "")

    def set(self, key: str, value: str) -> None:
        self._check_key(key)
        self._data[key] = value
        self.save()

    def as_dict(self) -> dict[str, str]:
        return {key: self.get(key) for key in CONFIG_KEYS}
