"""Uygulama sabitleri: karakter havuzları, analiz eşikleri, genel ayarlar."""

import string

APP_NAME = "KeyForge"
APP_TAGLINE = "Forged in fire, cooled in entropy"
VERSION = "0.1.0"

# --- Karakter havuzları --------------------------------------------------

VOWELS = "aeiou"
CONSONANTS = "bcdfghjklmnpqrstvwxyz"
DIGITS = string.digits
SYMBOLS = "!@#$%^&*()-_=+[]{};:,.<>/?~"
STRONG_POOL = string.ascii_lowercase + string.ascii_uppercase + DIGITS + SYMBOLS

EASY_MIN_LENGTH = 4
EASY_DEFAULT_LENGTH = 12
STRONG_MIN_LENGTH = 8
STRONG_DEFAULT_LENGTH = 20

# WEP "64/128/256 bit" anahtarlar: 24 bit IV hariç gerçek anahtar baytları
WEP_BYTES: dict[str, int] = {
    "64wep": 5,
    "128wep": 13,
    "256wep": 29,
}

SET_DEFAULT_COUNT = 4

# --- Analiz eşikleri -----------------------------------------------------

STRONG_MIN_LEN = 16
STRONG_MIN_CLASSES = 3
STRONG_MIN_ENTROPY = 3.5

MODERATE_MIN_LEN = 12
MODERATE_MIN_CLASSES = 2
MODERATE_MIN_ENTROPY = 3.0

KEYBOARD_RUNS: tuple[str, ...] = ("qwerty", "asdf", "zxcv", "12345", "0987")
YEAR_PATTERNS: tuple[str, ...] = tuple(str(y) for y in range(2020, 2026))

WARN_KEYBOARD_RUN = "Avoid keyboard runs (e.g., qwerty, asdf)."
WARN_DATE_PATTERN = "Avoid dates or year patterns."
WARN_REPEATED = "Avoid repeated characters/sequences."

REFERENCE_TAIL = 8

# --- Yapılandırma ----------------------------------------------------------

CONFIG_FILENAME = ".keyforge.yaml"
CONFIG_KEYS: tuple[str, ...] = ("model", "openai_api_key")
ENV_PREFIX = "KEYFORGE_"
