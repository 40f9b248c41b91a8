"""Çevrimdışı şifre güç analizi: entropi, karakter sınıfları, desen uyarıları.

Şifre hiçbir zaman loglanmaz, saklanmaz ya da ekrana basılmaz; rapordan
dışarı çıkan tek iz SHA-256 özetinin son 8 hex karakteridir.
"""

import enum
import hashlib
import logging
import math
import unicodedata
from collections import Counter
from dataclasses import dataclass

from keyforge.constants import (
    KEYBOARD_RUNS,
    MODERATE_MIN_CLASSES,
    MODERATE_MIN_ENTROPY,
    MODERATE_MIN_LEN,
    REFERENCE_TAIL,
    STRONG_MIN_CLASSES,
    STRONG_MIN_ENTROPY,
    STRONG_MIN_LEN,
    WARN_DATE_PATTERN,
    WARN_KEYBOARD_RUN,
    WARN_REPEATED,
    YEAR_PATTERNS,
)

logger = logging.getLogger(__name__)


class Verdict(str, enum.Enum):
    WEAK = "Weak"
    MODERATE = "Moderate"
    STRONG = "Strong"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AnalysisReport:
    length: int
    class_count: int
    entropy: float
    verdict: Verdict
    warnings: tuple[str, ...]
    reference: str


class PasswordAnalyzer:
    """Tek bir şifre için sezgisel güç raporu üretir."""

    @staticmethod
    def analyze(password: str) -> AnalysisReport:
        """Şifreyi analiz eder. Boş dahil her girdi için rapor döner."""
        length = len(password)
        classes = PasswordAnalyzer.char_classes(password)
        entropy = PasswordAnalyzer.shannon_entropy(password)
        verdict = PasswordAnalyzer.verdict(length, classes, entropy)

        warnings: list[str] = []
        if PasswordAnalyzer.has_keyboard_run(password):
            warnings.append(WARN_KEYBOARD_RUN)
        if PasswordAnalyzer.looks_like_date(password):
            warnings.append(WARN_DATE_PATTERN)
        if PasswordAnalyzer.repeats_first_char(password):
            warnings.append(WARN_REPEATED)

        digest = hashlib.sha256(password.encode("utf-8")).hexdigest()

        logger.debug("analyzed password of length %d: %s", length, verdict.value)
        return AnalysisReport(
            length=length,
            class_count=classes,
            entropy=entropy,
            verdict=verdict,
            warnings=tuple(warnings),
            reference=digest[-REFERENCE_TAIL:],
        )

    @staticmethod
    def shannon_entropy(password: str) -> float:
        """Karakter frekanslarına göre karakter başına bit (Shannon)."""
        if not password:
            return 0.0
        total = len(password)
        entropy = 0.0
        for count in Counter(password).values():
            p = count / total
            entropy -= p * math.log2(p)
        return entropy

    @staticmethod
    def char_classes(password: str) -> int:
        """Mevcut sınıf sayısı: küçük harf, büyük harf, rakam, sembol.

        Her karakter bu öncelik sırasıyla tam olarak bir sınıfa düşer.
        """
        seen: set[str] = set()
        for ch in password:
            category = unicodedata.category(ch)
            if category == "Ll":
                seen.add("lower")
            elif category == "Lu":
                seen.add("upper")
            elif category == "Nd":
                seen.add("digit")
            else:
                seen.add("symbol")
        return len(seen)

    @staticmethod
    def verdict(length: int, classes: int, entropy: float) -> Verdict:
        if (length >= STRONG_MIN_LEN and classes >= STRONG_MIN_CLASSES
                and entropy >= STRONG_MIN_ENTROPY):
            return Verdict.STRONG
        if (length >= MODERATE_MIN_LEN and classes >= MODERATE_MIN_CLASSES
                and entropy >= MODERATE_MIN_ENTROPY):
            return Verdict.MODERATE
        return Verdict.WEAK

    @staticmethod
    def has_keyboard_run(password: str) -> bool:
        lowered = password.lower()
        return any(run in lowered for run in KEYBOARD_RUNS)

    @staticmethod
    def looks_like_date(password: str) -> bool:
        lowered = password.lower()
        return any(year in lowered for year in YEAR_PATTERNS)

    @staticmethod
    def repeats_first_char(password: str) -> bool:
        """Yalnızca İLK karakterin art arda 3 kez geçip geçmediğine bakar.

        Genel bir tekrar tespiti değildir; ``"abccc"`` uyarı üretmez.
        """
        if len(password) < 3:
            return False
        return password[0] * 3 in password


def format_report(report: AnalysisReport) -> str:
    """Raporu düz metin olarak biçimlendirir (şifre içermez)."""
    lines = [
        f"Length: {report.length}",
        f"Classes: {report.class_count} (lower/upper/digit/symbol)",
        f"Entropy: {report.entropy:.2f} bits/char",
        f"Verdict: {report.verdict.value}",
    ]
    if report.warnings:
        lines.append("Warnings:")
        lines.extend(f"  - {w}" for w in report.warnings)
    lines.append(f"Reference: sha256(...)=...{report.reference}")
    return "\n".join(lines)
