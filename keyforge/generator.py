"""Kriptografik olarak güvenli rastgele şifre ve WEP anahtarı üretimi."""

import enum
import logging
import random
import secrets
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, TypeVar, runtime_checkable

from keyforge.constants import (
    CONSONANTS,
    DIGITS,
    EASY_DEFAULT_LENGTH,
    EASY_MIN_LENGTH,
    STRONG_DEFAULT_LENGTH,
    STRONG_MIN_LENGTH,
    STRONG_POOL,
    VOWELS,
    WEP_BYTES,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class GenerationError(RuntimeError):
    """Güvenli rastgele kaynak bayt sağlayamadığında fırlatılır."""


class GenerationKind(enum.Enum):
    """Üretilebilen değer türleri; değer, CLI alt komutunun adıdır."""

    EASY = "easy"
    STRONG = "strong"
    WEP40 = "64wep"
    WEP104 = "128wep"
    WEP232 = "256wep"

    @property
    def byte_count(self) -> Optional[int]:
        return WEP_BYTES.get(self.value)

    @property
    def min_length(self) -> Optional[int]:
        return _LENGTH_LIMITS.get(self, (None, None))[0]

    @property
    def default_length(self) -> Optional[int]:
        return _LENGTH_LIMITS.get(self, (None, None))[1]

    @property
    def is_wep(self) -> bool:
        return self.byte_count is not None


# (minimum, varsayılan) uzunluk; WEP türleri sabit bayt sayısı kullanır
_LENGTH_LIMITS: dict[GenerationKind, tuple[int, int]] = {
    GenerationKind.EASY: (EASY_MIN_LENGTH, EASY_DEFAULT_LENGTH),
    GenerationKind.STRONG: (STRONG_MIN_LENGTH, STRONG_DEFAULT_LENGTH),
}


@dataclass(frozen=True)
class GenerationRequest:
    """Tek bir üretim isteği: tür, (isteğe bağlı) uzunluk ve adet.

    ``kind`` metin olarak verilirse ``GenerationKind``'e çevrilir; bilinmeyen
    tür burada, yani sınırda ``ValueError`` ile reddedilir.
    """

    kind: GenerationKind
    length: Optional[int] = None
    count: int = 1

    def __post_init__(self) -> None:
        if not isinstance(self.kind, GenerationKind):
            object.__setattr__(self, "kind", GenerationKind(self.kind))

    @property
    def effective_length(self) -> Optional[int]:
        """Türün minimumuna sıkıştırılmış uzunluk (WEP için ``None``)."""
        if self.kind.is_wep:
            return None
        length = self.kind.default_length if self.length is None else self.length
        return max(length, self.kind.min_length)


# --- Rastgele kaynaklar ----------------------------------------------------


@runtime_checkable
class RandomSource(Protocol):
    """Üreticinin kullandığı kaynak arayüzü: sapmasız aralık ve ham bayt."""

    def randbelow(self, n: int) -> int: ...

    def token_bytes(self, n: int) -> bytes: ...


class SecureRandomSource:
    """İşletim sistemi CSPRNG'si (``secrets``). Thread-safe ve durumsuz.

    ``randbelow`` ret örneklemesi kullanır; modulo sapması yoktur.
    """

    def randbelow(self, n: int) -> int:
        return secrets.randbelow(n)

    def token_bytes(self, n: int) -> bytes:
        return secrets.token_bytes(n)


class InsecureRandomSource:
    """Güvenli OLMAYAN yedek kaynak (Mersenne Twister).

    Sadece ``allow_insecure_fallback=True`` ile, güvenli kaynak hata
    verdiğinde kullanılır. Her çağrı için yeni örnek oluşturulur.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def randbelow(self, n: int) -> int:
        return self._rng.randrange(n)

    def token_bytes(self, n: int) -> bytes:
        return self._rng.randbytes(n)


def _choice(pool: str, source: RandomSource) -> str:
    return pool[source.randbelow(len(pool))]


# --- Üretici ---------------------------------------------------------------


class KeyGenerator:
    """Kolay/güçlü şifre ve WEP anahtarı üretimi.

    Tekil üretim fonksiyonları kaynak hatasını (``OSError`` ya da
    ``NotImplementedError``) olduğu gibi yukarı iletir; toplu fonksiyonlar hata
    politikasını uygular.
    """

    @staticmethod
    def generate_easy(length: int = EASY_DEFAULT_LENGTH,
                      source: Optional[RandomSource] = None) -> str:
        """Telaffuz edilebilir şifre: sessiz/sesli harf, her 3. karakter rakam.

        Konum ``i`` için havuz: ``i % 3 == 2`` ise rakam, değilse çift
        konumda sessiz, tek konumda sesli harf. Uzunluk en az 4'tür.
        """
        source = source or SecureRandomSource()
        length = max(length, EASY_MIN_LENGTH)

        chars: list[str] = []
        for i in range(length):
            if i % 3 == 2:
                pool = DIGITS
            elif i % 2 == 0:
                pool = CONSONANTS
            else:
                pool = VOWELS
            chars.append(_choice(pool, source))
        return "".join(chars)

    @staticmethod
    def generate_strong(length: int = STRONG_DEFAULT_LENGTH,
                        source: Optional[RandomSource] = None) -> str:
        """Harf, rakam ve sembol havuzundan eşit olasılıklı şifre (en az 8)."""
        source = source or SecureRandomSource()
        length = max(length, STRONG_MIN_LENGTH)
        return "".join(_choice(STRONG_POOL, source) for _ in range(length))

    @staticmethod
    def generate_wep_key(byte_count: int,
                         source: Optional[RandomSource] = None) -> str:
        """``byte_count`` rastgele baytı küçük harf hex olarak döndürür."""
        if byte_count <= 0:
            raise ValueError(f"byte count must be positive, got: {byte_count}")
        source = source or SecureRandomSource()
        return source.token_bytes(byte_count).hex()

    @staticmethod
    def generate_one(kind: GenerationKind, length: Optional[int] = None,
                     source: Optional[RandomSource] = None) -> str:
        """Türüne göre tek bir değer üretir."""
        if kind.is_wep:
            return KeyGenerator.generate_wep_key(kind.byte_count, source)
        if length is None:
            length = kind.default_length
        if kind is GenerationKind.EASY:
            return KeyGenerator.generate_easy(length, source)
        return KeyGenerator.generate_strong(length, source)

    @staticmethod
    def generate_count(request: GenerationRequest,
                       allow_insecure_fallback: bool = False,
                       source: Optional[RandomSource] = None) -> list[str]:
        """``request.count`` adet bağımsız değer üretir (tekilleştirme yok).

        ``count <= 0`` boş liste döndürür.
        """
        if request.count <= 0:
            return []

        length = request.effective_length

        def build(src: RandomSource) -> list[str]:
            return [
                KeyGenerator.generate_one(request.kind, length, src)
                for _ in range(request.count)
            ]

        values = _run_with_policy(
            build, allow_insecure_fallback, source,
            what=f"{request.count} {request.kind.value} value(s)",
        )
        logger.debug("generated %d %s value(s)", len(values), request.kind.value)
        return values

    @staticmethod
    def generate_set(count: int, allow_insecure_fallback: bool = False,
                     source: Optional[RandomSource] = None) -> dict[str, list[str]]:
        """Her türden ``count`` adet değer içeren sıralı küme üretir.

        Anahtar sırası: easy (12), strong (20), 64wep, 128wep, 256wep.
        """
        count = max(count, 0)

        def build(src: RandomSource) -> dict[str, list[str]]:
            return {
                kind.value: [
                    KeyGenerator.generate_one(kind, None, src)
                    for _ in range(count)
                ]
                for kind in GenerationKind
            }

        value_set = _run_with_policy(
            build, allow_insecure_fallback, source,
            what=f"a set of {count} value(s) per kind",
        )
        logger.debug("generated set with %d value(s) per kind", count)
        return value_set


def _run_with_policy(build: Callable[[RandomSource], T],
                     allow_insecure_fallback: bool,
                     source: Optional[RandomSource], what: str) -> T:
    """``build``'i güvenli kaynakla çalıştırır; hata politikasını uygular.

    Varsayılan: kaynak hatası ``GenerationError`` olur. Açık onay varsa tüm
    çağrı baştan, güvenli olmayan kaynakla tekrarlanır; iki kaynağın çıktısı
    asla karışmaz.
    """
    try:
        return build(source or SecureRandomSource())
    except (OSError, NotImplementedError) as exc:
        if not allow_insecure_fallback:
            raise GenerationError(
                f"secure random source failed while generating {what}: {exc}"
            ) from exc
        logger.warning(
            "secure random source failed (%s); regenerating %s with the "
            "NON-SECURE fallback generator", exc, what,
        )
        return build(InsecureRandomSource())
