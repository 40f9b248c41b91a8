"""Üretilen değerlerin düz metin ya da JSON olarak biçimlendirilmesi."""

import json

from keyforge.generator import GenerationKind


def format_values(values: list[str], as_json: bool = False) -> str:
    """Değerleri satır satır ya da JSON dizisi olarak döndürür."""
    if not values:
        raise ValueError("no results to print")
    if as_json:
        return json.dumps(values, indent=2, ensure_ascii=False)
    return "\n".join(values)


def format_set(value_set: dict[str, list[str]], as_json: bool = False) -> str:
    """Küme çıktısı: ``== tür ==`` başlıklı bölümler ya da JSON nesnesi.

    Bölüm sırası her zaman easy, strong, 64wep, 128wep, 256wep'tir.
    """
    ordered = {
        kind.value: list(value_set.get(kind.value, []))
        for kind in GenerationKind
    }
    if as_json:
        return json.dumps(ordered, indent=2, ensure_ascii=False)

    sections: list[str] = []
    for name, values in ordered.items():
        sections.append("\n".join([f"== {name} ==", *values]))
    # Bölümler arasında tek boş satır
    return "\n\n".join(sections)
