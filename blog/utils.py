# blog/utils.py
import re

_TRANSLIT = {
    'а': 'a', 'б': 'b', 'в': 'v', 'г': 'g', 'д': 'd', 'е': 'e', 'ё': 'yo',
    'ж': 'zh', 'з': 'z', 'и': 'i', 'й': 'y', 'к': 'k', 'л': 'l', 'м': 'm',
    'н': 'n', 'о': 'o', 'п': 'p', 'р': 'r', 'с': 's', 'т': 't', 'у': 'u',
    'ф': 'f', 'х': 'h', 'ц': 'ts', 'ч': 'ch', 'ш': 'sh', 'щ': 'sch',
    'ъ': '', 'ы': 'y', 'ь': '', 'э': 'e', 'ю': 'yu', 'я': 'ya',
    ' ': '-', '_': '-',
}


def transliterate_slug(value, fallback: str = "post", max_length: int = 180) -> str:
    """
    Slug с транслитерацией кириллицы: только латиница, цифры и дефис.
    """
    if not value:
        return fallback

    text = "".join(_TRANSLIT.get(ch, ch) for ch in str(value).lower())
    slug = re.sub(r'[^a-zA-Z0-9\-_]', '', text)
    slug = re.sub(r'[-_]+', '-', slug).strip('-')

    return (slug or fallback)[:max_length]


def unique_slug(instance, value, fallback: str, max_length: int) -> str:
    """
    Подбирает свободный slug для instance: base, base-2, base-3, ...
    Запас по длине оставляем под суффикс.
    """
    model = type(instance)
    base = transliterate_slug(value, fallback=fallback, max_length=max_length - 10)
    slug = base
    i = 2
    while model.objects.filter(slug=slug).exclude(pk=instance.pk).exists():
        slug = f"{base}-{i}"
        i += 1
    return slug
