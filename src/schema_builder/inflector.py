"""English inflection helpers for model, table and field names."""

import re

IRREGULARS = {
    "person": "people",
    "man": "men",
    "woman": "women",
    "child": "children",
    "mouse": "mice",
    "ox": "oxen",
}

UNCOUNTABLES = {"equipment", "information", "rice", "money", "species", "series", "fish", "sheep"}


def underscore(word: str) -> str:
    """Convert ``Admin::BlogPost`` to ``admin/blog_post``."""
    word = re.sub(r"::|\.", "/", word)
    word = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", word)
    word = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", word)
    return word.replace("-", "_").lower()


def camelize(word: str) -> str:
    """Convert ``line_items`` to ``LineItems`` and ``admin/post`` to ``Admin::Post``."""
    return "::".join(
        "".join(part[:1].upper() + part[1:] for part in segment.split("_"))
        for segment in word.split("/")
    )


def titleize(word: str) -> str:
    """Convert ``created_at`` to ``Created At``."""
    words = underscore(word).replace("/", " ").replace("_", " ").split()
    return " ".join(w[:1].upper() + w[1:] for w in words)


def pluralize(word: str) -> str:
    """Pluralize the last segment of a name."""
    head, _, last = word.rpartition("/")
    prefix = f"{head}/" if head else ""
    lower = last.lower()
    if not last or lower in UNCOUNTABLES:
        return word
    if lower in IRREGULARS:
        return prefix + IRREGULARS[lower]
    if re.search(r"[^aeiou]y$", lower):
        return prefix + last[:-1] + "ies"
    if re.search(r"(s|x|z|ch|sh)$", lower):
        return prefix + last + "es"
    return prefix + last + "s"


def singularize(word: str) -> str:
    """Singularize the last segment of a name."""
    head, _, last = word.rpartition("/")
    prefix = f"{head}/" if head else ""
    lower = last.lower()
    if lower in UNCOUNTABLES:
        return word
    for singular, plural in IRREGULARS.items():
        if lower == plural:
            return prefix + singular
    if lower.endswith("ies"):
        return prefix + last[:-3] + "y"
    if re.search(r"(ss|x|z|ch|sh)es$", lower):
        return prefix + last[:-2]
    if lower.endswith("s") and not lower.endswith("ss"):
        return prefix + last[:-1]
    return word


def tableize(class_name: str) -> str:
    """Convert ``Admin::BlogPost`` to ``admin/blog_posts``."""
    return pluralize(underscore(class_name))


def classify(table_name: str) -> str:
    """Convert ``blog_posts`` to ``BlogPost``."""
    return camelize(singularize(table_name))
