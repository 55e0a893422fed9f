"""
Rule-based singularization for ingredient names and unit tokens.

Only the last word of a phrase is singularized ("garlic cloves" ->
"garlic clove"). The rules are idempotent: singularizing a singular word
returns it unchanged.
"""
import re

# Irregular plurals seen in recipes
IRREGULAR_SINGULARS = {
    "leaves": "leaf",
    "loaves": "loaf",
    "halves": "half",
    "knives": "knife",
    "calves": "calf",
    "shelves": "shelf",
    "wolves": "wolf",
    "thieves": "thief",
    "children": "child",
    "geese": "goose",
    "teeth": "tooth",
    "feet": "foot",
    "mice": "mouse",
    "people": "person",
    "cookies": "cookie",
    "pies": "pie",
    "ties": "tie",
    "brownies": "brownie",
    "movies": "movie",
    "anchovies": "anchovy",
    "chilies": "chili",
    "smoothies": "smoothie",
    "veggies": "veggie",
    "menus": "menu",
    "tofus": "tofu",
    "emus": "emu",
    # Singulars ending in -che
    "quiches": "quiche",
    "brioches": "brioche",
    "ganaches": "ganache",
    "cloches": "cloche",
    "niches": "niche",
}

# Words that are the same in singular and plural, or end in "s" when singular
UNCOUNTABLE = {
    "rice", "fish", "sheep", "deer", "series", "species", "news",
    "molasses", "hummus", "couscous", "asparagus", "swiss", "grits",
    "oats", "greens", "bass", "gras", "schnapps", "iris", "pastis",
}

_RULES = [
    (re.compile(r"(?i)(matr|vert|ind)ices$"), r"\1ix"),
    (re.compile(r"(?i)([^aeiou])ies$"), r"\1y"),
    (re.compile(r"(?i)(ss|sh|ch|x|z)es$"), r"\1"),
    (re.compile(r"(?i)(tomato|potato|echo|hero|mango)es$"), r"\1"),
    (re.compile(r"(?i)([^s])is$"), r"\1i"),
    (re.compile(r"(?i)([^sui])s$"), r"\1"),
]

_TRAILING_WORD = re.compile(r"([A-Za-z]+)(\W*)$")


def singularize(word: str) -> str:
    """
    Return the singular form of a single word.

    Examples:
        >>> singularize("tomatoes")
        'tomato'
        >>> singularize("tbsps")
        'tbsp'
        >>> singularize("glass")
        'glass'
    """
    lower = word.lower()
    if len(word) < 3 or lower in UNCOUNTABLE:
        return word
    if lower in IRREGULAR_SINGULARS:
        singular = IRREGULAR_SINGULARS[lower]
        return singular.capitalize() if word[0].isupper() else singular
    for pattern, replacement in _RULES:
        if pattern.search(word):
            return pattern.sub(replacement, word)
    return word


def singularize_phrase(phrase: str) -> str:
    """Singularize the last word of a phrase, keeping everything else as written."""
    match = _TRAILING_WORD.search(phrase)
    if not match:
        return phrase
    start, end = match.span(1)
    return phrase[:start] + singularize(match.group(1)) + phrase[end:]
