"""Identifier derivation from free-text scenario titles."""

import re

SHORT_NAME_MAX_LENGTH = 25
FALLBACK_PREFIX_LENGTH = 15
GENERIC_FEATURE = "genericFeature"

STOPWORDS = frozenset(
    {
        "a", "an", "the", "of", "in", "on", "at", "for", "with", "and", "or",
        "but", "is", "are", "was", "were", "be", "been", "being", "have", "has",
        "had", "do", "does", "did", "not", "no", "this", "that", "these",
        "those", "from", "to", "by", "as", "it", "its", "into", "through",
        "during", "before", "after", "above", "below", "up", "down", "out",
        "off", "over", "under", "again", "further", "then", "once", "here",
        "there", "when", "where", "why", "how", "all", "any", "both", "each",
        "few", "more", "most", "other", "some", "such", "nor", "only", "own",
        "same", "so", "than", "too", "very", "s", "t", "can", "will", "just",
        "don", "should", "now",
        # automation vocabulary that says nothing about the feature
        "verify", "check", "ensure", "manage", "test", "scenario", "flow",
        "functionality", "page", "module", "system",
    }
)

_NON_ALNUM_SPACE = re.compile(r"[^a-zA-Z0-9 ]")
_NON_LOWER_ALNUM_SPACE = re.compile(r"[^a-z0-9 ]")


def to_pascal_case(s: str = "") -> str:
    """Convert a string to PascalCase ("hello world" -> "HelloWorld").

    Characters other than ASCII letters, digits and spaces are dropped; the
    rest of each word keeps its case.
    """
    words = [w for w in _NON_ALNUM_SPACE.sub("", s).split(" ") if w]
    return "".join(w[0].upper() + w[1:] for w in words)


def to_camel_case(s: str = "") -> str:
    """Convert a string to camelCase ("Hello World" -> "helloWorld")."""
    pascal = to_pascal_case(s)
    return pascal[:1].lower() + pascal[1:]


def to_short_feature_name(title: str = "") -> str:
    """Derive a compact, file-safe feature name from a scenario title.

    Short and common words are dropped and the remaining keywords are
    Pascal-cased and concatenated while the result stays under
    ``SHORT_NAME_MAX_LENGTH`` characters. The mapping is lossy: different titles
    can produce the same name.

    Args:
        title: The full scenario title.

    Returns:
        A camelCase name, never empty.
    """
    words = [
        w
        for w in _NON_LOWER_ALNUM_SPACE.sub("", title.lower()).split(" ")
        if len(w) > 2 and w not in STOPWORDS
    ]

    if not words:
        return to_camel_case(title[:FALLBACK_PREFIX_LENGTH]) or GENERIC_FEATURE

    short_name = ""
    for word in words:
        next_word = to_pascal_case(word)
        if len(short_name) + len(next_word) < SHORT_NAME_MAX_LENGTH:
            short_name += next_word
        else:
            if short_name == "":
                short_name = word[:SHORT_NAME_MAX_LENGTH]
            break

    return to_camel_case(short_name) or to_camel_case(words[0]) or GENERIC_FEATURE
