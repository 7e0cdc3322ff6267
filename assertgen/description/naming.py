"""
Naming conventions shared by the introspector and the synthesizer:
getter / predicate prefixes, their negations and the wording used in
generated javadoc and error messages.
"""
import re
from typing import Optional, Tuple

GET_PREFIX = "get"

# prefix -> negated prefix (both directions)
PREDICATE_PREFIXES = {
    "is": "isNot",
    "isNot": "is",
    "was": "wasNot",
    "wasNot": "was",
    "can": "cannot",
    "cannot": "can",
    "should": "shouldNot",
    "shouldNot": "should",
    "will": "willNot",
    "willNot": "will",
    "has": "doesNotHave",
    "doesNotHave": "has",
}

PREDICATE_FOR_JAVADOC = {
    "is": "is",
    "isNot": "is not",
    "was": "was",
    "wasNot": "was not",
    "can": "can",
    "cannot": "cannot",
    "should": "should",
    "shouldNot": "should not",
    "will": "will",
    "willNot": "will not",
    "has": "has",
    "doesNotHave": "does not have",
}

PREDICATE_FOR_ERROR_MESSAGE_PART2 = {
    "is": "is not",
    "isNot": "is",
    "was": "was not",
    "wasNot": "was",
    "can": "cannot",
    "cannot": "can",
    "should": "should not",
    "shouldNot": "should",
    "will": "will not",
    "willNot": "will",
    "has": "does not have",
    "doesNotHave": "has",
}

# longest first so that "isNot" wins over "is"
_PREFIXES_BY_LENGTH = sorted(PREDICATE_PREFIXES, key=len, reverse=True)

JAVA_KEYWORDS = frozenset({
    "abstract", "assert", "boolean", "break", "byte", "case", "catch", "char", "class", "const",
    "continue", "default", "do", "double", "else", "enum", "extends", "false", "final", "finally",
    "float", "for", "goto", "if", "implements", "import", "instanceof", "int", "interface", "long",
    "native", "new", "null", "package", "private", "protected", "public", "return", "short",
    "static", "strictfp", "super", "switch", "synchronized", "this", "throw", "throws", "transient",
    "true", "try", "void", "volatile", "while",
})


def capitalize(s: str) -> str:
    return s[:1].upper() + s[1:]


def uncapitalize(s: str) -> str:
    return s[:1].lower() + s[1:]


def camel_case_to_words(s: str) -> str:
    """"BestPlayer" -> "best player"."""
    return re.sub(r"(?<!^)(?=[A-Z])", " ", s).lower()


def _starts_with_prefix(name: str, prefix: str) -> bool:
    # isRookie, is_id and is$count all qualify, island does not
    return name.startswith(prefix) and len(name) > len(prefix) and not name[len(prefix)].islower()


def predicate_prefix(name: str) -> Optional[str]:
    for prefix in _PREFIXES_BY_LENGTH:
        if _starts_with_prefix(name, prefix):
            return prefix
    return None


def is_predicate(name: str) -> bool:
    return predicate_prefix(name) is not None


def is_standard_getter(name: str) -> bool:
    return _starts_with_prefix(name, GET_PREFIX)


def is_getter_name(name: str) -> bool:
    return is_standard_getter(name) or is_predicate(name)


def property_name_of(name: str) -> str:
    """
    Strip the getter / predicate prefix: getName -> name, isRookie -> rookie,
    doesNotHaveFun -> fun. Names without a known prefix are returned as is.
    """
    prefix = predicate_prefix(name)
    if prefix is None and is_standard_getter(name):
        prefix = GET_PREFIX
    if prefix is None:
        return name
    return uncapitalize(name[len(prefix):])


def split_predicate(predicate: str) -> Tuple[str, str]:
    """isRookie -> ("is", "Rookie")."""
    prefix = predicate_prefix(predicate)
    if prefix is None:
        raise ValueError(f"{predicate} does not start with a predicate prefix")
    return prefix, predicate[len(prefix):]


def predicate_for(member_name: str) -> str:
    """
    Positive predicate used as the generated method name.
    getActive -> isActive, canWin -> canWin, a boolean field bad -> isBad.
    """
    if is_predicate(member_name):
        return member_name
    if is_standard_getter(member_name):
        return "is" + member_name[len(GET_PREFIX):]
    return "is" + capitalize(member_name)


def negative_predicate_for(predicate: str) -> str:
    prefix, rest = split_predicate(predicate)
    return PREDICATE_PREFIXES[prefix] + rest


def predicate_for_javadoc(predicate: str) -> str:
    """canWin -> "can win"."""
    prefix, rest = split_predicate(predicate)
    return f"{PREDICATE_FOR_JAVADOC[prefix]} {camel_case_to_words(rest)}"


def predicate_for_error_message_part2(predicate: str) -> str:
    prefix, _ = split_predicate(predicate)
    return PREDICATE_FOR_ERROR_MESSAGE_PART2[prefix]


def predicate_closure(name: str) -> Tuple[str, ...]:
    """Every predicate spelling a boolean property could have been exposed with."""
    cap = capitalize(name)
    return (name,) + tuple(prefix + cap for prefix in PREDICATE_PREFIXES)


def is_java_keyword(name: str) -> bool:
    return name in JAVA_KEYWORDS


def safe_parameter_name(name: str) -> str:
    """abstract -> expectedAbstract, other names unchanged."""
    if is_java_keyword(name):
        return "expected" + capitalize(name)
    return name
