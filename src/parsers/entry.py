"""
Normalization of raw vocabulary entries.

The YAML source is lenient: most fields may be a single value or a list, 'see also'
and example blocks may be one object or several, comments may carry stray quotes.
Everything is brought into one shape here, before any term is built.
"""

from typing import Any, Optional

from build_context import VOCAB_CONTEXT
from errors import AmbiguousVocabularyIdentity, MissingRequiredSection
from models import Example, Link, RawVocab, Status, VocabEntry

# Fields that are always lists after normalization
LIST_FIELDS = ("upper_value", "type", "domain", "range", "defined_by", "one_of")

# Pairs of enclosing quotes stripped from comments
QUOTES = (('"', '"'), ("'", "'"), ("“", "”"), ("‘", "’"))

SECTIONS = ("prefix", "class", "property", "individual", "datatype")


def to_list(value: Any) -> list:
    if value is None or value == "":
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def to_contexts(value: Any) -> list[str]:
    """Like to_list, but a missing value means the default context."""
    contexts = to_list(value)
    return contexts if contexts else [VOCAB_CONTEXT]


def to_links(value: Any) -> list[Link]:
    return [Link(label=raw.get("label", ""), url=raw["url"]) for raw in to_list(value)]


def to_examples(value: Any) -> list[Example]:
    return [Example(label=raw.get("label"), code=raw["json"]) for raw in to_list(value)]


def clean_comment(value: Optional[str]) -> Optional[str]:
    """Remove a trailing line break and one layer of enclosing quotes."""
    if not value:
        return None
    final = value[:-1] if value.endswith("\n") else value
    for opening, closing in QUOTES:
        if len(final) >= 2 and final.startswith(opening) and final.endswith(closing):
            final = final[1:-1]
            break
    return final


def resolve_status(status: Optional[str], deprecated: Optional[bool]) -> tuple[Status, bool]:
    """
    Reconcile the status value and the (older) deprecated flag.

    An explicit status wins; otherwise the deprecated flag decides between
    deprecated and reserved; with neither, the term is stable.
    """
    if status is not None:
        final = Status(status)
        return final, final is Status.DEPRECATED
    if deprecated is not None:
        return (Status.DEPRECATED if deprecated else Status.RESERVED), bool(deprecated)
    return Status.STABLE, False


def uncamel(value: str, separator: str = " ") -> str:
    """'someLongName' -> 'Some long name'"""
    if not value:
        return value
    output = [value[0].upper()]
    for char in value[1:]:
        if char.isupper():
            output.append(separator)
            output.append(char.lower())
        else:
            output.append(char)
    return "".join(output)


def normalize_entry(raw: dict) -> VocabEntry:
    """Bring one raw entry into the canonical VocabEntry shape."""
    status, deprecated = resolve_status(raw.get("status"), raw.get("deprecated"))
    identifier = raw.get("id") or ""

    return VocabEntry(
        id=identifier,
        property=raw.get("property"),
        value=raw.get("value"),
        label=raw.get("label") or uncamel(identifier),
        comment=clean_comment(raw.get("comment")),
        **{field: to_list(raw.get(field)) for field in LIST_FIELDS},
        upper_union=bool(raw.get("upper_union", False)),
        range_union=bool(raw.get("range_union", False)),
        pattern=raw.get("pattern"),
        deprecated=deprecated,
        status=status,
        external=raw.get("external"),
        see_also=to_links(raw.get("see_also")),
        example=to_examples(raw.get("example")),
        dataset=bool(raw.get("dataset", False)),
        container=raw.get("container"),
        context=to_contexts(raw.get("context")),
        known_as=raw.get("known_as"),
    )


def normalize_vocab(raw: dict) -> RawVocab:
    """Normalize every section of the parsed source."""
    for required in ("vocab", "ontology"):
        if raw.get(required) is None:
            raise MissingRequiredSection(required)

    vocab = to_list(raw["vocab"])
    if not vocab:
        raise MissingRequiredSection("vocab")
    if len(vocab) > 1:
        raise AmbiguousVocabularyIdentity(
            f"Exactly one vocabulary prefix/URL pair is expected, {len(vocab)} given"
        )

    sections = {
        section: [normalize_entry(entry) for entry in to_list(raw.get(section))]
        for section in SECTIONS
    }
    return RawVocab(
        vocab=[normalize_entry(entry) for entry in vocab],
        ontology=[normalize_entry(entry) for entry in to_list(raw["ontology"])],
        **sections,
    )
