"""
Domain and range cross-references from properties to classes and datatypes.

A reference in a list with a single entry is a plain domain/range; in a list with
several entries the class is only part of the domain/range (union or intersection),
which renderers display differently. Vocabularies are small, so this is a plain scan.
"""

from models import Term


def _crossref(target: Term, prop: Term, refs: list[Term], single: list[str], multi: list[str]) -> bool:
    """Record ``prop`` if ``target`` appears (by local name) in ``refs``."""
    if not any(ref.id == target.id for ref in refs):
        return False
    bucket = single if len(refs) == 1 else multi
    if prop.id not in bucket:
        bucket.append(prop.id)
    return True


def link_class(cls: Term, properties: list[Term]) -> None:
    """Fill in the domain/range cross-references of a class."""
    details = cls.details
    for prop in properties:
        _crossref(cls, prop, prop.details.range, details.range_of, details.includes_range_of)
        _crossref(cls, prop, prop.details.domain, details.domain_of, details.included_in_domain_of)


def link_datatype(datatype: Term, properties: list[Term]) -> list[Term]:
    """
    Fill in the range cross-references of a datatype.

    Returns the properties that have the datatype in their range.
    """
    details = datatype.details
    return [
        prop for prop in properties
        if _crossref(datatype, prop, prop.details.range, details.range_of, details.includes_range_of)
    ]
