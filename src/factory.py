"""
Creation and identity of RDF terms.

Terms may be used (in a domain, a range, a superclass list) before they are defined.
The factory creates such a term with the minimal information as ``unknown``, and
promotes it to a class, property, etc. when (and if) it is defined. Terms are stored
by curie; the vocabulary's own prefix is used for locally defined terms.
"""

import hashlib
from typing import Optional

from build_context import BuildContext
from errors import TypeConflict, UnknownPrefix
from log import get_logger
from models import (
    PROVISIONAL_KINDS,
    ClassDetails,
    DatatypeDetails,
    IndividualDetails,
    Prefix,
    PropertyDetails,
    Term,
    TermKind,
)
from parsers.namespace import CORE_PREFIXES, is_full_url, make_curie, prefix_url, split_curie

logger = get_logger(__name__)

_DETAILS = {
    TermKind.CLASS: ClassDetails,
    TermKind.PROPERTY: PropertyDetails,
    TermKind.INDIVIDUAL: IndividualDetails,
    TermKind.DATATYPE: DatatypeDetails,
}


def compute_hash(value: str) -> str:
    """Anchor id for terms whose local name may clash with a local one."""
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


class TermFactory:
    """Single source of truth for the terms of one build, keyed by curie."""

    def __init__(self, context: BuildContext, prefixes: list[Prefix]):
        self.context = context
        self.prefixes = prefixes
        self._terms: dict[str, Term] = {}
        self._used_prefixes: set[str] = set()

    def _curie(self, index: str) -> str:
        return make_curie(index, self.context.vocab_prefix)

    def resolve(self, index: str) -> Term:
        """Return the term for a curie (or bare local name), creating it if needed."""
        curie = self._curie(index)
        if curie in self._terms:
            return self._terms[curie]

        if is_full_url(curie):
            term = Term(
                id=curie,
                prefix="",
                url=curie,
                curie=curie,
                html_id=compute_hash(curie),
                kind=TermKind.FULL_URL,
                external=True,
            )
        else:
            prefix, reference = split_curie(curie)
            if prefix == self.context.vocab_prefix:
                base_url = self.context.vocab_url
            else:
                base_url = prefix_url(self.prefixes, prefix)
                if base_url is None:
                    raise UnknownPrefix(prefix, curie)
            core = prefix in CORE_PREFIXES
            external = prefix != self.context.vocab_prefix and not core
            term = Term(
                id=reference,
                prefix=prefix,
                url=f"{base_url}{reference}",
                curie=curie,
                html_id=compute_hash(curie) if external else reference,
                kind=TermKind.CORE if core else TermKind.UNKNOWN,
                external=external,
            )
            self._used_prefixes.add(prefix)

        self._terms[curie] = term
        return term

    def _promote(self, term: Term, kind: TermKind) -> Term:
        term.details = _DETAILS[kind]()
        term.kind = kind
        logger.debug("term promoted", curie=term.curie, kind=kind.value)
        return term

    def _as_kind(self, index: str, kind: TermKind) -> Term:
        term = self.resolve(index)
        if term.kind is kind:
            return term
        if term.kind in PROVISIONAL_KINDS:
            return self._promote(term, kind)
        raise TypeConflict(term.curie, term.kind.value, kind.value)

    def as_class(self, index: str) -> Term:
        return self._as_kind(index, TermKind.CLASS)

    def as_property(self, index: str) -> Term:
        return self._as_kind(index, TermKind.PROPERTY)

    def as_individual(self, index: str) -> Term:
        return self._as_kind(index, TermKind.INDIVIDUAL)

    def as_datatype(self, index: str) -> Term:
        return self._as_kind(index, TermKind.DATATYPE)

    def _promote_unknown(self, term: Term, kind: TermKind) -> Term:
        if term.kind is not TermKind.UNKNOWN:
            raise TypeConflict(term.curie, term.kind.value, kind.value)
        return self._promote(term, kind)

    def promote_to_class(self, term: Term) -> Term:
        """Promote a term seen only as a reference (e.g., in a domain) to a class."""
        return self._promote_unknown(term, TermKind.CLASS)

    def promote_to_datatype(self, term: Term) -> Term:
        """Promote a term seen only as a reference (e.g., in a range) to a datatype."""
        return self._promote_unknown(term, TermKind.DATATYPE)

    def has(self, index: str) -> bool:
        return self._curie(index) in self._terms

    def get(self, index: str) -> Optional[Term]:
        return self._terms.get(self._curie(index))

    def uses_prefix(self, prefix: str) -> bool:
        """Whether a term with this prefix has been created."""
        return prefix in self._used_prefixes

    def __len__(self) -> int:
        return len(self._terms)
