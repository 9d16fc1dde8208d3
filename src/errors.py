"""
Exception hierarchy for vocabulary conversion.

Every error is fatal to a build: no partial vocabulary is ever returned.
"""

from typing import Optional


class VocabError(Exception):
    """Base error for the vocabulary conversion."""


class SchemaValidationError(VocabError):
    """Raised when the source is not valid YAML or does not match the schema."""

    def __init__(self, message: str, errors: Optional[list[str]] = None):
        self.errors = errors or []
        details = "".join(f"\n  - {e}" for e in self.errors)
        super().__init__(f"{message}{details}")


class MissingRequiredSection(VocabError):
    """Raised when the 'vocab' or 'ontology' section is absent."""

    def __init__(self, section: str):
        self.section = section
        super().__init__(f"No '{section}' section in the vocabulary specification.")


class AmbiguousVocabularyIdentity(VocabError):
    """Raised when more than one vocabulary prefix/URL pair is given."""


class UnknownPrefix(VocabError):
    """Raised when a curie uses a prefix that is neither declared nor a default."""

    def __init__(self, prefix: str, curie: str):
        self.prefix = prefix
        self.curie = curie
        super().__init__(f'URL for prefix "{prefix}" not found (in "{curie}")')


class TypeConflict(VocabError):
    """Raised when a term is re-declared with a different concrete kind."""

    def __init__(self, curie: str, existing: str, requested: str):
        self.curie = curie
        self.existing = existing
        self.requested = requested
        super().__init__(f"Term {curie} exists as a {existing}; it cannot become a {requested}")


class IncompleteTerm(VocabError):
    """Raised when a non-external term has neither a comment nor a 'defined_by'."""

    def __init__(self, term_id: str):
        self.term_id = term_id
        super().__init__(f'{term_id} is incomplete: either "defined_by" or "comment" should be provided.')


class ExternalTermError(VocabError):
    """Raised when a term is flagged external but its id is not a curie."""

    def __init__(self, term_id: str):
        self.term_id = term_id
        super().__init__(f"{term_id} is set to be external, but the id is not a CURIE")


class InvalidCurie(VocabError):
    """Raised when a value that must be a curie (or a URL) is neither."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"Invalid curie ({value})")


class InvalidRange(VocabError):
    """Raised when the IRI/URL range marker is combined with other range values."""

    def __init__(self, term_id: str, range_values: list[str]):
        self.term_id = term_id
        self.range_values = range_values
        super().__init__(f"{term_id}: IRI or URL must be the only value of a range (got {', '.join(range_values)})")
