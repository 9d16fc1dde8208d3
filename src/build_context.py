"""
State collected during a single vocabulary build.

A fresh BuildContext is created for every conversion and passed explicitly to the
factory and the builder; nothing here is process-wide.
"""

from typing import Optional

from pydantic import BaseModel, Field

# Shorthand, in the source, for the default context of the vocabulary
VOCAB_CONTEXT = "vocab"
# Explicit "no context" marker
NO_CONTEXT = "none"


def _key(status) -> str:
    return getattr(status, "value", status)


class StatusCounter(BaseModel):
    """Number of terms per status value (stable, reserved, deprecated)."""
    counts: dict[str, int] = Field(default_factory=lambda: {"stable": 0, "reserved": 0, "deprecated": 0})

    def add(self, status) -> None:
        key = _key(status)
        self.counts[key] = self.counts.get(key, 0) + 1

    def counter(self, status) -> int:
        return self.counts.get(_key(status), 0)


class BuildContext(BaseModel):
    """Vocabulary identity plus the aggregates filled in while terms are built."""
    vocab_prefix: str = Field(default="", description="Prefix of the vocabulary being built")
    vocab_url: str = Field(default="", description="Namespace URL of the vocabulary")
    vocab_context: Optional[str] = Field(default=None, description="Default JSON-LD context URL")
    status_counter: StatusCounter = Field(default_factory=StatusCounter)
    context_mentions: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Context URL -> curies of the terms that belong to it"
    )
    real_curies: list[str] = Field(
        default_factory=list,
        description="Entry ids written as curies; they need a hashed anchor in HTML"
    )

    def set_vocabulary(self, prefix: str, url: str, context: Optional[str] = None) -> None:
        """Establish the vocabulary identity; must precede any curie resolution."""
        self.vocab_prefix = prefix
        self.vocab_url = url
        self.vocab_context = context
        if context:
            self.context_mentions.setdefault(context, [])

    def resolve_contexts(self, contexts: list[str], curie: str) -> list[str]:
        """
        Turn the context references of an entry into context URLs.

        'vocab' stands for the default context (dropped if there is none), 'none'
        is dropped. The curie is recorded under every resulting context.
        """
        resolved: list[str] = []
        for ctx in contexts:
            if ctx == VOCAB_CONTEXT:
                ctx = self.vocab_context or NO_CONTEXT
            if ctx != NO_CONTEXT and ctx not in resolved:
                resolved.append(ctx)

        for ctx in resolved:
            self.context_mentions.setdefault(ctx, []).append(curie)
        return resolved

    def add_real_curie(self, curie: str) -> None:
        if curie not in self.real_curies:
            self.real_curies.append(curie)
