"""
Conversion of a YAML vocabulary description into RDF.

    gen = VocabGeneration(Path("vocab.yml").read_text())
    turtle = gen.get_turtle()
"""

from convert import build_vocab
from graph import to_jsonld, to_turtle
from models import Vocab
from parsers.source import load_source


class VocabGeneration:
    """
    One conversion: the source is parsed, validated and built once, in the
    constructor; errors (VocabError subclasses) are raised from there.
    """

    def __init__(self, yml_content: str):
        self.vocab: Vocab = build_vocab(load_source(yml_content))

    def get_turtle(self) -> str:
        """Turtle representation of the vocabulary."""
        return to_turtle(self.vocab)

    def get_jsonld(self) -> str:
        """JSON-LD representation of the vocabulary."""
        return to_jsonld(self.vocab)
