"""Parsing and schema validation of the YAML vocabulary source."""

import yaml
from jsonschema import Draft7Validator

from errors import SchemaValidationError


class _Loader(yaml.SafeLoader):
    """Safe loader that keeps dates as strings (e.g., the value of dc:date)."""


_Loader.yaml_implicit_resolvers = {
    key: [resolver for resolver in resolvers if resolver[0] != "tag:yaml.org,2002:timestamp"]
    for key, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


_STRING_OR_LIST = {
    "oneOf": [
        {"type": "string"},
        {"type": "array", "items": {"type": "string"}},
    ]
}

_URI = {"type": "string", "format": "uri"}

_URI_OR_LIST = {
    "oneOf": [
        _URI,
        {"type": "array", "items": _URI},
    ]
}

_SEE_ALSO = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "label": {"type": "string"},
        "url": _URI,
    },
    "required": ["label", "url"],
}

_EXAMPLE = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "label": {"type": "string"},
        "json": {"type": "string"},
    },
    "required": ["json"],
}

_COMMON_TERM = {
    "id": {"type": "string"},
    "label": {"type": "string"},
    "comment": {"type": "string"},
    "defined_by": _URI_OR_LIST,
    "see_also": {"anyOf": [{"type": "array", "items": _SEE_ALSO}, _SEE_ALSO]},
    "upper_value": _STRING_OR_LIST,
    "upper_union": {"type": "boolean"},
    "type": _STRING_OR_LIST,
    "deprecated": {"type": "boolean"},
    "status": {"type": "string", "enum": ["stable", "reserved", "deprecated"]},
    "known_as": {"type": "string"},
    "external": {"type": "boolean"},
    "example": {"anyOf": [{"type": "array", "items": _EXAMPLE}, _EXAMPLE]},
    "context": _STRING_OR_LIST,
}


def _term(**extra) -> dict:
    return {
        "type": "array",
        "items": {
            "type": "object",
            "additionalProperties": False,
            "properties": {**_COMMON_TERM, **extra},
            "required": ["id"],
        },
    }


_VOCAB = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "id": {"type": "string"},
        "value": _URI,
        "context": _STRING_OR_LIST,
    },
    "required": ["id", "value"],
}

SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Schema for the vocabulary definition using YAML",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "json_ld": {
            "type": "object",
            "properties": {
                "alias": {"type": "object", "additionalProperties": {"type": "string"}},
                "import": _STRING_OR_LIST,
            },
            "additionalProperties": False,
        },
        "vocab": {"anyOf": [{"type": "array", "items": _VOCAB}, _VOCAB]},
        "prefix": {"anyOf": [{"type": "array", "items": _VOCAB}, _VOCAB]},
        "ontology": {
            "type": "array",
            "items": {
                "type": "object",
                "additionalProperties": False,
                "properties": {
                    "property": {"type": "string"},
                    "value": {"type": "string"},
                },
                "required": ["property", "value"],
            },
        },
        "class": _term(one_of=_STRING_OR_LIST),
        "property": _term(
            domain=_STRING_OR_LIST,
            range=_STRING_OR_LIST,
            range_union={"type": "boolean"},
            one_of=_STRING_OR_LIST,
            dataset={"type": "boolean"},
            container={"type": "string", "enum": ["set", "list", "graph"]},
        ),
        "individual": _term(),
        "datatype": _term(one_of=_STRING_OR_LIST, pattern={"type": "string"}),
    },
    "required": ["vocab", "ontology"],
}

_validator = Draft7Validator(SCHEMA, format_checker=Draft7Validator.FORMAT_CHECKER)


def _describe(error) -> str:
    location = "/".join(str(p) for p in error.absolute_path) or "(root)"
    return f"{location}: {error.message}"


def validate(data) -> dict:
    """Check the parsed source against the schema; all violations are reported at once."""
    errors = sorted(_validator.iter_errors(data), key=lambda e: list(map(str, e.absolute_path)))
    if errors:
        raise SchemaValidationError("JSON Schema validation error", [_describe(e) for e in errors])
    return data


def load_source(text: str) -> dict:
    """Parse the YAML text and validate it."""
    try:
        data = yaml.load(text, Loader=_Loader)
    except yaml.YAMLError as e:
        raise SchemaValidationError(f"YAML parsing error: {e}") from e
    if not isinstance(data, dict):
        raise SchemaValidationError("The vocabulary source must be a YAML mapping")
    return validate(data)
