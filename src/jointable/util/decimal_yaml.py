"""
YAML support for ``decimal.Decimal``.

PyYAML has no representer for ``Decimal``; these helpers emit decimals as
YAML floats without losing precision, using the YAML spellings for the
special values.
"""
from decimal import Decimal

import yaml

DOCUMENT_END = "...\n"


def represent_decimal(dumper, value):
    if value.is_nan():
        text = ".NaN"
    elif value.is_infinite():
        text = "-.Inf" if value.is_signed() else ".Inf"
    else:
        text = format(value, "f")
        if "." not in text:
            text += ".0"
    return dumper.represent_scalar("tag:yaml.org,2002:float", text)


class DecimalDumper(yaml.SafeDumper):
    pass


DecimalDumper.add_representer(Decimal, represent_decimal)


def to_yaml(value):
    """
    Serialize ``value`` as a standalone YAML document.

    >>> to_yaml(Decimal("Infinity"))
    '--- .Inf\\n'
    """
    document = yaml.dump(value, Dumper=DecimalDumper, explicit_start=True)
    # Top level plain scalars are closed with an explicit document end
    if document.endswith("\n" + DOCUMENT_END):
        document = document[: -len(DOCUMENT_END)]
    return document


def to_decimal(value):
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
