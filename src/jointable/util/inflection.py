import re

_CAMEL_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_LOWER_UPPER = re.compile(r"([a-z\d])([A-Z])")


def underscore(camel_cased):
    """
    Convert a CamelCased name into its snake_case form.

    >>> underscore("DeveloperProject")
    'developer_project'
    >>> underscore("HTTPRequest")
    'http_request'
    """
    word = _CAMEL_BOUNDARY.sub(r"\1_\2", camel_cased)
    word = _LOWER_UPPER.sub(r"\1_\2", word)
    return word.replace("-", "_").lower()


def foreign_key(class_name):
    return f"{underscore(class_name)}_id"
