"""
Helpers answering questions about mapped instances through the
SQLAlchemy inspection API.
"""
import sqlalchemy as sa


def primary_key_attribute(model):
    mapper = sa.inspect(model)
    column = mapper.primary_key[0]
    return mapper.get_property_by_column(column).key


def primary_key_column(model):
    return sa.inspect(model).primary_key[0]


def primary_key_value(record):
    return getattr(record, primary_key_attribute(type(record)))


def is_new_record(record):
    state = sa.inspect(record)
    return state.transient or state.pending


def column_attribute_names(model):
    return frozenset(sa.inspect(model).column_attrs.keys())


def has_attribute(record, name):
    return name in column_attribute_names(type(record))
