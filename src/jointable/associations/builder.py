"""
Declaration of join table associations on declarative models.

>>> class Developer(JoinTableModel):
...     __tablename__ = "developers"
...     id: orm.Mapped[int] = orm.mapped_column(primary_key=True)
...     projects = has_and_belongs_to_many("Project")
"""
from jointable.associations.join_table import JoinTableAssociation
from jointable.associations.reflection import JoinTableReflection


class JoinTableCollection:
    """
    Class level descriptor handing out one ``JoinTableAssociation`` per
    owner instance.
    """

    association_class = JoinTableAssociation

    def __init__(self, target, **options):
        self.target = target
        self.options = options
        self.reflection = None
        self.cache_key = None

    def __set_name__(self, owner_class, name):
        self.reflection = JoinTableReflection(
            owner_class, name, self.target, **self.options
        )
        self.cache_key = f"_jointable_association_{name}"

    def association(self, instance):
        # Kept on the instance so it is collected together with its owner
        try:
            return instance.__dict__[self.cache_key]
        except KeyError:
            association = self.association_class(instance, self.reflection)
            instance.__dict__[self.cache_key] = association
            return association

    def __get__(self, instance, owner_class=None):
        if instance is None:
            return self
        return self.association(instance)

    def __set__(self, instance, records):
        self.association(instance).replace(records)


def has_and_belongs_to_many(
    target,
    join_table=None,
    foreign_key=None,
    association_foreign_key=None,
    insert_sql=None,
    delete_sql=None,
    select=None,
):
    """
    Declare a many-to-many collection linked through a join table.

    Parameters
    ----------
    target : type or str
        The associated model, or its class name within the owner's
        registry.
    join_table : str, optional
        Defaults to both table names, sorted and joined by ``_``.
    foreign_key : str, optional
        Join table column referencing the owner. Defaults to
        ``<owner_class>_id``.
    association_foreign_key : str, optional
        Join table column referencing the target. Defaults to
        ``<target_class>_id``.
    insert_sql, delete_sql : str, optional
        Statements replacing the generated INSERT and DELETE. See
        ``jointable.associations.reflection.SQLTemplate`` for placeholders.
    select : iterable, optional
        Explicit columns to load. Loading from a join table with extra
        columns is only writable when this is given.
    """
    return JoinTableCollection(
        target,
        join_table=join_table,
        foreign_key=foreign_key,
        association_foreign_key=association_foreign_key,
        insert_sql=insert_sql,
        delete_sql=delete_sql,
        select=select,
    )
