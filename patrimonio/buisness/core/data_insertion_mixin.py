"""
Generic data insertion mixin for SQLAlchemy models
Provides from_dict and to_dict methods for automatic data insertion

Columns are snake_case in Python and in the database; to_dict() emits the
camelCase keys the JSON API speaks (data_emprestimo -> dataEmprestimo).
"""

from patrimonio import db
from datetime import date, datetime
from sqlalchemy import inspect
from patrimonio.utils.logger import get_logger

logger = get_logger("patrimonio.buisness.core.data_insertion")

AUDIT_FIELDS = ('created_at', 'updated_at')


def to_camel(key):
    """Convert a snake_case column key into its camelCase wire name."""
    head, *rest = key.split('_')
    return head + ''.join(part.capitalize() for part in rest)


class DataInsertionMixin:
    """
    Mixin that provides generic data insertion capabilities for SQLAlchemy models

    This mixin adds:
    - from_dict(): Create model instance from dictionary
    - to_dict(): Convert model instance to dictionary
    - apply_updates(): Assign a partial dictionary onto an existing row
    - create_from_dict(): Create and save model instance from dictionary
    - find_or_create_from_dict(): Idempotent insert used by the seed data

    Models may declare ``__serialize_exclude__`` with column keys that must
    never leave the process (password hashes).
    """

    __serialize_exclude__ = frozenset()

    @classmethod
    def _column_keys(cls):
        return {c.key for c in inspect(cls).columns}

    @classmethod
    def from_dict(cls, data_dict, skip_fields=None):
        """
        Create a model instance from a dictionary

        Args:
            data_dict (dict): Dictionary containing model data (snake_case keys)
            skip_fields (list, optional): Fields to skip during creation

        Returns:
            Model instance (not saved to database)
        """
        if skip_fields is None:
            skip_fields = []

        columns = cls._column_keys()

        filtered_data = {}
        for key, value in data_dict.items():
            if key not in columns or key in skip_fields:
                continue
            if key in AUDIT_FIELDS and value is None:
                continue
            filtered_data[key] = value

        instance = cls(**filtered_data)

        # Plain passwords never reach a column
        if 'password' in data_dict and hasattr(instance, 'set_password'):
            instance.set_password(data_dict['password'])

        return instance

    def apply_updates(self, data_dict, skip_fields=None):
        """
        Assign the known columns of ``data_dict`` onto this instance.

        Returns:
            list: The column keys that were assigned
        """
        if skip_fields is None:
            skip_fields = []

        columns = self._column_keys()
        changed = []
        for key, value in data_dict.items():
            if key in columns and key not in skip_fields and key not in ('id',) + AUDIT_FIELDS:
                setattr(self, key, value)
                changed.append(key)

        if 'password' in data_dict and hasattr(self, 'set_password'):
            self.set_password(data_dict['password'])
            changed.append('password')

        return changed

    def to_dict(self, include_relationships=False, include_audit_fields=True):
        """
        Convert model instance to dictionary

        Args:
            include_relationships (bool): Whether to include relationship data
            include_audit_fields (bool): Whether to include audit fields

        Returns:
            dict: Dictionary representation of the model with camelCase keys
        """
        result = {}

        mapper = inspect(self.__class__)

        for column in mapper.columns:
            if column.key in self.__serialize_exclude__:
                continue
            if not include_audit_fields and column.key in AUDIT_FIELDS:
                continue

            value = getattr(self, column.key)

            # datetime is a date subclass, both go out as ISO strings
            if isinstance(value, (datetime, date)):
                value = value.isoformat()

            result[to_camel(column.key)] = value

        if include_relationships:
            for relationship in mapper.relationships:
                wire_key = to_camel(relationship.key)
                if wire_key in result:
                    continue
                related_obj = getattr(self, relationship.key)
                if related_obj is None:
                    result[wire_key] = None
                elif hasattr(relationship.mapper.class_, 'to_dict'):
                    result[wire_key] = related_obj.to_dict()
                else:
                    result[wire_key] = str(related_obj)

        return result

    @classmethod
    def create_from_dict(cls, data_dict, skip_fields=None, commit=True):
        """
        Create and save a model instance from dictionary

        Args:
            data_dict (dict): Dictionary containing model data
            skip_fields (list, optional): Fields to skip during creation
            commit (bool): Whether to commit the transaction

        Returns:
            Model instance (saved to database)
        """
        instance = cls.from_dict(data_dict, skip_fields)

        try:
            db.session.add(instance)
            if commit:
                db.session.commit()
                logger.info(f"Created {cls.__name__}: {instance}")
            else:
                db.session.flush()
            return instance
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error creating {cls.__name__}: {e}")
            raise

    @classmethod
    def find_or_create_from_dict(cls, data_dict, skip_fields=None, lookup_fields=None, commit=True):
        """
        Find existing instance or create new one from dictionary

        Args:
            data_dict (dict): Dictionary containing model data
            skip_fields (list, optional): Fields to skip during creation
            lookup_fields (list, optional): Fields to use for lookup (default: unique fields)
            commit (bool): Whether to commit the transaction

        Returns:
            tuple: (instance, created) where created is boolean
        """
        if lookup_fields is None:
            mapper = inspect(cls)
            lookup_fields = [c.key for c in mapper.columns if c.unique and c.key in data_dict]

        lookup_data = {field: data_dict[field] for field in lookup_fields if field in data_dict}
        if not lookup_data:
            return cls.create_from_dict(data_dict, skip_fields, commit), True

        existing = cls.query.filter_by(**lookup_data).first()
        if existing:
            logger.debug(f"Found existing {cls.__name__}: {existing}")
            return existing, False

        return cls.create_from_dict(data_dict, skip_fields, commit), True
