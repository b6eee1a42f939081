import logging
from sqlalchemy.exc import MultipleResultsFound, NoResultFound, SQLAlchemyError
from extensions import db

logger = logging.getLogger(__name__)


class DataServiceError(Exception):
    """Raised when a query or mutation against a table fails."""


class RecordNotFound(DataServiceError):
    pass


class MultipleRecordsFound(DataServiceError):
    pass


class UserScopedTable:
    """
    Query helper for one table, restricted to the rows a single user owns.

    Every read and write carries a ``user_id`` equality predicate, so a
    caller can never reach another account's rows through this class.
    Supported operations mirror what the dashboard needs: filtered selects
    with ordering and a row limit, single-row reads (strict or optional),
    inserts and updates by id.
    """

    def __init__(self, model, user_id):
        if not user_id:
            raise DataServiceError(f"A user id is required to query '{model.__tablename__}'")
        self.model = model
        self.user_id = user_id

    @property
    def table_name(self):
        return self.model.__tablename__

    def _query(self, **filters):
        return self.model.query.filter_by(user_id=self.user_id, **filters)

    def _writable(self, values):
        unknown = set(values) - set(self.model.writable_columns)
        if unknown:
            raise DataServiceError(
                f"Column(s) not writable on '{self.table_name}': {', '.join(sorted(unknown))}"
            )
        return dict(values)

    def select(self, order_by=(), limit=None, **filters):
        """
        order_by is a sequence of (column_name, ascending) pairs applied in order.
        """
        query = self._query(**filters)
        for column_name, ascending in order_by:
            column = getattr(self.model, column_name)
            query = query.order_by(column.asc() if ascending else column.desc())
        if limit is not None:
            query = query.limit(limit)
        try:
            return query.all()
        except SQLAlchemyError as e:
            raise DataServiceError(f"Failed to read '{self.table_name}': {e}") from e

    def single(self, **filters):
        """Exactly one matching row, otherwise RecordNotFound / MultipleRecordsFound."""
        try:
            return self._query(**filters).one()
        except NoResultFound as e:
            raise RecordNotFound(f"No row in '{self.table_name}' for user {self.user_id}") from e
        except MultipleResultsFound as e:
            raise MultipleRecordsFound(f"Multiple rows in '{self.table_name}' for user {self.user_id}") from e
        except SQLAlchemyError as e:
            raise DataServiceError(f"Failed to read '{self.table_name}': {e}") from e

    def maybe_single(self, **filters):
        """At most one matching row; None when there is none."""
        try:
            return self._query(**filters).one_or_none()
        except MultipleResultsFound as e:
            raise MultipleRecordsFound(f"Multiple rows in '{self.table_name}' for user {self.user_id}") from e
        except SQLAlchemyError as e:
            raise DataServiceError(f"Failed to read '{self.table_name}': {e}") from e

    def insert(self, values):
        values = self._writable(values)
        try:
            record = self.model(user_id=self.user_id, **values)
            db.session.add(record)
            db.session.commit()
        except (SQLAlchemyError, ValueError) as e:
            db.session.rollback()
            logger.error("Insert into %s failed for user %s: %s", self.table_name, self.user_id, e)
            raise DataServiceError(f"Failed to insert into '{self.table_name}': {e}") from e
        return record

    def update(self, record_id, values):
        values = self._writable(values)
        # The user_id predicate doubles as the ownership check
        record = self.maybe_single(id=record_id)
        if record is None:
            raise RecordNotFound(f"No row {record_id} in '{self.table_name}' for user {self.user_id}")
        try:
            for column_name, value in values.items():
                setattr(record, column_name, value)
            db.session.commit()
        except (SQLAlchemyError, ValueError) as e:
            db.session.rollback()
            logger.error("Update of %s %s failed for user %s: %s", self.table_name, record_id, self.user_id, e)
            raise DataServiceError(f"Failed to update '{self.table_name}': {e}") from e
        return record
