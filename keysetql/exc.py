class BaseKeysetqlException(Exception):
    pass


class InvalidColumnError(BaseKeysetqlException):
    """ Schema mentioned an invalid column name

    Reported when a column mentioned by name is not found on the SqlAlchemy model.
    This happens when a RecordSchema is constructed, never while building predicates.
    """

    def __init__(self, model: str, column_name: str, where: str):
        self.model = model
        self.column_name = column_name
        self.where = where

        super().__init__(f'Invalid column "{column_name}" for "{model}" specified in {where}')


class CursorError(BaseKeysetqlException):
    """ Invalid cursor provided by the User

    Reported when an opaque cursor string cannot be decoded
    """

    def __init__(self, err: str):
        super().__init__(f'Cursor error: {err}')
