class StorageError(Exception):
    """Any repository failure: bad constraint, unknown id, lost connection.

    The message is passed straight through to the API response.
    """
