# engine/explain/exceptions.py

class BackendError(Exception):
    pass


class BackendUnavailable(BackendError):
    pass


class BackendResponseError(BackendError):
    pass


class BackendTimeout(BackendError):
    pass
