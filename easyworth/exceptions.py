"""EasyWorth exception types."""

class EasyWorthError(Exception):
    """Base class for errors raised by easyworth."""

class AmountParseError(EasyWorthError, ValueError):
    """Raised when an amount field cannot be parsed to a number."""

class PropertiesUnavailable(EasyWorthError):
    """Raised when a metric needs chain properties and none are cached."""

class RefreshFailed(EasyWorthError):
    """Raised when a chain properties refresh does not complete.

    The previously cached snapshot, if any, is left untouched.
    """

class PermlinkLookupFailed(EasyWorthError):
    """Raised when the collision check for a new permlink fails."""

    def __init__(self, account, permlink, cause=None):
        super().__init__("lookup of @%s/%s failed: %r" % (account, permlink, cause))
        self.account = account
        self.permlink = permlink

class RPCError(EasyWorthError):
    """Raised on a failed worths JSON-RPC call."""

    def __init__(self, method, error):
        super().__init__("%s: %s" % (method, error))
        self.method = method
        self.error = error

class ConnectError(EasyWorthError):
    """Raised when the WorthConnect service rejects a request."""

    def __init__(self, error, description=None, status=None):
        super().__init__("%s: %s" % (error, description) if description else error)
        self.error = error
        self.description = description
        self.status = status
