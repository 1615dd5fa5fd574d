"""
Exceptions for the negotiation package.

Selection and registration never raise on malformed input. Missing
matches are reported as None and absent fields are defaulted. The only
error path is using a negotiator after it has been destroyed.
"""


class NegotiationError(Exception):
    pass


class NegotiatorDestroyedError(NegotiationError):
    """
    Raised when a destroyed Negotiator is asked to register, look up,
    enumerate, or select protocols. Its registry has been released.
    """
    pass
