"""
Named errors raised by the innings engine.

Anything here is a host bug (calling an operation the state machine does not
allow right now). Expected timing races never raise, they return the
unchanged snapshot instead.
"""


class InningsError(Exception):
    """Base class for innings engine errors"""


class AlreadyInFlightError(InningsError):
    """A delivery is already in flight"""


class DeliveryInFlightError(AlreadyInFlightError):
    """Raised by the controller when a delivery is requested mid-flight"""


class NoActiveDeliveryError(InningsError):
    """There is no delivery to swing at"""


class AlreadySwungError(InningsError):
    """The active delivery has already been swung at"""


class InningsCompleteError(InningsError):
    """The innings is over, no more deliveries until reset"""


class ConfigurationLockedError(InningsError):
    """Overs/wickets can only be changed before the first ball is resolved"""


class InvalidConfigurationError(InningsError, ValueError):
    """Overs or wickets outside the allowed range"""


class InvalidTimestampError(InningsError, ValueError):
    """A timestamp that is not a finite number"""
