"""Exception hierarchy for the Landlord simulator."""


class LandlordError(Exception):
    """Base class for every error raised by landlord_sim."""


class CatalogValidationError(LandlordError):
    """An item definition is missing a field or has an unusable value."""


class TraceValidationError(LandlordError):
    """A request refers to a label that is not in the catalog."""


class ConfigurationError(LandlordError):
    """Capacity, refresh rule, tie-break or analysis option is invalid."""


class InternalInvariantError(LandlordError):
    """The engine broke one of its own invariants. Always a bug."""
