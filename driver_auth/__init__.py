"""driver-auth: account registration, login and bearer token issuing."""

__version__ = "0.1.0"
