"""liftlog: personal record detection and ledger for a self-hosted workout tracker."""

__version__ = "0.1.0"
