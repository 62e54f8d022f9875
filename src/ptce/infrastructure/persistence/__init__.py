"""SQLAlchemy persistence for contenders and decided matches."""
