"""Service layer modules used by the blueprints."""
